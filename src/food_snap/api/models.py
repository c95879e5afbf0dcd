"""Request models for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from food_snap.domain.goals import GlobalGoal, GoalTarget, NutritionalGoals


class MealPreviewRequest(BaseModel):
    """Entries to aggregate without saving."""

    name: str = ""
    entries: list[dict[str, object]] = Field(default_factory=list)


class SaveMealRequest(BaseModel):
    """Meal to aggregate and persist."""

    user_id: UUID
    name: str
    entries: list[dict[str, object]]
    photo_url: str | None = None


class QuantityUpdateRequest(BaseModel):
    """New quantity typed by the user, validated by the quantity policy."""

    quantity: float | str


class GoalsRequest(BaseModel):
    """Daily targets; a null target disables that goal."""

    model_config = ConfigDict(allow_inf_nan=False)

    calories: float | None = Field(default=None, gt=0)
    protein_g: float | None = Field(default=None, gt=0)
    carbs_g: float | None = Field(default=None, gt=0)
    fat_g: float | None = Field(default=None, gt=0)
    global_goal: GlobalGoal = GlobalGoal.MAINTENANCE

    def to_goals(self) -> NutritionalGoals:
        """Convert to domain goals, keeping defaults for disabled targets."""
        defaults = NutritionalGoals()
        targets = {}
        for name in ("calories", "protein_g", "carbs_g", "fat_g"):
            value = getattr(self, name)
            targets[name] = (
                GoalTarget(value=value, enabled=True)
                if value is not None
                else getattr(defaults, name)
            )
        return NutritionalGoals(**targets, global_goal=self.global_goal)
