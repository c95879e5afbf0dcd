"""Nutritional goal models."""

from dataclasses import dataclass, field
from enum import Enum


class GlobalGoal(str, Enum):
    """Overall objective chosen by the user."""

    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    MAINTENANCE = "maintenance"
    HEALTH_IMPROVEMENT = "health_improvement"


@dataclass(frozen=True)
class GoalTarget:
    """Daily target for one nutrient."""

    value: float
    enabled: bool = False


@dataclass(frozen=True)
class NutritionalGoals:
    """Daily nutrient targets for a user."""

    calories: GoalTarget = field(default_factory=lambda: GoalTarget(2000))
    protein_g: GoalTarget = field(default_factory=lambda: GoalTarget(150))
    carbs_g: GoalTarget = field(default_factory=lambda: GoalTarget(250))
    fat_g: GoalTarget = field(default_factory=lambda: GoalTarget(70))
    global_goal: GlobalGoal = GlobalGoal.MAINTENANCE


@dataclass(frozen=True)
class GoalProgress:
    """Progress of consumed intake towards one target."""

    nutrient: str
    consumed: float
    target: float
    remaining: float
    percent: float
