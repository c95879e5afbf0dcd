"""Quantity edits on a meal being built."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from food_snap.domain.errors import ValidationError
from food_snap.domain.meals import FoodEntry, Meal, MealTotals
from food_snap.services.aggregator import aggregate

_logger = logging.getLogger(__name__)


class QuantityPolicy(str, Enum):
    """How negative quantities typed by the user are handled."""

    REJECT = "reject"
    CLAMP = "clamp"


class EditState(str, Enum):
    """Whether the published totals match the published entries."""

    CLEAN = "CLEAN"
    DIRTY = "DIRTY"


def parse_quantity(
    raw: object, policy: QuantityPolicy = QuantityPolicy.REJECT
) -> float:
    """Validate a user-supplied quantity before it reaches the scaler."""
    if isinstance(raw, bool):
        raise ValidationError(f"Quantity must be a number, got {raw!r}")
    if isinstance(raw, int | float):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip().replace(",", "."))
        except ValueError as exc:
            raise ValidationError(f"Quantity must be a number, got {raw!r}") from exc
    else:
        raise ValidationError(f"Quantity must be a number, got {raw!r}")
    if not math.isfinite(value):
        raise ValidationError(f"Quantity must be finite, got {raw!r}")
    if value < 0:
        if policy is QuantityPolicy.CLAMP:
            return 0.0
        raise ValidationError(f"Quantity must be non-negative, got {value}")
    return value


@dataclass
class MealEditor:
    """Holds a meal and its totals, recomputed in full on every edit.

    The meal and its totals are only ever replaced together, so callers never
    observe entries whose totals have not been recomputed.
    """

    policy: QuantityPolicy = QuantityPolicy.REJECT
    meal: Meal = field(default_factory=Meal)
    totals: MealTotals = field(default_factory=MealTotals.zero)
    state: EditState = EditState.CLEAN

    @classmethod
    def from_meal(
        cls, meal: Meal, policy: QuantityPolicy = QuantityPolicy.REJECT
    ) -> "MealEditor":
        """Create an editor for an existing meal."""
        return cls(policy=policy, meal=meal, totals=aggregate(meal.entries))

    def snapshot(self) -> tuple[Meal, MealTotals]:
        """Return the current meal with its totals."""
        return self.meal, self.totals

    def set_quantity(self, entry_id: str, raw_quantity: object) -> MealTotals:
        """Change one entry quantity and recompute the meal."""
        quantity = parse_quantity(raw_quantity, self.policy)
        return self._apply(lambda: self.meal.with_quantity(entry_id, quantity))

    def add_entry(self, entry: FoodEntry) -> MealTotals:
        """Add an entry and recompute the meal."""
        return self._apply(lambda: self.meal.add(entry))

    def remove_entry(self, entry_id: str) -> MealTotals:
        """Remove an entry and recompute the meal."""
        return self._apply(lambda: self.meal.remove(entry_id))

    def rename(self, name: str) -> None:
        """Rename the meal; totals are unaffected."""
        self.meal = Meal(name=name, entries=self.meal.entries)

    def _apply(self, build: Callable[[], Meal]) -> MealTotals:
        self.state = EditState.DIRTY
        try:
            meal = build()
            totals = aggregate(meal.entries)
        except Exception:
            _logger.debug("Meal edit rejected; keeping previous snapshot")
            raise
        else:
            self.meal = meal
            self.totals = totals
        finally:
            self.state = EditState.CLEAN
        return self.totals
