"""Statistics service for saved meals."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from food_snap.domain.errors import ValidationError
from food_snap.domain.stats import DailyTotals, MealLogRow

WEEK_DAYS = 7


class StatsRepository(Protocol):
    """Persistence interface for meal statistics."""

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogRow]:
        """Return meals logged within a time range."""


@dataclass
class PeriodSummary:
    """Daily totals and averages for a period."""

    daily: list[DailyTotals]
    avg_calories: float
    avg_carbs_g: float
    avg_protein_g: float
    avg_fat_g: float
    avg_glycemic_load: float


@dataclass
class StatsService:
    """Service for computing intake stats in the user's timezone."""

    repository: StatsRepository

    def get_day(
        self, user_id: UUID, timezone_name: str = "UTC", day: date | None = None
    ) -> tuple[DailyTotals, list[MealLogRow]]:
        """Return totals and meals for a day, today by default."""
        tz = _zone(timezone_name)
        target = day or datetime.now(tz=tz).date()
        start = datetime.combine(target, datetime.min.time(), tzinfo=tz)
        end = start + timedelta(days=1)
        logs = self.repository.list_meal_logs(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        return _aggregate_day(target, logs, tz), logs

    def get_week(self, user_id: UUID, timezone_name: str = "UTC") -> PeriodSummary:
        """Return the last seven days, today included, with daily averages."""
        tz = _zone(timezone_name)
        today = datetime.now(tz=tz).date()
        first_day = today - timedelta(days=WEEK_DAYS - 1)
        start = datetime.combine(first_day, datetime.min.time(), tzinfo=tz)
        end = start + timedelta(days=WEEK_DAYS)
        logs = self.repository.list_meal_logs(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        return _aggregate_period(first_day, WEEK_DAYS, logs, tz)


def _zone(timezone_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError, IsADirectoryError) as exc:
        raise ValidationError(f"Unknown timezone {timezone_name!r}") from exc


def _aggregate_day(day: date, logs: list[MealLogRow], tz: ZoneInfo) -> DailyTotals:
    calories = carbs_g = protein_g = fat_g = glycemic_load = 0.0
    for log in logs:
        if log.logged_at.astimezone(tz).date() != day:
            continue
        calories += log.total_calories
        carbs_g += log.total_carbs_g
        protein_g += log.total_protein_g
        fat_g += log.total_fat_g
        glycemic_load += log.glycemic_load
    return DailyTotals(
        day=day,
        calories=calories,
        carbs_g=carbs_g,
        protein_g=protein_g,
        fat_g=fat_g,
        glycemic_load=glycemic_load,
    )


def _aggregate_period(
    first_day: date, days: int, logs: list[MealLogRow], tz: ZoneInfo
) -> PeriodSummary:
    daily = [
        _aggregate_day(first_day + timedelta(days=offset), logs, tz)
        for offset in range(days)
    ]
    total_days = max(len(daily), 1)
    return PeriodSummary(
        daily=daily,
        avg_calories=sum(entry.calories for entry in daily) / total_days,
        avg_carbs_g=sum(entry.carbs_g for entry in daily) / total_days,
        avg_protein_g=sum(entry.protein_g for entry in daily) / total_days,
        avg_fat_g=sum(entry.fat_g for entry in daily) / total_days,
        avg_glycemic_load=sum(entry.glycemic_load for entry in daily) / total_days,
    )
