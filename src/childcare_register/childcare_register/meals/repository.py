from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import MealType
from .model import DailyMealRow, MealRecord


class MealRepository(Protocol):
    def create(
        self,
        *,
        child_id: int,
        meal_type: MealType,
        description: str,
        consumed_amount: str,
        meal_date: datetime,
        notes: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> MealRecord:
        raise NotImplementedError

    def list_for_child(
        self,
        child_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        meal_type: Optional[MealType] = None,
    ) -> Sequence[MealRecord]:
        """Newest meal_date first."""

        raise NotImplementedError

    def list_daily_rows(self, *, start: datetime, end: datetime) -> Sequence[DailyMealRow]:
        """Meals in ``[start, end)`` joined with the child directory.

        Ordered by child name, then meal_date ascending.
        """

        raise NotImplementedError
