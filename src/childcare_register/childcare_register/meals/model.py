from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ConsumedAmount, MealType, consumed_amount_label


@dataclass(frozen=True)
class MealRecord:
    """Domain entity: one meal served to one child.

    ``consumed_amount`` keeps the stored text as-is; use ``amount`` and
    ``consumed_label`` for the interpreted value.
    """

    id: int
    child_id: int
    meal_type: MealType
    description: str
    consumed_amount: str
    meal_date: datetime
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def amount(self) -> ConsumedAmount:
        return ConsumedAmount.from_text(self.consumed_amount)

    @property
    def consumed_label(self) -> str:
        return consumed_amount_label(self.consumed_amount)


@dataclass(frozen=True)
class DailyMealRow:
    """Read-model for the daily overview: a meal plus child display data."""

    meal: MealRecord
    child_name: str
    child_parent_name: str
