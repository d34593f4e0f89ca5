from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Optional, Sequence

from ..children.repository import ChildRepository
from ..common.datetime_utils import DateInput, as_reference_date, day_window, normalize_instant, now_local
from ..common.validators import optional_text, require_enum, require_non_empty
from ..core.constants import MAX_CONSUMED_AMOUNT_LENGTH, MAX_DESCRIPTION_LENGTH, MAX_NOTES_LENGTH
from ..core.enums import MealType
from ..core.exceptions import NotFoundError
from .model import DailyMealRow, MealRecord
from .repository import MealRepository

logger = logging.getLogger(__name__)


class MealService:
    def __init__(self, meals: MealRepository, children: ChildRepository, *, tz: tzinfo):
        self._meals = meals
        self._children = children
        self._tz = tz

    def record_meal(
        self,
        child_id: int,
        meal_type: MealType | str,
        description: str,
        consumed_amount: str,
        meal_date: DateInput | None = None,
        notes: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> MealRecord:
        meal_type = require_enum(meal_type, MealType, "meal_type")
        description = require_non_empty(description, "description", max_length=MAX_DESCRIPTION_LENGTH)
        consumed_amount = require_non_empty(consumed_amount, "consumed_amount", max_length=MAX_CONSUMED_AMOUNT_LENGTH)
        notes = optional_text(notes, "notes", max_length=MAX_NOTES_LENGTH)

        recorded_at = now or now_local(self._tz)
        if meal_date is None:
            served_at = recorded_at
        else:
            served_at = normalize_instant(meal_date, self._tz)

        if not self._children.get_by_id(child_id):
            raise NotFoundError(f"Child with id {child_id} not found")

        meal = self._meals.create(
            child_id=child_id,
            meal_type=meal_type,
            description=description,
            consumed_amount=consumed_amount,
            meal_date=served_at,
            notes=notes,
            created_at=recorded_at,
        )
        logger.info("Recorded %s for child %s (meal %s)", meal.meal_type.value, child_id, meal.id)
        return meal

    def get_child_meals(
        self,
        child_id: int,
        day: DateInput | None = None,
        meal_type: MealType | str | None = None,
    ) -> Sequence[MealRecord]:
        if meal_type is not None:
            meal_type = require_enum(meal_type, MealType, "meal_type")

        start = end = None
        if day is not None:
            start, end = day_window(as_reference_date(day, self._tz))

        return self._meals.list_for_child(child_id, start=start, end=end, meal_type=meal_type)

    def get_daily_meals(self, day: DateInput | None = None, *, now: datetime | None = None) -> Sequence[DailyMealRow]:
        if day is None:
            target = (now or now_local(self._tz)).date()
        else:
            target = as_reference_date(day, self._tz)

        start, end = day_window(target)
        return self._meals.list_daily_rows(start=start, end=end)
