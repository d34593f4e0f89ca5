from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

import pytest

from src.childcare_register.childcare_register.attendance.model import AttendanceRecord
from src.childcare_register.childcare_register.children.model import Child
from src.childcare_register.childcare_register.container import wire
from src.childcare_register.childcare_register.meals.model import DailyMealRow, MealRecord


class InMemoryChildren:
    def __init__(self, children=()):
        self._by_id: dict[int, Child] = {c.id: c for c in children}

    def add(self, child: Child) -> Child:
        self._by_id[child.id] = child
        return child

    def get_by_id(self, child_id: int) -> Optional[Child]:
        return self._by_id.get(child_id)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda c: (c.name, c.id))


class InMemoryAttendance:
    """Keeps rows in insertion order; a lock stands in for the DB transaction."""

    def __init__(self):
        self._rows: list[AttendanceRecord] = []
        self._id = 0
        self._lock = threading.Lock()

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return next((r for r in self._rows if r.id == attendance_id), None)

    def get_open_for_child(self, child_id: int) -> Optional[AttendanceRecord]:
        return next((r for r in self._rows if r.child_id == child_id and r.is_open), None)

    def open_session(self, *, child_id: int, check_in_time: datetime, notes=None) -> Optional[AttendanceRecord]:
        with self._lock:
            if self.get_open_for_child(child_id):
                return None
            self._id += 1
            rec = AttendanceRecord(
                id=self._id,
                child_id=child_id,
                check_in_time=check_in_time,
                check_out_time=None,
                notes=notes,
                created_at=check_in_time,
            )
            self._rows.append(rec)
            return rec

    def close_session(self, *, attendance_id: int, check_out_time: datetime, notes=None, replace_notes=False):
        with self._lock:
            for i, r in enumerate(self._rows):
                if r.id == attendance_id and r.is_open:
                    updated = replace(r, check_out_time=check_out_time, notes=notes if replace_notes else r.notes)
                    self._rows[i] = updated
                    return updated
            return None

    def list_for_child(self, child_id: int, *, start=None, end=None):
        items = [
            r
            for r in self._rows
            if r.child_id == child_id
            and (start is None or r.check_in_time >= start)
            and (end is None or r.check_in_time < end)
        ]
        # sort() is stable, so equal check-in times keep insertion order.
        items.sort(key=lambda r: r.check_in_time, reverse=True)
        return items

    def list_open(self):
        return [r for r in self._rows if r.is_open]


class InMemoryMeals:
    def __init__(self, children: InMemoryChildren):
        self._children = children
        self._rows: list[MealRecord] = []
        self._id = 0

    def create(self, *, child_id, meal_type, description, consumed_amount, meal_date, notes=None, created_at=None) -> MealRecord:
        self._id += 1
        meal = MealRecord(
            id=self._id,
            child_id=child_id,
            meal_type=meal_type,
            description=description,
            consumed_amount=consumed_amount,
            meal_date=meal_date,
            notes=notes,
            created_at=created_at or datetime(2026, 3, 2, 12, 0, 0),
        )
        self._rows.append(meal)
        return meal

    def list_for_child(self, child_id, *, start=None, end=None, meal_type=None):
        items = [
            m
            for m in self._rows
            if m.child_id == child_id
            and (start is None or m.meal_date >= start)
            and (end is None or m.meal_date < end)
            and (meal_type is None or m.meal_type == meal_type)
        ]
        items.sort(key=lambda m: m.meal_date, reverse=True)
        return items

    def list_daily_rows(self, *, start, end):
        rows = []
        for m in self._rows:
            if not (start <= m.meal_date < end):
                continue
            child = self._children.get_by_id(m.child_id)
            rows.append(DailyMealRow(meal=m, child_name=child.name, child_parent_name=child.parent_name))
        rows.sort(key=lambda r: (r.child_name, r.meal.child_id, r.meal.meal_date, r.meal.id))
        return rows


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 8, 0, 0)


@pytest.fixture
def children() -> InMemoryChildren:
    return InMemoryChildren(
        [
            Child(id=1, name="Mia Tran", parent_name="Lan Tran"),
            Child(id=2, name="Ava Cole", parent_name="Ruth Cole"),
            Child(id=3, name="Noah Ford", parent_name="Sam Ford"),
        ]
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def meal_repo(children) -> InMemoryMeals:
    return InMemoryMeals(children)


@pytest.fixture
def container(children, attendance_repo, meal_repo):
    return wire(
        children_repo=children,
        attendance_repo=attendance_repo,
        meal_repo=meal_repo,
        tz=timezone.utc,
    )
