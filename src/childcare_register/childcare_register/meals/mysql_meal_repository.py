from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import MealType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DailyMealRow, MealRecord
from .repository import MealRepository

_COLUMNS = "m.id, m.child_id, m.meal_type, m.description, m.consumed_amount, m.meal_date, m.notes, m.created_at"


def _row_to_meal(r: dict) -> MealRecord:
    return MealRecord(
        id=int(r["id"]),
        child_id=int(r["child_id"]),
        meal_type=MealType(r["meal_type"]),
        description=r["description"],
        consumed_amount=r["consumed_amount"],
        meal_date=r["meal_date"],
        notes=r.get("notes"),
        created_at=r.get("created_at"),
    )


class MySQLMealRepository(MealRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO meals(child_id, meal_type, description, consumed_amount, meal_date, notes, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,COALESCE(%s, CURRENT_TIMESTAMP(6)))
                """,
                (int(child_id), meal_type.value, description, consumed_amount, meal_date, notes, created_at),
            )
            meal_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM meals m WHERE m.id=%s", (meal_id,))
            return _row_to_meal(fetchone(cur))

    def list_for_child(
        self,
        child_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        meal_type: Optional[MealType] = None,
    ) -> Sequence[MealRecord]:
        clauses = ["m.child_id=%s"]
        params: list[object] = [int(child_id)]

        if start is not None:
            clauses.append("m.meal_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("m.meal_date < %s")
            params.append(end)
        if meal_type is not None:
            clauses.append("m.meal_type=%s")
            params.append(meal_type.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM meals m
                WHERE {where}
                ORDER BY m.meal_date DESC, m.id ASC
                """,
                tuple(params),
            )
            return [_row_to_meal(r) for r in fetchall(cur)]

    def list_daily_rows(self, *, start: datetime, end: datetime) -> Sequence[DailyMealRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, c.name AS child_name, c.parent_name AS child_parent_name
                FROM meals m
                JOIN children c ON c.id = m.child_id
                WHERE m.meal_date >= %s AND m.meal_date < %s
                ORDER BY c.name ASC, c.id ASC, m.meal_date ASC, m.id ASC
                """,
                (start, end),
            )
            return [
                DailyMealRow(
                    meal=_row_to_meal(r),
                    child_name=r["child_name"],
                    child_parent_name=r["child_parent_name"],
                )
                for r in fetchall(cur)
            ]
