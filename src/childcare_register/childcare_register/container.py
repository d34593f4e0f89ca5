from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .children.mysql_child_repository import MySQLChildRepository
from .children.repository import ChildRepository
from .common.datetime_utils import load_timezone
from .core.constants import DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .meals.mysql_meal_repository import MySQLMealRepository
from .meals.repository import MealRepository
from .meals.service import MealService


@dataclass(frozen=True)
class Container:
    tz: tzinfo

    children_repo: ChildRepository
    attendance_repo: AttendanceRepository
    meal_repo: MealRepository

    attendance_service: AttendanceService
    meal_service: MealService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    children_repo: ChildRepository,
    attendance_repo: AttendanceRepository,
    meal_repo: MealRepository,
    tz: tzinfo,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        tz=tz,
        children_repo=children_repo,
        attendance_repo=attendance_repo,
        meal_repo=meal_repo,
        attendance_service=AttendanceService(attendance_repo, children_repo, tz=tz),
        meal_service=MealService(meal_repo, children_repo, tz=tz),
        conn=conn,
    )


def build_container(*, db_config: dict, timezone: str = DEFAULT_TIMEZONE) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    return wire(
        children_repo=MySQLChildRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        meal_repo=MySQLMealRepository(conn),
        tz=load_timezone(timezone),
        conn=conn,
    )
