from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_entry
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = "id, child_id, check_in_time, check_out_time, notes, created_at"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        child_id=int(r["child_id"]),
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_by_id(self, cur, attendance_id: int, *, for_update: bool = False) -> Optional[AttendanceRecord]:
        lock = " FOR UPDATE" if for_update else ""
        cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE id=%s{lock}", (int(attendance_id),))
        row = fetchone(cur)
        return _row_to_record(row) if row else None

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_by_id(cur, attendance_id)

    def get_open_for_child(self, child_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE child_id=%s AND check_out_time IS NULL
                """,
                (int(child_id),),
            )
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def open_session(
        self,
        *,
        child_id: int,
        check_in_time: datetime,
        notes: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # Row lock on the child serializes concurrent check-ins for it.
                cur.execute("SELECT id FROM children WHERE id=%s FOR UPDATE", (int(child_id),))
                fetchone(cur)

                cur.execute(
                    "SELECT id FROM attendance WHERE child_id=%s AND check_out_time IS NULL FOR UPDATE",
                    (int(child_id),),
                )
                if fetchone(cur):
                    return None

                cur.execute(
                    """
                    INSERT INTO attendance(child_id, check_in_time, check_out_time, notes, created_at)
                    VALUES(%s,%s,NULL,%s,%s)
                    """,
                    (int(child_id), check_in_time, notes, check_in_time),
                )
                return self._select_by_id(cur, int(cur.lastrowid))
        except mysql.connector.IntegrityError as exc:
            # uq_attendance_open_child fired: someone else opened a session first.
            if is_duplicate_entry(exc):
                logger.warning("Concurrent check-in rejected by unique index for child %s", child_id)
                return None
            raise

    def close_session(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        notes: Optional[str] = None,
        replace_notes: bool = False,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            if replace_notes:
                cur.execute(
                    """
                    UPDATE attendance
                    SET check_out_time=%s, notes=%s
                    WHERE id=%s AND check_out_time IS NULL
                    """,
                    (check_out_time, notes, int(attendance_id)),
                )
            else:
                cur.execute(
                    """
                    UPDATE attendance
                    SET check_out_time=%s
                    WHERE id=%s AND check_out_time IS NULL
                    """,
                    (check_out_time, int(attendance_id)),
                )
            if cur.rowcount == 0:
                return None
            return self._select_by_id(cur, attendance_id)

    def list_for_child(
        self,
        child_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["child_id=%s"]
        params: list[object] = [int(child_id)]

        if start is not None:
            clauses.append("check_in_time >= %s")
            params.append(start)
        if end is not None:
            clauses.append("check_in_time < %s")
            params.append(end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE {where}
                ORDER BY check_in_time DESC, id ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_open(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE check_out_time IS NULL
                ORDER BY id ASC
                """
            )
            return [_row_to_record(r) for r in fetchall(cur)]
