from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Child
from .repository import ChildRepository

_COLUMNS = "id, name, parent_name, parent_phone, parent_email, created_at"


def _row_to_child(r: dict) -> Child:
    return Child(
        id=int(r["id"]),
        name=r["name"],
        parent_name=r["parent_name"],
        parent_phone=r.get("parent_phone") or "",
        parent_email=r.get("parent_email") or "",
        created_at=r.get("created_at"),
    )


class MySQLChildRepository(ChildRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, child_id: int) -> Optional[Child]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM children WHERE id=%s", (int(child_id),))
            row = fetchone(cur)
            return _row_to_child(row) if row else None

    def list_all(self) -> Sequence[Child]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM children ORDER BY name ASC, id ASC")
            return [_row_to_child(r) for r in fetchall(cur)]

