from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_child(self, child_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def open_session(
        self,
        *,
        child_id: int,
        check_in_time: datetime,
        notes: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        """Atomically insert an open session.

        Returns None (and writes nothing) when the child already has one.
        """

        raise NotImplementedError

    def close_session(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        notes: Optional[str] = None,
        replace_notes: bool = False,
    ) -> Optional[AttendanceRecord]:
        """Atomically set check_out_time on a still-open session.

        Returns None when the record is missing or already closed. Notes are
        only written when ``replace_notes`` is true.
        """

        raise NotImplementedError

    def list_for_child(
        self,
        child_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest check-in first; equal check-in times keep insertion order."""

        raise NotImplementedError

    def list_open(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
