from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Optional, Sequence

from ..children.repository import ChildRepository
from ..common.datetime_utils import DateInput, as_reference_date, day_window, now_local
from ..common.validators import optional_text
from ..core.constants import MAX_NOTES_LENGTH
from ..core.exceptions import ConflictError, NotFoundError
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in/check-out state machine and attendance queries.

    No state is kept here; every call reads the current truth from the
    repository, and the two transitions rely on the repository's atomic
    conditional writes.
    """

    def __init__(self, attendance: AttendanceRepository, children: ChildRepository, *, tz: tzinfo):
        self._attendance = attendance
        self._children = children
        self._tz = tz

    def _now(self, now: datetime | None) -> datetime:
        return now or now_local(self._tz)

    def check_in(self, child_id: int, notes: Optional[str] = None, *, now: datetime | None = None) -> AttendanceRecord:
        notes = optional_text(notes, "notes", max_length=MAX_NOTES_LENGTH)

        if not self._children.get_by_id(child_id):
            raise NotFoundError(f"Child with id {child_id} not found")

        record = self._attendance.open_session(child_id=child_id, check_in_time=self._now(now), notes=notes)
        if record is None:
            logger.warning("Rejected check-in: child %s is already checked in", child_id)
            raise ConflictError(f"Child with id {child_id} is already checked in")

        logger.info("Child %s checked in (attendance %s)", child_id, record.id)
        return record

    def check_out(
        self,
        attendance_id: int,
        notes: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """Close an open session.

        ``notes=None`` keeps the notes written at check-in; any string
        (including ``""``) replaces them.
        """
        notes = optional_text(notes, "notes", max_length=MAX_NOTES_LENGTH)

        existing = self._attendance.get_by_id(attendance_id)
        if not existing:
            raise NotFoundError(f"Attendance record with id {attendance_id} not found")
        if not existing.is_open:
            logger.warning("Rejected check-out: attendance %s is already closed", attendance_id)
            raise ConflictError(f"Attendance record with id {attendance_id} has already been checked out")

        # check_in_time never changes, so clamping against the read copy is safe.
        check_out_time = max(self._now(now), existing.check_in_time)

        record = self._attendance.close_session(
            attendance_id=attendance_id,
            check_out_time=check_out_time,
            notes=notes,
            replace_notes=notes is not None,
        )
        if record is None:
            # Closed by a concurrent request between our read and the write.
            raise ConflictError(f"Attendance record with id {attendance_id} has already been checked out")

        logger.info("Child %s checked out (attendance %s)", record.child_id, record.id)
        return record

    def get_child_attendance(self, child_id: int, day: DateInput | None = None) -> Sequence[AttendanceRecord]:
        if day is None:
            return self._attendance.list_for_child(child_id)
        start, end = day_window(as_reference_date(day, self._tz))
        return self._attendance.list_for_child(child_id, start=start, end=end)

    def get_current_attendance(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_open()

    def get_open_session(self, child_id: int) -> Optional[AttendanceRecord]:
        return self._attendance.get_open_for_child(child_id)
