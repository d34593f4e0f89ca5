from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one presence session of a child.

    The session is open while ``check_out_time`` is None.
    """

    id: int
    child_id: int
    check_in_time: datetime
    check_out_time: Optional[datetime]
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None

    @property
    def duration(self) -> Optional[timedelta]:
        if self.check_out_time is None:
            return None
        return self.check_out_time - self.check_in_time
