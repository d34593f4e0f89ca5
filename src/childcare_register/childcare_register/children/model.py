from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Child:
    """Domain entity: a child enrolled at the facility.

    Profile data is managed elsewhere; the register only reads it.
    """

    id: int
    name: str
    parent_name: str
    parent_phone: str = ""
    parent_email: str = ""
    created_at: Optional[datetime] = None
