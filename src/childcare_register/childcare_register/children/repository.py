from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Child


class ChildRepository(Protocol):
    """Read access to the child directory.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, child_id: int) -> Optional[Child]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Child]:
        raise NotImplementedError
