from __future__ import annotations

from typing import Protocol, Sequence

from .model import ActivityLogEntry


class ActivityLogRepository(Protocol):
    """Read side of the audit trail; rows are written with the status update."""

    def list_entries(self) -> Sequence[ActivityLogEntry]:
        raise NotImplementedError
