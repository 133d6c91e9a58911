from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ActionType
from .model import ActionRecord


class ActionLogRepository(Protocol):
    """Append-only per-employee action log.

    Implementations must reject a second append carrying the same ``after_id``
    for an employee with ``ConflictError``.
    """

    def append(
        self,
        *,
        employee_id: int,
        action_type: ActionType,
        timestamp: datetime,
        after_id: int = 0,
    ) -> ActionRecord:
        raise NotImplementedError

    def query_range(
        self,
        employee_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> Sequence[ActionRecord]:
        """Records with start <= timestamp <= end, ordered by timestamp."""

        raise NotImplementedError

    def most_recent(self, employee_id: int) -> Optional[ActionRecord]:
        raise NotImplementedError

    def get_by_id(self, log_id: int) -> Optional[ActionRecord]:
        raise NotImplementedError
