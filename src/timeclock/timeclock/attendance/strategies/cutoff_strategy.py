from __future__ import annotations

from datetime import datetime, time, timedelta

from ...common.datetime_utils import to_local
from .base import LatenessStrategy


class CutoffLateStrategy(LatenessStrategy):
    """Late when the shift starts after a local cutoff time plus grace minutes."""

    def __init__(self, cutoff: time, *, grace_minutes: int = 0):
        self._cutoff = cutoff
        self._grace = timedelta(minutes=int(grace_minutes))

    def is_late(self, *, shift_start: datetime, timezone: str) -> bool:
        local_start = to_local(shift_start, timezone)
        limit = local_start.replace(
            hour=self._cutoff.hour,
            minute=self._cutoff.minute,
            second=self._cutoff.second,
            microsecond=0,
        )
        return local_start > limit + self._grace
