from __future__ import annotations

from datetime import datetime

from .base import LatenessStrategy


class NeverLateStrategy(LatenessStrategy):
    """No lateness rule configured: every shift counts as on time."""

    def is_late(self, *, shift_start: datetime, timezone: str) -> bool:
        return False
