from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class LatenessStrategy(ABC):
    """Strategy Pattern: decide whether a shift started late."""

    @abstractmethod
    def is_late(self, *, shift_start: datetime, timezone: str) -> bool:
        raise NotImplementedError
