from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .policy import AttendancePolicy
from .strategies.base import LatenessStrategy
from .strategies.cutoff_strategy import CutoffLateStrategy
from .strategies.never_late_strategy import NeverLateStrategy


@dataclass
class LatenessStrategyFactory:
    """Factory Pattern: choose the lateness strategy named by the policy."""

    def for_policy(self, policy: AttendancePolicy) -> LatenessStrategy:
        rule = (policy.lateness_rule or "never").strip().lower()
        if rule == "never":
            return NeverLateStrategy()
        if rule == "cutoff":
            if not policy.late_cutoff:
                raise ValueError("lateness_rule 'cutoff' requires late_cutoff (HH:MM)")
            cutoff = datetime.strptime(policy.late_cutoff, "%H:%M").time()
            return CutoffLateStrategy(cutoff, grace_minutes=policy.late_grace_minutes)
        raise ValueError(f"Unknown lateness_rule: {policy.lateness_rule!r}")
