"""
Concurrency primitives: a fan-out/fan-in group with first-error cancellation,
and the thread-safe tally it aggregates into.
"""

from .group import AggregationGroup, CancelScope, default_workers
from .tally import Tally, TallyPair

__all__ = ["AggregationGroup", "CancelScope", "default_workers", "Tally", "TallyPair"]
