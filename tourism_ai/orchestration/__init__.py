# orchestration/__init__.py
"""
Multi-provider response orchestration

- fan_out: concurrent join-all over every provider
- selector: filter, score and rank into a single winner
"""

from .fan_out import FanOutInvoker
from .selector import (
    ResponseSelector,
    ScoredCandidate,
    NoResponseAvailable,
    SelectionResult,
)

__all__ = [
    "FanOutInvoker",
    "ResponseSelector",
    "ScoredCandidate",
    "NoResponseAvailable",
    "SelectionResult",
]
