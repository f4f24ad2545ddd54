"""
Application services module.
"""

from strcalc.services.session import CalculatorSession
from strcalc.services.snapshots import (
    MemorySnapshotStore,
    SnapshotStore,
    SqlSnapshotStore,
    parse_snapshot,
)

__all__ = [
    "CalculatorSession",
    "MemorySnapshotStore",
    "SnapshotStore",
    "SqlSnapshotStore",
    "parse_snapshot",
]
