"""
HGS Snapshots - Public API
==========================
Flat key/value persistence of one governed equipment instance.
"""

from core.snapshots.provider import (
    InMemorySnapshotProvider,
    SnapshotError,
    SnapshotProvider,
)

__all__ = [
    "InMemorySnapshotProvider",
    "SnapshotError",
    "SnapshotProvider",
]
