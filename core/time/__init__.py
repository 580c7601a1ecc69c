"""
HGS Core Time — Public API
============================
Injectable clock. Engines never read wall-clock time directly.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
]
