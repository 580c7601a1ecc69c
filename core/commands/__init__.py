"""
HGS Command Layer — Request/Response Governance
==================================================
Every caller-facing operation can be expressed as a Command.
Every handled Command produces exactly one Outcome.
"""

from core.commands.base import Command
from core.commands.errors import (
    GovernanceError,
    InvalidArgument,
    Unauthorized,
    raise_for_rejection,
)
from core.commands.outcomes import (
    CommandOutcome,
    CommandStatus,
)
from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)
from core.commands.bus import (
    CommandBus,
    CommandBusError,
    NoHandlerRegistered,
)

__all__ = [
    # ── Base ──────────────────────────────────────────────────
    "Command",
    # ── Errors ────────────────────────────────────────────────
    "GovernanceError",
    "Unauthorized",
    "InvalidArgument",
    "raise_for_rejection",
    # ── Outcomes ──────────────────────────────────────────────
    "CommandOutcome",
    "CommandStatus",
    # ── Rejection ─────────────────────────────────────────────
    "RejectionReason",
    "ReasonCode",
    # ── Bus ────────────────────────────────────────────────────
    "CommandBus",
    "CommandBusError",
    "NoHandlerRegistered",
]
