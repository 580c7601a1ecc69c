"""
HGS Command Layer — Command Base Contract
============================================
Every caller-facing operation in HGS can be expressed as a Command.

A Command is a frozen, auditable declaration of intent. It carries
the caller identity supplied by the host environment, the operation
arguments, and nothing else.

Rules:
- Immutable once created (frozen dataclass)
- No business logic inside
- No state access
- No event emission
- command_type must end with '.request'
- command_type follows engine.domain.action.request format

A Command is NOT an event. It is intent awaiting judgment.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime


# ══════════════════════════════════════════════════════════════
# CANONICAL COMMAND
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Command:
    """
    Canonical HGS Command — declaration of caller intent.

    Fields:
        command_id:     Unique identifier (UUID).
        command_type:   Namespaced type ending in '.request'
                        (e.g. 'maintenance.work.complete.request').
        caller:         Identity attached by the host environment.
        payload:        Operation arguments (dict).
        issued_at:      When the command was issued.
        correlation_id: Groups related commands/events in a story.
        source_engine:  Engine that owns this command.

    Example:
        Command(
            command_id=uuid.uuid4(),
            command_type="maintenance.work.complete.request",
            caller="0xA11CE",
            payload={"document_hash": "QmX..."},
            issued_at=datetime.now(timezone.utc),
            correlation_id=uuid.uuid4(),
            source_engine="maintenance",
        )
    """

    command_id: uuid.UUID
    command_type: str
    caller: str
    payload: dict
    issued_at: datetime
    correlation_id: uuid.UUID
    source_engine: str

    def __post_init__(self):
        # ── command_id must be UUID ───────────────────────────
        if not isinstance(self.command_id, uuid.UUID):
            raise ValueError(
                f"command_id must be UUID, got {type(self.command_id).__name__}"
            )

        # ── command_type must end with .request ───────────────
        if not self.command_type or not isinstance(self.command_type, str):
            raise ValueError("command_type must be a non-empty string.")

        if not self.command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{self.command_type}' must end with "
                f"'.request' (e.g. 'maintenance.work.announce.request')."
            )

        # ── command_type minimum 4 segments ───────────────────
        parts = self.command_type.split(".")
        if len(parts) < 4:
            raise ValueError(
                f"command_type '{self.command_type}' must follow "
                f"engine.domain.action.request format (minimum 4 segments)."
            )

        # ── source_engine must match first segment ────────────
        if parts[0] != self.source_engine:
            raise ValueError(
                f"command_type namespace '{parts[0]}' does not match "
                f"source_engine '{self.source_engine}'."
            )

        # ── caller must be a string (zero is allowed, it just never
        #    passes a role check) ───────────────────────────────
        if not isinstance(self.caller, str):
            raise ValueError("caller must be a string identity.")

        # ── payload must be dict ──────────────────────────────
        if not isinstance(self.payload, dict):
            raise TypeError("payload must be a dict.")

        # ── correlation_id must be UUID ───────────────────────
        if not isinstance(self.correlation_id, uuid.UUID):
            raise ValueError("correlation_id must be UUID.")

        if not isinstance(self.issued_at, datetime):
            raise ValueError("issued_at must be a datetime.")
