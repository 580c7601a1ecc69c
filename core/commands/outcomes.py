"""
HGS Command Layer — Command Outcome
======================================
What the caller gets back from CommandBus.handle().

An outcome names the command it answers (id, type and caller) and
carries either the operation's return value or the reason it was
refused. A refused call changed nothing, so it never carries a value.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from core.commands.rejection import RejectionReason


class CommandStatus(Enum):
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class CommandOutcome:
    command_id: uuid.UUID
    command_type: str
    caller: str
    status: CommandStatus
    occurred_at: datetime
    reason: Optional[RejectionReason] = None
    result: Any = None

    def __post_init__(self):
        if not isinstance(self.command_id, uuid.UUID):
            raise ValueError("command_id must be UUID.")

        if not isinstance(self.status, CommandStatus):
            raise ValueError(
                f"status must be CommandStatus, got {type(self.status).__name__}."
            )

        if self.is_rejected:
            if self.reason is None:
                raise ValueError(
                    f"Rejected {self.command_type} must carry a RejectionReason."
                )
            if self.result is not None:
                raise ValueError(
                    f"Rejected {self.command_type} cannot carry a result; "
                    f"the call had no effect."
                )
        elif self.reason is not None:
            raise ValueError(
                f"Accepted {self.command_type} cannot carry a RejectionReason."
            )

        if not isinstance(self.occurred_at, datetime) or self.occurred_at.tzinfo is None:
            raise ValueError("occurred_at must be a timezone-aware datetime.")

    # ── construction from a handled command ───────────────────

    @classmethod
    def accepted(cls, command, occurred_at: datetime, result: Any = None) -> "CommandOutcome":
        return cls(
            command_id=command.command_id,
            command_type=command.command_type,
            caller=command.caller,
            status=CommandStatus.ACCEPTED,
            occurred_at=occurred_at,
            result=result,
        )

    @classmethod
    def rejected(
        cls, command, occurred_at: datetime, reason: RejectionReason,
    ) -> "CommandOutcome":
        return cls(
            command_id=command.command_id,
            command_type=command.command_type,
            caller=command.caller,
            status=CommandStatus.REJECTED,
            occurred_at=occurred_at,
            reason=reason,
        )

    # ── reads ─────────────────────────────────────────────────

    @property
    def is_accepted(self) -> bool:
        return self.status == CommandStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status == CommandStatus.REJECTED

    def to_dict(self) -> dict:
        """Audit form. The return value is left out; it may not serialize."""
        return {
            "command_id": str(self.command_id),
            "command_type": self.command_type,
            "caller": self.caller,
            "status": self.status.value,
            "occurred_at": self.occurred_at.isoformat(),
            "reason": self.reason.to_dict() if self.reason else None,
        }
