"""
HGS Maintenance Engine — Request Commands
============================================
Typed maintenance requests that convert into canonical Command objects.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.commands.base import Command


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

MAINTENANCE_WORK_ANNOUNCE_REQUEST = "maintenance.work.announce.request"
MAINTENANCE_WORK_PERFORM_REQUEST = "maintenance.work.perform.request"
MAINTENANCE_WORK_COMPLETE_REQUEST = "maintenance.work.complete.request"
MAINTENANCE_FAILURE_DETECT_REQUEST = "maintenance.failure.detect.request"
MAINTENANCE_ACCOUNTABILITY_IDENTIFY_REQUEST = (
    "maintenance.accountability.identify.request"
)
MAINTENANCE_RECORD_GET_REQUEST = "maintenance.record.get.request"

MAINTENANCE_COMMAND_TYPES = frozenset({
    MAINTENANCE_WORK_ANNOUNCE_REQUEST,
    MAINTENANCE_WORK_PERFORM_REQUEST,
    MAINTENANCE_WORK_COMPLETE_REQUEST,
    MAINTENANCE_FAILURE_DETECT_REQUEST,
    MAINTENANCE_ACCOUNTABILITY_IDENTIFY_REQUEST,
    MAINTENANCE_RECORD_GET_REQUEST,
})


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class MaintenanceRequest:
    """
    Argument-free maintenance request (announce, perform, failure
    detection, record lookup). command_type picks the operation.
    """
    command_type: str

    def __post_init__(self):
        if self.command_type not in MAINTENANCE_COMMAND_TYPES:
            raise ValueError(
                f"command_type '{self.command_type}' not valid for maintenance."
            )
        if self.command_type in (
            MAINTENANCE_WORK_COMPLETE_REQUEST,
            MAINTENANCE_ACCOUNTABILITY_IDENTIFY_REQUEST,
        ):
            raise ValueError(
                f"'{self.command_type}' carries arguments; use its typed request."
            )

    def to_command(
        self,
        *,
        caller: str,
        command_id: uuid.UUID,
        correlation_id: uuid.UUID,
        issued_at: datetime,
    ) -> Command:
        return Command(
            command_id=command_id,
            command_type=self.command_type,
            caller=caller,
            payload={},
            issued_at=issued_at,
            correlation_id=correlation_id,
            source_engine="maintenance",
        )


@dataclass(frozen=True)
class CompleteMaintenanceRequest:
    """Close out maintenance with the hash of its documentation."""
    document_hash: str

    def __post_init__(self):
        if not isinstance(self.document_hash, str):
            raise ValueError("document_hash must be a string.")

    def to_command(
        self,
        *,
        caller: str,
        command_id: uuid.UUID,
        correlation_id: uuid.UUID,
        issued_at: datetime,
    ) -> Command:
        return Command(
            command_id=command_id,
            command_type=MAINTENANCE_WORK_COMPLETE_REQUEST,
            caller=caller,
            payload={"document_hash": self.document_hash},
            issued_at=issued_at,
            correlation_id=correlation_id,
            source_engine="maintenance",
        )


@dataclass(frozen=True)
class IdentifyAccountablePartyRequest:
    """Name the party held accountable after a failure. Zero is accepted."""
    party: Optional[str]

    def __post_init__(self):
        if self.party is not None and not isinstance(self.party, str):
            raise ValueError("party must be a string identity.")

    def to_command(
        self,
        *,
        caller: str,
        command_id: uuid.UUID,
        correlation_id: uuid.UUID,
        issued_at: datetime,
    ) -> Command:
        return Command(
            command_id=command_id,
            command_type=MAINTENANCE_ACCOUNTABILITY_IDENTIFY_REQUEST,
            caller=caller,
            payload={"party": self.party},
            issued_at=issued_at,
            correlation_id=correlation_id,
            source_engine="maintenance",
        )
