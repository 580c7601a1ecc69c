"""
HGS Maintenance Engine — Application Service
===============================================
announce → perform → complete, plus failure detection and
accountability assignment by the regulatory authority.

There is no phase field. Every operation is independently gated by a
single live role check against the registry, so any call order is
accepted as long as each caller holds the role for that step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from core.commands.base import Command
from core.commands.errors import InvalidArgument, raise_for_rejection
from core.identity import ZERO_IDENTITY, normalize_identity
from engines.maintenance.commands import (
    MAINTENANCE_ACCOUNTABILITY_IDENTIFY_REQUEST,
    MAINTENANCE_COMMAND_TYPES,
    MAINTENANCE_FAILURE_DETECT_REQUEST,
    MAINTENANCE_RECORD_GET_REQUEST,
    MAINTENANCE_WORK_ANNOUNCE_REQUEST,
    MAINTENANCE_WORK_COMPLETE_REQUEST,
    MAINTENANCE_WORK_PERFORM_REQUEST,
)
from engines.maintenance.events import (
    MAINTENANCE_ACCOUNTABILITY_IDENTIFIED_V1,
    MAINTENANCE_FAILURE_DETECTED_V1,
    MAINTENANCE_WORK_ANNOUNCED_V1,
    MAINTENANCE_WORK_COMPLETED_V1,
    MAINTENANCE_WORK_PERFORMED_V1,
    build_accountability_identified_payload,
    build_failure_detected_payload,
    build_work_announced_payload,
    build_work_completed_payload,
    build_work_performed_payload,
    register_maintenance_event_types,
)
from engines.registry.policies import (
    reference_present_policy,
    string_identity_policy,
)
from engines.registry.roles import Role
from engines.registry.services import StakeholderRegistry

logger = logging.getLogger("hgs.maintenance")


@dataclass(frozen=True)
class MaintenanceRecord:
    """The most recent completed maintenance. Earlier ones are not kept."""

    document_hash: str = ""
    performed_by: str = ZERO_IDENTITY

    def as_tuple(self) -> tuple[str, str]:
        return (self.document_hash, self.performed_by)


class MaintenanceWorkflow:
    """
    Maintenance workflow for one governed equipment instance.

    Shares the registry's lock and journal, so a role check and the
    mutation it guards are one atomic step.
    """

    def __init__(self, registry: StakeholderRegistry):
        raise_for_rejection(
            reference_present_policy(
                registry, "registry", "create a maintenance workflow",
            )
        )
        self._registry = registry
        self._lock = registry.lock
        self._journal = registry.journal
        self._record = MaintenanceRecord()

        register_maintenance_event_types(self._journal)

    @property
    def registry(self) -> StakeholderRegistry:
        return self._registry

    # ── workflow steps ────────────────────────────────────────

    def announce(self, caller: str) -> None:
        with self._lock:
            self._registry.require_role(
                caller, Role.TIME_ORACLE, "announce maintenance",
            )
            self._journal.record(
                MAINTENANCE_WORK_ANNOUNCED_V1,
                actor=caller,
                payload=build_work_announced_payload(caller),
            )
        logger.info(f"Maintenance announced by time oracle {caller}")

    def perform(self, caller: str) -> None:
        with self._lock:
            self._registry.require_role(
                caller, Role.MAINTENANCE_TEAM, "perform maintenance",
            )
            self._journal.record(
                MAINTENANCE_WORK_PERFORMED_V1,
                actor=caller,
                payload=build_work_performed_payload(caller),
            )
        logger.info(f"Maintenance performed by {caller}")

    def complete(self, caller: str, document_hash: str) -> MaintenanceRecord:
        """Store document_hash and caller, replacing any earlier record."""
        with self._lock:
            self._registry.require_role(
                caller, Role.MAINTENANCE_TEAM, "complete maintenance",
            )
            if not isinstance(document_hash, str):
                raise InvalidArgument(
                    "document_hash must be a string (complete maintenance).",
                    "document_hash_type_policy",
                )

            self._record = MaintenanceRecord(
                document_hash=document_hash,
                performed_by=normalize_identity(caller),
            )
            self._journal.record(
                MAINTENANCE_WORK_COMPLETED_V1,
                actor=caller,
                payload=build_work_completed_payload(self._record),
            )
            record = self._record

        logger.info(
            f"Maintenance completed by {caller} "
            f"(document hash: {document_hash!r})"
        )
        return record

    # ── failure & accountability ──────────────────────────────

    def detect_failure_and_review(self, caller: str) -> None:
        """
        Signal a failure. Document review happens off-system using
        get_last_maintenance_details().
        """
        with self._lock:
            self._registry.require_role(
                caller, Role.REGULATORY_AUTHORITY, "report a maintenance failure",
            )
            self._journal.record(
                MAINTENANCE_FAILURE_DETECTED_V1,
                actor=caller,
                payload=build_failure_detected_payload(caller),
            )
        logger.warning(f"Maintenance failure reported by {caller}")

    def identify_accountable_party(self, caller: str, party: Optional[str]) -> None:
        with self._lock:
            self._registry.require_role(
                caller,
                Role.REGULATORY_AUTHORITY,
                "identify the accountable party",
            )
            raise_for_rejection(
                string_identity_policy(
                    party, "party", "identify the accountable party",
                )
            )
            party = normalize_identity(party)
            self._journal.record(
                MAINTENANCE_ACCOUNTABILITY_IDENTIFIED_V1,
                actor=caller,
                payload=build_accountability_identified_payload(party),
            )
        logger.info(f"Accountable party identified: {party}")

    def get_last_maintenance_details(self, caller: str) -> tuple[str, str]:
        """(document_hash, performed_by); ("", ZERO_IDENTITY) before any completion."""
        with self._lock:
            self._registry.require_role(
                caller,
                Role.REGULATORY_AUTHORITY,
                "read the last maintenance record",
            )
            return self._record.as_tuple()

    def _snapshot(self) -> MaintenanceRecord:
        with self._lock:
            return self._record

    def _restore(self, record: MaintenanceRecord) -> None:
        with self._lock:
            self._record = record


# ══════════════════════════════════════════════════════════════
# COMMAND HANDLER
# ══════════════════════════════════════════════════════════════

class MaintenanceCommandHandler:
    def __init__(self, workflow: MaintenanceWorkflow):
        self._workflow = workflow

    def execute(self, command: Command) -> Any:
        caller = command.caller
        command_type = command.command_type

        if command_type == MAINTENANCE_WORK_ANNOUNCE_REQUEST:
            return self._workflow.announce(caller)
        if command_type == MAINTENANCE_WORK_PERFORM_REQUEST:
            return self._workflow.perform(caller)
        if command_type == MAINTENANCE_WORK_COMPLETE_REQUEST:
            return self._workflow.complete(
                caller, command.payload.get("document_hash"),
            )
        if command_type == MAINTENANCE_FAILURE_DETECT_REQUEST:
            return self._workflow.detect_failure_and_review(caller)
        if command_type == MAINTENANCE_ACCOUNTABILITY_IDENTIFY_REQUEST:
            return self._workflow.identify_accountable_party(
                caller, command.payload.get("party"),
            )
        if command_type == MAINTENANCE_RECORD_GET_REQUEST:
            return self._workflow.get_last_maintenance_details(caller)

        raise ValueError(
            f"Unsupported maintenance command type: {command_type}"
        )

    def register(self, command_bus) -> None:
        for command_type in sorted(MAINTENANCE_COMMAND_TYPES):
            command_bus.register_handler(command_type, self)
