"""
HGS Registry Engine — Application Service
============================================
Single source of truth for who holds which role on one governed
equipment instance.

RULES (NON-NEGOTIABLE):
- regulatory_authority is fixed at creation and never changes
- Every other role starts unassigned (zero identity)
- Only the regulatory authority may assign roles
- Role checks are direct field comparisons, evaluated under the
  instance lock so that reassignment and checking never interleave
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Optional

from core.commands.base import Command
from core.commands.errors import InvalidArgument, raise_for_rejection
from core.events.journal import EventJournal
from core.identity import ZERO_IDENTITY, is_zero_identity, normalize_identity
from engines.registry.commands import (
    REGISTRY_AUTHORIZATION_CHECK_REQUEST,
    REGISTRY_COMMAND_TYPES,
    REGISTRY_SPARE_PARTS_ORACLE_REGISTER_REQUEST,
    REGISTRY_STAKEHOLDERS_SETUP_REQUEST,
    REGISTRY_TIME_ORACLE_REGISTER_REQUEST,
)
from engines.registry.events import (
    REGISTRY_AUTHORIZATION_CHECKED_V1,
    REGISTRY_SPARE_PARTS_ORACLE_REGISTERED_V1,
    REGISTRY_STAKEHOLDERS_REGISTERED_V1,
    REGISTRY_TIME_ORACLE_REGISTERED_V1,
    build_authorization_checked_payload,
    build_oracle_registered_payload,
    build_stakeholders_registered_payload,
    register_registry_event_types,
)
from engines.registry.policies import (
    caller_holds_role_policy,
    non_zero_identity_policy,
    reference_present_policy,
    string_identity_policy,
)
from engines.registry.roles import STAKEHOLDER_ROLES, Role

logger = logging.getLogger("hgs.registry")


# ══════════════════════════════════════════════════════════════
# READ MODEL
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StakeholderSet:
    """Point-in-time view of every role holder."""

    regulatory_authority: str
    maintenance_team: str = ZERO_IDENTITY
    manufacturer: str = ZERO_IDENTITY
    spare_part_supplier: str = ZERO_IDENTITY
    time_oracle: str = ZERO_IDENTITY
    spare_parts_oracle: str = ZERO_IDENTITY

    def holder_of(self, role: Role) -> str:
        return getattr(self, role.value)

    def to_dict(self) -> dict:
        return {role.value: self.holder_of(role) for role in Role}


# ══════════════════════════════════════════════════════════════
# APPLICATION SERVICE
# ══════════════════════════════════════════════════════════════

class StakeholderRegistry:
    """
    Registry of role holders for one governed equipment instance.

    The creator becomes the regulatory authority. Workflow and
    inventory engines hold a reference to the registry and read it
    live on every call.
    """

    def __init__(
        self,
        creator: str,
        *,
        journal: Optional[EventJournal] = None,
        lock: Optional[RLock] = None,
    ):
        raise_for_rejection(
            string_identity_policy(creator, "creator", "create a registry")
            or non_zero_identity_policy(creator, "creator", "create a registry")
        )

        self._lock = lock if lock is not None else RLock()
        self._journal = journal if journal is not None else EventJournal()
        self._stakeholders = StakeholderSet(
            regulatory_authority=normalize_identity(creator),
        )
        self._hash_store = None

        register_registry_event_types(self._journal)
        logger.info(
            f"Registry created (regulatory authority: "
            f"{self._stakeholders.regulatory_authority})"
        )

    # ── shared infrastructure ─────────────────────────────────

    @property
    def lock(self) -> RLock:
        return self._lock

    @property
    def journal(self) -> EventJournal:
        return self._journal

    # ── reads ─────────────────────────────────────────────────

    @property
    def regulatory_authority(self) -> str:
        return self._stakeholders.regulatory_authority

    @property
    def maintenance_team(self) -> str:
        with self._lock:
            return self._stakeholders.maintenance_team

    @property
    def manufacturer(self) -> str:
        with self._lock:
            return self._stakeholders.manufacturer

    @property
    def spare_part_supplier(self) -> str:
        with self._lock:
            return self._stakeholders.spare_part_supplier

    @property
    def time_oracle(self) -> str:
        with self._lock:
            return self._stakeholders.time_oracle

    @property
    def spare_parts_oracle(self) -> str:
        with self._lock:
            return self._stakeholders.spare_parts_oracle

    @property
    def hash_store(self):
        with self._lock:
            return self._hash_store

    def stakeholders(self) -> StakeholderSet:
        with self._lock:
            return self._stakeholders

    def holder_of(self, role: Role) -> str:
        with self._lock:
            return self._stakeholders.holder_of(role)

    def holds_role(self, identity: str, role: Role) -> bool:
        """Single-role comparison. Zero and non-string values never hold a role."""
        if not isinstance(identity, str) or is_zero_identity(identity):
            return False
        with self._lock:
            return normalize_identity(identity) == self._stakeholders.holder_of(role)

    def require_role(self, caller: str, role: Role, operation: str) -> None:
        """
        Raise Unauthorized unless caller currently holds role.

        Callers that need the check and their own mutation to be one
        atomic step must already hold self.lock.
        """
        with self._lock:
            holder = self._stakeholders.holder_of(role)
            candidate = (
                normalize_identity(caller) if isinstance(caller, str) else caller
            )
            raise_for_rejection(
                caller_holds_role_policy(holder, candidate, role, operation)
            )

    # ── role assignment ───────────────────────────────────────

    def setup_stakeholders(
        self,
        caller: str,
        maintenance_team: str,
        manufacturer: str,
        spare_part_supplier: str,
        hash_store: Any,
    ) -> StakeholderSet:
        """
        Assign the three business stakeholders and link the hash store.

        All four inputs are validated before any field changes. Calling
        again reassigns.
        """
        operation = "set up stakeholders"
        with self._lock:
            self.require_role(caller, Role.REGULATORY_AUTHORITY, operation)

            raise_for_rejection(
                string_identity_policy(maintenance_team, "maintenance_team", operation)
                or string_identity_policy(manufacturer, "manufacturer", operation)
                or string_identity_policy(
                    spare_part_supplier, "spare_part_supplier", operation,
                )
                or non_zero_identity_policy(maintenance_team, "maintenance_team", operation)
                or non_zero_identity_policy(manufacturer, "manufacturer", operation)
                or non_zero_identity_policy(
                    spare_part_supplier, "spare_part_supplier", operation,
                )
                or reference_present_policy(hash_store, "hash_store", operation)
            )

            self._stakeholders = StakeholderSet(
                regulatory_authority=self._stakeholders.regulatory_authority,
                maintenance_team=normalize_identity(maintenance_team),
                manufacturer=normalize_identity(manufacturer),
                spare_part_supplier=normalize_identity(spare_part_supplier),
                time_oracle=self._stakeholders.time_oracle,
                spare_parts_oracle=self._stakeholders.spare_parts_oracle,
            )
            self._hash_store = hash_store

            self._journal.record(
                REGISTRY_STAKEHOLDERS_REGISTERED_V1,
                actor=caller,
                payload=build_stakeholders_registered_payload(self._stakeholders),
            )
            logger.info(
                f"Stakeholders registered: maintenance_team="
                f"{self._stakeholders.maintenance_team}, manufacturer="
                f"{self._stakeholders.manufacturer}, spare_part_supplier="
                f"{self._stakeholders.spare_part_supplier}"
            )
            return self._stakeholders

    def register_time_oracle(self, caller: str, oracle: str) -> None:
        self._register_oracle(
            caller, oracle, Role.TIME_ORACLE, REGISTRY_TIME_ORACLE_REGISTERED_V1,
        )

    def register_spare_parts_oracle(self, caller: str, oracle: str) -> None:
        self._register_oracle(
            caller,
            oracle,
            Role.SPARE_PARTS_ORACLE,
            REGISTRY_SPARE_PARTS_ORACLE_REGISTERED_V1,
        )

    def _register_oracle(
        self, caller: str, oracle: str, role: Role, event_type: str,
    ) -> None:
        operation = f"register the {role.value.replace('_', ' ')}"
        with self._lock:
            self.require_role(caller, Role.REGULATORY_AUTHORITY, operation)
            raise_for_rejection(
                string_identity_policy(oracle, role.value, operation)
                or non_zero_identity_policy(oracle, role.value, operation)
            )

            oracle = normalize_identity(oracle)
            fields = self._stakeholders.to_dict()
            fields[role.value] = oracle
            self._stakeholders = StakeholderSet(**fields)

            self._journal.record(
                event_type,
                actor=caller,
                payload=build_oracle_registered_payload(oracle),
            )
            logger.info(f"{role.value} registered: {oracle}")

    # ── observability ─────────────────────────────────────────

    def check_authorization(self, caller: str, stakeholder: str) -> bool:
        """
        True iff stakeholder holds one of the four stakeholder roles.

        Informational only. No engine uses this as a gate, and oracles
        are never considered authorized here.
        """
        with self._lock:
            authorized = any(
                self.holds_role(stakeholder, role) for role in STAKEHOLDER_ROLES
            )
            self._journal.record(
                REGISTRY_AUTHORIZATION_CHECKED_V1,
                actor=caller,
                payload=build_authorization_checked_payload(
                    stakeholder, authorized,
                ),
            )
            return authorized

    # ── restore (snapshot support) ────────────────────────────

    def _restore(self, stakeholders: StakeholderSet, hash_store: Any) -> None:
        with self._lock:
            if stakeholders.regulatory_authority != self.regulatory_authority:
                raise InvalidArgument(
                    "Restored state must keep the creation-time "
                    "regulatory authority.",
                    "registry_restore",
                )
            self._stakeholders = stakeholders
            self._hash_store = hash_store


# ══════════════════════════════════════════════════════════════
# COMMAND HANDLER
# ══════════════════════════════════════════════════════════════

class RegistryCommandHandler:
    """
    Maps registry commands onto StakeholderRegistry calls.

    hash_store_lookup resolves the hash_store_id carried in a setup
    command to a live HashStore; an unknown id resolves to None and is
    rejected as an invalid argument.
    """

    def __init__(
        self,
        registry: StakeholderRegistry,
        hash_store_lookup: Callable[[Optional[str]], Any],
    ):
        self._registry = registry
        self._hash_store_lookup = hash_store_lookup

    def execute(self, command: Command) -> Any:
        payload = command.payload

        if command.command_type == REGISTRY_STAKEHOLDERS_SETUP_REQUEST:
            return self._registry.setup_stakeholders(
                command.caller,
                payload.get("maintenance_team"),
                payload.get("manufacturer"),
                payload.get("spare_part_supplier"),
                self._hash_store_lookup(payload.get("hash_store_id")),
            )

        if command.command_type == REGISTRY_TIME_ORACLE_REGISTER_REQUEST:
            return self._registry.register_time_oracle(
                command.caller, payload.get("oracle"),
            )

        if command.command_type == REGISTRY_SPARE_PARTS_ORACLE_REGISTER_REQUEST:
            return self._registry.register_spare_parts_oracle(
                command.caller, payload.get("oracle"),
            )

        if command.command_type == REGISTRY_AUTHORIZATION_CHECK_REQUEST:
            return self._registry.check_authorization(
                command.caller, payload.get("stakeholder"),
            )

        raise ValueError(
            f"Unsupported registry command type: {command.command_type}"
        )

    def register(self, command_bus) -> None:
        for command_type in sorted(REGISTRY_COMMAND_TYPES):
            command_bus.register_handler(command_type, self)
