"""
HGS Equipment — Aggregate Root
=================================
One GovernedEquipment per physical piece of hydraulic equipment.

Owns:
- the single re-entrant lock every component serializes on
- the append-only event journal and its subscriber registry
- the registry, hash store, maintenance workflow and spare parts
  inventory, wired to each other by reference
- the command bus exposing every operation as request/response

No process-wide state: build one instance and pass it around.
"""

from __future__ import annotations

import logging
import uuid
from threading import RLock
from typing import Callable, Mapping, Optional

from core.commands.base import Command
from core.commands.bus import CommandBus
from core.commands.outcomes import CommandOutcome
from core.events.journal import EventJournal
from core.events.registry import SubscriberRegistry
from core.identity import is_zero_identity, normalize_identity
from core.snapshots.provider import SnapshotError, SnapshotProvider, validate_fields
from core.time.clock import Clock, SystemClock
from engines.hash_store.services import HashStoreCommandHandler, HashStoreService
from engines.maintenance.services import (
    MaintenanceCommandHandler,
    MaintenanceRecord,
    MaintenanceWorkflow,
)
from engines.registry.roles import Role
from engines.registry.services import (
    RegistryCommandHandler,
    StakeholderRegistry,
    StakeholderSet,
)
from engines.spare_parts.services import (
    INITIAL_STOCK,
    SparePartsCommandHandler,
    SparePartsInventory,
)

logger = logging.getLogger("hgs.equipment")


# ══════════════════════════════════════════════════════════════
# SNAPSHOT KEYS
# ══════════════════════════════════════════════════════════════

KEY_EQUIPMENT_ID = "equipment.id"
KEY_HASH_STORE_ID = "hash_store.store_id"
KEY_DATA_HASH = "hash_store.data_hash"
KEY_HASH_STORE_LINKED = "registry.hash_store_linked"
KEY_DOCUMENT_HASH = "maintenance.document_hash"
KEY_PERFORMED_BY = "maintenance.performed_by"
KEY_SPARE_PARTS_COUNT = "spare_parts.count"


def _role_key(role: Role) -> str:
    return f"registry.{role.value}"


SNAPSHOT_KEYS = frozenset(
    {
        KEY_EQUIPMENT_ID,
        KEY_HASH_STORE_ID,
        KEY_DATA_HASH,
        KEY_HASH_STORE_LINKED,
        KEY_DOCUMENT_HASH,
        KEY_PERFORMED_BY,
        KEY_SPARE_PARTS_COUNT,
    }
    | {_role_key(role) for role in Role}
)


# ══════════════════════════════════════════════════════════════
# AGGREGATE
# ══════════════════════════════════════════════════════════════

class GovernedEquipment:
    """
    Usage:
        equipment = GovernedEquipment(regulatory_authority="0xA")
        equipment.registry.setup_stakeholders(
            "0xA", "0xM", "0xMF", "0xS", equipment.hash_store,
        )
        equipment.registry.register_time_oracle("0xA", "0xT")
        equipment.maintenance.announce("0xT")
    """

    def __init__(
        self,
        regulatory_authority: str,
        *,
        equipment_id: Optional[str] = None,
        hash_store_id: Optional[str] = None,
        clock: Optional[Clock] = None,
        subscribers: Optional[SubscriberRegistry] = None,
    ):
        self._equipment_id = equipment_id or str(uuid.uuid4())
        self._clock = clock if clock is not None else SystemClock()
        self._lock = RLock()
        self._journal = EventJournal(clock=self._clock, subscribers=subscribers)

        self._registry = StakeholderRegistry(
            regulatory_authority, journal=self._journal, lock=self._lock,
        )
        self._hash_store = HashStoreService(
            store_id=hash_store_id, journal=self._journal, lock=self._lock,
        )
        self._maintenance = MaintenanceWorkflow(self._registry)
        self._spare_parts = SparePartsInventory(self._registry)

        self._command_bus = CommandBus(clock=self._clock)
        RegistryCommandHandler(
            self._registry, self._resolve_hash_store,
        ).register(self._command_bus)
        HashStoreCommandHandler(self._hash_store).register(self._command_bus)
        MaintenanceCommandHandler(self._maintenance).register(self._command_bus)
        SparePartsCommandHandler(self._spare_parts).register(self._command_bus)

        logger.info(f"Governed equipment {self._equipment_id} created")

    # ── components ────────────────────────────────────────────

    @property
    def equipment_id(self) -> str:
        return self._equipment_id

    @property
    def registry(self) -> StakeholderRegistry:
        return self._registry

    @property
    def hash_store(self) -> HashStoreService:
        return self._hash_store

    @property
    def maintenance(self) -> MaintenanceWorkflow:
        return self._maintenance

    @property
    def spare_parts(self) -> SparePartsInventory:
        return self._spare_parts

    @property
    def journal(self) -> EventJournal:
        return self._journal

    @property
    def command_bus(self) -> CommandBus:
        return self._command_bus

    @property
    def lock(self) -> RLock:
        return self._lock

    # ── request/response ──────────────────────────────────────

    def handle(self, command: Command) -> CommandOutcome:
        return self._command_bus.handle(command)

    def subscribe(
        self,
        event_type: str,
        handler: Callable,
        subscriber: str,
    ) -> None:
        self._journal.subscribers.register_subscriber(
            event_type, handler, subscriber,
        )

    def _resolve_hash_store(self, hash_store_id: Optional[str]):
        if hash_store_id and hash_store_id == self._hash_store.store_id:
            return self._hash_store
        return None

    # ══════════════════════════════════════════════════════════
    # SNAPSHOTS
    # ══════════════════════════════════════════════════════════

    def snapshot(self) -> dict[str, str]:
        """Every persisted field as a flat key/value dict."""
        with self._lock:
            stakeholders = self._registry.stakeholders()
            document_hash, performed_by = self._maintenance._snapshot().as_tuple()

            fields = {
                KEY_EQUIPMENT_ID: self._equipment_id,
                KEY_HASH_STORE_ID: self._hash_store.store_id,
                KEY_DATA_HASH: self._hash_store.get_hash(),
                KEY_HASH_STORE_LINKED: (
                    "1" if self._registry.hash_store is self._hash_store else "0"
                ),
                KEY_DOCUMENT_HASH: document_hash,
                KEY_PERFORMED_BY: performed_by,
                KEY_SPARE_PARTS_COUNT: str(self._spare_parts.count),
            }
            for role in Role:
                fields[_role_key(role)] = stakeholders.holder_of(role)
            return fields

    @classmethod
    def from_snapshot(
        cls,
        fields: Mapping[str, str],
        *,
        clock: Optional[Clock] = None,
        subscribers: Optional[SubscriberRegistry] = None,
    ) -> "GovernedEquipment":
        """
        Rebuild an instance from snapshot() output.

        The rebuilt journal starts empty; events are not part of the
        persisted layout.

        Raises:
            SnapshotError: missing keys or malformed values.
        """
        fields = validate_fields(fields)

        missing = SNAPSHOT_KEYS - set(fields)
        if missing:
            raise SnapshotError(f"snapshot is missing keys: {sorted(missing)}")

        authority = fields[_role_key(Role.REGULATORY_AUTHORITY)]
        if is_zero_identity(authority):
            raise SnapshotError("snapshot regulatory authority must not be zero.")

        try:
            count = int(fields[KEY_SPARE_PARTS_COUNT])
        except ValueError:
            raise SnapshotError(
                f"spare parts count '{fields[KEY_SPARE_PARTS_COUNT]}' "
                f"is not an integer."
            )
        if count < INITIAL_STOCK:
            raise SnapshotError(
                f"spare parts count {count} is below the initial stock "
                f"{INITIAL_STOCK}; count never decreases."
            )

        if fields[KEY_HASH_STORE_LINKED] not in ("0", "1"):
            raise SnapshotError(f"{KEY_HASH_STORE_LINKED} must be '0' or '1'.")

        equipment = cls(
            authority,
            equipment_id=fields[KEY_EQUIPMENT_ID],
            hash_store_id=fields[KEY_HASH_STORE_ID],
            clock=clock,
            subscribers=subscribers,
        )

        stakeholders = StakeholderSet(**{
            role.value: normalize_identity(fields[_role_key(role)])
            for role in Role
        })
        linked = fields[KEY_HASH_STORE_LINKED] == "1"

        with equipment.lock:
            equipment._registry._restore(
                stakeholders, equipment._hash_store if linked else None,
            )
            equipment._hash_store._restore(fields[KEY_DATA_HASH])
            equipment._maintenance._restore(MaintenanceRecord(
                document_hash=fields[KEY_DOCUMENT_HASH],
                performed_by=normalize_identity(fields[KEY_PERFORMED_BY]),
            ))
            equipment._spare_parts._restore(count)

        logger.info(f"Governed equipment {equipment.equipment_id} restored")
        return equipment

    def save(self, provider: SnapshotProvider) -> None:
        provider.save(self._equipment_id, self.snapshot())

    @classmethod
    def load(
        cls,
        provider: SnapshotProvider,
        equipment_id: str,
        **kwargs,
    ) -> "GovernedEquipment":
        return cls.from_snapshot(provider.load(equipment_id), **kwargs)
