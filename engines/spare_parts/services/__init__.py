"""
HGS Spare Parts Engine — Application Service
===============================================
Threshold-triggered replenishment of the equipment's spare parts.

RULES:
- count starts at INITIAL_STOCK
- CRITICAL_LEVEL is fixed
- count only ever grows, by DISPATCH_QUANTITY, and only from below
  CRITICAL_LEVEL
- Only the spare parts oracle may trigger a check
"""

from __future__ import annotations

import logging
from typing import Any

from core.commands.base import Command
from core.commands.errors import raise_for_rejection
from engines.registry.policies import reference_present_policy
from engines.registry.roles import Role
from engines.registry.services import StakeholderRegistry
from engines.spare_parts.commands import (
    SPARE_PARTS_COMMAND_TYPES,
    SPARE_PARTS_STOCK_CHECK_REQUEST,
)
from engines.spare_parts.events import (
    SPARE_PARTS_STOCK_DISPATCHED_V1,
    build_stock_dispatched_payload,
    register_spare_parts_event_types,
)

logger = logging.getLogger("hgs.spare_parts")

INITIAL_STOCK = 5
CRITICAL_LEVEL = 10
DISPATCH_QUANTITY = 10


class SparePartsInventory:
    def __init__(self, registry: StakeholderRegistry):
        raise_for_rejection(
            reference_present_policy(
                registry, "registry", "create a spare parts inventory",
            )
        )
        self._registry = registry
        self._lock = registry.lock
        self._journal = registry.journal
        self._count = INITIAL_STOCK

        register_spare_parts_event_types(self._journal)

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def critical_level(self) -> int:
        return CRITICAL_LEVEL

    @property
    def registry(self) -> StakeholderRegistry:
        return self._registry

    def check_and_dispatch(self, caller: str) -> bool:
        """
        Replenish when below the critical level.

        Returns True when parts were dispatched, False when stock was
        already sufficient (no state change, no event).
        """
        with self._lock:
            self._registry.require_role(
                caller, Role.SPARE_PARTS_ORACLE, "check spare parts",
            )

            if self._count >= CRITICAL_LEVEL:
                logger.debug(
                    f"Spare parts sufficient ({self._count} >= {CRITICAL_LEVEL})"
                )
                return False

            previous = self._count
            self._count = previous + DISPATCH_QUANTITY
            self._journal.record(
                SPARE_PARTS_STOCK_DISPATCHED_V1,
                actor=caller,
                payload=build_stock_dispatched_payload(
                    DISPATCH_QUANTITY, previous, self._count, CRITICAL_LEVEL,
                ),
            )
            count = self._count

        logger.info(
            f"Spare parts dispatched: {DISPATCH_QUANTITY} "
            f"({previous} → {count})"
        )
        return True

    def _restore(self, count: int) -> None:
        with self._lock:
            self._count = count


class SparePartsCommandHandler:
    def __init__(self, inventory: SparePartsInventory):
        self._inventory = inventory

    def execute(self, command: Command) -> Any:
        if command.command_type == SPARE_PARTS_STOCK_CHECK_REQUEST:
            return self._inventory.check_and_dispatch(command.caller)

        raise ValueError(
            f"Unsupported spare parts command type: {command.command_type}"
        )

    def register(self, command_bus) -> None:
        for command_type in sorted(SPARE_PARTS_COMMAND_TYPES):
            command_bus.register_handler(command_type, self)
