"""
HGS Spare Parts Engine — Request Commands
===========================================
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from core.commands.base import Command

SPARE_PARTS_STOCK_CHECK_REQUEST = "spare_parts.stock.check.request"

SPARE_PARTS_COMMAND_TYPES = frozenset({
    SPARE_PARTS_STOCK_CHECK_REQUEST,
})


@dataclass(frozen=True)
class CheckAndDispatchRequest:
    """Oracle trigger: replenish if stock is below the critical level."""

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
            command_type=SPARE_PARTS_STOCK_CHECK_REQUEST,
            caller=caller,
            payload={},
            issued_at=issued_at,
            correlation_id=correlation_id,
            source_engine="spare_parts",
        )
