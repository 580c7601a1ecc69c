"""
HGS Hash Store Engine — Request Commands
===========================================
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from core.commands.base import Command

HASH_STORE_DATA_HASH_SET_REQUEST = "hash_store.data_hash.set.request"
HASH_STORE_DATA_HASH_GET_REQUEST = "hash_store.data_hash.get.request"

HASH_STORE_COMMAND_TYPES = frozenset({
    HASH_STORE_DATA_HASH_SET_REQUEST,
    HASH_STORE_DATA_HASH_GET_REQUEST,
})


@dataclass(frozen=True)
class SetDataHashRequest:
    """Overwrite the stored telemetry hash. Any string, including ''."""
    data_hash: str

    def __post_init__(self):
        if not isinstance(self.data_hash, str):
            raise ValueError("data_hash must be a string.")

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
            command_type=HASH_STORE_DATA_HASH_SET_REQUEST,
            caller=caller,
            payload={"data_hash": self.data_hash},
            issued_at=issued_at,
            correlation_id=correlation_id,
            source_engine="hash_store",
        )


@dataclass(frozen=True)
class GetDataHashRequest:
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
            command_type=HASH_STORE_DATA_HASH_GET_REQUEST,
            caller=caller,
            payload={},
            issued_at=issued_at,
            correlation_id=correlation_id,
            source_engine="hash_store",
        )
