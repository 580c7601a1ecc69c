"""
HGS Hash Store Engine — Application Service
==============================================
Holds the content hash of the latest off-chain telemetry bundle.

Anyone may overwrite it. Last write wins. The hash is never
interpreted or verified here.
"""

from __future__ import annotations

import logging
import uuid
from threading import RLock
from typing import Any, Optional

from core.commands.base import Command
from core.commands.errors import InvalidArgument
from core.events.journal import EventJournal
from engines.hash_store.commands import (
    HASH_STORE_COMMAND_TYPES,
    HASH_STORE_DATA_HASH_GET_REQUEST,
    HASH_STORE_DATA_HASH_SET_REQUEST,
)
from engines.hash_store.events import (
    HASH_STORE_DATA_HASH_UPDATED_V1,
    build_data_hash_updated_payload,
    register_hash_store_event_types,
)

logger = logging.getLogger("hgs.hash_store")


class HashStoreService:
    def __init__(
        self,
        *,
        store_id: Optional[str] = None,
        journal: Optional[EventJournal] = None,
        lock: Optional[RLock] = None,
    ):
        self._store_id = store_id or str(uuid.uuid4())
        self._journal = journal if journal is not None else EventJournal()
        self._lock = lock if lock is not None else RLock()
        self._data_hash = ""

        register_hash_store_event_types(self._journal)

    @property
    def store_id(self) -> str:
        return self._store_id

    def set_hash(self, caller: str, new_hash: str) -> None:
        if not isinstance(new_hash, str):
            raise InvalidArgument(
                f"data_hash must be a string, got {type(new_hash).__name__}.",
                "data_hash_type_policy",
            )

        with self._lock:
            previous = self._data_hash
            self._data_hash = new_hash
            self._journal.record(
                HASH_STORE_DATA_HASH_UPDATED_V1,
                actor=caller,
                payload=build_data_hash_updated_payload(
                    self._store_id, new_hash, previous,
                ),
            )

        logger.info(f"Data hash updated by {caller}: {new_hash!r}")

    def get_hash(self) -> str:
        with self._lock:
            return self._data_hash

    def _restore(self, data_hash: str) -> None:
        with self._lock:
            self._data_hash = data_hash


class HashStoreCommandHandler:
    def __init__(self, service: HashStoreService):
        self._service = service

    def execute(self, command: Command) -> Any:
        if command.command_type == HASH_STORE_DATA_HASH_SET_REQUEST:
            return self._service.set_hash(
                command.caller, command.payload.get("data_hash"),
            )

        if command.command_type == HASH_STORE_DATA_HASH_GET_REQUEST:
            return self._service.get_hash()

        raise ValueError(
            f"Unsupported hash store command type: {command.command_type}"
        )

    def register(self, command_bus) -> None:
        for command_type in sorted(HASH_STORE_COMMAND_TYPES):
            command_bus.register_handler(command_type, self)
