"""
HGS Snapshots - Provider Protocol and In-Memory Provider
========================================================
A snapshot is a flat dict of string keys to string values. Providers
store and return it verbatim; they never interpret keys.
"""

from __future__ import annotations

import logging
from typing import Mapping, Protocol

logger = logging.getLogger("hgs.snapshots")


class SnapshotError(Exception):
    """Snapshot is missing fields, malformed, or not found."""
    pass


def validate_fields(fields: Mapping[str, str]) -> dict[str, str]:
    if not isinstance(fields, Mapping):
        raise SnapshotError(
            f"snapshot must be a mapping, got {type(fields).__name__}."
        )
    for key, value in fields.items():
        if not isinstance(key, str) or not key:
            raise SnapshotError("snapshot keys must be non-empty strings.")
        if not isinstance(value, str):
            raise SnapshotError(f"snapshot value for '{key}' must be a string.")
    return dict(fields)


def validate_equipment_id(equipment_id: str) -> str:
    if not isinstance(equipment_id, str) or not equipment_id.strip():
        raise SnapshotError("equipment_id must be a non-empty string.")
    return equipment_id


class SnapshotProvider(Protocol):
    def save(self, equipment_id: str, fields: Mapping[str, str]) -> None:
        ...

    def load(self, equipment_id: str) -> dict[str, str]:
        ...

    def exists(self, equipment_id: str) -> bool:
        ...


class InMemorySnapshotProvider:
    """
    Deterministic in-memory provider used for bootstrap/tests.
    """

    def __init__(self):
        self._snapshots: dict[str, dict[str, str]] = {}

    def save(self, equipment_id: str, fields: Mapping[str, str]) -> None:
        validate_equipment_id(equipment_id)
        self._snapshots[equipment_id] = validate_fields(fields)
        logger.info(
            f"Snapshot saved for {equipment_id} ({len(fields)} fields)"
        )

    def load(self, equipment_id: str) -> dict[str, str]:
        if equipment_id not in self._snapshots:
            raise SnapshotError(f"No snapshot for equipment '{equipment_id}'.")
        return dict(self._snapshots[equipment_id])

    def exists(self, equipment_id: str) -> bool:
        return equipment_id in self._snapshots
