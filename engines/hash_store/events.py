"""
HGS Hash Store Engine — Event Types and Payload Builders
===========================================================
Engine: Hash Store
"""

from __future__ import annotations

HASH_STORE_DATA_HASH_UPDATED_V1 = "hash_store.data_hash.updated.v1"

HASH_STORE_EVENT_TYPES = (
    HASH_STORE_DATA_HASH_UPDATED_V1,
)


def register_hash_store_event_types(journal) -> None:
    journal.register_event_types(HASH_STORE_EVENT_TYPES)


def build_data_hash_updated_payload(
    store_id: str, data_hash: str, previous_hash: str,
) -> dict:
    return {
        "store_id": store_id,
        "data_hash": data_hash,
        "previous_hash": previous_hash,
    }
