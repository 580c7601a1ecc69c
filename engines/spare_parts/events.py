"""
HGS Spare Parts Engine — Event Types and Payload Builders
============================================================
Engine: Spare Parts

SPARE_PARTS_STOCK_NEEDED_V1 is part of the vocabulary but no operation
emits it.
"""

from __future__ import annotations

SPARE_PARTS_STOCK_DISPATCHED_V1 = "spare_parts.stock.dispatched.v1"
SPARE_PARTS_STOCK_NEEDED_V1 = "spare_parts.stock.needed.v1"

SPARE_PARTS_EVENT_TYPES = (
    SPARE_PARTS_STOCK_DISPATCHED_V1,
    SPARE_PARTS_STOCK_NEEDED_V1,
)


def register_spare_parts_event_types(journal) -> None:
    journal.register_event_types(SPARE_PARTS_EVENT_TYPES)


def build_stock_dispatched_payload(
    quantity: int, previous_count: int, count: int, critical_level: int,
) -> dict:
    return {
        "quantity": quantity,
        "previous_count": previous_count,
        "count": count,
        "critical_level": critical_level,
    }
