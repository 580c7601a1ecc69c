"""
HGS Snapshots - DB-backed Provider
==================================
Stores each snapshot field as one EquipmentStateField row.
"""

from __future__ import annotations

import logging
from typing import Mapping

from django.db import transaction

from core.snapshots.provider import (
    SnapshotError,
    validate_equipment_id,
    validate_fields,
)

logger = logging.getLogger("hgs.snapshots")


class DbSnapshotProvider:
    def save(self, equipment_id: str, fields: Mapping[str, str]) -> None:
        """Replace every stored field for equipment_id in one transaction."""
        validate_equipment_id(equipment_id)
        fields = validate_fields(fields)

        from core.state_store.models import EquipmentStateField

        with transaction.atomic():
            EquipmentStateField.objects.filter(
                equipment_id=equipment_id,
            ).delete()
            EquipmentStateField.objects.bulk_create([
                EquipmentStateField(
                    equipment_id=equipment_id,
                    key=key,
                    value=value,
                )
                for key, value in sorted(fields.items())
            ])

        logger.info(
            f"Snapshot saved for {equipment_id} ({len(fields)} fields)"
        )

    def load(self, equipment_id: str) -> dict[str, str]:
        from core.state_store.models import EquipmentStateField

        rows = EquipmentStateField.objects.filter(
            equipment_id=equipment_id,
        ).order_by("key")
        fields = {row.key: row.value for row in rows}
        if not fields:
            raise SnapshotError(f"No snapshot for equipment '{equipment_id}'.")
        return fields

    def exists(self, equipment_id: str) -> bool:
        from core.state_store.models import EquipmentStateField

        return EquipmentStateField.objects.filter(
            equipment_id=equipment_id,
        ).exists()
