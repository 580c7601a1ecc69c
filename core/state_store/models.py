"""
HGS State Store - Key/Value Field Model
=======================================
One row per (equipment_id, key). No other persisted layout exists.
"""

from __future__ import annotations

from django.db import models


class EquipmentStateField(models.Model):
    equipment_id = models.CharField(max_length=128)
    key = models.CharField(max_length=128)
    value = models.TextField(blank=True, default="")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "hgs_equipment_state_fields"
        ordering = ["equipment_id", "key"]
        constraints = [
            models.UniqueConstraint(
                fields=["equipment_id", "key"],
                name="uq_equipment_state_field",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.equipment_id}:{self.key}"
