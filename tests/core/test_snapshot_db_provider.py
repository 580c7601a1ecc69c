from __future__ import annotations

import pytest

from core.snapshots.db_provider import DbSnapshotProvider
from core.snapshots.provider import SnapshotError

pytestmark = pytest.mark.django_db(transaction=True)


EQUIPMENT_ID = "press-07"


def test_db_snapshot_provider_round_trips_fields() -> None:
    provider = DbSnapshotProvider()
    fields = {
        "equipment.id": EQUIPMENT_ID,
        "hash_store.data_hash": "QmTelemetry",
        "spare_parts.count": "15",
        "maintenance.document_hash": "",
    }

    provider.save(EQUIPMENT_ID, fields)

    assert provider.exists(EQUIPMENT_ID) is True
    assert provider.load(EQUIPMENT_ID) == fields


def test_db_snapshot_provider_replaces_previous_rows() -> None:
    from core.state_store.models import EquipmentStateField

    provider = DbSnapshotProvider()
    provider.save(EQUIPMENT_ID, {"spare_parts.count": "5", "stale.key": "x"})
    provider.save(EQUIPMENT_ID, {"spare_parts.count": "15"})

    assert provider.load(EQUIPMENT_ID) == {"spare_parts.count": "15"}
    assert EquipmentStateField.objects.filter(
        equipment_id=EQUIPMENT_ID,
    ).count() == 1


def test_db_snapshot_provider_isolates_equipment() -> None:
    provider = DbSnapshotProvider()
    provider.save("press-01", {"spare_parts.count": "5"})
    provider.save("press-02", {"spare_parts.count": "25"})

    assert provider.load("press-01") == {"spare_parts.count": "5"}
    assert provider.load("press-02") == {"spare_parts.count": "25"}


def test_db_snapshot_provider_missing_snapshot() -> None:
    provider = DbSnapshotProvider()

    assert provider.exists("unknown") is False
    with pytest.raises(SnapshotError, match="No snapshot"):
        provider.load("unknown")


def test_db_snapshot_provider_rejects_bad_input() -> None:
    provider = DbSnapshotProvider()

    with pytest.raises(SnapshotError):
        provider.save("", {"spare_parts.count": "5"})
    with pytest.raises(SnapshotError):
        provider.save(EQUIPMENT_ID, {"spare_parts.count": 5})
