"""
HGS Registry Engine — Event Types and Payload Builders
=========================================================
Engine: Registry

Registry builds payload only. Journal and dispatch remain external.
"""

from __future__ import annotations


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

REGISTRY_STAKEHOLDERS_REGISTERED_V1 = "registry.stakeholders.registered.v1"
REGISTRY_TIME_ORACLE_REGISTERED_V1 = "registry.time_oracle.registered.v1"
REGISTRY_SPARE_PARTS_ORACLE_REGISTERED_V1 = (
    "registry.spare_parts_oracle.registered.v1"
)
REGISTRY_AUTHORIZATION_CHECKED_V1 = "registry.authorization.checked.v1"

REGISTRY_EVENT_TYPES = (
    REGISTRY_STAKEHOLDERS_REGISTERED_V1,
    REGISTRY_TIME_ORACLE_REGISTERED_V1,
    REGISTRY_SPARE_PARTS_ORACLE_REGISTERED_V1,
    REGISTRY_AUTHORIZATION_CHECKED_V1,
)


def register_registry_event_types(journal) -> None:
    journal.register_event_types(REGISTRY_EVENT_TYPES)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_stakeholders_registered_payload(stakeholders) -> dict:
    return {
        "regulatory_authority": stakeholders.regulatory_authority,
        "maintenance_team": stakeholders.maintenance_team,
        "manufacturer": stakeholders.manufacturer,
        "spare_part_supplier": stakeholders.spare_part_supplier,
    }


def build_oracle_registered_payload(oracle: str) -> dict:
    return {"oracle": oracle}


def build_authorization_checked_payload(
    stakeholder: str, authorized: bool,
) -> dict:
    return {"stakeholder": stakeholder, "authorized": authorized}
