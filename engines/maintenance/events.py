"""
HGS Maintenance Engine — Event Types and Payload Builders
============================================================
Engine: Maintenance

The workflow has no stored phase. Each event records that one gated
call succeeded; ordering is caller discipline.
"""

from __future__ import annotations


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

MAINTENANCE_WORK_ANNOUNCED_V1 = "maintenance.work.announced.v1"
MAINTENANCE_WORK_PERFORMED_V1 = "maintenance.work.performed.v1"
MAINTENANCE_WORK_COMPLETED_V1 = "maintenance.work.completed.v1"
MAINTENANCE_FAILURE_DETECTED_V1 = "maintenance.failure.detected.v1"
MAINTENANCE_ACCOUNTABILITY_IDENTIFIED_V1 = (
    "maintenance.accountability.identified.v1"
)

MAINTENANCE_EVENT_TYPES = (
    MAINTENANCE_WORK_ANNOUNCED_V1,
    MAINTENANCE_WORK_PERFORMED_V1,
    MAINTENANCE_WORK_COMPLETED_V1,
    MAINTENANCE_FAILURE_DETECTED_V1,
    MAINTENANCE_ACCOUNTABILITY_IDENTIFIED_V1,
)


def register_maintenance_event_types(journal) -> None:
    journal.register_event_types(MAINTENANCE_EVENT_TYPES)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_work_announced_payload(announced_by: str) -> dict:
    return {"announced_by": announced_by}


def build_work_performed_payload(performed_by: str) -> dict:
    return {"performed_by": performed_by}


def build_work_completed_payload(record) -> dict:
    return {
        "document_hash": record.document_hash,
        "performed_by": record.performed_by,
    }


def build_failure_detected_payload(reviewed_by: str) -> dict:
    return {"reviewed_by": reviewed_by}


def build_accountability_identified_payload(party: str) -> dict:
    return {"party": party}
