"""
HGS Registry Engine — Roles
==============================
The six named roles a governed equipment instance knows about.

Each role is held by at most one identity at a time. The value of each
member is the registry field that stores the holder.
"""

from __future__ import annotations

from enum import Enum


class Role(Enum):
    REGULATORY_AUTHORITY = "regulatory_authority"
    MAINTENANCE_TEAM = "maintenance_team"
    MANUFACTURER = "manufacturer"
    SPARE_PART_SUPPLIER = "spare_part_supplier"
    TIME_ORACLE = "time_oracle"
    SPARE_PARTS_ORACLE = "spare_parts_oracle"


# Stakeholders for check_authorization. Oracles are deliberately absent.
STAKEHOLDER_ROLES = (
    Role.MAINTENANCE_TEAM,
    Role.MANUFACTURER,
    Role.SPARE_PART_SUPPLIER,
    Role.REGULATORY_AUTHORITY,
)
