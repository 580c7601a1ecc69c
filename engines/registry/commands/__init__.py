"""
HGS Registry Engine — Request Commands
=========================================
Typed registry requests that convert into canonical Command objects.

Requests only check argument TYPES. Whether an identity is zero is
decided by the engine, after authorization.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.commands.base import Command


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

REGISTRY_STAKEHOLDERS_SETUP_REQUEST = "registry.stakeholders.setup.request"
REGISTRY_TIME_ORACLE_REGISTER_REQUEST = "registry.time_oracle.register.request"
REGISTRY_SPARE_PARTS_ORACLE_REGISTER_REQUEST = (
    "registry.spare_parts_oracle.register.request"
)
REGISTRY_AUTHORIZATION_CHECK_REQUEST = "registry.authorization.check.request"

REGISTRY_COMMAND_TYPES = frozenset({
    REGISTRY_STAKEHOLDERS_SETUP_REQUEST,
    REGISTRY_TIME_ORACLE_REGISTER_REQUEST,
    REGISTRY_SPARE_PARTS_ORACLE_REGISTER_REQUEST,
    REGISTRY_AUTHORIZATION_CHECK_REQUEST,
})


def _check_optional_str(value, name: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{name} must be a string identity.")


def _build(command_type: str, payload: dict, **kwargs) -> Command:
    return Command(
        command_id=kwargs["command_id"],
        command_type=command_type,
        caller=kwargs["caller"],
        payload=payload,
        issued_at=kwargs["issued_at"],
        correlation_id=kwargs["correlation_id"],
        source_engine="registry",
    )


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SetupStakeholdersRequest:
    """Assign maintenance team, manufacturer, supplier and hash store."""
    maintenance_team: Optional[str]
    manufacturer: Optional[str]
    spare_part_supplier: Optional[str]
    hash_store_id: Optional[str]

    def __post_init__(self):
        _check_optional_str(self.maintenance_team, "maintenance_team")
        _check_optional_str(self.manufacturer, "manufacturer")
        _check_optional_str(self.spare_part_supplier, "spare_part_supplier")
        _check_optional_str(self.hash_store_id, "hash_store_id")

    def to_command(
        self,
        *,
        caller: str,
        command_id: uuid.UUID,
        correlation_id: uuid.UUID,
        issued_at: datetime,
    ) -> Command:
        return _build(
            REGISTRY_STAKEHOLDERS_SETUP_REQUEST,
            {
                "maintenance_team": self.maintenance_team,
                "manufacturer": self.manufacturer,
                "spare_part_supplier": self.spare_part_supplier,
                "hash_store_id": self.hash_store_id,
            },
            caller=caller,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class RegisterTimeOracleRequest:
    oracle: Optional[str]

    def __post_init__(self):
        _check_optional_str(self.oracle, "oracle")

    def to_command(
        self,
        *,
        caller: str,
        command_id: uuid.UUID,
        correlation_id: uuid.UUID,
        issued_at: datetime,
    ) -> Command:
        return _build(
            REGISTRY_TIME_ORACLE_REGISTER_REQUEST,
            {"oracle": self.oracle},
            caller=caller,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class RegisterSparePartsOracleRequest:
    oracle: Optional[str]

    def __post_init__(self):
        _check_optional_str(self.oracle, "oracle")

    def to_command(
        self,
        *,
        caller: str,
        command_id: uuid.UUID,
        correlation_id: uuid.UUID,
        issued_at: datetime,
    ) -> Command:
        return _build(
            REGISTRY_SPARE_PARTS_ORACLE_REGISTER_REQUEST,
            {"oracle": self.oracle},
            caller=caller,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )


@dataclass(frozen=True)
class CheckAuthorizationRequest:
    """Ask whether an identity is one of the four stakeholders."""
    stakeholder: Optional[str]

    def __post_init__(self):
        _check_optional_str(self.stakeholder, "stakeholder")

    def to_command(
        self,
        *,
        caller: str,
        command_id: uuid.UUID,
        correlation_id: uuid.UUID,
        issued_at: datetime,
    ) -> Command:
        return _build(
            REGISTRY_AUTHORIZATION_CHECK_REQUEST,
            {"stakeholder": self.stakeholder},
            caller=caller,
            command_id=command_id,
            correlation_id=correlation_id,
            issued_at=issued_at,
        )
