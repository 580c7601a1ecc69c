"""HGS Registry Engine tests."""

import uuid
from datetime import datetime, timezone

import pytest

from core.commands.errors import InvalidArgument, Unauthorized
from core.identity import ZERO_IDENTITY
from engines.registry.roles import Role

AUTHORITY = "0xA11CE"
TEAM = "0xTEAM"
MAKER = "0xMAKER"
SUPPLIER = "0xSUPPLY"
TIME_ORACLE = "0xCLOCK"
PARTS_ORACLE = "0xPARTS"
NOW = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def kw(caller=AUTHORITY):
    return dict(
        caller=caller,
        command_id=uuid.uuid4(),
        correlation_id=uuid.uuid4(),
        issued_at=NOW,
    )


class StubHashStore:
    store_id = "store-1"


def _registry():
    from engines.registry.services import StakeholderRegistry

    return StakeholderRegistry(AUTHORITY)


def _setup(registry, hash_store=None):
    return registry.setup_stakeholders(
        AUTHORITY, TEAM, MAKER, SUPPLIER, hash_store or StubHashStore(),
    )


class TestRegistryCreation:
    def test_creator_becomes_authority(self):
        registry = _registry()
        assert registry.regulatory_authority == AUTHORITY
        assert registry.maintenance_team == ZERO_IDENTITY
        assert registry.time_oracle == ZERO_IDENTITY
        assert registry.hash_store is None

    @pytest.mark.parametrize("creator", [None, "", ZERO_IDENTITY])
    def test_zero_creator_rejected(self, creator):
        from engines.registry.services import StakeholderRegistry

        with pytest.raises(InvalidArgument):
            StakeholderRegistry(creator)


class TestSetupStakeholders:
    def test_assigns_all_four(self):
        registry = _registry()
        store = StubHashStore()

        stakeholders = _setup(registry, store)

        assert stakeholders.maintenance_team == TEAM
        assert stakeholders.manufacturer == MAKER
        assert stakeholders.spare_part_supplier == SUPPLIER
        assert registry.hash_store is store

    def test_emits_registered_event(self):
        registry = _registry()
        _setup(registry)

        event = registry.journal.last("registry.stakeholders.registered.v1")
        assert event.actor == AUTHORITY
        assert event.payload == {
            "regulatory_authority": AUTHORITY,
            "maintenance_team": TEAM,
            "manufacturer": MAKER,
            "spare_part_supplier": SUPPLIER,
        }

    def test_non_authority_rejected(self):
        registry = _registry()
        with pytest.raises(Unauthorized):
            registry.setup_stakeholders(TEAM, TEAM, MAKER, SUPPLIER, StubHashStore())
        assert registry.maintenance_team == ZERO_IDENTITY
        assert len(registry.journal) == 0

    def test_unauthorized_checked_before_arguments(self):
        registry = _registry()
        with pytest.raises(Unauthorized):
            registry.setup_stakeholders(TEAM, ZERO_IDENTITY, None, "", None)

    @pytest.mark.parametrize("position", range(4))
    def test_zero_input_leaves_fields_unchanged(self, position):
        registry = _registry()
        _setup(registry)
        args = ["0xT2", "0xM2", "0xS2", StubHashStore()]
        args[position] = None if position == 3 else ZERO_IDENTITY

        with pytest.raises(InvalidArgument):
            registry.setup_stakeholders(AUTHORITY, *args)

        assert registry.maintenance_team == TEAM
        assert registry.manufacturer == MAKER
        assert registry.spare_part_supplier == SUPPLIER
        assert registry.journal.count("registry.stakeholders.registered.v1") == 1

    def test_repeat_call_reassigns(self):
        registry = _registry()
        _setup(registry)
        registry.setup_stakeholders(AUTHORITY, "0xT2", MAKER, SUPPLIER, StubHashStore())
        assert registry.maintenance_team == "0xT2"

    def test_authority_never_changes(self):
        registry = _registry()
        registry.setup_stakeholders(AUTHORITY, AUTHORITY, MAKER, SUPPLIER, StubHashStore())
        assert registry.regulatory_authority == AUTHORITY
        assert registry.maintenance_team == AUTHORITY


class TestOracleRegistration:
    def test_register_time_oracle(self):
        registry = _registry()
        registry.register_time_oracle(AUTHORITY, TIME_ORACLE)
        assert registry.time_oracle == TIME_ORACLE
        event = registry.journal.last("registry.time_oracle.registered.v1")
        assert event.payload == {"oracle": TIME_ORACLE}

    def test_register_spare_parts_oracle(self):
        registry = _registry()
        registry.register_spare_parts_oracle(AUTHORITY, PARTS_ORACLE)
        assert registry.spare_parts_oracle == PARTS_ORACLE
        assert registry.journal.count(
            "registry.spare_parts_oracle.registered.v1"
        ) == 1

    def test_non_authority_rejected(self):
        registry = _registry()
        with pytest.raises(Unauthorized):
            registry.register_time_oracle(TIME_ORACLE, TIME_ORACLE)
        assert registry.time_oracle == ZERO_IDENTITY

    def test_zero_oracle_rejected(self):
        registry = _registry()
        registry.register_spare_parts_oracle(AUTHORITY, PARTS_ORACLE)
        with pytest.raises(InvalidArgument):
            registry.register_spare_parts_oracle(AUTHORITY, ZERO_IDENTITY)
        assert registry.spare_parts_oracle == PARTS_ORACLE

    def test_oracles_keep_stakeholders(self):
        registry = _registry()
        _setup(registry)
        registry.register_time_oracle(AUTHORITY, TIME_ORACLE)
        assert registry.maintenance_team == TEAM


class TestRoleChecks:
    def test_holds_role(self):
        registry = _registry()
        _setup(registry)
        assert registry.holds_role(TEAM, Role.MAINTENANCE_TEAM)
        assert registry.holds_role(f"  {TEAM} ", Role.MAINTENANCE_TEAM)
        assert not registry.holds_role(MAKER, Role.MAINTENANCE_TEAM)

    def test_zero_never_holds_unassigned_role(self):
        registry = _registry()
        assert not registry.holds_role(ZERO_IDENTITY, Role.TIME_ORACLE)
        with pytest.raises(Unauthorized):
            registry.require_role(ZERO_IDENTITY, Role.TIME_ORACLE, "announce")

    def test_require_role_message(self):
        registry = _registry()
        with pytest.raises(Unauthorized, match="time oracle") as exc_info:
            registry.require_role("0xB0B", Role.TIME_ORACLE, "announce maintenance")
        assert exc_info.value.reason.policy_name == "caller_holds_role_policy"


class TestCheckAuthorization:
    @pytest.mark.parametrize("identity", [AUTHORITY, TEAM, MAKER, SUPPLIER])
    def test_stakeholders_authorized(self, identity):
        registry = _registry()
        _setup(registry)
        assert registry.check_authorization(AUTHORITY, identity) is True

    @pytest.mark.parametrize("identity", ["0xB0B", ZERO_IDENTITY, None, TIME_ORACLE])
    def test_others_not_authorized(self, identity):
        registry = _registry()
        _setup(registry)
        registry.register_time_oracle(AUTHORITY, TIME_ORACLE)
        assert registry.check_authorization(AUTHORITY, identity) is False

    def test_emits_event_without_state_change(self):
        registry = _registry()
        before = registry.stakeholders()
        registry.check_authorization("0xB0B", AUTHORITY)

        event = registry.journal.last("registry.authorization.checked.v1")
        assert event.actor == "0xB0B"
        assert event.payload == {"stakeholder": AUTHORITY, "authorized": True}
        assert registry.stakeholders() == before


class TestRegistryCommands:
    def test_setup_request_to_command(self):
        from engines.registry.commands import SetupStakeholdersRequest

        cmd = SetupStakeholdersRequest(
            maintenance_team=TEAM,
            manufacturer=MAKER,
            spare_part_supplier=SUPPLIER,
            hash_store_id="store-1",
        ).to_command(**kw())
        assert cmd.command_type == "registry.stakeholders.setup.request"
        assert cmd.source_engine == "registry"
        assert cmd.payload["hash_store_id"] == "store-1"

    def test_request_rejects_non_string(self):
        from engines.registry.commands import RegisterTimeOracleRequest

        with pytest.raises(ValueError, match="string identity"):
            RegisterTimeOracleRequest(oracle=42)

    def test_handler_routes_through_bus(self):
        from core.commands.bus import CommandBus
        from engines.registry.commands import (
            CheckAuthorizationRequest,
            SetupStakeholdersRequest,
        )
        from engines.registry.services import RegistryCommandHandler

        registry = _registry()
        store = StubHashStore()
        bus = CommandBus()
        RegistryCommandHandler(
            registry, lambda store_id: store if store_id == "store-1" else None,
        ).register(bus)

        result = bus.handle(SetupStakeholdersRequest(
            maintenance_team=TEAM,
            manufacturer=MAKER,
            spare_part_supplier=SUPPLIER,
            hash_store_id="store-1",
        ).to_command(**kw()))
        assert result.is_accepted
        assert registry.hash_store is store

        unknown = bus.handle(SetupStakeholdersRequest(
            maintenance_team=TEAM,
            manufacturer=MAKER,
            spare_part_supplier=SUPPLIER,
            hash_store_id="store-9",
        ).to_command(**kw()))
        assert unknown.is_rejected
        assert unknown.reason.code == "INVALID_ARGUMENT"

        check = bus.handle(
            CheckAuthorizationRequest(stakeholder=MAKER).to_command(**kw(TEAM))
        )
        assert check.result is True



class TestSharedInfrastructure:
    def test_injected_empty_journal_and_lock_are_used(self):
        from threading import RLock

        from core.events.journal import EventJournal
        from engines.registry.services import StakeholderRegistry

        journal = EventJournal()
        lock = RLock()
        registry = StakeholderRegistry(AUTHORITY, journal=journal, lock=lock)

        assert registry.journal is journal
        assert registry.lock is lock
        registry.register_time_oracle(AUTHORITY, TIME_ORACLE)
        assert len(journal) == 1


class TestNonStringIdentities:
    def test_non_string_creator_rejected(self):
        from engines.registry.services import StakeholderRegistry

        with pytest.raises(InvalidArgument, match="string identity"):
            StakeholderRegistry(42)

    def test_non_string_oracle_is_invalid_argument(self):
        registry = _registry()
        with pytest.raises(InvalidArgument, match="got int"):
            registry.register_time_oracle(AUTHORITY, 123)
        assert registry.time_oracle == ZERO_IDENTITY

    def test_non_string_oracle_from_outsider_is_unauthorized(self):
        registry = _registry()
        with pytest.raises(Unauthorized):
            registry.register_time_oracle(TEAM, 123)

    def test_non_string_stakeholder_rejected(self):
        registry = _registry()
        with pytest.raises(InvalidArgument):
            registry.setup_stakeholders(AUTHORITY, TEAM, 7, SUPPLIER, StubHashStore())
        assert registry.manufacturer == ZERO_IDENTITY

    def test_non_string_caller_is_unauthorized(self):
        registry = _registry()
        with pytest.raises(Unauthorized):
            registry.register_time_oracle(99, TIME_ORACLE)

    def test_check_authorization_non_string_is_false(self):
        registry = _registry()
        _setup(registry)
        assert registry.check_authorization(AUTHORITY, 123) is False

    @pytest.mark.parametrize(
        "command_type,payload",
        [
            ("registry.time_oracle.register.request", {"oracle": 123}),
            ("registry.spare_parts_oracle.register.request", {}),
            (
                "registry.stakeholders.setup.request",
                {
                    "maintenance_team": ["0xT"],
                    "manufacturer": MAKER,
                    "spare_part_supplier": SUPPLIER,
                    "hash_store_id": "store-1",
                },
            ),
        ],
    )
    def test_bus_turns_bad_payload_into_rejection(self, command_type, payload):
        from core.commands.base import Command
        from core.commands.bus import CommandBus
        from engines.registry.services import RegistryCommandHandler

        registry = _registry()
        bus = CommandBus()
        RegistryCommandHandler(registry, lambda store_id: StubHashStore()).register(bus)

        outcome = bus.handle(Command(
            command_id=uuid.uuid4(),
            command_type=command_type,
            caller=AUTHORITY,
            payload=payload,
            issued_at=NOW,
            correlation_id=uuid.uuid4(),
            source_engine="registry",
        ))

        assert outcome.is_rejected
        assert outcome.reason.code == "INVALID_ARGUMENT"
        assert len(registry.journal) == 0

    def test_bus_check_authorization_non_string(self):
        from core.commands.base import Command
        from core.commands.bus import CommandBus
        from engines.registry.services import RegistryCommandHandler

        registry = _registry()
        bus = CommandBus()
        RegistryCommandHandler(registry, lambda store_id: None).register(bus)

        outcome = bus.handle(Command(
            command_id=uuid.uuid4(),
            command_type="registry.authorization.check.request",
            caller=TEAM,
            payload={"stakeholder": 123},
            issued_at=NOW,
            correlation_id=uuid.uuid4(),
            source_engine="registry",
        ))

        assert outcome.is_accepted
        assert outcome.result is False
