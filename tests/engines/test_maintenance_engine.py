"""HGS Maintenance Engine tests."""

import uuid
from datetime import datetime, timezone

import pytest

from core.commands.errors import InvalidArgument, Unauthorized
from core.identity import ZERO_IDENTITY

AUTHORITY = "0xA11CE"
TEAM = "0xTEAM"
MAKER = "0xMAKER"
SUPPLIER = "0xSUPPLY"
TIME_ORACLE = "0xCLOCK"
NOW = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def kw(caller):
    return dict(
        caller=caller,
        command_id=uuid.uuid4(),
        correlation_id=uuid.uuid4(),
        issued_at=NOW,
    )


class StubHashStore:
    store_id = "store-1"


def _workflow(*, oracle=True):
    from engines.maintenance.services import MaintenanceWorkflow
    from engines.registry.services import StakeholderRegistry

    registry = StakeholderRegistry(AUTHORITY)
    registry.setup_stakeholders(AUTHORITY, TEAM, MAKER, SUPPLIER, StubHashStore())
    if oracle:
        registry.register_time_oracle(AUTHORITY, TIME_ORACLE)
    return MaintenanceWorkflow(registry)


class TestMaintenanceWorkflow:
    def test_requires_registry(self):
        from engines.maintenance.services import MaintenanceWorkflow

        with pytest.raises(InvalidArgument):
            MaintenanceWorkflow(None)

    def test_announce_by_time_oracle(self):
        workflow = _workflow()
        workflow.announce(TIME_ORACLE)
        event = workflow.registry.journal.last("maintenance.work.announced.v1")
        assert event.actor == TIME_ORACLE

    def test_announce_before_oracle_registered(self):
        workflow = _workflow(oracle=False)
        with pytest.raises(Unauthorized):
            workflow.announce(TIME_ORACLE)
        with pytest.raises(Unauthorized):
            workflow.announce(ZERO_IDENTITY)

    @pytest.mark.parametrize("caller", [AUTHORITY, TEAM, MAKER])
    def test_announce_by_others_rejected(self, caller):
        workflow = _workflow()
        with pytest.raises(Unauthorized):
            workflow.announce(caller)
        assert workflow.registry.journal.count("maintenance.work.announced.v1") == 0

    def test_perform_by_team(self):
        workflow = _workflow()
        workflow.perform(TEAM)
        event = workflow.registry.journal.last("maintenance.work.performed.v1")
        assert event.payload == {"performed_by": TEAM}

    def test_perform_by_manufacturer_rejected(self):
        workflow = _workflow()
        with pytest.raises(Unauthorized):
            workflow.perform(MAKER)

    def test_perform_without_announce_allowed(self):
        workflow = _workflow(oracle=False)
        workflow.perform(TEAM)
        workflow.complete(TEAM, "QmDoc")
        assert workflow.get_last_maintenance_details(AUTHORITY) == ("QmDoc", TEAM)

    def test_complete_records_details(self):
        workflow = _workflow()
        record = workflow.complete(TEAM, "QmDoc1")

        assert record.as_tuple() == ("QmDoc1", TEAM)
        assert workflow.get_last_maintenance_details(AUTHORITY) == ("QmDoc1", TEAM)
        event = workflow.registry.journal.last("maintenance.work.completed.v1")
        assert event.payload == {"document_hash": "QmDoc1", "performed_by": TEAM}

    def test_second_complete_overwrites(self):
        workflow = _workflow()
        workflow.complete(TEAM, "QmDoc1")
        workflow.complete(TEAM, "QmDoc2")
        assert workflow.get_last_maintenance_details(AUTHORITY) == ("QmDoc2", TEAM)

    def test_complete_accepts_empty_hash(self):
        workflow = _workflow()
        workflow.complete(TEAM, "")
        assert workflow.get_last_maintenance_details(AUTHORITY) == ("", TEAM)

    def test_complete_rejects_non_string_hash(self):
        workflow = _workflow()
        with pytest.raises(InvalidArgument):
            workflow.complete(TEAM, None)
        assert workflow.registry.journal.count("maintenance.work.completed.v1") == 0

    def test_complete_role_checked_first(self):
        workflow = _workflow()
        with pytest.raises(Unauthorized):
            workflow.complete(MAKER, None)

    def test_complete_by_non_team_keeps_record(self):
        workflow = _workflow()
        workflow.complete(TEAM, "QmDoc1")
        with pytest.raises(Unauthorized):
            workflow.complete(SUPPLIER, "QmForged")
        assert workflow.get_last_maintenance_details(AUTHORITY) == ("QmDoc1", TEAM)

    def test_details_before_completion(self):
        workflow = _workflow()
        assert workflow.get_last_maintenance_details(AUTHORITY) == ("", ZERO_IDENTITY)

    def test_details_restricted_to_authority(self):
        workflow = _workflow()
        with pytest.raises(Unauthorized):
            workflow.get_last_maintenance_details(TEAM)

    def test_reassigned_team_loses_access(self):
        workflow = _workflow()
        workflow.registry.setup_stakeholders(
            AUTHORITY, "0xTEAM2", MAKER, SUPPLIER, StubHashStore(),
        )
        with pytest.raises(Unauthorized):
            workflow.perform(TEAM)
        workflow.perform("0xTEAM2")


class TestFailureAndAccountability:
    def test_detect_failure(self):
        workflow = _workflow()
        workflow.complete(TEAM, "QmDoc1")
        workflow.detect_failure_and_review(AUTHORITY)

        event = workflow.registry.journal.last("maintenance.failure.detected.v1")
        assert event.actor == AUTHORITY
        assert workflow.get_last_maintenance_details(AUTHORITY) == ("QmDoc1", TEAM)

    def test_detect_failure_by_team_rejected(self):
        workflow = _workflow()
        with pytest.raises(Unauthorized):
            workflow.detect_failure_and_review(TEAM)

    def test_identify_accountable_party(self):
        workflow = _workflow()
        workflow.identify_accountable_party(AUTHORITY, MAKER)
        event = workflow.registry.journal.last(
            "maintenance.accountability.identified.v1"
        )
        assert event.payload == {"party": MAKER}

    def test_identify_zero_party_accepted(self):
        workflow = _workflow()
        workflow.identify_accountable_party(AUTHORITY, ZERO_IDENTITY)
        event = workflow.registry.journal.last(
            "maintenance.accountability.identified.v1"
        )
        assert event.payload == {"party": ZERO_IDENTITY}

    def test_identify_by_non_authority_rejected(self):
        workflow = _workflow()
        with pytest.raises(Unauthorized):
            workflow.identify_accountable_party(MAKER, TEAM)


class TestMaintenanceCommands:
    def test_argument_free_request(self):
        from engines.maintenance.commands import MaintenanceRequest

        cmd = MaintenanceRequest(
            command_type="maintenance.work.announce.request",
        ).to_command(**kw(TIME_ORACLE))
        assert cmd.source_engine == "maintenance"
        assert cmd.payload == {}

    def test_request_with_arguments_needs_typed_request(self):
        from engines.maintenance.commands import MaintenanceRequest

        with pytest.raises(ValueError, match="typed request"):
            MaintenanceRequest(command_type="maintenance.work.complete.request")
        with pytest.raises(ValueError, match="not valid"):
            MaintenanceRequest(command_type="maintenance.work.cancel.request")

    def test_bus_flow(self):
        from core.commands.bus import CommandBus
        from engines.maintenance.commands import (
            CompleteMaintenanceRequest,
            IdentifyAccountablePartyRequest,
            MaintenanceRequest,
        )
        from engines.maintenance.services import MaintenanceCommandHandler

        workflow = _workflow()
        bus = CommandBus()
        MaintenanceCommandHandler(workflow).register(bus)

        announce = bus.handle(MaintenanceRequest(
            command_type="maintenance.work.announce.request",
        ).to_command(**kw(TIME_ORACLE)))
        assert announce.is_accepted

        rejected = bus.handle(MaintenanceRequest(
            command_type="maintenance.work.perform.request",
        ).to_command(**kw(MAKER)))
        assert rejected.is_rejected
        assert rejected.reason.code == "UNAUTHORIZED"

        bus.handle(CompleteMaintenanceRequest(
            document_hash="QmDoc1",
        ).to_command(**kw(TEAM)))
        bus.handle(IdentifyAccountablePartyRequest(
            party=TEAM,
        ).to_command(**kw(AUTHORITY)))

        details = bus.handle(MaintenanceRequest(
            command_type="maintenance.record.get.request",
        ).to_command(**kw(AUTHORITY)))
        assert details.result == ("QmDoc1", TEAM)



class TestNonStringArguments:
    def test_non_string_party_rejected_after_role_check(self):
        workflow = _workflow()
        with pytest.raises(Unauthorized):
            workflow.identify_accountable_party(TEAM, 42)
        with pytest.raises(InvalidArgument, match="party"):
            workflow.identify_accountable_party(AUTHORITY, 42)
        assert workflow.registry.journal.count(
            "maintenance.accountability.identified.v1"
        ) == 0

    def test_bus_rejects_missing_document_hash(self):
        from core.commands.base import Command
        from core.commands.bus import CommandBus
        from engines.maintenance.services import MaintenanceCommandHandler

        workflow = _workflow()
        bus = CommandBus()
        MaintenanceCommandHandler(workflow).register(bus)

        outcome = bus.handle(Command(
            command_id=uuid.uuid4(),
            command_type="maintenance.work.complete.request",
            caller=TEAM,
            payload={},
            issued_at=NOW,
            correlation_id=uuid.uuid4(),
            source_engine="maintenance",
        ))

        assert outcome.reason.code == "INVALID_ARGUMENT"
        assert workflow.get_last_maintenance_details(AUTHORITY) == ("", ZERO_IDENTITY)
