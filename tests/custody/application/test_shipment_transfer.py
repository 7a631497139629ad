"""Application tests for custody transfers through the state machine."""

import pytest
from custody.asset.asset import Asset
from custody.errors import InvalidState, InvalidTarget, InvariantViolation, NotFound, NotOwner, Unauthorized
from custody.shipment.shipment import Shipment
from custody.shipment.transfer import TransferShipment
from protean.utils.globals import current_domain


@pytest.fixture()
def asset_id(service, onboarded):
    return service.create_shipment(
        onboarded["manufacturer"],
        batch_no=1,
        item_name="Aspirin",
        expiry_date="2026-01-01",
        unit_price=100,
    )


def _snapshot(service, asset_id):
    shipment = current_domain.repository_for(Shipment).get(asset_id)
    return shipment.state, shipment.owner, service.owner_of(asset_id)


class TestFullCustodyChain:
    def test_manufacturer_to_pharmacist_to_buyer(self, service, onboarded, asset_id):
        state = service.transfer_shipment(onboarded["manufacturer"], asset_id, onboarded["pharmacist"])
        assert state == "ReceivedByPharmacist"
        assert _snapshot(service, asset_id) == ("ReceivedByPharmacist", onboarded["pharmacist"], onboarded["pharmacist"])

        state = service.transfer_shipment(onboarded["pharmacist"], asset_id, onboarded["buyer"])
        assert state == "ReceivedByBuyer"
        assert _snapshot(service, asset_id) == ("ReceivedByBuyer", onboarded["buyer"], onboarded["buyer"])

    def test_holdings_follow_custody(self, service, onboarded, asset_id):
        service.transfer_shipment(onboarded["manufacturer"], asset_id, onboarded["pharmacist"])
        assert service.holdings_of(onboarded["manufacturer"]) == []
        assert service.holdings_of(onboarded["pharmacist"]) == [asset_id]
        assert service.total_supply() == 1

    def test_command_processed_directly(self, onboarded, asset_id):
        result = current_domain.process(
            TransferShipment(caller=onboarded["manufacturer"], asset_id=asset_id, new_owner=onboarded["pharmacist"]),
            asynchronous=False,
        )
        assert result == "ReceivedByPharmacist"


class TestRejectedTransfers:
    def test_caller_without_transfer_role(self, service, onboarded, asset_id):
        before = _snapshot(service, asset_id)
        with pytest.raises(Unauthorized):
            service.transfer_shipment(onboarded["buyer"], asset_id, onboarded["pharmacist"])
        assert _snapshot(service, asset_id) == before

    def test_unassigned_caller(self, service, onboarded, asset_id):
        with pytest.raises(Unauthorized):
            service.transfer_shipment(onboarded["stranger"], asset_id, onboarded["pharmacist"])

    def test_unknown_shipment(self, service, onboarded):
        with pytest.raises(NotFound):
            service.transfer_shipment(onboarded["manufacturer"], 12345, onboarded["pharmacist"])

    def test_caller_does_not_hold_shipment(self, service, onboarded, asset_id):
        service.onboard_user(onboarded["admin"], "0xOtherManufacturer", "Manufacturer")
        before = _snapshot(service, asset_id)
        with pytest.raises(NotOwner):
            service.transfer_shipment("0xOtherManufacturer", asset_id, onboarded["pharmacist"])
        assert _snapshot(service, asset_id) == before

    def test_manufacturer_cannot_skip_pharmacist(self, service, onboarded, asset_id):
        before = _snapshot(service, asset_id)
        with pytest.raises(InvalidTarget):
            service.transfer_shipment(onboarded["manufacturer"], asset_id, onboarded["buyer"])
        assert _snapshot(service, asset_id) == before

    def test_recipient_without_role(self, service, onboarded, asset_id):
        with pytest.raises(InvalidTarget):
            service.transfer_shipment(onboarded["manufacturer"], asset_id, onboarded["stranger"])

    def test_holder_reassigned_to_pharmacist_before_shipping(self, service, onboarded, asset_id):
        service.onboard_user(onboarded["admin"], onboarded["manufacturer"], "Pharmacist")
        before = _snapshot(service, asset_id)
        with pytest.raises(InvalidState):
            service.transfer_shipment(onboarded["manufacturer"], asset_id, onboarded["buyer"])
        assert _snapshot(service, asset_id) == before

    def test_pharmacist_reassigned_to_manufacturer(self, service, onboarded, asset_id):
        service.transfer_shipment(onboarded["manufacturer"], asset_id, onboarded["pharmacist"])
        service.onboard_user(onboarded["admin"], onboarded["pharmacist"], "Manufacturer")
        service.onboard_user(onboarded["admin"], "0xPharmacist2", "Pharmacist")
        with pytest.raises(InvalidState):
            service.transfer_shipment(onboarded["pharmacist"], asset_id, "0xPharmacist2")

    def test_terminal_shipment_cannot_move(self, service, onboarded, asset_id):
        service.transfer_shipment(onboarded["manufacturer"], asset_id, onboarded["pharmacist"])
        service.transfer_shipment(onboarded["pharmacist"], asset_id, onboarded["buyer"])
        # Buyer re-onboarded as Pharmacist tries to pass it on
        service.onboard_user(onboarded["admin"], onboarded["buyer"], "Pharmacist")
        service.onboard_user(onboarded["admin"], "0xBuyer2", "Buyer")

        before = _snapshot(service, asset_id)
        with pytest.raises(InvalidState):
            service.transfer_shipment(onboarded["buyer"], asset_id, "0xBuyer2")
        assert _snapshot(service, asset_id) == before

    def test_previous_holder_cannot_transfer_again(self, service, onboarded, asset_id):
        service.transfer_shipment(onboarded["manufacturer"], asset_id, onboarded["pharmacist"])
        with pytest.raises(NotOwner):
            service.transfer_shipment(onboarded["manufacturer"], asset_id, onboarded["pharmacist"])


class TestOwnerRecordConsistency:
    def test_diverging_owner_records_abort_transfer(self, service, onboarded, asset_id):
        asset_repo = current_domain.repository_for(Asset)
        asset = asset_repo.get(asset_id)
        asset.owner = "0xSomeoneElse"
        asset_repo.add(asset)

        with pytest.raises(InvariantViolation):
            service.transfer_shipment(onboarded["manufacturer"], asset_id, onboarded["pharmacist"])

        shipment = current_domain.repository_for(Shipment).get(asset_id)
        assert shipment.state == "ReadyToShip"
        assert shipment.owner == onboarded["manufacturer"]

    def test_missing_asset_record_aborts_transfer(self, service, onboarded):
        shipment = Shipment.register(
            asset_id=777,
            manufacturer=onboarded["manufacturer"],
            batch_no=1,
            item_name="Aspirin",
            expiry_date="2026-01-01",
            unit_price=1,
        )
        current_domain.repository_for(Shipment).add(shipment)

        with pytest.raises(InvariantViolation):
            service.transfer_shipment(onboarded["manufacturer"], 777, onboarded["pharmacist"])
