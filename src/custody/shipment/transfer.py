"""Shipment transfer: the custody state machine entry point.

Validates, in order: the caller's role, that the shipment exists, that its
two owner records agree, that the caller holds it, then the transfer rule for
the caller's role. The shipment and asset changes are staged on in-memory
aggregates and only persisted once every check has passed.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from custody.asset import registry as asset_registry
from custody.asset.asset import Asset
from custody.domain import custody
from custody.errors import CustodyError, InvariantViolation, NotFound
from custody.participant.registry import require_role, role_of
from custody.shipment.shipment import TRANSFER_ROLES, Shipment

logger = structlog.get_logger(__name__)


@custody.command(part_of="Shipment")
class TransferShipment:
    """Hand a shipment to the next custodian in the chain."""

    caller = String(required=True, max_length=128)
    asset_id = Integer(required=True)
    new_owner = String(required=True, max_length=128)


@custody.command_handler(part_of=Shipment)
class TransferShipmentHandler:
    @handle(TransferShipment)
    def transfer_shipment(self, command):
        log = logger.bind(asset_id=command.asset_id, caller=command.caller, new_owner=command.new_owner)
        try:
            state = self._transfer(command)
        except InvariantViolation as exc:
            log.error("Transfer aborted", reason=exc.message)
            raise
        except CustodyError as exc:
            log.warning("Transfer rejected", error=exc.code, reason=exc.message)
            raise

        log.info("Shipment transferred", state=state.value)
        return state.value

    def _transfer(self, command):
        caller_role = require_role(command.caller, *TRANSFER_ROLES, action="transfer shipments")

        shipment_repo = current_domain.repository_for(Shipment)
        try:
            shipment = shipment_repo.get(command.asset_id)
        except ObjectNotFoundError:
            raise NotFound(f"Shipment {command.asset_id} does not exist") from None

        try:
            recorded_owner = asset_registry.owner_of(command.asset_id)
        except NotFound:
            raise InvariantViolation(f"Shipment {command.asset_id} has no asset record") from None
        if recorded_owner != shipment.owner:
            raise InvariantViolation(f"Owner records disagree for asset {command.asset_id}")

        state = shipment.hand_over(
            sender=command.caller,
            sender_role=caller_role,
            recipient=command.new_owner,
            recipient_role=role_of(command.new_owner),
        )
        asset = asset_registry.transfer_ownership(command.asset_id, command.caller, command.new_owner)

        current_domain.repository_for(Asset).add(asset)
        shipment_repo.add(shipment)
        return state
