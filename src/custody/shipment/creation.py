"""Shipment creation: command and handler.

Minting the asset and inserting the shipment form one unit: both aggregates
are built and validated before either is persisted.
"""

import structlog
from protean import handle
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from custody.asset import registry as asset_registry
from custody.asset.asset import Asset
from custody.domain import custody
from custody.participant.participant import Role
from custody.participant.registry import require_role
from custody.shipment.shipment import Shipment

logger = structlog.get_logger(__name__)


@custody.command(part_of="Shipment")
class CreateShipment:
    """Register a new shipment batch and mint its asset to the manufacturer."""

    manufacturer = String(required=True, max_length=128)
    batch_no = Integer(required=True, min_value=0)
    item_name = String(required=True, max_length=200)
    expiry_date = String(required=True, max_length=64)
    unit_price = Integer(required=True, min_value=0)


@custody.command_handler(part_of=Shipment)
class CreateShipmentHandler:
    @handle(CreateShipment)
    def create_shipment(self, command):
        require_role(command.manufacturer, Role.MANUFACTURER, action="create shipments")

        asset = asset_registry.mint(command.manufacturer, command.batch_no)
        shipment = Shipment.register(
            asset_id=asset.asset_id,
            manufacturer=command.manufacturer,
            batch_no=command.batch_no,
            item_name=command.item_name,
            expiry_date=command.expiry_date,
            unit_price=command.unit_price,
        )

        current_domain.repository_for(Asset).add(asset)
        current_domain.repository_for(Shipment).add(shipment)

        logger.info(
            "Shipment created",
            asset_id=asset.asset_id,
            manufacturer=command.manufacturer,
            batch_no=command.batch_no,
        )
        return asset.asset_id
