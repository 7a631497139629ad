"""Shipment domain events: the two notifications observers can consume."""

from protean.fields import DateTime, Integer, String

from custody.domain import custody


@custody.event(part_of="Shipment")
class ShipmentCreated:
    """A manufacturer registered a new shipment and minted its asset."""

    __version__ = "v1"

    asset_id = Integer(required=True)
    manufacturer = String(required=True)
    batch_no = Integer(required=True)
    item_name = String(required=True)
    expiry_date = String()
    unit_price = Integer()
    state = String(required=True)
    created_at = DateTime(required=True)


@custody.event(part_of="Shipment")
class ShipmentTransferred:
    """Custody of a shipment moved to the next holder in the chain."""

    __version__ = "v1"

    asset_id = Integer(required=True)
    previous_owner = String(required=True)
    new_owner = String(required=True)
    state = String(required=True)
    transferred_at = DateTime(required=True)
