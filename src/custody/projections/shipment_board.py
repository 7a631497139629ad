"""Shipment board: current custody status of every shipment, for observers."""

from protean.core.projector import on
from protean.fields import DateTime, Integer, String
from protean.utils.globals import current_domain

from custody.domain import custody
from custody.shipment.events import ShipmentCreated, ShipmentTransferred
from custody.shipment.shipment import Shipment


@custody.projection
class ShipmentBoard:
    asset_id = Integer(identifier=True, required=True)
    batch_no = Integer(required=True)
    item_name = String(required=True, max_length=200)
    manufacturer = String(required=True, max_length=128)
    custodian = String(required=True, max_length=128)
    state = String(required=True, max_length=50)
    updated_at = DateTime()


@custody.projector(projector_for=ShipmentBoard, aggregates=[Shipment])
class ShipmentBoardProjector:
    @on(ShipmentCreated)
    def on_shipment_created(self, event):
        current_domain.repository_for(ShipmentBoard).add(
            ShipmentBoard(
                asset_id=event.asset_id,
                batch_no=event.batch_no,
                item_name=event.item_name,
                manufacturer=event.manufacturer,
                custodian=event.manufacturer,
                state=event.state,
                updated_at=event.created_at,
            )
        )

    @on(ShipmentTransferred)
    def on_shipment_transferred(self, event):
        repo = current_domain.repository_for(ShipmentBoard)
        row = repo.get(event.asset_id)
        row.custodian = event.new_owner
        row.state = event.state
        row.updated_at = event.transferred_at
        repo.add(row)


def board(state: str | None = None, offset: int = 0, limit: int = 100) -> list[ShipmentBoard]:
    """A page of board rows, optionally only those in ``state``, ordered by asset id."""
    query = current_domain.repository_for(ShipmentBoard)._dao.query
    if state:
        query = query.filter(state=state)
    return query.order_by("asset_id").offset(offset).limit(limit).all().items
