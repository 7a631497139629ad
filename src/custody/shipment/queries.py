"""Role-gated shipment reads."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from custody.errors import NotFound
from custody.participant.participant import Role
from custody.participant.registry import require_role
from custody.shipment.shipment import Shipment


def view_shipment(caller: str, asset_id: int) -> Shipment:
    require_role(caller, Role.MANUFACTURER, Role.PHARMACIST, action="view shipments")
    try:
        return current_domain.repository_for(Shipment).get(asset_id)
    except ObjectNotFoundError:
        raise NotFound(f"Shipment {asset_id} does not exist") from None
