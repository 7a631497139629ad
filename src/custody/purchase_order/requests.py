"""Purchase order requests: command, handler and the caller-scoped read."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from custody.domain import custody
from custody.participant.participant import Role
from custody.participant.registry import require_role
from custody.purchase_order.purchase_order import PurchaseOrder

logger = structlog.get_logger(__name__)


@custody.command(part_of="PurchaseOrder")
class CreatePurchaseOrder:
    """Leave a purchase request in a manufacturer's mailbox."""

    pharmacist = String(required=True, max_length=128)
    manufacturer = String(required=True, max_length=128)
    item_name = String(required=True, max_length=200)
    description = Text()


@custody.command_handler(part_of=PurchaseOrder)
class PurchaseOrderHandler:
    @handle(CreatePurchaseOrder)
    def create_purchase_order(self, command):
        require_role(command.pharmacist, Role.PHARMACIST, action="create purchase orders")

        repo = current_domain.repository_for(PurchaseOrder)
        try:
            order = repo.get(command.manufacturer)
            order.replace(command.item_name, command.description, requested_by=command.pharmacist)
        except ObjectNotFoundError:
            order = PurchaseOrder.place(
                manufacturer=command.manufacturer,
                item_name=command.item_name,
                description=command.description,
                requested_by=command.pharmacist,
            )
        repo.add(order)

        logger.info(
            "Purchase order placed",
            manufacturer=command.manufacturer,
            pharmacist=command.pharmacist,
        )
        return command.manufacturer


def view_purchase_orders(caller: str) -> PurchaseOrder | None:
    """Return the request addressed to ``caller``, or ``None`` if the mailbox is empty."""
    require_role(caller, Role.MANUFACTURER, Role.PHARMACIST, action="view purchase orders")
    try:
        return current_domain.repository_for(PurchaseOrder).get(caller)
    except ObjectNotFoundError:
        return None
