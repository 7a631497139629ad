"""Shipment aggregate: the custody lifecycle of one pharmaceutical batch.

Each shipment is attached to exactly one Asset and mirrors its owner. Custody
only ever moves forward, one step per transfer, and only by the current holder.

State Machine:
    READY_TO_SHIP → RECEIVED_BY_PHARMACIST → RECEIVED_BY_BUYER (terminal)

Transfer rules, keyed by the sender's role:
    Manufacturer: to a Pharmacist, from READY_TO_SHIP
    Pharmacist:   to a Buyer,      from RECEIVED_BY_PHARMACIST
"""

from datetime import UTC, datetime
from enum import Enum
from typing import NamedTuple

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String

from custody.domain import custody
from custody.errors import InvalidState, InvalidTarget, InvariantViolation, NotOwner
from custody.participant.participant import Role
from custody.shipment.events import ShipmentCreated, ShipmentTransferred


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ShipmentState(Enum):
    READY_TO_SHIP = "ReadyToShip"
    RECEIVED_BY_PHARMACIST = "ReceivedByPharmacist"
    RECEIVED_BY_BUYER = "ReceivedByBuyer"


_LIFECYCLE = [
    ShipmentState.READY_TO_SHIP,
    ShipmentState.RECEIVED_BY_PHARMACIST,
    ShipmentState.RECEIVED_BY_BUYER,
]


# ---------------------------------------------------------------------------
# Transfer rules
# ---------------------------------------------------------------------------
class CustodyRule(NamedTuple):
    recipient_role: Role
    required_state: ShipmentState
    next_state: ShipmentState


CUSTODY_RULES = {
    Role.MANUFACTURER: CustodyRule(
        recipient_role=Role.PHARMACIST,
        required_state=ShipmentState.READY_TO_SHIP,
        next_state=ShipmentState.RECEIVED_BY_PHARMACIST,
    ),
    Role.PHARMACIST: CustodyRule(
        recipient_role=Role.BUYER,
        required_state=ShipmentState.RECEIVED_BY_PHARMACIST,
        next_state=ShipmentState.RECEIVED_BY_BUYER,
    ),
}

# Roles allowed to request a transfer at all
TRANSFER_ROLES = tuple(CUSTODY_RULES)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@custody.aggregate
class Shipment:
    asset_id = Integer(identifier=True, required=True)
    batch_no = Integer(required=True, min_value=0)
    item_name = String(required=True, max_length=200)
    expiry_date = String(required=True, max_length=64)
    unit_price = Integer(required=True, min_value=0)
    state = String(
        choices=ShipmentState,
        default=ShipmentState.READY_TO_SHIP.value,
    )
    owner = String(required=True, max_length=128)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def owner_must_be_present(self):
        if not self.owner:
            raise ValidationError({"owner": ["A shipment always has a holder"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def register(
        cls,
        asset_id: int,
        manufacturer: str,
        batch_no: int,
        item_name: str,
        expiry_date: str,
        unit_price: int,
    ):
        """Register a new shipment, held by its manufacturer and ready to ship."""
        now = datetime.now(UTC)
        shipment = cls(
            asset_id=asset_id,
            batch_no=batch_no,
            item_name=item_name,
            expiry_date=expiry_date,
            unit_price=unit_price,
            state=ShipmentState.READY_TO_SHIP.value,
            owner=manufacturer,
            created_at=now,
            updated_at=now,
        )
        shipment.raise_(
            ShipmentCreated(
                asset_id=asset_id,
                manufacturer=manufacturer,
                batch_no=batch_no,
                item_name=item_name,
                expiry_date=expiry_date,
                unit_price=unit_price,
                state=ShipmentState.READY_TO_SHIP.value,
                created_at=now,
            )
        )
        return shipment

    # -------------------------------------------------------------------
    # Custody transfer
    # -------------------------------------------------------------------
    def hand_over(
        self,
        sender: str,
        sender_role: Role,
        recipient: str,
        recipient_role: Role | None,
    ) -> ShipmentState:
        """Advance the lifecycle one step and move custody to ``recipient``.

        All checks run before anything changes: holder, rule for the sender's
        role, recipient role, then current state. Returns the new state.
        """
        if self.owner != sender:
            raise NotOwner(f"{sender} does not hold shipment {self.asset_id}")

        rule = CUSTODY_RULES.get(sender_role)
        if rule is None:
            raise InvariantViolation(f"No custody rule for role {sender_role.value}")

        if recipient_role != rule.recipient_role:
            raise InvalidTarget(f"{sender_role.value} may only transfer to a {rule.recipient_role.value}")

        current = ShipmentState(self.state)
        if current != rule.required_state:
            raise InvalidState(
                f"Cannot transfer from {current.value}; {sender_role.value} transfers "
                f"require {rule.required_state.value}"
            )

        now = datetime.now(UTC)
        self.state = rule.next_state.value
        self.owner = recipient
        self.updated_at = now
        self.raise_(
            ShipmentTransferred(
                asset_id=self.asset_id,
                previous_owner=sender,
                new_owner=recipient,
                state=rule.next_state.value,
                transferred_at=now,
            )
        )
        return rule.next_state

    @property
    def is_terminal(self) -> bool:
        return ShipmentState(self.state) == _LIFECYCLE[-1]
