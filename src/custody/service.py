"""Single-writer entry point to the custody domain.

Concurrency contract: every operation, read or write, runs under one
re-entrant lock inside its own domain context. Operations therefore commit
one at a time in a single total order, and no caller ever observes another
operation's partial effect. Each write is one Protean unit of work; a failed
operation leaves no trace, so callers may retry freely.

Construct one service per domain (per process, or per test).
"""

import threading

from protean.domain import Domain

from custody.asset import registry as asset_registry
from custody.participant.onboarding import BootstrapAdmin, OnboardUser
from custody.participant.registry import role_name
from custody.projections import shipment_board
from custody.purchase_order.purchase_order import PurchaseOrder
from custody.purchase_order.requests import CreatePurchaseOrder, view_purchase_orders
from custody.shipment.creation import CreateShipment
from custody.shipment.queries import view_shipment
from custody.shipment.shipment import Shipment
from custody.shipment.transfer import TransferShipment
from custody.utils.logging import operation_context


class CustodyService:
    def __init__(self, domain: Domain):
        self._domain = domain
        self._lock = threading.RLock()

    def _process(self, by, command_cls, **fields):
        # Commands need an active domain context at construction
        with self._lock, self._domain.domain_context(), operation_context(command_cls.__name__, by):
            return self._domain.process(command_cls(**fields), asynchronous=False)

    def _read(self, by, fn, *args, **kwargs):
        with self._lock, self._domain.domain_context(), operation_context(fn.__name__, by):
            return fn(*args, **kwargs)

    # -------------------------------------------------------------------
    # Role registry
    # -------------------------------------------------------------------
    def seed_admin(self, actor: str) -> str:
        return self._process(actor, BootstrapAdmin, actor=actor)

    def onboard_user(self, admin: str, actor: str, role: str) -> str:
        return self._process(admin, OnboardUser, admin=admin, actor=actor, role=role)

    def view_role(self, caller: str) -> str:
        return self._read(caller, role_name, caller)

    # -------------------------------------------------------------------
    # Purchase orders
    # -------------------------------------------------------------------
    def create_purchase_order(self, caller: str, item_name: str, description: str | None, manufacturer: str) -> str:
        return self._process(
            caller,
            CreatePurchaseOrder,
            pharmacist=caller,
            manufacturer=manufacturer,
            item_name=item_name,
            description=description,
        )

    def view_purchase_orders(self, caller: str) -> PurchaseOrder | None:
        return self._read(caller, view_purchase_orders, caller)

    # -------------------------------------------------------------------
    # Shipments
    # -------------------------------------------------------------------
    def create_shipment(
        self,
        caller: str,
        batch_no: int,
        item_name: str,
        expiry_date: str,
        unit_price: int,
    ) -> int:
        return self._process(
            caller,
            CreateShipment,
            manufacturer=caller,
            batch_no=batch_no,
            item_name=item_name,
            expiry_date=expiry_date,
            unit_price=unit_price,
        )

    def view_shipment(self, caller: str, asset_id: int) -> Shipment:
        return self._read(caller, view_shipment, caller, asset_id)

    def transfer_shipment(self, caller: str, asset_id: int, new_owner: str) -> str:
        return self._process(caller, TransferShipment, caller=caller, asset_id=asset_id, new_owner=new_owner)

    def shipment_board(self, state: str | None = None, offset: int = 0, limit: int = 100) -> list:
        return self._read(None, shipment_board.board, state, offset=offset, limit=limit)

    # -------------------------------------------------------------------
    # Asset registry
    # -------------------------------------------------------------------
    def owner_of(self, asset_id: int) -> str:
        return self._read(None, asset_registry.owner_of, asset_id)

    def total_supply(self) -> int:
        return self._read(None, asset_registry.total_supply)

    def holdings_of(self, owner: str, offset: int = 0, limit: int = 100) -> list[int]:
        return self._read(None, asset_registry.holdings_of, owner, offset=offset, limit=limit)
