"""FastAPI routes for the Custody domain.

Thin adapters: the caller's identity arrives in the ``X-Actor`` header, every
call goes through the app's ``CustodyService``, and custody rejections are
rendered as ``{"error": code, "detail": messages}``.
"""

from fastapi import APIRouter, Depends, FastAPI, Header, Query, Request
from fastapi.responses import JSONResponse

from custody.api.schemas import (
    AssetIdResponse,
    AssignRoleRequest,
    CreatePurchaseOrderRequest,
    CreateShipmentRequest,
    ErrorResponse,
    HoldingsResponse,
    OwnerResponse,
    PurchaseOrderMailboxResponse,
    PurchaseOrderResponse,
    RoleResponse,
    ShipmentBoardEntry,
    ShipmentBoardResponse,
    ShipmentResponse,
    StatusResponse,
    SupplyResponse,
    TransferResponse,
    TransferShipmentRequest,
)
from custody.errors import CustodyError
from custody.service import CustodyService

_STATUS_CODES = {
    "Unauthorized": 403,
    "NotOwner": 409,
    "NotFound": 404,
    "InvalidTarget": 422,
    "InvalidState": 409,
    "InvariantViolation": 500,
}

# OpenAPI error body for each custody status code
_ERROR_RESPONSES = {status: {"model": ErrorResponse} for status in sorted(set(_STATUS_CODES.values()))}


def get_service(request: Request) -> CustodyService:
    return request.app.state.custody_service


async def custody_error_handler(request: Request, exc: CustodyError) -> JSONResponse:
    return JSONResponse(
        status_code=_STATUS_CODES.get(exc.code, 400),
        content=ErrorResponse(error=exc.code, detail=exc.messages).model_dump(),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CustodyError, custody_error_handler)


# ---------------------------------------------------------------------------
# Participants
# ---------------------------------------------------------------------------
participant_router = APIRouter(prefix="/participants", tags=["participants"], responses=_ERROR_RESPONSES)


@participant_router.put("/{actor}/role", response_model=StatusResponse)
async def onboard_user(
    actor: str,
    body: AssignRoleRequest,
    x_actor: str = Header(...),
    service: CustodyService = Depends(get_service),
) -> StatusResponse:
    """Assign a role to an actor (administrators only)."""
    service.onboard_user(admin=x_actor, actor=actor, role=body.role)
    return StatusResponse(status="role_assigned")


@participant_router.get("/me/role", response_model=RoleResponse)
async def view_role(
    x_actor: str = Header(...),
    service: CustodyService = Depends(get_service),
) -> RoleResponse:
    """Return the caller's role name."""
    return RoleResponse(actor=x_actor, role=service.view_role(x_actor))


# ---------------------------------------------------------------------------
# Purchase orders
# ---------------------------------------------------------------------------
purchase_order_router = APIRouter(prefix="/purchase-orders", tags=["purchase-orders"], responses=_ERROR_RESPONSES)


@purchase_order_router.post("", status_code=201, response_model=StatusResponse)
async def create_purchase_order(
    body: CreatePurchaseOrderRequest,
    x_actor: str = Header(...),
    service: CustodyService = Depends(get_service),
) -> StatusResponse:
    """Leave a purchase request in a manufacturer's mailbox (pharmacists only)."""
    service.create_purchase_order(
        caller=x_actor,
        item_name=body.item_name,
        description=body.description,
        manufacturer=body.manufacturer,
    )
    return StatusResponse(status="purchase_order_placed")


@purchase_order_router.get("", response_model=PurchaseOrderMailboxResponse)
async def view_purchase_orders(
    x_actor: str = Header(...),
    service: CustodyService = Depends(get_service),
) -> PurchaseOrderMailboxResponse:
    """Return the latest request addressed to the caller, if any."""
    order = service.view_purchase_orders(x_actor)
    if order is None:
        return PurchaseOrderMailboxResponse()
    return PurchaseOrderMailboxResponse(
        purchase_order=PurchaseOrderResponse(
            manufacturer=order.manufacturer,
            item_name=order.item_name,
            description=order.description or "",
            requested_by=order.requested_by,
        )
    )


# ---------------------------------------------------------------------------
# Shipments
# ---------------------------------------------------------------------------
shipment_router = APIRouter(prefix="/shipments", tags=["shipments"], responses=_ERROR_RESPONSES)


@shipment_router.post("", status_code=201, response_model=AssetIdResponse)
async def create_shipment(
    body: CreateShipmentRequest,
    x_actor: str = Header(...),
    service: CustodyService = Depends(get_service),
) -> AssetIdResponse:
    """Register a shipment and mint its asset to the calling manufacturer."""
    asset_id = service.create_shipment(
        caller=x_actor,
        batch_no=body.batch_no,
        item_name=body.item_name,
        expiry_date=body.expiry_date,
        unit_price=body.unit_price,
    )
    return AssetIdResponse(asset_id=asset_id)


@shipment_router.get("", response_model=ShipmentBoardResponse)
async def shipment_board(
    state: str | None = None,
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: CustodyService = Depends(get_service),
) -> ShipmentBoardResponse:
    """Current custody status of every shipment, one page at a time."""
    rows = service.shipment_board(state, offset=offset, limit=limit)
    return ShipmentBoardResponse(
        shipments=[
            ShipmentBoardEntry(
                asset_id=row.asset_id,
                batch_no=row.batch_no,
                item_name=row.item_name,
                manufacturer=row.manufacturer,
                custodian=row.custodian,
                state=row.state,
            )
            for row in rows
        ]
    )


@shipment_router.get("/{asset_id}", response_model=ShipmentResponse)
async def view_shipment(
    asset_id: int,
    x_actor: str = Header(...),
    service: CustodyService = Depends(get_service),
) -> ShipmentResponse:
    shipment = service.view_shipment(x_actor, asset_id)
    return ShipmentResponse(
        asset_id=shipment.asset_id,
        batch_no=shipment.batch_no,
        item_name=shipment.item_name,
        expiry_date=shipment.expiry_date,
        state=shipment.state,
        owner=shipment.owner,
        unit_price=shipment.unit_price,
    )


@shipment_router.put("/{asset_id}/transfer", response_model=TransferResponse)
async def transfer_shipment(
    asset_id: int,
    body: TransferShipmentRequest,
    x_actor: str = Header(...),
    service: CustodyService = Depends(get_service),
) -> TransferResponse:
    """Hand the shipment to the next custodian in the chain."""
    state = service.transfer_shipment(caller=x_actor, asset_id=asset_id, new_owner=body.new_owner)
    return TransferResponse(state=state)


# ---------------------------------------------------------------------------
# Asset registry
# ---------------------------------------------------------------------------
asset_router = APIRouter(prefix="/assets", tags=["assets"], responses=_ERROR_RESPONSES)


@asset_router.get("", response_model=HoldingsResponse)
async def holdings(
    owner: str,
    offset: int = 0,
    limit: int = 100,
    service: CustodyService = Depends(get_service),
) -> HoldingsResponse:
    return HoldingsResponse(owner=owner, asset_ids=service.holdings_of(owner, offset=offset, limit=limit))


@asset_router.get("/supply", response_model=SupplyResponse)
async def total_supply(service: CustodyService = Depends(get_service)) -> SupplyResponse:
    return SupplyResponse(total_supply=service.total_supply())


@asset_router.get("/{asset_id}/owner", response_model=OwnerResponse)
async def owner_of(asset_id: int, service: CustodyService = Depends(get_service)) -> OwnerResponse:
    return OwnerResponse(asset_id=asset_id, owner=service.owner_of(asset_id))
