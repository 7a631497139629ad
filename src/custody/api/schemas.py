"""Pydantic API schemas for the Custody domain.

These are the external API contracts, separate from domain commands.
The API layer translates between these schemas and service calls.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class AssignRoleRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"role": "Pharmacist"}]}}

    role: str


class CreatePurchaseOrderRequest(BaseModel):
    manufacturer: str = Field(..., max_length=128)
    item_name: str = Field(..., max_length=200)
    description: str | None = None


class CreateShipmentRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "batch_no": 1,
                    "item_name": "Aspirin",
                    "expiry_date": "2026-01-01",
                    "unit_price": 100,
                }
            ]
        }
    }

    batch_no: int = Field(..., ge=0)
    item_name: str = Field(..., max_length=200)
    expiry_date: str = Field(..., max_length=64)
    unit_price: int = Field(..., ge=0)


class TransferShipmentRequest(BaseModel):
    new_owner: str = Field(..., max_length=128)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class RoleResponse(BaseModel):
    actor: str
    role: str


class PurchaseOrderResponse(BaseModel):
    manufacturer: str
    item_name: str
    description: str
    requested_by: str


class PurchaseOrderMailboxResponse(BaseModel):
    purchase_order: PurchaseOrderResponse | None = None


class AssetIdResponse(BaseModel):
    asset_id: int


class ShipmentResponse(BaseModel):
    asset_id: int
    batch_no: int
    item_name: str
    expiry_date: str
    state: str
    owner: str
    unit_price: int


class TransferResponse(BaseModel):
    status: str = "transferred"
    state: str


class ShipmentBoardEntry(BaseModel):
    asset_id: int
    batch_no: int
    item_name: str
    manufacturer: str
    custodian: str
    state: str


class ShipmentBoardResponse(BaseModel):
    shipments: list[ShipmentBoardEntry]


class OwnerResponse(BaseModel):
    asset_id: int
    owner: str


class SupplyResponse(BaseModel):
    total_supply: int


class HoldingsResponse(BaseModel):
    owner: str
    asset_ids: list[int]


class ErrorResponse(BaseModel):
    error: str
    detail: dict
