from custody.api.routes import (
    asset_router,
    participant_router,
    purchase_order_router,
    register_error_handlers,
    shipment_router,
)

__all__ = [
    "asset_router",
    "participant_router",
    "purchase_order_router",
    "register_error_handlers",
    "shipment_router",
]
