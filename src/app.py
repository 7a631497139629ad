"""Custody FastAPI application.

Processes every request synchronously through a single CustodyService, so
requests are committed one at a time.

Usage:
    CUSTODY_ADMIN=0xAdmin uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000

PROTEAN_ENV selects the domain.toml overlay:
    - unset / "test" → in-memory store
    - "production"   → SQLite store (run `python src/manage.py setup-db` first)
"""

import os

from custody.api import (
    asset_router,
    participant_router,
    purchase_order_router,
    register_error_handlers,
    shipment_router,
)
from custody.domain import custody
from custody.service import CustodyService
from custody.utils.logging import configure_logging, get_logger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

configure_logging(log_dir=os.environ.get("LOG_DIR"))
logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
custody.init()
service = CustodyService(custody)

_admin = os.environ.get("CUSTODY_ADMIN")
if _admin:
    service.seed_admin(_admin)
else:
    logger.warning("CUSTODY_ADMIN not set; the role registry has no administrator until one is seeded")

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Custody API",
    description="Pharmaceutical shipment custody chain from Manufacturer to Pharmacist to Buyer",
)
app.state.custody_service = service

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
register_error_handlers(app)

app.include_router(participant_router)
app.include_router(purchase_order_router)
app.include_router(shipment_router)
app.include_router(asset_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {"custody": {"name": custody.name}},
            "total_supply": service.total_supply(),
        }
    )
