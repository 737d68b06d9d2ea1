from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from deliverydesk.api.routes_billing import router as billing_router
from deliverydesk.api.routes_catalog import router as catalog_router
from deliverydesk.api.routes_orders import router as orders_router
from deliverydesk.api.routes_pricing import router as pricing_router
from deliverydesk.core.config import get_settings
from deliverydesk.core.logging import configure_logging
from deliverydesk.demo import seed_demo_catalog
from deliverydesk.domain.orders.validation import PricingValidationError
from deliverydesk.domain.payments import PaymentError
from deliverydesk.persistence.pg import init_db, session_scope
from deliverydesk.persistence.repository import NotFoundError

configure_logging()
logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(title=settings.app_name)


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    if settings.seed_demo_catalog_on_startup:
        with session_scope() as session:
            result = seed_demo_catalog(session)
        logger.info(
            "demo catalog ready: products=%s seeded_now=%s",
            result.get("products"),
            result.get("seeded_now"),
        )


@app.exception_handler(PricingValidationError)
async def pricing_validation_handler(_: Request, exc: PricingValidationError):
    logger.info("rejected order input: %s", exc)
    return JSONResponse(
        status_code=422,
        content={
            "error": "validation",
            "errors": [e.to_dict() for e in exc.errors],
        },
    )


@app.exception_handler(PaymentError)
async def payment_error_handler(_: Request, exc: PaymentError):
    return JSONResponse(
        status_code=422,
        content={
            "detail": str(exc),
            "error": "payment",
        },
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(_: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc), "error": "not_found"})


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


app.include_router(catalog_router)
app.include_router(pricing_router)
app.include_router(orders_router)
app.include_router(billing_router)
