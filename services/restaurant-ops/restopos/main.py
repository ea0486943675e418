"""
Restaurant Ops — FastAPI application entrypoint
"""
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from restopos.api import health, inventory, menu, orders, staff, tables, transactions
from restopos.core.config import Settings, get_settings
from restopos.core.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    RestaurantError,
    ValidationError,
)
from restopos.middleware.auth import JWTAuthMiddleware
from restopos.ops.restaurant import RestaurantOperations

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[RestaurantError], int] = {
    ValidationError: 422,
    AuthorizationError: 403,
    InvalidTransitionError: 409,
    NotFoundError: 404,
}


async def restaurant_error_handler(request: Request, exc: RestaurantError) -> JSONResponse:
    status_code = _STATUS_BY_ERROR.get(type(exc), 400)
    content: dict = {"detail": str(exc)}
    if isinstance(exc, AuthorizationError):
        content.update(required_roles=list(exc.required), caller_role=exc.actual)
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content=content)


def create_app(
    settings: Settings | None = None, restaurant: RestaurantOperations | None = None
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title="Restaurant Ops",
        description="Tables, menu, orders, inventory, staff and takings for a single restaurant.",
        version=settings.SERVICE_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
    )
    app.state.restaurant = restaurant or RestaurantOperations()

    # ── CORS ──────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Tighten in production via env var
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Caller identity ───────────────────────────────────────────────────────
    app.add_middleware(JWTAuthMiddleware)

    # ── Prometheus Metrics ────────────────────────────────────────────────────
    if settings.METRICS_ENABLED:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    app.add_exception_handler(RestaurantError, restaurant_error_handler)

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(menu.router)
    app.include_router(inventory.router)
    app.include_router(inventory.suppliers_router)
    app.include_router(tables.router)
    app.include_router(orders.router)
    app.include_router(transactions.router)
    app.include_router(transactions.reports_router)
    app.include_router(staff.profile_router)
    app.include_router(staff.staff_router)
    app.include_router(staff.access_router)
    app.include_router(health.router)

    @app.get("/")
    async def root():
        return {"service": settings.SERVICE_NAME, "version": settings.SERVICE_VERSION}

    return app


app = create_app()


def serve() -> None:
    settings = get_settings()
    uvicorn.run("restopos.main:app", host=settings.HOST, port=settings.PORT)
