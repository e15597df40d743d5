"""FastAPI application factory with lifespan events."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from flowsankey.api.dependencies import set_clickhouse_conn
from flowsankey.api.router import api_router
from flowsankey.clickhouse.connection import ClickHouseConnection
from flowsankey.config import get_settings
from flowsankey.utils.exceptions import (
    FlowSankeyError,
    InvalidRequestError,
    MalformedResultError,
    StoreError,
)
from flowsankey.utils.logging import configure_from_settings, get_logger

logger = get_logger(__name__)

_ERROR_STATUS: dict[type[FlowSankeyError], int] = {
    InvalidRequestError: 400,
    StoreError: 502,
    MalformedResultError: 500,
}


def _status_for(exc: FlowSankeyError) -> int:
    for error_type, status in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    settings = get_settings()
    configure_from_settings(settings)

    clickhouse = ClickHouseConnection(settings)
    await clickhouse.connect()
    set_clickhouse_conn(clickhouse)

    logger.info("app_started", flows_table=settings.FLOWS_TABLE)
    yield

    # Shutdown
    set_clickhouse_conn(None)
    await clickhouse.close()
    logger.info("app_stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_from_settings(settings)

    application = FastAPI(
        title="flowsankey",
        description="Sankey diagrams of network flows stored in ClickHouse",
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(api_router)

    @application.middleware("http")
    async def request_id_middleware(request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @application.exception_handler(FlowSankeyError)
    async def sankey_exception_handler(request: Request, exc: FlowSankeyError) -> JSONResponse:
        status = _status_for(exc)
        if status >= 500:
            logger.error("request_failed", error=str(exc), type=type(exc).__name__, path=request.url.path)
        else:
            logger.info("request_rejected", error=str(exc), type=type(exc).__name__, path=request.url.path)
        return JSONResponse(
            status_code=status,
            content={"detail": str(exc), "type": type(exc).__name__},
        )

    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "type": type(exc).__name__},
        )

    return application


app = create_app()
