"""
eink-hub - device service for TRMNL-style e-Ink displays

Devices register once (setup), then check in periodically (display) to
report telemetry and fetch the next image of their playlist. Operators list
devices and manage playlists through the /api/devices endpoints.
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from eink_hub import __version__
from eink_hub.config import ServerConfig, load_config
from eink_hub.database import create_engine_for_url, create_sessionmaker, init_db
from eink_hub.exceptions import StoreError
from eink_hub.headers import HEADER_REQUEST_ID
from eink_hub.identifiers import IdentifierSource
from eink_hub.logging_config import configure_logging
from eink_hub.repositories import InMemoryDeviceRepository, SqlAlchemyDeviceRepository
from eink_hub.rotation import RotationCursorTable
from eink_hub.routers import devices_router, firmware_router

logger = logging.getLogger(__name__)


def create_app(config: Optional[ServerConfig] = None) -> FastAPI:
    """Build the application and its shared state from ``config``."""
    config = config or load_config()
    engine = None

    if config.uses_memory_store:
        device_repository = InMemoryDeviceRepository()
    else:
        engine = create_engine_for_url(config.database_url, echo=config.debug)
        device_repository = SqlAlchemyDeviceRepository(create_sessionmaker(engine))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        # Startup: Initialize database tables
        if engine is not None:
            await init_db(engine)
            logger.info("Database initialized", extra={"database_url": config.database_url})
        yield
        # Shutdown: release pooled connections
        if engine is not None:
            await engine.dispose()

    app = FastAPI(
        title="eink-hub API",
        version=__version__,
        description="""
Registration, check-in and playlist service for e-Ink display devices.
        """,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.device_repository = device_repository
    app.state.rotation = RotationCursorTable()
    app.state.identifiers = IdentifierSource()

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        request_id = request.headers.get(HEADER_REQUEST_ID) or str(uuid.uuid4())
        request.state.request_id = request_id

        logger.info(
            "Request initiated",
            extra={
                "req_id": request_id,
                "method": request.method,
                "uri": str(request.url.path),
            },
        )
        started = time.perf_counter()

        response = await call_next(request)

        logger.info(
            "Request processed",
            extra={
                "req_id": request_id,
                "status": response.status_code,
                "latency_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        response.headers[HEADER_REQUEST_ID] = request_id
        return response

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(
            "Device store operation failed",
            extra={"req_id": getattr(request.state, "request_id", "")},
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"detail": "Something went wrong"})

    # Include routers
    app.include_router(firmware_router)
    app.include_router(devices_router)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def run() -> None:
    """Console entry point: configure logging and serve with uvicorn."""
    import uvicorn

    config = load_config()
    configure_logging(config.log_format, config.log_level)
    logger.info("Server starting", extra={"host": config.host, "port": config.port})

    uvicorn.run(
        "eink_hub.main:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_config=None,
    )


if __name__ == "__main__":
    run()
