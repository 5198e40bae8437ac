"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import load_config
from core.errors import (
    BaseIdError,
    InvalidCharacter,
    InvalidIdentifier,
    OutOfRangeTimestamp,
    SourceUnavailable,
)
from core.health import HealthChecker, check_event_loop, create_clock_check, create_random_check
from identifier.assembler import get_clock, get_random_source
from internal.logging import get_logger, LogLevel, StructuredLogger
from utils.crash import create_async_handler
from web.routes import health, ids

VERSION = "1.0.0"

ERROR_STATUS = {
    InvalidIdentifier: 422,
    InvalidCharacter: 422,
    SourceUnavailable: 503,
    OutOfRangeTimestamp: 500,
}


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    StructuredLogger.configure(min_level=LogLevel.from_name(config.logging.level))
    logger_instance = get_logger()

    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("random_source", create_random_check(get_random_source), critical=True)
    health_checker.register("clock", create_clock_check(get_clock), critical=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version=VERSION)
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))
        logger_instance.info("Application started successfully")

        yield

        logger_instance.info("Application shutdown complete")

    app = FastAPI(
        title="SOLID ID",
        version=VERSION,
        description="time-sortable unique identifier service",
        lifespan=lifespan,
    )

    @app.exception_handler(BaseIdError)
    async def id_error_handler(request: Request, exc: BaseIdError):
        status_code = ERROR_STATUS.get(type(exc), 500)
        if status_code >= 500:
            logger_instance.error("Request failed", error=exc, path=request.url.path, **exc.context)
        return JSONResponse(content=exc.to_dict(), status_code=status_code)

    ids.init(config.generator)
    health.init(health_checker)

    app.include_router(ids.router)
    app.include_router(health.router)

    return app
