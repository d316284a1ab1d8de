"""FastAPI application factory."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.routers import auth, health, profile, tasks
from core.config import Settings, get_settings
from core.context import build_context
from models.base import Base
from services.exceptions import AppError, CacheError, UpstreamFailureError

logger = logging.getLogger(__name__)

# Client message for a request body field that is missing, empty or malformed
FIELD_ERROR_MESSAGES = {
    "description": "Descrição obrigatória",
    "completed": "Campo 'completed' inválido",
    "name": "Nome obrigatório",
    "email": "Email obrigatório",
    "password": "Senha obrigatória",
}
DEFAULT_VALIDATION_MESSAGE = "Dados inválidos"
# Field validators that reject a present, non-empty value
VALUE_ERROR_MESSAGES = {
    "password": "Senha muito longa",
}


def validation_error_message(exc: RequestValidationError) -> str:
    """Pick the client message for the first invalid body field."""
    for error in exc.errors():
        loc = error.get("loc", ())
        if not loc:
            continue
        if error.get("type") == "value_error" and loc[-1] in VALUE_ERROR_MESSAGES:
            return VALUE_ERROR_MESSAGES[loc[-1]]
        if loc[-1] in FIELD_ERROR_MESSAGES:
            return FIELD_ERROR_MESSAGES[loc[-1]]
    return DEFAULT_VALIDATION_MESSAGE


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    settings: Settings = app.state.settings
    context = build_context(settings)

    # Startup: connect to the cache. Fatal unless the cache is allowed to fail open.
    try:
        await context.cache.connect()
    except CacheError:
        if not settings.cache_fail_open:
            raise
        logger.warning("Starting without cache (CACHE_FAIL_OPEN=true)")

    # Startup: make sure the tables exist
    async with context.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.context = context
    logger.info("Application started")

    yield

    # Shutdown: release cache and database pool
    await context.close()


async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    """Render every domain error as ``{"error": message}``."""
    if isinstance(exc, UpstreamFailureError):
        logger.error("upstream_failure %s: %s", type(exc).__name__, exc.detail, exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=exc.headers,
    )


async def request_validation_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Missing or malformed request fields are a 400, not FastAPI's default 422."""
    return JSONResponse(status_code=400, content={"error": validation_error_message(exc)})


async def database_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Database failures: log the detail, return a generic 500."""
    logger.error("database_failure: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": UpstreamFailureError.message},
    )


async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Last resort: never leak internal error text to the client."""
    logger.exception("unhandled_error: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"error": UpstreamFailureError.message},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    The application context (cache, database, token service, storage) is
    created by the lifespan. Tests may set ``app.state.context`` directly.
    """
    app_settings = settings or get_settings()

    app = FastAPI(
        title="Tasks API",
        description="Task CRUD with a cached task list, JWT authentication and profile photos.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(profile.router)
    app.include_router(tasks.router)
    return app
