"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from src.user_management.api.http.app_data import ApplicationDependencies
from src.user_management.api.http.routers.health import router as health_router
from src.user_management.api.http.routers.users import router as users_router
from src.user_management.api.utils.app_startup import configure_logging
from src.user_management.core.services import DbSessionService, UserRequestValidator
from src.user_management.core.storage import build_user_store
from src.user_management.runtime.config.config_data import ConfigData
from src.user_management.runtime.context import get_config

configure_logging()


def build_dependencies(config: ConfigData) -> ApplicationDependencies:
    """Construct the store and validator selected by the configuration."""
    database_service = DbSessionService() if config.store.backend == "sql" else None
    return ApplicationDependencies(
        user_store=build_user_store(config, database_service),
        user_validator=UserRequestValidator(),
        database_service=database_service,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    owns_dependencies = getattr(app.state, "app_dependencies", None) is None
    if owns_dependencies:
        app.state.app_dependencies = build_dependencies(config)

    logger.info("Starting up application in {} environment", config.app.environment)
    try:
        yield
    finally:
        logger.info("Shutting down application")
        deps: ApplicationDependencies = app.state.app_dependencies
        if owns_dependencies and deps.database_service is not None:
            deps.database_service.dispose()


async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "-")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "request_id": request_id},
        headers={"X-Request-ID": request_id},
    )


def create_app(dependencies: ApplicationDependencies | None = None) -> FastAPI:
    """Create the API application.

    Args:
        dependencies: Prebuilt store and validator. When omitted they are
            built from the current configuration at startup.
    """
    config = get_config()
    is_production = config.app.environment == "production"

    app = FastAPI(
        title=config.app.title,
        version=config.app.version,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    if dependencies is not None:
        app.state.app_dependencies = dependencies

    app.middleware("http")(log_requests)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(health_router, tags=["health"])
    app.include_router(users_router, prefix="/users", tags=["users"])
    return app


app = create_app()

__all__ = ["app", "build_dependencies", "create_app"]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # Access logging is done in middleware
    )
