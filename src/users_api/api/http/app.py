"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.users_api.api.http.app_data import ApplicationDependencies
from src.users_api.api.http.errors import register_exception_handlers
from src.users_api.api.http.routers.health import router as health_router
from src.users_api.api.http.routers.users import router as users_router
from src.users_api.api.utils.app_startup import configure_logging
from src.users_api.core.services import DataStore
from src.users_api.runtime.config.config_data import ConfigData
from src.users_api.runtime.context import get_config


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        app_deps = getattr(request.app.state, "app_dependencies", None)
        if app_deps is not None and app_deps.config.app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )
        return response


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
        "host": request.headers.get("host", request.url.hostname or "-"),
    }

    start = time.perf_counter()

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

        except HTTPException as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=exc.status_code,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=exc.status_code,
                content={"detail": exc.detail, "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

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


# --- Lifecycle hooks ---
async def startup(
    app: FastAPI,
    config: ConfigData,
    data_store: DataStore | None = None,
) -> None:
    """Build the application-wide dependencies.

    A ``data_store`` supplied by the caller is used as-is and stays owned by
    the caller; otherwise one is created from the database configuration.
    """
    logger.info("Starting up application in {} environment", config.app.environment)

    owns_store = data_store is None
    if data_store is None:
        data_store = DataStore.from_config(config.database)

    if config.database.create_tables:
        data_store.create_tables()

    app.state.owns_data_store = owns_store
    app.state.app_dependencies = ApplicationDependencies(
        config=config,
        data_store=data_store,
    )


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    if app.state.owns_data_store:
        app_dependencies.data_store.dispose()


# --- FastAPI app setup ---
def create_app(
    data_store: DataStore | None = None,
    config: ConfigData | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        data_store: Store to serve requests from. Created from the database
            configuration at startup when omitted.
        config: Configuration to run with. Defaults to the current context's.
    """
    config = config or get_config()
    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await startup(app, config, data_store)
        try:
            yield
        finally:
            await shutdown(app)

    is_production = config.app.environment == "production"
    app = FastAPI(
        title=config.api.title,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )

    app.add_middleware(SecurityHeadersMiddleware)

    # --- CORS configuration ---
    if is_production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )

    app.middleware("http")(log_requests)

    register_exception_handlers(app)

    # --- Router registration ---
    app.include_router(health_router)
    app.include_router(users_router)

    return app


app = create_app()

__all__ = ["app", "create_app", "startup", "shutdown"]
