"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.users_api.api.http.deps import get_app_config, get_data_store
from src.users_api.core.services import DataStore
from src.users_api.runtime.config.config_data import ConfigData

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Basic health check endpoint - checks if app is running.

    This is a liveness probe that returns 200 OK as long as the application
    process is running. It does not check dependencies.
    """
    return {"status": "healthy", "service": "users-api"}


@router.get("/ready", response_model=None)
def readiness(
    data_store: DataStore = Depends(get_data_store),
    config: ConfigData = Depends(get_app_config),
) -> dict[str, Any] | JSONResponse:
    """Readiness check - validates database connectivity.

    Returns 200 when the database answers, 503 otherwise.
    """
    db_healthy = data_store.health_check()
    response = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": data_store.engine.dialect.name,
            }
        },
    }

    if not db_healthy:
        return JSONResponse(status_code=503, content=response)

    return response
