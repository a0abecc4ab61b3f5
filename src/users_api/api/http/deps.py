"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Depends, Request

from src.users_api.api.http.app_data import ApplicationDependencies
from src.users_api.core.services import DataStore, UserService
from src.users_api.runtime.config.config_data import ConfigData


def get_app_config(request: Request) -> ConfigData:
    """Get the configuration the application was started with."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.config


def get_data_store(request: Request) -> DataStore:
    """Get the data store created by the application lifespan."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.data_store


def get_user_service(
    data_store: DataStore = Depends(get_data_store),
    config: ConfigData = Depends(get_app_config),
) -> UserService:
    """Get a user service bound to the application's data store."""
    return UserService(data_store, atomic_writes=config.database.atomic_writes)
