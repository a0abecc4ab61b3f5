"""Database initialization script."""

from src.users_api.core.services import DataStore
from src.users_api.runtime.config.config_data import ConfigData
from src.users_api.runtime.context import get_config


def init_db(config: ConfigData | None = None) -> None:
    """Create all database tables."""
    config = config or get_config()
    data_store = DataStore.from_config(config.database)
    try:
        data_store.create_tables()
    finally:
        data_store.dispose()


if __name__ == "__main__":
    init_db()
