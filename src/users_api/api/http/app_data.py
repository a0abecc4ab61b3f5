from dataclasses import dataclass

from src.users_api.core.services import DataStore
from src.users_api.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    data_store: DataStore
