"""Test configuration and fixtures for the users API."""

import os

# Must be set before src.users_api.runtime.context loads config.yaml
os.environ.setdefault("APP_ENVIRONMENT", "test")

from tests.fixtures import *  # noqa: E402,F401,F403
