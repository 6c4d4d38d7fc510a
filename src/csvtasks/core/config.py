"""Configuration utilities for task service access."""

import os

import dotenv

from csvtasks.core.exceptions import AuthConfigError
from csvtasks.models.config import TasksConfig

# Global constants for API configuration
API_TIMEOUT = 30  # request timeout in seconds


def check_env_file() -> None:
    """Check if .env file exists and load it."""
    env_path = ".env"
    if os.path.exists(env_path):
        dotenv.load_dotenv(env_path)


def get_env_config() -> TasksConfig:
    """Get task service configuration from environment variables.

    Returns:
        TasksConfig: Validated configuration

    Raises:
        AuthConfigError: If required environment variables are missing or invalid
    """
    check_env_file()

    try:
        config = TasksConfig.from_env_vars(dict(os.environ))
    except ValueError as e:
        raise AuthConfigError(str(e)) from e

    if not config.validate():
        raise AuthConfigError(
            "Invalid task service configuration",
            details=f"base_url={config.base_url}, page_size={config.page_size}",
        )

    return config
