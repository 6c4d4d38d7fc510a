"""Core functionality for csvtasks."""

from csvtasks.core.auth import doctor, get_access_token
from csvtasks.core.config import API_TIMEOUT, check_env_file, get_env_config
from csvtasks.core.exceptions import (
    APIError,
    AuthConfigError,
    CsvTasksError,
    FileOperationError,
    TaskOperationError,
)
from csvtasks.core.interfaces import TaskServiceProtocol
from csvtasks.core.tasks_client import TasksClient, get_tasks_client

__all__ = [
    "API_TIMEOUT",
    "get_access_token",
    "doctor",
    "check_env_file",
    "get_env_config",
    "CsvTasksError",
    "AuthConfigError",
    "APIError",
    "FileOperationError",
    "TaskOperationError",
    "TaskServiceProtocol",
    "TasksClient",
    "get_tasks_client",
]
