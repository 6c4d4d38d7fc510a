"""csvtasks - bulk create and delete tasks from CSV text."""

from .core.auth import doctor, get_access_token
from .core.config import API_TIMEOUT, get_env_config
from .core.exceptions import (
    APIError,
    AuthConfigError,
    CsvTasksError,
    FileOperationError,
    TaskOperationError,
)
from .core.interfaces import TaskServiceProtocol
from .core.tasks_client import TasksClient, get_tasks_client

# Models
from .models.config import TasksConfig
from .models.task import (
    CsvRow,
    DeleteResult,
    DueMatchMode,
    ImportResult,
    ParsedCsv,
    PreviewResult,
    RowDeleteResult,
    TaskOperationResult,
    TaskPage,
    TaskRecord,
)

# Operations
from .operations.delete_ops import delete_tasks_from_csv
from .operations.import_ops import add_tasks_from_csv
from .operations.preview_ops import preview_delete_from_csv
from .operations.task_ops import fetch_all_tasks, get_task_lists, iter_all_tasks

# Utilities
from .utils.csv_utils import parse_csv, read_csv_text
from .utils.date_utils import date_only, normalize_due

__version__ = "1.0.0"

__all__ = [
    # Core
    "API_TIMEOUT",
    "doctor",
    "get_access_token",
    "get_env_config",
    "TaskServiceProtocol",
    "TasksClient",
    "get_tasks_client",
    # Exceptions
    "CsvTasksError",
    "AuthConfigError",
    "APIError",
    "FileOperationError",
    "TaskOperationError",
    # Models
    "TasksConfig",
    "TaskRecord",
    "TaskPage",
    "CsvRow",
    "ParsedCsv",
    "DueMatchMode",
    "TaskOperationResult",
    "ImportResult",
    "DeleteResult",
    "RowDeleteResult",
    "PreviewResult",
    # Operations
    "get_task_lists",
    "iter_all_tasks",
    "fetch_all_tasks",
    "add_tasks_from_csv",
    "delete_tasks_from_csv",
    "preview_delete_from_csv",
    # Utilities
    "parse_csv",
    "read_csv_text",
    "normalize_due",
    "date_only",
]
