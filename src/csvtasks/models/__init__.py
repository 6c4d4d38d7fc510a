"""Data models for csvtasks."""

from csvtasks.models.config import TasksConfig
from csvtasks.models.task import (
    CsvRow,
    DeleteResult,
    DueMatchMode,
    ImportResult,
    ParsedCsv,
    PreviewResult,
    RowDeleteResult,
    RowFailure,
    RowPreview,
    TaskOperationResult,
    TaskPage,
    TaskRecord,
)

__all__ = [
    # Task models
    "TaskRecord",
    "TaskPage",
    "CsvRow",
    "ParsedCsv",
    "DueMatchMode",
    # Result models
    "TaskOperationResult",
    "ImportResult",
    "RowFailure",
    "DeleteResult",
    "RowDeleteResult",
    "PreviewResult",
    "RowPreview",
    # Config models
    "TasksConfig",
]
