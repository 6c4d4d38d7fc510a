"""Operations module for csvtasks."""

from csvtasks.operations.delete_ops import (
    RowCriteria,
    delete_tasks_from_csv,
    derive_due_mode,
    find_matches,
)
from csvtasks.operations.import_ops import add_tasks_from_csv, build_task_body
from csvtasks.operations.preview_ops import preview_delete_from_csv
from csvtasks.operations.task_ops import (
    fetch_all_tasks,
    get_task_lists,
    iter_all_tasks,
)

__all__ = [
    # Task list operations
    "get_task_lists",
    "iter_all_tasks",
    "fetch_all_tasks",
    # Import operations
    "add_tasks_from_csv",
    "build_task_body",
    # Delete operations
    "delete_tasks_from_csv",
    "derive_due_mode",
    "find_matches",
    "RowCriteria",
    # Preview operations
    "preview_delete_from_csv",
]
