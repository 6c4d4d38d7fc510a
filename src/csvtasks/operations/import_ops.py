"""Create tasks from CSV rows."""

from typing import Any

from ..core.exceptions import CsvTasksError
from ..core.interfaces import TaskServiceProtocol
from ..models.task import CsvRow, ImportResult, TaskOperationResult
from ..utils.csv_utils import parse_csv
from ..utils.date_utils import normalize_due
from ..utils.logging_utils import get_logger, log_operation
from .task_ops import resolve_tasklist_id

logger = get_logger(__name__)


def build_task_body(row: CsvRow) -> dict[str, Any] | None:
    """Build the create payload for one row.

    Args:
        row: CSV row

    Returns:
        Optional[Dict[str, Any]]: Payload, or None if the row has no title
    """
    if not row.title:
        return None

    body: dict[str, Any] = {"title": row.title}
    if row.notes:
        body["notes"] = row.notes

    due = normalize_due(row.due_raw)
    if due:
        body["due"] = due

    return body


def create_task(
    service: TaskServiceProtocol, tasklist_id: str, body: dict[str, Any]
) -> TaskOperationResult:
    """Create one task, returning the outcome instead of raising.

    Args:
        service: Task service
        tasklist_id: Task list ID
        body: Create payload

    Returns:
        TaskOperationResult: Outcome with the new task ID on success
    """
    try:
        task_id = service.create_task(tasklist_id, body)
    except CsvTasksError as e:
        return TaskOperationResult(
            task_id=None, operation="create", success=False, error_message=str(e)
        )
    return TaskOperationResult(task_id=task_id, operation="create", success=True)


@log_operation("import_tasks")
def add_tasks_from_csv(
    csv_text: str | None,
    service: TaskServiceProtocol,
    tasklist_id: str | None = None,
) -> ImportResult:
    """Create one task per valid CSV row.

    Rows without a title are skipped. Invalid due values are dropped and the
    task is created without a due date. A failed create is recorded in
    ``failures`` and does not stop the remaining rows.

    Args:
        csv_text: CSV text with title, notes, due columns
        service: Task service
        tasklist_id: Target list; the default list when None

    Returns:
        ImportResult: Created count, created IDs and per-row failures
    """
    tasklist_id = resolve_tasklist_id(tasklist_id)
    result = ImportResult(tasklist_id=tasklist_id)

    parsed = parse_csv(csv_text)
    if not parsed.data:
        return result

    for row_number, row in enumerate(parsed.rows(), 1):
        body = build_task_body(row)
        if body is None:
            result.skipped += 1
            continue

        outcome = create_task(service, tasklist_id, body)
        result.add_result(row.raw(), outcome)

        if outcome.success:
            logger.debug(
                f"Created task {outcome.task_id}",
                extra={
                    "tasklist_id": tasklist_id,
                    "task_id": outcome.task_id,
                    "row_number": row_number,
                },
            )
        else:
            logger.warning(
                f"Failed to create task for row {row_number}: {outcome.error_message}",
                extra={"tasklist_id": tasklist_id, "row_number": row_number},
            )

    logger.info(
        f"Created {result.created} tasks, skipped {result.skipped} rows, "
        f"{len(result.failures)} failed",
        extra={"operation": "import_tasks", "tasklist_id": tasklist_id},
    )
    return result
