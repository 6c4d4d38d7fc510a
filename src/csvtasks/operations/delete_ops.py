"""Delete tasks that match CSV rows ("undo by CSV").

A run fetches the full task list once and matches every row against that
snapshot. Tasks deleted by an earlier row are tracked in a per-run set of IDs
so a later row cannot match them again.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from ..core.exceptions import CsvTasksError
from ..core.interfaces import TaskServiceProtocol
from ..models.task import (
    MISSING_TITLE_REASON,
    CsvRow,
    DeleteResult,
    DueMatchMode,
    RowDeleteResult,
    TaskOperationResult,
    TaskRecord,
)
from ..utils.csv_utils import parse_csv
from ..utils.date_utils import date_only, is_bare_date, normalize_due
from ..utils.logging_utils import get_logger, log_operation
from .task_ops import fetch_all_tasks, resolve_tasklist_id

logger = get_logger(__name__)


def derive_due_mode(due_raw: str) -> DueMatchMode:
    """Decide how a row's raw due value constrains candidates."""
    if not due_raw:
        return DueMatchMode.NONE
    if is_bare_date(due_raw):
        return DueMatchMode.DATE_ONLY
    if normalize_due(due_raw) is not None:
        return DueMatchMode.EXACT
    return DueMatchMode.INVALID


@dataclass(frozen=True)
class RowCriteria:
    """Matching criteria extracted from one CSV row."""

    title: str
    notes: str
    due_raw: str
    due_mode: DueMatchMode
    due_instant: str | None

    @classmethod
    def from_row(cls, row: CsvRow) -> "RowCriteria":
        due_mode = derive_due_mode(row.due_raw)
        return cls(
            title=row.title,
            notes=row.notes,
            due_raw=row.due_raw,
            due_mode=due_mode,
            due_instant=(
                normalize_due(row.due_raw) if due_mode == DueMatchMode.EXACT else None
            ),
        )

    def matches_due(self, task: TaskRecord) -> bool:
        if self.due_mode == DueMatchMode.NONE:
            return True
        if self.due_mode == DueMatchMode.INVALID:
            return False
        if self.due_mode == DueMatchMode.DATE_ONLY:
            return task.due is not None and date_only(task.due) == self.due_raw
        return task.due is not None and task.due == self.due_instant

    def matches(self, task: TaskRecord) -> bool:
        """Check title, notes and due constraints against a task."""
        if task.title.strip() != self.title:
            return False
        if self.notes and task.notes.strip() != self.notes:
            return False
        return self.matches_due(task)


def find_matches(
    criteria: RowCriteria,
    snapshot: Iterable[TaskRecord],
    deleted_ids: set[str],
) -> list[TaskRecord]:
    """Find snapshot tasks matching a row, skipping already deleted ones.

    Args:
        criteria: Row criteria
        snapshot: Tasks fetched at the start of the run
        deleted_ids: IDs deleted earlier in this run

    Returns:
        List[TaskRecord]: Matches in snapshot order
    """
    return [
        task
        for task in snapshot
        if task.id not in deleted_ids and criteria.matches(task)
    ]


def delete_task(
    service: TaskServiceProtocol, tasklist_id: str, task_id: str
) -> TaskOperationResult:
    """Delete one task, returning the outcome instead of raising.

    Args:
        service: Task service
        tasklist_id: Task list ID
        task_id: Task ID

    Returns:
        TaskOperationResult: Outcome of the delete call
    """
    try:
        service.delete_task(tasklist_id, task_id)
    except CsvTasksError as e:
        return TaskOperationResult(
            task_id=task_id, operation="delete", success=False, error_message=str(e)
        )
    return TaskOperationResult(task_id=task_id, operation="delete", success=True)


def delete_row_matches(
    row: CsvRow,
    snapshot: list[TaskRecord],
    deleted_ids: set[str],
    service: TaskServiceProtocol,
    tasklist_id: str,
) -> RowDeleteResult:
    """Delete every snapshot task matching one row.

    Successfully deleted IDs are added to ``deleted_ids``.

    Args:
        row: CSV row
        snapshot: Tasks fetched at the start of the run
        deleted_ids: IDs deleted earlier in this run, updated in place
        service: Task service
        tasklist_id: Task list ID

    Returns:
        RowDeleteResult: Per-row outcome
    """
    row_result = RowDeleteResult(row=row.raw())
    if not row.title:
        row_result.reason = MISSING_TITLE_REASON
        return row_result

    criteria = RowCriteria.from_row(row)
    for task in find_matches(criteria, snapshot, deleted_ids):
        outcome = delete_task(service, tasklist_id, task.id)
        row_result.add_result(outcome)
        if outcome.success:
            deleted_ids.add(task.id)
        else:
            logger.warning(
                f"Failed to delete task {task.id}: {outcome.error_message}",
                extra={"tasklist_id": tasklist_id, "task_id": task.id},
            )

    return row_result


@log_operation("delete_tasks")
def delete_tasks_from_csv(
    csv_text: str | None,
    service: TaskServiceProtocol,
    tasklist_id: str | None = None,
) -> DeleteResult:
    """Delete the tasks described by CSV rows.

    The snapshot fetch is the only call allowed to fail the run. Individual
    delete failures are recorded on their row and skipped.

    Args:
        csv_text: CSV text with title, notes, due columns
        service: Task service
        tasklist_id: Target list; the default list when None

    Returns:
        DeleteResult: Total deleted count and per-row details

    Raises:
        APIError: If the task snapshot cannot be fetched
    """
    tasklist_id = resolve_tasklist_id(tasklist_id)
    result = DeleteResult(tasklist_id=tasklist_id)

    parsed = parse_csv(csv_text)
    if not parsed.data:
        return result

    snapshot = fetch_all_tasks(service, tasklist_id)
    deleted_ids: set[str] = set()

    for row_number, row in enumerate(parsed.rows(), 1):
        row_result = delete_row_matches(
            row, snapshot, deleted_ids, service, tasklist_id
        )
        result.add_row(row_result)
        logger.debug(
            f"Row {row_number} deleted {row_result.deleted} tasks",
            extra={"tasklist_id": tasklist_id, "row_number": row_number},
        )

    logger.info(
        f"Deleted {result.deleted} tasks, {result.failed} deletions failed",
        extra={"operation": "delete_tasks", "tasklist_id": tasklist_id},
    )
    return result
