"""Preview operations for dry-run mode - shows what would be deleted."""

from ..core.interfaces import TaskServiceProtocol
from ..models.task import MISSING_TITLE_REASON, PreviewResult, RowPreview
from ..utils.csv_utils import parse_csv
from .delete_ops import RowCriteria, find_matches
from .task_ops import fetch_all_tasks, resolve_tasklist_id


def preview_delete_from_csv(
    csv_text: str | None,
    service: TaskServiceProtocol,
    tasklist_id: str | None = None,
) -> PreviewResult:
    """Report which tasks a delete-by-CSV run would remove, without deleting.

    Matched IDs are claimed as the real run would, so two rows colliding on
    one task show it only under the first row.

    Args:
        csv_text: CSV text with title, notes, due columns
        service: Task service
        tasklist_id: Target list; the default list when None

    Returns:
        PreviewResult: Matches per row
    """
    tasklist_id = resolve_tasklist_id(tasklist_id)
    result = PreviewResult(tasklist_id=tasklist_id)

    parsed = parse_csv(csv_text)
    if not parsed.data:
        return result

    snapshot = fetch_all_tasks(service, tasklist_id)
    result.snapshot_size = len(snapshot)
    claimed_ids: set[str] = set()

    for row in parsed.rows():
        row_preview = RowPreview(row=row.raw())
        if not row.title:
            row_preview.reason = MISSING_TITLE_REASON
        else:
            matches = find_matches(RowCriteria.from_row(row), snapshot, claimed_ids)
            row_preview.task_ids = [task.id for task in matches]
            claimed_ids.update(row_preview.task_ids)
        result.rows.append(row_preview)

    return result
