"""Command handlers for CLI operations."""

from pathlib import Path

from ..core.auth import doctor
from ..core.config import get_env_config
from ..core.tasks_client import TasksClient, get_tasks_client
from ..models.task import DeleteResult, ImportResult, PreviewResult
from ..operations.delete_ops import delete_tasks_from_csv
from ..operations.import_ops import add_tasks_from_csv
from ..operations.preview_ops import preview_delete_from_csv
from ..operations.task_ops import get_task_lists
from ..utils.csv_utils import read_csv_text
from ..utils.rich_utils import format_row, get_console, make_table, plain


class OperationHandler:
    """Handles CLI operations against the task service.

    Configuration is read lazily so that ``--help`` and argument errors never
    require an access token.
    """

    def __init__(self, client: TasksClient | None = None):
        """Initialize the operation handler.

        Args:
            client: Task service client; built from the environment when None
        """
        self._client = client
        self.console = get_console()

    @property
    def client(self) -> TasksClient:
        if self._client is None:
            self._client = get_tasks_client()
        return self._client

    def _resolve_tasklist(self, tasklist_id: str | None) -> str:
        if tasklist_id:
            return tasklist_id
        return get_env_config().default_tasklist

    def handle_doctor(self, test_api: bool) -> bool:
        """Run configuration checks.

        Returns:
            bool: True if all checks passed
        """
        result = doctor(test_api=test_api)
        if result["success"]:
            self.console.print(f"[success]{plain(result['details'])}[/success]")
        else:
            self.console.print(f"[error]{plain(result['details'])}[/error]")
            if result.get("error"):
                self.console.print(f"[muted]{plain(result['error'])}[/muted]")
        return bool(result["success"])

    def handle_list_tasklists(self) -> None:
        """Print the available task lists."""
        task_lists = get_task_lists(self.client)
        if not task_lists:
            self.console.print("[warning]No task lists found[/warning]")
            return

        table = make_table("Task lists", "ID", "Title")
        for task_list in task_lists:
            table.add_row(plain(task_list["id"]), plain(task_list["title"]))
        self.console.print(table)

    def handle_import(self, input_file: Path, tasklist_id: str | None) -> ImportResult:
        """Create tasks from a CSV file and print a summary."""
        csv_text = read_csv_text(input_file)
        tasklist = self._resolve_tasklist(tasklist_id)

        with self.console.status(f"Creating tasks in {plain(tasklist)}..."):
            result = add_tasks_from_csv(csv_text, self.client, tasklist)

        self._display_import_result(result)
        return result

    def handle_delete(
        self, input_file: Path, tasklist_id: str | None
    ) -> DeleteResult:
        """Delete tasks matching a CSV file and print a summary."""
        csv_text = read_csv_text(input_file)
        tasklist = self._resolve_tasklist(tasklist_id)

        status = f"Deleting matching tasks from {plain(tasklist)}..."
        with self.console.status(status):
            result = delete_tasks_from_csv(csv_text, self.client, tasklist)

        self._display_delete_result(result)
        return result

    def handle_preview_delete(
        self, input_file: Path, tasklist_id: str | None
    ) -> PreviewResult:
        """Show which tasks a delete would remove."""
        csv_text = read_csv_text(input_file)
        tasklist = self._resolve_tasklist(tasklist_id)

        with self.console.status(f"Matching rows against {plain(tasklist)}..."):
            result = preview_delete_from_csv(csv_text, self.client, tasklist)

        self._display_preview_result(result)
        return result

    def _display_import_result(self, result: ImportResult) -> None:
        self.console.print(
            f"[success]Created {result.created} tasks[/success] "
            f"in {plain(result.tasklist_id)}"
        )
        if result.skipped:
            self.console.print(
                f"[muted]Skipped {result.skipped} rows without a title[/muted]"
            )
        if result.failures:
            table = make_table(
                f"{len(result.failures)} rows failed", "Row", "Error"
            )
            for failure in result.failures:
                table.add_row(format_row(failure.row), plain(failure.error))
            self.console.print(table)

    def _display_delete_result(self, result: DeleteResult) -> None:
        table = make_table("Rows", "Row", "Deleted", "Note")
        for detail in result.details:
            if detail.reason:
                note = plain(detail.reason)
            elif detail.errors:
                note = f"{len(detail.errors)} deletions failed"
            else:
                note = ""
            table.add_row(format_row(detail.row), str(detail.deleted), note)
        if result.details:
            self.console.print(table)

        self.console.print(
            f"[success]Deleted {result.deleted} tasks[/success] "
            f"from {plain(result.tasklist_id)}"
        )
        if result.failed:
            self.console.print(f"[warning]{result.failed} deletions failed[/warning]")

    def _display_preview_result(self, result: PreviewResult) -> None:
        self.console.print("[warning]DRY RUN - nothing will be deleted[/warning]")
        table = make_table(
            f"Matches against {result.snapshot_size} tasks", "Row", "Would delete"
        )
        for row in result.rows:
            matched = row.reason or (", ".join(row.task_ids) if row.task_ids else "-")
            table.add_row(format_row(row.row), plain(matched))
        if result.rows:
            self.console.print(table)
        self.console.print(
            f"[info]{result.match_count} tasks would be deleted[/info] "
            f"from {plain(result.tasklist_id)}"
        )
