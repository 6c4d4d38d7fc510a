"""Task, CSV row and pipeline result models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ..utils.date_utils import normalize_due

MISSING_TITLE_REASON = "Missing title"


class DueMatchMode(str, Enum):
    """How a CSV row's due value constrains matching candidates."""

    NONE = "none"
    DATE_ONLY = "date-only"
    EXACT = "exact"
    INVALID = "invalid"


@dataclass(frozen=True)
class TaskRecord:
    """A remote task as seen in a snapshot.

    ``due`` is always a canonical UTC instant or None, never a bare date.
    """

    id: str
    title: str
    notes: str = ""
    due: str | None = None

    @classmethod
    def from_api_data(cls, data: dict[str, Any]) -> "TaskRecord":
        """Create a TaskRecord from a task service payload.

        The remote due value is canonicalized; an unparsable one is dropped.

        Args:
            data: Task resource as returned by the API

        Returns:
            TaskRecord: Snapshot record
        """
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title") or "",
            notes=data.get("notes") or "",
            due=normalize_due(data.get("due")),
        )


@dataclass(frozen=True)
class TaskPage:
    """One page of a paginated task listing."""

    items: list[TaskRecord] = field(default_factory=list)
    next_page_token: str | None = None


@dataclass(frozen=True)
class CsvRow:
    """Typed view over the positional cells of one CSV row.

    Columns are title, notes, due. Missing cells read as empty strings.
    """

    cells: tuple[str, ...]

    def _cell(self, index: int) -> str:
        if index < len(self.cells):
            return (self.cells[index] or "").strip()
        return ""

    @property
    def title(self) -> str:
        return self._cell(0)

    @property
    def notes(self) -> str:
        return self._cell(1)

    @property
    def due_raw(self) -> str:
        return self._cell(2)

    def raw(self) -> list[str]:
        """Return the row's cells as given in the CSV."""
        return list(self.cells)


@dataclass
class ParsedCsv:
    """Parsed CSV input: optional header plus data rows."""

    header: list[str] | None
    data: list[list[str]] = field(default_factory=list)

    def rows(self) -> list[CsvRow]:
        """Wrap the data rows as CsvRow values."""
        return [CsvRow(tuple(cells)) for cells in self.data]


@dataclass
class TaskOperationResult:
    """Represents the result of a single remote task operation."""

    task_id: str | None
    operation: str
    success: bool
    error_message: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        """String representation of operation result."""
        status = "SUCCESS" if self.success else "FAILED"
        if self.error_message and not self.success:
            return f"{self.operation} {self.task_id}: {status} - {self.error_message}"
        return f"{self.operation} {self.task_id}: {status}"


@dataclass
class RowFailure:
    """A CSV row whose remote operation failed."""

    row: list[str]
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "error": self.error}


@dataclass
class ImportResult:
    """Outcome of importing tasks from CSV."""

    tasklist_id: str
    created: int = 0
    ids: list[str] = field(default_factory=list)
    skipped: int = 0
    failures: list[RowFailure] = field(default_factory=list)

    def add_result(self, row: list[str], result: TaskOperationResult) -> None:
        """Record the create outcome for one row.

        Args:
            row: Raw cells of the row
            result: Create operation result
        """
        if result.success and result.task_id:
            self.created += 1
            self.ids.append(result.task_id)
        else:
            self.failures.append(
                RowFailure(row=row, error=result.error_message or "Unknown error")
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the summary shape handed back to callers."""
        return {
            "created": self.created,
            "ids": list(self.ids),
            "failures": [failure.to_dict() for failure in self.failures],
        }


@dataclass
class RowDeleteResult:
    """Per-row outcome of a delete-by-CSV run."""

    row: list[str]
    deleted: int = 0
    reason: str | None = None
    task_ids: list[str] = field(default_factory=list)
    errors: list[TaskOperationResult] = field(default_factory=list)

    def add_result(self, result: TaskOperationResult) -> None:
        """Record the outcome of deleting one matched task."""
        if result.success:
            self.deleted += 1
            if result.task_id:
                self.task_ids.append(result.task_id)
        else:
            self.errors.append(result)

    def to_dict(self) -> dict[str, Any]:
        detail: dict[str, Any] = {"row": self.row, "deleted": self.deleted}
        if self.reason:
            detail["reason"] = self.reason
        return detail


@dataclass
class DeleteResult:
    """Outcome of deleting tasks by CSV."""

    tasklist_id: str
    deleted: int = 0
    details: list[RowDeleteResult] = field(default_factory=list)

    def add_row(self, row_result: RowDeleteResult) -> None:
        self.details.append(row_result)
        self.deleted += row_result.deleted

    @property
    def failed(self) -> int:
        """Number of delete calls that failed across all rows."""
        return sum(len(detail.errors) for detail in self.details)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the summary shape handed back to callers."""
        return {
            "deleted": self.deleted,
            "details": [detail.to_dict() for detail in self.details],
        }


@dataclass
class RowPreview:
    """Tasks one CSV row would delete."""

    row: list[str]
    task_ids: list[str] = field(default_factory=list)
    reason: str | None = None


@dataclass
class PreviewResult:
    """Result of a dry-run delete."""

    tasklist_id: str
    snapshot_size: int = 0
    rows: list[RowPreview] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        """Number of tasks that would be deleted."""
        return sum(len(row.task_ids) for row in self.rows)
