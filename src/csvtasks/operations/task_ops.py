"""Task list and snapshot operations."""

from collections.abc import Iterator
from typing import Any

from ..core.interfaces import TaskServiceProtocol
from ..models.config import DEFAULT_PAGE_SIZE, DEFAULT_TASKLIST
from ..models.task import TaskRecord
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


def resolve_tasklist_id(tasklist_id: str | None) -> str:
    """Return the given task list ID, or the service's default list alias."""
    return tasklist_id or DEFAULT_TASKLIST


def get_task_lists(service: TaskServiceProtocol) -> list[dict[str, Any]]:
    """List the task lists available to the caller.

    Args:
        service: Task service

    Returns:
        List[Dict[str, Any]]: ``{"id", "title"}`` for each list
    """
    return [
        {"id": task_list.get("id", ""), "title": task_list.get("title", "")}
        for task_list in service.list_task_lists()
    ]


def iter_all_tasks(
    service: TaskServiceProtocol,
    tasklist_id: str,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Iterator[TaskRecord]:
    """Lazily yield every task in a list, page by page.

    Each call starts again from the first page. Errors from the service
    propagate to the caller.

    Args:
        service: Task service
        tasklist_id: Task list ID
        page_size: Tasks requested per page

    Yields:
        TaskRecord: Tasks in service order
    """
    page_token: str | None = None
    while True:
        page = service.fetch_tasks_page(
            tasklist_id, page_token=page_token, page_size=page_size
        )
        yield from page.items

        page_token = page.next_page_token
        if not page_token:
            return


def fetch_all_tasks(
    service: TaskServiceProtocol,
    tasklist_id: str,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[TaskRecord]:
    """Fetch the complete snapshot of a task list.

    Args:
        service: Task service
        tasklist_id: Task list ID
        page_size: Tasks requested per page

    Returns:
        List[TaskRecord]: All tasks, completed and hidden ones included
    """
    snapshot = list(iter_all_tasks(service, tasklist_id, page_size))
    logger.info(
        f"Fetched {len(snapshot)} tasks",
        extra={"operation": "fetch_all_tasks", "tasklist_id": tasklist_id},
    )
    return snapshot
