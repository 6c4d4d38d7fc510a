"""Protocol interfaces for the remote task service."""

from typing import Any, Protocol

from ..models.task import TaskPage


class TaskServiceProtocol(Protocol):
    """Protocol for the remote task service the pipelines run against."""

    def list_task_lists(self) -> list[dict[str, Any]]:
        """List the task lists visible to the caller.

        Returns:
            List[Dict[str, Any]]: ``{"id", "title"}`` for each list
        """
        ...

    def fetch_tasks_page(
        self,
        tasklist_id: str,
        page_token: str | None = None,
        page_size: int = 100,
    ) -> TaskPage:
        """Fetch one page of tasks, completed and hidden tasks included.

        Args:
            tasklist_id: Task list ID
            page_token: Token from the previous page, None for the first page
            page_size: Maximum number of tasks on the page

        Returns:
            TaskPage: Tasks on the page and the next page token, if any
        """
        ...

    def create_task(self, tasklist_id: str, body: dict[str, Any]) -> str:
        """Create a task.

        Args:
            tasklist_id: Task list ID
            body: ``title`` plus optional ``notes`` and ``due``

        Returns:
            str: ID of the created task
        """
        ...

    def delete_task(self, tasklist_id: str, task_id: str) -> None:
        """Delete a task.

        Args:
            tasklist_id: Task list ID
            task_id: Task ID
        """
        ...
