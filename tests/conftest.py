from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from csvtasks.core.exceptions import APIError
from csvtasks.models.task import TaskPage, TaskRecord


class FakeTaskService:
    """In-memory task service with pagination and injectable failures."""

    def __init__(
        self,
        tasks: list[TaskRecord] | None = None,
        page_size: int | None = None,
    ) -> None:
        self.tasks: list[TaskRecord] = list(tasks or [])
        self.forced_page_size = page_size
        self.task_lists = [{"id": "@default", "title": "My Tasks"}]
        self.created: list[dict[str, Any]] = []
        self.deleted: list[str] = []
        self.page_requests: list[str | None] = []
        self.fail_create_titles: set[str] = set()
        self.fail_delete_ids: set[str] = set()
        self.fail_fetch = False
        self._next_id = 1

    def list_task_lists(self) -> list[dict[str, Any]]:
        return list(self.task_lists)

    def fetch_tasks_page(
        self,
        tasklist_id: str,
        page_token: str | None = None,
        page_size: int = 100,
    ) -> TaskPage:
        self.page_requests.append(page_token)
        if self.fail_fetch:
            raise APIError("GET request failed", status_code=500)

        size = self.forced_page_size or page_size
        start = int(page_token) if page_token else 0
        end = start + size
        next_token = str(end) if end < len(self.tasks) else None
        return TaskPage(items=self.tasks[start:end], next_page_token=next_token)

    def create_task(self, tasklist_id: str, body: dict[str, Any]) -> str:
        if body["title"] in self.fail_create_titles:
            raise APIError("POST request returned an error", status_code=503)

        task_id = f"new-{self._next_id}"
        self._next_id += 1
        self.created.append(dict(body))
        self.tasks.append(
            TaskRecord(
                id=task_id,
                title=body["title"],
                notes=body.get("notes", ""),
                due=body.get("due"),
            )
        )
        return task_id

    def delete_task(self, tasklist_id: str, task_id: str) -> None:
        if task_id in self.fail_delete_ids:
            raise APIError("DELETE request returned an error", status_code=500)

        self.deleted.append(task_id)
        self.tasks = [task for task in self.tasks if task.id != task_id]


@pytest.fixture
def fake_service():
    """Create an empty in-memory task service."""
    return FakeTaskService()


@pytest.fixture
def make_service():
    """Factory for in-memory task services preloaded with tasks."""

    def _make(
        tasks: list[TaskRecord] | None = None, page_size: int | None = None
    ) -> FakeTaskService:
        return FakeTaskService(tasks, page_size=page_size)

    return _make


@pytest.fixture
def mock_response():
    """Create a mock response object for requests."""
    response = MagicMock()
    response.status_code = 200
    response.json = MagicMock(return_value={})
    response.text = ""
    return response


@pytest.fixture
def mock_requests():
    """Patch the requests module used by the task service client."""
    with patch("csvtasks.core.tasks_client.requests") as mock:
        import requests

        mock.exceptions = requests.exceptions
        yield mock


@pytest.fixture
def tasks_env(monkeypatch):
    """Provide a complete task service environment."""
    monkeypatch.setenv("GOOGLE_TASKS_ACCESS_TOKEN", "test_token_123")
    monkeypatch.setenv("CSVTASKS_DEFAULT_TASKLIST", "@default")
    monkeypatch.delenv("CSVTASKS_API_BASE_URL", raising=False)
    monkeypatch.delenv("CSVTASKS_PAGE_SIZE", raising=False)
    with patch("csvtasks.core.config.check_env_file"):
        yield
