"""REST client for the Google Tasks v1 API."""

import time
from typing import Any
from urllib.parse import quote

import requests

from ..models.config import DEFAULT_BASE_URL, DEFAULT_PAGE_SIZE, TasksConfig
from ..models.task import TaskPage, TaskRecord
from ..utils.logging_utils import get_logger
from .config import API_TIMEOUT, get_env_config
from .exceptions import APIError, TaskOperationError

USER_AGENT = "csvtasks/1.0 (CSV task import tool)"

# Module logger
logger = get_logger(__name__)


def _encode(value: str, context: str) -> str:
    """URL encode a single path segment.

    Raises:
        TaskOperationError: If the value is empty
    """
    if not value:
        raise TaskOperationError(f"{context} cannot be empty")
    return quote(value, safe="@")


def _error_details(response: requests.Response) -> str | None:
    """Extract the API error message from an error response."""
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        message = data["error"].get("message")
        if message:
            return str(message)

    text = getattr(response, "text", "")
    if isinstance(text, str) and text:
        return text[:200]
    return None


class TasksClient:
    """Task service client over the Google Tasks REST API.

    Implements ``TaskServiceProtocol``. Every call is attempted exactly once;
    transport failures and error statuses are raised as ``APIError``.
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = API_TIMEOUT,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialize the client.

        Args:
            access_token: OAuth bearer token with the tasks scope
            base_url: API root URL
            timeout: Request timeout in seconds
            page_size: Upper bound on tasks requested per page
        """
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.page_size = page_size

    @classmethod
    def from_config(cls, config: TasksConfig) -> "TasksClient":
        return cls(
            access_token=config.access_token,
            base_url=config.base_url,
            page_size=config.page_size,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    def _request(
        self, method: str, endpoint: str, **kwargs: Any
    ) -> requests.Response:
        """Send one request and translate failures into APIError.

        Args:
            method: HTTP method
            endpoint: Path below the API root
            **kwargs: Extra arguments for ``requests.request``

        Returns:
            requests.Response: Successful response

        Raises:
            APIError: On transport failure or an error status
        """
        url = f"{self.base_url}/{endpoint}"
        start = time.monotonic()
        try:
            response = requests.request(
                method, url, headers=self._headers(), timeout=self.timeout, **kwargs
            )
        except requests.exceptions.RequestException as e:
            logger.error(
                f"API {method} {endpoint} failed: {e}",
                extra={"api_endpoint": endpoint},
            )
            raise APIError(
                f"{method} request failed", endpoint=endpoint, details=str(e)
            ) from e

        duration = time.monotonic() - start
        if response.status_code >= 400:
            logger.warning(
                f"API {method} {endpoint} returned {response.status_code}",
                extra={
                    "api_endpoint": endpoint,
                    "status_code": response.status_code,
                    "duration": duration,
                },
            )
            raise APIError(
                f"{method} request returned an error",
                status_code=response.status_code,
                endpoint=endpoint,
                details=_error_details(response),
            )

        logger.debug(
            f"API {method} {endpoint} returned {response.status_code}",
            extra={
                "api_endpoint": endpoint,
                "status_code": response.status_code,
                "duration": duration,
            },
        )
        return response

    @staticmethod
    def _json(response: requests.Response, endpoint: str) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise APIError(
                "Response is not valid JSON", endpoint=endpoint, details=str(e)
            ) from e
        if not isinstance(data, dict):
            raise APIError("Unexpected response shape", endpoint=endpoint)
        return data

    def list_task_lists(self) -> list[dict[str, Any]]:
        """List all task lists, following pagination.

        Returns:
            List[Dict[str, Any]]: ``{"id", "title"}`` for each list
        """
        endpoint = "users/@me/lists"
        task_lists: list[dict[str, Any]] = []
        page_token: str | None = None

        while True:
            params: dict[str, Any] = {"maxResults": DEFAULT_PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token

            data = self._json(self._request("GET", endpoint, params=params), endpoint)
            for item in data.get("items") or []:
                task_lists.append(
                    {"id": item.get("id", ""), "title": item.get("title", "")}
                )

            page_token = data.get("nextPageToken")
            if not page_token:
                return task_lists

    def fetch_tasks_page(
        self,
        tasklist_id: str,
        page_token: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> TaskPage:
        """Fetch one page of tasks, completed and hidden tasks included.

        Args:
            tasklist_id: Task list ID
            page_token: Token from the previous page
            page_size: Maximum number of tasks on the page, capped by the
                client's configured page size

        Returns:
            TaskPage: Records on this page and the next page token
        """
        endpoint = f"lists/{_encode(tasklist_id, 'task list ID')}/tasks"
        params: dict[str, Any] = {
            "showCompleted": "true",
            "showHidden": "true",
            "maxResults": min(page_size, self.page_size),
        }
        if page_token:
            params["pageToken"] = page_token

        data = self._json(self._request("GET", endpoint, params=params), endpoint)
        items = [TaskRecord.from_api_data(item) for item in data.get("items") or []]
        return TaskPage(items=items, next_page_token=data.get("nextPageToken") or None)

    def create_task(self, tasklist_id: str, body: dict[str, Any]) -> str:
        """Create a task and return its ID.

        Args:
            tasklist_id: Task list ID
            body: ``title`` plus optional ``notes`` and ``due``

        Returns:
            str: ID of the created task

        Raises:
            APIError: If the request fails
            TaskOperationError: If no ID comes back
        """
        endpoint = f"lists/{_encode(tasklist_id, 'task list ID')}/tasks"
        data = self._json(self._request("POST", endpoint, json=body), endpoint)
        task_id = data.get("id")
        if not task_id:
            raise TaskOperationError(
                "Created task has no ID", operation="create", details=endpoint
            )
        return str(task_id)

    def delete_task(self, tasklist_id: str, task_id: str) -> None:
        """Delete a task.

        Args:
            tasklist_id: Task list ID
            task_id: Task ID

        Raises:
            APIError: If the request fails
        """
        endpoint = (
            f"lists/{_encode(tasklist_id, 'task list ID')}"
            f"/tasks/{_encode(task_id, 'task ID')}"
        )
        self._request("DELETE", endpoint)


def get_tasks_client(config: TasksConfig | None = None) -> TasksClient:
    """Create a task service client from configuration.

    Args:
        config: Configuration to use; read from the environment when None

    Returns:
        TasksClient: Ready-to-use client

    Raises:
        AuthConfigError: If configuration is missing or invalid
    """
    if config is None:
        config = get_env_config()
    return TasksClient.from_config(config)
