"""Configuration data models for csvtasks."""

from dataclasses import dataclass
from typing import Any

DEFAULT_BASE_URL = "https://tasks.googleapis.com/tasks/v1"
DEFAULT_TASKLIST = "@default"
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 100


@dataclass
class TasksConfig:
    """Configuration for task service access."""

    access_token: str
    base_url: str = DEFAULT_BASE_URL
    default_tasklist: str = DEFAULT_TASKLIST
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        """Normalize the base URL."""
        self.base_url = self.base_url.rstrip("/")

    @classmethod
    def from_env_vars(cls, env_vars: dict[str, str]) -> "TasksConfig":
        """Create TasksConfig from environment variables.

        Args:
            env_vars: Dictionary of environment variables

        Returns:
            TasksConfig: Configuration instance

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        token = (env_vars.get("GOOGLE_TASKS_ACCESS_TOKEN") or "").strip()
        if not token:
            raise ValueError("Missing GOOGLE_TASKS_ACCESS_TOKEN environment variable")

        raw_page_size = env_vars.get("CSVTASKS_PAGE_SIZE") or str(DEFAULT_PAGE_SIZE)
        try:
            page_size = int(raw_page_size)
        except ValueError as e:
            raise ValueError(
                f"CSVTASKS_PAGE_SIZE must be an integer, got {raw_page_size!r}"
            ) from e

        return cls(
            access_token=token,
            base_url=env_vars.get("CSVTASKS_API_BASE_URL") or DEFAULT_BASE_URL,
            default_tasklist=env_vars.get("CSVTASKS_DEFAULT_TASKLIST")
            or DEFAULT_TASKLIST,
            page_size=page_size,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary format.

        Returns:
            Dict[str, Any]: Configuration as dictionary
        """
        return {
            "access_token": "***REDACTED***",  # Don't expose secrets
            "base_url": self.base_url,
            "default_tasklist": self.default_tasklist,
            "page_size": self.page_size,
        }

    def validate(self) -> bool:
        """Validate that all required fields are present and valid.

        Returns:
            bool: True if configuration is valid
        """
        if not self.access_token or not self.default_tasklist:
            return False

        if not self.base_url.startswith(("https://", "http://")):
            return False

        return 1 <= self.page_size <= MAX_PAGE_SIZE
