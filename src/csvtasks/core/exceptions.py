"""Custom exception hierarchy for csvtasks."""


class CsvTasksError(Exception):
    """Base exception for csvtasks.

    This is the root exception class for all csvtasks-specific errors.
    All other custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, details: str | None = None):
        """Initialize the exception.

        Args:
            message: The main error message
            details: Optional additional details about the error
        """
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message."""
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class AuthConfigError(CsvTasksError):
    """Configuration errors.

    Raised when the access token or other required settings are missing
    or malformed.
    """


class TaskOperationError(CsvTasksError):
    """Task operation errors.

    Raised when creating or deleting a single task fails.
    """

    def __init__(
        self,
        message: str,
        task_id: str | None = None,
        operation: str | None = None,
        details: str | None = None,
    ):
        """Initialize the task operation error.

        Args:
            message: The main error message
            task_id: The remote task ID involved, if known
            operation: The operation that failed (create, delete)
            details: Optional additional details about the error
        """
        self.task_id = task_id
        self.operation = operation
        super().__init__(message, details)

    def _format_message(self) -> str:
        """Format the complete error message with task context."""
        parts = [self.message]

        if self.operation:
            parts.append(f"Operation: {self.operation}")

        if self.task_id:
            parts.append(f"Task ID: {self.task_id}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)


class FileOperationError(CsvTasksError):
    """File operation errors.

    Raised when reading a CSV input file fails.
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        operation: str | None = None,
        details: str | None = None,
    ):
        """Initialize the file operation error.

        Args:
            message: The main error message
            file_path: The file path that caused the error
            operation: The file operation that failed (read, write, etc.)
            details: Optional additional details about the error
        """
        self.file_path = file_path
        self.operation = operation
        super().__init__(message, details)

    def _format_message(self) -> str:
        """Format the complete error message with file context."""
        parts = [self.message]

        if self.operation:
            parts.append(f"Operation: {self.operation}")

        if self.file_path:
            parts.append(f"File: {self.file_path}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)


class APIError(CsvTasksError):
    """Task service API errors.

    Raised when a call to the remote task service fails at the transport
    level or returns an error status.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        details: str | None = None,
    ):
        """Initialize the API error.

        Args:
            message: The main error message
            status_code: The HTTP status code from the API response
            endpoint: The API endpoint that failed
            details: Optional additional details about the error
        """
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message, details)

    def _format_message(self) -> str:
        """Format the complete error message with API context."""
        parts = [self.message]

        if self.status_code:
            parts.append(f"Status: {self.status_code}")

        if self.endpoint:
            parts.append(f"Endpoint: {self.endpoint}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)
