"""Logging setup for csvtasks.

Pipelines attach run context to records through ``extra`` (list ID, task ID,
row number, API endpoint and so on). The ``detailed`` and ``json`` formats
render that context; the default console format shows the message only.
"""

import functools
import json
import logging
import logging.config
import os
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml

ROOT_LOGGER_NAME = "csvtasks"

_LINE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Record attribute -> label used by the detailed format
CONTEXT_FIELDS = {
    "operation": "op",
    "tasklist_id": "list",
    "task_id": "task",
    "row_number": "row",
    "api_endpoint": "endpoint",
    "status_code": "status",
    "duration": "duration",
}


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)
    }


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name on a terminal."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, disable_colors: bool = False) -> None:
        super().__init__(fmt=_LINE_FORMAT, datefmt=_DATE_FORMAT)
        self.disable_colors = disable_colors

    def _use_colors(self) -> bool:
        return not self.disable_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if not self._use_colors():
            return super().format(record)

        # Other handlers share the record, so color a copy
        colored = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelname, "")
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class DetailedFormatter(logging.Formatter):
    """Line formatter that appends run context as ``[key=value, ...]``."""

    def __init__(self) -> None:
        super().__init__(fmt=_LINE_FORMAT, datefmt=_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = _record_context(record)
        if not context:
            return message

        parts = []
        for name, value in context.items():
            if name == "duration":
                value = f"{value:.3f}s"
            parts.append(f"{CONTEXT_FIELDS[name]}={value}")
        return f"{message} [{', '.join(parts)}]"


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, run context included."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update(_record_context(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _make_formatter(log_format: str, disable_colors: bool) -> logging.Formatter:
    if log_format == "json":
        return StructuredFormatter()
    if log_format == "detailed":
        return DetailedFormatter()
    return ColoredFormatter(disable_colors=disable_colors)


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_format: str = "console",
    disable_colors: bool = False,
) -> logging.Logger:
    """Configure the ``csvtasks`` logger.

    Console output goes to stderr so that command output on stdout stays
    clean. A log file, when given, always receives JSON lines.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a JSON log file
        log_format: ``console``, ``detailed`` or ``json``; anything else is
            treated as ``console``
        disable_colors: Whether to disable colored console output

    Returns:
        logging.Logger: The configured ``csvtasks`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(_make_formatter(log_format, disable_colors))
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``csvtasks`` namespace.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").strip().lower() in ("1", "true", "yes")


def configure_from_env() -> logging.Logger:
    """Configure logging from environment variables.

    Environment variables:
        CSVTASKS_LOG_LEVEL: Log level (default: INFO)
        CSVTASKS_LOG_FILE: JSON log file path (optional)
        CSVTASKS_LOG_FORMAT: console, detailed or json (default: console)
        CSVTASKS_LOG_DISABLE_COLORS: Disable colored output (default: false)

    Returns:
        logging.Logger: Configured logger instance
    """
    return setup_logging(
        level=os.getenv("CSVTASKS_LOG_LEVEL", "INFO"),
        log_file=os.getenv("CSVTASKS_LOG_FILE") or None,
        log_format=os.getenv("CSVTASKS_LOG_FORMAT", "console").strip().lower(),
        disable_colors=_env_flag("CSVTASKS_LOG_DISABLE_COLORS"),
    )


def configure_from_yaml(config_path: str | Path) -> logging.Logger:
    """Configure logging from a YAML ``dictConfig`` file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        logging.Logger: The ``csvtasks`` logger

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Logging config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
        logging.config.dictConfig(config)
    except (yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
        raise ValueError(f"Invalid logging configuration: {e}") from e

    return logging.getLogger(ROOT_LOGGER_NAME)


def log_operation(operation: str, **context: Any) -> Any:
    """Decorator logging start, completion and failure of a pipeline run.

    Args:
        operation: Operation name, attached to every record as ``operation``
        **context: Additional fields attached to every record
    """

    def decorator(func: Any) -> Any:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            logger = get_logger(func.__module__)
            extra = {"operation": operation, **context}

            logger.info(f"Starting {operation}", extra=extra)
            start_time = datetime.now(UTC)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = (datetime.now(UTC) - start_time).total_seconds()
                logger.error(
                    f"Failed {operation}: {e}",
                    extra={**extra, "duration": duration},
                    exc_info=True,
                )
                raise

            duration = (datetime.now(UTC) - start_time).total_seconds()
            logger.info(f"Completed {operation}", extra={**extra, "duration": duration})
            return result

        return wrapper

    return decorator


def init_default_logging() -> None:
    """Apply the default configuration unless the logger is already set up.

    A YAML file named by CSVTASKS_LOG_CONFIG takes precedence over the
    CSVTASKS_LOG_* environment variables.
    """
    if logging.getLogger(ROOT_LOGGER_NAME).handlers:
        return

    config_path = os.getenv("CSVTASKS_LOG_CONFIG")
    if config_path:
        configure_from_yaml(config_path)
        return

    configure_from_env()


# Initialize logging when module is imported
init_default_logging()
