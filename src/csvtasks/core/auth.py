from typing import Any

from dotenv import load_dotenv

from ..utils.logging_utils import get_logger
from .config import get_env_config
from .exceptions import AuthConfigError, CsvTasksError
from .tasks_client import TasksClient

# Module logger
logger = get_logger(__name__)


def get_access_token() -> str:
    """Get the task service bearer token from the environment.

    Returns:
        str: Access token

    Raises:
        AuthConfigError: If the token is missing
    """
    load_dotenv(override=True)
    return get_env_config().access_token


def doctor(test_api: bool = False) -> dict[str, Any]:
    """Check that configuration is usable and optionally that the API answers.

    Args:
        test_api: Whether to list task lists with the configured token

    Returns:
        Dict[str, Any]: Status information including success status and details
    """
    try:
        logger.info(
            "🔍 Checking task service configuration...",
            extra={"operation": "doctor_check"},
        )
        config = get_env_config()
        logger.info(f"    ✅ Access token: {config.access_token[:6]}...")
        logger.info(f"    ✅ API URL: {config.base_url}")
        logger.info(f"    ✅ Default task list: {config.default_tasklist}")

        result: dict[str, Any] = {
            "success": True,
            "token_found": True,
            "api_tested": False,
            "details": "Configuration is valid",
        }

        if test_api:
            logger.info("  🌐 Testing API access...")
            try:
                task_lists = TasksClient.from_config(config).list_task_lists()
                logger.info(
                    f"    ✅ API access successful ({len(task_lists)} task lists)",
                    extra={"operation": "api_test"},
                )
                result["api_tested"] = True
                result["api_status"] = "success"
                result["task_list_count"] = len(task_lists)
                result["details"] = "Configuration and API access are working"
            except CsvTasksError as api_error:
                logger.warning(
                    f"    ⚠️  API access test failed: {api_error}",
                    extra={"operation": "api_test"},
                )
                result["api_tested"] = True
                result["api_status"] = "failed"
                result["success"] = False
                result["details"] = f"Token found but API access failed: {api_error}"

        return result

    except AuthConfigError as e:
        logger.error(
            f"❌ Configuration error: {e}",
            extra={"operation": "doctor_check"},
        )
        return {
            "success": False,
            "token_found": False,
            "api_tested": False,
            "error": str(e),
            "details": "Configuration is invalid",
        }
