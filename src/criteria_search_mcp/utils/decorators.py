"""Decorators for consistent tool error handling."""

import functools
import json
import logging
import uuid
from datetime import datetime
from typing import Any, Callable

from ..exceptions import DataLoadError, InvalidInputError

logger = logging.getLogger(__name__)


def _error_response(error: str, message: str, request_id: str, **extra: Any) -> str:
    response = {
        "success": False,
        "error": error,
        "message": message,
        **extra,
        "metadata": {
            "timestamp": datetime.now().isoformat() + "Z",
            "request_id": request_id,
        },
    }
    return json.dumps(response, indent=2)


def handle_tool_errors(func: Callable[..., str]) -> Callable[..., str]:
    """Decorator to turn exceptions raised by a tool into JSON error responses.

    Args:
        func: The function to decorate

    Returns:
        Decorated function that handles errors consistently
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> str:
        request_id = str(uuid.uuid4())
        start_time = datetime.now()

        try:
            logger.info(f"Request {request_id}: Starting {func.__name__}")
            result = func(*args, **kwargs)

            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.info(f"Request {request_id}: Completed {func.__name__} in {duration_ms}ms")

            return result

        except DataLoadError as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.warning(f"Request {request_id}: Data load failed in {duration_ms}ms: {e}")

            return _error_response("data_load_failed", str(e), request_id, url=e.url)

        except (InvalidInputError, ValueError) as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.warning(f"Request {request_id}: Validation error in {duration_ms}ms: {e}")

            details = e.details if isinstance(e, InvalidInputError) else {}
            return _error_response("invalid_input", str(e), request_id, details=details)

        except Exception as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.exception(f"Request {request_id}: Unexpected error in {duration_ms}ms: {e}")

            return _error_response("unexpected_error", f"An unexpected error occurred: {e!s}", request_id)

    return wrapper
