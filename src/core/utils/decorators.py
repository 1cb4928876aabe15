"""
Decorators for host-facing storage operations.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from aws_lambda_powertools import Logger

from core.models.errors import InternalServerError
from core.utils.constants import LOGGER_SERVICE_NAME

logger = Logger(service=LOGGER_SERVICE_NAME, UTC=True)

ResultT = TypeVar("ResultT")

MessageBuilder = Callable[..., str]


def _log_error(
    message: str,
    *,
    operation: str,
    exc: Exception,
    log: Logger,
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        operation: Name of the storage operation
        exc: Exception that was raised
        log: Logger to emit on
    """
    log.error(
        message,
        extra={
            "operation": operation,
            "error": str(exc),
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )


def returns_error_value(
    build_message: MessageBuilder,
    *,
    include_cause: bool = False,
) -> Callable[[Callable[..., ResultT]], Callable[..., ResultT | InternalServerError]]:
    """
    Decorator for host-facing storage operations.

    The host expects storage failures as return values, so any exception
    raised by the wrapped method is logged and returned as an
    `InternalServerError` carrying the original exception as `err`.

    `build_message` receives the same arguments as the wrapped method
    (including `self`) and returns the error message naming the operation
    and the key or path involved. With `include_cause`, the caught
    exception's text is appended so the remote-reported details reach the
    host in the message itself.

    Example:
        @returns_error_value(lambda self, filename: f"Could not delete {filename}")
        def delete(self, filename):
            ...
    """

    def decorator(
        func: Callable[..., ResultT],
    ) -> Callable[..., ResultT | InternalServerError]:
        @wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> ResultT | InternalServerError:
            try:
                return func(self, *args, **kwargs)
            except Exception as exc:
                _log_error(
                    f"{func.__name__}:error",
                    operation=func.__name__,
                    exc=exc,
                    log=getattr(self, "logger", logger),
                )
                message = build_message(self, *args, **kwargs)
                if include_cause:
                    message = f"{message}. Cause: {exc}"
                return InternalServerError(
                    message=message,
                    err=exc,
                    details={"operation": func.__name__},
                )

        return wrapper

    return decorator
