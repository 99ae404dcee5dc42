"""
Bounded retries for flaky browser steps, built on tenacity.

Most of the bot deliberately waits on the operator; the few steps that must
not hang (such as dismissing the dialog shown after a submission) go through
`retry_async` with a fixed attempt budget and a fixed pause between tries.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryError,
    after_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from core.logger import bind_context, get_structured_logger

T = TypeVar("T")

logger = logging.getLogger(__name__)
structured_logger = get_structured_logger(__name__)


class RetryExhaustedError(Exception):
    """Raised when an operation kept failing for its whole attempt budget."""

    def __init__(self, operation_name: str, attempts: int, last_error: Optional[BaseException]):
        self.operation_name = operation_name
        self.attempts = attempts
        self.last_error = last_error
        self.message = f"Operation '{operation_name}' failed after {attempts} attempts"
        if last_error is not None:
            self.message += f": {last_error}"
        super().__init__(self.message)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    operation_name: str,
    max_attempts: int,
    wait_seconds: float,
    context: Optional[Dict[str, Any]] = None,
    retry_on: tuple = (Exception,),
) -> T:
    """
    Run `operation` until it succeeds, at most `max_attempts` times.

    Args:
        operation: Zero-argument coroutine function to run.
        operation_name: Name used in logs.
        max_attempts: Attempt budget (the first call included).
        wait_seconds: Fixed pause between attempts.
        context: Extra fields for structured logs.
        retry_on: Exception types that trigger another attempt.

    Returns:
        Whatever `operation` returns on its first successful attempt.

    Raises:
        RetryExhaustedError: every attempt failed.
    """
    op_logger = bind_context(structured_logger, operation=operation_name, **(context or {}))
    attempt = 0

    try:
        async for attempt_state in AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_fixed(wait_seconds),
            retry=retry_if_exception_type(retry_on),
            after=after_log(logger, logging.DEBUG),
        ):
            with attempt_state:
                attempt = attempt_state.retry_state.attempt_number
                op_logger.debug("operation_attempt", attempt=attempt, max_attempts=max_attempts)
                result = await operation()
            if not attempt_state.retry_state.outcome.failed:
                op_logger.debug("operation_success", attempt=attempt)
                return result
    except RetryError as e:
        last_error = e.last_attempt.exception()
        op_logger.warning(
            "operation_failed_all_retries",
            attempts=attempt,
            error=str(last_error),
            error_type=type(last_error).__name__,
        )
        raise RetryExhaustedError(operation_name, attempt, last_error) from last_error
