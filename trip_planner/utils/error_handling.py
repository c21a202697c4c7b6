"""
Error handling utilities for the Trip Planner workspace.

This module provides decorators, helper functions, and custom exception
classes to handle errors consistently across the application. Core store
operations raise the exceptions defined here; the AI gateway converts every
failure into a fallback value with ``fallback_on_error``.
"""

import functools
import inspect
import traceback
from collections.abc import Callable
from typing import Any, TypeVar, cast

from loguru import logger
from tenacity import (
    AsyncRetrying,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")


class TripPlannerError(Exception):
    """Base exception class for all Trip Planner errors."""

    def __init__(self, message: str, original_error: Exception | None = None):
        """
        Initialize a TripPlannerError.

        Args:
            message: Error message
            original_error: The original exception that caused this error (optional)
        """
        self.original_error = original_error
        if original_error:
            message = f"{message} - Original error: {original_error!s}"
        super().__init__(message)


class GatewayError(TripPlannerError):
    """Error raised when a call to the AI gateway fails."""

    def __init__(
        self,
        message: str,
        operation: str,
        original_error: Exception | None = None,
    ):
        """
        Initialize a GatewayError.

        Args:
            message: Error message
            operation: Gateway operation that failed (e.g. "chat")
            original_error: The original exception that caused this error (optional)
        """
        self.operation = operation
        full_message = f"Error in gateway operation '{operation}': {message}"
        super().__init__(full_message, original_error)


class ValidationError(TripPlannerError):
    """Error raised when validation of input or data fails."""

    pass


class ResourceNotFoundError(TripPlannerError):
    """Error raised when a requested resource is not found."""

    pass


def handle_errors(
    default_value: T | None = None, error_cls: type[Exception] = TripPlannerError
) -> Callable[[F], F]:
    """
    Decorator to catch and handle exceptions, logging them and
    optionally returning a default value.

    Args:
        default_value: Value to return if an exception occurs (optional)
        error_cls: Exception type to re-raise (default: TripPlannerError)

    Returns:
        Decorated function
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except error_cls:
                raise
            except Exception as e:
                func_name = func.__name__
                logger.error(f"Error in {func_name}: {e!s}")
                logger.debug(f"Traceback: {traceback.format_exc()}")

                if default_value is not None:
                    logger.info(f"Returning default value from {func_name}")
                    return default_value

                raise error_cls(str(e), original_error=e) from e

        return cast(F, wrapper)

    return decorator


def fallback_on_error(fallback: Any) -> Callable[[F], F]:
    """
    Decorator for async gateway calls that must never raise.

    Any exception is logged and replaced by ``fallback``, which may be
    ``None`` or a user-facing placeholder string.

    Args:
        fallback: Value returned when the wrapped coroutine raises

    Returns:
        Decorated coroutine function
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"{func.__name__} must be a coroutine function")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in {func.__name__}: {e!s}")
                logger.debug(f"Traceback: {traceback.format_exc()}")
                return fallback

        return cast(F, wrapper)

    return decorator


def with_retry(
    max_attempts: int | Callable[[Any], int] = 3,
    min_wait_seconds: float = 1.0,
    max_wait_seconds: float = 10.0,
    retry_exceptions: tuple = (GatewayError,),
) -> Callable[[F], F]:
    """
    Decorator to retry a function with exponential backoff when specific
    exceptions occur. Works for both plain and coroutine functions.
    When the attempts run out, the last exception is raised unchanged.

    Args:
        max_attempts: Maximum number of attempts, or a callable receiving the
            bound instance (first positional argument) and returning it
        min_wait_seconds: Minimum wait time between retries
        max_wait_seconds: Maximum wait time between retries
        retry_exceptions: Tuple of exception types to retry on

    Returns:
        Decorated function
    """

    def _attempts(args: tuple) -> int:
        if callable(max_attempts):
            return max_attempts(args[0])
        return max_attempts

    def _retry_kwargs(attempts: int) -> dict[str, Any]:
        return {
            "retry": retry_if_exception_type(retry_exceptions),
            "stop": stop_after_attempt(attempts),
            "wait": wait_exponential(
                multiplier=1, min=min_wait_seconds, max=max_wait_seconds
            ),
            "reraise": True,
        }

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                async for attempt in AsyncRetrying(**_retry_kwargs(_attempts(args))):
                    with attempt:
                        return await func(*args, **kwargs)

            return cast(F, async_wrapper)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in Retrying(**_retry_kwargs(_attempts(args))):
                with attempt:
                    return func(*args, **kwargs)

        return cast(F, wrapper)

    return decorator

