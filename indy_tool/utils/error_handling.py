"""
Error handling utilities for standardized error logging and handling.

This module defines the exceptions raised inside a replay and the helpers that
turn them into log records with enough context for an operator.
"""

import logging
import sys
import traceback
from functools import wraps
from typing import Any, Callable, TypeVar

import httpx

from .constants import HTTP_STATUS_NOT_FOUND

F = TypeVar("F", bound=Callable[..., Any])


class ReplayError(Exception):
    """Base error for replay and migration failures."""


class ChecksumMismatchError(ReplayError):
    """Raised when a fetched file does not match its recorded checksum."""

    def __init__(self, file_path: str, expected: str, actual: str) -> None:
        self.file_path = file_path
        self.expected = expected
        self.actual = actual
        super().__init__(f"Checksum mismatch for {file_path}: expected {expected}, got {actual}")


def handle_http_error(error: httpx.HTTPError, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle HTTP errors with standardized logging.

    Args:
        error: The HTTP error to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback at DEBUG level
    """
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        if status == HTTP_STATUS_NOT_FOUND:
            logging.error("Resource not found during %s: %s", operation, error.request.url)
        elif status >= 500:
            logging.error("Server error during %s: %s", operation, error)
        else:
            logging.error("HTTP %d during %s: %s", status, operation, error)
    else:
        logging.error("Transport failure during %s: %s", operation, error)

    if log_traceback:
        logging.debug("Traceback: %s", traceback.format_exc())


def handle_generic_error(error: Exception, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle generic errors with standardized logging.

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    logging.error("Unexpected error during %s: %s", operation, error)

    if log_traceback:
        logging.error("Traceback: %s", traceback.format_exc())


def with_error_handling(
    operation: str, *, exit_on_error: bool = False, exit_code: int = 1, reraise: bool = True
) -> Callable[[F], F]:
    """
    Decorator to wrap functions with consistent error handling.

    Args:
        operation: Description of the operation for logging
        exit_on_error: If True, call sys.exit on error
        exit_code: Exit code to use if exit_on_error is True
        reraise: If True, reraise the exception after logging (unless exiting)

    Example:
        @with_error_handling("seal folo record", reraise=False)
        def seal():
            ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except httpx.HTTPError as e:
                handle_http_error(e, operation)
                if exit_on_error:
                    sys.exit(exit_code)
                if reraise:
                    raise
            except Exception as e:
                handle_generic_error(e, operation)
                if exit_on_error:
                    sys.exit(exit_code)
                if reraise:
                    raise
            return None

        return wrapper  # type: ignore[return-value]

    return decorator


def log_and_exit(message: str, exit_code: int = 1) -> None:
    """Log an error message and exit the program."""
    logging.error(message)
    sys.exit(exit_code)


__all__ = [
    "ReplayError",
    "ChecksumMismatchError",
    "handle_http_error",
    "handle_generic_error",
    "with_error_handling",
    "log_and_exit",
]
