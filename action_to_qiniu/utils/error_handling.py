"""
Error handling utilities for standardized error logging and handling.

This module provides reusable error handling patterns shared by the
pipeline stages and the command-line front end.
"""

import logging
import subprocess
import traceback
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

import httpx
from pydantic import ValidationError

from ..exceptions import RelayError, StorageRequestFailed, UploadFailed
from .constants import RETRY_STATUS_CODES

# Type variable for generic function decorators
F = TypeVar("F", bound=Callable[..., Any])


def _status_code(error: httpx.HTTPError) -> Optional[int]:
    """Return the response status carried by an HTTP error, if any."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return None


def handle_http_error(error: httpx.HTTPError, operation: str, *, log_traceback: bool = True) -> None:
    """
    Handle HTTP errors with standardized logging.

    Args:
        error: The HTTP error to handle
        operation: Description of the operation that failed
        log_traceback: Whether to log the full traceback
    """
    status = _status_code(error)
    error_message = str(error)

    if status == 403 or (status is None and "403" in error_message):
        logging.error(
            "Permission denied during %s: the token may lack the required scope, "
            "or the artifact or its download URL has expired.",
            operation,
        )
    elif status == 401 or (status is None and "401" in error_message):
        logging.error(
            "Authentication failed during %s: Invalid credentials. "
            "Please check the credentials in the configuration file.",
            operation,
        )
    elif status == 404 or (status is None and "404" in error_message):
        logging.error("Resource not found during %s (it may have been deleted): %s", operation, error)
    elif (status is not None and status >= 500) or any(code in error_message for code in ("500", "502", "503")):
        logging.error("Server error during %s: %s", operation, error)
    else:
        logging.error("HTTP error during %s: %s", operation, error)

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


def with_error_handling(operation: str, *, reraise: bool = True) -> Callable[[F], F]:
    """
    Decorator to wrap functions with consistent error logging.

    Relay errors already carry a readable message and are re-raised untouched.

    Args:
        operation: Description of the operation for logging
        reraise: If True, reraise the exception after logging

    Returns:
        Decorator function

    Example:
        @with_error_handling("list artifacts")
        def list_artifacts():
            ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except RelayError:
                raise
            except httpx.HTTPError as e:
                handle_http_error(e, operation)
                if reraise:
                    raise
            except Exception as e:
                handle_generic_error(e, operation)
                if reraise:
                    raise
            return None

        return wrapper  # type: ignore[return-value]

    return decorator


def describe_error(error: BaseException) -> str:
    """
    Build the short reason string recorded for a failed file.

    Args:
        error: Exception raised by the attempt

    Returns:
        Human-readable reason
    """
    if isinstance(error, (UploadFailed, StorageRequestFailed)):
        return error.reason
    if isinstance(error, httpx.HTTPStatusError):
        detail = _provider_error(error.response)
        return f"HTTP {error.response.status_code}: {detail}" if detail else f"HTTP {error.response.status_code}"
    if isinstance(error, httpx.TimeoutException):
        return f"Timed out: {error}" if str(error) else "Timed out"
    if isinstance(error, httpx.HTTPError):
        return f"Network error: {error}" if str(error) else f"Network error: {type(error).__name__}"
    if isinstance(error, ValidationError):
        return f"Invalid response: {error.error_count()} validation error(s)"
    if isinstance(error, subprocess.SubprocessError):
        return f"Command error: {error}"
    return str(error) or type(error).__name__


def _provider_error(response: httpx.Response) -> str:
    """Extract the ``error`` field providers put in JSON error bodies."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase


def is_retryable(error: BaseException) -> bool:
    """
    Check if an upload error is transient and worth another attempt.

    Args:
        error: Exception raised by the attempt

    Returns:
        True for transport errors and retryable HTTP statuses
    """
    if isinstance(error, (UploadFailed, StorageRequestFailed)):
        return error.retryable
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in RETRY_STATUS_CODES
    return isinstance(error, httpx.TransportError)


__all__ = [
    "handle_http_error",
    "handle_generic_error",
    "with_error_handling",
    "describe_error",
    "is_retryable",
]
