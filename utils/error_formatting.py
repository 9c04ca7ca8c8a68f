"""
Error formatting utilities for user-friendly error messages.

Provides functions to convert chunking exceptions to short messages
while preserving technical details in logs.
"""

import logging
from typing import Dict, Any, Optional

from chunking.exceptions import (
    ChunkingError,
    ConfigurationError,
    FileTooLargeError,
    NoFilesError,
    ScanError,
)

logger = logging.getLogger(__name__)


def format_user_error(exception: Exception) -> str:
    """
    Convert exceptions to user-friendly messages.

    Args:
        exception: The exception to format

    Returns:
        User-friendly error message string
    """
    if isinstance(exception, FileTooLargeError):
        return (
            f"'{exception.path}' is too large to chunk ({exception.size} tokens, "
            f"limit {exception.limit}) and cannot be split. "
            "Exclude it or raise the token limit."
        )

    if isinstance(exception, NoFilesError):
        return f"No files to process in '{exception.path}'. Check ignore patterns and extensions."

    if isinstance(exception, ScanError):
        return f"Cannot scan project: {exception}"

    if isinstance(exception, ConfigurationError):
        return f"Invalid configuration: {exception}"

    if isinstance(exception, ChunkingError):
        return str(exception)

    return "An unexpected error occurred while chunking files."


def is_user_facing(exception: Exception) -> bool:
    """
    Check if an exception is safe to show to users.

    Args:
        exception: The exception to check

    Returns:
        True if exception is user-facing, False otherwise
    """
    return isinstance(exception, ChunkingError)


def log_technical_error(exception: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Log technical error details with context.

    Logs the full exception with traceback and any additional context
    for debugging purposes.

    Args:
        exception: The exception to log
        context: Optional dictionary with additional context information
    """
    error_msg = f"Technical error: {type(exception).__name__}: {str(exception)}"

    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        error_msg = f"{error_msg} | Context: {context_str}"

    logger.error(error_msg, exc_info=exception)
