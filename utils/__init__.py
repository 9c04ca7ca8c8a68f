"""Utility functions for the chunking pipeline."""

from .env_loader import load_env, ensure_env_loaded

from .error_formatting import (
    format_user_error,
    is_user_facing,
    log_technical_error
)

from .logging_config import (
    setup_logging,
    setup_logging_from_config
)

__all__ = [
    "load_env",
    "ensure_env_loaded",
    "format_user_error",
    "is_user_facing",
    "log_technical_error",
    "setup_logging",
    "setup_logging_from_config"
]
