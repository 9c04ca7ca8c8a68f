"""
Environment variable loader using python-dotenv.

Loads a .env file, by default from the current working directory, so that
the CHUNK_* and LOG_LEVEL overrides can live next to config.yaml.
"""

import logging
from pathlib import Path
from typing import Optional, Set, Union

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_loaded_files: Set[Path] = set()


def _resolve_env_file(env_file: Optional[Union[str, Path]]) -> Path:
    if env_file is None:
        return Path.cwd() / ".env"
    return Path(env_file).resolve()


def load_env(env_file: Optional[Union[str, Path]] = None) -> bool:
    """
    Load environment variables from .env file.

    Args:
        env_file: Optional path to .env file. If not provided, looks for .env
                  in the current working directory.

    Returns:
        True if .env file was found and loaded, False otherwise.
    """
    env_file = _resolve_env_file(env_file)

    if not env_file.exists():
        logger.debug(f".env file not found at {env_file}. Using system environment variables.")
        return False

    load_dotenv(env_file, override=False)  # Don't override existing env vars
    logger.info(f"Loaded environment variables from {env_file}")
    return True


def ensure_env_loaded(env_file: Optional[Union[str, Path]] = None) -> None:
    """
    Ensure a .env file is loaded (idempotent).

    Each file is loaded at most once per process.
    """
    env_file = _resolve_env_file(env_file)
    if env_file not in _loaded_files:
        load_env(env_file)
        _loaded_files.add(env_file)
