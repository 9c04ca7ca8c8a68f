"""
Exception hierarchy for the chunking system.
"""

from pathlib import Path
from typing import Union


class ChunkingError(Exception):
    """Base exception for chunking operations."""
    pass


class FileTooLargeError(ChunkingError):
    """Exception raised when a file exceeds the chunk limit and cannot be split."""

    def __init__(self, path: Union[str, Path], size: int, limit: int):
        self.path = Path(path)
        self.size = size
        self.limit = limit
        super().__init__(
            f"File '{self.path}' is too large: {size} tokens exceeds limit of {limit} tokens"
        )


class NoFilesError(ChunkingError):
    """Exception raised when a scan produces no processable files."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(
            f"No processable files found in '{self.path}'. "
            "Check ignore patterns or file permissions."
        )


class ScanError(ChunkingError):
    """Exception raised when a scan root is missing or not a directory."""
    pass


class ConfigurationError(ChunkingError):
    """Exception raised when configuration is invalid."""
    pass
