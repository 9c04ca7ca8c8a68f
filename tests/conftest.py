"""Shared fixtures for the chunking test suite."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Generator, List

import pytest

from chunking.file_info import FileInfo

PROJECT_ROOT = Path("/project")


@pytest.fixture()
def make_text_file() -> Callable[..., FileInfo]:
    """Factory for text records rooted at /project."""

    def _make(name: str, token_count: int, text: str = "pass") -> FileInfo:
        return FileInfo.text_file(PROJECT_ROOT / name, name, text, token_count)

    return _make


@pytest.fixture()
def make_binary_file() -> Callable[..., FileInfo]:
    """Factory for binary records rooted at /project."""

    def _make(name: str, size_bytes: int, token_count: int = 0) -> FileInfo:
        return FileInfo.binary_file(PROJECT_ROOT / name, name, size_bytes, token_count)

    return _make


@pytest.fixture()
def restore_root_logging() -> Generator[None, None, None]:
    """Restore root logger handlers and level after a test reconfigures logging."""
    root = logging.getLogger()
    saved_handlers: List[logging.Handler] = list(root.handlers)
    saved_level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)
