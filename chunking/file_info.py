"""
File records consumed by the chunking engine.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union


@dataclass(frozen=True)
class TextContent:
    """Decoded text of a file (after any filtering)."""
    text: str


@dataclass(frozen=True)
class BinaryContent:
    """Placeholder for a binary file; only its size is kept."""
    size_bytes: int


FileContent = Union[TextContent, BinaryContent]


def split_lines(text: str) -> List[str]:
    """
    Split text into lines on ``\\n``, dropping a trailing ``\\r`` per line.

    A trailing newline does not produce an empty final line, so ``""``
    has zero lines and ``"a\\n"`` has one.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass(frozen=True)
class FileInfo:
    """Information about a file entering the chunking engine."""
    path: Path  # Absolute path
    relative_path: str  # Relative path from project root, used as sort key
    content: FileContent
    token_count: int = 0  # Precomputed; never re-derived by the engine
    encoding: Optional[str] = None  # Detected encoding (text files only)

    def __post_init__(self):
        if self.token_count < 0:
            raise ValueError(
                f"token_count must be non-negative, got {self.token_count} for {self.relative_path}"
            )

    @classmethod
    def text_file(
        cls,
        path: Union[str, Path],
        relative_path: str,
        text: str,
        token_count: int,
        encoding: Optional[str] = None,
    ) -> "FileInfo":
        """Create a record for a text file."""
        return cls(
            path=Path(path),
            relative_path=relative_path,
            content=TextContent(text),
            token_count=token_count,
            encoding=encoding,
        )

    @classmethod
    def binary_file(
        cls,
        path: Union[str, Path],
        relative_path: str,
        size_bytes: int,
        token_count: int = 0,
    ) -> "FileInfo":
        """Create a record for a binary file (token count is 0 unless forced)."""
        return cls(
            path=Path(path),
            relative_path=relative_path,
            content=BinaryContent(size_bytes),
            token_count=token_count,
        )

    @property
    def is_text(self) -> bool:
        return isinstance(self.content, TextContent)

    @property
    def is_binary(self) -> bool:
        return isinstance(self.content, BinaryContent)

    @property
    def text(self) -> Optional[str]:
        """Text content, or None for binary files."""
        if isinstance(self.content, TextContent):
            return self.content.text
        return None

    @property
    def size(self) -> int:
        """Size in bytes (UTF-8 length for text)."""
        if isinstance(self.content, TextContent):
            return len(self.content.text.encode("utf-8"))
        return self.content.size_bytes

    @property
    def line_count(self) -> Optional[int]:
        """Number of lines for text files, None for binary files."""
        text = self.text
        if text is None:
            return None
        return len(split_lines(text))
