"""
Chunk manager for grouping files into token-based chunks.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .exceptions import ConfigurationError, FileTooLargeError
from .file_info import FileInfo
from .file_splitter import LargeFileSplitter
from .token_counter import SimpleTokenEstimator, TokenEstimator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Chunk:
    """A chunk of files grouped together."""
    index: int
    files: Tuple[FileInfo, ...]
    total_tokens: int

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def total_lines(self) -> int:
        """Sum of line counts of the text files in this chunk."""
        return sum(f.line_count or 0 for f in self.files)

    def utilization(self, max_tokens: int) -> float:
        """Fraction of max_tokens used by this chunk (0.0 if max_tokens is 0)."""
        if max_tokens == 0:
            return 0.0
        return self.total_tokens / max_tokens


class ChunkBuilder:
    """Accumulates files for a single chunk until it is built."""

    def __init__(self, index: int, max_tokens: int):
        self.index = index
        self.max_tokens = max_tokens
        self.files: List[FileInfo] = []
        self.current_tokens = 0

    def can_fit(self, tokens: int) -> bool:
        return self.current_tokens + tokens <= self.max_tokens

    def add_file(self, file_info: FileInfo) -> None:
        self.files.append(file_info)
        self.current_tokens += file_info.token_count

    def build(self) -> Optional[Chunk]:
        """Return the finished chunk, or None if no file was added."""
        if not self.files:
            return None
        return Chunk(index=self.index, files=tuple(self.files), total_tokens=self.current_tokens)


class ChunkManager:
    """
    Manages chunking of files based on token limits.

    Packs files greedily in input order: a file joins the current chunk if
    it fits, otherwise the current chunk is closed and a new one started.
    A text file that alone exceeds the limit is split into overlapping
    line-based parts, each emitted as its own chunk. A binary file that
    exceeds the limit aborts the whole operation.

    Input order is preserved; callers sort by relative path beforehand.
    """

    def __init__(
        self,
        max_tokens: int,
        overlap_tokens: int = 0,
        token_estimator: Optional[TokenEstimator] = None,
        prefer_line_boundaries: bool = True,
    ):
        """
        Initialize chunk manager.

        Args:
            max_tokens: Effective capacity per chunk (already net of any safety margin)
            overlap_tokens: Overlap budget between parts of a split file
            token_estimator: Estimator for large-file splitting (default: simple)
            prefer_line_boundaries: Recorded for reporting; parts are always cut on lines

        Raises:
            ConfigurationError: If max_tokens is not positive or overlap_tokens is negative
        """
        if max_tokens <= 0:
            raise ConfigurationError(f"max_tokens must be greater than 0, got {max_tokens}")
        if overlap_tokens < 0:
            raise ConfigurationError(f"overlap_tokens must be non-negative, got {overlap_tokens}")

        self.max_tokens = max_tokens
        self.overlap_tokens = overlap_tokens
        self.token_estimator = token_estimator or SimpleTokenEstimator()
        self.prefer_line_boundaries = prefer_line_boundaries
        self.file_splitter = LargeFileSplitter(max_tokens, overlap_tokens, self.token_estimator)

        logger.info(
            f"ChunkManager initialized with max_tokens={self.max_tokens}, "
            f"overlap_tokens={self.overlap_tokens}, "
            f"estimator={type(self.token_estimator).__name__}, "
            f"prefer_line_boundaries={self.prefer_line_boundaries}"
        )

    def create_chunks(self, files: Sequence[FileInfo]) -> List[Chunk]:
        """
        Create chunks from an ordered list of files.

        Args:
            files: FileInfo records in the order they should appear

        Returns:
            List of Chunk objects with indices 0..N-1 (empty for empty input)

        Raises:
            FileTooLargeError: If a binary file exceeds max_tokens
        """
        if not files:
            return []

        chunks: List[Chunk] = []
        builder = ChunkBuilder(0, self.max_tokens)

        for file_info in files:
            if file_info.token_count <= self.max_tokens:
                if not builder.can_fit(file_info.token_count):
                    builder = self._finalize(builder, chunks)
                builder.add_file(file_info)
            else:
                builder = self._handle_large_file(file_info, builder, chunks)

        self._finalize(builder, chunks)

        logger.info(f"Created {len(chunks)} chunks from {len(files)} files")
        return chunks

    def _finalize(self, builder: ChunkBuilder, chunks: List[Chunk]) -> ChunkBuilder:
        """Close builder into chunks (if non-empty) and return a fresh builder."""
        chunk = builder.build()
        if chunk is not None:
            chunks.append(chunk)
        return ChunkBuilder(len(chunks), self.max_tokens)

    def _handle_large_file(
        self, file_info: FileInfo, builder: ChunkBuilder, chunks: List[Chunk]
    ) -> ChunkBuilder:
        """Emit each part of an oversized file as its own chunk."""
        if file_info.is_binary:
            raise FileTooLargeError(file_info.path, file_info.token_count, self.max_tokens)

        logger.debug(
            f"File '{file_info.relative_path}' exceeds limit "
            f"({file_info.token_count} tokens), splitting into parts"
        )

        builder = self._finalize(builder, chunks)
        parts = self.file_splitter.split(file_info)

        for part in parts:
            builder.add_file(part)
            builder = self._finalize(builder, chunks)

        logger.info(f"Split file {file_info.relative_path} into {len(parts)} chunks")
        return builder
