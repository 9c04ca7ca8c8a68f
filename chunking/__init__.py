"""
Chunking system for grouping files into token-based chunks.

Provides ChunkManager for packing files into size-bounded chunks and the
token estimators used to size them.
"""

from .chunk_manager import ChunkManager, Chunk, ChunkBuilder
from .chunk_stats import ChunkStats
from .exceptions import (
    ChunkingError,
    ConfigurationError,
    FileTooLargeError,
    NoFilesError,
    ScanError,
)
from .file_info import BinaryContent, FileContent, FileInfo, TextContent
from .file_splitter import LargeFileSplitter, SplitParameters
from .token_counter import (
    EnhancedTokenEstimator,
    SimpleTokenEstimator,
    TokenEstimator,
    TokenizerKind,
    estimate_tokens,
)

__all__ = [
    "ChunkManager",
    "Chunk",
    "ChunkBuilder",
    "ChunkStats",
    "ChunkingError",
    "ConfigurationError",
    "FileTooLargeError",
    "NoFilesError",
    "ScanError",
    "BinaryContent",
    "FileContent",
    "FileInfo",
    "TextContent",
    "LargeFileSplitter",
    "SplitParameters",
    "EnhancedTokenEstimator",
    "SimpleTokenEstimator",
    "TokenEstimator",
    "TokenizerKind",
    "estimate_tokens",
]
