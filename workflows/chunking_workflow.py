"""
Chunking workflow: scan a project, pack its files into chunks, report stats.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from chunking.chunk_manager import Chunk, ChunkManager
from chunking.chunk_stats import ChunkStats
from chunking.exceptions import ChunkingError, NoFilesError
from scanners.scanner_factory import create_project_scanner
from settings.config import AppConfig, ConfigManager
from utils.error_formatting import log_technical_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChunkingResult:
    """Chunks produced for a project together with their statistics."""
    project_path: Path
    chunks: List[Chunk]
    stats: ChunkStats


class ChunkingWorkflow:
    """
    Runs the scan -> split pipeline for one configuration.

    The scanner and the chunk manager share one token estimator so that
    precomputed file token counts and part measurements agree.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig()
        chunking_config = self.config.chunking

        self.token_estimator = chunking_config.tokenizer.create()
        self.scanner = create_project_scanner(self.config, self.token_estimator)
        self.chunk_manager = ChunkManager(
            max_tokens=chunking_config.effective_chunk_size(),
            overlap_tokens=chunking_config.overlap_tokens,
            token_estimator=self.token_estimator,
            prefer_line_boundaries=chunking_config.prefer_line_boundaries,
        )

    def run(self, project_path: Union[str, Path]) -> ChunkingResult:
        """
        Scan the project and create chunks.

        Args:
            project_path: Directory to chunk

        Returns:
            ChunkingResult with ordered chunks and statistics

        Raises:
            ScanError: If project_path is not a directory
            NoFilesError: If the scan found no processable files
            FileTooLargeError: If a binary file exceeds the chunk limit
        """
        project_path = Path(project_path)
        files = self.scanner.scan_directory(project_path)
        if not files:
            raise NoFilesError(project_path)

        split_start = time.perf_counter()
        chunks = self.chunk_manager.create_chunks(files)
        split_duration = time.perf_counter() - split_start

        stats = ChunkStats.from_chunks(chunks, self.chunk_manager.max_tokens, split_duration)
        logger.info(
            f"Chunked {stats.total_files} file entries into {stats.total_chunks} chunks "
            f"({stats.total_tokens} tokens, avg utilization {stats.avg_utilization * 100:.1f}%) "
            f"in {split_duration:.3f}s"
        )
        return ChunkingResult(project_path=project_path, chunks=chunks, stats=stats)


def run_chunking(
    project_path: Union[str, Path],
    config_path: Optional[str] = None
) -> ChunkingResult:
    """
    Load configuration and chunk a project.

    Technical details of any ChunkingError are logged before it is re-raised.

    Args:
        project_path: Directory to chunk
        config_path: Path to config.yaml (default: ./config.yaml)

    Returns:
        ChunkingResult for the project
    """
    try:
        config = ConfigManager(config_path).load_config()
        return ChunkingWorkflow(config).run(project_path)
    except ChunkingError as e:
        log_technical_error(e, {"operation": "run_chunking", "project_path": project_path})
        raise
