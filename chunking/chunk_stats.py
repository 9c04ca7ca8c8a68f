"""
Summary statistics over a list of chunks.
"""

from dataclasses import dataclass
from typing import Sequence

from .chunk_manager import Chunk


@dataclass(frozen=True)
class ChunkStats:
    """Statistics describing the result of a chunking run."""
    total_chunks: int = 0
    total_files: int = 0
    total_tokens: int = 0
    avg_tokens_per_chunk: int = 0
    max_chunk_tokens: int = 0
    min_chunk_tokens: int = 0
    avg_utilization: float = 0.0
    split_duration: float = 0.0  # Seconds

    @classmethod
    def from_chunks(
        cls, chunks: Sequence[Chunk], capacity: int, split_duration: float = 0.0
    ) -> "ChunkStats":
        """
        Compute statistics for chunks.

        Args:
            chunks: Chunks produced by ChunkManager
            capacity: Effective per-chunk token capacity
            split_duration: Time spent creating the chunks, in seconds

        Returns:
            ChunkStats (all zeros except split_duration for no chunks)
        """
        if not chunks:
            return cls(split_duration=split_duration)

        token_counts = [chunk.total_tokens for chunk in chunks]
        total_tokens = sum(token_counts)

        return cls(
            total_chunks=len(chunks),
            total_files=sum(chunk.file_count for chunk in chunks),
            total_tokens=total_tokens,
            avg_tokens_per_chunk=total_tokens // len(chunks),
            max_chunk_tokens=max(token_counts),
            min_chunk_tokens=min(token_counts),
            avg_utilization=sum(chunk.utilization(capacity) for chunk in chunks) / len(chunks),
            split_duration=split_duration,
        )

    def summary(self) -> str:
        """Render a short human-readable report."""
        return "\n".join([
            f"Chunks:            {self.total_chunks}",
            f"Files:             {self.total_files}",
            f"Total tokens:      {self.total_tokens:,}",
            f"Avg chunk size:    {self.avg_tokens_per_chunk:,} tokens",
            f"Min chunk size:    {self.min_chunk_tokens:,} tokens",
            f"Max chunk size:    {self.max_chunk_tokens:,} tokens",
            f"Avg utilization:   {self.avg_utilization * 100:.1f}%",
            f"Split time:        {self.split_duration:.3f}s",
        ])
