"""
Workflows built on top of the chunking engine.
"""

from .chunking_workflow import ChunkingResult, ChunkingWorkflow, run_chunking

__all__ = [
    "ChunkingResult",
    "ChunkingWorkflow",
    "run_chunking",
]
