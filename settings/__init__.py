"""
Configuration for the chunking pipeline.
"""

from .config import AppConfig, ChunkingConfig, ConfigManager, LoggingConfig, ScannerConfig

__all__ = [
    "AppConfig",
    "ChunkingConfig",
    "ConfigManager",
    "LoggingConfig",
    "ScannerConfig",
]
