"""
Factory for creating ProjectScanner instances from configuration.
"""

import logging
from typing import Optional

from chunking.token_counter import TokenEstimator
from settings.config import AppConfig
from .project_scanner import ProjectScanner

logger = logging.getLogger(__name__)


def create_project_scanner(
    config: AppConfig,
    token_estimator: Optional[TokenEstimator] = None
) -> ProjectScanner:
    """
    Create a ProjectScanner configured from AppConfig.

    Args:
        config: Loaded application configuration
        token_estimator: Estimator to share with the chunker (default: the configured kind)

    Returns:
        Configured ProjectScanner instance

    Example:
        >>> scanner = create_project_scanner(ConfigManager().load_config())
        >>> files = scanner.scan_directory("./src")
    """
    scanner_config = config.scanner
    estimator = token_estimator or config.chunking.tokenizer.create()

    scanner = ProjectScanner(
        token_estimator=estimator,
        ignore_patterns=set(scanner_config.ignore_patterns),
        file_extensions=scanner_config.file_extensions,
        include_binary_files=scanner_config.include_binary_files,
        respect_gitignore=scanner_config.respect_gitignore,
    )

    logger.debug(
        f"Created ProjectScanner: extensions={scanner_config.file_extensions}, "
        f"include_binary_files={scanner_config.include_binary_files}, "
        f"respect_gitignore={scanner_config.respect_gitignore}, "
        f"extra_ignore_patterns={len(scanner_config.ignore_patterns)}"
    )
    return scanner
