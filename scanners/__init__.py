"""
Project scanning utilities.
"""

from .project_scanner import ProjectScanner, ScanStats
from .file_reader import decode_with_fallback, has_binary_extension, is_binary_content
from .gitignore import GitIgnoreRules
from .scanner_factory import create_project_scanner

__all__ = [
    "ProjectScanner",
    "ScanStats",
    "GitIgnoreRules",
    "decode_with_fallback",
    "has_binary_extension",
    "is_binary_content",
    "create_project_scanner",
]
