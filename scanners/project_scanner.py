"""
Project scanner for discovering files and preparing them for chunking.

Walks a directory, skips hidden entries and anything matched by the ignore
list or a .gitignore, separates text from binary files, and estimates each
text file's token count so the result can be handed straight to ChunkManager.
"""

import fnmatch
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set, Union

from chunking.exceptions import ScanError
from chunking.file_info import FileInfo
from chunking.token_counter import SimpleTokenEstimator, TokenEstimator
from .file_reader import decode_with_fallback, has_binary_extension, is_binary_content
from .gitignore import GitIgnoreRules

logger = logging.getLogger(__name__)


@dataclass
class ScanStats:
    """Counters collected during a scan."""
    total_files: int = 0
    text_files: int = 0
    binary_files: int = 0
    skipped_files: int = 0
    errors: int = 0
    gitignored: int = 0


class ProjectScanner:
    """
    Scans a directory for files and reads their contents.

    Filters out common ignore patterns like .git/, __pycache__/ and venv/,
    plus anything matched by the project's .gitignore files.
    Results are sorted by relative path for deterministic chunking.
    """

    # Common ignore patterns
    DEFAULT_IGNORE_PATTERNS: Set[str] = {
        ".git",
        ".svn",
        ".hg",
        "__pycache__",
        "venv",
        "env",
        ".venv",
        "node_modules",
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        ".tox",
        "dist",
        "build",
        "*.egg-info",
        ".idea",
        ".vscode",
        ".DS_Store",
        "target",  # Rust, Java
        "vendor",  # Go, Ruby, PHP
        "*.lock",
        "*.log",
        "*.tmp",
    }

    def __init__(
        self,
        token_estimator: Optional[TokenEstimator] = None,
        ignore_patterns: Optional[Set[str]] = None,
        file_extensions: Optional[List[str]] = None,
        include_binary_files: bool = False,
        respect_gitignore: bool = True,
    ):
        """
        Initialize the project scanner.

        Args:
            token_estimator: Estimator for text token counts (default: simple)
            ignore_patterns: Additional patterns to ignore (merged with defaults)
            file_extensions: Only scan these extensions (default: every file)
            include_binary_files: Keep binary files as size-only records
            respect_gitignore: Skip paths matched by .gitignore files
        """
        self.token_estimator = token_estimator or SimpleTokenEstimator()
        self.ignore_patterns = self.DEFAULT_IGNORE_PATTERNS.copy()
        if ignore_patterns:
            self.ignore_patterns.update(ignore_patterns)

        self.file_extensions = None
        if file_extensions is not None:
            self.file_extensions = {
                ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in file_extensions
            }
        self.include_binary_files = include_binary_files
        self.respect_gitignore = respect_gitignore
        self.last_stats = ScanStats()

    def scan_directory(self, directory_path: Union[str, Path]) -> List[FileInfo]:
        """
        Scan a directory for files.

        Args:
            directory_path: Path to the directory to scan (absolute or relative)

        Returns:
            List of FileInfo objects sorted by relative path

        Raises:
            ScanError: If the directory does not exist or is not a directory
        """
        project_root = Path(directory_path).resolve()

        if not project_root.exists():
            raise ScanError(f"Directory does not exist: {project_root}")
        if not project_root.is_dir():
            raise ScanError(f"Path is not a directory: {project_root}")

        logger.info(f"Scanning directory: {project_root}")

        stats = ScanStats()
        files: List[FileInfo] = []
        gitignore = GitIgnoreRules()
        if self.respect_gitignore:
            gitignore.load_root(project_root)

        for root, dirnames, filenames in os.walk(project_root):
            root_path = Path(root)
            relative_dir = root_path.relative_to(project_root).as_posix()
            if relative_dir == ".":
                relative_dir = ""
            elif self.respect_gitignore:
                gitignore.load_directory(root_path, relative_dir)

            # Prune ignored directories in place so os.walk skips them
            dirnames[:] = sorted(
                d for d in dirnames
                if not self._is_ignored(d)
                and not self._is_gitignored(gitignore, stats, relative_dir, d, is_dir=True)
            )

            for filename in filenames:
                if self._is_ignored(filename):
                    continue
                if self._is_gitignored(gitignore, stats, relative_dir, filename):
                    continue
                file_path = root_path / filename
                if file_path.is_symlink() or not file_path.is_file():
                    continue
                if self.file_extensions is not None and file_path.suffix.lower() not in self.file_extensions:
                    continue

                stats.total_files += 1
                file_info = self._read_file(file_path, project_root, stats)
                if file_info is not None:
                    files.append(file_info)

        # Sort files by relative path for deterministic ordering
        files.sort(key=lambda f: f.relative_path)
        self.last_stats = stats

        logger.info(
            f"Scan complete: {stats.total_files} total, {stats.text_files} text, "
            f"{stats.binary_files} binary, {stats.skipped_files} skipped, "
            f"{stats.gitignored} gitignored, {stats.errors} errors"
        )
        if stats.errors:
            logger.warning(f"Encountered {stats.errors} errors during scanning (non-fatal)")
        return files

    def _is_ignored(self, name: str) -> bool:
        """Check a single path component against hidden-file and ignore rules."""
        if name.startswith("."):
            return True
        if name in self.ignore_patterns:
            return True
        return any(
            fnmatch.fnmatch(name, pattern) for pattern in self.ignore_patterns if "*" in pattern
        )

    def _is_gitignored(
        self,
        gitignore: GitIgnoreRules,
        stats: ScanStats,
        relative_dir: str,
        name: str,
        is_dir: bool = False,
    ) -> bool:
        """Check an entry of relative_dir against the loaded .gitignore rules."""
        if not gitignore:
            return False
        relative_path = f"{relative_dir}/{name}" if relative_dir else name
        if not gitignore.is_ignored(relative_path, is_dir=is_dir):
            return False
        logger.debug(f"Skipping gitignored {'directory' if is_dir else 'file'}: {relative_path}")
        stats.gitignored += 1
        return True

    def _read_file(self, file_path: Path, project_root: Path, stats: ScanStats) -> Optional[FileInfo]:
        """Read a file and create a FileInfo record, or None if it is skipped."""
        relative_path = file_path.relative_to(project_root).as_posix()

        try:
            data = file_path.read_bytes()
        except OSError as e:
            logger.warning(f"Failed to read {file_path}: {e}")
            stats.errors += 1
            return None

        if has_binary_extension(file_path) or is_binary_content(data):
            stats.binary_files += 1
            if not self.include_binary_files:
                stats.skipped_files += 1
                return None
            return FileInfo.binary_file(file_path, relative_path, len(data))

        content, encoding = decode_with_fallback(data)
        stats.text_files += 1
        return FileInfo.text_file(
            path=file_path,
            relative_path=relative_path,
            text=content,
            token_count=self.token_estimator.estimate(content),
            encoding=encoding,
        )
