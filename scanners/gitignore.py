"""
.gitignore support for the project scanner.

Rules are collected per directory while walking: the root's
``.git/info/exclude`` and ``.gitignore`` first, then any nested
``.gitignore`` as its directory is entered. Each file's patterns are
matched against paths relative to the directory that holds it.
"""

import logging
from pathlib import Path
from typing import List, Tuple

import pathspec

logger = logging.getLogger(__name__)

GITIGNORE_FILE = ".gitignore"


class GitIgnoreRules:
    """Accumulated .gitignore rules for one scan."""

    def __init__(self):
        self._specs: List[Tuple[str, pathspec.GitIgnoreSpec]] = []

    def __len__(self) -> int:
        return len(self._specs)

    def load_root(self, project_root: Path) -> None:
        """Load the repository-wide exclude file and the root .gitignore."""
        self._load_file(project_root / ".git" / "info" / "exclude", "")
        self.load_directory(project_root, "")

    def load_directory(self, directory: Path, relative_dir: str) -> None:
        """
        Load the .gitignore of a directory, if it has one.

        Args:
            directory: Absolute directory path
            relative_dir: POSIX path of the directory relative to the project root ("" for the root)
        """
        self._load_file(directory / GITIGNORE_FILE, relative_dir)

    def is_ignored(self, relative_path: str, is_dir: bool = False) -> bool:
        """
        Check a project-relative POSIX path against every applicable rule file.

        Negations apply within the file that declares them.
        """
        for base, spec in self._specs:
            if base:
                if not relative_path.startswith(base + "/"):
                    continue
                candidate = relative_path[len(base) + 1:]
            else:
                candidate = relative_path
            if is_dir:
                candidate += "/"
            if spec.match_file(candidate):
                return True
        return False

    def _load_file(self, ignore_file: Path, relative_dir: str) -> None:
        if not ignore_file.is_file():
            return
        try:
            lines = ignore_file.read_text(encoding="utf-8", errors="replace").splitlines()
        except OSError as e:
            logger.warning(f"Failed to read {ignore_file}: {e}")
            return

        spec = pathspec.GitIgnoreSpec.from_lines(lines)
        self._specs.append((relative_dir, spec))
        logger.debug(f"Loaded {len(spec.patterns)} ignore patterns from {ignore_file}")
