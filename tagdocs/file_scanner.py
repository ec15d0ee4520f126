"""Source file discovery for documentation targets."""

from __future__ import annotations

import re
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
}

_BRACE_PATTERN = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` groups: ``src/*.{js,ts}`` -> ``["src/*.js", "src/*.ts"]``."""
    match = _BRACE_PATTERN.search(pattern)
    if match is None or "," not in match.group(1):
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: List[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


class FileScanner:
    """Collects the source files of one target.

    ``patterns`` and ``ignore`` are globs relative to ``cwd``. Ignore globs match
    either the file's relative POSIX path or any of its parent directories.
    """

    def __init__(
        self,
        cwd: Path | str,
        patterns: Sequence[str] = ("**/*",),
        ignore: Sequence[str] = (),
    ) -> None:
        self.cwd = Path(cwd).resolve()
        self.patterns = [expanded for pattern in patterns for expanded in expand_braces(pattern)]
        self.ignore = [expanded for pattern in ignore for expanded in expand_braces(pattern)]

    def collect(self) -> List[Path]:
        """Return matching files as sorted, de-duplicated absolute paths."""
        found = {path for path in self._iter_matches() if not self._should_skip(path)}
        return sorted(found)

    def _iter_matches(self) -> Iterator[Path]:
        for pattern in self.patterns:
            for path in self.cwd.glob(pattern):
                if path.is_file():
                    yield path

    def _should_skip(self, path: Path) -> bool:
        rel_parts = path.relative_to(self.cwd).parts
        if any(part in _EXCLUDED_DIRS for part in rel_parts[:-1]):
            return True
        rel_path = "/".join(rel_parts)
        candidates = [rel_path]
        candidates.extend("/".join(rel_parts[:depth]) for depth in range(1, len(rel_parts)))
        return any(
            fnmatchcase(candidate, pattern.rstrip("/"))
            for pattern in self.ignore
            for candidate in candidates
        )


__all__ = ["FileScanner", "expand_braces"]
