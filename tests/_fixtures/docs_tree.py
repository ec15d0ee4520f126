"""Helper utilities for constructing throwaway source and documentation trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping


class DocsTreeBuilder:
    """Writes ``path -> contents`` entries below a temporary root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "tree"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write files, dedenting their contents; missing parents are created."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def mkdir(self, relative: str) -> Path:
        path = self.root / relative
        path.mkdir(parents=True, exist_ok=True)
        return path

    def read(self, relative: str) -> str:
        return (self.root / relative).read_text(encoding="utf-8")

    def path(self, relative: str = "") -> Path:
        """Return the tree root, or a path below it."""
        return self.root / relative if relative else self.root


__all__ = ["DocsTreeBuilder"]
