"""Recursive, bottom-up index generation over a directory tree."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..logging import get_logger
from ..templates.loader import TemplateLoader
from .generator import IndexFileGenerator
from .links import LinkValidator
from .options import IndexOptions
from .scanner import DirectoryScanner


class IndexTreeProcessor:
    """Writes an ``index.md`` into every directory that holds documentation.

    In recursive mode child directories are processed first and the parent is
    re-scanned afterwards, so links to freshly written child indexes resolve.
    """

    def __init__(
        self,
        options: IndexOptions | None = None,
        *,
        loader: TemplateLoader | None = None,
        link_validator: LinkValidator | None = None,
    ) -> None:
        self.options = options or IndexOptions()
        self.scanner = DirectoryScanner(
            markdown_links=self.options.markdown_links,
            flatten=self.options.flatten,
        )
        self.generator = IndexFileGenerator(self.options, loader=loader)
        self.link_validator = link_validator or LinkValidator()
        self.logger = get_logger("indexing")

    def process(self, base_dir: Path | str) -> List[Path]:
        """Process ``base_dir`` and return the written index paths in write order."""
        written: List[Path] = []
        self._process_directory(Path(base_dir), written)
        return written

    def _process_directory(self, directory: Path, written: List[Path]) -> None:
        entries = self.scanner.scan(directory)
        if not entries:
            self.logger.debug("No documentation entries in %s; skipping index", directory)
            return

        if self.options.recursive:
            for entry in entries:
                if entry.is_directory:
                    self._process_directory(entry.source_path, written)
            entries = self.scanner.scan(directory)

        index_path = self.generator.save(directory, entries)
        written.append(index_path)
        self.logger.debug("Wrote index %s (%d entries)", index_path, len(entries))

        for issue in self.link_validator.validate(
            index_path.read_text(encoding="utf-8"), root=directory
        ):
            self.logger.warning("%s: %s", index_path, issue)


__all__ = ["IndexTreeProcessor"]
