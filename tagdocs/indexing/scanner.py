"""Directory scanning for index generation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from ..models import DirectoryEntry
from .links import create_markdown_link

INDEX_FILE_NAME = "index.md"
MARKDOWN_SUFFIX = ".md"


def format_entry(entry: str | Path) -> str:
    """Strip the parent directory prefix and any leading separators from ``entry``."""
    text = str(entry)
    parent = os.path.dirname(text)
    if parent and text.startswith(parent):
        text = text[len(parent):]
    return text.lstrip("/\\")


def contains_documentation(directory: Path) -> bool:
    """Whether any non-index markdown file exists below ``directory``."""
    for dirpath, dirnames, filenames in os.walk(directory):
        dirnames[:] = [name for name in dirnames if not name.startswith(".")]
        for filename in filenames:
            if filename.startswith(".") or filename == INDEX_FILE_NAME:
                continue
            if filename.endswith(MARKDOWN_SUFFIX):
                return True
    return False


class DirectoryScanner:
    """Lists the immediate children of a directory as ``DirectoryEntry`` values."""

    def __init__(
        self,
        *,
        markdown_links: bool = True,
        flatten: bool = False,
        only_documentation: bool = True,
    ) -> None:
        self.markdown_links = markdown_links
        self.flatten = flatten
        self.only_documentation = only_documentation

    def list_children(self, directory: Path | str) -> List[Path]:
        base = Path(directory)
        if not base.is_dir():
            return []

        children: List[Path] = []
        for name in sorted(os.listdir(base)):
            path = base / name
            if path.is_dir():
                if self.only_documentation and (
                    name.startswith(".") or not contains_documentation(path)
                ):
                    continue
            else:
                if name == INDEX_FILE_NAME:
                    continue
                if self.only_documentation and (
                    name.startswith(".") or not name.endswith(MARKDOWN_SUFFIX)
                ):
                    continue
            children.append(path)
        return children

    def scan(self, directory: Path | str) -> List[DirectoryEntry]:
        """Return entries for ``directory``; children are scanned too in flatten mode."""
        return [self._entry_for(path) for path in self.list_children(directory)]

    def _entry_for(self, path: Path) -> DirectoryEntry:
        basename = format_entry(path)
        if not path.is_dir():
            display = self.file_display_name(basename)
            return DirectoryEntry(
                source_path=path,
                display_name=display,
                is_directory=False,
                link_target=display,
                rendered_link=create_markdown_link(self.markdown_links, display, display),
            )

        display = self.directory_display_name(basename)
        has_index = (path / INDEX_FILE_NAME).is_file()
        link_target = display + INDEX_FILE_NAME if has_index else display
        children = tuple(self.scan(path)) if self.flatten else None
        return DirectoryEntry(
            source_path=path,
            display_name=display,
            is_directory=True,
            link_target=link_target,
            rendered_link=create_markdown_link(self.markdown_links, display, link_target),
            has_index=has_index,
            child_entries=children,
        )

    @staticmethod
    def directory_display_name(basename: str) -> str:
        return basename if basename.endswith("/") else basename + "/"

    @staticmethod
    def file_display_name(basename: str) -> str:
        return basename if basename.endswith(MARKDOWN_SUFFIX) else basename + MARKDOWN_SUFFIX


__all__ = [
    "DirectoryScanner",
    "INDEX_FILE_NAME",
    "MARKDOWN_SUFFIX",
    "contains_documentation",
    "format_entry",
]
