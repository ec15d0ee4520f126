"""Render scanned directory entries into a markdown listing."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..errors import SourceFileNotFound
from ..models import DirectoryEntry
from .excerpt import ExcerptConfig, build_excerpt
from .links import create_markdown_link, list_indent_prefix
from .scanner import INDEX_FILE_NAME

LineCallback = Callable[[str, int, Optional[str]], str]


@dataclass(frozen=True)
class RendererConfig:
    markdown_links: bool = True
    files_heading: Optional[str] = None
    directory_heading: Optional[str] = None
    flatten: bool = False
    excerpt: Optional[ExcerptConfig] = None
    line_callback: Optional[LineCallback] = None
    link_to_index: bool = False
    files_first: bool = True


@dataclass(frozen=True)
class RenderState:
    """Accumulator threaded through one listing level."""

    content: str = ""
    line_number: int = 1
    files_processed: int = 0
    files_total: int = 0
    dirs_processed: int = 0
    dirs_total: int = 0
    indent_level: int = 0
    excerpt: Optional[str] = None
    show_headings: bool = True


class IndexRenderer:
    """Turns ``DirectoryEntry`` values into list lines, one per entry."""

    def __init__(self, config: RendererConfig | None = None) -> None:
        self.config = config or RendererConfig()

    def render(self, entries: Sequence[DirectoryEntry]) -> str:
        ordered = self.order(entries)
        state = self.initial_state(ordered)
        for entry in ordered:
            state = self.render_entry(state, entry)
            state = self.render_descendants(state, entry)
        return state.content

    def order(self, entries: Sequence[DirectoryEntry]) -> List[DirectoryEntry]:
        if not self.config.files_first:
            return list(entries)
        files = [entry for entry in entries if not entry.is_directory]
        directories = [entry for entry in entries if entry.is_directory]
        return files + directories

    def initial_state(
        self,
        entries: Sequence[DirectoryEntry],
        *,
        indent_level: int = 0,
        line_number: int = 1,
        show_headings: bool = True,
    ) -> RenderState:
        dirs_total = sum(1 for entry in entries if entry.is_directory)
        return RenderState(
            line_number=line_number,
            files_total=len(entries) - dirs_total,
            dirs_total=dirs_total,
            indent_level=indent_level,
            show_headings=show_headings,
        )

    def render_entry(self, state: RenderState, entry: DirectoryEntry, prefix: str = "") -> RenderState:
        """Render one entry at ``state``'s level and return the advanced state."""
        state = replace(state, excerpt=self.excerpt_for(entry))
        content = state.content + self.heading_for(state, entry) + self.line_for(state, entry, prefix)
        if entry.is_directory:
            return replace(
                state,
                content=content,
                line_number=state.line_number + 1,
                dirs_processed=state.dirs_processed + 1,
            )
        return replace(
            state,
            content=content,
            line_number=state.line_number + 1,
            files_processed=state.files_processed + 1,
        )

    def render_descendants(self, state: RenderState, entry: DirectoryEntry, prefix: str = "") -> RenderState:
        """Append ``entry``'s subtree depth-first, one indent level deeper (flatten mode only)."""
        if not self.config.flatten or not entry.child_entries:
            return state

        children = self.order(entry.child_entries)
        child_prefix = join_entry_path(prefix, entry.display_name)
        sub_state = self.initial_state(
            children,
            indent_level=state.indent_level + 1,
            line_number=state.line_number,
            show_headings=False,
        )
        for child in children:
            sub_state = self.render_entry(sub_state, child, child_prefix)
            sub_state = self.render_descendants(sub_state, child, child_prefix)

        return replace(
            state,
            content=state.content + sub_state.content,
            line_number=sub_state.line_number,
        )

    def heading_for(self, state: RenderState, entry: DirectoryEntry) -> str:
        if not state.show_headings:
            return ""
        if entry.is_directory:
            heading, processed, total = self.config.directory_heading, state.dirs_processed, state.dirs_total
        else:
            heading, processed, total = self.config.files_heading, state.files_processed, state.files_total
        if heading and processed == 0 and total > 0:
            return heading + "\n"
        return ""

    def line_for(self, state: RenderState, entry: DirectoryEntry, prefix: str = "") -> str:
        if self.config.line_callback is not None:
            line = self.config.line_callback(entry.display_name, state.line_number, state.excerpt)
            return line if line.endswith("\n") else line + "\n"

        link = create_markdown_link(
            self.config.markdown_links,
            entry.display_name,
            join_entry_path(prefix, self.link_target_for(entry)),
        )
        line = f"{list_indent_prefix(state.indent_level)}- {link}"
        if state.excerpt:
            line += f" - {state.excerpt}"
        return line + "\n"

    def link_target_for(self, entry: DirectoryEntry) -> str:
        target = entry.link_target
        if entry.is_directory and self.config.link_to_index and not target.endswith(INDEX_FILE_NAME):
            target = target.rstrip("/") + "/" + INDEX_FILE_NAME
        return target

    def excerpt_for(self, entry: DirectoryEntry) -> Optional[str]:
        if entry.is_directory or self.config.excerpt is None:
            return None
        path = Path(entry.source_path)
        if not path.is_file():
            raise SourceFileNotFound(f"Expected file {path} to exist and be readable")
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise SourceFileNotFound(f"Cannot read {path} as UTF-8: {exc}") from exc
        return build_excerpt(text, self.config.excerpt)


def join_entry_path(prefix: str, name: str) -> str:
    """Join ancestor path segments with ``/``."""
    if not prefix:
        return name
    return prefix.rstrip("/") + "/" + name


__all__ = ["IndexRenderer", "LineCallback", "RenderState", "RendererConfig", "join_entry_path"]
