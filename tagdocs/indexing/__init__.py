"""Directory listing generation: scanning, rendering and writing index pages."""

from __future__ import annotations

from .excerpt import ExcerptConfig, build_excerpt
from .generator import IndexFileGenerator
from .links import LinkValidator, create_markdown_link, list_indent_prefix
from .options import IndexOptions
from .processor import IndexTreeProcessor
from .renderer import IndexRenderer, LineCallback, RenderState, RendererConfig
from .scanner import INDEX_FILE_NAME, DirectoryScanner, format_entry

__all__ = [
    "DirectoryScanner",
    "ExcerptConfig",
    "INDEX_FILE_NAME",
    "IndexFileGenerator",
    "IndexOptions",
    "IndexRenderer",
    "IndexTreeProcessor",
    "LineCallback",
    "LinkValidator",
    "RenderState",
    "RendererConfig",
    "build_excerpt",
    "create_markdown_link",
    "format_entry",
    "list_indent_prefix",
]
