"""Settings shared by the index generator and tree processor."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from ..extractors.methods import DEFAULT_PLACEHOLDER, ExtractionMethod
from .excerpt import ExcerptConfig
from .renderer import LineCallback, RendererConfig


@dataclass(frozen=True)
class IndexOptions:
    """Index listing settings, as configured under ``templates.index``."""

    template_path: Optional[Path] = None
    placeholder: str = DEFAULT_PLACEHOLDER
    markdown_links: bool = True
    files_heading: Optional[str] = None
    directory_heading: Optional[str] = None
    flatten: bool = False
    files_first: bool = True
    excerpt: Optional[ExcerptConfig] = ExcerptConfig()
    line_callback: Optional[LineCallback] = None
    plugins: Tuple[ExtractionMethod, ...] = ()
    recursive: bool = True
    is_root: bool = False

    @property
    def link_to_index(self) -> bool:
        return self.recursive or self.is_root

    def renderer_config(self) -> RendererConfig:
        return RendererConfig(
            markdown_links=self.markdown_links,
            files_heading=self.files_heading,
            directory_heading=self.directory_heading,
            flatten=self.flatten,
            excerpt=self.excerpt,
            line_callback=self.line_callback,
            link_to_index=self.link_to_index,
            files_first=self.files_first,
        )


__all__ = ["IndexOptions"]
