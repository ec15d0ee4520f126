"""Write one index artifact for a directory."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ..extractors.core import DocumentExtractor
from ..models import DirectoryEntry
from ..templates.loader import TemplateLoader
from ..templates.merger import ContentMerger
from .options import IndexOptions
from .renderer import IndexRenderer
from .scanner import INDEX_FILE_NAME


class IndexFileGenerator:
    """Renders a listing, injects it into the index template and writes ``index.md``."""

    def __init__(self, options: IndexOptions | None = None, loader: TemplateLoader | None = None) -> None:
        self.options = options or IndexOptions()
        self.loader = loader or TemplateLoader()
        self.renderer = IndexRenderer(self.options.renderer_config())

    def render(self, entries: Sequence[DirectoryEntry]) -> str:
        listing = self.renderer.render(entries)
        template = self.loader.load(self.options.template_path, self.options.placeholder)
        content = template.replace(self.options.placeholder, listing)
        return self.apply_plugins(content)

    def apply_plugins(self, content: str) -> str:
        for plugin in self.options.plugins:
            fragments = DocumentExtractor([plugin]).extract_from_string(content)
            content = ContentMerger.from_methods([plugin]).merge(content, fragments)
        return content

    def save(self, directory: Path | str, entries: Sequence[DirectoryEntry]) -> Path:
        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / INDEX_FILE_NAME
        out_path.write_text(self.render(entries), encoding="utf-8")
        return out_path


__all__ = ["IndexFileGenerator"]
