"""Turn one source file into a rendered documentation page."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .config import TagDocsConfig, TargetConfig
from .extractors.core import DocumentExtractor
from .logging import get_logger
from .models import ProcessedDocument, ProcessFailure, ProcessResult
from .postproc.formatters import Formatter, resolve_formatters
from .templates.loader import TemplateLoader
from .templates.locales import Locales
from .templates.merger import ContentMerger

MARKDOWN_SUFFIX = ".md"


class CodeFileProcessor:
    """Extracts, merges and formats the documentation of a single file."""

    def __init__(self, config: TagDocsConfig, loader: TemplateLoader | None = None) -> None:
        self.config = config
        self.loader = loader or TemplateLoader()
        self.formatters: List[Formatter] = resolve_formatters(config.formatters)
        self.logger = get_logger("processor")

    def process(self, file_path: Path | str, target: TargetConfig) -> ProcessResult:
        """Render ``file_path``; extraction and template errors propagate as ``TagDocsError``."""
        path = Path(file_path)
        label = self.source_label(path, target)
        methods = self.config.methods_for(target)

        fragments = DocumentExtractor(methods).extract_from_file(path)
        if not fragments:
            return ProcessFailure(
                error=f"No documentation found in {label}",
                no_documentation_found=True,
            )
        fragments.extend(Locales.for_file(path).to_fragments())

        merger = ContentMerger.from_methods(methods)
        fallback = "\n\n".join(merger.placeholders)
        template = self.loader.load(self.config.documentation_template_for(target), fallback)
        content = merger.merge_with_defaults(template, fragments)
        for formatter in self.formatters:
            content = formatter(content, str(path))

        relative = self.relative_to_cwd(path, target).parent
        return ProcessedDocument(
            content=content,
            output_directory=target.out_dir / relative,
            file_name=path.with_suffix(MARKDOWN_SUFFIX).name,
            source_label=label,
        )

    def write(self, document: ProcessedDocument) -> Path:
        document.output_directory.mkdir(parents=True, exist_ok=True)
        document.output_path.write_text(document.content, encoding="utf-8")
        self.logger.debug("Wrote %s", document.output_path)
        return document.output_path

    @staticmethod
    def relative_to_cwd(path: Path, target: TargetConfig) -> Path:
        """Path of ``path`` below the target cwd; symlinked directories keep their link name."""
        absolute = path if path.is_absolute() else Path.cwd() / path
        try:
            return absolute.relative_to(target.cwd)
        except ValueError:
            pass
        try:
            return path.resolve().relative_to(target.cwd)
        except ValueError:
            return Path(path.name)

    @classmethod
    def source_label(cls, path: Path, target: TargetConfig) -> str:
        return cls.relative_to_cwd(path, target).as_posix()


__all__ = ["CodeFileProcessor", "MARKDOWN_SUFFIX"]
