"""Error taxonomy shared by extraction, templating and indexing."""

from __future__ import annotations


class TagDocsError(RuntimeError):
    """Base error. ``fatal`` tells the caller whether to abort the current unit of work."""

    fatal: bool = True

    def __init__(self, message: str, *, fatal: bool | None = None) -> None:
        super().__init__(message)
        if fatal is not None:
            self.fatal = fatal


class InvalidTag(TagDocsError):
    """Raised when a tag name is empty after stripping non-word characters."""


class NoContentFound(TagDocsError):
    """Raised when an extraction method found nothing and its absence is fatal."""

    fatal = False


class TemplateNotFound(TagDocsError):
    """Raised when a configured template file cannot be read."""


class SourceFileNotFound(TagDocsError):
    """Raised when a source or listed markdown file does not exist."""


__all__ = [
    "InvalidTag",
    "NoContentFound",
    "SourceFileNotFound",
    "TagDocsError",
    "TemplateNotFound",
]
