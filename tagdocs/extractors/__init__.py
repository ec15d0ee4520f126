"""Extraction methods and the dispatcher that runs them."""

from __future__ import annotations

from .core import DocumentExtractor, ExtractionResult, NoMatch, clean_body, extract
from .methods import (
    DEFAULT_ATTRIBUTE_FORMAT,
    DEFAULT_DIVIDER,
    DEFAULT_PLACEHOLDER,
    DEFAULT_TEXT,
    METHOD_KINDS,
    CallbackMethod,
    CopyMethod,
    DelimiterMethod,
    ExtractionMethod,
    RegexMethod,
    TagMethod,
)
from .tags import compose_tag, parse_attributes, sanitize_tag

__all__ = [
    "CallbackMethod",
    "CopyMethod",
    "DEFAULT_ATTRIBUTE_FORMAT",
    "DEFAULT_DIVIDER",
    "DEFAULT_PLACEHOLDER",
    "DEFAULT_TEXT",
    "DelimiterMethod",
    "DocumentExtractor",
    "ExtractionMethod",
    "ExtractionResult",
    "METHOD_KINDS",
    "NoMatch",
    "RegexMethod",
    "TagMethod",
    "clean_body",
    "compose_tag",
    "extract",
    "parse_attributes",
    "sanitize_tag",
]
