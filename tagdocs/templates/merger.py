"""Merge extracted fragments into template placeholders."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Collection, Dict, Iterable, List, Mapping, Sequence

from ..extractors.methods import (
    DEFAULT_ATTRIBUTE_FORMAT,
    DEFAULT_DIVIDER,
    DEFAULT_TEXT,
    ExtractionMethod,
)
from ..models import ExtractedFragment


@dataclass(frozen=True)
class PlaceholderFormat:
    """How fragments targeting one placeholder are rendered."""

    attribute_format: str = DEFAULT_ATTRIBUTE_FORMAT
    divider: str = DEFAULT_DIVIDER
    default_text: str = DEFAULT_TEXT


class ContentMerger:
    """Groups fragments by placeholder and splices the rendered blocks into a template.

    Example::

        merger = ContentMerger({"%content%": PlaceholderFormat()})
        merger.merge("# Doc\\n%content%", [ExtractedFragment("Body", "%content%", {"name": "x"})])
        # '# Doc\\n### *name*: x\\nBody'
    """

    def __init__(
        self,
        formats: Mapping[str, PlaceholderFormat] | None = None,
        *,
        default_format: PlaceholderFormat | None = None,
    ) -> None:
        self.formats: Dict[str, PlaceholderFormat] = dict(formats or {})
        self.default_format = default_format or PlaceholderFormat()

    @classmethod
    def from_methods(cls, methods: Iterable[ExtractionMethod]) -> "ContentMerger":
        formats: Dict[str, PlaceholderFormat] = {}
        for method in methods:
            formats.setdefault(
                method.placeholder,
                PlaceholderFormat(
                    attribute_format=method.attribute_format,
                    divider=method.divider,
                    default_text=method.default_text,
                ),
            )
        return cls(formats)

    @property
    def placeholders(self) -> List[str]:
        return list(self.formats)

    def format_for(self, placeholder: str) -> PlaceholderFormat:
        return self.formats.get(placeholder, self.default_format)

    @staticmethod
    def group(fragments: Iterable[ExtractedFragment]) -> Dict[str, List[ExtractedFragment]]:
        """Group fragments by placeholder, preserving first-seen order."""
        grouped: Dict[str, List[ExtractedFragment]] = {}
        for fragment in fragments:
            grouped.setdefault(fragment.target_placeholder, []).append(fragment)
        return grouped

    def render_attributes(self, fragment: ExtractedFragment, attribute_format: str) -> str:
        return "".join(
            attribute_format.replace("{key}", key).replace("{value}", value)
            for key, value in fragment.attributes.items()
        )

    def render_block(self, placeholder: str, fragments: Sequence[ExtractedFragment]) -> str:
        """Render every fragment of one placeholder group, dividers between them."""
        fmt = self.format_for(placeholder)
        parts = [
            self.render_attributes(fragment, fmt.attribute_format) + fragment.content
            for fragment in fragments
        ]
        return fmt.divider.join(parts)

    def render_blocks(self, fragments: Iterable[ExtractedFragment]) -> Dict[str, str]:
        return {
            placeholder: self.render_block(placeholder, group)
            for placeholder, group in self.group(fragments).items()
        }

    def merge(self, template: str, fragments: Iterable[ExtractedFragment]) -> str:
        return _substitute(template, self.render_blocks(fragments))

    def default_texts(self, produced: Collection[str] = ()) -> Dict[str, str]:
        return {
            placeholder: fmt.default_text
            for placeholder, fmt in self.formats.items()
            if placeholder not in produced
        }

    def apply_default_text(self, text: str, produced: Collection[str] = ()) -> str:
        """Replace known placeholders that produced no fragments with their fallback text."""
        return _substitute(text, self.default_texts(produced))

    def merge_with_defaults(self, template: str, fragments: Iterable[ExtractedFragment]) -> str:
        """Merge fragments and fill the remaining known placeholders in one substitution pass."""
        blocks = self.render_blocks(fragments)
        replacements = self.default_texts(produced=blocks)
        replacements.update(blocks)
        return _substitute(template, replacements)


def _substitute(text: str, replacements: Mapping[str, str]) -> str:
    # One pass, so replacement text is never scanned for other placeholders.
    keys = sorted((key for key in replacements if key), key=len, reverse=True)
    if not keys:
        return text
    pattern = re.compile("|".join(re.escape(key) for key in keys))
    return pattern.sub(lambda match: replacements[match.group(0)], text)


__all__ = ["ContentMerger", "PlaceholderFormat"]
