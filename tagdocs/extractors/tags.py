"""Tag pattern composition and attribute parsing."""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Tuple

from ..errors import InvalidTag

_NON_WORD_PATTERN = re.compile(r"\W+")
_ATTRIBUTE_PATTERN = re.compile(r'(\w+)="([^"]*)"')


def sanitize_tag(tag: str) -> str:
    """Strip every non-word character from ``tag``; raise ``InvalidTag`` if nothing is left."""
    raw = _NON_WORD_PATTERN.sub("", tag or "")
    if not raw:
        raise InvalidTag(f"Invalid tag: {tag!r}")
    return raw


def compose_pattern(raw_tag: str) -> re.Pattern[str]:
    """Return a non-greedy, newline-spanning pattern for ``<raw_tag ...>body</raw_tag>``.

    Group 1 is the literal opening tag, group 2 the body.
    """
    escaped = re.escape(raw_tag)
    return re.compile(
        rf"(<{escaped}(?:\s[^>]*)?>)(.*?)</{escaped}>",
        re.DOTALL,
    )


def parse_attributes(start_tag: str) -> Dict[str, str]:
    """Collect ``key="value"`` pairs from a literal opening tag."""
    return {key: value for key, value in _ATTRIBUTE_PATTERN.findall(start_tag)}


def find_tags(text: str, tag: str) -> List[Tuple[Dict[str, str], str]]:
    """Return ``(attributes, body)`` for every ``tag`` block in ``text``."""
    pattern = compose_pattern(sanitize_tag(tag))
    return [(parse_attributes(match.group(1)), match.group(2)) for match in pattern.finditer(text)]


def compose_tag(tag: str, attributes: Mapping[str, str] | None, body: str) -> str:
    """Build the canonical tag text for ``body``."""
    raw = sanitize_tag(tag)
    rendered = "".join(f' {key}="{value}"' for key, value in (attributes or {}).items())
    return f"<{raw}{rendered}>{body}</{raw}>"


__all__ = ["compose_pattern", "compose_tag", "find_tags", "parse_attributes", "sanitize_tag"]
