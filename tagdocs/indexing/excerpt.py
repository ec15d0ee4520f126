"""Short single-sentence summaries of markdown files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

_PROSE_LINE_PATTERN = re.compile(r"^\w")
_SENTENCE_PATTERN = re.compile(r"[^.!?]+(?:[.!?]+|$)")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_SENTENCE_ENDINGS = (".", "!", "?")


@dataclass(frozen=True)
class ExcerptConfig:
    length: int = 75
    first_sentence_only: bool = True
    add_ellipsis: bool = True

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError(f"Excerpt length must be at least 1, got {self.length}")


def build_excerpt(content: str, config: ExcerptConfig | None = None) -> Optional[str]:
    """Derive a word-safe excerpt from ``content``.

    Lines that do not start with a word character (headings, list markers,
    annotations) and fenced code blocks are ignored. Returns ``None`` when no
    prose remains.
    """
    config = config or ExcerptConfig()
    segments = _sentences(content)
    if not segments:
        return None

    joined = " ".join(segments)
    candidate = segments[0] if config.first_sentence_only else joined
    truncated = len(joined) > config.length

    excerpt = _truncate(candidate, config.length).rstrip()
    if not excerpt:
        return None
    if not excerpt.endswith(_SENTENCE_ENDINGS):
        excerpt += "."
    if config.add_ellipsis and truncated:
        excerpt = excerpt.rstrip(" .") + "..."
    return excerpt


def _sentences(content: str) -> List[str]:
    lines: List[str] = []
    in_code = False
    for line in content.splitlines():
        if line.lstrip().startswith("```"):
            in_code = not in_code
            continue
        if in_code or not _PROSE_LINE_PATTERN.match(line):
            continue
        lines.append(line.strip())
    text = _WHITESPACE_PATTERN.sub(" ", " ".join(lines)).strip()
    return [segment.strip() for segment in _SENTENCE_PATTERN.findall(text) if segment.strip()]


def _truncate(text: str, length: int) -> str:
    if len(text) <= length:
        return text
    cut = text[:length]
    if _is_word_char(text[length]) and cut and _is_word_char(cut[-1]):
        head, _, tail = cut.rpartition(" ")
        # A lone letter left by the cut is noise.
        if head and len(tail) == 1:
            cut = head
    return cut


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


__all__ = ["ExcerptConfig", "build_excerpt"]
