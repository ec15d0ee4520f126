"""Extraction dispatch and the multi-method document extractor."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Union

from ..errors import NoContentFound, SourceFileNotFound
from ..logging import get_logger
from ..models import ExtractedFragment
from .methods import (
    CallbackMethod,
    CopyMethod,
    DelimiterMethod,
    ExtractionMethod,
    RegexMethod,
    TagMethod,
)
from .tags import find_tags

_BLANK_RUN_PATTERN = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")
_FENCE_PATTERN = re.compile(r"^[ \t]*```.*$", re.MULTILINE)

logger = get_logger("extractors")


@dataclass(frozen=True)
class NoMatch:
    """Non-throwing signal that a method found no content."""

    message: str
    fatal: bool = False


ExtractionResult = Union[List[ExtractedFragment], NoMatch]


def clean_body(body: str) -> str:
    """Trim ``body`` and collapse blank-line runs outside fenced code blocks."""
    text = body.strip()
    if "```" not in text:
        return _BLANK_RUN_PATTERN.sub("\n\n", text)

    pieces: List[str] = []
    position = 0
    in_code = False
    for fence in _FENCE_PATTERN.finditer(text):
        chunk = text[position:fence.start()]
        pieces.append(chunk if in_code else _BLANK_RUN_PATTERN.sub("\n\n", chunk))
        pieces.append(fence.group(0))
        position = fence.end()
        in_code = not in_code
    tail = text[position:]
    pieces.append(tail if in_code else _BLANK_RUN_PATTERN.sub("\n\n", tail))
    return "".join(pieces)


def extract(text: str, method: ExtractionMethod) -> ExtractionResult:
    """Run one extraction method over ``text``."""
    handler = _HANDLERS.get(method.kind)
    if handler is None:
        raise TypeError(f"Unsupported extraction method: {type(method).__name__}")
    result = handler(text, method)
    if isinstance(result, NoMatch):
        return result
    return [
        ExtractedFragment(
            content=clean_body(body),
            target_placeholder=method.placeholder,
            attributes=dict(attributes),
        )
        for attributes, body in result
    ]


def _extract_tags(text: str, method: TagMethod):
    found = find_tags(text, method.tag)
    if not found:
        return NoMatch("Content not found between tags", fatal=method.is_fatal)
    return found


def _extract_delimiters(text: str, method: DelimiterMethod):
    if not method.start or not method.end:
        raise ValueError("Delimiter extraction requires non-empty start and end delimiters")
    found = []
    position = 0
    while True:
        start = text.find(method.start, position)
        if start == -1:
            break
        body_start = start + len(method.start)
        end = text.find(method.end, body_start)
        if end == -1:
            break
        found.append(({}, text[body_start:end]))
        position = end + len(method.end)
    if not found:
        return NoMatch("Content not found between delimiters", fatal=method.is_fatal)
    return found


def _extract_regex(text: str, method: RegexMethod):
    pattern = method.pattern
    if isinstance(pattern, str):
        pattern = re.compile(pattern, method.flags)
    found = []
    for match in pattern.finditer(text):
        named = match.groupdict()
        if "content" in named:
            body = named.pop("content")
        elif pattern.groups:
            body = match.group(1)
        else:
            body = match.group(0)
        if body is None:
            continue
        attributes = {key: value for key, value in named.items() if value is not None}
        found.append((attributes, body))
    if not found:
        return NoMatch("No content found in the file", fatal=method.is_fatal)
    return found


def _extract_callback(text: str, method: CallbackMethod):
    returned = method.callback(text)
    if not returned:
        return NoMatch("Callback function returned no content", fatal=method.is_fatal)
    items = [returned] if isinstance(returned, str) else [item for item in returned if item]
    if not items:
        return NoMatch("Callback function returned no content", fatal=method.is_fatal)
    return [({}, item) for item in items]


def _extract_copy(_text: str, method: CopyMethod):
    found = []
    for file in method.files:
        path = Path(file)
        if not path.is_file():
            return NoMatch(
                f"Unable to copy file contents. File '{file}' not found",
                fatal=method.is_fatal,
            )
        found.append(({}, path.read_text(encoding="utf-8")))
    return found


_HANDLERS: Dict[str, Callable[[str, ExtractionMethod], object]] = {
    TagMethod.kind: _extract_tags,
    DelimiterMethod.kind: _extract_delimiters,
    RegexMethod.kind: _extract_regex,
    CallbackMethod.kind: _extract_callback,
    CopyMethod.kind: _extract_copy,
}


class DocumentExtractor:
    """Runs a sequence of extraction methods over one document."""

    def __init__(self, methods: Sequence[ExtractionMethod]) -> None:
        self.methods = list(methods)

    def extract_from_string(self, text: str) -> List[ExtractedFragment]:
        fragments: List[ExtractedFragment] = []
        for method in self.methods:
            result = extract(text, method)
            if isinstance(result, NoMatch):
                if result.fatal:
                    raise NoContentFound(result.message, fatal=True)
                logger.debug("%s extraction found nothing: %s", method.kind, result.message)
                continue
            fragments.extend(result)
        return fragments

    def extract_from_file(self, path: Path | str) -> List[ExtractedFragment]:
        file_path = Path(path)
        if not file_path.is_file():
            raise SourceFileNotFound(f"File not found: {file_path}")
        return self.extract_from_string(file_path.read_text(encoding="utf-8"))


__all__ = ["DocumentExtractor", "ExtractionResult", "NoMatch", "clean_body", "extract"]
