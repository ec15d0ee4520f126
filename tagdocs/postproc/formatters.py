"""Post-merge text formatters.

A formatter takes the merged document and the source path and returns new
content. Formatters are referenced by name from configuration.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Iterable, List

Formatter = Callable[[str, str], str]

_COMMENT_GUTTER_PATTERN = re.compile(r"^[ \t]*\*[ \t]?(?!\*)", re.MULTILINE)


def strip_comment_asterisks(content: str, file_path: str = "") -> str:
    """Remove the leading ``*`` gutter of block comments."""
    return _COMMENT_GUTTER_PATTERN.sub("", content)


def add_double_lines(content: str, file_path: str = "") -> str:
    """Insert a blank line between consecutive text lines outside fenced code blocks."""
    lines = content.split("\n")
    output: List[str] = []
    in_code = False
    for index, line in enumerate(lines):
        is_fence = line.lstrip().startswith("```")
        if is_fence:
            in_code = not in_code
        output.append(line)
        if in_code or is_fence or index == len(lines) - 1:
            continue
        if line.strip() and lines[index + 1].strip():
            output.append("")
    return "\n".join(output)


def normalize_markdown(content: str, file_path: str = "") -> str:
    """Normalise line endings and blank lines, keeping code fences intact."""
    normalized = content.replace("\r\n", "\n").replace("\r", "\n")
    cleaned: List[str] = []
    in_code = False
    previous_blank = False

    for line in normalized.split("\n"):
        stripped = line.rstrip()
        if stripped.lstrip().startswith("```"):
            in_code = not in_code
            cleaned.append(stripped)
            previous_blank = False
            continue

        if not in_code:
            if stripped.startswith("#") and cleaned and cleaned[-1] != "":
                cleaned.append("")
            if not stripped:
                if previous_blank:
                    continue
                previous_blank = True
                cleaned.append("")
                continue

        cleaned.append(stripped)
        previous_blank = False

    while cleaned and cleaned[-1] == "":
        cleaned.pop()

    return "\n".join(cleaned) + "\n"


FORMATTERS: Dict[str, Formatter] = {
    "strip_comment_asterisks": strip_comment_asterisks,
    "add_double_lines": add_double_lines,
    "normalize_markdown": normalize_markdown,
}

RECOMMENDED = ("strip_comment_asterisks", "add_double_lines")


def resolve_formatters(names: Iterable[str]) -> List[Formatter]:
    """Map configured formatter names to callables; ``recommended`` expands to a preset."""
    resolved: List[Formatter] = []
    for name in names:
        key = name.strip().lower()
        if key == "recommended":
            resolved.extend(FORMATTERS[item] for item in RECOMMENDED)
            continue
        if key not in FORMATTERS:
            raise KeyError(f"Unknown formatter '{name}'")
        resolved.append(FORMATTERS[key])
    return resolved


__all__ = [
    "FORMATTERS",
    "Formatter",
    "RECOMMENDED",
    "add_double_lines",
    "normalize_markdown",
    "resolve_formatters",
    "strip_comment_asterisks",
]
