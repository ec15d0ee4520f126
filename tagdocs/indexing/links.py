"""Markdown link rendering and validation for generated listings."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List


def create_markdown_link(as_link: bool, display: str, target: str) -> str:
    """Render ``display`` as ``[display](target)``, or as a plain label."""
    if not as_link:
        return display
    return f"[{display}]({target})"


def list_indent_prefix(indent_level: int) -> str:
    """Two spaces per indent level."""
    if indent_level <= 0:
        return ""
    return "  " * indent_level


class LinkValidator:
    """Reports relative link targets in generated markdown that do not exist."""

    _LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

    def validate(self, markdown: str, *, root: Path) -> List[str]:
        issues: List[str] = []
        for match in self._LINK_PATTERN.finditer(markdown):
            target = match.group(2).strip()
            if not target:
                issues.append("Empty link target detected")
                continue
            if target.startswith(("http://", "https://", "mailto:", "#")):
                continue
            cleaned = target.split("#", 1)[0].split("?", 1)[0]
            normalized = cleaned.replace("\\", "/")
            if not normalized:
                continue
            if not (root / normalized).exists():
                issues.append(f"Link target not found: {target}")
        return issues


__all__ = ["LinkValidator", "create_markdown_link", "list_indent_prefix"]
