"""Tests for template loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from tagdocs.errors import TemplateNotFound
from tagdocs.templates.loader import TemplateLoader


def test_load_returns_raw_source_without_rendering(tmp_path: Path) -> None:
    template = tmp_path / "doc.template.md"
    template.write_text("# {{ title }}\n{% raw %}%content%\n", encoding="utf-8")

    source = TemplateLoader().load(template, fallback="%content%")

    assert source == "# {{ title }}\n{% raw %}%content%\n"


def test_load_uses_fallback_without_template() -> None:
    loader = TemplateLoader()

    assert loader.load(None, fallback="%content%") == "%content%"
    assert loader.load("", fallback="fallback") == "fallback"


def test_load_missing_template_raises(tmp_path: Path) -> None:
    with pytest.raises(TemplateNotFound) as excinfo:
        TemplateLoader().load(tmp_path / "missing.md", fallback="%content%")

    assert "missing.md" in str(excinfo.value)
    assert excinfo.value.fatal is True
