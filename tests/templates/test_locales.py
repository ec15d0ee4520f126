"""Tests for file metadata fragments."""

from __future__ import annotations

import os
from pathlib import Path

from tagdocs.templates.locales import FILE_NAME_PLACEHOLDER, UPDATED_AT_PLACEHOLDER, Locales


def test_for_file_reports_name_and_utc_timestamp(tmp_path: Path) -> None:
    source = tmp_path / "widget.ts"
    source.write_text("", encoding="utf-8")
    os.utime(source, (1_700_000_000.25, 1_700_000_000.25))

    locales = Locales.for_file(source)

    assert locales.file_name == "widget.ts"
    assert locales.updated_at == "2023-11-14T22:13:20.250Z"


def test_to_fragments_targets_locale_placeholders() -> None:
    fragments = Locales(updated_at="now", file_name="a.ts").to_fragments()

    assert [(f.target_placeholder, f.content) for f in fragments] == [
        (UPDATED_AT_PLACEHOLDER, "now"),
        (FILE_NAME_PLACEHOLDER, "a.ts"),
    ]
