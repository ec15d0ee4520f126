"""Tests for extraction dispatch and the document extractor."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from tagdocs.errors import NoContentFound, SourceFileNotFound
from tagdocs.extractors import (
    CallbackMethod,
    CopyMethod,
    DelimiterMethod,
    DocumentExtractor,
    NoMatch,
    RegexMethod,
    TagMethod,
    clean_body,
    extract,
)


def test_tag_extraction_returns_trimmed_body() -> None:
    result = extract("<docs>Hello\nWorld</docs>", TagMethod(tag="docs"))

    assert isinstance(result, list)
    assert len(result) == 1
    assert result[0].content == "Hello\nWorld"
    assert result[0].attributes == {}
    assert result[0].target_placeholder == "%content%"


def test_tag_extraction_reads_attributes() -> None:
    result = extract('<docs name="x">body</docs>', TagMethod(tag="docs"))

    assert isinstance(result, list)
    assert result[0].attributes == {"name": "x"}
    assert result[0].content == "body"


def test_tag_extraction_uses_configured_placeholder() -> None:
    result = extract("<summary>S</summary>", TagMethod(tag="summary", placeholder="%summary%"))

    assert isinstance(result, list)
    assert result[0].target_placeholder == "%summary%"


def test_tag_extraction_without_match_is_non_fatal_signal() -> None:
    result = extract("no tags here", TagMethod(tag="docs"))

    assert isinstance(result, NoMatch)
    assert result.fatal is False


def test_tag_extraction_keeps_fenced_code_intact() -> None:
    body = "Intro\n\n\n\n```\na\n\n\n\nb\n```\n\n\nOutro"

    result = extract(f"<docs>{body}</docs>", TagMethod(tag="docs"))

    assert isinstance(result, list)
    assert result[0].content == "Intro\n\n```\na\n\n\n\nb\n```\n\nOutro"


def test_clean_body_collapses_blank_runs() -> None:
    assert clean_body("\n\n  first\n\n\n\nsecond  \n\n") == "first\n\nsecond"


def test_delimiter_extraction_collects_every_pair() -> None:
    text = "/*! one */ code /*! two */ tail /*! unterminated"

    result = extract(text, DelimiterMethod(start="/*!", end="*/"))

    assert isinstance(result, list)
    assert [fragment.content for fragment in result] == ["one", "two"]


def test_delimiter_extraction_rejects_empty_delimiters() -> None:
    with pytest.raises(ValueError):
        extract("text", DelimiterMethod(start="", end="*/"))


def test_regex_extraction_uses_content_group_and_named_attributes() -> None:
    method = RegexMethod(pattern=re.compile(r"@doc (?P<name>\w+): (?P<content>[^\n]+)"))

    result = extract("@doc alpha: first\n@doc beta: second\n", method)

    assert isinstance(result, list)
    assert [(fragment.attributes, fragment.content) for fragment in result] == [
        ({"name": "alpha"}, "first"),
        ({"name": "beta"}, "second"),
    ]


def test_regex_extraction_falls_back_to_first_group_or_whole_match() -> None:
    grouped = extract("key=value", RegexMethod(pattern=r"key=(\w+)"))
    whole = extract("key=value", RegexMethod(pattern=r"key=\w+"))

    assert isinstance(grouped, list) and grouped[0].content == "value"
    assert isinstance(whole, list) and whole[0].content == "key=value"


def test_regex_extraction_without_match() -> None:
    assert isinstance(extract("nothing", RegexMethod(pattern=r"@doc (.+)")), NoMatch)


def test_callback_extraction_accepts_string_or_list() -> None:
    single = extract("text", CallbackMethod(callback=lambda text: text.upper()))
    many = extract("text", CallbackMethod(callback=lambda text: ["a", "", "b"]))

    assert isinstance(single, list) and [f.content for f in single] == ["TEXT"]
    assert isinstance(many, list) and [f.content for f in many] == ["a", "b"]


def test_callback_extraction_without_content_is_fatal_by_default() -> None:
    result = extract("text", CallbackMethod(callback=lambda text: None))
    empty_list = extract("text", CallbackMethod(callback=lambda text: ["", ""]))
    lenient = extract("text", CallbackMethod(callback=lambda text: "", fatal=False))

    assert isinstance(result, NoMatch) and result.fatal is True
    assert isinstance(empty_list, NoMatch) and empty_list.fatal is True
    assert isinstance(lenient, NoMatch) and lenient.fatal is False


def test_copy_extraction_reads_listed_files(tmp_path: Path) -> None:
    first = tmp_path / "intro.md"
    first.write_text("\nIntro text\n", encoding="utf-8")

    result = extract("ignored", CopyMethod(files=(str(first),), placeholder="%intro%"))

    assert isinstance(result, list)
    assert result[0].content == "Intro text"
    assert result[0].target_placeholder == "%intro%"


def test_copy_extraction_missing_file_is_fatal(tmp_path: Path) -> None:
    result = extract("ignored", CopyMethod(files=(str(tmp_path / "missing.md"),)))

    assert isinstance(result, NoMatch)
    assert result.fatal is True
    assert "missing.md" in result.message


def test_document_extractor_runs_methods_in_order() -> None:
    extractor = DocumentExtractor(
        [
            TagMethod(tag="docs"),
            TagMethod(tag="summary", placeholder="%summary%"),
        ]
    )

    fragments = extractor.extract_from_string("<summary>S</summary><docs>D</docs>")

    assert [(f.target_placeholder, f.content) for f in fragments] == [
        ("%content%", "D"),
        ("%summary%", "S"),
    ]


def test_document_extractor_skips_non_fatal_misses() -> None:
    extractor = DocumentExtractor([TagMethod(tag="missing"), TagMethod(tag="docs")])

    fragments = extractor.extract_from_string("<docs>D</docs>")

    assert [f.content for f in fragments] == ["D"]


def test_document_extractor_raises_on_fatal_miss() -> None:
    extractor = DocumentExtractor([TagMethod(tag="docs", fatal=True)])

    with pytest.raises(NoContentFound) as excinfo:
        extractor.extract_from_string("plain text")

    assert excinfo.value.fatal is True


def test_document_extractor_reads_files(tmp_path: Path) -> None:
    source = tmp_path / "module.js"
    source.write_text("/** <docs>From file</docs> */", encoding="utf-8")
    extractor = DocumentExtractor([TagMethod(tag="docs")])

    assert [f.content for f in extractor.extract_from_file(source)] == ["From file"]
    with pytest.raises(SourceFileNotFound):
        extractor.extract_from_file(tmp_path / "absent.js")
