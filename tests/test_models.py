"""Tests for run result accumulation."""

from __future__ import annotations

from pathlib import Path

from tagdocs.models import ProcessedDocument, RunResult


def test_run_result_folds_without_mutation() -> None:
    start = RunResult()

    result = (
        start.with_success("ok")
        .with_failure("missing", missing_file="a.js")
        .with_failure("Error: boom")
        .with_log("Finished")
    )

    assert start == RunResult()
    assert result.success_count == 1
    assert result.total_count == 3
    assert result.missing_documentation_files == ("a.js",)
    assert result.missing_documentation_count == 1
    assert result.logs == ("ok", "missing", "Error: boom", "Finished")


def test_processed_document_output_path() -> None:
    document = ProcessedDocument(content="", output_directory=Path("docs/lib"), file_name="a.md", source_label="lib/a.js")

    assert document.output_path == Path("docs/lib/a.md")
