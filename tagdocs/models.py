"""Core data models shared across tagdocs components."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class ExtractedFragment:
    """One extracted body tied to the placeholder it will replace."""

    content: str
    target_placeholder: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class DirectoryEntry:
    """A single child of a scanned directory.

    ``link_target`` is relative to the scanned directory. ``child_entries`` is
    only populated when the scanner runs in flatten mode.
    """

    source_path: Path
    display_name: str
    is_directory: bool
    link_target: str
    rendered_link: str
    has_index: bool = False
    child_entries: Optional[Tuple["DirectoryEntry", ...]] = None


@dataclass(frozen=True)
class ProcessedDocument:
    """Rendered documentation for one source file, ready to be written."""

    content: str
    output_directory: Path
    file_name: str
    source_label: str

    @property
    def output_path(self) -> Path:
        return self.output_directory / self.file_name


@dataclass(frozen=True)
class ProcessFailure:
    """A source file that produced no document."""

    error: str
    no_documentation_found: bool = False


ProcessResult = Union[ProcessedDocument, ProcessFailure]


@dataclass(frozen=True)
class RunResult:
    """Outcome of a full run, built by folding over targets and files."""

    success_count: int = 0
    total_count: int = 0
    missing_documentation_files: Tuple[str, ...] = ()
    logs: Tuple[str, ...] = ()

    @property
    def missing_documentation_count(self) -> int:
        return len(self.missing_documentation_files)

    def with_log(self, line: str) -> "RunResult":
        return replace(self, logs=self.logs + (line,))

    def with_success(self, line: str) -> "RunResult":
        return replace(
            self,
            success_count=self.success_count + 1,
            total_count=self.total_count + 1,
            logs=self.logs + (line,),
        )

    def with_failure(self, line: str, *, missing_file: str | None = None) -> "RunResult":
        missing = self.missing_documentation_files
        if missing_file is not None:
            missing = missing + (missing_file,)
        return replace(
            self,
            total_count=self.total_count + 1,
            missing_documentation_files=missing,
            logs=self.logs + (line,),
        )
