"""Run every configured target: per-file documentation, then indexes."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from .config import TagDocsConfig, TargetConfig
from .errors import TagDocsError
from .file_processor import CodeFileProcessor
from .file_scanner import FileScanner
from .indexing.processor import IndexTreeProcessor
from .logging import get_logger
from .models import ProcessFailure, RunResult
from .templates.loader import TemplateLoader


class Orchestrator:
    """Folds a ``RunResult`` over all targets and their files.

    Per-file errors are recorded and the run continues; a missing target
    directory skips that target only.
    """

    def __init__(self, config: TagDocsConfig, *, loader: TemplateLoader | None = None) -> None:
        self.config = config
        self.loader = loader or TemplateLoader()
        self.processor = CodeFileProcessor(config, self.loader)
        self.logger = get_logger("orchestrator")

    def run(self) -> RunResult:
        result = RunResult()
        for position, target in enumerate(self.config.targets):
            result = self._run_target(position, target, result)

        result = self._log(result, f"Finished. Success: {result.success_count} / Total: {result.total_count}")
        if result.missing_documentation_count:
            result = self._log(
                result, f"Found {result.missing_documentation_count} file(s) with no documentation"
            )
        return result

    def _run_target(self, position: int, target: TargetConfig, result: RunResult) -> RunResult:
        prefix = f"targets[{position}]"
        if not target.cwd.is_dir():
            return self._log(result, f"{prefix}: Cwd {target.cwd} not found")

        files = FileScanner(target.cwd, target.patterns, target.ignore).collect()
        self.logger.debug("%s: %d file(s) matched in %s", prefix, len(files), target.cwd)
        for file_path in files:
            result = self._run_file(prefix, file_path, target, result)

        if target.create_index and not self.config.dry_run:
            try:
                self._write_indexes(prefix, target)
            except (TagDocsError, OSError, UnicodeDecodeError) as exc:
                result = self._log(result, f"Error: {exc}")
        return result

    def _run_file(self, prefix: str, file_path: Path, target: TargetConfig, result: RunResult) -> RunResult:
        try:
            outcome = self.processor.process(file_path, target)
            if isinstance(outcome, ProcessFailure):
                missing = self.processor.source_label(file_path, target) if outcome.no_documentation_found else None
                line = f"{prefix}: {outcome.error}"
                self.logger.info(line)
                return result.with_failure(line, missing_file=missing)
            if not self.config.dry_run:
                self.processor.write(outcome)
        except (TagDocsError, OSError, UnicodeDecodeError) as exc:
            line = f"Error: {exc}"
            self.logger.info(line)
            return result.with_failure(line)

        line = f"{prefix}: Generated documentation file for {outcome.source_label}"
        self.logger.info(line)
        return result.with_success(line)

    def _write_indexes(self, prefix: str, target: TargetConfig) -> None:
        options = self.config.index_options_for(target)
        written = IndexTreeProcessor(options, loader=self.loader).process(target.out_dir)
        self.logger.debug("%s: Wrote %d index file(s)", prefix, len(written))

        root_options = self.config.root_index_for(target)
        if root_options is None:
            return
        root_options = replace(root_options, recursive=False, is_root=True)
        for root_path in IndexTreeProcessor(root_options, loader=self.loader).process(target.out_dir):
            self.logger.debug("%s: Wrote root index %s", prefix, root_path)

    def _log(self, result: RunResult, line: str) -> RunResult:
        self.logger.info(line)
        return result.with_log(line)


__all__ = ["Orchestrator"]
