"""CLI entrypoints for tagdocs commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .config import ConfigError, load_config
from .errors import TagDocsError
from .indexing.excerpt import ExcerptConfig
from .indexing.options import IndexOptions
from .indexing.processor import IndexTreeProcessor
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_log_file_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also append log records to this file.",
    )


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagdocs",
        description="Generate markdown documentation from tagged source comments.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Generate documentation for every target in .tagdocs.yml.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_log_file_option(build_parser)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Config file or directory containing .tagdocs.yml (defaults to current directory).",
    )
    build_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Process files without writing documentation or indexes.",
    )
    build_parser.add_argument(
        "--require-docs",
        action="store_true",
        help="Exit with status 1 when a source file has no documentation.",
    )

    index_parser = subparsers.add_parser(
        "index",
        help="Write index.md listings for an existing documentation tree.",
    )
    _add_verbose_option(index_parser, suppress_default=True)
    _add_log_file_option(index_parser)
    index_parser.add_argument("directory", help="Documentation directory to index.")
    index_parser.add_argument("--template", help="Index template file.")
    index_parser.add_argument("--placeholder", help="Placeholder replaced by the listing.")
    index_parser.add_argument("--flatten", action="store_true", help="Inline nested listings.")
    index_parser.add_argument(
        "--no-recursive",
        action="store_true",
        help="Only index DIRECTORY itself.",
    )
    index_parser.add_argument("--plain", action="store_true", help="List names without markdown links.")
    index_parser.add_argument("--files-heading", help="Heading written above the file entries.")
    index_parser.add_argument("--directory-heading", help="Heading written above the folder entries.")
    excerpt_group = index_parser.add_mutually_exclusive_group()
    excerpt_group.add_argument("--excerpt-length", type=_positive_int, help="Maximum excerpt length.")
    excerpt_group.add_argument("--no-excerpt", action="store_true", help="Omit file excerpts.")

    return parser


def _index_options(args: argparse.Namespace) -> IndexOptions:
    options = IndexOptions(
        template_path=Path(args.template) if args.template else None,
        markdown_links=not args.plain,
        files_heading=args.files_heading,
        directory_heading=args.directory_heading,
        flatten=bool(args.flatten),
        recursive=not args.no_recursive,
    )
    if args.placeholder:
        options = replace(options, placeholder=args.placeholder)
    if args.no_excerpt:
        options = replace(options, excerpt=None)
    elif args.excerpt_length is not None:
        options = replace(options, excerpt=ExcerptConfig(length=args.excerpt_length))
    return options


def _run_build(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        config = load_config(args.path)
    except ConfigError as exc:
        parser.exit(1, f"tagdocs build failed: {exc}\n")
    if args.dry_run:
        config.dry_run = True

    result = Orchestrator(config).run()
    for line in result.logs:
        print(line)

    require_docs = config.require_documentation or bool(args.require_docs)
    if require_docs and result.missing_documentation_count:
        missing = "\n".join(f"  {name}" for name in result.missing_documentation_files)
        parser.exit(1, f"Documentation is required but missing in:\n{missing}\n")


def _run_index(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    directory = Path(args.directory)
    if not directory.is_dir():
        parser.exit(1, f"Directory not found: {directory}\n")
    try:
        written = IndexTreeProcessor(_index_options(args)).process(directory)
    except (TagDocsError, OSError) as exc:
        parser.exit(1, f"tagdocs index failed: {exc}\nRun with --verbose for more details.\n")
    for path in written:
        print(f"Index written at {_relativize(path)}")


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tagdocs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(getattr(args, "verbose", False)),
        log_file=getattr(args, "log_file", None),
    )

    if args.command == "build":
        _run_build(parser, args)
    elif args.command == "index":
        _run_index(parser, args)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
