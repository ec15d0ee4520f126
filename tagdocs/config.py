"""Configuration loading for tagdocs (.tagdocs.yml)."""

from __future__ import annotations

import importlib
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import yaml

from .errors import InvalidTag
from .extractors.methods import (
    CallbackMethod,
    CopyMethod,
    DelimiterMethod,
    ExtractionMethod,
    RegexMethod,
    TagMethod,
)
from .extractors.tags import sanitize_tag
from .indexing.excerpt import ExcerptConfig
from .indexing.options import IndexOptions
from .postproc.formatters import resolve_formatters

CONFIG_FILENAME = ".tagdocs.yml"

_REGEX_FLAGS = {
    "ignorecase": re.IGNORECASE,
    "multiline": re.MULTILINE,
    "dotall": re.DOTALL,
    "verbose": re.VERBOSE,
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class TargetConfig:
    """One source tree to document."""

    cwd: Path
    out_dir: Path
    patterns: List[str] = field(default_factory=lambda: ["**/*"])
    ignore: List[str] = field(default_factory=list)
    create_index: bool = False
    extraction: Optional[List[ExtractionMethod]] = None
    documentation_template: Optional[Path] = None
    index: Optional[IndexOptions] = None
    root_index: Optional[IndexOptions] = None


@dataclass
class TagDocsConfig:
    """Represents the settings defined in .tagdocs.yml."""

    root: Path
    dry_run: bool = False
    require_documentation: bool = False
    extraction: List[ExtractionMethod] = field(default_factory=lambda: [TagMethod(tag="docs")])
    formatters: List[str] = field(default_factory=list)
    documentation_template: Optional[Path] = None
    index: IndexOptions = field(default_factory=IndexOptions)
    root_index: Optional[IndexOptions] = None
    targets: List[TargetConfig] = field(default_factory=list)

    def methods_for(self, target: TargetConfig) -> List[ExtractionMethod]:
        return list(target.extraction) if target.extraction else list(self.extraction)

    def documentation_template_for(self, target: TargetConfig) -> Optional[Path]:
        return target.documentation_template or self.documentation_template

    def index_options_for(self, target: TargetConfig) -> IndexOptions:
        return target.index or self.index

    def root_index_for(self, target: TargetConfig) -> Optional[IndexOptions]:
        return target.root_index or self.root_index


def load_config(config_path: Path | str) -> TagDocsConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return TagDocsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    extraction = _parse_methods(data.get("extraction"), root, "extraction")
    templates = _as_dict(data.get("templates"))
    index = _parse_index(templates.get("index"), root, "templates.index", IndexOptions())
    root_index = None
    if templates.get("root_index") is not None:
        root_index = _parse_index(
            templates.get("root_index"), root, "templates.root_index", IndexOptions()
        )

    formatters = _as_str_list(data.get("formatters"))
    try:
        resolve_formatters(formatters)
    except KeyError as exc:
        raise ConfigError(str(exc.args[0])) from exc

    config = TagDocsConfig(
        root=root,
        dry_run=_as_bool(data.get("dry_run")) or False,
        require_documentation=_as_bool(data.get("require_documentation")) or False,
        formatters=formatters,
        documentation_template=_parse_template_path(templates.get("documentation"), root),
        index=index,
        root_index=root_index,
    )
    if extraction:
        config.extraction = extraction

    targets = data.get("targets")
    if targets is not None and not isinstance(targets, list):
        raise ConfigError("targets must be a list")
    for position, raw_target in enumerate(targets or []):
        config.targets.append(_parse_target(raw_target, root, config, f"targets[{position}]"))

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_target(data: Any, root: Path, config: TagDocsConfig, context: str) -> TargetConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"{context} must be a mapping")
    cwd = _as_str(data.get("cwd"))
    out_dir = _as_str(data.get("out_dir"))
    if not cwd or not out_dir:
        raise ConfigError(f"{context} requires 'cwd' and 'out_dir'")

    target = TargetConfig(cwd=(root / cwd).resolve(), out_dir=(root / out_dir).resolve())
    patterns = _as_str_list(data.get("patterns"))
    if patterns:
        target.patterns = patterns
    target.ignore = _as_str_list(data.get("ignore"))
    target.create_index = _as_bool(data.get("create_index")) or False

    methods = _parse_methods(data.get("extraction"), root, f"{context}.extraction")
    target.extraction = methods or None

    templates = _as_dict(data.get("templates"))
    target.documentation_template = _parse_template_path(templates.get("documentation"), root)
    if templates.get("index") is not None:
        target.index = _parse_index(templates.get("index"), root, f"{context}.templates.index", config.index)
    if templates.get("root_index") is not None:
        target.root_index = _parse_index(
            templates.get("root_index"),
            root,
            f"{context}.templates.root_index",
            config.root_index or IndexOptions(),
        )
    return target


def _parse_methods(value: Any, root: Path, context: str) -> List[ExtractionMethod]:
    if value is None:
        return []
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        raise ConfigError(f"{context} must be a list of extraction methods")
    return [_parse_method(item, root, f"{context}[{position}]") for position, item in enumerate(value)]


def _parse_method(data: Any, root: Path, context: str) -> ExtractionMethod:
    if not isinstance(data, dict):
        raise ConfigError(f"{context} must be a mapping")

    kind = (_as_str(data.get("method")) or "tags").lower()
    common: Dict[str, Any] = {}
    _check_placeholder(data, context)
    for key in ("placeholder", "attribute_format", "divider", "default_text"):
        value = _as_str(data.get(key))
        if value is not None:
            common[key] = value
    fatal = _as_bool(data.get("fatal"))
    if fatal is not None:
        common["fatal"] = fatal

    if kind == "tags":
        tag = _require_str(data, "tag", context)
        try:
            sanitize_tag(tag)
        except InvalidTag as exc:
            raise ConfigError(f"{context}: {exc}") from exc
        return TagMethod(tag=tag, **common)
    if kind == "delimiters":
        return DelimiterMethod(
            start=_require_str(data, "start", context),
            end=_require_str(data, "end", context),
            **common,
        )
    if kind == "regex":
        flags = 0
        for name in _as_str_list(data.get("flags")):
            if name.lower() not in _REGEX_FLAGS:
                raise ConfigError(f"{context}: unknown regex flag '{name}'")
            flags |= _REGEX_FLAGS[name.lower()]
        pattern = _require_str(data, "pattern", context)
        try:
            compiled = re.compile(pattern, flags)
        except re.error as exc:
            raise ConfigError(f"{context}: invalid pattern: {exc}") from exc
        return RegexMethod(pattern=compiled, **common)
    if kind == "callback":
        return CallbackMethod(callback=_resolve_callable(_require_str(data, "callable", context), context), **common)
    if kind == "copy":
        files = _as_str_list(data.get("files"))
        if not files:
            raise ConfigError(f"{context} requires 'files'")
        return CopyMethod(files=tuple(str(root / file) for file in files), **common)
    raise ConfigError(f"{context}: unknown extraction method '{kind}'")


def _parse_index(data: Any, root: Path, context: str, base: IndexOptions) -> IndexOptions:
    if data is None:
        return base
    if isinstance(data, str):
        data = {"template": data}
    if not isinstance(data, dict):
        raise ConfigError(f"{context} must be a mapping or a template path")

    updates: Dict[str, Any] = {}
    template = _as_str(data.get("template"))
    if template:
        updates["template_path"] = root / template
    _check_placeholder(data, context)
    for key in ("placeholder", "files_heading", "directory_heading"):
        value = _as_str(data.get(key))
        if value is not None:
            updates[key] = value
    for key in ("markdown_links", "flatten", "files_first"):
        value = _as_bool(data.get(key))
        if value is not None:
            updates[key] = value
    if "excerpt" in data:
        updates["excerpt"] = _parse_excerpt(data.get("excerpt"), context)
    line_callback = _as_str(data.get("line_callback"))
    if line_callback:
        updates["line_callback"] = _resolve_callable(line_callback, context)
    if data.get("plugins") is not None:
        updates["plugins"] = tuple(_parse_methods(data.get("plugins"), root, f"{context}.plugins"))
    return replace(base, **updates)


def _parse_excerpt(value: Any, context: str) -> Optional[ExcerptConfig]:
    if value is None or value is False:
        return None
    if value is True:
        return ExcerptConfig()
    if not isinstance(value, dict):
        raise ConfigError(f"{context}.excerpt must be a mapping or a boolean")
    defaults = ExcerptConfig()
    length = _as_int(value.get("length"))
    first_sentence_only = _as_bool(value.get("first_sentence_only"))
    add_ellipsis = _as_bool(value.get("add_ellipsis"))
    try:
        return ExcerptConfig(
            length=length if length is not None else defaults.length,
            first_sentence_only=(
                first_sentence_only if first_sentence_only is not None else defaults.first_sentence_only
            ),
            add_ellipsis=add_ellipsis if add_ellipsis is not None else defaults.add_ellipsis,
        )
    except ValueError as exc:
        raise ConfigError(f"{context}.excerpt: {exc}") from exc


def _parse_template_path(value: Any, root: Path) -> Optional[Path]:
    if isinstance(value, dict):
        value = value.get("template")
    text = _as_str(value)
    return root / text if text else None


def _resolve_callable(reference: str, context: str) -> Callable[..., Any]:
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise ConfigError(f"{context}: callable must look like 'module:attribute', got '{reference}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"{context}: cannot import '{module_name}': {exc}") from exc
    target: Any = module
    for part in attribute.split("."):
        target = getattr(target, part, None)
        if target is None:
            raise ConfigError(f"{context}: '{reference}' not found")
    if not callable(target):
        raise ConfigError(f"{context}: '{reference}' is not callable")
    return target


def _check_placeholder(data: Dict[str, Any], context: str) -> None:
    if "placeholder" in data and not _as_str(data.get("placeholder")):
        raise ConfigError(f"{context}: placeholder must be a non-empty string")


def _require_str(data: Dict[str, Any], key: str, context: str) -> str:
    value = _as_str(data.get(key))
    if not value:
        raise ConfigError(f"{context} requires '{key}'")
    return value


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float)) and not isinstance(item, bool)]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "TagDocsConfig", "TargetConfig", "load_config"]
