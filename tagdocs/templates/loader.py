"""Template source loading."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

from jinja2 import Environment, FileSystemLoader
from jinja2 import TemplateNotFound as JinjaTemplateNotFound

from ..errors import TemplateNotFound


class TemplateLoader:
    """Reads raw template sources through Jinja2's filesystem loader.

    Templates are never rendered by Jinja; placeholders are plain substrings
    that ``ContentMerger`` replaces.
    """

    def __init__(self) -> None:
        self._environments: Dict[Path, Environment] = {}

    def load(self, template_path: Path | str | None, fallback: str) -> str:
        """Return the template source, or ``fallback`` when no template is configured."""
        if template_path is None or str(template_path) == "":
            return fallback
        path = Path(template_path).expanduser().resolve()
        env = self._environment_for(path.parent)
        try:
            source, _filename, _uptodate = env.loader.get_source(env, path.name)  # type: ignore[union-attr]
        except JinjaTemplateNotFound as exc:
            raise TemplateNotFound(f"Template file not found: {path}") from exc
        return source

    def _environment_for(self, directory: Path) -> Environment:
        env = self._environments.get(directory)
        if env is None:
            env = Environment(
                loader=FileSystemLoader(str(directory), encoding="utf-8"),
                keep_trailing_newline=True,
                autoescape=False,
            )
            self._environments[directory] = env
        return env


__all__ = ["TemplateLoader"]
