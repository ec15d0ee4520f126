"""Extraction method variants.

Each method is a frozen value; ``tagdocs.extractors.core.extract`` dispatches on
the variant's ``kind``. All variants share the merge options that describe how
their fragments are rendered into a template.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Optional, Pattern, Sequence, Tuple, Union

DEFAULT_PLACEHOLDER = "%content%"
DEFAULT_ATTRIBUTE_FORMAT = "### *{key}*: {value}\n"
DEFAULT_DIVIDER = "\n\n---\n\n"
DEFAULT_TEXT = "Not available."

CallbackResult = Union[str, Sequence[str], None]


@dataclass(frozen=True, kw_only=True)
class _MethodOptions:
    placeholder: str = DEFAULT_PLACEHOLDER
    attribute_format: str = DEFAULT_ATTRIBUTE_FORMAT
    divider: str = DEFAULT_DIVIDER
    default_text: str = DEFAULT_TEXT
    fatal: Optional[bool] = None

    kind: ClassVar[str] = ""
    fatal_by_default: ClassVar[bool] = False

    @property
    def is_fatal(self) -> bool:
        """Whether finding nothing with this method should abort the file."""
        if self.fatal is not None:
            return self.fatal
        return self.fatal_by_default


@dataclass(frozen=True)
class TagMethod(_MethodOptions):
    """Extract ``<tag attr="value">body</tag>`` blocks."""

    tag: str

    kind: ClassVar[str] = "tags"


@dataclass(frozen=True)
class DelimiterMethod(_MethodOptions):
    """Extract text between literal start and end delimiters."""

    start: str
    end: str

    kind: ClassVar[str] = "delimiters"


@dataclass(frozen=True)
class RegexMethod(_MethodOptions):
    """Extract every match of a regular expression.

    The body is the ``content`` named group when present, otherwise group 1,
    otherwise the whole match. Other named groups become attributes.
    """

    pattern: Union[str, Pattern[str]]
    flags: int = 0

    kind: ClassVar[str] = "regex"


@dataclass(frozen=True)
class CallbackMethod(_MethodOptions):
    """Delegate extraction to a callable returning one or many strings."""

    callback: Callable[[str], CallbackResult]

    kind: ClassVar[str] = "callback"
    fatal_by_default: ClassVar[bool] = True


@dataclass(frozen=True)
class CopyMethod(_MethodOptions):
    """Use the contents of other files verbatim, ignoring the input text."""

    files: Tuple[str, ...]

    kind: ClassVar[str] = "copy"
    fatal_by_default: ClassVar[bool] = True


ExtractionMethod = Union[TagMethod, DelimiterMethod, RegexMethod, CallbackMethod, CopyMethod]

METHOD_KINDS = {
    method.kind: method
    for method in (TagMethod, DelimiterMethod, RegexMethod, CallbackMethod, CopyMethod)
}

__all__ = [
    "CallbackMethod",
    "CallbackResult",
    "CopyMethod",
    "DEFAULT_ATTRIBUTE_FORMAT",
    "DEFAULT_DIVIDER",
    "DEFAULT_PLACEHOLDER",
    "DEFAULT_TEXT",
    "DelimiterMethod",
    "ExtractionMethod",
    "METHOD_KINDS",
    "RegexMethod",
    "TagMethod",
]
