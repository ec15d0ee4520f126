"""File metadata exposed to templates as extra fragments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import List

from ..models import ExtractedFragment

UPDATED_AT_PLACEHOLDER = "%locales.updatedAt%"
FILE_NAME_PLACEHOLDER = "%locales.fileName%"


@dataclass(frozen=True)
class Locales:
    updated_at: str
    file_name: str

    @classmethod
    def for_file(cls, path: Path) -> "Locales":
        modified = datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
        return cls(
            updated_at=modified.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            file_name=path.name,
        )

    def to_fragments(self) -> List[ExtractedFragment]:
        return [
            ExtractedFragment(content=self.updated_at, target_placeholder=UPDATED_AT_PLACEHOLDER),
            ExtractedFragment(content=self.file_name, target_placeholder=FILE_NAME_PLACEHOLDER),
        ]


__all__ = ["FILE_NAME_PLACEHOLDER", "Locales", "UPDATED_AT_PLACEHOLDER"]
