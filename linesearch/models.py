from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TargetKind = Literal["file", "directory"]


@dataclass(frozen=True, slots=True)
class ScanResult:
    file_path: str
    line_number: int
    line: str


@dataclass(frozen=True, slots=True)
class Target:
    path: str
    kind: TargetKind

    @property
    def is_directory(self) -> bool:
        return self.kind == "directory"


@dataclass(slots=True)
class SearchSummary:
    files_scanned: int = 0
    files_failed: int = 0
    traversal_errors: int = 0
    matches: int = 0
