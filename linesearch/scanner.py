from __future__ import annotations

import os
import stat
from collections.abc import Iterator
from pathlib import Path

from linesearch.models import ScanResult, Target

DEFAULT_ENCODING = "utf-8"


def resolve_target(path: str) -> Target:
    """Classify ``path`` as a file or directory target.

    Symlinks are followed. Raises ``OSError`` when the path cannot be stat'ed.
    Anything that is not a directory is scanned as a file.
    """
    info = os.stat(path)
    if stat.S_ISDIR(info.st_mode):
        return Target(path=path, kind="directory")
    return Target(path=path, kind="file")


def iter_lines(path: str | Path, encoding: str = DEFAULT_ENCODING) -> Iterator[tuple[int, str]]:
    with open(path, "r", encoding=encoding, errors="replace") as fh:
        for idx, raw in enumerate(fh, start=1):
            yield idx, raw[:-1] if raw.endswith("\n") else raw


def scan_file(path: str | Path, pattern: str, encoding: str = DEFAULT_ENCODING) -> list[ScanResult]:
    file_path = str(path)
    results: list[ScanResult] = []
    for line_number, line in iter_lines(file_path, encoding=encoding):
        if pattern in line:
            results.append(ScanResult(file_path=file_path, line_number=line_number, line=line))
    return results
