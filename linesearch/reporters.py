from __future__ import annotations

from collections.abc import Iterable
import sys
from typing import TextIO

from linesearch.models import ScanResult, SearchSummary


def format_result(result: ScanResult, numbered: bool) -> str:
    if numbered:
        return f"{result.file_path}:{result.line_number} : {result.line}"
    return f"{result.file_path}: {result.line}"


def print_results(results: Iterable[ScanResult], numbered: bool, out: TextIO | None = None) -> int:
    stream = out if out is not None else sys.stdout
    printed = 0
    for result in results:
        print(format_result(result, numbered), file=stream)
        printed += 1
    return printed


def format_scan_error(path: str, exc: OSError) -> str:
    return f"Error scanning {path}: {_describe(exc)}"


def format_walk_error(exc: OSError) -> str:
    if exc.filename is not None:
        return f"{exc.filename}: {_describe(exc)}"
    return str(exc)


def format_summary(summary: SearchSummary) -> str:
    return (
        "[summary] "
        f"files={summary.files_scanned} failed={summary.files_failed} "
        f"walk_errors={summary.traversal_errors} matches={summary.matches}"
    )


def _describe(exc: OSError) -> str:
    return exc.strerror or str(exc)
