from __future__ import annotations

import argparse
import os
import sys

from linesearch import __version__
from linesearch.collector import COLLECT_STRATEGIES, collect
from linesearch.config import Config, load_config, validate_config
from linesearch.dispatcher import search_directory
from linesearch.models import SearchSummary
from linesearch.reporters import (
    format_scan_error,
    format_summary,
    format_walk_error,
    print_results,
)
from linesearch.scanner import resolve_target, scan_file

EXIT_OK = 0
EXIT_FAILURE = 1


class SearchArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = SearchArgumentParser(
        prog="linesearch",
        usage="%(prog)s [-r] [-n] [options] <path> <pattern>",
        description="Print lines containing a literal substring, in a file or a directory tree.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-r", "--recursive", action="store_true", help="Search directories recursively.")
    parser.add_argument("-n", "--line-number", action="store_true", help="Prefix each match with its line number.")
    parser.add_argument("--workers", type=int, help="Maximum number of files scanned concurrently.")
    parser.add_argument("--collect", choices=list(COLLECT_STRATEGIES), help="Stream results or buffer them all.")
    parser.add_argument("--follow-symlinks", action="store_true", help="Follow symlinked files and directories.")
    parser.add_argument("--encoding", help="Text encoding used to read files.")
    parser.add_argument("--summary", action="store_true", help="Print a run summary to stderr.")
    parser.add_argument("--config", help="Path to linesearch TOML config.")
    # Options end at the first operand, so a pattern may start with "-".
    parser.add_argument(
        "operands",
        nargs=argparse.REMAINDER,
        metavar="<path> <pattern>",
        help="File or directory to search, then the literal substring to look for.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parse_args(parser, argv)
    if args.path is None or args.pattern is None:
        print(parser.format_usage().rstrip(), file=sys.stderr)
        raise SystemExit(EXIT_FAILURE)
    raise SystemExit(run_search(args))


def parse_args(parser: argparse.ArgumentParser, argv: list[str] | None = None) -> argparse.Namespace:
    args = parser.parse_args(argv)
    operands = list(args.operands)
    args.path = operands[0] if len(operands) > 0 else None
    args.pattern = operands[1] if len(operands) > 1 else None
    return args


def run_search(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"[config] {exc}", file=sys.stderr)
        return EXIT_FAILURE
    merged = merge_cli_with_config(args, config)
    validation_errors = validate_config(merged)
    if validation_errors:
        for error in validation_errors:
            print(f"[config] {error}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        target = resolve_target(args.path)
    except OSError as exc:
        print(f"{args.path}: {exc.strerror or exc}", file=sys.stderr)
        return EXIT_FAILURE

    if target.is_directory and not args.recursive:
        print(f"{_display_name(target.path)}: is a directory", file=sys.stderr)
        return EXIT_FAILURE

    summary = SearchSummary()
    numbered = merged.output.line_numbers
    if target.is_directory:
        results = search_directory(
            target.path,
            args.pattern,
            max_workers=merged.search.workers,
            follow_symlinks=merged.search.follow_symlinks,
            encoding=merged.search.encoding,
            on_error=_report_scan_error,
            on_walk_error=_report_walk_error,
            summary=summary,
        )
        print_results(collect(results, merged.search.collect), numbered)
    else:
        try:
            results = scan_file(target.path, args.pattern, encoding=merged.search.encoding)
        except OSError as exc:
            print(format_scan_error(target.path, exc), file=sys.stderr)
            return EXIT_FAILURE
        summary.files_scanned = 1
        summary.matches = len(results)
        print_results(results, numbered)

    if merged.output.summary:
        print(format_summary(summary), file=sys.stderr)
    return EXIT_OK


def merge_cli_with_config(args: argparse.Namespace, config: Config) -> Config:
    merged = config
    if args.line_number:
        merged.output.line_numbers = True
    if args.summary:
        merged.output.summary = True
    if args.workers is not None:
        merged.search.workers = args.workers
    if args.collect:
        merged.search.collect = args.collect
    if args.follow_symlinks:
        merged.search.follow_symlinks = True
    if args.encoding:
        merged.search.encoding = args.encoding
    return merged


def _report_scan_error(path: str, exc: OSError) -> None:
    print(format_scan_error(path, exc), flush=True)


def _report_walk_error(exc: OSError) -> None:
    print(format_walk_error(exc), flush=True)


def _display_name(path: str) -> str:
    return os.path.basename(os.path.normpath(path)) or path


if __name__ == "__main__":
    main()
