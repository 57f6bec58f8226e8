from __future__ import annotations

from collections.abc import Callable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
import os
from pathlib import Path
import queue

from linesearch.models import ScanResult, SearchSummary
from linesearch.scanner import DEFAULT_ENCODING, scan_file

ErrorHandler = Callable[[str, OSError], None]


def _ignore_error(path: str, exc: OSError) -> None:
    return None


def iter_files(
    root: str,
    follow_symlinks: bool = False,
    on_error: Callable[[OSError], None] | None = None,
) -> Iterator[str]:
    """Yield every regular file below ``root``.

    Symlinks are skipped unless ``follow_symlinks`` is set, in which case a
    directory reached twice (same device and inode) is only entered once.
    Directories that cannot be listed are handed to ``on_error`` and skipped.
    """
    visited: set[tuple[int, int]] = set()

    for dirpath, dirnames, filenames in os.walk(root, topdown=True, onerror=on_error, followlinks=follow_symlinks):
        dir_path = Path(dirpath)
        if follow_symlinks:
            try:
                info = dir_path.stat()
            except OSError as exc:
                if on_error is not None:
                    on_error(exc)
                dirnames[:] = []
                continue
            key = (info.st_dev, info.st_ino)
            if key in visited:
                dirnames[:] = []
                continue
            visited.add(key)

        for filename in filenames:
            file_path = dir_path / filename
            if not follow_symlinks and file_path.is_symlink():
                continue
            if not file_path.is_file():
                continue
            yield os.path.join(dirpath, filename)


def search_directory(
    root: str,
    pattern: str,
    *,
    max_workers: int | None = None,
    follow_symlinks: bool = False,
    encoding: str = DEFAULT_ENCODING,
    on_error: ErrorHandler | None = None,
    on_walk_error: Callable[[OSError], None] | None = None,
    summary: SearchSummary | None = None,
) -> Iterator[ScanResult]:
    """Scan every file below ``root`` concurrently, yielding matches per file.

    Each file is one task on a thread pool owned by this call. Results of a
    task are yielded as soon as it finishes, also while the walk is still
    running. The iterator ends only after every submitted task has finished.
    A failing task is passed to ``on_error`` and contributes no results.
    All callbacks and ``summary`` updates run on the consuming thread.
    Closing the iterator early cancels the scans that have not started yet.
    """
    report = on_error or _ignore_error
    stats = summary if summary is not None else SearchSummary()

    def walk_error(exc: OSError) -> None:
        stats.traversal_errors += 1
        if on_walk_error is not None:
            on_walk_error(exc)

    def drain(future: Future[list[ScanResult]], file_path: str) -> list[ScanResult]:
        try:
            results = future.result()
        except OSError as exc:
            stats.files_failed += 1
            report(file_path, exc)
            return []
        stats.files_scanned += 1
        stats.matches += len(results)
        return results

    executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="linesearch")
    finished: queue.SimpleQueue[Future[list[ScanResult]]] = queue.SimpleQueue()
    pending: dict[Future[list[ScanResult]], str] = {}
    try:
        for file_path in iter_files(root, follow_symlinks=follow_symlinks, on_error=walk_error):
            future = executor.submit(scan_file, file_path, pattern, encoding)
            pending[future] = file_path
            future.add_done_callback(finished.put)
            while True:
                try:
                    done = finished.get_nowait()
                except queue.Empty:
                    break
                yield from drain(done, pending.pop(done))

        while pending:
            done = finished.get()
            yield from drain(done, pending.pop(done))
    finally:
        executor.shutdown(wait=True, cancel_futures=True)
