from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Literal

from linesearch.models import ScanResult

CollectStrategy = Literal["stream", "buffer"]
COLLECT_STRATEGIES: tuple[str, ...] = ("stream", "buffer")


def collect(results: Iterable[ScanResult], strategy: CollectStrategy = "stream") -> Iterable[ScanResult]:
    """Apply a collection strategy to a stream of scan results.

    ``stream`` hands results on as they are produced. ``buffer`` consumes the
    whole stream first, so nothing is returned before the producer is done.
    """
    if strategy == "stream":
        return _stream(results)
    if strategy == "buffer":
        return list(results)
    raise ValueError(f"Unsupported collect strategy: {strategy}")


def _stream(results: Iterable[ScanResult]) -> Iterator[ScanResult]:
    yield from results
