from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib

from linesearch.collector import COLLECT_STRATEGIES, CollectStrategy
from linesearch.scanner import DEFAULT_ENCODING

DEFAULT_CONFIG_FILE = "linesearch.toml"


@dataclass(slots=True)
class SearchConfig:
    workers: int | None = None
    collect: CollectStrategy = "stream"
    follow_symlinks: bool = False
    encoding: str = DEFAULT_ENCODING


@dataclass(slots=True)
class OutputConfig:
    line_numbers: bool = False
    summary: bool = False


@dataclass(slots=True)
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(path: str | None) -> Config:
    if path is None:
        default = Path(DEFAULT_CONFIG_FILE)
        if not default.exists():
            return Config()
        path = str(default)

    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")

    with cfg_path.open("rb") as fh:
        payload = tomllib.load(fh)

    search = payload.get("search", {})
    output = payload.get("output", {})

    config = Config()
    workers = search.get("workers")
    config.search.workers = int(workers) if workers is not None else None
    config.search.collect = search.get("collect", config.search.collect)
    config.search.follow_symlinks = bool(search.get("follow_symlinks", config.search.follow_symlinks))
    config.search.encoding = str(search.get("encoding", config.search.encoding))
    config.output.line_numbers = bool(output.get("line_numbers", config.output.line_numbers))
    config.output.summary = bool(output.get("summary", config.output.summary))
    return config


def validate_config(config: Config) -> list[str]:
    errors: list[str] = []
    if config.search.workers is not None and config.search.workers < 1:
        errors.append("workers must be >= 1")
    if config.search.collect not in COLLECT_STRATEGIES:
        errors.append(f"collect must be one of: {', '.join(COLLECT_STRATEGIES)}")
    try:
        io.TextIOWrapper(io.BytesIO(), encoding=config.search.encoding)
    except LookupError:
        errors.append(f"encoding must be a text encoding: {config.search.encoding}")
    return errors
