from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import MutableMapping

from .config import DotenvConfig
from .document import default_paths, read_file
from .resolve import Lookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadResult:
    # Parsed values of all files, later files winning.
    values: dict[str, str]
    paths: tuple[Path, ...]
    # Keys actually written to the store.
    applied: tuple[str, ...]


def _apply(
    paths: tuple[str | Path, ...],
    *,
    override: bool,
    store: MutableMapping[str, str] | None,
    lookup: Lookup,
    config: DotenvConfig | None,
) -> LoadResult:
    target = os.environ if store is None else store

    values: dict[str, str] = {}
    applied: list[str] = []
    done: list[Path] = []

    for path in default_paths(paths, config):
        p = Path(path)
        env = read_file(p, lookup=lookup, config=config)

        # Checked against the live store, so earlier files also count.
        for key, val in env.items():
            if override or key not in target:
                target[key] = val
                applied.append(key)
            else:
                logger.debug("%s already set, keeping existing value", key)

        values.update(env)
        done.append(p)

    return LoadResult(values=values, paths=tuple(done), applied=tuple(applied))


def load(
    *paths: str | Path,
    store: MutableMapping[str, str] | None = None,
    lookup: Lookup = None,
    config: DotenvConfig | None = None,
) -> LoadResult:
    """Load dotenv files into `store` (default: `os.environ`).

    Keys the store already defines are left untouched. With no paths, the
    configured default filename (`.env`) is loaded. The first read or parse
    error propagates and later files are not attempted.
    """

    return _apply(paths, override=False, store=store, lookup=lookup, config=config)


def overload(
    *paths: str | Path,
    store: MutableMapping[str, str] | None = None,
    lookup: Lookup = None,
    config: DotenvConfig | None = None,
) -> LoadResult:
    """Like `load`, but always overwrite existing keys."""

    return _apply(paths, override=True, store=store, lookup=lookup, config=config)
