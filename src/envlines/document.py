from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, AnyStr

from .config import DEFAULT_CONFIG, DotenvConfig
from .parsing.line import inherited_key, parse_line
from .parsing.splitter import iter_statements
from .resolve import Lookup, as_resolver

logger = logging.getLogger(__name__)


def _decode(data: str | bytes, config: DotenvConfig) -> str:
    text = data.decode(config.encoding) if isinstance(data, bytes) else data
    return text.replace("\r\n", "\n")


def _parse_text(text: str, lookup: Lookup) -> dict[str, str]:
    resolver = as_resolver(lookup)
    env: dict[str, str] = {}

    for stmt in iter_statements(text):
        key = inherited_key(stmt.text)
        if key is not None:
            v = resolver.resolve(key)
            if v is None:
                logger.debug("line %d: %s not found in lookup, skipped", stmt.lineno, key)
            else:
                env[key] = v
            continue

        # `env` doubles as the presets: later lines see earlier keys.
        key, value = parse_line(stmt.text, env, lookup=resolver, lineno=stmt.lineno)
        env[key] = value

    return env


def unmarshal(
    data: str | bytes,
    *,
    lookup: Lookup = None,
    config: DotenvConfig | None = None,
) -> dict[str, str]:
    """Parse dotenv text into a new ordered mapping.

    Raises `FormatError` on the first malformed statement; nothing is
    returned for a document that fails part way.
    """

    return _parse_text(_decode(data, config or DEFAULT_CONFIG), lookup)


def parse(
    stream: IO[AnyStr],
    *,
    lookup: Lookup = None,
    config: DotenvConfig | None = None,
) -> dict[str, str]:
    """Read a text or binary stream to the end and parse it."""

    return unmarshal(stream.read(), lookup=lookup, config=config)


def read_file(path: str | Path, *, lookup: Lookup = None, config: DotenvConfig | None = None) -> dict[str, str]:
    cfg = config or DEFAULT_CONFIG
    p = Path(path)

    # I/O errors (missing file, directory, permissions) surface unchanged.
    data = p.read_bytes()
    env = unmarshal(data, lookup=lookup, config=cfg)

    logger.debug("read %d keys from %s", len(env), p)
    return env


def default_paths(paths: tuple[str | Path, ...], config: DotenvConfig | None = None) -> tuple[str | Path, ...]:
    if paths:
        return paths
    return ((config or DEFAULT_CONFIG).default_filename,)


def read_with_lookup(
    lookup: Lookup,
    *paths: str | Path,
    config: DotenvConfig | None = None,
) -> dict[str, str]:
    """Read one or more dotenv files into a single mapping.

    Files are parsed independently, in order; a key defined by a later file
    replaces the earlier value. With no paths, the configured default
    filename (`.env`) is read.
    """

    env: dict[str, str] = {}
    for path in default_paths(paths, config):
        env.update(read_file(path, lookup=lookup, config=config))
    return env


def read(*paths: str | Path, config: DotenvConfig | None = None) -> dict[str, str]:
    return read_with_lookup(None, *paths, config=config)
