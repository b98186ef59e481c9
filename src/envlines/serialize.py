from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping

from .config import DEFAULT_CONFIG, DotenvConfig
from .parsing.line import is_valid_key

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# Backslash first, so the escapes added afterwards are not doubled.
_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("!", "\\!"),
    ("$", "\\$"),
    ("`", "\\`"),
)


def double_quote_escape(value: str) -> str:
    for ch, repl in _ESCAPES:
        value = value.replace(ch, repl)
    return value


def _format_value(key: str, value: object) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise TypeError(f"value for {key!r} must be str or int, got {type(value).__name__}")
    if _INTEGER_RE.fullmatch(value):
        return value
    return f'"{double_quote_escape(value)}"'


def marshal(env: Mapping[str, str]) -> str:
    """Render a mapping as dotenv text.

    Keys are sorted so equal mappings always render identically. Integer
    literals are written bare; every other value is double-quoted with the
    escapes the parser undoes.
    """

    lines: list[str] = []
    for key in sorted(env):
        if not isinstance(key, str) or not is_valid_key(key):
            raise ValueError(f"key cannot be written to a dotenv file: {key!r}")
        lines.append(f"{key}={_format_value(key, env[key])}")
    return "\n".join(lines)


def write(env: Mapping[str, str], path: str | Path, *, config: DotenvConfig | None = None) -> Path:
    cfg = config or DEFAULT_CONFIG
    p = Path(path)
    p.write_text(marshal(env) + "\n", encoding=cfg.encoding)
    return p
