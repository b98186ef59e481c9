from __future__ import annotations

import logging
import re
from typing import Mapping

from ..errors import FormatError
from ..resolve import Lookup
from ..types import QuoteStyle
from .expand import chain_with_presets, expand_with
from .splitter import SEPARATORS

logger = logging.getLogger(__name__)

# `export` is a prefix only when whitespace and then a key follow it:
# `exportFOO=1`, `export.FOO=1` and `export =1` all keep it in the key.
_EXPORT_RE = re.compile(r"export\s+(?=[^\s=:])")
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

KEY_PUNCTUATION = "_.-[]"


def strip_export(line: str) -> str:
    m = _EXPORT_RE.match(line)
    return line[m.end() :] if m else line


def _key_error(key: str) -> str | None:
    for ch in key:
        if ch.isspace():
            return "key cannot contain whitespace"
        if not (ch.isalnum() or ch in KEY_PUNCTUATION):
            return f"unexpected character {ch!r} in key"
    return None


def is_valid_key(key: str) -> bool:
    return _key_error(key) is None


def split_key(line: str, *, lineno: int | None = None) -> tuple[str, str]:
    """Split a statement at its first `=` or `:` into (key, raw value)."""

    s = strip_export(line.lstrip())
    for i, ch in enumerate(s):
        if ch in SEPARATORS:
            key = s[:i].strip()
            reason = _key_error(key)
            if reason is not None:
                raise FormatError(line, reason=reason, lineno=lineno)
            return key, s[i + 1 :]
    raise FormatError(line, reason="missing '=' or ':' separator", lineno=lineno)


def inherited_key(line: str) -> str | None:
    """Return the key of a bare `KEY` declaration, or None.

    Such a line takes its value from the external lookup.
    """

    s = strip_export(line.strip())
    if not s or any(ch in SEPARATORS for ch in s):
        return None
    return s if is_valid_key(s) else None


def quote_style(value: str) -> QuoteStyle:
    if value.startswith('"'):
        return "double"
    if value.startswith("'"):
        return "single"
    return "unquoted"


def closing_quote(value: str, quote: str) -> int:
    """Index of the quote closing `value[0]`, or -1 when unterminated."""

    escaped = False
    for i in range(1, len(value)):
        ch = value[i]
        if quote == '"':
            if escaped:
                escaped = False
                continue
            if ch == "\\":
                escaped = True
                continue
        if ch == quote:
            return i
    return -1


def _unescape_one(m: re.Match[str]) -> str:
    c = m.group(1)
    if c == "n":
        return "\n"
    if c == "r":
        return "\r"
    if c == "$":
        # Left for `expand`, which turns it into a literal `$`.
        return "\\$"
    return c


def unescape(body: str) -> str:
    return _ESCAPE_RE.sub(_unescape_one, body)


def strip_inline_comment(value: str) -> str:
    """Cut an unquoted value at a `#` that starts it or follows whitespace."""

    for i, ch in enumerate(value):
        if ch == "#" and (i == 0 or value[i - 1].isspace()):
            return value[:i].rstrip()
    return value.rstrip()


def parse_line(
    line: str,
    presets: Mapping[str, str],
    *,
    lookup: Lookup = None,
    lineno: int | None = None,
) -> tuple[str, str]:
    """Parse one logical statement into `(key, value)`.

    References in unquoted and double-quoted values resolve against
    `presets` first and `lookup` second. Raises `FormatError` when the
    statement has no separator or an invalid key.
    """

    key, rest = split_key(line, lineno=lineno)
    value = rest.lstrip()
    resolver = chain_with_presets(presets, lookup)

    style = quote_style(value)
    if style == "double":
        end = closing_quote(value, '"')
        if end == -1:
            return key, '"' + expand_with(unescape(value[1:].rstrip()), resolver)
        _note_trailing(key, value[end + 1 :])
        return key, expand_with(unescape(value[1:end]), resolver)

    if style == "single":
        end = closing_quote(value, "'")
        if end == -1:
            return key, value.rstrip()
        _note_trailing(key, value[end + 1 :])
        return key, value[1:end]

    return key, expand_with(strip_inline_comment(value), resolver)


def _note_trailing(key: str, trailing: str) -> None:
    t = trailing.strip()
    if t and not t.startswith("#"):
        logger.debug("ignoring text after closing quote of %s: %r", key, t)
