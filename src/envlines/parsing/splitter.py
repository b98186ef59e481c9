from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator

from ..types import Statement

SEPARATORS = "=:"


class ScanState(enum.Enum):
    KEY = "key"
    VALUE_START = "value_start"
    UNQUOTED = "unquoted"
    IN_SINGLE_QUOTE = "in_single_quote"
    IN_DOUBLE_QUOTE = "in_double_quote"
    AFTER_ESCAPE = "after_escape"
    CLOSED = "closed"


OPEN_STATES = frozenset({ScanState.IN_SINGLE_QUOTE, ScanState.IN_DOUBLE_QUOTE, ScanState.AFTER_ESCAPE})


@dataclass(slots=True)
class QuoteScanner:
    """Character-level state machine deciding where a statement ends.

    Only the first non-blank character after the separator can open a quoted
    region. A backslash escapes the next character inside double quotes only.
    """

    state: ScanState = ScanState.KEY

    @property
    def is_open(self) -> bool:
        return self.state in OPEN_STATES

    def step(self, ch: str) -> ScanState:
        s = self.state
        if s is ScanState.KEY:
            if ch in SEPARATORS:
                self.state = ScanState.VALUE_START
        elif s is ScanState.VALUE_START:
            if ch == '"':
                self.state = ScanState.IN_DOUBLE_QUOTE
            elif ch == "'":
                self.state = ScanState.IN_SINGLE_QUOTE
            elif not ch.isspace():
                self.state = ScanState.UNQUOTED
        elif s is ScanState.IN_DOUBLE_QUOTE:
            if ch == "\\":
                self.state = ScanState.AFTER_ESCAPE
            elif ch == '"':
                self.state = ScanState.CLOSED
        elif s is ScanState.AFTER_ESCAPE:
            self.state = ScanState.IN_DOUBLE_QUOTE
        elif s is ScanState.IN_SINGLE_QUOTE:
            if ch == "'":
                self.state = ScanState.CLOSED
        return self.state

    def feed(self, text: str) -> ScanState:
        for ch in text:
            if self.state in (ScanState.UNQUOTED, ScanState.CLOSED):
                break
            self.step(ch)
        return self.state


def is_ignorable(line: str) -> bool:
    """Blank, whitespace-only and `#` comment lines carry no statement."""

    s = line.strip()
    return not s or s.startswith("#")


def iter_statements(text: str) -> Iterator[Statement]:
    """Split dotenv text into logical statements, in file order.

    A line break inside an open quote is kept and the statement continues on
    the next physical line. If the quote is still open at end of input, the
    statement falls back to its first physical line and scanning resumes on
    the line after it.
    """

    lines = text.split("\n")
    n = len(lines)
    i = 0

    while i < n:
        raw = lines[i]
        if is_ignorable(raw):
            i += 1
            continue

        first = raw.lstrip()
        scanner = QuoteScanner()
        scanner.feed(first)

        j = i
        while scanner.is_open and j + 1 < n:
            j += 1
            # The line break itself is part of the quoted value.
            scanner.feed("\n")
            scanner.feed(lines[j])

        if scanner.is_open:
            yield Statement(text=first, lineno=i + 1)
            i += 1
            continue

        yield Statement(text="\n".join([first, *lines[i + 1 : j + 1]]), lineno=i + 1)
        i = j + 1


def statement_start(text: str) -> str:
    """Return `text` from its first meaningful statement onwards.

    Leading blank and comment lines are skipped; an empty string means
    nothing but whitespace and comments remained.
    """

    rest = text
    while True:
        rest = rest.lstrip()
        if not rest:
            return ""
        if not rest.startswith("#"):
            return rest
        pos = rest.find("\n")
        if pos == -1:
            return ""
        rest = rest[pos:]
