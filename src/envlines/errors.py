from __future__ import annotations


class FormatError(ValueError):
    """A statement that matches none of the recognized dotenv shapes."""

    def __init__(self, line: str, *, reason: str = "invalid statement", lineno: int | None = None) -> None:
        self.line = line
        self.reason = reason
        self.lineno = lineno

        first = line.split("\n", 1)[0]
        prefix = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{prefix}{reason}: {first!r}")
