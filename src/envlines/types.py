from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

QuoteStyle = Literal["unquoted", "single", "double"]


@dataclass(frozen=True, slots=True)
class Statement:
    """One logical dotenv statement.

    `text` may span several physical lines when a quoted value was left open
    across a line break.
    """

    text: str
    # 1-based physical line where the statement starts.
    lineno: int
