"""Statement splitting, line parsing and variable substitution."""

from .expand import expand
from .line import inherited_key, parse_line
from .splitter import QuoteScanner, ScanState, iter_statements, statement_start

__all__ = [
    "expand",
    "inherited_key",
    "parse_line",
    "QuoteScanner",
    "ScanState",
    "iter_statements",
    "statement_start",
]
