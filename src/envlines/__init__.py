"""envlines: parse, interpolate and write dotenv (`.env`) files.

The parsing core is pure: text in, ordered `dict` out. Applying the result to
`os.environ` (or any other mutable mapping) lives in `envlines.loader`.
"""

from .config import DotenvConfig
from .document import parse, read, read_with_lookup, unmarshal
from .errors import FormatError
from .loader import LoadResult, load, overload
from .parsing import expand, iter_statements, parse_line
from .resolve import ChainResolver, FunctionResolver, MappingResolver, NullResolver, Resolver, as_resolver
from .serialize import marshal, write
from .types import QuoteStyle, Statement

__all__ = [
    "DotenvConfig",
    "FormatError",
    "LoadResult",
    "Statement",
    "QuoteStyle",
    "parse",
    "unmarshal",
    "read",
    "read_with_lookup",
    "marshal",
    "write",
    "load",
    "overload",
    "parse_line",
    "expand",
    "iter_statements",
    "Resolver",
    "MappingResolver",
    "FunctionResolver",
    "ChainResolver",
    "NullResolver",
    "as_resolver",
]
