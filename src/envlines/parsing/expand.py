from __future__ import annotations

import re
from typing import Mapping

from ..resolve import ChainResolver, Lookup, MappingResolver, Resolver, as_resolver

# Leftmost match wins, so an escaped `\$` is consumed before it can start a
# reference.
_REFERENCE_RE = re.compile(r"\\\$|\$\{([^}]+)\}|\$([A-Za-z0-9_]+)")


def chain_with_presets(presets: Mapping[str, str], lookup: Lookup = None) -> Resolver:
    return ChainResolver((MappingResolver(presets), as_resolver(lookup)))


def expand_with(value: str, resolver: Resolver) -> str:
    def _replace(m: re.Match[str]) -> str:
        name = m.group(1) or m.group(2)
        if name is None:
            return "$"
        v = resolver.resolve(name)
        return "" if v is None else v

    return _REFERENCE_RE.sub(_replace, value)


def expand(value: str, presets: Mapping[str, str], lookup: Lookup = None) -> str:
    """Expand `$NAME` and `${NAME}` references in a single pass.

    Each name resolves from `presets` first, then `lookup`, else to "".
    `\\$` yields a literal `$`. Substituted text is not scanned again.
    """

    return expand_with(value, chain_with_presets(presets, lookup))
