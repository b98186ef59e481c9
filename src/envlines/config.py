from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DotenvConfig:
    default_filename: str = ".env"
    encoding: str = "utf-8"


DEFAULT_CONFIG = DotenvConfig()
