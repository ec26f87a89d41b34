"""Static build profiles."""

from __future__ import annotations

from .tiny import (
    DEFAULT_CHANNEL,
    DEFAULT_COMPONENTS,
    DEFAULT_FLAGS,
    DEFAULT_TARGET,
    tiny_profile,
)

__all__ = [
    "DEFAULT_CHANNEL",
    "DEFAULT_COMPONENTS",
    "DEFAULT_FLAGS",
    "DEFAULT_TARGET",
    "tiny_profile",
]
