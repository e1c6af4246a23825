"""Domain port definitions for adapters."""

from __future__ import annotations

from .compute import UrlMapProvider
from .naming import NamingScheme

__all__ = [
    "NamingScheme",
    "UrlMapProvider",
]
