"""Public interface for the Compute API adapter."""

from __future__ import annotations

from .client import ComputeAPIError, ComputeUrlMapClient
from .schema import UrlMapPayload
from .translator import build_url_map_payload, parse_url_map

__all__ = [
    "ComputeAPIError",
    "ComputeUrlMapClient",
    "UrlMapPayload",
    "build_url_map_payload",
    "parse_url_map",
]
