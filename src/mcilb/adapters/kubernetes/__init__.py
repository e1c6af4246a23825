"""Public interface for the Kubernetes manifest adapter."""

from __future__ import annotations

from .schema import IngressPayload
from .translator import load_ingress, parse_ingress

__all__ = [
    "IngressPayload",
    "load_ingress",
    "parse_ingress",
]
