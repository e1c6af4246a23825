"""Port for the resource naming scheme."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class NamingScheme(Protocol):
    """Deterministic names for the resources of one load balancer."""

    def url_map_name(self) -> str: ...


__all__ = ["NamingScheme"]
