"""URL map resource shapes.

These mirror the Compute API ``UrlMap`` resource closely enough that the
transport can translate them one to one. Fields are split into the ones we
own (computed from the ingress) and the ones the server assigns; see
``mcilb.domain.diff`` for how the split is used.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class BackendService:
    """Handle to a provisioned backend service."""

    name: str
    self_link: str


BackendServicesMap: TypeAlias = "Mapping[str, BackendService]"


@dataclass(slots=True)
class PathRule:
    paths: list[str]
    service: str


@dataclass(slots=True)
class PathMatcher:
    name: str
    default_service: str
    path_rules: list[PathRule] = field(default_factory=list["PathRule"])


@dataclass(slots=True)
class HostRule:
    hosts: list[str]
    path_matcher: str


@dataclass(frozen=True, slots=True)
class ServerResponse:
    """HTTP metadata of the response a URL map was read from."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class UrlMap:
    name: str
    description: str = ""
    default_service: str = ""
    # None and [] are distinct: the server omits empty collections entirely.
    host_rules: list[HostRule] | None = None
    path_matchers: list[PathMatcher] | None = None
    fingerprint: str = ""

    # Output only.
    creation_timestamp: str = ""
    kind: str = ""
    id: int = 0
    self_link: str = ""
    server_response: ServerResponse | None = None
