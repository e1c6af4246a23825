"""Routing table derived from an ingress: host -> path -> backend service."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from .errors import (
    BackendNotFoundError,
    BackendResolutionError,
    MissingDefaultBackendError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .ingress import Ingress, IngressBackend
    from .urlmap import BackendService, BackendServicesMap

log = getLogger(__name__)

DEFAULT_HOST: Final[str] = "*"
DEFAULT_PATH: Final[str] = "/*"


@dataclass(slots=True)
class RoutingTable:
    """Nested mapping of hostname to path expression to backend service.

    Iteration is sorted by hostname and then by path so that the URL map built
    from a table does not depend on the order rules were declared in.
    """

    default_backend: BackendService | None = None
    errors: list[BackendNotFoundError] = field(default_factory=list["BackendNotFoundError"])
    _hosts: dict[str, dict[str, BackendService]] = field(default_factory=dict)

    def add_host(self, host: str) -> None:
        self._hosts.setdefault(host, {})

    def put(self, host: str, path: str, backend: BackendService) -> None:
        self._hosts.setdefault(host, {})[path] = backend

    def hosts(self) -> Iterator[tuple[str, list[tuple[str, BackendService]]]]:
        for host in sorted(self._hosts):
            yield host, sorted(self._hosts[host].items(), key=lambda item: item[0])

    def get(self, host: str, path: str) -> BackendService | None:
        return self._hosts.get(host, {}).get(path)

    def get_default_backend(self) -> BackendService:
        if self.default_backend is None:
            raise MissingDefaultBackendError("routing table has no default backend")
        return self.default_backend

    @property
    def error(self) -> BackendResolutionError | None:
        """Combined error for every entry that was skipped, or ``None``."""

        if not self.errors:
            return None
        return BackendResolutionError(self.errors)

    def raise_for_errors(self) -> None:
        error = self.error
        if error is not None:
            raise error

    def __len__(self) -> int:
        return len(self._hosts)

    def __contains__(self, host: object) -> bool:
        return host in self._hosts


def _resolve_backend(backend: IngressBackend, backends: BackendServicesMap) -> BackendService:
    service = backends.get(backend.service_name)
    if service is None:
        raise BackendNotFoundError(backend.service_name)
    return service


def build_routing_table(ingress: Ingress, backends: BackendServicesMap) -> RoutingTable:
    """Convert ``ingress`` into a routing table using ``backends`` for lookups.

    Paths whose backend cannot be resolved are skipped and recorded on
    ``RoutingTable.errors``; the caller decides whether a partial table is
    acceptable. A missing or unresolvable default backend raises
    ``MissingDefaultBackendError`` since no URL map can exist without one.

    Rules sharing a host are merged path by path: a later rule replaces only
    the paths it declares, not the paths an earlier rule set for that host.
    """

    table = RoutingTable()
    for rule in ingress.spec.rules:
        if rule.http is None:
            log.info("Ignoring non http ingress rule for host %r", rule.host)
            continue
        # If multiple hostless rules are specified they all land on DEFAULT_HOST.
        host = rule.host or DEFAULT_HOST
        table.add_host(host)
        for ingress_path in rule.http.paths:
            try:
                backend = _resolve_backend(ingress_path.backend, backends)
            except BackendNotFoundError as exc:
                log.warning("Skipping path %r of host %r: %s", ingress_path.path, host, exc)
                table.errors.append(exc)
                continue
            # An empty path is a catch-all; with several of them the last one wins.
            table.put(host, ingress_path.path or DEFAULT_PATH, backend)

    if ingress.spec.backend is None:
        raise MissingDefaultBackendError(
            f"ingress {ingress.namespace}/{ingress.name} has no default backend; "
            "multicluster ingress needs a user specified default backend",
            errors=table.errors,
        )
    try:
        table.default_backend = _resolve_backend(ingress.spec.backend, backends)
    except BackendNotFoundError as exc:
        raise MissingDefaultBackendError(str(exc), errors=[*table.errors, exc]) from exc
    return table
