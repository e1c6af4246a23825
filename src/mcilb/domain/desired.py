"""Assembly of the desired URL map for a multicluster ingress."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from .naming import path_matcher_name
from .routing import build_routing_table
from .status import LoadBalancerStatus, encode_status, remove_clusters
from .urlmap import HostRule, PathMatcher, PathRule, UrlMap

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .errors import BackendResolutionError
    from .ingress import Ingress
    from .urlmap import BackendServicesMap

log = getLogger(__name__)

URL_MAP_RESOURCE_KIND: Final[str] = "URL map"


@dataclass(slots=True)
class DesiredUrlMap:
    """Desired URL map plus the combined error of any skipped ingress paths."""

    url_map: UrlMap
    error: BackendResolutionError | None = None

    def raise_for_errors(self) -> None:
        if self.error is not None:
            raise self.error


def desired_status_string(
    lb_name: str,
    resource_kind: str,
    ip_address: str,
    clusters: Sequence[str],
) -> str:
    """Return the encoded status expected on a resource of ``resource_kind``."""

    status = LoadBalancerStatus(
        description=f"{resource_kind} for kubernetes multicluster loadbalancer {lb_name}",
        load_balancer_name=lb_name,
        clusters=tuple(sorted(clusters)),
        ip_address=ip_address,
    )
    return encode_status(status)


def desired_url_map(
    name: str,
    *,
    lb_name: str,
    ip_address: str,
    clusters: Sequence[str],
    ingress: Ingress,
    backends: BackendServicesMap,
) -> DesiredUrlMap:
    """Compute the URL map named ``name`` that serves ``ingress``.

    Raises ``MissingDefaultBackendError`` when the ingress has no usable
    default backend. Unresolvable path backends do not raise; they are left
    out of the URL map and reported through ``DesiredUrlMap.error``.
    """

    description = desired_status_string(lb_name, URL_MAP_RESOURCE_KIND, ip_address, clusters)
    table = build_routing_table(ingress, backends)

    url_map = UrlMap(
        name=name,
        description=description,
        default_service=table.get_default_backend().self_link,
    )
    host_rules: list[HostRule] = []
    path_matchers: list[PathMatcher] = []
    for hostname, path_backends in table.hosts():
        pm_name = path_matcher_name(hostname)
        host_rules.append(HostRule(hosts=[hostname], path_matcher=pm_name))
        path_matchers.append(
            PathMatcher(
                name=pm_name,
                default_service=url_map.default_service,
                path_rules=[
                    PathRule(paths=[path], service=backend.self_link)
                    for path, backend in path_backends
                ],
            )
        )
    if len(table) > 0:
        # Only set these when there is data; the server drops empty
        # collections and [] would never compare equal to what it returns.
        url_map.host_rules = host_rules
        url_map.path_matchers = path_matchers

    error = table.error
    if error is not None:
        log.warning("Desired URL map %s is partial: %s", name, error)
    return DesiredUrlMap(url_map=url_map, error=error)


def desired_url_map_without_clusters(existing: UrlMap, clusters_to_remove: Sequence[str]) -> UrlMap:
    """Return a copy of ``existing`` whose status no longer lists the given clusters."""

    description = remove_clusters(existing.description, tuple(clusters_to_remove))
    return dataclasses.replace(existing, description=description)
