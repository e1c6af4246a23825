"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from mcilb.adapters.backends import load_backend_services
from mcilb.adapters.compute import ComputeUrlMapClient
from mcilb.adapters.kubernetes import load_ingress
from mcilb.config import get_compute_config
from mcilb.domain.naming import Namer
from mcilb.domain.syncer import UrlMapSyncer

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

    from mcilb.domain.ports import UrlMapProvider
    from mcilb.domain.status import LoadBalancerStatus


log = getLogger(__name__)

# Used where a syncer is needed only for its provider, e.g. listing.
_LISTING_LB_NAME = "list"


@contextmanager
def _provider_scope(provider: UrlMapProvider | None) -> Iterator[UrlMapProvider]:
    if provider is not None:
        yield provider
        return
    with ComputeUrlMapClient(get_compute_config()) as client:
        yield client


@contextmanager
def open_syncer(lb_name: str, *, provider: UrlMapProvider | None = None) -> Iterator[UrlMapSyncer]:
    """Yield a syncer for ``lb_name``; a Compute API client is opened when none is given."""

    namer = Namer(lb_name)
    with _provider_scope(provider) as active_provider:
        yield UrlMapSyncer(namer=namer, provider=active_provider, listing_prefix=namer.prefix)


def ensure_load_balancer_url_map(
    *,
    lb_name: str,
    ip_address: str,
    clusters: Sequence[str],
    ingress_path: Path,
    backends_path: Path,
    force_update: bool = False,
    provider: UrlMapProvider | None = None,
) -> str:
    """Create or update the URL map for the ingress manifest at ``ingress_path``."""

    ingress = load_ingress(ingress_path)
    backends = load_backend_services(backends_path)
    log.info(
        "Ensuring url map: lb=%s, ingress=%s/%s, clusters=%s, force=%s",
        lb_name,
        ingress.namespace,
        ingress.name,
        list(clusters),
        force_update,
    )
    with open_syncer(lb_name, provider=provider) as syncer:
        self_link = syncer.ensure_url_map(
            lb_name, ip_address, clusters, ingress, backends, force_update=force_update
        )
    log.info("URL map for %s is %s", lb_name, self_link)
    return self_link


def delete_load_balancer_url_map(*, lb_name: str, provider: UrlMapProvider | None = None) -> None:
    with open_syncer(lb_name, provider=provider) as syncer:
        syncer.delete_url_map()


def get_load_balancer_status(
    *, lb_name: str, provider: UrlMapProvider | None = None
) -> LoadBalancerStatus:
    with open_syncer(lb_name, provider=provider) as syncer:
        return syncer.get_load_balancer_status()


def list_load_balancer_statuses(
    *, provider: UrlMapProvider | None = None
) -> list[LoadBalancerStatus]:
    with open_syncer(_LISTING_LB_NAME, provider=provider) as syncer:
        return syncer.list_load_balancer_statuses()


def remove_clusters(
    *, lb_name: str, clusters: Sequence[str], provider: UrlMapProvider | None = None
) -> None:
    with open_syncer(lb_name, provider=provider) as syncer:
        syncer.remove_clusters_from_status(clusters)
