"""Reconciliation of the URL map of a multicluster ingress."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .desired import desired_url_map, desired_url_map_without_clusters
from .diff import url_map_matches
from .errors import (
    ConflictWithoutForceError,
    ProviderError,
    RemoteError,
    StatusDecodeError,
    UrlMapNotFoundError,
)
from .naming import DEFAULT_PREFIX
from .status import decode_status

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .ingress import Ingress
    from .ports import NamingScheme, UrlMapProvider
    from .status import LoadBalancerStatus
    from .urlmap import BackendServicesMap, UrlMap

log = getLogger(__name__)


@dataclass(slots=True)
class UrlMapSyncer:
    """Keeps the URL map of one load balancer in sync with its ingress.

    Every call fetches fresh state from ``provider``; nothing is cached and
    nothing is retried. Callers serialize calls against the same load balancer.
    """

    namer: NamingScheme
    provider: UrlMapProvider
    listing_prefix: str = DEFAULT_PREFIX

    def ensure_url_map(
        self,
        lb_name: str,
        ip_address: str,
        clusters: Sequence[str],
        ingress: Ingress,
        backends: BackendServicesMap,
        *,
        force_update: bool = False,
    ) -> str:
        """Make sure the URL map for ``ingress`` exists and return its self link.

        Raises ``DesiredStateError`` before touching the provider when the
        desired URL map cannot be computed completely, and
        ``ConflictWithoutForceError`` when a differing URL map exists and
        ``force_update`` is not set.
        """

        log.info("Ensuring url map for load balancer %s", lb_name)
        desired = desired_url_map(
            self.namer.url_map_name(),
            lb_name=lb_name,
            ip_address=ip_address,
            clusters=clusters,
            ingress=ingress,
            backends=backends,
        )
        desired.raise_for_errors()
        desired_um = desired.url_map
        name = desired_um.name

        try:
            existing_um = self.provider.get_url_map(name)
        except UrlMapNotFoundError:
            log.info("URL map %s does not exist yet", name)
            return self._create_url_map(desired_um)
        except ProviderError as exc:
            raise RemoteError("get", name, exc) from exc

        log.info("URL map %s exists already, checking if it matches the desired url map", name)
        # The API rejects updates without the fingerprint of the version being replaced.
        desired_um.fingerprint = existing_um.fingerprint
        if url_map_matches(desired_um, existing_um):
            log.info("Desired url map %s exists already", name)
            return existing_um.self_link
        if force_update:
            return self._update_url_map(desired_um)
        log.warning("Will not overwrite differing URL map %s without force", name)
        raise ConflictWithoutForceError(name)

    def delete_url_map(self) -> None:
        """Delete the URL map; deleting a missing URL map succeeds."""

        name = self.namer.url_map_name()
        log.info("Deleting url map %s", name)
        try:
            self.provider.delete_url_map(name)
        except UrlMapNotFoundError:
            log.info("URL map %s does not exist. Nothing to delete", name)
            return
        except ProviderError as exc:
            raise RemoteError("delete", name, exc) from exc
        log.info("URL map %s deleted successfully", name)

    def get_load_balancer_status(self) -> LoadBalancerStatus:
        """Return the status stored on the URL map.

        ``UrlMapNotFoundError`` is raised as is, so callers can tell a missing
        load balancer apart from one whose status cannot be read.
        """

        name = self.namer.url_map_name()
        try:
            url_map = self.provider.get_url_map(name)
        except ProviderError as exc:
            raise RemoteError("get", name, exc) from exc
        try:
            return decode_status(url_map.description)
        except StatusDecodeError as exc:
            msg = f"error in parsing description of url map {name}, cannot determine status: {exc}"
            raise StatusDecodeError(msg) from exc

    def list_load_balancer_statuses(self) -> list[LoadBalancerStatus]:
        """Return the statuses of every load balancer that stores one on its URL map."""

        try:
            url_maps = self.provider.list_url_maps()
        except ProviderError as exc:
            raise RemoteError("list", f"{self.listing_prefix}*", exc) from exc

        statuses: list[LoadBalancerStatus] = []
        for url_map in url_maps:
            if not url_map.name.startswith(self.listing_prefix):
                continue
            try:
                statuses.append(decode_status(url_map.description))
            except StatusDecodeError as exc:
                # The status may live on another resource of this load balancer.
                log.info("Ignoring url map %s without a decodable status: %s", url_map.name, exc)
        return statuses

    def remove_clusters_from_status(self, clusters: Sequence[str]) -> None:
        """Drop ``clusters`` from the membership recorded on the URL map."""

        name = self.namer.url_map_name()
        log.info("Removing clusters %s from url map %s", list(clusters), name)
        try:
            existing_um = self.provider.get_url_map(name)
        except ProviderError as exc:
            raise RemoteError("get", name, exc) from exc
        try:
            desired_um = desired_url_map_without_clusters(existing_um, clusters)
        except StatusDecodeError as exc:
            msg = f"error in updating status to remove clusters on url map {name}: {exc}"
            raise StatusDecodeError(msg) from exc
        log.debug("Existing url map: %s, desired url map: %s", existing_um, desired_um)
        self._update_url_map(desired_um)

    def _create_url_map(self, desired_um: UrlMap) -> str:
        name = desired_um.name
        log.info("Creating url map %s", name)
        log.debug("Creating url map %s", desired_um)
        try:
            self.provider.create_url_map(desired_um)
        except ProviderError as exc:
            raise RemoteError("create", name, exc) from exc
        log.info("URL map %s created successfully", name)
        return self._self_link(name)

    def _update_url_map(self, desired_um: UrlMap) -> str:
        name = desired_um.name
        log.info("Updating existing url map %s to match the desired state", name)
        try:
            self.provider.update_url_map(desired_um)
        except ProviderError as exc:
            raise RemoteError("update", name, exc) from exc
        log.info("URL map %s updated successfully", name)
        return self._self_link(name)

    def _self_link(self, name: str) -> str:
        try:
            return self.provider.get_url_map(name).self_link
        except (ProviderError, UrlMapNotFoundError) as exc:
            raise RemoteError("get", name, exc) from exc
