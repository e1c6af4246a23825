"""Port for the remote URL map API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mcilb.domain.urlmap import UrlMap


@runtime_checkable
class UrlMapProvider(Protocol):
    """CRUD transport for URL maps.

    ``get_url_map`` and ``delete_url_map`` raise ``UrlMapNotFoundError`` when
    no URL map has the given name. Every other failure is a ``ProviderError``.
    """

    def get_url_map(self, name: str) -> UrlMap: ...

    def create_url_map(self, url_map: UrlMap) -> None: ...

    def update_url_map(self, url_map: UrlMap) -> None: ...

    def list_url_maps(self) -> list[UrlMap]: ...

    def delete_url_map(self, name: str) -> None: ...


__all__ = ["UrlMapProvider"]
