"""HTTP transport for Compute API URL maps."""

from __future__ import annotations

import time
from logging import getLogger
from typing import TYPE_CHECKING, Final, TypeVar

import httpx
from pydantic import ValidationError

from mcilb.adapters.http_resilience import ResilientClient
from mcilb.domain.errors import ProviderError, UrlMapNotFoundError

from .schema import ErrorResponse, OperationPayload, UrlMapListPayload
from .translator import build_url_map_payload, parse_url_map, translate_url_map

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from mcilb.adapters.http_resilience import RequestOptions
    from mcilb.config.compute import ComputeConfig
    from mcilb.domain.urlmap import UrlMap

log = getLogger(__name__)

T = TypeVar("T")

_LIST_PAGE_SIZE: Final[int] = 500
# The wait endpoint holds the request for up to about two minutes.
OPERATION_WAIT_READ_TIMEOUT: Final[float] = 150.0


class ComputeAPIError(ProviderError):
    """Raised when the Compute API answers with an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _default_client_factory(config: ComputeConfig) -> ResilientClient:
    return ResilientClient(config.resilience)


class ComputeUrlMapClient:
    """``UrlMapProvider`` backed by the Compute REST API.

    Mutations return a global operation which is awaited before returning, so
    a subsequent ``get_url_map`` observes the change.
    """

    def __init__(
        self,
        config: ComputeConfig,
        *,
        client_factory: Callable[[ComputeConfig], ResilientClient] = _default_client_factory,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self._client = client_factory(config)
        self._clock = clock
        self._headers = {"Authorization": f"Bearer {config.access_token}"}
        self._wait_timeout = httpx.Timeout(
            config.resilience.timeout_seconds, read=OPERATION_WAIT_READ_TIMEOUT
        )

    def __enter__(self) -> ComputeUrlMapClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @property
    def _collection(self) -> str:
        return f"projects/{self.config.project}/global/urlMaps"

    def get_url_map(self, name: str) -> UrlMap:
        response = self._send("GET", f"{self._collection}/{name}", name=name)
        return self._parse(lambda: parse_url_map(response.json(), response=response))

    def create_url_map(self, url_map: UrlMap) -> None:
        # A 404 on the collection means the project is missing, not the URL map.
        response = self._send("POST", self._collection, json=build_url_map_payload(url_map))
        self._wait_for(response)

    def update_url_map(self, url_map: UrlMap) -> None:
        response = self._send(
            "PUT",
            f"{self._collection}/{url_map.name}",
            name=url_map.name,
            json=build_url_map_payload(url_map),
        )
        self._wait_for(response)

    def delete_url_map(self, name: str) -> None:
        response = self._send("DELETE", f"{self._collection}/{name}", name=name)
        self._wait_for(response)

    def list_url_maps(self) -> list[UrlMap]:
        url_maps: list[UrlMap] = []
        page_token: str | None = None
        while True:
            params: dict[str, str | int] = {"maxResults": _LIST_PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token
            response = self._send("GET", self._collection, params=params)
            page = self._parse(lambda: UrlMapListPayload.model_validate(response.json()))
            url_maps.extend(translate_url_map(item) for item in page.items)
            page_token = page.next_page_token
            if not page_token:
                return url_maps

    def _send(
        self,
        method: str,
        url: str,
        *,
        name: str | None = None,
        json: object = None,
        params: dict[str, str | int] | None = None,
        timeout: httpx.Timeout | None = None,
    ) -> httpx.Response:
        log.debug("%s %s", method, url)
        options: RequestOptions = {"params": params, "headers": self._headers}
        if json is not None:
            options["json"] = json
        if timeout is not None:
            options["timeout"] = timeout
        try:
            response = self._client.request(method, url, **options)
        except httpx.HTTPError as exc:
            raise ComputeAPIError(f"{method} {url} failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND and name is not None:
            raise UrlMapNotFoundError(name)
        if response.is_error:
            message = _error_message(response)
            log.error(
                "Compute API error %s on %s %s: %s", response.status_code, method, url, message
            )
            raise ComputeAPIError(message, status_code=response.status_code)
        return response

    def _wait_for(self, response: httpx.Response) -> None:
        operation = self._parse(lambda: OperationPayload.model_validate(response.json()))
        deadline = self._clock() + self.config.operation_timeout_seconds
        while not operation.is_done:
            if self._clock() >= deadline:
                msg = f"timed out waiting for operation {operation.name}"
                raise ComputeAPIError(msg)
            waited = self._send(
                "POST",
                f"projects/{self.config.project}/global/operations/{operation.name}/wait",
                timeout=self._wait_timeout,
            )
            operation = self._parse(
                lambda resp=waited: OperationPayload.model_validate(resp.json())
            )

        if operation.error is not None and operation.error.errors:
            details = "; ".join(
                f"{item.code}: {item.message}" for item in operation.error.errors
            )
            raise ComputeAPIError(f"operation {operation.name} failed: {details}")
        log.debug("Operation %s done", operation.name)

    @staticmethod
    def _parse(func: Callable[[], T]) -> T:
        try:
            return func()
        except (ValueError, ValidationError) as exc:
            raise ComputeAPIError(f"unexpected Compute API response payload: {exc}") from exc


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorResponse.model_validate(response.json()).error.message or response.text
    except (ValueError, ValidationError):
        return response.text or response.reason_phrase

