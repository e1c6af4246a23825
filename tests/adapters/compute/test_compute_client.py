from __future__ import annotations

import itertools
import json
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from mcilb.adapters.compute import ComputeAPIError, ComputeUrlMapClient
from mcilb.adapters.compute.client import OPERATION_WAIT_READ_TIMEOUT
from mcilb.adapters.http_resilience import ResilientClient
from mcilb.config import ComputeConfig, ResilienceConfig
from mcilb.domain.errors import UrlMapNotFoundError
from mcilb.domain.urlmap import HostRule, PathMatcher, PathRule, UrlMap

BASE_URL = "https://compute.example.test/compute/v1/"
COLLECTION = "/compute/v1/projects/demo/global/urlMaps"
SELF_LINK = f"https://compute.example.test{COLLECTION}/mci1-um-shop"

Handler = Callable[[httpx.Request], httpx.Response]


def _make_client(
    handler: Handler,
    *,
    clock: Callable[[], float] | None = None,
) -> ComputeUrlMapClient:
    config = ComputeConfig(
        project="demo",
        access_token="secret-token",
        resilience=ResilienceConfig(name="compute", base_url=BASE_URL, retry=None),
        operation_timeout_seconds=300,
    )

    def factory(cfg: ComputeConfig) -> ResilientClient:
        return ResilientClient(cfg.resilience, transport=httpx.MockTransport(handler))

    if clock is None:
        return ComputeUrlMapClient(config, client_factory=factory)
    return ComputeUrlMapClient(config, client_factory=factory, clock=clock)


def _url_map_payload(name: str = "mci1-um-shop") -> dict[str, object]:
    return {
        "kind": "compute#urlMap",
        "id": "1234567890",
        "creationTimestamp": "2024-01-07T12:00:00.000-08:00",
        "name": name,
        "description": '{"LoadBalancerName":"shop"}',
        "selfLink": f"https://compute.example.test{COLLECTION}/{name}",
        "defaultService": "be-svc0",
        "hostRules": [{"hosts": ["foo.example.com"], "pathMatcher": "hostabc"}],
        "pathMatchers": [
            {
                "name": "hostabc",
                "defaultService": "be-svc0",
                "pathRules": [{"paths": ["/api"], "service": "be-svc1"}],
            },
            {"name": "hostdef", "defaultService": "be-svc0"},
        ],
        "fingerprint": "fp-1",
    }


def _operation(status: str, name: str = "op-1", **extra: object) -> dict[str, object]:
    return {"kind": "compute#operation", "name": name, "status": status, **extra}


def test_get_url_map_translates_payload() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=_url_map_payload())

    with _make_client(handler) as client:
        url_map = client.get_url_map("mci1-um-shop")

    assert requests[0].method == "GET"
    assert requests[0].url.path == f"{COLLECTION}/mci1-um-shop"
    assert requests[0].headers["Authorization"] == "Bearer secret-token"
    assert url_map.name == "mci1-um-shop"
    assert url_map.self_link == SELF_LINK
    assert url_map.id == 1234567890
    assert url_map.fingerprint == "fp-1"
    assert url_map.default_service == "be-svc0"
    assert url_map.host_rules == [HostRule(hosts=["foo.example.com"], path_matcher="hostabc")]
    assert url_map.path_matchers is not None
    assert url_map.path_matchers[0].path_rules == [PathRule(paths=["/api"], service="be-svc1")]
    assert url_map.path_matchers[1].path_rules == []
    assert url_map.server_response is not None
    assert url_map.server_response.status_code == 200


def test_get_missing_url_map_raises_not_found() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": {"code": 404, "message": "not found"}})

    with _make_client(handler) as client, pytest.raises(UrlMapNotFoundError) as excinfo:
        client.get_url_map("mci1-um-gone")

    assert excinfo.value.name == "mci1-um-gone"


def test_error_response_carries_status_and_message() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"error": {"code": 403, "message": "permission denied"}})

    with _make_client(handler) as client, pytest.raises(ComputeAPIError) as excinfo:
        client.get_url_map("mci1-um-shop")

    assert excinfo.value.status_code == 403
    assert "permission denied" in str(excinfo.value)


def test_error_response_without_json_body_uses_text() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    with _make_client(handler) as client, pytest.raises(ComputeAPIError) as excinfo:
        client.list_url_maps()

    assert excinfo.value.status_code == 502
    assert "bad gateway" in str(excinfo.value)


def test_transport_failure_is_reported_as_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _make_client(handler) as client, pytest.raises(ComputeAPIError, match="refused"):
        client.get_url_map("mci1-um-shop")


def test_unexpected_payload_is_reported_as_api_error() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"description": "no name"})

    with _make_client(handler) as client, pytest.raises(ComputeAPIError, match="payload"):
        client.get_url_map("mci1-um-shop")


def test_create_url_map_posts_payload_and_waits_for_operation() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == COLLECTION:
            return httpx.Response(200, json=_operation("RUNNING"))
        return httpx.Response(200, json=_operation("DONE"))

    url_map = UrlMap(
        name="mci1-um-shop",
        description="status",
        default_service="be-svc0",
        host_rules=[HostRule(hosts=["foo.example.com"], path_matcher="hostabc")],
        path_matchers=[
            PathMatcher(
                name="hostabc",
                default_service="be-svc0",
                path_rules=[PathRule(paths=["/api"], service="be-svc1")],
            )
        ],
        self_link="ignored",
        id=42,
    )
    with _make_client(handler) as client:
        client.create_url_map(url_map)

    assert [(request.method, request.url.path) for request in requests] == [
        ("POST", COLLECTION),
        ("POST", "/compute/v1/projects/demo/global/operations/op-1/wait"),
    ]
    body = json.loads(requests[0].content)
    assert body == {
        "name": "mci1-um-shop",
        "description": "status",
        "defaultService": "be-svc0",
        "hostRules": [{"hosts": ["foo.example.com"], "pathMatcher": "hostabc"}],
        "pathMatchers": [
            {
                "name": "hostabc",
                "defaultService": "be-svc0",
                "pathRules": [{"paths": ["/api"], "service": "be-svc1"}],
            }
        ],
    }


def test_operation_wait_outlasts_the_server_side_block() -> None:
    timeouts: dict[str, dict[str, float | None]] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        timeouts[request.url.path] = request.extensions["timeout"]
        if request.url.path.endswith("/wait"):
            return httpx.Response(200, json=_operation("DONE"))
        return httpx.Response(200, json=_operation("RUNNING"))

    with _make_client(handler) as client:
        client.update_url_map(UrlMap(name="mci1-um-shop", fingerprint="fp-7"))

    wait_timeout = timeouts["/compute/v1/projects/demo/global/operations/op-1/wait"]
    assert wait_timeout["read"] == OPERATION_WAIT_READ_TIMEOUT
    assert OPERATION_WAIT_READ_TIMEOUT > 120
    assert timeouts[f"{COLLECTION}/mci1-um-shop"]["read"] == 30.0


def test_create_on_missing_collection_is_an_api_error() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": {"code": 404, "message": "project not found"}})

    with _make_client(handler) as client, pytest.raises(ComputeAPIError) as excinfo:
        client.create_url_map(UrlMap(name="mci1-um-shop", default_service="be-svc0"))

    assert excinfo.value.status_code == 404
    assert "project not found" in str(excinfo.value)


def test_update_url_map_puts_fingerprint() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=_operation("DONE"))

    with _make_client(handler) as client:
        client.update_url_map(UrlMap(name="mci1-um-shop", fingerprint="fp-7"))

    assert len(requests) == 1
    assert requests[0].method == "PUT"
    assert requests[0].url.path == f"{COLLECTION}/mci1-um-shop"
    assert json.loads(requests[0].content)["fingerprint"] == "fp-7"


def test_failed_operation_raises() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        error = {"errors": [{"code": "RESOURCE_NOT_READY", "message": "backend is busy"}]}
        return httpx.Response(200, json=_operation("DONE", error=error))

    with _make_client(handler) as client, pytest.raises(ComputeAPIError) as excinfo:
        client.delete_url_map("mci1-um-shop")

    assert "RESOURCE_NOT_READY: backend is busy" in str(excinfo.value)


def test_delete_missing_url_map_raises_not_found() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    with _make_client(handler) as client, pytest.raises(UrlMapNotFoundError):
        client.delete_url_map("mci1-um-shop")


def test_operation_wait_times_out() -> None:
    waits: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/wait"):
            waits.append(request)
        return httpx.Response(200, json=_operation("RUNNING"))

    ticks = itertools.count(0, 200)
    with (
        _make_client(handler, clock=lambda: float(next(ticks))) as client,
        pytest.raises(ComputeAPIError, match="timed out"),
    ):
        client.delete_url_map("mci1-um-shop")

    assert len(waits) == 1


def test_list_url_maps_follows_page_tokens() -> None:
    pages = {
        None: {"items": [_url_map_payload("mci1-um-a")], "nextPageToken": "page-2"},
        "page-2": {"items": [_url_map_payload("mci1-um-b")]},
    }
    seen_params: list[dict[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        seen_params.append(params)
        return httpx.Response(200, json=pages[params.get("pageToken")])

    with _make_client(handler) as client:
        url_maps = client.list_url_maps()

    assert [url_map.name for url_map in url_maps] == ["mci1-um-a", "mci1-um-b"]
    assert seen_params == [{"maxResults": "500"}, {"maxResults": "500", "pageToken": "page-2"}]


def test_list_url_maps_without_items() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"kind": "compute#urlMapList"})

    with _make_client(handler) as client:
        assert client.list_url_maps() == []
