from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mcilb.domain.naming import Namer
from mcilb.domain.syncer import UrlMapSyncer
from tests.support.compute import FakeUrlMapProvider
from tests.support.ingress import http_rule, make_backend, make_ingress

if TYPE_CHECKING:
    from mcilb.domain.ingress import Ingress
    from mcilb.domain.urlmap import BackendService


@pytest.fixture
def backends() -> dict[str, BackendService]:
    return {name: make_backend(name) for name in ("svc0", "svc1", "svc2")}


@pytest.fixture
def ingress() -> Ingress:
    return make_ingress(
        [
            http_rule("foo.example.com", ("/api", "svc1"), ("/web", "svc2")),
            http_rule("bar.example.com", ("", "svc2")),
        ]
    )


@pytest.fixture
def namer() -> Namer:
    return Namer("shop")


@pytest.fixture
def provider() -> FakeUrlMapProvider:
    return FakeUrlMapProvider()


@pytest.fixture
def syncer(namer: Namer, provider: FakeUrlMapProvider) -> UrlMapSyncer:
    return UrlMapSyncer(namer=namer, provider=provider)
