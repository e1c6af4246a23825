"""Builders for ingresses and backend services used across tests."""

from __future__ import annotations

from mcilb.domain.ingress import (
    HTTPIngressPath,
    HTTPIngressRuleValue,
    Ingress,
    IngressBackend,
    IngressRule,
    IngressSpec,
)
from mcilb.domain.urlmap import BackendService

BACKEND_LINK_PREFIX = (
    "https://compute.example.test/compute/v1/projects/demo/global/backendServices/"
)


def make_backend(name: str) -> BackendService:
    return BackendService(name=f"be-{name}", self_link=f"{BACKEND_LINK_PREFIX}be-{name}")


def make_ingress(
    rules: list[IngressRule] | None = None,
    *,
    default_service: str | None = "svc0",
) -> Ingress:
    backend = None
    if default_service is not None:
        backend = IngressBackend(service_name=default_service, service_port=80)
    return Ingress(
        name="shop",
        namespace="web",
        spec=IngressSpec(backend=backend, rules=rules or []),
    )


def http_rule(host: str, *paths: tuple[str, str]) -> IngressRule:
    """Build an HTTP rule for ``host`` from ``(path, service name)`` pairs."""

    return IngressRule(
        host=host,
        http=HTTPIngressRuleValue(
            paths=[
                HTTPIngressPath(path=path, backend=IngressBackend(service_name=service))
                for path, service in paths
            ]
        ),
    )
