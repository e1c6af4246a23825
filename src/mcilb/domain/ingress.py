"""Kubernetes Ingress shapes consumed by the routing table builder."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class IngressBackend:
    service_name: str
    service_port: str | int | None = None


@dataclass(frozen=True, slots=True)
class HTTPIngressPath:
    backend: IngressBackend
    path: str = ""


@dataclass(frozen=True, slots=True)
class HTTPIngressRuleValue:
    paths: list[HTTPIngressPath] = field(default_factory=list["HTTPIngressPath"])


@dataclass(frozen=True, slots=True)
class IngressRule:
    host: str = ""
    http: HTTPIngressRuleValue | None = None


@dataclass(frozen=True, slots=True)
class IngressSpec:
    """Ingress spec; ``backend`` is the default backend for unmatched traffic."""

    backend: IngressBackend | None = None
    rules: list[IngressRule] = field(default_factory=list["IngressRule"])


@dataclass(frozen=True, slots=True)
class Ingress:
    name: str
    spec: IngressSpec
    namespace: str = "default"
