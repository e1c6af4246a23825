"""Translate Ingress manifests into domain ingresses."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from mcilb.adapters.files import ManifestError, load_document
from mcilb.domain.ingress import (
    HTTPIngressPath,
    HTTPIngressRuleValue,
    Ingress,
    IngressBackend,
    IngressRule,
    IngressSpec,
)

from .schema import IngressBackendPayload, IngressPayload, IngressRulePayload

if TYPE_CHECKING:
    from pathlib import Path


def parse_ingress(document: object) -> Ingress:
    try:
        payload = IngressPayload.model_validate(document)
    except ValidationError as exc:
        raise ManifestError(f"Invalid ingress manifest: {exc}") from exc
    if payload.kind is not None and payload.kind != "Ingress":
        raise ManifestError(f"Expected an Ingress manifest, got kind {payload.kind!r}")

    spec = payload.spec
    default_backend = spec.default_backend or spec.backend
    return Ingress(
        name=payload.metadata.name,
        namespace=payload.metadata.namespace or "default",
        spec=IngressSpec(
            backend=_translate_backend(default_backend) if default_backend else None,
            rules=[_translate_rule(rule) for rule in spec.rules],
        ),
    )


def load_ingress(path: Path) -> Ingress:
    """Read the Ingress manifest at ``path``."""

    return parse_ingress(load_document(path))


def _translate_rule(rule: IngressRulePayload) -> IngressRule:
    if rule.http is None:
        return IngressRule(host=rule.host or "")
    paths = [
        HTTPIngressPath(path=entry.path or "", backend=_translate_backend(entry.backend))
        for entry in rule.http.paths
    ]
    return IngressRule(host=rule.host or "", http=HTTPIngressRuleValue(paths=paths))


def _translate_backend(backend: IngressBackendPayload) -> IngressBackend:
    if backend.service is not None:
        port = backend.service.port
        service_port: int | str | None = None
        if port is not None:
            service_port = port.number if port.number is not None else port.name
        return IngressBackend(service_name=backend.service.name, service_port=service_port)
    if backend.service_name:
        return IngressBackend(service_name=backend.service_name, service_port=backend.service_port)
    raise ManifestError("Ingress backend does not reference a service")
