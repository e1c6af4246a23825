"""Minimal Pydantic models for Ingress manifests.

Both ``extensions/v1beta1`` (``serviceName``/``servicePort``, ``backend``)
and ``networking.k8s.io/v1`` (``service.name``/``service.port``,
``defaultBackend``) shapes are accepted.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class KubernetesBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)


class ServiceBackendPort(KubernetesBaseModel):
    number: int | None = None
    name: str | None = None


class IngressServiceBackend(KubernetesBaseModel):
    name: str
    port: ServiceBackendPort | None = None


class IngressBackendPayload(KubernetesBaseModel):
    service_name: str | None = None
    service_port: int | str | None = None
    service: IngressServiceBackend | None = None


class HTTPIngressPathPayload(KubernetesBaseModel):
    path: str | None = None
    path_type: str | None = None
    backend: IngressBackendPayload


class HTTPIngressRuleValuePayload(KubernetesBaseModel):
    paths: list[HTTPIngressPathPayload] = Field(default_factory=list["HTTPIngressPathPayload"])


class IngressRulePayload(KubernetesBaseModel):
    host: str | None = None
    http: HTTPIngressRuleValuePayload | None = None


class IngressSpecPayload(KubernetesBaseModel):
    backend: IngressBackendPayload | None = None
    default_backend: IngressBackendPayload | None = None
    rules: list[IngressRulePayload] = Field(default_factory=list["IngressRulePayload"])


class ObjectMeta(KubernetesBaseModel):
    name: str
    namespace: str | None = None


class IngressPayload(KubernetesBaseModel):
    api_version: str | None = None
    kind: str | None = None
    metadata: ObjectMeta
    spec: IngressSpecPayload = Field(default_factory=IngressSpecPayload)
