"""Loading of the backend services available to an ingress.

The document maps Kubernetes service names to backend services, either as a
bare self link or as an object::

    svc1: https://www.googleapis.com/compute/v1/projects/p/global/backendServices/be-1
    svc2:
      name: be-2
      selfLink: https://www.googleapis.com/compute/v1/projects/p/global/backendServices/be-2
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, RootModel, ValidationError
from pydantic.alias_generators import to_camel

from mcilb.domain.urlmap import BackendService

from .files import ManifestError, load_document

if TYPE_CHECKING:
    from pathlib import Path


class BackendServicePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)

    self_link: str
    name: str | None = None


class BackendServicesPayload(RootModel[dict[str, str | BackendServicePayload]]):
    pass


def parse_backend_services(document: object) -> dict[str, BackendService]:
    try:
        payload = BackendServicesPayload.model_validate(document or {})
    except ValidationError as exc:
        raise ManifestError(f"Invalid backend services document: {exc}") from exc

    services: dict[str, BackendService] = {}
    for service_name, entry in payload.root.items():
        if isinstance(entry, str):
            services[service_name] = BackendService(
                name=entry.rstrip("/").rsplit("/", 1)[-1], self_link=entry
            )
        else:
            services[service_name] = BackendService(
                name=entry.name or entry.self_link.rstrip("/").rsplit("/", 1)[-1],
                self_link=entry.self_link,
            )
    return services


def load_backend_services(path: Path) -> dict[str, BackendService]:
    """Read the service name to backend service mapping at ``path``."""

    return parse_backend_services(load_document(path))
