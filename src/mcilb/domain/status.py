"""Load balancer status record stored in a resource description.

URL maps have no notion of multicluster membership, so we keep a small JSON
record in their free-text ``description`` field listing the clusters that
currently participate in the load balancer.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import StatusDecodeError


class LoadBalancerStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    description: str = Field(default="", alias="Description")
    load_balancer_name: str = Field(default="", alias="LoadBalancerName")
    clusters: tuple[str, ...] = Field(default=(), alias="Clusters")
    ip_address: str = Field(default="", alias="IPAddress")

    @field_validator("clusters", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        # Older records serialize an empty membership as null.
        return () if value is None else value

    @field_validator("clusters", mode="after")
    @classmethod
    def _sorted_unique(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(sorted(set(value)))


def encode_status(status: LoadBalancerStatus) -> str:
    """Serialize ``status`` into the string stored on the resource."""

    return status.model_dump_json(by_alias=True)


def decode_status(text: str) -> LoadBalancerStatus:
    """Parse a resource description back into a status record."""

    if not text or not text.strip():
        raise StatusDecodeError("empty description, no load balancer status stored")
    try:
        return LoadBalancerStatus.model_validate_json(text)
    except ValidationError as exc:
        raise StatusDecodeError(f"invalid load balancer status {text!r}: {exc}") from exc


def remove_clusters(encoded: str, clusters_to_remove: list[str] | tuple[str, ...]) -> str:
    """Return ``encoded`` with the given clusters dropped from its membership."""

    status = decode_status(encoded)
    removed = set(clusters_to_remove)
    remaining = tuple(cluster for cluster in status.clusters if cluster not in removed)
    return encode_status(status.model_copy(update={"clusters": remaining}))
