"""Minimal Pydantic models for the Compute API URL map resources."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ComputeBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)


class PathRulePayload(ComputeBaseModel):
    paths: list[str] = Field(default_factory=list)
    service: str = ""


class PathMatcherPayload(ComputeBaseModel):
    name: str
    default_service: str = ""
    path_rules: list[PathRulePayload] | None = None


class HostRulePayload(ComputeBaseModel):
    hosts: list[str] = Field(default_factory=list)
    path_matcher: str = ""


class UrlMapPayload(ComputeBaseModel):
    name: str
    description: str | None = None
    default_service: str | None = None
    host_rules: list[HostRulePayload] | None = None
    path_matchers: list[PathMatcherPayload] | None = None
    fingerprint: str | None = None

    kind: str | None = None
    id: int | None = None
    creation_timestamp: str | None = None
    self_link: str | None = None


class UrlMapListPayload(ComputeBaseModel):
    items: list[UrlMapPayload] = Field(default_factory=list["UrlMapPayload"])
    next_page_token: str | None = None


class OperationErrorItem(ComputeBaseModel):
    code: str = ""
    message: str = ""


class OperationError(ComputeBaseModel):
    errors: list[OperationErrorItem] = Field(default_factory=list["OperationErrorItem"])


class OperationPayload(ComputeBaseModel):
    name: str
    status: str = ""
    target_link: str | None = None
    error: OperationError | None = None

    @property
    def is_done(self) -> bool:
        return self.status == "DONE"


class ErrorDetail(ComputeBaseModel):
    code: int = 0
    message: str = ""


class ErrorResponse(ComputeBaseModel):
    error: ErrorDetail
