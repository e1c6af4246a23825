"""Translate Compute API payloads to and from domain URL maps."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcilb.domain.urlmap import HostRule, PathMatcher, PathRule, ServerResponse, UrlMap

from .schema import HostRulePayload, PathMatcherPayload, PathRulePayload, UrlMapPayload

if TYPE_CHECKING:
    import httpx


def parse_url_map(payload: object, *, response: httpx.Response | None = None) -> UrlMap:
    model = UrlMapPayload.model_validate(payload)
    return translate_url_map(model, response=response)


def translate_url_map(model: UrlMapPayload, *, response: httpx.Response | None = None) -> UrlMap:
    host_rules = None
    if model.host_rules is not None:
        host_rules = [
            HostRule(hosts=list(rule.hosts), path_matcher=rule.path_matcher)
            for rule in model.host_rules
        ]
    path_matchers = None
    if model.path_matchers is not None:
        path_matchers = [_translate_path_matcher(matcher) for matcher in model.path_matchers]

    return UrlMap(
        name=model.name,
        description=model.description or "",
        default_service=model.default_service or "",
        host_rules=host_rules,
        path_matchers=path_matchers,
        fingerprint=model.fingerprint or "",
        creation_timestamp=model.creation_timestamp or "",
        kind=model.kind or "",
        id=model.id or 0,
        self_link=model.self_link or "",
        server_response=_server_response(response) if response is not None else None,
    )


def _translate_path_matcher(model: PathMatcherPayload) -> PathMatcher:
    # The server omits pathRules when a matcher has none; we always keep a list.
    rules = model.path_rules or []
    return PathMatcher(
        name=model.name,
        default_service=model.default_service,
        path_rules=[PathRule(paths=list(rule.paths), service=rule.service) for rule in rules],
    )


def _server_response(response: httpx.Response) -> ServerResponse:
    return ServerResponse(status_code=response.status_code, headers=dict(response.headers))


def build_url_map_payload(url_map: UrlMap) -> dict[str, object]:
    """Return the request body for inserting or updating ``url_map``.

    Output-only fields are never sent and unset collections are omitted.
    """

    model = UrlMapPayload(
        name=url_map.name,
        description=url_map.description,
        default_service=url_map.default_service or None,
        host_rules=None
        if url_map.host_rules is None
        else [
            HostRulePayload(hosts=list(rule.hosts), path_matcher=rule.path_matcher)
            for rule in url_map.host_rules
        ],
        path_matchers=None
        if url_map.path_matchers is None
        else [
            PathMatcherPayload(
                name=matcher.name,
                default_service=matcher.default_service,
                path_rules=[
                    PathRulePayload(paths=list(rule.paths), service=rule.service)
                    for rule in matcher.path_rules
                ],
            )
            for matcher in url_map.path_matchers
        ],
        fingerprint=url_map.fingerprint or None,
    )
    return model.model_dump(by_alias=True, exclude_none=True)
