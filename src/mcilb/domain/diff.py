"""Comparison of a desired URL map against the one stored remotely."""

from __future__ import annotations

import dataclasses
from logging import getLogger
from typing import Final

from .urlmap import UrlMap

log = getLogger(__name__)

# Every UrlMap field must be listed in exactly one of these.
CALLER_OWNED_FIELDS: Final[tuple[str, ...]] = (
    "name",
    "description",
    "default_service",
    "host_rules",
    "path_matchers",
    "fingerprint",
)
SERVER_OWNED_FIELDS: Final[tuple[str, ...]] = (
    "creation_timestamp",
    "kind",
    "id",
    "self_link",
    "server_response",
)


def clear_server_fields(url_map: UrlMap) -> UrlMap:
    """Return a copy of ``url_map`` with every output-only field reset."""

    defaults = {
        f.name: f.default for f in dataclasses.fields(UrlMap) if f.name in SERVER_OWNED_FIELDS
    }
    return dataclasses.replace(url_map, **defaults)


def url_map_matches(desired: UrlMap, existing: UrlMap) -> bool:
    """Return whether ``existing`` already has every field we want it to have."""

    existing = clear_server_fields(existing)
    log.debug("desired URL map: %s", desired)
    log.debug("existing URL map: %s", existing)

    equal = all(
        getattr(desired, name) == getattr(existing, name) for name in CALLER_OWNED_FIELDS
    )
    if not equal:
        log.debug("Diff:\n%s", "\n".join(url_map_diff(desired, existing)))
    return equal


def url_map_diff(desired: UrlMap, existing: UrlMap) -> list[str]:
    """Describe every caller-owned field that differs, one line per leaf value."""

    lines: list[str] = []
    for name in CALLER_OWNED_FIELDS:
        _diff_values(name, getattr(desired, name), getattr(existing, name), lines)
    return lines


def _diff_values(path: str, desired: object, existing: object, lines: list[str]) -> None:
    if desired == existing:
        return
    if (
        dataclasses.is_dataclass(desired)
        and type(desired) is type(existing)
        and not isinstance(desired, type)
    ):
        for f in dataclasses.fields(desired):
            _diff_values(
                f"{path}.{f.name}", getattr(desired, f.name), getattr(existing, f.name), lines
            )
        return
    if isinstance(desired, list) and isinstance(existing, list):
        for index in range(max(len(desired), len(existing))):
            left = desired[index] if index < len(desired) else "<missing>"
            right = existing[index] if index < len(existing) else "<missing>"
            _diff_values(f"{path}[{index}]", left, right, lines)
        return
    lines.append(f"{path}: {desired!r} != {existing!r}")
