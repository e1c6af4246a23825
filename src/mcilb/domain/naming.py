"""Resource naming for multicluster load balancers."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import Final

DEFAULT_PREFIX: Final[str] = "mci1"
MAX_NAME_LENGTH: Final[int] = 63
HOST_RULE_PREFIX: Final[str] = "host"

_LB_NAME_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")


def path_matcher_name(hostname: str) -> str:
    """Return a valid resource name for the path matcher serving ``hostname``.

    Hostnames may be wildcards or regexes, which the API rejects as path
    matcher names, so the name is a hash of the hostname instead.
    """

    digest = hashlib.md5(hostname.encode("utf-8"), usedforsecurity=False).hexdigest()
    return f"{HOST_RULE_PREFIX}{digest}"


@dataclass(frozen=True, slots=True)
class Namer:
    """Names the resources of one load balancer."""

    lb_name: str
    prefix: str = DEFAULT_PREFIX

    def __post_init__(self) -> None:
        if not _LB_NAME_PATTERN.match(self.lb_name):
            msg = f"Invalid load balancer name: {self.lb_name!r}"
            raise ValueError(msg)

    def url_map_name(self) -> str:
        return self._decorate("um")

    def _decorate(self, kind: str) -> str:
        return f"{self.prefix}-{kind}-{self.lb_name}"[:MAX_NAME_LENGTH].rstrip("-")
