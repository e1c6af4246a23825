"""Compute API configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_var, require_env_vars
from .errors import InvalidConfigurationError
from .http_resilience import ResilienceConfig

COMPUTE_BASE_URL: Final[str] = "https://compute.googleapis.com/compute/v1/"
COMPUTE_TIMEOUT_SECONDS: Final[float] = 30.0
OPERATION_TIMEOUT_SECONDS: Final[float] = 300.0


@dataclass(frozen=True)
class ComputeConfig:
    """Holds the project and credentials used to reach the Compute API."""

    project: str
    access_token: str
    resilience: ResilienceConfig
    operation_timeout_seconds: float = OPERATION_TIMEOUT_SECONDS


def _parse_timeout(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidConfigurationError(name, raw, "not a number") from exc
    if value <= 0:
        raise InvalidConfigurationError(name, raw, "must be positive")
    return value


def get_compute_config(*, resilience: ResilienceConfig | None = None) -> ComputeConfig:
    """Load the Compute API configuration from the environment.

    ``MCILB_PROJECT`` and ``MCILB_ACCESS_TOKEN`` are required;
    ``MCILB_COMPUTE_URL`` and ``MCILB_OPERATION_TIMEOUT`` override defaults.
    """

    values = require_env_vars(("MCILB_PROJECT", "MCILB_ACCESS_TOKEN"))
    base_url = optional_env_var("MCILB_COMPUTE_URL", COMPUTE_BASE_URL)
    operation_timeout = _parse_timeout(
        "MCILB_OPERATION_TIMEOUT",
        optional_env_var("MCILB_OPERATION_TIMEOUT", str(OPERATION_TIMEOUT_SECONDS)),
    )
    return ComputeConfig(
        project=values["MCILB_PROJECT"],
        access_token=values["MCILB_ACCESS_TOKEN"],
        resilience=resilience
        or ResilienceConfig(
            name="compute",
            base_url=base_url.rstrip("/") + "/",
            timeout_seconds=COMPUTE_TIMEOUT_SECONDS,
        ),
        operation_timeout_seconds=operation_timeout,
    )
