"""Application configuration helpers."""

from __future__ import annotations

from .compute import ComputeConfig, get_compute_config
from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "ComputeConfig",
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "get_compute_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
