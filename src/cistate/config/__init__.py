"""Application configuration helpers."""

from __future__ import annotations

from .circleci import (
    DEFAULT_CIRCLECI_URL,
    CircleCIConfig,
    default_resilience_config,
    get_circleci_config,
    parse_vcs_type,
)
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import ConsistencyPolicy, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "DEFAULT_CIRCLECI_URL",
    "CircleCIConfig",
    "ConfigurationError",
    "ConsistencyPolicy",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "default_resilience_config",
    "get_circleci_config",
    "optional_env_var",
    "parse_vcs_type",
    "require_env_vars",
]
