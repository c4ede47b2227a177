"""CircleCI provider configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from cistate.domain.model import VcsType

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import ConsistencyPolicy, RateLimit, ResilienceConfig

DEFAULT_CIRCLECI_URL = "https://circleci.com/api/v1.1/"
CIRCLECI_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class CircleCIConfig:
    """Holds CircleCI API credentials and provider-level defaults."""

    api_token: str = field(repr=False)
    resilience: ResilienceConfig
    vcs: VcsType = VcsType.GITHUB
    organization: str | None = None
    consistency: ConsistencyPolicy = field(default_factory=ConsistencyPolicy)


def parse_vcs_type(value: str) -> VcsType:
    try:
        return VcsType(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in VcsType)
        msg = f"Unsupported VCS type {value!r} (expected one of: {allowed})"
        raise ConfigurationError(msg) from exc


def default_resilience_config(base_url: str = DEFAULT_CIRCLECI_URL) -> ResilienceConfig:
    if not base_url.endswith("/"):
        base_url = f"{base_url}/"
    return ResilienceConfig(
        name="circleci",
        base_url=base_url,
        timeout_seconds=CIRCLECI_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )


def get_circleci_config(
    *,
    organization: str | None = None,
    vcs: VcsType | None = None,
    resilience: ResilienceConfig | None = None,
) -> CircleCIConfig:
    """Load configuration from the environment; explicit arguments take precedence."""

    values = require_env_vars(("CIRCLECI_TOKEN",))
    env_vcs = optional_env_var("CIRCLECI_VCS_TYPE")
    base_url = optional_env_var("CIRCLECI_URL", DEFAULT_CIRCLECI_URL) or DEFAULT_CIRCLECI_URL
    return CircleCIConfig(
        api_token=values["CIRCLECI_TOKEN"],
        vcs=vcs or (parse_vcs_type(env_vcs) if env_vcs else VcsType.GITHUB),
        organization=organization or optional_env_var("CIRCLECI_ORGANIZATION"),
        resilience=resilience or default_resilience_config(base_url),
    )
