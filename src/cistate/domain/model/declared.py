"""Attributes declared by the caller before reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field


def _require(name: str, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{name} must not be blank")


@dataclass(frozen=True, slots=True, kw_only=True)
class DeclaredProject:
    """A CircleCI project that should be followed."""

    project: str
    organization: str | None = None

    def __post_init__(self) -> None:
        _require("project", self.project)

    def public_attributes(self) -> dict[str, str | None]:
        return {"organization": self.organization, "project": self.project}


@dataclass(frozen=True, slots=True, kw_only=True)
class DeclaredSSHKey:
    """An SSH key that should be attached to a CircleCI project.

    The private key is the source of truth for the key's fingerprint and is
    therefore required for every operation. It is excluded from ``repr``.
    """

    project: str
    hostname: str
    private_key: str = field(repr=False)
    organization: str | None = None

    def __post_init__(self) -> None:
        _require("project", self.project)
        _require("hostname", self.hostname)
        _require("private_key", self.private_key)

    def public_attributes(self) -> dict[str, str | None]:
        return {
            "organization": self.organization,
            "project": self.project,
            "hostname": self.hostname,
        }
