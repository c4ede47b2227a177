"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class ResourceKind(StrEnum):
    """Kinds of CircleCI resources managed by the reconciler."""

    PROJECT = "project"
    SSH_KEY = "ssh_key"

    @property
    def fields(self) -> tuple[str, ...]:
        """Identity fields in serialization order."""
        return _IDENTITY_FIELDS[self]

    @property
    def arity(self) -> int:
        return len(self.fields)


class VcsType(StrEnum):
    """Version-control hosts addressed by the CircleCI v1.1 API."""

    GITHUB = "github"
    BITBUCKET = "bitbucket"


_IDENTITY_FIELDS: Final[dict[ResourceKind, tuple[str, ...]]] = {
    ResourceKind.PROJECT: ("organization", "project"),
    ResourceKind.SSH_KEY: ("organization", "project", "fingerprint"),
}
