"""Ports for observing and mutating remote CircleCI state.

Implementations must honour the following contract:

- lookups return ``None`` when the remote object does not exist; only
  transport, authentication and server failures raise
- ``get_settings`` returns the complete key list for the project
- a successful mutation is visible to the next lookup
- ``unfollow`` and ``delete_key`` succeed when the target is already absent
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cistate.domain.model import ProjectRecord, ProjectSettings, VcsType


@runtime_checkable
class ProjectAccessor(Protocol):
    """Capabilities needed to reconcile followed projects."""

    def get_project(self, organization: str, project: str) -> ProjectRecord | None: ...

    def follow(self, vcs: VcsType, organization: str, project: str) -> ProjectRecord: ...

    def unfollow(self, vcs: VcsType, organization: str, project: str) -> bool: ...


@runtime_checkable
class SSHKeyAccessor(Protocol):
    """Capabilities needed to reconcile project SSH keys."""

    def get_settings(
        self, vcs: VcsType, organization: str, project: str
    ) -> ProjectSettings | None: ...

    def add_key(
        self,
        vcs: VcsType,
        organization: str,
        project: str,
        hostname: str,
        private_key: str,
    ) -> None: ...

    def delete_key(
        self,
        vcs: VcsType,
        organization: str,
        project: str,
        hostname: str,
        fingerprint: str,
    ) -> None: ...


@runtime_checkable
class RemoteStateAccessor(ProjectAccessor, SSHKeyAccessor, Protocol):
    """Full accessor for every managed resource kind."""


__all__ = ["ProjectAccessor", "RemoteStateAccessor", "SSHKeyAccessor"]
