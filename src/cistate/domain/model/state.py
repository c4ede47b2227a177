"""Outcome of a reconciliation operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .identity import ResourceIdentity


class Declared(Protocol):
    """Structural contract shared by declared resource types."""

    @property
    def project(self) -> str: ...

    @property
    def organization(self) -> str | None: ...

    def public_attributes(self) -> dict[str, str | None]: ...


@dataclass(frozen=True, slots=True)
class ResourceState[TDeclared: Declared]:
    """Attributes and identifier of a resource after an operation.

    ``identifier`` is ``None`` once the resource is no longer managed.
    """

    declared: TDeclared
    identity: ResourceIdentity
    identifier: str | None

    @property
    def managed(self) -> bool:
        return self.identifier is not None

    @property
    def organization(self) -> str:
        return self.identity.organization

    @property
    def project(self) -> str:
        return self.declared.project

    @property
    def fingerprint(self) -> str | None:
        return self.identity.fingerprint

    def to_dict(self) -> dict[str, str | bool | None]:
        payload: dict[str, str | bool | None] = {
            "kind": str(self.identity.kind),
            "id": self.identifier,
            **self.declared.public_attributes(),
            "organization": self.organization,
        }
        if self.fingerprint is not None:
            payload["fingerprint"] = self.fingerprint
        return payload
