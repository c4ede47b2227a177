"""Capability set a resource kind supplies to the generic reconciler."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from cistate.domain.errors import ResourceGoneError
    from cistate.domain.model import Declared, ResourceIdentity, ResourceKind

    from .context import ReconcileContext


class ResourceCapabilities[TDeclared: Declared, TObserved](Protocol):
    """Kind-specific hooks; the control flow lives in :class:`Reconciler`."""

    @property
    def kind(self) -> ResourceKind: ...

    def compute_identity(self, declared: TDeclared, organization: str) -> ResourceIdentity:
        """Derive the identity of ``declared`` within ``organization``."""
        ...

    def declared_from_identity(self, identity: ResourceIdentity, **attributes: str) -> TDeclared:
        """Rebuild declared attributes from a decoded identity plus caller supplements."""
        ...

    def fetch_remote(
        self, identity: ResourceIdentity, context: ReconcileContext
    ) -> TObserved | None: ...

    def check_conflict(
        self,
        identity: ResourceIdentity,
        declared: TDeclared,
        observed: TObserved | None,
        context: ReconcileContext,
    ) -> None:
        """Raise if creating ``declared`` would clash with ``observed``."""
        ...

    def create_remote(
        self, identity: ResourceIdentity, declared: TDeclared, context: ReconcileContext
    ) -> None: ...

    def delete_remote(
        self, identity: ResourceIdentity, declared: TDeclared, context: ReconcileContext
    ) -> None: ...

    def match_observed(
        self, identity: ResourceIdentity, declared: TDeclared, observed: TObserved | None
    ) -> TDeclared | None:
        """Return ``declared`` corrected to the observed state, or ``None`` if absent."""
        ...

    def missing(
        self, identity: ResourceIdentity, declared: TDeclared, context: ReconcileContext
    ) -> ResourceGoneError: ...
