"""Generic lifecycle reconciler for managed CircleCI resources.

The reconciler implements Create/Read/Delete/Exists once. Resource kinds plug
in through :class:`~cistate.domain.reconciliation.contracts.ResourceCapabilities`.
It keeps no state between calls: every operation is a function of the declared
attributes and the :class:`ReconcileContext` passed in, so different resources
can be reconciled concurrently. Errors raised by the accessor propagate
unchanged; nothing is retried here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cistate.domain.errors import InvalidKeyMaterialError
from cistate.domain.identity import decode, encode
from cistate.domain.model import Declared, ResourceState

if TYPE_CHECKING:
    from cistate.domain.model import ResourceIdentity, ResourceKind

    from .context import ReconcileContext
    from .contracts import ResourceCapabilities

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Reconciler[TDeclared: Declared, TObserved]:
    """Drive one resource kind through its lifecycle."""

    capabilities: ResourceCapabilities[TDeclared, TObserved]

    @property
    def kind(self) -> ResourceKind:
        return self.capabilities.kind

    def create(self, declared: TDeclared, *, context: ReconcileContext) -> ResourceState[TDeclared]:
        """Create the remote object for ``declared`` and return its managed state.

        Create is deliberately not idempotent: an object that already exists
        remotely was not created by this declaration and is reported as a
        conflict. The identity is computed before any mutation so invalid
        identities never leave an orphaned remote object behind.
        """

        identity = self._identity(declared, context)
        observed = self.capabilities.fetch_remote(identity, context)
        self.capabilities.check_conflict(identity, declared, observed, context)

        self.capabilities.create_remote(identity, declared, context)
        identifier = encode(identity)
        log.info("Created %s %s on %s", self.kind, identifier, context.vcs)

        return self._refresh(declared, identity, identifier, context)

    def read(
        self,
        declared: TDeclared | None = None,
        *,
        context: ReconcileContext,
        identifier: str | None = None,
        **attributes: str,
    ) -> ResourceState[TDeclared]:
        """Return the observed state, raising ``ResourceGoneError`` if it vanished."""

        resolved = self._declared(declared, identifier, attributes)
        identity = self._identity(resolved, context)
        return self._refresh(resolved, identity, encode(identity), context)

    def exists(
        self,
        declared: TDeclared | None = None,
        *,
        context: ReconcileContext,
        identifier: str | None = None,
        **attributes: str,
    ) -> bool:
        resolved = self._declared(declared, identifier, attributes)
        identity = self._identity(resolved, context)
        observed = self.capabilities.fetch_remote(identity, context)
        present = self.capabilities.match_observed(identity, resolved, observed) is not None
        log.debug("%s %s exists=%s", self.kind, encode(identity), present)
        return present

    def delete(
        self,
        declared: TDeclared | None = None,
        *,
        context: ReconcileContext,
        identifier: str | None = None,
        **attributes: str,
    ) -> ResourceState[TDeclared]:
        """Remove the remote object; the returned state is no longer managed.

        No existence check is made first: accessors treat removal of an absent
        object as success, which makes repeated deletes safe.
        """

        resolved = self._declared(declared, identifier, attributes)
        identity = self._identity(resolved, context)
        self.capabilities.delete_remote(identity, resolved, context)
        log.info("Deleted %s %s on %s", self.kind, encode(identity), context.vcs)
        return ResourceState(declared=resolved, identity=identity, identifier=None)

    def from_identifier(self, identifier: str, **attributes: str) -> TDeclared:
        """Rebuild declared attributes from ``identifier`` plus what it cannot carry.

        Supplied key material must reproduce the fingerprint the identifier holds.
        """

        identity = decode(self.kind, identifier)
        declared = self.capabilities.declared_from_identity(identity, **attributes)
        derived = self.capabilities.compute_identity(declared, identity.organization)
        if derived.components != identity.components:
            raise InvalidKeyMaterialError(
                f"private key for {identity.organization}/{identity.project} has fingerprint "
                f"{derived.fingerprint!r} which does not match ID {identifier!r}",
                organization=identity.organization,
                project=identity.project,
                hostname=attributes.get("hostname"),
                fingerprint=derived.fingerprint,
            )
        return declared

    def _declared(
        self, declared: TDeclared | None, identifier: str | None, attributes: dict[str, str]
    ) -> TDeclared:
        if declared is not None:
            if identifier is not None:
                raise ValueError(
                    f"{self.kind} operation takes declared attributes or an identifier, not both"
                )
            return declared
        if identifier is None:
            raise ValueError(f"{self.kind} operation needs declared attributes or an identifier")
        return self.from_identifier(identifier, **attributes)

    def _identity(self, declared: TDeclared, context: ReconcileContext) -> ResourceIdentity:
        organization = context.resolve_organization(
            declared.organization, project=declared.project
        )
        return self.capabilities.compute_identity(declared, organization)

    def _refresh(
        self,
        declared: TDeclared,
        identity: ResourceIdentity,
        identifier: str,
        context: ReconcileContext,
    ) -> ResourceState[TDeclared]:
        observed = self.capabilities.fetch_remote(identity, context)
        corrected = self.capabilities.match_observed(identity, declared, observed)
        if corrected is None:
            raise self.capabilities.missing(identity, declared, context)
        if corrected != declared:
            log.info("Detected drift on %s %s", self.kind, identifier)
        return ResourceState(declared=corrected, identity=identity, identifier=identifier)
