"""Capabilities for SSH keys attached to CircleCI projects.

The fingerprint is never taken from declared input. It is re-derived from the
private key on every operation, which keeps the identity reproducible from the
declaration alone at the cost of needing the secret for reads and deletes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cistate.domain.errors import (
    DuplicateKeyError,
    IncompleteImportError,
    InvalidKeyMaterialError,
    ResourceGoneError,
)
from cistate.domain.model import DeclaredSSHKey, ProjectSettings, ResourceIdentity, ResourceKind

from .engine import Reconciler

if TYPE_CHECKING:
    from cistate.domain.ports import FingerprintFunction

    from .context import ReconcileContext


@dataclass(frozen=True, slots=True)
class SSHKeyCapabilities:
    fingerprint: FingerprintFunction
    kind: ResourceKind = ResourceKind.SSH_KEY

    def compute_identity(self, declared: DeclaredSSHKey, organization: str) -> ResourceIdentity:
        try:
            fingerprint = self.fingerprint(declared.private_key)
        except InvalidKeyMaterialError as exc:
            raise InvalidKeyMaterialError(
                f"cannot parse private key for {declared.hostname} "
                f"in {organization}/{declared.project}: {exc}",
                organization=organization,
                project=declared.project,
                hostname=declared.hostname,
            ) from exc
        return ResourceIdentity(self.kind, organization, declared.project, fingerprint)

    def declared_from_identity(
        self,
        identity: ResourceIdentity,
        *,
        hostname: str | None = None,
        private_key: str | None = None,
    ) -> DeclaredSSHKey:
        if not hostname or not private_key:
            missing = [
                name
                for name, value in (("hostname", hostname), ("private_key", private_key))
                if not value
            ]
            raise IncompleteImportError(
                f"SSH key {identity.organization}/{identity.project} with fingerprint "
                f"{identity.fingerprint!r} cannot be recovered from its ID alone; "
                f"supply: {', '.join(missing)}",
                organization=identity.organization,
                project=identity.project,
                fingerprint=identity.fingerprint,
            )
        return DeclaredSSHKey(
            organization=identity.organization,
            project=identity.project,
            hostname=hostname,
            private_key=private_key,
        )

    def fetch_remote(
        self, identity: ResourceIdentity, context: ReconcileContext
    ) -> ProjectSettings | None:
        return context.accessor.get_settings(context.vcs, identity.organization, identity.project)

    def check_conflict(
        self,
        identity: ResourceIdentity,
        declared: DeclaredSSHKey,
        observed: ProjectSettings | None,
        context: ReconcileContext,
    ) -> None:
        del context
        fingerprint = _fingerprint_of(identity)
        if observed is None or not observed.keys_with_fingerprint(fingerprint):
            return
        # Any hostname counts: CircleCI keys are unique per fingerprint.
        raise DuplicateKeyError(
            f"SSH key with fingerprint {fingerprint!r} already exists for project "
            f"{identity.organization}/{identity.project}",
            organization=identity.organization,
            project=identity.project,
            hostname=declared.hostname,
            fingerprint=fingerprint,
        )

    def create_remote(
        self, identity: ResourceIdentity, declared: DeclaredSSHKey, context: ReconcileContext
    ) -> None:
        context.accessor.add_key(
            context.vcs,
            identity.organization,
            identity.project,
            declared.hostname,
            declared.private_key,
        )

    def delete_remote(
        self, identity: ResourceIdentity, declared: DeclaredSSHKey, context: ReconcileContext
    ) -> None:
        context.accessor.delete_key(
            context.vcs,
            identity.organization,
            identity.project,
            declared.hostname,
            _fingerprint_of(identity),
        )

    def match_observed(
        self,
        identity: ResourceIdentity,
        declared: DeclaredSSHKey,
        observed: ProjectSettings | None,
    ) -> DeclaredSSHKey | None:
        if observed is None:
            return None
        for key in observed.keys_with_fingerprint(_fingerprint_of(identity)):
            if key.hostname == declared.hostname:
                return declared
        return None

    def missing(
        self, identity: ResourceIdentity, declared: DeclaredSSHKey, context: ReconcileContext
    ) -> ResourceGoneError:
        fingerprint = _fingerprint_of(identity)
        return ResourceGoneError(
            f"key with fingerprint {fingerprint!r} for {declared.hostname!r} not found in "
            f"{context.vcs}/{identity.organization}/{identity.project}",
            organization=identity.organization,
            project=identity.project,
            hostname=declared.hostname,
            fingerprint=fingerprint,
        )


def _fingerprint_of(identity: ResourceIdentity) -> str:
    if identity.fingerprint is None:
        raise ValueError(f"{identity.kind} identity carries no fingerprint")
    return identity.fingerprint


type SSHKeyReconciler = Reconciler[DeclaredSSHKey, ProjectSettings]


def ssh_key_reconciler(fingerprint: FingerprintFunction) -> SSHKeyReconciler:
    return Reconciler(SSHKeyCapabilities(fingerprint))
