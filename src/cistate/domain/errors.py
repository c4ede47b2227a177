"""Error taxonomy for resource reconciliation.

Every error carries the identifying attributes known at the point of failure so
that remote state can be debugged without re-querying CircleCI. None of these
are retried or recovered locally; they propagate to the caller unchanged.
"""

from __future__ import annotations


class ReconcileError(RuntimeError):
    """Base class for failures raised while reconciling a resource."""

    def __init__(
        self,
        message: str,
        *,
        organization: str | None = None,
        project: str | None = None,
        hostname: str | None = None,
        fingerprint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.organization = organization
        self.project = project
        self.hostname = hostname
        self.fingerprint = fingerprint


class MissingOrganizationError(ReconcileError):
    """Raised when neither the resource nor the provider names an organization."""

    def __init__(self, *, project: str | None = None) -> None:
        super().__init__(
            f"organization must be set at the resource or provider level (project={project!r})",
            project=project,
        )


class MalformedIdentifierError(ReconcileError, ValueError):
    """Raised when an identifier cannot be encoded or decoded for a resource kind."""

    def __init__(self, message: str, *, identifier: str | None = None) -> None:
        super().__init__(message)
        self.identifier = identifier


class InvalidKeyMaterialError(ReconcileError):
    """Raised when declared private key material cannot be parsed."""


class AlreadyManagedExternallyError(ReconcileError):
    """Raised when create finds a remote object the declaration did not create."""


class DuplicateKeyError(ReconcileError):
    """Raised when create finds a key with the same fingerprint on the project."""


class ResourceGoneError(ReconcileError):
    """Raised when read finds no remote object for a previously created identity."""


class IncompleteImportError(ReconcileError):
    """Raised when an import lacks attributes that cannot be recovered from the identifier."""


class TransportFailureError(ReconcileError):
    """Raised by accessors for network, authentication or server-side failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        organization: str | None = None,
        project: str | None = None,
    ) -> None:
        super().__init__(message, organization=organization, project=project)
        self.status_code = status_code


__all__ = [
    "AlreadyManagedExternallyError",
    "DuplicateKeyError",
    "IncompleteImportError",
    "InvalidKeyMaterialError",
    "MalformedIdentifierError",
    "MissingOrganizationError",
    "ReconcileError",
    "ResourceGoneError",
    "TransportFailureError",
]
