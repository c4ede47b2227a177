"""Composite identity of a managed resource."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from cistate.domain.errors import MalformedIdentifierError

from .enums import ResourceKind

IDENTIFIER_DELIMITER: Final[str] = "."
FINGERPRINT_SEPARATOR: Final[str] = ":"


def normalize_fingerprint(fingerprint: str) -> str:
    """Strip separators so the fingerprint only uses alphanumerics."""

    return fingerprint.replace(FINGERPRINT_SEPARATOR, "")


@dataclass(frozen=True, slots=True)
class ResourceIdentity:
    """Identity of one resource within an organization.

    ``fingerprint`` is only present for SSH keys. It keeps whatever form it was
    built from (colon separated when derived from key material, bare hex when
    decoded from an identifier); serialization always normalizes it.
    """

    kind: ResourceKind
    organization: str
    project: str
    fingerprint: str | None = None

    def __post_init__(self) -> None:
        has_fingerprint = self.fingerprint is not None
        if has_fingerprint != (self.kind is ResourceKind.SSH_KEY):
            raise MalformedIdentifierError(
                f"{self.kind} identity for {self.organization}/{self.project} "
                f"{'requires' if self.kind is ResourceKind.SSH_KEY else 'does not take'} "
                "a fingerprint"
            )
        for name, value in zip(self.kind.fields, self.components, strict=True):
            if not value:
                raise MalformedIdentifierError(
                    f"{self.kind} identity field {name!r} must not be empty "
                    f"(organization={self.organization!r}, project={self.project!r})"
                )
            if IDENTIFIER_DELIMITER in value:
                raise MalformedIdentifierError(
                    f"{self.kind} identity field {name!r} must not contain "
                    f"{IDENTIFIER_DELIMITER!r}: {value!r}"
                )

    @property
    def components(self) -> tuple[str, ...]:
        """Normalized identity components in serialization order."""

        if self.fingerprint is None:
            return (self.organization, self.project)
        return (self.organization, self.project, normalize_fingerprint(self.fingerprint))

    @property
    def normalized_fingerprint(self) -> str | None:
        if self.fingerprint is None:
            return None
        return normalize_fingerprint(self.fingerprint)
