"""Encode and decode resource identifiers.

Identifiers are the identity components joined with ``.`` in a fixed order::

    project:  <organization>.<project>
    ssh_key:  <organization>.<project>.<fingerprint without colons>

Decoding is strict: the number of fields must match the kind exactly.
"""

from __future__ import annotations

from cistate.domain.errors import MalformedIdentifierError
from cistate.domain.model import (
    IDENTIFIER_DELIMITER,
    ResourceIdentity,
    ResourceKind,
    normalize_fingerprint,
)

__all__ = [
    "decode",
    "encode",
    "encode_components",
    "identifier_format",
    "normalize_fingerprint",
]


def identifier_format(kind: ResourceKind) -> str:
    """Human readable identifier layout for ``kind``, e.g. ``{organization}.{project}``."""

    return IDENTIFIER_DELIMITER.join(f"{{{name}}}" for name in kind.fields)


def encode(identity: ResourceIdentity) -> str:
    return IDENTIFIER_DELIMITER.join(identity.components)


def encode_components(kind: ResourceKind, *components: str) -> str:
    """Encode raw components for ``kind``; validation matches :class:`ResourceIdentity`."""

    if len(components) != kind.arity:
        raise MalformedIdentifierError(
            f"{kind} identifier takes {kind.arity} components, got {len(components)}"
        )
    return encode(ResourceIdentity(kind, *components))


def decode(kind: ResourceKind, identifier: str) -> ResourceIdentity:
    """Recover the identity encoded in ``identifier``.

    The fingerprint of a decoded SSH key identity is the normalized form; the
    colons dropped on encoding cannot be restored.
    """

    parts = identifier.split(IDENTIFIER_DELIMITER)
    if len(parts) != kind.arity:
        raise MalformedIdentifierError(
            f"expected {kind} ID to be of the format {identifier_format(kind)}, "
            f"got {identifier!r}",
            identifier=identifier,
        )
    if kind is ResourceKind.SSH_KEY:
        organization, project, fingerprint = parts
        parts = [organization, project, normalize_fingerprint(fingerprint)]
    try:
        return ResourceIdentity(kind, *parts)
    except MalformedIdentifierError as exc:
        raise MalformedIdentifierError(str(exc), identifier=identifier) from exc
