from __future__ import annotations

import pytest

from cistate.domain.errors import MalformedIdentifierError, ReconcileError
from cistate.domain.identity import decode, encode, encode_components, identifier_format
from cistate.domain.model import ResourceIdentity, ResourceKind

FINGERPRINT = "9a:0f:3c:55:1e:2b:44:de:ad:be:ef:00:11:22:33:44"


def test_project_identifier_round_trips() -> None:
    identity = ResourceIdentity(ResourceKind.PROJECT, "acme", "widgets")

    identifier = encode(identity)

    assert identifier == "acme.widgets"
    assert decode(ResourceKind.PROJECT, identifier) == identity


def test_ssh_key_identifier_strips_fingerprint_colons() -> None:
    identity = ResourceIdentity(ResourceKind.SSH_KEY, "acme", "widgets", FINGERPRINT)

    identifier = encode(identity)
    decoded = decode(ResourceKind.SSH_KEY, identifier)

    assert identifier == "acme.widgets.9a0f3c551e2b44deadbeef0011223344"
    assert decoded.organization == "acme"
    assert decoded.project == "widgets"
    assert decoded.fingerprint == "9a0f3c551e2b44deadbeef0011223344"


def test_decode_is_stable_under_repeated_application() -> None:
    first = decode(ResourceKind.SSH_KEY, "acme.widgets.9a0f3c")
    second = decode(ResourceKind.SSH_KEY, encode(first))

    assert first == second


def test_encode_components_matches_identity_encoding() -> None:
    identifier = encode_components(ResourceKind.SSH_KEY, "acme", "widgets", "aa:bb")
    assert identifier == "acme.widgets.aabb"

    with pytest.raises(MalformedIdentifierError, match="takes 2 components"):
        encode_components(ResourceKind.PROJECT, "acme")


@pytest.mark.parametrize(
    ("kind", "identifier"),
    [
        (ResourceKind.PROJECT, "acme"),
        (ResourceKind.PROJECT, "acme.widgets.extra"),
        (ResourceKind.PROJECT, ""),
        (ResourceKind.SSH_KEY, "acme.widgets"),
        (ResourceKind.SSH_KEY, "acme.widgets.aa.bb"),
    ],
)
def test_decode_rejects_wrong_field_count(kind: ResourceKind, identifier: str) -> None:
    with pytest.raises(MalformedIdentifierError, match="to be of the format") as excinfo:
        decode(kind, identifier)

    assert excinfo.value.identifier == identifier


def test_decode_rejects_empty_components() -> None:
    with pytest.raises(MalformedIdentifierError, match="must not be empty") as excinfo:
        decode(ResourceKind.PROJECT, "acme.")

    assert excinfo.value.identifier == "acme."


def test_identifier_format_lists_fields_in_order() -> None:
    assert identifier_format(ResourceKind.PROJECT) == "{organization}.{project}"
    assert identifier_format(ResourceKind.SSH_KEY) == "{organization}.{project}.{fingerprint}"


def test_identity_rejects_delimiter_in_components() -> None:
    with pytest.raises(MalformedIdentifierError, match="must not contain"):
        ResourceIdentity(ResourceKind.PROJECT, "acme", "widgets.io")


def test_identity_requires_fingerprint_only_for_ssh_keys() -> None:
    with pytest.raises(MalformedIdentifierError, match="requires a fingerprint"):
        ResourceIdentity(ResourceKind.SSH_KEY, "acme", "widgets")

    with pytest.raises(MalformedIdentifierError, match="does not take a fingerprint"):
        ResourceIdentity(ResourceKind.PROJECT, "acme", "widgets", FINGERPRINT)


def test_malformed_identifier_is_both_value_and_reconcile_error() -> None:
    with pytest.raises(ValueError, match="format"):
        decode(ResourceKind.PROJECT, "nodots")

    with pytest.raises(ReconcileError):
        decode(ResourceKind.PROJECT, "nodots")
