from __future__ import annotations

import re

import pytest

from cistate.adapters.ssh_keys import legacy_md5_fingerprint
from cistate.domain.errors import (
    DuplicateKeyError,
    IncompleteImportError,
    InvalidKeyMaterialError,
    ResourceGoneError,
)
from cistate.domain.model import DeclaredSSHKey
from cistate.domain.reconciliation import ReconcileContext, ssh_key_reconciler
from tests.support.accessor import (
    InMemoryCircleCI,
    fake_fingerprint,
    generate_rsa_key,
    make_context,
    make_private_key,
)


@pytest.fixture(scope="module")
def rsa_4096_key() -> str:
    return generate_rsa_key(4096)


def _declared(hostname: str = "github.com", *, label: str = "deploy") -> DeclaredSSHKey:
    return DeclaredSSHKey(
        project="widgets", hostname=hostname, private_key=make_private_key(label)
    )


def test_create_with_real_rsa_key_encodes_md5_fingerprint(rsa_4096_key: str) -> None:
    accessor = InMemoryCircleCI(fingerprint=legacy_md5_fingerprint)
    context = make_context(accessor)
    declared = DeclaredSSHKey(
        organization="acme", project="widgets", hostname="github.com", private_key=rsa_4096_key
    )

    state = ssh_key_reconciler(legacy_md5_fingerprint).create(declared, context=context)

    fingerprint = legacy_md5_fingerprint(rsa_4096_key)
    assert re.fullmatch(r"([0-9a-f]{2}:){15}[0-9a-f]{2}", fingerprint)
    assert state.identifier == f"acme.widgets.{fingerprint.replace(':', '')}"
    assert state.fingerprint == fingerprint
    assert accessor.calls == ["get_settings", "add_key", "get_settings"]


def test_create_same_key_twice_is_duplicate(context: ReconcileContext) -> None:
    reconciler = ssh_key_reconciler(fake_fingerprint)
    reconciler.create(_declared(), context=context)

    with pytest.raises(DuplicateKeyError, match="already exists") as excinfo:
        reconciler.create(_declared(), context=context)

    assert excinfo.value.fingerprint == fake_fingerprint(make_private_key())


def test_duplicate_detection_ignores_hostname(
    accessor: InMemoryCircleCI, context: ReconcileContext
) -> None:
    accessor.seed_key(
        "acme", "widgets", hostname="gitlab.com", fingerprint=fake_fingerprint(make_private_key())
    )

    with pytest.raises(DuplicateKeyError):
        ssh_key_reconciler(fake_fingerprint).create(_declared("github.com"), context=context)

    assert "add_key" not in accessor.calls


def test_read_requires_matching_hostname(
    accessor: InMemoryCircleCI, context: ReconcileContext
) -> None:
    fingerprint = fake_fingerprint(make_private_key())
    accessor.seed_key("acme", "widgets", hostname="gitlab.com", fingerprint=fingerprint)
    reconciler = ssh_key_reconciler(fake_fingerprint)

    with pytest.raises(ResourceGoneError, match="github.com") as excinfo:
        reconciler.read(_declared("github.com"), context=context)

    assert excinfo.value.hostname == "github.com"
    assert excinfo.value.fingerprint == fingerprint
    assert reconciler.exists(_declared("github.com"), context=context) is False


def test_read_returns_computed_attributes(context: ReconcileContext) -> None:
    reconciler = ssh_key_reconciler(fake_fingerprint)
    created = reconciler.create(_declared(), context=context)

    state = reconciler.read(_declared(), context=context)

    assert state.identifier == created.identifier
    assert state.to_dict()["hostname"] == "github.com"
    assert "private_key" not in state.to_dict()


def test_invalid_key_material_fails_before_remote_calls(
    accessor: InMemoryCircleCI, context: ReconcileContext
) -> None:
    declared = DeclaredSSHKey(project="widgets", hostname="github.com", private_key="garbage")

    with pytest.raises(InvalidKeyMaterialError, match="cannot parse private key") as excinfo:
        ssh_key_reconciler(fake_fingerprint).create(declared, context=context)

    assert excinfo.value.hostname == "github.com"
    assert excinfo.value.organization == "acme"
    assert accessor.calls == []


def test_delete_is_idempotent(accessor: InMemoryCircleCI, context: ReconcileContext) -> None:
    reconciler = ssh_key_reconciler(fake_fingerprint)
    reconciler.create(_declared(), context=context)

    reconciler.delete(_declared(), context=context)
    state = reconciler.delete(_declared(), context=context)

    assert state.identifier is None
    assert accessor.keys[("acme", "widgets")] == []


def test_delete_leaves_same_fingerprint_under_other_hostname(
    accessor: InMemoryCircleCI, context: ReconcileContext
) -> None:
    fingerprint = fake_fingerprint(make_private_key())
    accessor.seed_key("acme", "widgets", hostname="gitlab.com", fingerprint=fingerprint)

    ssh_key_reconciler(fake_fingerprint).delete(_declared("github.com"), context=context)

    assert [key.hostname for key in accessor.keys[("acme", "widgets")]] == ["gitlab.com"]


def test_exists_tracks_create_and_delete(context: ReconcileContext) -> None:
    reconciler = ssh_key_reconciler(fake_fingerprint)

    reconciler.create(_declared(), context=context)
    assert reconciler.exists(_declared(), context=context) is True
    assert reconciler.exists(_declared(label="other"), context=context) is False
    reconciler.delete(_declared(), context=context)
    assert reconciler.exists(_declared(), context=context) is False


def test_identifier_alone_cannot_recover_key(context: ReconcileContext) -> None:
    with pytest.raises(IncompleteImportError, match="hostname, private_key"):
        ssh_key_reconciler(fake_fingerprint).read(context=context, identifier="acme.widgets.aabb")


def test_identifier_with_supplied_key_reads_and_deletes(
    accessor: InMemoryCircleCI, context: ReconcileContext
) -> None:
    reconciler = ssh_key_reconciler(fake_fingerprint)
    created = reconciler.create(_declared(), context=context)
    assert created.identifier is not None
    secrets = {"hostname": "github.com", "private_key": make_private_key()}

    state = reconciler.read(context=context, identifier=created.identifier, **secrets)
    present = reconciler.exists(context=context, identifier=created.identifier, **secrets)
    deleted = reconciler.delete(context=context, identifier=created.identifier, **secrets)

    assert state.identifier == created.identifier
    assert present is True
    assert deleted.identifier is None
    assert accessor.keys[("acme", "widgets")] == []


def test_identifier_with_foreign_key_is_rejected(
    accessor: InMemoryCircleCI, context: ReconcileContext
) -> None:
    with pytest.raises(InvalidKeyMaterialError, match="does not match"):
        ssh_key_reconciler(fake_fingerprint).delete(
            context=context,
            identifier="acme.widgets.aabbcc",
            hostname="github.com",
            private_key=make_private_key(),
        )

    assert accessor.calls == []


def test_declared_and_identifier_together_are_rejected(context: ReconcileContext) -> None:
    with pytest.raises(ValueError, match="not both"):
        ssh_key_reconciler(fake_fingerprint).read(
            _declared(), context=context, identifier="acme.widgets.aabb"
        )
