from __future__ import annotations

import pytest

from cistate.domain.errors import (
    IncompleteImportError,
    InvalidKeyMaterialError,
    MalformedIdentifierError,
    ResourceGoneError,
)
from cistate.domain.model import DeclaredSSHKey
from cistate.domain.reconciliation import import_resource, project_reconciler, ssh_key_reconciler
from tests.support.accessor import (
    InMemoryCircleCI,
    fake_fingerprint,
    make_context,
    make_private_key,
)


def test_import_project_reconstructs_attributes(accessor: InMemoryCircleCI) -> None:
    accessor.seed_project("acme", "widgets")
    context = make_context(accessor, organization=None)

    state = import_resource(project_reconciler(), "acme.widgets", context=context)

    assert state.organization == "acme"
    assert state.project == "widgets"
    assert state.identifier == "acme.widgets"
    assert accessor.calls == ["get_project"]


def test_import_rejects_malformed_identifier_without_remote_calls(
    accessor: InMemoryCircleCI,
) -> None:
    with pytest.raises(MalformedIdentifierError, match=r"\{organization\}\.\{project\}"):
        import_resource(project_reconciler(), "acme", context=make_context(accessor))

    assert accessor.calls == []


def test_import_of_absent_project_is_gone(accessor: InMemoryCircleCI) -> None:
    with pytest.raises(ResourceGoneError):
        import_resource(project_reconciler(), "acme.widgets", context=make_context(accessor))


def test_import_project_rejects_extra_attributes(accessor: InMemoryCircleCI) -> None:
    with pytest.raises(TypeError, match="hostname"):
        import_resource(
            project_reconciler(),
            "acme.widgets",
            context=make_context(accessor),
            hostname="github.com",
        )


def test_import_ssh_key_with_supplied_secret(accessor: InMemoryCircleCI) -> None:
    context = make_context(accessor)
    reconciler = ssh_key_reconciler(fake_fingerprint)
    private_key = make_private_key()
    created = reconciler.create(
        DeclaredSSHKey(project="widgets", hostname="github.com", private_key=private_key),
        context=context,
    )
    assert created.identifier is not None

    state = import_resource(
        reconciler,
        created.identifier,
        context=make_context(accessor, organization=None),
        hostname="github.com",
        private_key=private_key,
    )

    assert state.identifier == created.identifier
    assert state.declared.hostname == "github.com"


def test_import_ssh_key_needs_hostname_and_secret(accessor: InMemoryCircleCI) -> None:
    with pytest.raises(IncompleteImportError, match="private_key") as excinfo:
        import_resource(
            ssh_key_reconciler(fake_fingerprint),
            "acme.widgets.aabbcc",
            context=make_context(accessor),
            hostname="github.com",
        )

    assert excinfo.value.fingerprint == "aabbcc"
    assert accessor.calls == []


def test_import_ssh_key_rejects_mismatched_secret(accessor: InMemoryCircleCI) -> None:
    with pytest.raises(InvalidKeyMaterialError, match="does not match"):
        import_resource(
            ssh_key_reconciler(fake_fingerprint),
            "acme.widgets.aabbcc",
            context=make_context(accessor),
            hostname="github.com",
            private_key=make_private_key(),
        )

    assert accessor.calls == []
