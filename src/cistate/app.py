"""Application orchestration entry points."""

from __future__ import annotations

from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from cistate.adapters.circleci import CircleCIClient
from cistate.adapters.ssh_keys import legacy_md5_fingerprint
from cistate.config import get_circleci_config
from cistate.domain.model import DeclaredProject, DeclaredSSHKey, VcsType
from cistate.domain.reconciliation import (
    ReconcileContext,
    import_resource,
    project_reconciler,
    ssh_key_reconciler,
)

if TYPE_CHECKING:
    from cistate.config import CircleCIConfig
    from cistate.domain.model import Declared, ResourceState
    from cistate.domain.ports import FingerprintFunction, RemoteStateAccessor
    from cistate.domain.reconciliation import Reconciler

log = getLogger(__name__)


class Operation(StrEnum):
    CREATE = "create"
    READ = "read"
    DELETE = "delete"
    EXISTS = "exists"
    IMPORT = "import"


def build_context(
    *,
    config: CircleCIConfig | None = None,
    accessor: RemoteStateAccessor | None = None,
    organization: str | None = None,
    vcs: VcsType | None = None,
) -> ReconcileContext:
    """Wire a reconcile context, defaulting to the CircleCI HTTP accessor.

    Configuration is only loaded from the environment when no accessor is given.
    """

    if accessor is not None and config is None:
        return ReconcileContext(
            accessor=accessor,
            vcs=vcs or VcsType.GITHUB,
            organization=organization,
        )

    effective_config = config or get_circleci_config(organization=organization, vcs=vcs)
    return ReconcileContext(
        accessor=accessor or CircleCIClient(config=effective_config),
        vcs=vcs or effective_config.vcs,
        organization=organization or effective_config.organization,
    )


def reconcile_project(
    operation: Operation,
    *,
    context: ReconcileContext,
    project: str | None = None,
    organization: str | None = None,
    identifier: str | None = None,
) -> ResourceState[DeclaredProject] | bool:
    """Run one lifecycle operation for a followed project."""

    declared = None
    if project is not None:
        declared = DeclaredProject(project=project, organization=organization)
    return _dispatch(
        project_reconciler(),
        operation,
        declared,
        context=context,
        identifier=identifier,
        attributes={},
    )


def reconcile_ssh_key(
    operation: Operation,
    *,
    context: ReconcileContext,
    project: str | None = None,
    hostname: str | None = None,
    private_key: str | None = None,
    organization: str | None = None,
    identifier: str | None = None,
    fingerprint: FingerprintFunction | None = None,
) -> ResourceState[DeclaredSSHKey] | bool:
    """Run one lifecycle operation for a project SSH key.

    ``fingerprint`` defaults to the MD5 fingerprint CircleCI reports.
    """

    declared = None
    if operation is not Operation.IMPORT and project is not None:
        declared = DeclaredSSHKey(
            project=project,
            hostname=hostname or "",
            private_key=private_key or "",
            organization=organization,
        )
    attributes = {
        name: value
        for name, value in (("hostname", hostname), ("private_key", private_key))
        if value is not None
    }
    return _dispatch(
        ssh_key_reconciler(fingerprint or legacy_md5_fingerprint),
        operation,
        declared,
        context=context,
        identifier=identifier,
        attributes=attributes,
    )


def _dispatch[TDeclared: Declared, TObserved](
    reconciler: Reconciler[TDeclared, TObserved],
    operation: Operation,
    declared: TDeclared | None,
    *,
    context: ReconcileContext,
    identifier: str | None,
    attributes: dict[str, str],
) -> ResourceState[TDeclared] | bool:
    log.info(
        "Running %s %s: organization=%s, vcs=%s, identifier=%s",
        reconciler.kind,
        operation,
        context.organization,
        context.vcs,
        identifier,
    )

    if operation is Operation.IMPORT:
        if identifier is None:
            raise ValueError(f"{reconciler.kind} import needs an identifier")
        return import_resource(reconciler, identifier, context=context, **attributes)
    if operation is Operation.CREATE:
        if declared is None:
            raise ValueError(f"{reconciler.kind} create needs declared attributes")
        return reconciler.create(declared, context=context)
    if operation is Operation.READ:
        return reconciler.read(declared, context=context, identifier=identifier, **attributes)
    if operation is Operation.EXISTS:
        return reconciler.exists(declared, context=context, identifier=identifier, **attributes)
    if operation is Operation.DELETE:
        return reconciler.delete(declared, context=context, identifier=identifier, **attributes)
    raise ValueError(f"Unsupported operation: {operation}")
