"""Capabilities for followed CircleCI projects."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from cistate.domain.errors import AlreadyManagedExternallyError, ResourceGoneError
from cistate.domain.model import DeclaredProject, ProjectRecord, ResourceIdentity, ResourceKind

from .engine import Reconciler

if TYPE_CHECKING:
    from .context import ReconcileContext


@dataclass(frozen=True, slots=True)
class ProjectCapabilities:
    kind: ResourceKind = ResourceKind.PROJECT

    def compute_identity(self, declared: DeclaredProject, organization: str) -> ResourceIdentity:
        return ResourceIdentity(self.kind, organization, declared.project)

    def declared_from_identity(
        self, identity: ResourceIdentity, **attributes: str
    ) -> DeclaredProject:
        if attributes:
            unexpected = ", ".join(sorted(attributes))
            raise TypeError(f"project import takes no extra attributes, got: {unexpected}")
        return DeclaredProject(organization=identity.organization, project=identity.project)

    def fetch_remote(
        self, identity: ResourceIdentity, context: ReconcileContext
    ) -> ProjectRecord | None:
        return context.accessor.get_project(identity.organization, identity.project)

    def check_conflict(
        self,
        identity: ResourceIdentity,
        declared: DeclaredProject,
        observed: ProjectRecord | None,
        context: ReconcileContext,
    ) -> None:
        del declared
        if observed is not None:
            raise AlreadyManagedExternallyError(
                f"{identity.organization}/{identity.project} on {context.vcs} is already followed",
                organization=identity.organization,
                project=identity.project,
            )

    def create_remote(
        self, identity: ResourceIdentity, declared: DeclaredProject, context: ReconcileContext
    ) -> None:
        del declared
        context.accessor.follow(context.vcs, identity.organization, identity.project)

    def delete_remote(
        self, identity: ResourceIdentity, declared: DeclaredProject, context: ReconcileContext
    ) -> None:
        del declared
        context.accessor.unfollow(context.vcs, identity.organization, identity.project)

    def match_observed(
        self,
        identity: ResourceIdentity,
        declared: DeclaredProject,
        observed: ProjectRecord | None,
    ) -> DeclaredProject | None:
        del identity
        if observed is None:
            return None
        # Observed wins.
        return replace(declared, project=observed.reponame)

    def missing(
        self, identity: ResourceIdentity, declared: DeclaredProject, context: ReconcileContext
    ) -> ResourceGoneError:
        del declared
        return ResourceGoneError(
            f"{identity.organization}/{identity.project} is not found in {context.vcs}",
            organization=identity.organization,
            project=identity.project,
        )


type ProjectReconciler = Reconciler[DeclaredProject, ProjectRecord]


def project_reconciler() -> ProjectReconciler:
    return Reconciler(ProjectCapabilities())
