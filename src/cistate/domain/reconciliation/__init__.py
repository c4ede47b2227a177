"""Lifecycle reconciliation for CircleCI resources.

Flow for every kind:
1) resolve the organization (resource value, else provider default)
2) compute the identity from declared attributes
3) probe remote state through the accessor
4) mutate (create/delete) or compare (read/exists)
"""

from __future__ import annotations

from .context import ReconcileContext
from .contracts import ResourceCapabilities
from .engine import Reconciler
from .importer import import_resource
from .project import ProjectCapabilities, ProjectReconciler, project_reconciler
from .ssh_key import SSHKeyCapabilities, SSHKeyReconciler, ssh_key_reconciler

__all__ = [
    "ProjectCapabilities",
    "ProjectReconciler",
    "ReconcileContext",
    "Reconciler",
    "ResourceCapabilities",
    "SSHKeyCapabilities",
    "SSHKeyReconciler",
    "import_resource",
    "project_reconciler",
    "ssh_key_reconciler",
]
