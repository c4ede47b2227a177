"""Immutable provider-level context passed into every reconciler operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cistate.domain.errors import MissingOrganizationError
from cistate.domain.model import VcsType

if TYPE_CHECKING:
    from cistate.domain.ports import RemoteStateAccessor


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconcileContext:
    """Accessor handle plus the defaults a resource may fall back to."""

    accessor: RemoteStateAccessor
    vcs: VcsType = VcsType.GITHUB
    organization: str | None = None

    def resolve_organization(self, declared: str | None, *, project: str | None = None) -> str:
        """Return the resource-level organization if set, else the provider default."""

        for candidate in (declared, self.organization):
            if candidate is not None and candidate.strip():
                return candidate
        raise MissingOrganizationError(project=project)
