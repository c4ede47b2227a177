"""Resume management of an existing remote object from its identifier."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cistate.domain.model import Declared

if TYPE_CHECKING:
    from cistate.domain.model import ResourceState

    from .context import ReconcileContext
    from .engine import Reconciler

log = logging.getLogger(__name__)


def import_resource[TDeclared: Declared, TObserved](
    reconciler: Reconciler[TDeclared, TObserved],
    identifier: str,
    *,
    context: ReconcileContext,
    **attributes: str,
) -> ResourceState[TDeclared]:
    """Decode ``identifier`` into fresh declared attributes and read the resource.

    The field count is the only check made on the identifier itself. Attributes
    that cannot be recovered from it (an SSH key's hostname and private key)
    are passed through ``attributes``; supplied key material must reproduce the
    fingerprint the identifier carries.
    """

    declared = reconciler.from_identifier(identifier, **attributes)
    state = reconciler.read(declared, context=context)
    log.info("Imported %s %s", reconciler.kind, identifier)
    return state
