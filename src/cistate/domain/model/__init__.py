"""Domain model for managed CircleCI resources."""

from __future__ import annotations

from .declared import DeclaredProject, DeclaredSSHKey
from .enums import ResourceKind, VcsType
from .identity import (
    FINGERPRINT_SEPARATOR,
    IDENTIFIER_DELIMITER,
    ResourceIdentity,
    normalize_fingerprint,
)
from .remote import ProjectRecord, ProjectSettings, SSHKeyRecord
from .state import Declared, ResourceState

__all__ = [
    "FINGERPRINT_SEPARATOR",
    "IDENTIFIER_DELIMITER",
    "Declared",
    "DeclaredProject",
    "DeclaredSSHKey",
    "ProjectRecord",
    "ProjectSettings",
    "ResourceIdentity",
    "ResourceKind",
    "ResourceState",
    "SSHKeyRecord",
    "VcsType",
    "normalize_fingerprint",
]
