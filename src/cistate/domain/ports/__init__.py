"""Domain port definitions for adapters."""

from __future__ import annotations

from .fingerprint import FingerprintFunction
from .remote import ProjectAccessor, RemoteStateAccessor, SSHKeyAccessor

__all__ = [
    "FingerprintFunction",
    "ProjectAccessor",
    "RemoteStateAccessor",
    "SSHKeyAccessor",
]
