"""CircleCI API v1.1 adapter."""

from __future__ import annotations

from .client import CircleCIAPIError, CircleCIClient

__all__ = ["CircleCIAPIError", "CircleCIClient"]
