"""Port for deriving an SSH key fingerprint from private key material."""

from __future__ import annotations

from collections.abc import Callable

type FingerprintFunction = Callable[[str], str]
"""Map private key text to its colon separated fingerprint.

Implementations raise :class:`cistate.domain.errors.InvalidKeyMaterialError`
when the text cannot be parsed as a private key.
"""

__all__ = ["FingerprintFunction"]
