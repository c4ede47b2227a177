"""SSH private key parsing and fingerprinting backed by paramiko."""

from __future__ import annotations

import io
import logging

import paramiko

from cistate.domain.errors import InvalidKeyMaterialError

log = logging.getLogger(__name__)


def _key_classes() -> list[type[paramiko.PKey]]:
    key_classes: list[type[paramiko.PKey]] = [
        paramiko.RSAKey,
        paramiko.Ed25519Key,
        paramiko.ECDSAKey,
    ]
    # DSSKey is gone from newer paramiko releases.
    if hasattr(paramiko, "DSSKey"):
        key_classes.append(paramiko.DSSKey)
    return key_classes


def load_private_key(material: str) -> paramiko.PKey:
    """Parse unencrypted private key text in any format paramiko understands."""

    errors: list[str] = []
    for key_class in _key_classes():
        try:
            return key_class.from_private_key(io.StringIO(material))
        except paramiko.PasswordRequiredException as exc:
            raise InvalidKeyMaterialError("encrypted private keys are not supported") from exc
        except (paramiko.SSHException, ValueError, TypeError, IndexError) as exc:
            errors.append(f"{key_class.__name__}: {exc}")
            continue

    log.debug("Private key rejected by all key types: %s", "; ".join(errors))
    raise InvalidKeyMaterialError("not a valid SSH private key")


def format_fingerprint(digest: bytes) -> str:
    """Render a digest as lowercase colon separated hex, e.g. ``aa:bb:cc``."""

    return ":".join(f"{byte:02x}" for byte in digest)


def legacy_md5_fingerprint(private_key: str) -> str:
    """MD5 fingerprint of the public half of ``private_key``, as CircleCI reports it."""

    key = load_private_key(private_key)
    return format_fingerprint(key.get_fingerprint())
