"""Records observed on the CircleCI side."""

from __future__ import annotations

from dataclasses import dataclass, field

from .identity import normalize_fingerprint


@dataclass(frozen=True, slots=True, kw_only=True)
class ProjectRecord:
    """A project as listed by CircleCI."""

    username: str
    reponame: str
    vcs_url: str | None = None
    following: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class SSHKeyRecord:
    hostname: str
    fingerprint: str
    public_key: str | None = None

    def has_fingerprint(self, fingerprint: str) -> bool:
        # CircleCI reports colon separated fingerprints; identifiers carry bare hex.
        return normalize_fingerprint(self.fingerprint) == normalize_fingerprint(fingerprint)


@dataclass(frozen=True, slots=True, kw_only=True)
class ProjectSettings:
    """Project settings, carrying the complete list of attached SSH keys."""

    organization: str
    project: str
    ssh_keys: tuple[SSHKeyRecord, ...] = field(default_factory=tuple)

    def keys_with_fingerprint(self, fingerprint: str) -> tuple[SSHKeyRecord, ...]:
        return tuple(key for key in self.ssh_keys if key.has_fingerprint(fingerprint))
