"""Translate CircleCI payloads into domain records."""

from __future__ import annotations

from cistate.domain.model import ProjectRecord, ProjectSettings, SSHKeyRecord

from .schema import ProjectPayload, SettingsPayload, SSHKeyPayload


def parse_project(payload: ProjectPayload) -> ProjectRecord:
    return ProjectRecord(
        username=payload.username,
        reponame=payload.reponame,
        vcs_url=payload.vcs_url,
        following=payload.following,
    )


def parse_ssh_key(payload: SSHKeyPayload) -> SSHKeyRecord:
    return SSHKeyRecord(
        hostname=payload.hostname,
        fingerprint=payload.fingerprint,
        public_key=payload.public_key,
    )


def parse_settings(payload: SettingsPayload, *, organization: str, project: str) -> ProjectSettings:
    """Build settings for the requested project; the path, not the body, names it."""

    return ProjectSettings(
        organization=organization,
        project=project,
        ssh_keys=tuple(parse_ssh_key(key) for key in payload.ssh_keys),
    )
