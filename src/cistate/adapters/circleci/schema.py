"""CircleCI API v1.1 response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CircleCIBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ProjectPayload(CircleCIBaseModel):
    """One entry of ``GET /projects``."""

    username: str
    reponame: str
    vcs_url: str | None = None
    following: bool = True


class SSHKeyPayload(CircleCIBaseModel):
    hostname: str
    fingerprint: str
    public_key: str | None = None


class SettingsPayload(CircleCIBaseModel):
    """Body of ``GET /project/:vcs/:org/:project/settings``."""

    username: str | None = None
    reponame: str | None = None
    vcs_url: str | None = None
    ssh_keys: list[SSHKeyPayload] = Field(default_factory=list["SSHKeyPayload"])


class FollowPayload(CircleCIBaseModel):
    following: bool = False


class ErrorResponse(CircleCIBaseModel):
    message: str | None = None
