"""HTTP accessor for the CircleCI v1.1 API."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from cistate.adapters.http_resilience import ResilientClient
from cistate.domain.errors import TransportFailureError
from cistate.domain.model import ProjectRecord

from .schema import ErrorResponse, FollowPayload, ProjectPayload, SettingsPayload
from .translator import parse_project, parse_settings

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from cistate.config.circleci import CircleCIConfig
    from cistate.config.http_resilience import ConsistencyPolicy, ResilienceConfig
    from cistate.domain.model import ProjectSettings, VcsType

log = getLogger(__name__)


class CircleCIAPIError(TransportFailureError):
    """Raised when the CircleCI API fails or returns an unexpected payload."""


class CircleCIClient:
    """Synchronous accessor over CircleCI's project and SSH key endpoints.

    Each call runs its own event loop. Mutations poll the matching lookup until
    the change is observable (bounded by the configured consistency policy) so
    callers can read their own writes.
    """

    def __init__(
        self,
        *,
        config: CircleCIConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        headers = dict(config.resilience.default_headers or {})
        headers["Circle-Token"] = config.api_token
        self._resilience = replace(config.resilience, default_headers=headers)
        self._consistency: ConsistencyPolicy = config.consistency
        self._client_factory = client_factory or ResilientClient

    # Projects

    def list_projects(self) -> list[ProjectRecord]:
        return self._run(self._list_projects)

    def get_project(self, organization: str, project: str) -> ProjectRecord | None:
        async def probe(client: ResilientClient) -> ProjectRecord | None:
            return await self._get_project(client, organization, project)

        return self._run(probe, organization=organization, project=project)

    def follow(self, vcs: VcsType, organization: str, project: str) -> ProjectRecord:
        async def follow(client: ResilientClient) -> ProjectRecord:
            response = await client.post(_project_path(vcs, organization, project, "follow"))
            _raise_for_error(response, organization=organization, project=project)
            payload = FollowPayload.model_validate(response.json())
            log.debug(
                "Follow %s/%s on %s: following=%s", organization, project, vcs, payload.following
            )

            record = await self._poll(
                lambda: self._get_project(client, organization, project),
                lambda found: found is not None,
                f"followed project {organization}/{project}",
            )
            return record or _unobserved_project(organization, project)

        return self._run(follow, organization=organization, project=project)

    def unfollow(self, vcs: VcsType, organization: str, project: str) -> bool:
        async def unfollow(client: ResilientClient) -> bool:
            response = await client.post(_project_path(vcs, organization, project, "unfollow"))
            if response.status_code == httpx.codes.NOT_FOUND:
                log.debug("Unfollow %s/%s on %s: already absent", organization, project, vcs)
                return False
            _raise_for_error(response, organization=organization, project=project)

            await self._poll(
                lambda: self._get_project(client, organization, project),
                lambda found: found is None,
                f"unfollowed project {organization}/{project}",
            )
            return True

        return self._run(unfollow, organization=organization, project=project)

    # SSH keys

    def get_settings(
        self, vcs: VcsType, organization: str, project: str
    ) -> ProjectSettings | None:
        async def probe(client: ResilientClient) -> ProjectSettings | None:
            return await self._get_settings(client, vcs, organization, project)

        return self._run(probe, organization=organization, project=project)

    def add_key(
        self,
        vcs: VcsType,
        organization: str,
        project: str,
        hostname: str,
        private_key: str,
    ) -> None:
        async def add(client: ResilientClient) -> None:
            before = await self._get_settings(client, vcs, organization, project)
            known = (
                {(key.hostname, key.fingerprint) for key in before.ssh_keys} if before else set()
            )

            response = await client.post(
                _project_path(vcs, organization, project, "ssh-key"),
                json={"hostname": hostname, "private_key": private_key},
            )
            _raise_for_error(response, organization=organization, project=project)

            def added(settings: ProjectSettings | None) -> bool:
                return settings is not None and any(
                    key.hostname == hostname and (key.hostname, key.fingerprint) not in known
                    for key in settings.ssh_keys
                )

            await self._poll(
                lambda: self._get_settings(client, vcs, organization, project),
                added,
                f"SSH key for {hostname} on {organization}/{project}",
            )

        self._run(add, organization=organization, project=project)

    def delete_key(
        self,
        vcs: VcsType,
        organization: str,
        project: str,
        hostname: str,
        fingerprint: str,
    ) -> None:
        async def delete(client: ResilientClient) -> None:
            response = await client.delete(
                _project_path(vcs, organization, project, "ssh-key"),
                json={"hostname": hostname, "fingerprint": fingerprint},
            )
            if response.status_code == httpx.codes.NOT_FOUND:
                log.debug(
                    "Delete key %s for %s on %s/%s: already absent",
                    fingerprint,
                    hostname,
                    organization,
                    project,
                )
                return
            _raise_for_error(response, organization=organization, project=project)

            def removed(settings: ProjectSettings | None) -> bool:
                return settings is None or not any(
                    key.hostname == hostname and key.has_fingerprint(fingerprint)
                    for key in settings.ssh_keys
                )

            await self._poll(
                lambda: self._get_settings(client, vcs, organization, project),
                removed,
                f"removal of SSH key {fingerprint} on {organization}/{project}",
            )

        self._run(delete, organization=organization, project=project)

    # Internals

    def _run[T](
        self,
        operation: Callable[[ResilientClient], Awaitable[T]],
        *,
        organization: str | None = None,
        project: str | None = None,
    ) -> T:
        async def runner() -> T:
            async with self._client_factory(self._resilience) as client:
                return await operation(client)

        try:
            return asyncio.run(runner())
        except httpx.HTTPError as exc:
            raise CircleCIAPIError(
                f"CircleCI request for {organization}/{project} failed: {exc}",
                organization=organization,
                project=project,
            ) from exc
        except ValueError as exc:
            # pydantic.ValidationError and json.JSONDecodeError
            raise CircleCIAPIError(
                f"Unexpected CircleCI response payload for {organization}/{project}: {exc}",
                organization=organization,
                project=project,
            ) from exc

    async def _list_projects(self, client: ResilientClient) -> list[ProjectRecord]:
        response = await client.get("projects")
        _raise_for_error(response)
        payload = response.json()
        if not isinstance(payload, list):
            raise CircleCIAPIError("Unexpected CircleCI response payload for projects")
        return [parse_project(ProjectPayload.model_validate(item)) for item in payload]

    async def _get_project(
        self, client: ResilientClient, organization: str, project: str
    ) -> ProjectRecord | None:
        for record in await self._list_projects(client):
            if record.username == organization and record.reponame == project:
                return record if record.following else None
        return None

    async def _get_settings(
        self, client: ResilientClient, vcs: VcsType, organization: str, project: str
    ) -> ProjectSettings | None:
        response = await client.get(_project_path(vcs, organization, project, "settings"))
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        _raise_for_error(response, organization=organization, project=project)
        payload = SettingsPayload.model_validate(response.json())
        return parse_settings(payload, organization=organization, project=project)

    async def _poll[T](
        self,
        probe: Callable[[], Awaitable[T]],
        done: Callable[[T], bool],
        description: str,
    ) -> T:
        result = await probe()
        attempt = 1
        while not done(result) and attempt < self._consistency.attempts:
            await asyncio.sleep(self._consistency.delay_seconds)
            result = await probe()
            attempt += 1
        if not done(result):
            log.warning("%s not observable after %s attempts", description, attempt)
        return result


def _project_path(vcs: VcsType, organization: str, project: str, action: str) -> str:
    return f"project/{vcs}/{quote(organization, safe='')}/{quote(project, safe='')}/{action}"


def _unobserved_project(organization: str, project: str) -> ProjectRecord:
    return ProjectRecord(username=organization, reponame=project)


def _raise_for_error(
    response: httpx.Response,
    *,
    organization: str | None = None,
    project: str | None = None,
) -> None:
    if response.is_success:
        return

    message: str | None
    try:
        message = ErrorResponse.model_validate(response.json()).message
    except ValueError:
        message = response.text or None

    request = response.request
    log.error(
        "CircleCI %s %s failed with %s: %s",
        request.method,
        request.url.path,
        response.status_code,
        message,
    )
    raise CircleCIAPIError(
        f"CircleCI {request.method} {request.url.path} for {organization}/{project} "
        f"failed with {response.status_code}: {message}",
        status_code=response.status_code,
        organization=organization,
        project=project,
    )
