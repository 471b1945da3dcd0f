"""Async client for the parts of the GitHub REST API that now-sc uses.

Covers the contents listing and raw downloads of the base-prompts
repository, and repository creation under an organization or the
authenticated user. Every non-success answer is raised as a
:class:`~now_sc.errors.GitHubAPIError` that keeps the upstream status code
and body.

Typical usage::

    client = GitHubClient(token=os.environ["GITHUB_PAT"])
    files = await client.list_directory(listing_url)
    repo = await client.create_user_repository("acme-poc", "Presales project for Acme")
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import GitHubAPIError

GITHUB_ACCEPT = "application/vnd.github.v3+json"


class RemoteFile(BaseModel):
    """One entry of a GitHub contents listing."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    kind: str = Field(alias="type", description='"file" or "dir"')
    download_url: str | None = None

    @property
    def is_file(self) -> bool:
        return self.kind == "file"


class RemoteRepository(BaseModel):
    """The fields of a freshly created repository that now-sc needs."""

    model_config = ConfigDict(extra="ignore")

    clone_url: str
    html_url: str


class GitHubClient:
    """Async client for api.github.com.

    A fresh ``httpx.AsyncClient`` is opened per call. *transport* lets tests
    plug in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        token: str | None = None,
        api_url: str = "https://api.github.com",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
            follow_redirects=True,
        )

    def _auth_headers(self) -> dict[str, str]:
        if not self.token:
            raise GitHubAPIError("GITHUB_PAT environment variable not set")
        return {
            "Authorization": f"token {self.token}",
            "Accept": GITHUB_ACCEPT,
            "Content-Type": "application/json",
        }

    async def _get(self, url: str, headers: dict[str, str] | None = None) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise GitHubAPIError(f"Request to {url} failed: {exc}") from exc

    async def _post(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        headers = self._auth_headers()
        try:
            async with self._client() as client:
                return await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise GitHubAPIError(f"Failed to create repository: {exc}") from exc

    @staticmethod
    def _decode_repository(response: httpx.Response) -> RemoteRepository:
        try:
            return RemoteRepository.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise GitHubAPIError(
                f"Failed to decode response: {exc}",
                status_code=response.status_code,
                body=response.text,
            ) from exc

    @staticmethod
    def _repo_payload(name: str, description: str) -> dict[str, Any]:
        return {
            "name": name,
            "description": description,
            "private": True,
            "auto_init": False,
        }

    # ------------------------------------------------------------------
    # Contents
    # ------------------------------------------------------------------

    async def list_directory(self, url: str) -> list[RemoteFile]:
        """Return the entries of a contents-API directory listing."""
        response = await self._get(url, headers={"Accept": GITHUB_ACCEPT})
        if response.status_code != 200:
            raise GitHubAPIError(
                f"GitHub API returned status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            data = response.json()
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            return [RemoteFile.model_validate(item) for item in data]
        except (ValueError, ValidationError) as exc:
            raise GitHubAPIError(
                f"Failed to decode response: {exc}",
                status_code=response.status_code,
                body=response.text,
            ) from exc

    async def download(self, url: str) -> bytes:
        """Fetch the raw bytes behind *url*."""
        response = await self._get(url)
        if response.status_code != 200:
            raise GitHubAPIError(
                f"download failed with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        return response.content

    # ------------------------------------------------------------------
    # Repositories
    # ------------------------------------------------------------------

    async def create_org_repository(
        self, org: str, name: str, description: str
    ) -> RemoteRepository:
        """Create a private repository owned by *org*."""
        response = await self._post(
            f"{self.api_url}/orgs/{org}/repos", self._repo_payload(name, description)
        )
        if response.status_code == 422:
            raise GitHubAPIError(
                f'repository "{name}" already exists in {org} organization',
                status_code=422,
                body=response.text,
            )
        if response.status_code != 201:
            raise GitHubAPIError(
                f"GitHub API returned status {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        return self._decode_repository(response)

    async def create_user_repository(self, name: str, description: str) -> RemoteRepository:
        """Create a private repository owned by the authenticated user."""
        response = await self._post(
            f"{self.api_url}/user/repos", self._repo_payload(name, description)
        )
        if response.status_code == 422 and "already exists" in response.text:
            raise GitHubAPIError(
                f'repository "{name}" already exists in your account',
                status_code=422,
                body=response.text,
            )
        if response.status_code != 201:
            raise GitHubAPIError(
                f"GitHub API returned status {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        return self._decode_repository(response)

    async def get_authenticated_user(self) -> str | None:
        """Return the login behind the token, or ``None`` if it cannot be read."""
        try:
            response = await self._get(f"{self.api_url}/user", headers=self._auth_headers())
        except GitHubAPIError:
            return None
        if response.status_code != 200:
            return None
        try:
            data = response.json()
        except ValueError:
            return None
        return data.get("login") if isinstance(data, dict) else None
