"""
GitHub Contents HTTP Client.

Reads and writes the catalog file in a GitHub repository through the
Contents API, and downloads raw content from raw.githubusercontent.com.

Important:
- This client is the ONLY place that talks to GitHub.
- Non-success statuses are raised as CatalogStoreError with the status code,
  GitHub's message and the decoded error body; nothing is retried here.
"""

from __future__ import annotations

import base64
import binascii
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from src.integrations.contracts.catalog_store import (
    CatalogStore,
    CatalogStoreError,
    CommitResult,
    StoredFile,
    WriteAttempt,
)
from src.integrations.policy.response_wrappers import (
    IntegrationResponseError,
    error_message_from_payload,
    normalize_commit_response,
)
from src.utils.store_config_loader import AppConfig


class GitHubContentsClient(CatalogStore):
    def __init__(
        self,
        owner: str,
        repo: str,
        branch: str = "main",
        token: Optional[str] = None,
        api_base_url: str = "https://api.github.com",
        raw_base_url: str = "https://raw.githubusercontent.com",
        user_agent: str = "catalog-sync-api",
        timeout_seconds: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.token = token
        self.api_base_url = api_base_url.rstrip("/")
        self.raw_base_url = raw_base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds
        self._client = client

    @classmethod
    def from_config(cls, config: AppConfig, client: Optional[httpx.AsyncClient] = None) -> "GitHubContentsClient":
        return cls(
            owner=config.github_username or "",
            repo=config.github_repo or "",
            branch=config.github_branch,
            token=config.github_token.get_secret_value() if config.github_token else None,
            api_base_url=config.store.api_base_url,
            raw_base_url=config.store.raw_base_url,
            user_agent=config.store.user_agent,
            timeout_seconds=config.store.timeout_seconds,
            client=client,
        )

    def contents_url(self, path: str) -> str:
        return f"{self.api_base_url}/repos/{self.owner}/{self.repo}/contents/{path}"

    def raw_url(self, path: str) -> str:
        return f"{self.raw_base_url}/{self.owner}/{self.repo}/{self.branch}/{path}"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": self.user_agent,
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            yield client

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            async with self._session() as client:
                return await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise CatalogStoreError(f"Request to {url} failed: {exc}") from exc

    async def get_file(self, path: str) -> Optional[StoredFile]:
        response = await self._send(
            "GET",
            self.contents_url(path),
            headers=self._headers(),
            params={"ref": self.branch},
        )
        if response.status_code == 404:
            return None
        if not response.is_success:
            raise _store_error(response)

        data = _json_or_empty(response)
        sha = data.get("sha")
        if not sha:
            raise CatalogStoreError(
                f"GitHub returned no sha for {path}",
                status_code=response.status_code,
                payload=data,
            )
        return StoredFile(path=path, sha=sha, content=_decode_content(data.get("content")))

    async def put_file(
        self,
        path: str,
        *,
        encoded_content: str,
        message: str,
        sha: Optional[str] = None,
    ) -> CommitResult:
        payload: Dict[str, Any] = {
            "message": message,
            "content": encoded_content,
            "branch": self.branch,
        }
        if sha:
            payload["sha"] = sha

        headers = {**self._headers(), "Content-Type": "application/json"}
        response = await self._send("PUT", self.contents_url(path), headers=headers, json=payload)
        if not response.is_success:
            raise _store_error(response)

        try:
            return normalize_commit_response(response.json())
        except (ValueError, IntegrationResponseError) as exc:
            raise CatalogStoreError(
                f"Unexpected response from GitHub: {exc}",
                status_code=response.status_code,
                payload=getattr(exc, "payload", None),
            ) from exc

    async def fetch_raw(self, path: str) -> Optional[str]:
        response = await self._send("GET", self.raw_url(path), headers={"User-Agent": self.user_agent})
        if response.status_code == 404:
            return None
        if not response.is_success:
            raise CatalogStoreError(
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        return response.text

    def describe_write(self, path: str) -> WriteAttempt:
        return WriteAttempt(
            url=self.contents_url(path),
            has_auth=bool(self.token),
            auth_type="token" if self.token else None,
        )


def _json_or_empty(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _store_error(response: httpx.Response) -> CatalogStoreError:
    payload = _json_or_empty(response)
    if not payload and response.text:
        payload = {"message": response.text}
    message = error_message_from_payload(payload, response.reason_phrase or "Unknown error")
    return CatalogStoreError(message, status_code=response.status_code, payload=payload)


def _decode_content(value: Any) -> str:
    # GitHub wraps base64 content at 60 columns.
    if not isinstance(value, str) or not value:
        return ""
    try:
        raw = base64.b64decode(value.replace("\n", ""))
    except (binascii.Error, ValueError):
        return ""
    return raw.decode("utf-8", errors="replace")
