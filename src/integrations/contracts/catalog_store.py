"""
Catalog store contract.

Defines the operations and data shapes for the remote file store that holds
the catalog, e.g.:
- reading a file together with its revision handle (sha)
- writing a file, optionally guarded by the expected revision handle
- downloading the raw file content

These contracts must be used by both:
- clients/mocks/in_memory_store.py (in-process store for development/testing)
- clients/real_http/github_contents.py (GitHub Contents API)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class StoredFile:
    path: str
    sha: str                             # revision handle for optimistic concurrency
    content: str = ""                    # decoded UTF-8 text


@dataclass
class CommitResult:
    commit_sha: str
    commit_url: str
    file_url: str
    download_url: str


class CatalogStoreError(Exception):
    """A store call failed: non-success status, or no response at all (status_code None)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}


@dataclass
class WriteAttempt:
    """Describes a write for diagnostics, without the encoded content."""
    url: str
    method: str = "PUT"
    has_auth: bool = False
    auth_type: Optional[str] = None


class CatalogStore(ABC):
    """Every catalog store client must implement this interface."""

    @abstractmethod
    async def get_file(self, path: str) -> Optional[StoredFile]:
        """Return the file and its revision handle, or None when it does not exist."""

    @abstractmethod
    async def put_file(
        self,
        path: str,
        *,
        encoded_content: str,
        message: str,
        sha: Optional[str] = None,
    ) -> CommitResult:
        """Create or update a file. The store rejects a stale or missing sha for an existing file."""

    @abstractmethod
    async def fetch_raw(self, path: str) -> Optional[str]:
        """Return the raw file text, or None when it does not exist."""

    def describe_write(self, path: str) -> WriteAttempt:
        return WriteAttempt(url=path)
