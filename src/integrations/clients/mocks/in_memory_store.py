"""
In-memory catalog store.

Purpose:
- Provides a fake GitHub repository for development/testing
- Does NOT make any network calls
- Mirrors the Contents API rules the writer depends on:
  git blob SHAs as revision handles, 409 for a stale sha,
  422 when an existing file is written without a sha

Usage:
- Selected in src/api/dependencies.py when INTEGRATIONS_MODE=mock
- Used directly by tests to observe reads and writes
"""

from __future__ import annotations

import base64
import hashlib
from typing import Dict, List, Optional

from src.integrations.contracts.catalog_store import (
    CatalogStore,
    CatalogStoreError,
    CommitResult,
    StoredFile,
    WriteAttempt,
)


def git_blob_sha(content: bytes) -> str:
    header = f"blob {len(content)}\0".encode("utf-8")
    return hashlib.sha1(header + content).hexdigest()


class InMemoryCatalogStore(CatalogStore):
    def __init__(
        self,
        owner: str = "mock-owner",
        repo: str = "mock-repo",
        branch: str = "main",
        history_limit: int = 100,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.files: Dict[str, bytes] = {}
        self.commits: List[Dict[str, Optional[str]]] = []
        self.calls: List[str] = []
        self.history_limit = history_limit
        self._commit_count = 0

    def _record(self, history: list, entry) -> None:
        # Only the most recent history_limit entries are kept.
        history.append(entry)
        del history[:-self.history_limit]

    def seed(self, path: str, text: str) -> str:
        """Place a file without recording a call; returns its sha."""
        self.files[path] = text.encode("utf-8")
        return git_blob_sha(self.files[path])

    async def get_file(self, path: str) -> Optional[StoredFile]:
        self._record(self.calls, f"GET {path}")
        content = self.files.get(path)
        if content is None:
            return None
        return StoredFile(path=path, sha=git_blob_sha(content), content=content.decode("utf-8"))

    async def put_file(
        self,
        path: str,
        *,
        encoded_content: str,
        message: str,
        sha: Optional[str] = None,
    ) -> CommitResult:
        self._record(self.calls, f"PUT {path}")
        current = self.files.get(path)
        if current is not None:
            if not sha:
                raise CatalogStoreError(
                    'Invalid request.\n\n"sha" wasn\'t supplied.',
                    status_code=422,
                    payload={"message": 'Invalid request.\n\n"sha" wasn\'t supplied.'},
                )
            if sha != git_blob_sha(current):
                text = f"{path} does not match {sha}"
                raise CatalogStoreError(text, status_code=409, payload={"message": text})

        self.files[path] = base64.b64decode(encoded_content)
        self._commit_count += 1
        commit_sha = hashlib.sha1(f"{self._commit_count}:{message}".encode("utf-8")).hexdigest()
        self._record(self.commits, {"sha": commit_sha, "message": message, "parent_blob": sha})

        base = f"https://github.com/{self.owner}/{self.repo}"
        return CommitResult(
            commit_sha=commit_sha,
            commit_url=f"{base}/commit/{commit_sha}",
            file_url=f"{base}/blob/{self.branch}/{path}",
            download_url=f"https://raw.githubusercontent.com/{self.owner}/{self.repo}/{self.branch}/{path}",
        )

    async def fetch_raw(self, path: str) -> Optional[str]:
        self._record(self.calls, f"RAW {path}")
        content = self.files.get(path)
        return content.decode("utf-8") if content is not None else None

    def describe_write(self, path: str) -> WriteAttempt:
        return WriteAttempt(url=f"memory://{self.owner}/{self.repo}/{path}")
