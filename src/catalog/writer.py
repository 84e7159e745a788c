"""
Catalog writer: read-modify-write synchronization of the catalog file.

Sequence per call:
1. read the current file to obtain its revision handle (sha), if any
2. serialize the catalog as indented JSON and base64-encode it
3. PUT it with a timestamped commit message, passing the sha when one was found

The store's optimistic-concurrency check is the only guard against
overlapping writers. A rejected write is reported once, never retried.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Dict, Optional

from src.error_handler import ClientInputError, ConfigurationError, UpstreamError
from src.integrations.contracts.catalog_store import CatalogStore, CatalogStoreError, CommitResult
from src.utils.store_config_loader import AppConfig
from src.utils.timestamps import utc_timestamp

logger = logging.getLogger(__name__)


def encode_catalog(new_data: Any) -> str:
    text = json.dumps(new_data, indent=2, ensure_ascii=False)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class CatalogWriter:
    def __init__(self, config: AppConfig, store: CatalogStore) -> None:
        self.config = config
        self.store = store
        self.path = config.store.file_path

    def _diag(self, msg: str, *args: Any) -> None:
        logger.log(logging.INFO if self.config.verbose else logging.DEBUG, msg, *args)

    def _check_config(self) -> None:
        self._diag(
            "Environment check: has_token=%s username=%s repo=%s branch=%s",
            self.config.github_token is not None,
            self.config.github_username,
            self.config.github_repo,
            self.config.github_branch,
        )
        if self.config.github_token is None:
            extra: Dict[str, Any] = {}
            if self.config.is_development:
                extra["debug"] = {
                    "allEnvVars": self.config.configured_github_vars,
                    "environment": self.config.environment,
                }
            raise ConfigurationError("GITHUB_TOKEN environment variable is not set", extra=extra)
        if not self.config.has_repository:
            raise ConfigurationError("GITHUB_USERNAME and GITHUB_REPO environment variables are required")

    async def _current_sha(self) -> Optional[str]:
        try:
            current = await self.store.get_file(self.path)
        except CatalogStoreError as exc:
            # Proceeds as a create; the store rejects it if the file actually exists.
            logger.warning(
                "Could not read current %s (status=%s): %s; writing without a revision handle",
                self.path,
                exc.status_code,
                exc.message,
            )
            return None

        if current is None:
            self._diag("%s does not exist yet, will create it", self.path)
            return None
        self._diag("Found existing %s with sha %s", self.path, current.sha)
        return current.sha

    async def sync(self, new_data: Any) -> CommitResult:
        self._check_config()
        if new_data is None:
            raise ClientInputError("newData is required in request body")

        attempt = self.store.describe_write(self.path)
        self._diag("Writing catalog to %s", attempt.url)

        sha = await self._current_sha()
        message = f"{self.config.store.commit_message_prefix} - {utc_timestamp()}"
        encoded = encode_catalog(new_data)
        self._diag(
            "Commit data: message=%r branch=%s sha=%s content=[%d base64 chars]",
            message,
            self.config.github_branch,
            sha,
            len(encoded),
        )

        try:
            result = await self.store.put_file(self.path, encoded_content=encoded, message=message, sha=sha)
        except CatalogStoreError as exc:
            logger.error("GitHub API error details: status=%s payload=%s", exc.status_code, exc.payload)
            extra: Dict[str, Any] = {}
            if self.config.is_development:
                extra["debug"] = {
                    "url": attempt.url,
                    "method": attempt.method,
                    "hasAuth": "Yes" if attempt.has_auth else "No",
                    "authType": attempt.auth_type or "None",
                }
            status = exc.status_code if exc.status_code is not None else "no response"
            raise UpstreamError(
                f"GitHub API error: {status} - {exc.message}",
                upstream_status=exc.status_code,
                details=exc.payload,
                extra=extra,
            ) from exc

        logger.info("Catalog committed: %s", result.commit_sha)
        return result
