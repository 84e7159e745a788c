from __future__ import annotations

import json
import logging
from typing import Any, Dict

from src.error_handler import ConfigurationError, UpstreamError
from src.integrations.contracts.catalog_store import CatalogStore, CatalogStoreError
from src.utils.store_config_loader import AppConfig
from src.utils.timestamps import utc_timestamp

logger = logging.getLogger(__name__)


def empty_catalog() -> Dict[str, Any]:
    return {"products": [], "lastUpdated": utc_timestamp()}


class CatalogReader:
    """Returns the stored catalog as-is; a missing file reads as an empty catalog."""

    def __init__(self, config: AppConfig, store: CatalogStore) -> None:
        self.config = config
        self.store = store

    async def read(self) -> Any:
        if not self.config.has_repository:
            raise ConfigurationError("GITHUB_USERNAME and GITHUB_REPO environment variables are required")

        path = self.config.store.file_path
        try:
            text = await self.store.fetch_raw(path)
        except CatalogStoreError as exc:
            logger.error("Error fetching products: %s", exc.message)
            raise UpstreamError(
                f"Failed to fetch products: {exc.message}",
                upstream_status=exc.status_code,
            ) from exc

        if text is None:
            logger.info("%s not found, returning empty catalog", path)
            return empty_catalog()
        return json.loads(text)
