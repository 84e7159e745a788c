"""
FastAPI dependencies: per-request configuration and store selection.

The selection of mock vs real store clients happens here and nowhere else.
"""

import logging
from functools import lru_cache
from typing import Optional

import yaml
from dotenv import load_dotenv
from fastapi import Depends
from pydantic import ValidationError

from src.error_handler import ConfigurationError
from src.integrations.clients.mocks.in_memory_store import InMemoryCatalogStore
from src.integrations.clients.real_http.github_contents import GitHubContentsClient
from src.integrations.contracts.catalog_store import CatalogStore
from src.utils.store_config_loader import AppConfig, StoreSettings, load_store_settings

load_dotenv()

logger = logging.getLogger(__name__)

_mock_store: Optional[InMemoryCatalogStore] = None


@lru_cache(maxsize=1)
def get_store_settings() -> StoreSettings:
    return load_store_settings()


def get_app_config() -> AppConfig:
    try:
        settings = get_store_settings()
    except (OSError, yaml.YAMLError, ValidationError) as exc:
        logger.error("Could not load store settings: %s", exc)
        raise ConfigurationError("Server configuration error") from exc
    return AppConfig.from_env(settings=settings)


def get_catalog_store(config: AppConfig = Depends(get_app_config)) -> CatalogStore:
    global _mock_store
    if config.use_mock_store:
        if _mock_store is None:
            logger.info("INTEGRATIONS_MODE=%s, using in-memory catalog store", config.integrations_mode)
            _mock_store = InMemoryCatalogStore(branch=config.github_branch)
        return _mock_store
    return GitHubContentsClient.from_config(config)
