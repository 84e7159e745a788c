"""
Configuration loader for the catalog store (GitHub repository settings, secrets, runtime mode).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import BaseModel, Field, SecretStr, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "store_config.yml"

_TRUTHY = {"1", "true", "yes"}


class StoreSettings(BaseModel):
    """Static, non-secret settings for the remote file store"""

    api_base_url: str = "https://api.github.com"
    raw_base_url: str = "https://raw.githubusercontent.com"
    file_path: str = "data.json"
    user_agent: str = "catalog-sync-api"
    commit_message_prefix: str = "Update products data"
    timeout_seconds: Optional[float] = Field(default=None, gt=0)


class AppConfig(BaseModel):
    """Per-request configuration handed to the catalog operations."""

    github_username: Optional[str] = None
    github_repo: Optional[str] = None
    github_branch: str = "main"
    github_token: Optional[SecretStr] = None
    admin_password: Optional[SecretStr] = None
    environment: str = "production"
    verbose: bool = False
    integrations_mode: str = "real"
    configured_github_vars: list[str] = Field(default_factory=list)
    store: StoreSettings = Field(default_factory=StoreSettings)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def use_mock_store(self) -> bool:
        return self.integrations_mode in {"mock", "test"}

    @property
    def has_repository(self) -> bool:
        return bool(self.github_username and self.github_repo)

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        settings: Optional[StoreSettings] = None,
    ) -> "AppConfig":
        """
        Build the configuration from environment variables.

        Blank values are treated as unset. Values are stripped, except
        ADMIN_PASSWORD which is kept verbatim.
        """
        env = os.environ if env is None else env

        def _get(name: str) -> Optional[str]:
            value = (env.get(name) or "").strip()
            return value or None

        environment = (_get("APP_ENV") or "production").lower()
        debug_flag = (_get("CATALOG_DEBUG") or "").lower()
        verbose = debug_flag in _TRUTHY if debug_flag else environment == "development"

        token = _get("GITHUB_TOKEN")
        # Compared byte-for-byte, so only an all-blank value is dropped.
        raw_password = env.get("ADMIN_PASSWORD")
        password = raw_password if raw_password and raw_password.strip() else None

        return cls(
            github_username=_get("GITHUB_USERNAME"),
            github_repo=_get("GITHUB_REPO"),
            github_branch=_get("GITHUB_BRANCH") or "main",
            github_token=SecretStr(token) if token else None,
            admin_password=SecretStr(password) if password else None,
            environment=environment,
            verbose=verbose,
            integrations_mode=(_get("INTEGRATIONS_MODE") or "real").lower(),
            configured_github_vars=sorted(k for k in env if k.startswith("GITHUB")),
            store=settings or StoreSettings(),
        )


def load_store_settings(config_path: Optional[Path] = None) -> StoreSettings:
    """
    Load and validate store settings from YAML file

    Args:
        config_path: Path to config file. Defaults to config/store_config.yml;
            when the default file is absent the built-in defaults are used.

    Returns:
        Validated StoreSettings object

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not config_path.exists():
            logger.info("No store config at %s, using defaults", config_path)
            return StoreSettings()

    if not config_path.exists():
        raise FileNotFoundError(f"Store config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        settings = StoreSettings(**data)
        logger.info("Successfully loaded store config from %s", config_path)
        return settings
    except ValidationError as e:
        logger.error("Store config validation failed: %s", e)
        raise
