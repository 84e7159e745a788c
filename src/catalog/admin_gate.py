import hmac
import logging
from typing import Any, Optional

from pydantic import SecretStr

from src.error_handler import AuthDenied, ClientInputError, ConfigurationError

logger = logging.getLogger(__name__)


def verify_admin_password(submitted: Any, configured: Optional[SecretStr]) -> None:
    """Raise unless ``submitted`` exactly equals the configured admin password."""
    if configured is None:
        logger.error("ADMIN_PASSWORD environment variable is not set")
        raise ConfigurationError("Server configuration error")

    if submitted is None or submitted == "":
        raise ClientInputError("Password is required")

    if not isinstance(submitted, str):
        raise AuthDenied()

    expected = configured.get_secret_value().encode("utf-8")
    if not hmac.compare_digest(submitted.encode("utf-8"), expected):
        raise AuthDenied()
