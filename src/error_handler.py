"""Error taxonomy and JSON envelope helpers for the catalog API."""
from typing import Any, Dict, Optional, Tuple
import logging
import traceback

logger = logging.getLogger(__name__)


class CatalogAPIError(Exception):
    status_code = 500

    def __init__(self, message: str, *, extra: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra or {}

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


class ClientInputError(CatalogAPIError):
    status_code = 400


class AuthDenied(CatalogAPIError):
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class MethodNotAllowed(CatalogAPIError):
    status_code = 405

    def __init__(self) -> None:
        super().__init__("Method not allowed")


class ConfigurationError(CatalogAPIError):
    status_code = 500


class UpstreamError(CatalogAPIError):
    """The remote store answered with a non-success status (or not at all)."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        upstream_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, extra=extra)
        self.upstream_status = upstream_status
        self.details = details or {}

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message, "upstreamStatus": self.upstream_status}
        if self.details:
            payload["details"] = self.details
        payload.update(self.extra)
        return payload


class ErrorHandler:
    def __init__(self, expose_stack: bool = False, success_flag: bool = False) -> None:
        self.expose_stack = expose_stack
        self.success_flag = success_flag

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Tuple[int, Dict[str, Any]]:
        if isinstance(exc, CatalogAPIError):
            status, payload = exc.status_code, exc.to_payload()
        else:
            logger.error("Unhandled exception in catalog API: %s", exc, exc_info=True)
            status, payload = 500, {"error": "Internal server error"}
            if self.expose_stack:
                payload["details"] = str(exc)
                payload["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
                if context:
                    payload["context"] = context
        if self.success_flag:
            payload = {"success": False, **payload}
        return status, payload
