from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from src.integrations.contracts.catalog_store import CommitResult


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class CommitInfoModel(BaseModel):
    sha: str
    html_url: str


class ContentInfoModel(BaseModel):
    html_url: str
    download_url: str


class ContentsWriteResponseModel(BaseModel):
    commit: CommitInfoModel
    content: ContentInfoModel


def normalize_commit_response(raw: Dict[str, Any]) -> CommitResult:
    """Validate a contents API PUT response and reduce it to the fields callers need."""
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"Expected a JSON object, got {type(raw).__name__}.")

    model = _build_model(ContentsWriteResponseModel, raw, raw)
    return CommitResult(
        commit_sha=model.commit.sha,
        commit_url=model.commit.html_url,
        file_url=model.content.html_url,
        download_url=model.content.download_url,
    )


def error_message_from_payload(payload: Dict[str, Any], default: str) -> str:
    message = payload.get("message") if isinstance(payload, dict) else None
    if isinstance(message, str) and message.strip():
        return message
    return default


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
