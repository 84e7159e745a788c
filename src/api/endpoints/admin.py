from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_app_config
from src.api.responses import (
    cors_headers,
    json_response,
    method_not_allowed,
    other_methods,
    preflight_response,
    read_json_body,
)
from src.catalog.admin_gate import verify_admin_password
from src.error_handler import ErrorHandler
from src.utils.store_config_loader import AppConfig

router = APIRouter()

VERIFY_PATH = "/verify-admin"
VERIFY_CORS = cors_headers(["POST", "OPTIONS"])


@router.options(VERIFY_PATH, tags=["Admin"])
async def verify_admin_preflight():
    return preflight_response(VERIFY_CORS)


@router.api_route(VERIFY_PATH, methods=other_methods("POST"), include_in_schema=False)
async def verify_admin_wrong_method():
    return method_not_allowed(VERIFY_CORS)


@router.post(VERIFY_PATH, tags=["Admin"])
async def verify_admin(request: Request, config: AppConfig = Depends(get_app_config)):
    # The password gate never exposes stack traces, even in development.
    handler = ErrorHandler(expose_stack=False, success_flag=True)
    try:
        body = await read_json_body(request)
        verify_admin_password(body.get("password"), config.admin_password)
    except Exception as exc:
        status, payload = handler.handle_exception(exc, context={"route": VERIFY_PATH})
        return json_response(status, payload, VERIFY_CORS)
    return json_response(200, {"success": True, "message": "Access granted"}, VERIFY_CORS)
