"""JSON envelope and CORS helpers shared by the catalog routes."""

import json
from typing import Any, Dict, Iterable

from fastapi import Request
from fastapi.responses import JSONResponse, Response

ALL_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD")


def cors_headers(methods: Iterable[str], allow_headers: str = "Content-Type") -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ", ".join(methods),
        "Access-Control-Allow-Headers": allow_headers,
    }


def other_methods(*allowed: str) -> list:
    return [m for m in ALL_METHODS if m not in allowed]


def json_response(status_code: int, payload: Any, headers: Dict[str, str]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload, headers=headers)


def preflight_response(headers: Dict[str, str]) -> Response:
    return Response(status_code=200, headers=headers)


def method_not_allowed(headers: Dict[str, str]) -> JSONResponse:
    return json_response(405, {"error": "Method not allowed"}, headers)


async def read_json_body(request: Request) -> Dict[str, Any]:
    """Parse the request body as a JSON object; anything else reads as empty."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
