"""
FastAPI application - Main entry point

Serves the storefront catalog routes:
- GET  /api/get-products   read the catalog from the repository
- POST /api/update-json    commit a new catalog to the repository
- POST /api/verify-admin   check the admin password
"""

import logging
from typing import Dict, Tuple

from fastapi import FastAPI, Request

from src.api.endpoints.admin import VERIFY_CORS, VERIFY_PATH, router as admin_router
from src.api.endpoints.catalog import READ_CORS, READ_PATH, WRITE_CORS, WRITE_PATH, catalog_api
from src.api.responses import json_response
from src.error_handler import CatalogAPIError, ErrorHandler

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"

# path -> (CORS headers, whether the envelope carries "success": false)
ROUTE_ENVELOPES: Dict[str, Tuple[Dict[str, str], bool]] = {
    API_PREFIX + READ_PATH: (READ_CORS, False),
    API_PREFIX + WRITE_PATH: (WRITE_CORS, False),
    API_PREFIX + VERIFY_PATH: (VERIFY_CORS, True),
}
DEFAULT_ENVELOPE: Tuple[Dict[str, str], bool] = ({"Access-Control-Allow-Origin": "*"}, False)

app = FastAPI(
    title="Storefront Catalog API",
    description="Reads and writes the storefront product catalog stored in a GitHub repository",
    version="1.0.0",
)

app.include_router(catalog_api, prefix=API_PREFIX)
app.include_router(admin_router, prefix=API_PREFIX)


def _error_response(request: Request, exc: Exception):
    headers, success_flag = ROUTE_ENVELOPES.get(request.url.path, DEFAULT_ENVELOPE)
    handler = ErrorHandler(success_flag=success_flag)
    status, payload = handler.handle_exception(exc, context={"path": request.url.path})
    return json_response(status, payload, headers)


@app.exception_handler(CatalogAPIError)
async def catalog_api_error(request: Request, exc: CatalogAPIError):
    # Raised from dependencies, before a route's own try block runs.
    return _error_response(request, exc)


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    return _error_response(request, exc)


@app.get("/health")
async def health():
    return {"status": "ok"}
