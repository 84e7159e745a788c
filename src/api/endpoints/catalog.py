from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict

from src.api.dependencies import get_app_config, get_catalog_store
from src.api.responses import (
    cors_headers,
    json_response,
    method_not_allowed,
    other_methods,
    preflight_response,
    read_json_body,
)
from src.catalog.reader import CatalogReader
from src.catalog.writer import CatalogWriter
from src.error_handler import ErrorHandler
from src.integrations.contracts.catalog_store import CatalogStore
from src.utils.store_config_loader import AppConfig

api = APIRouter()
catalog_api = api

READ_PATH = "/get-products"
WRITE_PATH = "/update-json"

READ_CORS = cors_headers(["GET", "OPTIONS"])
WRITE_CORS = cors_headers(["GET", "POST", "PUT", "DELETE", "OPTIONS"], "Content-Type, Authorization")


class UpdateCatalogRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    newData: Any = None


@api.options(READ_PATH, tags=["Catalog"])
async def get_products_preflight():
    return preflight_response(READ_CORS)


@api.api_route(READ_PATH, methods=other_methods("GET"), include_in_schema=False)
async def get_products_wrong_method():
    return method_not_allowed(READ_CORS)


@api.get(READ_PATH, tags=["Catalog"])
async def get_products(
    config: AppConfig = Depends(get_app_config),
    store: CatalogStore = Depends(get_catalog_store),
):
    handler = ErrorHandler(expose_stack=config.is_development)
    try:
        catalog = await CatalogReader(config, store).read()
    except Exception as exc:
        status, payload = handler.handle_exception(exc, context={"route": READ_PATH})
        return json_response(status, payload, READ_CORS)
    return json_response(200, catalog, READ_CORS)


@api.options(WRITE_PATH, tags=["Catalog"])
async def update_json_preflight():
    return preflight_response(WRITE_CORS)


@api.api_route(WRITE_PATH, methods=other_methods("POST"), include_in_schema=False)
async def update_json_wrong_method():
    return method_not_allowed(WRITE_CORS)


@api.post(WRITE_PATH, tags=["Catalog"])
async def update_json(
    request: Request,
    config: AppConfig = Depends(get_app_config),
    store: CatalogStore = Depends(get_catalog_store),
):
    handler = ErrorHandler(expose_stack=config.is_development)
    try:
        body = UpdateCatalogRequest(**await read_json_body(request))
        result = await CatalogWriter(config, store).sync(body.newData)
    except Exception as exc:
        status, payload = handler.handle_exception(exc, context={"route": WRITE_PATH})
        return json_response(status, payload, WRITE_CORS)

    return json_response(
        200,
        {
            "success": True,
            "message": "Data updated successfully",
            "commit": {"sha": result.commit_sha, "url": result.commit_url},
            "file": {"url": result.file_url, "downloadUrl": result.download_url},
        },
        WRITE_CORS,
    )
