"""Pytest fixtures for the catalog store, operations and routes."""

import base64
import json
from typing import Callable, Dict, List, Optional

import httpx
import pytest
from pydantic import SecretStr

from src.integrations.clients.mocks.in_memory_store import InMemoryCatalogStore
from src.utils.store_config_loader import AppConfig


class FakeGitHub:
    """httpx transport handler standing in for api.github.com and raw.githubusercontent.com."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.get_response: Callable[[httpx.Request], httpx.Response] = lambda r: httpx.Response(
            404, json={"message": "Not Found"}
        )
        self.put_response: Callable[[httpx.Request], httpx.Response] = lambda r: httpx.Response(
            201, json=commit_body()
        )
        self.raw_response: Callable[[httpx.Request], httpx.Response] = lambda r: httpx.Response(404, text="404: Not Found")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "raw.githubusercontent.com":
            return self.raw_response(request)
        if request.method == "PUT":
            return self.put_response(request)
        return self.get_response(request)

    def puts(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "PUT"]

    def put_payloads(self) -> List[Dict]:
        return [json.loads(r.content) for r in self.puts()]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def commit_body(commit_sha: str = "c0ffee", path: str = "data.json") -> Dict:
    return {
        "commit": {"sha": commit_sha, "html_url": f"https://github.com/shop/catalog/commit/{commit_sha}"},
        "content": {
            "sha": "blobsha",
            "html_url": f"https://github.com/shop/catalog/blob/main/{path}",
            "download_url": f"https://raw.githubusercontent.com/shop/catalog/main/{path}",
        },
    }


def contents_body(text: str, sha: str = "abc123") -> Dict:
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    # GitHub wraps base64 content at 60 columns.
    wrapped = "\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60))
    return {"name": "data.json", "path": "data.json", "sha": sha, "content": wrapped, "encoding": "base64"}


def build_config(
    token: Optional[str] = "ghp_test",
    password: Optional[str] = "letmein",
    **overrides,
) -> AppConfig:
    values = {
        "github_username": "shop",
        "github_repo": "catalog",
        "github_branch": "main",
        "github_token": SecretStr(token) if token else None,
        "admin_password": SecretStr(password) if password else None,
    }
    values.update(overrides)
    return AppConfig(**values)


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def memory_store():
    return InMemoryCatalogStore(owner="shop", repo="catalog")


@pytest.fixture
def config():
    return build_config()


@pytest.fixture
def make_config():
    return build_config


@pytest.fixture
def github_bodies():
    return {"commit": commit_body, "contents": contents_body}
