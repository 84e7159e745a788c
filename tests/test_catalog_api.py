from datetime import datetime

import httpx
import pytest
from fastapi.testclient import TestClient

import src.api.dependencies as dependencies
from src.api.dependencies import get_app_config, get_catalog_store
from src.api.main import app
from src.integrations.clients.real_http.github_contents import GitHubContentsClient

ROUTES = ["/api/get-products", "/api/update-json", "/api/verify-admin"]


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use(memory_store, make_config):
    """Wire the app to the in-memory store and the given config."""

    def _use(config=None, store=None):
        cfg = config or make_config()
        app.dependency_overrides[get_app_config] = lambda: cfg
        app.dependency_overrides[get_catalog_store] = lambda: store or memory_store
        return cfg

    return _use


@pytest.mark.parametrize("path", ROUTES)
def test_options_returns_empty_200_without_any_config(client, path, monkeypatch):
    for name in ("GITHUB_USERNAME", "GITHUB_REPO", "GITHUB_TOKEN", "ADMIN_PASSWORD"):
        monkeypatch.delenv(name, raising=False)

    response = client.options(path)

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_cors_methods_are_route_specific(client):
    assert client.options("/api/get-products").headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"
    assert client.options("/api/verify-admin").headers["Access-Control-Allow-Methods"] == "POST, OPTIONS"
    write = client.options("/api/update-json").headers
    assert write["Access-Control-Allow-Methods"] == "GET, POST, PUT, DELETE, OPTIONS"
    assert write["Access-Control-Allow-Headers"] == "Content-Type, Authorization"


@pytest.mark.parametrize(
    "method,path",
    [
        ("POST", "/api/get-products"),
        ("DELETE", "/api/get-products"),
        ("GET", "/api/update-json"),
        ("PUT", "/api/update-json"),
        ("GET", "/api/verify-admin"),
    ],
)
def test_wrong_method_is_405(client, method, path):
    response = client.request(method, path)

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_read_absent_catalog_returns_empty_shape(client, use):
    use()

    response = client.get("/api/get-products")

    assert response.status_code == 200
    body = response.json()
    assert body["products"] == []
    datetime.fromisoformat(body["lastUpdated"].replace("Z", "+00:00"))


def test_write_then_read_round_trip(client, use, memory_store):
    use()
    catalog = {"products": [{"id": "p1", "name": "Tote bag", "price": 12}], "lastUpdated": "2026-10-18T10:00:00.000Z"}

    write = client.post("/api/update-json", json={"newData": catalog})

    assert write.status_code == 200
    body = write.json()
    assert body["success"] is True
    assert body["message"] == "Data updated successfully"
    assert body["commit"]["sha"] == memory_store.commits[0]["sha"]
    assert body["commit"]["url"].endswith(body["commit"]["sha"])
    assert body["file"]["downloadUrl"].endswith("/data.json")
    assert client.get("/api/get-products").json() == catalog


def test_second_write_updates_existing_file(client, use, memory_store):
    use()
    client.post("/api/update-json", json={"newData": {"products": []}})
    response = client.post("/api/update-json", json={"newData": {"products": [1]}})

    assert response.status_code == 200
    assert memory_store.commits[1]["parent_blob"] is not None


@pytest.mark.parametrize("body", [{}, {"newData": None}, {"other": 1}])
def test_write_without_new_data_is_400_and_touches_nothing(client, use, memory_store, body):
    use()

    response = client.post("/api/update-json", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "newData is required in request body"}
    assert memory_store.calls == []


def test_write_with_unparseable_body_is_400(client, use):
    use()

    response = client.post("/api/update-json", content=b"not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400


def test_write_without_token_is_500_and_makes_no_network_call(client, use, make_config, fake_github):
    config = make_config(token=None)
    use(config, GitHubContentsClient.from_config(config, client=fake_github.client()))

    response = client.post("/api/update-json", json={"newData": {"products": []}})

    assert response.status_code == 500
    assert response.json()["error"] == "GITHUB_TOKEN environment variable is not set"
    assert fake_github.requests == []


def test_stale_sha_rejection_is_passed_through_once(client, use, config, fake_github, github_bodies):
    fake_github.get_response = lambda r: httpx.Response(200, json=github_bodies["contents"]("{}", sha="old"))
    fake_github.put_response = lambda r: httpx.Response(409, json={"message": "data.json does not match old"})
    use(config, GitHubContentsClient.from_config(config, client=fake_github.client()))

    response = client.post("/api/update-json", json={"newData": {"products": []}})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "GitHub API error: 409 - data.json does not match old"
    assert body["upstreamStatus"] == 409
    assert body["details"] == {"message": "data.json does not match old"}
    assert "debug" not in body
    assert len(fake_github.puts()) == 1


def test_read_with_missing_repository_is_500(client, use, make_config):
    use(make_config(github_repo=None))

    response = client.get("/api/get-products")

    assert response.status_code == 500
    assert response.json() == {"error": "GITHUB_USERNAME and GITHUB_REPO environment variables are required"}


def test_unexpected_error_exposes_stack_only_in_development(client, use, make_config, memory_store):
    memory_store.seed("data.json", "{not json")

    use(make_config())
    production = client.get("/api/get-products").json()
    use(make_config(environment="development"))
    development = client.get("/api/get-products").json()

    assert production == {"error": "Internal server error"}
    assert development["error"] == "Internal server error"
    assert "JSONDecodeError" in development["stack"]


def test_verify_admin_accepts_correct_password(client, use):
    use()

    response = client.post("/api/verify-admin", json={"password": "letmein"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Access granted"}


def test_verify_admin_rejects_wrong_password_without_detail(client, use):
    use()

    response = client.post("/api/verify-admin", json={"password": "letmei"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid credentials"}


def test_verify_admin_requires_password(client, use):
    use()

    response = client.post("/api/verify-admin", json={})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Password is required"}


def test_verify_admin_without_server_secret_is_500(client, use, make_config):
    use(make_config(password=None))

    response = client.post("/api/verify-admin", json={"password": "letmein"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Server configuration error"}


def test_mock_mode_is_selected_from_environment(client, monkeypatch):
    monkeypatch.setenv("INTEGRATIONS_MODE", "mock")
    monkeypatch.setenv("GITHUB_USERNAME", "shop")
    monkeypatch.setenv("GITHUB_REPO", "catalog")
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")

    write = client.post("/api/update-json", json={"newData": {"products": ["mock"]}})

    assert write.status_code == 200
    assert client.get("/api/get-products").json() == {"products": ["mock"]}


def test_padded_admin_password_matches_only_itself(client, monkeypatch):
    monkeypatch.setenv("ADMIN_PASSWORD", " letmein ")

    exact = client.post("/api/verify-admin", json={"password": " letmein "})
    trimmed = client.post("/api/verify-admin", json={"password": "letmein"})

    assert exact.status_code == 200
    assert trimmed.status_code == 401


def _broken_settings():
    raise FileNotFoundError("config/store_config.yml")


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/api/verify-admin", {"success": False, "error": "Server configuration error"}),
        ("/api/update-json", {"error": "Server configuration error"}),
    ],
)
def test_settings_failure_keeps_route_envelope_and_cors(client, monkeypatch, path, expected):
    monkeypatch.setattr(dependencies, "get_store_settings", _broken_settings)

    response = client.post(path, json={"password": "letmein", "newData": {}})

    assert response.status_code == 500
    assert response.json() == expected
    allowed = client.options(path).headers["Access-Control-Allow-Methods"]
    assert response.headers["Access-Control-Allow-Methods"] == allowed
