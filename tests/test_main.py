"""
Application-level tests: the real app from create_app(), backed by a temporary SQLite file.
Exercises the lifespan (table creation), CORS and the wiring of settings into the AuthGate.

Run with: pytest tests/test_main.py -v
"""
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'blog.db'}",
        jwt_secret="integration-secret",
        admin_password="admin123",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


def login(client, password="admin123") -> dict:
    token = client.post("/api/auth/login", json={"password": password}).json()["token"]
    return {"Authorization": f"Bearer {token}"}


class TestApplication:
    def test_tables_created_on_startup(self, client):
        response = client.get("/api/articles")
        assert response.status_code == 200
        assert response.json() == []

    def test_login_then_create(self, client):
        response = client.post("/api/auth/login", json={"password": "admin123"})
        assert response.status_code == 200
        assert response.json()["success"] is True

        headers = {"Authorization": f"Bearer {response.json()['token']}"}
        created = client.post("/api/articles", json={"title": "T", "content": "C"}, headers=headers)

        assert created.status_code == 201
        article = created.json()
        assert article["title"] == "T"
        assert article["content"] == "C"
        assert article["id"]
        assert article["createdAt"] == article["updatedAt"]

    def test_articles_persist_across_app_instances(self, settings):
        with TestClient(create_app(settings)) as first:
            created = first.post(
                "/api/articles", json={"title": "T", "content": "C"}, headers=login(first)
            ).json()

        with TestClient(create_app(settings)) as second:
            assert second.get(f"/api/articles/{created['id']}").json()["title"] == "T"

    def test_password_comes_from_settings(self, tmp_path):
        settings = Settings(
            _env_file=None,
            database_url=f"sqlite:///{tmp_path / 'blog.db'}",
            admin_password="changed",
        )
        with TestClient(create_app(settings)) as client:
            assert client.post("/api/auth/login", json={"password": "admin123"}).status_code == 401
            assert client.post("/api/auth/login", json={"password": "changed"}).status_code == 200

    def test_token_from_other_secret_rejected(self, settings, tmp_path):
        other = settings.model_copy(update={"jwt_secret": "another-secret"})
        with TestClient(create_app(other)) as other_client:
            headers = login(other_client)

        with TestClient(create_app(settings)) as client:
            assert client.get("/api/auth/check", headers=headers).status_code == 403

    def test_cors_enabled(self, client):
        response = client.get("/api/articles", headers={"Origin": "http://localhost:5173"})
        assert response.headers["access-control-allow-origin"] == "*"

    def test_unparseable_json_returns_400(self, client):
        response = client.post(
            "/api/auth/login",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}
