from app.config import INSECURE_DEFAULTS, Settings


class TestSettings:
    def test_development_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "JWT_SECRET", "ADMIN_PASSWORD", "PORT", "TOKEN_TTL_HOURS"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite:///./blog.db"
        assert settings.jwt_secret == "your-secret-key"
        assert settings.admin_password == "admin123"
        assert settings.port == 3001
        assert settings.token_ttl_hours == 24

    def test_environment_overrides_defaults(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "prod-secret")
        monkeypatch.setenv("ADMIN_PASSWORD", "s3cret")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("CORS_ORIGINS", '["https://blog.example.com"]')
        settings = Settings(_env_file=None)

        assert settings.jwt_secret == "prod-secret"
        assert settings.admin_password == "s3cret"
        assert settings.port == 8080
        assert settings.cors_origins == ["https://blog.example.com"]

    def test_insecure_defaults_reported(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        monkeypatch.delenv("ADMIN_PASSWORD", raising=False)

        assert sorted(Settings(_env_file=None).insecure_defaults()) == sorted(INSECURE_DEFAULTS)

    def test_no_insecure_defaults_once_overridden(self):
        settings = Settings(_env_file=None, jwt_secret="a", admin_password="b")
        assert settings.insecure_defaults() == []
