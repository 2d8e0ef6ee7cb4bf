"""
Tests for environment-driven settings
"""

from app.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "TOKEN_EXPIRE_MINUTES", "DOCS_USERNAME"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.port == 3000
        assert settings.token_expire_minutes == 60
        assert settings.docs_username == "admin"

    def test_environment_overrides_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        monkeypatch.setenv("TOKEN_EXPIRE_MINUTES", "5")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("JWT_SECRET", "from-env")
        monkeypatch.setenv("DOCS_PASSWORD", "s3cret")
        monkeypatch.setenv("DOCS_HOST", "https://api.example.com")

        settings = Settings()

        assert settings.data_dir == str(tmp_path)
        assert settings.token_expire_minutes == 5
        assert settings.port == 8080
        assert settings.jwt_secret == "from-env"
        assert settings.docs_password == "s3cret"
        assert settings.docs_host == "https://api.example.com"
