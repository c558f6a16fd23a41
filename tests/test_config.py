# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

from app.config import Settings


def make_settings(**overrides) -> Settings:
    """Build Settings from explicit values only, ignoring any .env file."""
    values = {
        "SUPABASE_URL": "https://test-project.supabase.co/",
        "SUPABASE_SERVICE_KEY": "test-service-key",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettings:
    """Test the settings the service actually reads."""

    def test_only_url_and_service_key_are_required(self):
        required = {name for name, field in Settings.model_fields.items() if field.is_required()}

        assert required == {"SUPABASE_URL", "SUPABASE_SERVICE_KEY"}

    def test_declares_no_unused_settings(self):
        assert set(Settings.model_fields) == {
            "SUPABASE_URL",
            "SUPABASE_SERVICE_KEY",
            "SUPABASE_JWT_SECRET",
            "ENVIRONMENT",
            "DEBUG",
            "CORS_ORIGINS",
        }

    def test_jwks_url(self):
        settings = make_settings()

        assert settings.jwks_url == "https://test-project.supabase.co/auth/v1/.well-known/jwks.json"

    def test_cors_origins_list(self):
        settings = make_settings(CORS_ORIGINS="http://localhost:5173, https://artpreneur.app,")

        assert settings.cors_origins_list == ["http://localhost:5173", "https://artpreneur.app"]

    def test_is_production(self):
        assert make_settings(ENVIRONMENT="production").is_production
        assert not make_settings(ENVIRONMENT="development").is_production
