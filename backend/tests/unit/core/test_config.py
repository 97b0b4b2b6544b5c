"""
Unit Tests for configuration parsing and startup validation
"""
from app.core.config import Settings, parse_cors_origins, validate_settings


def make_settings(**overrides) -> Settings:
    values = {
        "MONGODB_URI": "mongodb://localhost:27017",
        "JWT_SECRET_KEY": "a-real-secret",
        "APP_PASSWORD": "not-the-default",
        "ANTHROPIC_API_KEY": "sk-test",
        "ENVIRONMENT": "development",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestCorsOrigins:

    def test_comma_separated(self):
        assert parse_cors_origins("http://a.test, http://b.test,") == ["http://a.test", "http://b.test"]

    def test_json_list(self):
        assert parse_cors_origins('["http://a.test"]') == ["http://a.test"]

    def test_list_passthrough(self):
        assert parse_cors_origins(["http://a.test"]) == ["http://a.test"]


class TestValidateSettings:

    def test_valid_configuration(self):
        errors, warnings = validate_settings(make_settings())

        assert errors == []
        assert warnings == []

    def test_missing_mongodb_uri_is_error(self):
        errors, _ = validate_settings(make_settings(MONGODB_URI=""))

        assert "MONGODB_URI is not set" in errors

    def test_default_secret_is_warning_in_development(self):
        errors, warnings = validate_settings(make_settings(JWT_SECRET_KEY="CHANGE_ME"))

        assert errors == []
        assert any("JWT_SECRET_KEY" in w for w in warnings)

    def test_defaults_are_errors_in_production(self):
        errors, _ = validate_settings(
            make_settings(ENVIRONMENT="production", JWT_SECRET_KEY="CHANGE_ME", APP_PASSWORD="pitch")
        )

        assert any("JWT_SECRET_KEY" in e for e in errors)
        assert any("APP_PASSWORD" in e for e in errors)

    def test_missing_api_key_is_warning(self):
        cfg = make_settings(ANTHROPIC_API_KEY="")
        errors, warnings = validate_settings(cfg)

        assert errors == []
        assert any("fallback" in w for w in warnings)
        assert cfg.ai_enabled is False

    def test_fallback_override_disables_ai(self):
        cfg = make_settings(USE_FALLBACK_CONTENT=True)

        assert cfg.ai_enabled is False
        assert any("USE_FALLBACK_CONTENT" in w for w in validate_settings(cfg)[1])

    def test_expiration_bounds(self):
        errors, _ = validate_settings(make_settings(DEFAULT_EXPIRATION_DAYS=400))

        assert any("DEFAULT_EXPIRATION_DAYS" in e for e in errors)
