"""
==============================================================================
Settings Tests
==============================================================================
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config.settings import Settings


def make_settings(**overrides) -> Settings:
    """Build settings without reading a local .env file."""
    return Settings(_env_file=None, **overrides)


class TestSettings:
    """Tests for validation and derived values."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("PRODUCTS_FILE", raising=False)
        settings = make_settings()
        assert settings.exchange_rate_url == "https://api.hnb.hr/tecajn-eur/v3?valuta=USD"
        assert settings.default_page_size == 10
        assert settings.max_page_size == 100
        assert settings.default_sort == "name"
        assert settings.get_database_path() == Path("storage/db/catalog.db")

    @pytest.mark.parametrize("value, expected", [
        ("Production", "production"),
        (" staging ", "staging"),
        ("qa", "development"),
    ])
    def test_app_env_normalized(self, value, expected):
        assert make_settings(app_env=value).app_env == expected

    def test_default_page_size_cannot_exceed_max(self):
        with pytest.raises(ValidationError):
            make_settings(default_page_size=50, max_page_size=20)

    def test_timeout_bounds(self):
        with pytest.raises(ValidationError):
            make_settings(exchange_rate_timeout_seconds=0)

    @pytest.mark.parametrize("url", ["sqlite://", "sqlite:///:memory:", "postgresql://db/catalog"])
    def test_no_database_path(self, url):
        assert make_settings(database_url=url).get_database_path() is None

    def test_cors_origins(self):
        assert make_settings(cors_origins='["https://shop.example"]').cors_origins_list == ["https://shop.example"]
        assert make_settings(cors_origins="not json").cors_origins_list == ["*"]

    def test_is_production(self):
        assert make_settings(app_env="production").is_production
        assert not make_settings(app_env="staging").is_production
