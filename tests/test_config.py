"""Tests for environment-based configuration."""

import pytest
from pydantic import ValidationError

from clair_adapter.config import AdapterSettings
from clair_adapter.consts import DEFAULT_CLAIR_URL


class TestAdapterSettings:
    """Tests for AdapterSettings."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "SCANNER_CLAIR_URL",
            "SCANNER_API_SERVER_ADDR",
            "SCANNER_CLAIR_TIMEOUT",
            "SCANNER_REGISTRY_TIMEOUT",
            "SCANNER_REGISTRY_TLS_VERIFY",
            "SCANNER_LOG_LEVEL",
            "SCANNER_CLAIR_VERSION",
            "SCANNER_CLAIR_DB_UPDATED_AT",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self) -> None:
        settings = AdapterSettings.from_env()
        assert settings.clair_url == DEFAULT_CLAIR_URL
        assert settings.api_host == "0.0.0.0"
        assert settings.api_port == 8080
        assert settings.registry_tls_verify is True
        assert settings.log_level == "INFO"
        assert settings.db_updated_at == "2019-08-13T08:16:33.345Z"

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCANNER_CLAIR_URL", "http://clair:6060/")
        monkeypatch.setenv("SCANNER_API_SERVER_ADDR", ":9090")
        monkeypatch.setenv("SCANNER_CLAIR_TIMEOUT", "12.5")
        monkeypatch.setenv("SCANNER_REGISTRY_TLS_VERIFY", "false")
        monkeypatch.setenv("SCANNER_LOG_LEVEL", "debug")

        settings = AdapterSettings.from_env()

        assert settings.clair_url == "http://clair:6060"
        assert settings.api_host == "0.0.0.0"
        assert settings.api_port == 9090
        assert settings.clair_timeout == 12.5
        assert settings.registry_tls_verify is False
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCANNER_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            AdapterSettings.from_env()

    def test_invalid_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCANNER_CLAIR_TIMEOUT", "0")
        with pytest.raises(ValidationError):
            AdapterSettings.from_env()

    def test_db_updated_at_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCANNER_CLAIR_DB_UPDATED_AT", "2024-05-01T12:00:00+02:00")
        assert AdapterSettings.from_env().db_updated_at == "2024-05-01T12:00:00+02:00"

    @pytest.mark.parametrize("value", ["yesterday", "2024-05-01T12:00:00"])
    def test_db_updated_at_must_be_rfc3339(
        self, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv("SCANNER_CLAIR_DB_UPDATED_AT", value)
        with pytest.raises(ValidationError):
            AdapterSettings.from_env()
