"""Tests for did_jis.config — environment-driven settings."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from did_jis.config import EngineSettings, get_settings
from tests.vectors import ZERO_SECRET_HEX


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DID_JIS_SECRET_KEY", raising=False)
    monkeypatch.delenv("DID_JIS_LOG_LEVEL", raising=False)


class TestEngineSettings:
    def test_defaults(self) -> None:
        settings = get_settings()
        assert settings.secret_key is None
        assert settings.log_level == "WARNING"

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DID_JIS_SECRET_KEY", ZERO_SECRET_HEX)
        monkeypatch.setenv("DID_JIS_LOG_LEVEL", "debug")
        settings = get_settings()
        assert settings.secret_key is not None
        assert settings.secret_key.get_secret_value() == ZERO_SECRET_HEX
        assert settings.log_level == "DEBUG"

    def test_secret_is_masked_in_repr(self) -> None:
        settings = EngineSettings(secret_key=ZERO_SECRET_HEX)
        assert ZERO_SECRET_HEX not in repr(settings)

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            EngineSettings(log_level="VERBOSE")
