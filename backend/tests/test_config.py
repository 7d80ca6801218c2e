from __future__ import annotations

import pytest
from pydantic import ValidationError

from ceprace.core.config import BRASILAPI_URL, VIACEP_URL, Settings


def test_defaults_match_lookup_deadlines():
    settings = Settings()

    assert settings.per_call_timeout == 1.0
    assert settings.overall_timeout == 2.0
    assert settings.brasilapi_url == BRASILAPI_URL
    assert settings.viacep_url == VIACEP_URL


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CEPRACE_OVERALL_TIMEOUT", "3.5")
    monkeypatch.setenv("CEPRACE_LOG_LEVEL", " debug ")

    settings = Settings()

    assert settings.overall_timeout == 3.5
    assert settings.log_level == "DEBUG"


def test_non_positive_timeout_is_rejected():
    with pytest.raises(ValidationError):
        Settings(per_call_timeout=0)
