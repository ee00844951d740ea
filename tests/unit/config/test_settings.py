from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pension_api.config.settings import Environment, Settings, get_settings

_RULE_ENV = ("ACCRUAL_RATE", "RETIREMENT_AGE", "FULL_SERVICE_YEARS", "MAX_MUTATIONS")


@contextmanager
def _with_env(env: dict[str, str]) -> Iterator[None]:
    old = {k: os.environ.get(k) for k in env}
    try:
        os.environ.update(env)
        get_settings.cache_clear()
        yield
    finally:
        for k, v in old.items():
            if v is None:
                os.environ.pop(k, None)
            else:
                os.environ[k] = v
        get_settings.cache_clear()


def test_defaults_match_pension_rules(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (*_RULE_ENV, "ALLOWED_ORIGINS", "ENVIRONMENT"):
        monkeypatch.delenv(key, raising=False)

    s = Settings()

    assert s.environment is Environment.DEVELOPMENT
    assert s.accrual_rate == Decimal("0.02")
    assert s.retirement_age == Decimal(65)
    assert s.full_service_years == Decimal(40)
    assert s.max_mutations == 1000
    assert s.cors_allow_origins == []


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("ACCRUAL_RATE", "0.0175")
    monkeypatch.setenv("RETIREMENT_AGE", "67")
    monkeypatch.setenv("MAX_MUTATIONS", "10")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")

    s = Settings()

    assert s.environment is Environment.TEST
    assert s.accrual_rate == Decimal("0.0175")
    assert s.retirement_age == Decimal(67)
    assert s.max_mutations == 10
    assert s.cors_allow_origins == ["https://a.example", "https://b.example"]


def test_settings_reject_out_of_range_rules() -> None:
    with pytest.raises(ValidationError):
        Settings(ACCRUAL_RATE="1.5")
    with pytest.raises(ValidationError):
        Settings(MAX_MUTATIONS=0)


def test_settings_forbid_extra_fields() -> None:
    with pytest.raises(ValidationError):
        Settings.model_validate({"ENVIRONMENT": "test", "unexpected_field": "boom"})


def test_wildcard_cors_allowed_in_development() -> None:
    with _with_env({"ENVIRONMENT": "development", "ALLOWED_ORIGINS": "*"}):
        assert get_settings().cors_allow_origins == ["*"]


def test_production_rejects_wildcard_cors() -> None:
    env = {"ENVIRONMENT": "production", "ALLOWED_ORIGINS": "*"}
    with _with_env(env), pytest.raises(RuntimeError, match="Invalid configuration"):
        get_settings()


def test_get_settings_is_cached() -> None:
    with _with_env({"ENVIRONMENT": "test"}):
        assert get_settings() is get_settings()
