from __future__ import annotations

import pytest

from chatapp.core.config import (
    DEFAULT_JWT_SECRET,
    BaseConfig,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_int,
    get_config,
    validate_config,
)
from chatapp.factory import create_app


def _as_mapping(cls) -> dict:
    return {k: getattr(cls, k) for k in dir(cls) if k.isupper()}


def test_defaults():
    assert BaseConfig.JWT_ALGORITHM == "HS256"
    assert "none" not in [a.lower() for a in BaseConfig.JWT_DECODE_ALGORITHMS]
    assert all(a.startswith("HS") for a in BaseConfig.JWT_DECODE_ALGORITHMS)
    assert TestingConfig.TOKEN_SWEEP_INTERVAL == 0


@pytest.mark.parametrize(
    "name,expected",
    [("testing", TestingConfig), ("PRODUCTION", ProductionConfig), ("bogus", DevelopmentConfig)],
)
def test_get_config_reads_app_env(monkeypatch, name, expected):
    monkeypatch.setenv("APP_ENV", name)
    assert get_config() is expected


def test_env_int(monkeypatch):
    monkeypatch.setenv("SOME_SECONDS", " 90 ")
    assert env_int("SOME_SECONDS", 1) == 90
    monkeypatch.setenv("SOME_SECONDS", "soon")
    with pytest.raises(ValueError):
        env_int("SOME_SECONDS", 1)


def test_production_refuses_placeholder_secret():
    cfg = _as_mapping(ProductionConfig)
    cfg["JWT_SECRET_KEY"] = DEFAULT_JWT_SECRET

    with pytest.raises(RuntimeError, match="placeholder"):
        validate_config(cfg)


@pytest.mark.parametrize("key", ["ACCESS_TOKEN_EXPIRES", "REFRESH_TOKEN_EXPIRES"])
def test_non_positive_lifetime_rejected(key):
    cfg = _as_mapping(TestingConfig)
    cfg[key] = 0

    with pytest.raises(RuntimeError, match=key):
        validate_config(cfg)


def test_factory_validates_config():
    class Broken(TestingConfig):
        ACCESS_TOKEN_EXPIRES = -1

    with pytest.raises(RuntimeError):
        create_app(Broken)
