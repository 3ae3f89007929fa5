"""Tests for ClientConfig."""

import pytest

from hibpleaks.hibp.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_REQUEST_DELAY,
    HIBP_BASE_URL,
    ClientConfig,
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("BASE_URL", "MAX_RETRIES", "REQUEST_DELAY", "TIMEOUT", "USER_AGENT"):
        monkeypatch.delenv(f"HIBPLEAKS_{name}", raising=False)
    return monkeypatch


def test_defaults():
    config = ClientConfig()

    assert config.base_url == HIBP_BASE_URL
    assert config.max_retries == 10
    assert config.request_delay == 10
    assert config.timeout == 10
    assert config.user_agent.startswith("hibpleaks/")


def test_trailing_slash_removed():
    assert ClientConfig(base_url="http://localhost:8080/").base_url == "http://localhost:8080"


@pytest.mark.parametrize("values", [
    {"max_retries": -1},
    {"request_delay": -0.5},
    {"timeout": 0},
    {"base_url": ""},
])
def test_invalid_values(values):
    with pytest.raises(ValueError):
        ClientConfig(**values)


def test_from_env(clean_env):
    clean_env.setenv("HIBPLEAKS_BASE_URL", "http://hibp.local")
    clean_env.setenv("HIBPLEAKS_MAX_RETRIES", "2")
    clean_env.setenv("HIBPLEAKS_REQUEST_DELAY", "1.5")

    config = ClientConfig.from_env()

    assert config.base_url == "http://hibp.local"
    assert config.max_retries == 2
    assert config.request_delay == 1.5
    assert config.timeout == 10


def test_from_env_defaults(clean_env):
    config = ClientConfig.from_env()

    assert config.max_retries == DEFAULT_MAX_RETRIES
    assert config.request_delay == DEFAULT_REQUEST_DELAY


def test_from_env_rejects_garbage(clean_env):
    clean_env.setenv("HIBPLEAKS_MAX_RETRIES", "many")

    with pytest.raises(ValueError):
        ClientConfig.from_env()


def test_with_overrides_ignores_none():
    config = ClientConfig(max_retries=3).with_overrides(max_retries=None, request_delay=0)

    assert config.max_retries == 3
    assert config.request_delay == 0
