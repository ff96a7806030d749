"""Test: settings validation, URL helpers, and the opt-in environment reader."""

import pytest
from pydantic import ValidationError

from completion_client.client.http import auth_headers, base_url, completions_url
from completion_client.core.config import Settings, settings, settings_from_env


def test_defaults_are_code_only():
    assert settings.API_BASE_URL == "https://api.openai.com/v1/"
    assert settings.API_KEY is None
    assert settings.DEFAULT_ENGINE == "davinci"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, "https://api.openai.com/v1/"),
        ("", "https://api.openai.com/v1/"),
        ("https://api.example.test/v1", "https://api.example.test/v1/"),
        ("https://api.example.test/v1///", "https://api.example.test/v1/"),
        ("127.0.0.1:8000", "http://127.0.0.1:8000/"),
        ("api.example.test/v1", "https://api.example.test/v1/"),
    ],
)
def test_base_url_normalization(raw, expected):
    assert base_url(raw) == expected


def test_completions_url_requires_engine():
    assert completions_url("https://h/v1/", "/babbage/") == "https://h/v1/engines/babbage/completions"
    with pytest.raises(ValueError):
        completions_url("https://h/v1/", "  ")


def test_auth_headers_only_include_configured_values():
    assert auth_headers(None) == {"Content-Type": "application/json"}
    h = auth_headers("sk-1", "org-2")
    assert h["Authorization"] == "Bearer sk-1"
    assert h["OpenAI-Organization"] == "org-2"


def test_settings_reject_unknown_keys_and_bad_timeouts():
    with pytest.raises(ValidationError):
        Settings(API_KEYS="typo")
    with pytest.raises(ValidationError):
        Settings(REQUEST_TIMEOUT=0)


def test_settings_from_env_reads_known_variables():
    env = {
        "OPENAI_API_KEY": "sk-env",
        "OPENAI_ORGANIZATION": "  ",
        "COMPLETION_API_BASE": "http://localhost:9000/v1",
        "COMPLETION_ENGINE": "curie",
        "COMPLETION_LOG_LEVEL": "debug",
        "UNRELATED": "ignored",
    }
    s = settings_from_env(env)

    assert s.API_KEY == "sk-env"
    assert s.ORGANIZATION is None  # blank means not configured
    assert s.API_BASE_URL == "http://localhost:9000/v1/"
    assert s.DEFAULT_ENGINE == "curie"
    assert s.LOG_LEVEL == "DEBUG"


def test_settings_from_env_overrides_win():
    s = settings_from_env({"COMPLETION_ENGINE": "curie"}, DEFAULT_ENGINE="ada", LOG_LEVEL=None)
    assert s.DEFAULT_ENGINE == "ada"
    assert s.LOG_LEVEL == "INFO"
