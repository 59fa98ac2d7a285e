from __future__ import annotations

import pytest
from pydantic import ValidationError

from postgrid_client.client import PostGridClient
from postgrid_client.constants import BASE_URL
from postgrid_client.encoding import EncodingMode
from postgrid_client.options import with_timeout
from postgrid_client.settings import Settings, get_settings
from postgrid_client.throttling import TokenBucket


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # keep a developer's .env or shell exports out of these tests
    monkeypatch.chdir(tmp_path)
    for name in ("API_KEY", "BASE_URL", "RATE_LIMIT", "BURST", "TIMEOUT", "VERIFY_ENCODING"):
        monkeypatch.delenv(f"POSTGRID_{name}", raising=False)


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("POSTGRID_API_KEY", "env-key")
    monkeypatch.setenv("POSTGRID_RATE_LIMIT", "2")
    monkeypatch.setenv("POSTGRID_VERIFY_ENCODING", "json")

    settings = get_settings()

    assert settings.api_key.get_secret_value() == "env-key"
    assert settings.base_url == BASE_URL
    assert settings.rate_limit == 2.0
    assert settings.burst == 5
    assert settings.verify_encoding == EncodingMode.JSON


def test_settings_from_dotenv(tmp_path):
    (tmp_path / ".env").write_text("POSTGRID_API_KEY=file-key\nPOSTGRID_TIMEOUT=12\n")

    settings = Settings()

    assert settings.api_key.get_secret_value() == "file-key"
    assert settings.timeout == 12.0


def test_api_key_required():
    with pytest.raises(ValidationError):
        Settings()


def test_api_key_hidden():
    settings = get_settings(api_key="very-secret")

    assert "very-secret" not in repr(settings)


def test_client_from_settings():
    settings = get_settings(
        api_key="k",
        base_url="https://api.test/v1",
        rate_limit=2,
        burst=3,
        timeout=9,
        verify_encoding="json",
    )

    client = PostGridClient.from_settings(settings, with_timeout(4))

    assert client.config.api_key == "k"
    assert client.config.base_url == "https://api.test/v1"
    assert isinstance(client.config.rate_limiter, TokenBucket)
    assert client.config.rate_limiter.rate == 2.0
    assert client.config.rate_limiter.capacity == 3
    assert client.config.verify_encoding == EncodingMode.JSON
    assert client.config.timeout == 4.0
    client.close()
