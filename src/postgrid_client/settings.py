from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import BASE_URL, DEFAULT_RATE_LIMIT, DEFAULT_BURST, DEFAULT_TIMEOUT_S
from .encoding import EncodingMode


class Settings(BaseSettings):
    """
    Client settings read from POSTGRID_* environment variables or a .env file.

    The client itself never reads the environment; embedding applications
    opt in via ``PostGridClient.from_settings(get_settings())``.
    """
    api_key: SecretStr
    base_url: str = BASE_URL
    rate_limit: float = DEFAULT_RATE_LIMIT
    burst: int = DEFAULT_BURST
    timeout: float = DEFAULT_TIMEOUT_S
    verify_encoding: EncodingMode = EncodingMode.FORM

    model_config = SettingsConfigDict(
        env_prefix="POSTGRID_",
        env_file=".env",
    )


def get_settings(**overrides) -> Settings:
    return Settings(**overrides)
