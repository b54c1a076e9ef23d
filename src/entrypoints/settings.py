from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    BIGCOMMERCE_STORE_HASH: str
    BIGCOMMERCE_ACCESS_TOKEN: str
    BIGCOMMERCE_CHANNEL_ID: int
    BIGCOMMERCE_CUSTOMER_IMPERSONATION_TOKEN: str | None = None

    BIGCOMMERCE_API_URL: str = "https://api.bigcommerce.com"
    BIGCOMMERCE_PERMANENT_STORE_DOMAIN: str = "mybigcommerce.com"


def load_config() -> Config:
    """Read settings from the environment and ``.env``."""
    return Config()  # type: ignore[call-arg]
