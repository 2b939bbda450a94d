from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WAY2ENJOY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_url: str = "https://way2enjoy.com/modules/compress-png/way2enjoy-cli2.php"
    api_key: str | None = None
    timeout: float = 30.0
    log_level: str = "info"
    user_agent: str = "way2enjoy-python"


settings = Settings()
