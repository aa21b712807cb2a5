from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    GOVEE_API_URL: str = "https://developer-api.govee.com"
    GOVEE_API_KEY: str
    GOVEE_REQUEST_TIMEOUT: float = 15.0
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

settings = Settings()
