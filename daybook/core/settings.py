from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from env vars and local env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = Field(default="local", alias="APP_ENV")
    log_level: str | None = Field(default=None, alias="LOG_LEVEL")

    ai_api_base_url: str = Field(default="https://api.siliconflow.cn/v1", alias="AI_API_BASE_URL")
    ai_api_key: str | None = Field(default=None, alias="AI_API_KEY")
    ai_model: str = Field(default="deepseek-ai/DeepSeek-R1-Distill-Qwen-1.5B", alias="AI_MODEL")
    ai_temperature: float = Field(default=0.3, alias="AI_TEMPERATURE")
    ai_max_tokens: int = Field(default=2048, alias="AI_MAX_TOKENS")
    ai_timeout_seconds: float = Field(default=60.0, alias="AI_TIMEOUT_SECONDS")
    ai_max_attempts: int = Field(default=5, ge=1, alias="AI_MAX_ATTEMPTS")
    ai_backoff_base_seconds: float = Field(default=1.0, alias="AI_BACKOFF_BASE_SECONDS")
    ai_backoff_max_seconds: float = Field(default=10.0, alias="AI_BACKOFF_MAX_SECONDS")
    ai_min_request_interval_seconds: float = Field(default=1.0, alias="AI_MIN_REQUEST_INTERVAL_SECONDS")

    @property
    def enable_swagger(self) -> bool:
        return self.app_env.lower() == "local"

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.app_env.lower() == "local" else "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
