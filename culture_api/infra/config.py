from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GEOCODE_URL = "https://api-adresse.data.gouv.fr/search/"


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: str = Field(validation_alias="OPENAI_API_KEY")
    openai_api_base: Optional[str] = Field(
        default=None, validation_alias="OPENAI_API_BASE"
    )
    openai_model: str = Field(default="gpt-4o-mini", validation_alias="OPENAI_MODEL")
    crop_max_tokens: int = Field(default=400, validation_alias="CROP_MAX_TOKENS")
    climate_max_tokens: int = Field(
        default=600, validation_alias="CLIMATE_MAX_TOKENS"
    )
    geocode_url: str = Field(
        default=DEFAULT_GEOCODE_URL, validation_alias="GEOCODE_URL"
    )
    port: int = Field(default=80, validation_alias="PORT")
    log_path: Optional[str] = Field(default=None, validation_alias="LOG_PATH")

    @field_validator("openai_api_key", mode="after")
    @classmethod
    def require_api_key(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("OPENAI_API_KEY 未配置，无法调用 OpenAI API")
        return value.strip()


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig()
