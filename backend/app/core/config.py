from functools import lru_cache
import json
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_list_value(value: str) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        raw = value.strip()
        if raw == "":
            return []
        try:
            parsed = json.loads(raw)
            if isinstance(parsed, list):
                return [str(item).strip() for item in parsed if str(item).strip()]
        except json.JSONDecodeError:
            pass
        return [item.strip() for item in raw.split(",") if item.strip()]
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    return []


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        validate_by_name=True,
        populate_by_name=True,
    )
    database_url: str = "sqlite:///./posts.db"

    docs_enabled: bool = Field(default=True)
    openapi_enabled: bool = Field(default=True)
    expose_error_details: bool = Field(
        default=False,
        validation_alias=AliasChoices("EXPOSE_ERROR_DETAILS", "DEBUG_ERRORS"),
    )
    security_headers_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices("SECURITY_HEADERS_ENABLED", "SECURE_HEADERS_ENABLED"),
    )

    cors_allow_origins_raw: str = Field(
        default="*",
        validation_alias=AliasChoices("CORS_ALLOW_ORIGINS"),
    )
    cors_allow_methods: list[str] = Field(default_factory=lambda: [
        "GET",
        "POST",
        "PUT",
        "DELETE",
        "OPTIONS",
    ])
    cors_allow_headers: list[str] = Field(default_factory=lambda: [
        "Content-Type",
        "Authorization",
        "X-API-Key",
    ])

    enable_analysis_fallback: bool = Field(
        default=True,
        validation_alias=AliasChoices("ENABLE_ANALYSIS_FALLBACK"),
    )
    analysis_max_input_chars: int = Field(
        default=50_000,
        ge=1,
        validation_alias=AliasChoices("ANALYSIS_MAX_INPUT_CHARS"),
    )
    analysis_max_keywords: int = Field(
        default=10,
        ge=0,
        validation_alias=AliasChoices("ANALYSIS_MAX_KEYWORDS"),
    )

    posts_page_size_default: int = Field(
        default=10,
        ge=1,
        validation_alias=AliasChoices("POSTS_PAGE_SIZE_DEFAULT"),
    )
    posts_page_size_max: int = Field(
        default=100,
        ge=1,
        validation_alias=AliasChoices("POSTS_PAGE_SIZE_MAX"),
    )

    jsonplaceholder_url: str = "https://jsonplaceholder.typicode.com"
    sync_timeout_seconds: float = 15.0

    @field_validator("cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            if value.strip() == "":
                return []
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @property
    def cors_allow_origins(self) -> list[str]:
        return _parse_list_value(self.cors_allow_origins_raw)


@lru_cache
def get_settings() -> Settings:
    return Settings()
