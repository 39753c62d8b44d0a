"""Application settings loaded from environment."""

from typing import Annotated, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_DEPARTMENTS: tuple[str, ...] = (
    "Unassigned",
    "Public Works",
    "Sanitation",
    "Transportation",
    "Parks & Recreation",
    "Water Dept.",
)


class Settings(BaseSettings):
    """Strongly typed settings for the CivicSync client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Backend
    api_base_url: str = Field(
        default="http://localhost:5000/api",
        alias="CIVICSYNC_API_BASE_URL",
    )
    api_token: Optional[str] = Field(default=None, alias="CIVICSYNC_API_TOKEN")
    api_timeout_seconds: float = Field(default=30, alias="CIVICSYNC_TIMEOUT_SECONDS")
    api_max_retries: int = Field(default=3, alias="CIVICSYNC_MAX_RETRIES")

    # Assignment board
    assign_timeout_seconds: float = Field(
        default=10, alias="CIVICSYNC_ASSIGN_TIMEOUT_SECONDS"
    )
    assign_max_workers: int = Field(default=4, alias="CIVICSYNC_MAX_WORKERS")
    departments: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_DEPARTMENTS),
        alias="CIVICSYNC_DEPARTMENTS",
    )

    # Description suggestions
    google_api_key: Optional[str] = Field(default=None, alias="GOOGLE_API_KEY")
    gemini_api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1",
        alias="GEMINI_API_BASE_URL",
    )
    gemini_model_id: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL_ID")
    gemini_timeout_seconds: float = Field(default=30, alias="GEMINI_TIMEOUT_SECONDS")

    # Runtime
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("departments", mode="before")
    @classmethod
    def _split_departments(cls, value: object) -> object:
        # Env values arrive as "A,B,C".
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    def reports_url(self, path: str = "") -> str:
        """Return an absolute URL under the reports resource."""
        base = self.api_base_url.rstrip("/")
        return f"{base}/reports{path}"
