"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - term_epoch + upper_week_parity fully determine upper/lower weeks

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Week-parity convention is configuration, never inferred from lesson data
      (ADR: the academic calendar differs per year and per faculty)
"""

from datetime import date, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from meedle.core.domain_types import Locale
from meedle.core.week_parity import TermCalendar


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://meedle:meedle@db:5432/meedle"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Academic calendar
    term_epoch: date = date(2025, 9, 1)
    upper_week_parity: int = Field(0, ge=0, le=1)

    @field_validator("term_epoch")
    @classmethod
    def check_term_epoch(cls, v: date) -> date:
        if v.weekday() != 0:
            raise ValueError("term_epoch must be a Monday")
        return v

    # Presentation
    display_timezone: str = "Europe/Kyiv"
    default_locale: Locale = Locale.UK

    @field_validator("display_timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        ZoneInfo(v)  # raises for unknown keys
        return v

    # API
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def term_calendar(self) -> TermCalendar:
        return TermCalendar(
            term_epoch=self.term_epoch,
            upper_week_parity=self.upper_week_parity,
        )

    def display_tz(self) -> tzinfo:
        return ZoneInfo(self.display_timezone)


@lru_cache
def get_settings() -> Settings:
    return Settings()
