from pathlib import Path

from pydantic import Field, field_validator
from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_DIR = Path(__file__).parent


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Settings(BaseSettings):
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Level applied to the 'doublespace' logger when the container initialises its resources.",
    )

    BLOCK_KEYWORD: str = Field(
        default="block",
        min_length=1,
        description=(
            "Keyword argument the installed proxy treats as the call's continuation. "
            "It is removed from the call's kwargs before argument matching and handed "
            "to scenarios configured with yields()."
        ),
    )

    STRICT_ARGUMENT_EXPECTATIONS: bool = Field(
        default=False,
        description=(
            "When True, declaring a second argument expectation (with_args, with_no_args, "
            "with_any_args) on the same scenario raises ConfigurationError. "
            "When False the last declaration wins."
        ),
    )

    VERIFY_ON_TEARDOWN: bool = Field(
        default=True,
        description="Whether the pytest plugin verifies every scenario before resetting the space.",
    )

    @field_validator("BLOCK_KEYWORD", mode="after")
    @classmethod
    def _validate_block_keyword(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"BLOCK_KEYWORD must be a valid identifier: {v!r}")
        return v

    model_config = SettingsConfigDict(
        env_prefix="DOUBLESPACE_",
        env_file=CONFIG_DIR.parent.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
