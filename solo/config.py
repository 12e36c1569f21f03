from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SOLO_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Seed for the process-wide dice generator. None seeds from OS entropy.
    dice_seed: int | None = None

    # Level passed to logging.basicConfig by the command-line wrapper.
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


settings = Settings()
