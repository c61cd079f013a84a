from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # JSON export the CLI restores on start and rewrites after mutations
    ledger_file: Optional[Path] = Field(default=None, alias="LEDGER_FILE")

    seed_sample_data: bool = Field(default=False, alias="SEED_SAMPLE_DATA")

    export_indent: int = Field(default=2, ge=0, alias="EXPORT_INDENT")

    def validate_required(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"LOG_LEVEL {self.log_level!r} is not a logging level")


@lru_cache
def load_settings() -> Settings:
    settings = Settings()
    settings.validate_required()
    return settings
