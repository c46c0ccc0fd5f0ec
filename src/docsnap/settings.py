from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    DOCSNAP_ENV: str = "development"
    DOCSNAP_BUILD_VERSION: Optional[str] = None
    DOCSNAP_SELECTION_TOLERANCE: float = 0.01
    DOCSNAP_INDEX_CELL_SIZE: float = 96.0
    DOCSNAP_DEFAULT_LINE_SPACING: float = 1.2
    WEB_ORIGIN: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def _validate_geometry(self) -> "Settings":
        problems = [
            message
            for failed, message in (
                (self.DOCSNAP_SELECTION_TOLERANCE < 0, "DOCSNAP_SELECTION_TOLERANCE must be non-negative"),
                (self.DOCSNAP_INDEX_CELL_SIZE <= 0, "DOCSNAP_INDEX_CELL_SIZE must be positive"),
                (self.DOCSNAP_DEFAULT_LINE_SPACING <= 0, "DOCSNAP_DEFAULT_LINE_SPACING must be positive"),
            )
            if failed
        ]
        if problems:
            raise ValueError("; ".join(problems))
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
