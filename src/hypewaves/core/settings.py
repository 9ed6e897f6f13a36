"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod

Layout knobs mirror the pixel constants of the timeline canvas. Changing them
only affects geometry; grouping semantics stay the same.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `HYPEWAVES_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    data_path : str
        Initial dataset (waves + connections) loaded by the CLI and the API.
    timeline_height : float
        Pixel height that the fixed time span maps onto.
    group_threshold_days : int
        Largest gap between consecutive events that still shares a group.
    span_years : float
        Length of the time span drawn along one timeline.
    """

    environment: EnvName = Field(default="dev", alias="HYPEWAVES_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    data_path: str = Field(default="data/waves.json", alias="HYPEWAVES_DATA_PATH")

    timeline_height: float = Field(default=1600.0, gt=0, alias="HYPEWAVES_TIMELINE_HEIGHT")
    group_threshold_days: int = Field(default=90, ge=0, alias="HYPEWAVES_GROUP_THRESHOLD_DAYS")
    span_years: float = Field(default=7.8, gt=0, alias="HYPEWAVES_SPAN_YEARS")
    stagger_gap: float = Field(default=80.0, ge=0, alias="HYPEWAVES_STAGGER_GAP")
    group_spacing: float = Field(default=20.0, ge=0, alias="HYPEWAVES_GROUP_SPACING")
    card_width: float = Field(default=180.0, gt=0, alias="HYPEWAVES_CARD_WIDTH")
    card_height: float = Field(default=60.0, gt=0, alias="HYPEWAVES_CARD_HEIGHT")
    column_width: float = Field(default=320.0, gt=0, alias="HYPEWAVES_COLUMN_WIDTH")

    max_layout_passes: int = Field(default=8, ge=1, alias="HYPEWAVES_MAX_LAYOUT_PASSES")
    snapshot_dir: str | None = Field(default=None, alias="HYPEWAVES_SNAPSHOT_DIR")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("HYPEWAVES_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "hypewaves") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
