# csvedit/config.py
"""
Settings for the CSV editor.

Values come from the environment; a local .env file is loaded first so
secrets and paths can live next to the project instead of the shell profile.
"""
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_ORIGINS = [
    "http://localhost",
    "http://localhost:8501",
    "http://127.0.0.1",
    "http://127.0.0.1:8501",
]

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger("csvedit")


def _env(key: str, default: str = "") -> str:
    return os.getenv(key, default)


def _env_int(key: str, default: int) -> int:
    val = os.getenv(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _env_list(key: str, default: List[str]) -> List[str]:
    val = os.getenv(key)
    if not val:
        return list(default)
    return [item.strip() for item in val.split(",") if item.strip()]


@dataclass
class Settings:
    upload_dir: Path = field(default_factory=lambda: Path(_env("CSV_UPLOAD_DIR", "uploads")))
    archive_dirname: str = field(default_factory=lambda: _env("CSV_ARCHIVE_DIR", "archive"))
    default_separator: str = field(default_factory=lambda: _env("CSV_DEFAULT_SEPARATOR", ","))
    cors_origins: List[str] = field(default_factory=lambda: _env_list("CSV_CORS_ORIGINS", DEFAULT_ORIGINS))
    host: str = field(default_factory=lambda: _env("CSV_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: _env_int("PORT", 5005))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO").upper())
    api_base: str = field(default_factory=lambda: _env("CSV_API_BASE", "http://127.0.0.1:5005/api"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


def setup_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the package logger (idempotent)."""
    logger.setLevel(getattr(logging, level, logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
