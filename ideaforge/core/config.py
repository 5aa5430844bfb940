# config.py

"""Configuration for the IdeaForge backend.

All settings come from the environment (optionally via a .env file).
Every value has a fallback so the service boots with no configuration:
fixture provider, SQLite database, cache on.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Package root directory
PACKAGE_ROOT = Path(__file__).resolve().parent.parent


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid number for {name}: {raw!r}, using {default}")
        return default


def _async_database_url(url: str) -> str:
    """Rewrite sync driver URLs to their async equivalents."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return url


# --- DATABASE ---
DATABASE_URL = _async_database_url(
    os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./ideaforge.db")
)
DB_POOL_SIZE = _env_int("DB_POOL_SIZE", 10)
DB_MAX_OVERFLOW = _env_int("DB_MAX_OVERFLOW", 20)

# --- AI PIPELINE ---
AI_PROVIDER = os.getenv("AI_PROVIDER", "mock").strip().lower()
AI_CACHE_ENABLED = os.getenv("AI_CACHE_ENABLED", "true").strip().lower() != "false"
AI_CACHE_TTL_MS = _env_int("AI_CACHE_TTL_MS", 300_000)
AI_CACHE_MAX_ENTRIES = _env_int("AI_CACHE_MAX_ENTRIES", 256)
AI_JOB_TTL_MS = _env_int("AI_JOB_TTL_MS", 1_800_000)
AI_JOB_MAX_ENTRIES = _env_int("AI_JOB_MAX_ENTRIES", 1000)
AI_FIXTURES_DIR = Path(os.getenv("AI_FIXTURES_DIR", str(PACKAGE_ROOT / "ai" / "fixtures")))
AI_PROMPTS_DIR = Path(os.getenv("AI_PROMPTS_DIR", str(PACKAGE_ROOT / "ai" / "prompts")))

# --- OPENAI ---
OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4.1-mini")
OPENAI_BASE_URL: Optional[str] = os.getenv("OPENAI_BASE_URL")
OPENAI_TIMEOUT_S = _env_float("OPENAI_TIMEOUT_S", 120.0)

# --- API ---
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = _env_int("API_PORT", 8000)

# --- LOGGING ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")


class Settings:
    """Settings class for configuration."""

    def __init__(self):
        self.PACKAGE_ROOT = PACKAGE_ROOT
        # --- DATABASE ---
        self.DATABASE_URL = DATABASE_URL
        self.DB_POOL_SIZE = DB_POOL_SIZE
        self.DB_MAX_OVERFLOW = DB_MAX_OVERFLOW
        # --- AI PIPELINE ---
        self.AI_PROVIDER = AI_PROVIDER
        self.AI_CACHE_ENABLED = AI_CACHE_ENABLED
        self.AI_CACHE_TTL_MS = AI_CACHE_TTL_MS
        self.AI_CACHE_MAX_ENTRIES = AI_CACHE_MAX_ENTRIES
        self.AI_JOB_TTL_MS = AI_JOB_TTL_MS
        self.AI_JOB_MAX_ENTRIES = AI_JOB_MAX_ENTRIES
        self.AI_FIXTURES_DIR = AI_FIXTURES_DIR
        self.AI_PROMPTS_DIR = AI_PROMPTS_DIR
        # --- OPENAI ---
        self.OPENAI_API_KEY = OPENAI_API_KEY
        self.OPENAI_MODEL = OPENAI_MODEL
        self.OPENAI_BASE_URL = OPENAI_BASE_URL
        self.OPENAI_TIMEOUT_S = OPENAI_TIMEOUT_S
        # --- API ---
        self.API_HOST = API_HOST
        self.API_PORT = API_PORT
        # --- LOGGING ---
        self.LOG_LEVEL = LOG_LEVEL
        self.LOG_FORMAT = LOG_FORMAT

    @property
    def cache_ttl_seconds(self) -> float:
        return self.AI_CACHE_TTL_MS / 1000.0

    @property
    def job_ttl_seconds(self) -> float:
        return self.AI_JOB_TTL_MS / 1000.0


# Global settings instance
settings = Settings()
