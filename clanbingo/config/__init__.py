"""Application configuration.

Single source of truth for all configuration values.
Loads from environment variables with .env file support.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# =============================================================================
# VERSION - Read from pyproject.toml (single source of truth)
# =============================================================================


def _get_version() -> str:
    """Read version - prefer pyproject.toml (source of truth), fall back to installed metadata."""
    try:
        import tomllib

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f)
                return data.get("project", {}).get("version", "0.0.0")
    except (OSError, KeyError, ValueError):
        pass

    # Installed without source (pip install, no checkout)
    try:
        from importlib.metadata import PackageNotFoundError, version

        try:
            return version("clanbingo")
        except PackageNotFoundError:
            pass
    except ImportError:
        pass

    return "0.0.0"


VERSION = _get_version()

# Load .env file from project root
_PROJECT_ROOT = Path(__file__).parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"
load_dotenv(_ENV_FILE)


def _env_int(name: str, default: int) -> int:
    """Read an integer env var, ignoring garbage."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class Config:
    """Application configuration singleton.

    All configuration values should be accessed through this class.
    Values are loaded from environment variables with sensible defaults.
    """

    # Database
    DATABASE_PATH: str = os.getenv(
        "BINGO_DB_PATH",
        str(_PROJECT_ROOT / "data" / "clanbingo.db"),
    )

    # Clan activity feed (the stats tracker's own API)
    ACTIVITY_API_BASE_URL: str = os.getenv("ACTIVITY_API_BASE_URL", "http://localhost:3001")

    # RuneMetrics profile API (guest activity)
    RUNEMETRICS_BASE_URL: str = os.getenv(
        "RUNEMETRICS_BASE_URL",
        "https://apps.runescape.com/runemetrics",
    )

    # HTTP behaviour for every external fetch
    HTTP_TIMEOUT: float = _env_float("HTTP_TIMEOUT", 15.0)
    HTTP_RETRY_COUNT: int = _env_int("HTTP_RETRY_COUNT", 2)
    HTTP_RETRY_DELAY: float = _env_float("HTTP_RETRY_DELAY", 1.0)
    USER_AGENT: str = os.getenv("USER_AGENT", "Bingo Activity Processor/1.0")

    # Activity fetching
    CLAN_ACTIVITY_LIMIT: int = _env_int("CLAN_ACTIVITY_LIMIT", 500)
    GUEST_ACTIVITY_COUNT: int = _env_int("GUEST_ACTIVITY_COUNT", 50)
    GUEST_LOOKBACK_HOURS: int = _env_int("GUEST_LOOKBACK_HOURS", 24)
    GUEST_FETCH_WORKERS: int = _env_int("GUEST_FETCH_WORKERS", 4)

    # Scheduler - every minute by default
    PROCESS_CRON: str = os.getenv("PROCESS_CRON", "* * * * *")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", str(_PROJECT_ROOT / "logs"))
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "text")

    @classmethod
    def reload(cls) -> None:
        """Reload configuration from environment.

        Useful for testing or runtime config changes.
        """
        load_dotenv(_ENV_FILE, override=True)
        cls.DATABASE_PATH = os.getenv("BINGO_DB_PATH", str(_PROJECT_ROOT / "data" / "clanbingo.db"))
        cls.ACTIVITY_API_BASE_URL = os.getenv("ACTIVITY_API_BASE_URL", "http://localhost:3001")
        cls.RUNEMETRICS_BASE_URL = os.getenv(
            "RUNEMETRICS_BASE_URL", "https://apps.runescape.com/runemetrics"
        )
        cls.HTTP_TIMEOUT = _env_float("HTTP_TIMEOUT", 15.0)
        cls.HTTP_RETRY_COUNT = _env_int("HTTP_RETRY_COUNT", 2)
        cls.HTTP_RETRY_DELAY = _env_float("HTTP_RETRY_DELAY", 1.0)
        cls.USER_AGENT = os.getenv("USER_AGENT", "Bingo Activity Processor/1.0")
        cls.CLAN_ACTIVITY_LIMIT = _env_int("CLAN_ACTIVITY_LIMIT", 500)
        cls.GUEST_ACTIVITY_COUNT = _env_int("GUEST_ACTIVITY_COUNT", 50)
        cls.GUEST_LOOKBACK_HOURS = _env_int("GUEST_LOOKBACK_HOURS", 24)
        cls.GUEST_FETCH_WORKERS = _env_int("GUEST_FETCH_WORKERS", 4)
        cls.PROCESS_CRON = os.getenv("PROCESS_CRON", "* * * * *")
        cls.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        cls.LOG_DIR = os.getenv("LOG_DIR", str(_PROJECT_ROOT / "logs"))
        cls.LOG_FORMAT = os.getenv("LOG_FORMAT", "text")


def get_database_path() -> str:
    """Get the configured SQLite database path."""
    return Config.DATABASE_PATH


def get_http_timeout() -> float:
    """Timeout (seconds) applied to every external fetch."""
    return Config.HTTP_TIMEOUT


def get_process_cron() -> str:
    """Cron expression for the processing schedule."""
    return Config.PROCESS_CRON
