"""Engine configuration."""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load environment variables
load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Projection engine settings."""

    # Shrinkage: games needed before an observed per-game rate is fully trusted
    shrinkage_k: int = int(os.getenv("HOOPSWEEK_SHRINKAGE_K", "10"))

    # Sample size assumed when a player record carries no games-played figure
    default_games_played: int = int(os.getenv("HOOPSWEEK_DEFAULT_GAMES_PLAYED", "10"))

    # NBA schedule dates are Eastern; aware `as_of` timestamps are converted before taking the date
    schedule_timezone: str = os.getenv("HOOPSWEEK_SCHEDULE_TIMEZONE", "America/New_York")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()


def configure_logging(level: Optional[str] = None) -> int:
    """Configure root logging for scripts and host applications.

    Args:
        level: Level name (e.g. "DEBUG"). Defaults to ``settings.log_level``.

    Returns:
        The numeric level that was applied
    """
    level_name = (level or settings.log_level or "INFO").upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    return numeric_level
