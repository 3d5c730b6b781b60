"""
Game settings
"""
import os
from dotenv import load_dotenv

load_dotenv()


class GameSettings:
    """Game and host settings from environment variables"""

    # Innings defaults
    DEFAULT_TOTAL_OVERS: int = int(os.getenv("DEFAULT_TOTAL_OVERS", "2"))
    DEFAULT_MAX_WICKETS: int = int(os.getenv("DEFAULT_MAX_WICKETS", "3"))

    # Host pacing between deliveries
    FIRST_DELIVERY_DELAY_MS: int = int(os.getenv("FIRST_DELIVERY_DELAY_MS", "700"))
    NEXT_DELIVERY_DELAY_MS: int = int(os.getenv("NEXT_DELIVERY_DELAY_MS", "800"))

    # In-memory API sessions
    MAX_ACTIVE_INNINGS: int = int(os.getenv("MAX_ACTIVE_INNINGS", "100"))
    # Seconds without requests before an innings may be evicted to free a slot
    INNINGS_IDLE_TIMEOUT_S: int = int(os.getenv("INNINGS_IDLE_TIMEOUT_S", "1800"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Extra CORS origins (comma-separated)
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "")


settings = GameSettings()
