"""
Configuration

Values come from the environment (or a .env file). The core modules never
read these; callers pass them in.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (ValueError, TypeError):
        return default


PHISHNET_API_KEY = os.getenv("PHISHNET_API_KEY")
PHISHNET_BASE_URL = os.getenv("PHISHNET_BASE_URL", "https://api.phish.net/v5")

CACHE_DIR = os.getenv("PHISHPICKS_CACHE_DIR", "data/cache")
API_CACHE_HOURS = _env_int("PHISHPICKS_API_CACHE_HOURS", 24)
INSIGHT_CACHE_HOURS = _env_int("PHISHPICKS_INSIGHT_CACHE_HOURS", 24)
REQUEST_TIMEOUT = _env_int("PHISHPICKS_REQUEST_TIMEOUT", 30)

# As of 2024 Phish has played roughly 3500 shows
ESTIMATED_TOTAL_SHOWS = _env_int("PHISHPICKS_ESTIMATED_TOTAL_SHOWS", 3500)

# Recent tour window: last few months, low bar for "frequent"
RECENT_WINDOW_MONTHS = _env_int("PHISHPICKS_RECENT_WINDOW_MONTHS", 3)
RECENT_OPENER_THRESHOLD = _env_int("PHISHPICKS_RECENT_OPENER_THRESHOLD", 2)
RECENT_CLOSER_THRESHOLD = _env_int("PHISHPICKS_RECENT_CLOSER_THRESHOLD", 2)

# Historical window: ten years before the target show
TOUR_WINDOW_YEARS = _env_int("PHISHPICKS_TOUR_WINDOW_YEARS", 10)
TOUR_OPENER_THRESHOLD = _env_int("PHISHPICKS_TOUR_OPENER_THRESHOLD", 5)
TOUR_CLOSER_THRESHOLD = _env_int("PHISHPICKS_TOUR_CLOSER_THRESHOLD", 5)
