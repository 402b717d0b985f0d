"""
Runtime settings for the reservation calendar layout service.
Values come from the environment (or a local .env file).
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Calendar days are interpreted in this timezone before being pinned to CANONICAL_HOUR
CALENDAR_TIMEZONE = os.getenv("CALENDAR_TIMEZONE", "UTC")
CANONICAL_HOUR = int(os.getenv("CANONICAL_HOUR", "12"))

# Two bookings whose gap is at most this many days are kept on one lane when possible
ADJACENCY_MAX_GAP_DAYS = int(os.getenv("ADJACENCY_MAX_GAP_DAYS", "3"))

ROLLING_DAYS = int(os.getenv("ROLLING_DAYS", "15"))

# Vertical geometry (pixels)
LANE_HEIGHT = int(os.getenv("LANE_HEIGHT", "24"))
LANE_GAP = int(os.getenv("LANE_GAP", "2"))
CELL_MIN_HEIGHT = int(os.getenv("CELL_MIN_HEIGHT", "120"))
CELL_BASE_HEIGHT = int(os.getenv("CELL_BASE_HEIGHT", "80"))
CELL_LANE_HEIGHT = int(os.getenv("CELL_LANE_HEIGHT", "14"))

RELATIONSHIP_CACHE_TTL_SECONDS = int(os.getenv("RELATIONSHIP_CACHE_TTL_SECONDS", "300"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
