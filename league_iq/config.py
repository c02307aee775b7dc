# league_iq/config.py
from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Environment-driven settings. Read once at import; tests override via env
# before importing the app or by passing explicit arguments.
# ---------------------------------------------------------------------------

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./league_iq.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Stat-card sparklines on the dashboard show the last 8 gameweeks
TREND_WINDOW_DEFAULT = int(os.getenv("TREND_WINDOW_DEFAULT", "8"))

# Premier League season length
SEASON_GAMEWEEKS = int(os.getenv("SEASON_GAMEWEEKS", "38"))
