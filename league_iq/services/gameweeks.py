# league_iq/services/gameweeks.py
from __future__ import annotations

from typing import List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models
from ..config import SEASON_GAMEWEEKS

__all__ = [
    "current_gameweek",
    "trend_window",
    "gameweek_range",
    "previous_gameweek",
]

# ---------------------------------------------------------------------------
# Gameweek utilities
# - Gameweeks are numbered 1..SEASON_GAMEWEEKS
# - Windows are inclusive on both ends
# ---------------------------------------------------------------------------


def current_gameweek(db: Session) -> int | None:
    """
    The gameweek flagged current in the cache; falls back to the latest GW
    with any cached league data. None when nothing is cached yet.
    """
    row = (
        db.query(models.Gameweek.id)
        .filter(models.Gameweek.is_current.is_(True))
        .order_by(models.Gameweek.id.desc())
        .first()
    )
    if row:
        return row[0]
    latest = db.query(func.max(models.EntryGameweek.gw)).first()
    return latest[0] if latest and latest[0] is not None else None


def previous_gameweek(gw: int) -> int | None:
    """GW-1, or None for the opening gameweek."""
    return gw - 1 if gw > 1 else None


def trend_window(end_gw: int, window: int, first_gw: int | None = None) -> Tuple[int, int]:
    """
    Inclusive (from_gw, to_gw) for a trailing window ending at end_gw.
    Truncates at GW1 and at the league's first tracked GW when known.
    """
    if window < 1:
        raise ValueError(f"Invalid window {window}. Expected >= 1.")
    window = min(window, SEASON_GAMEWEEKS)
    start = max(1, end_gw - window + 1)
    if first_gw is not None and first_gw <= end_gw:
        start = max(start, first_gw)
    return start, end_gw


def gameweek_range(from_gw: int, to_gw: int) -> List[int]:
    """
    Gameweeks from from_gw to to_gw inclusive.
    Example: gameweek_range(3, 5) -> [3, 4, 5]
    """
    return list(range(from_gw, to_gw + 1))
