# league_iq/routers/trends.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .. import schemas
from ..config import SEASON_GAMEWEEKS, TREND_WINDOW_DEFAULT
from ..db import get_db
from ..logic.trends import compute_trend
from ..services.adapter import SnapshotCache
from .standings import get_adapter, require_league, resolve_gameweeks

router = APIRouter(prefix="/trends", tags=["trends"])


@router.get("/{league_id}", response_model=schemas.TrendOut)
def stats_trend(
    league_id: int,
    end_gw: int | None = None,
    window: int = Query(TREND_WINDOW_DEFAULT, ge=1, le=SEASON_GAMEWEEKS),
    db: Session = Depends(get_db),
    adapter: SnapshotCache = Depends(get_adapter),
):
    """
    Record-holder series for the dashboard stat cards over the trailing window
    ending at end_gw (defaults to the current gameweek).

    Shape:
    {
      league_id, from_gw, to_gw, window,
      series: {
        most_points, fewest_points, most_bench, fewest_bench, most_transfers,
        most_influence, least_influence, best_captain_call, worst_captain_call
      }  # each {points: [{gw, value, entry_id, team_name, manager_name}], average}
    }
    """
    require_league(db, league_id)
    target, _ = resolve_gameweeks(db, end_gw, None)
    return compute_trend(adapter, league_id, target, window)
