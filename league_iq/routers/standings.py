# league_iq/routers/standings.py
from __future__ import annotations

from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db import get_db
from ..logic.standings import enrich_standings, gameweek_stats
from ..services.adapter import SnapshotCache
from ..services.gameweeks import current_gameweek
from ..services.sql_adapter import SqlRawDataAdapter

route = APIRouter(prefix="/standings", tags=["standings"])


# ---------- Helpers shared by the analytics routers ----------


def get_adapter(db: Session = Depends(get_db)) -> SnapshotCache:
    """Request-scoped adapter: SQL cache reads, memoized for the life of the request."""
    return SnapshotCache(SqlRawDataAdapter(db))


def require_league(db: Session, league_id: int) -> models.League:
    league = db.get(models.League, league_id)
    if not league:
        raise HTTPException(status_code=404, detail="League not found")
    return league


def resolve_gameweeks(db: Session, gw: Optional[int], current_gw: Optional[int]) -> Tuple[int, int]:
    """
    (target gw, current gw). Missing values default to the cached current
    gameweek; a target after the current gameweek is rejected.
    """
    cur = current_gw if current_gw is not None else current_gameweek(db)
    if cur is None:
        cur = gw if gw is not None else 1
    target = gw if gw is not None else cur
    if target < 1 or cur < 1:
        raise HTTPException(status_code=400, detail="Gameweeks start at 1")
    if target > cur:
        raise HTTPException(status_code=400, detail=f"Gameweek {target} is after the current gameweek {cur}")
    return target, cur


# ---------- Routes ----------


@route.get("/{league_id}", response_model=schemas.StandingsOut, operation_id="standings_get")
def get_standings(
    league_id: int,
    gw: Optional[int] = None,
    current_gw: Optional[int] = None,
    db: Session = Depends(get_db),
    adapter: SnapshotCache = Depends(get_adapter),
):
    """
    Standings for one gameweek with rank movement vs. the previous gameweek,
    plus the headline cards (most/fewest points, most bench, most transfers).
    An empty league returns an empty table and null stats.
    """
    require_league(db, league_id)
    target, cur = resolve_gameweeks(db, gw, current_gw)

    rows = enrich_standings(adapter, league_id, target, cur)
    return schemas.StandingsOut(
        league_id=league_id,
        gw=target,
        current_gw=cur,
        live=target == cur,
        standings=rows,
        stats=gameweek_stats(rows),
    )
