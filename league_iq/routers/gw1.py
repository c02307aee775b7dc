# league_iq/routers/gw1.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .. import schemas
from ..db import get_db
from ..logic.lineups import compute_gw1_table
from ..services.adapter import SnapshotCache
from .standings import get_adapter, require_league, resolve_gameweeks

router = APIRouter(prefix="/gw1-table", tags=["gw1"])


@router.get("/{league_id}", response_model=list[schemas.GW1StandingRow])
def gw1_table(
    league_id: int,
    gw: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    adapter: SnapshotCache = Depends(get_adapter),
):
    """Single-gameweek table with starting eleven and bench per manager."""
    require_league(db, league_id)
    target, _ = resolve_gameweeks(db, gw, None)
    return compute_gw1_table(adapter, league_id, target)
