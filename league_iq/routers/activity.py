# league_iq/routers/activity.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas
from ..db import get_db
from ..logic.decisions import compute_activity_impact, list_chips, list_transfers
from ..services.adapter import SnapshotCache
from .standings import get_adapter, require_league, resolve_gameweeks

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("/{league_id}", response_model=list[schemas.ActivityImpactRow])
def activity_impact(
    league_id: int,
    gw: int | None = None,
    current_gw: int | None = None,
    db: Session = Depends(get_db),
    adapter: SnapshotCache = Depends(get_adapter),
):
    """
    ManagerIQ decision impact per manager for a gameweek:
    transfer/chip/captain impact, the combined gw_decision_score and the
    running_influence_total since the league's first tracked gameweek.
    """
    require_league(db, league_id)
    target, cur = resolve_gameweeks(db, gw, current_gw)
    return compute_activity_impact(adapter, league_id, target, cur)


@router.get("/{league_id}/chips", response_model=list[schemas.ChipRow])
def chips(
    league_id: int,
    gw: int | None = None,
    db: Session = Depends(get_db),
    adapter: SnapshotCache = Depends(get_adapter),
):
    require_league(db, league_id)
    target, _ = resolve_gameweeks(db, gw, None)
    return list_chips(adapter, league_id, target)


@router.get("/{league_id}/transfers", response_model=list[schemas.TransferRow])
def transfers(
    league_id: int,
    gw: int | None = None,
    db: Session = Depends(get_db),
    adapter: SnapshotCache = Depends(get_adapter),
):
    require_league(db, league_id)
    target, _ = resolve_gameweeks(db, gw, None)
    return list_transfers(adapter, league_id, target)
