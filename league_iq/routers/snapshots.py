# league_iq/routers/snapshots.py
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db import get_db

router = APIRouter(prefix="/snapshots", tags=["snapshots"])


# ---------- Helpers ----------


def _apply_entry(row: models.EntryGameweek, it: schemas.EntryGameweekIn, feed_order: int) -> None:
    row.team_name = it.team_name.strip()
    row.manager_name = it.manager_name.strip()
    row.gw_points = it.gw_points
    row.total_points = it.total_points
    row.bench_points = it.bench_points
    row.transfer_count = it.transfer_count if it.transfer_count is not None else len(it.transfers)
    row.transfer_cost = it.transfer_cost
    row.chip = it.chip.value if it.chip else None
    row.feed_order = feed_order
    row.updated_at = datetime.utcnow()


def _replace_children(db: Session, row: models.EntryGameweek, it: schemas.EntryGameweekIn) -> None:
    # flush the deletes first so re-inserted positions don't trip uq_pick_position
    row.picks.clear()
    row.transfers.clear()
    db.flush()

    for p in it.picks:
        row.picks.append(
            models.EntryPick(
                player_id=p.player_id,
                player_name=p.name,
                position=p.position,
                multiplier=p.multiplier,
                points=p.points,
                is_captain=p.is_captain,
                is_vice_captain=p.is_vice_captain,
            )
        )
    for t in it.transfers:
        row.transfers.append(
            models.EntryTransfer(
                player_in_id=t.player_in_id,
                player_in_name=t.player_in_name,
                player_out_id=t.player_out_id,
                player_out_name=t.player_out_name,
            )
        )


# ---------- Endpoints ----------


@router.post("/player-points/{gw}", response_model=schemas.UpsertResult)
def upsert_player_points(gw: int, items: list[schemas.PlayerPointsIn], db: Session = Depends(get_db)):
    """
    Upsert per-player gameweek scores (live or final).
    """
    if gw < 1:
        raise HTTPException(status_code=400, detail="Gameweeks start at 1")

    inserted = 0
    updated = 0
    for it in items:
        row = (
            db.query(models.PlayerGameweekPoints)
            .filter(models.PlayerGameweekPoints.gw == gw, models.PlayerGameweekPoints.player_id == it.player_id)
            .first()
        )
        if row:
            updated += 1
        else:
            row = models.PlayerGameweekPoints(gw=gw, player_id=it.player_id)
            db.add(row)
            inserted += 1
        row.player_name = it.name
        row.points = it.points
        row.updated_at = datetime.utcnow()
    db.commit()
    return schemas.UpsertResult(inserted=inserted, updated=updated)


@router.post("/{league_id}/{gw}", response_model=schemas.UpsertResult)
def upsert_snapshot(league_id: int, gw: int, body: schemas.SnapshotIn, db: Session = Depends(get_db)):
    """
    Upsert one gameweek of league data (entries with their picks and transfers)
    into the cache. Entries are matched by entry_id; their picks and transfers
    are replaced wholesale. Payload order is kept as the feed order.
    """
    league = db.get(models.League, league_id)
    if not league:
        raise HTTPException(status_code=404, detail="League not found")
    if gw < 1:
        raise HTTPException(status_code=400, detail="Gameweeks start at 1")

    inserted = 0
    updated = 0
    for order, it in enumerate(body.entries):
        row = (
            db.query(models.EntryGameweek)
            .filter(
                models.EntryGameweek.league_id == league.id,
                models.EntryGameweek.gw == gw,
                models.EntryGameweek.entry_id == it.entry_id,
            )
            .first()
        )
        if row:
            updated += 1
        else:
            row = models.EntryGameweek(league_id=league.id, gw=gw, entry_id=it.entry_id)
            db.add(row)
            inserted += 1
        _apply_entry(row, it, order)
        _replace_children(db, row, it)

    db.commit()
    return schemas.UpsertResult(inserted=inserted, updated=updated)
