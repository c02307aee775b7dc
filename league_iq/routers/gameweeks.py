# league_iq/routers/gameweeks.py
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db import get_db
from ..services.gameweeks import current_gameweek

router = APIRouter(prefix="/gameweeks", tags=["gameweeks"])


@router.post("/", response_model=list[schemas.GameweekOut])
def upsert_gameweeks(items: list[schemas.GameweekIn], db: Session = Depends(get_db)):
    """
    Upsert gameweek states. Flagging one gameweek current clears the flag on
    every other gameweek.
    """
    if any(it.is_current for it in items):
        db.query(models.Gameweek).filter(models.Gameweek.is_current.is_(True)).update(
            {models.Gameweek.is_current: False}
        )

    rows: list[models.Gameweek] = []
    for it in items:
        row = db.get(models.Gameweek, it.id)
        if not row:
            row = models.Gameweek(id=it.id)
            db.add(row)
        row.is_current = it.is_current
        row.is_finished = it.is_finished
        row.updated_at = datetime.utcnow()
        rows.append(row)
    db.commit()
    return [schemas.GameweekOut.model_validate(r) for r in sorted(rows, key=lambda r: r.id)]


@router.get("/current")
def get_current_gameweek(db: Session = Depends(get_db)):
    """Current gameweek from the cache (null before any data is cached)."""
    return {"ok": True, "current_gw": current_gameweek(db)}
