from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db import get_db

route = APIRouter(prefix="/leagues", tags=["leagues"])


@route.post("/", response_model=schemas.LeagueOut)
def create_league(body: schemas.LeagueCreate, db: Session = Depends(get_db)):
    """Register an FPL classic league in the cache under its upstream id."""
    existing = db.get(models.League, body.id)
    if existing:
        raise HTTPException(status_code=400, detail="League already exists")

    league = models.League(id=body.id, name=body.name.strip())
    db.add(league)
    db.commit()
    db.refresh(league)
    return schemas.LeagueOut.model_validate(league)


@route.get("/", response_model=list[schemas.LeagueOut])
def list_leagues(db: Session = Depends(get_db)):
    leagues = db.query(models.League).order_by(models.League.name.asc(), models.League.id.asc()).all()
    return [schemas.LeagueOut.model_validate(l) for l in leagues]


@route.get("/{league_id}", response_model=schemas.LeagueOut)
def get_league(league_id: int, db: Session = Depends(get_db)):
    league = db.get(models.League, league_id)
    if not league:
        raise HTTPException(status_code=404, detail="League not found")
    return schemas.LeagueOut.model_validate(league)
