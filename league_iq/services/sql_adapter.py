# league_iq/services/sql_adapter.py
from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from ..errors import AdapterUnavailable
from ..schemas import (
    ChipType,
    EntrySnapshot,
    PicksSnapshot,
    PlayerLine,
    PlayerRef,
    StandingsSnapshot,
    TransferPair,
    TransfersSnapshot,
)
from ..utils.num import to_int

logger = logging.getLogger(__name__)

STARTING_POSITIONS = 11


def _sole_flagged(picks: list[models.EntryPick], attr: str) -> int | None:
    """Player id of the single pick carrying `attr`; None when missing or ambiguous."""
    flagged = [p.player_id for p in picks if getattr(p, attr)]
    if len(flagged) == 1:
        return flagged[0]
    if len(flagged) > 1:
        logger.debug("ambiguous %s flag on picks %s", attr, flagged)
    return None


def _parse_chip(raw: str | None) -> ChipType | None:
    if not raw:
        return None
    try:
        return ChipType(raw.strip().lower())
    except ValueError:
        # Unknown upstream chip names (e.g. new season chips) carry no scoring rule here
        logger.debug("unknown chip %r treated as no chip", raw)
        return None


class SqlRawDataAdapter:
    """
    Raw data adapter backed by the snapshot cache tables.
    Any database failure surfaces as AdapterUnavailable.
    """

    def __init__(self, db: Session):
        self.db = db

    def _entry_row(self, league_id: int, gw: int, entry_id: int) -> models.EntryGameweek | None:
        return (
            self.db.query(models.EntryGameweek)
            .filter(
                models.EntryGameweek.league_id == league_id,
                models.EntryGameweek.gw == gw,
                models.EntryGameweek.entry_id == entry_id,
            )
            .first()
        )

    def get_standings_snapshot(self, league_id: int, gw: int) -> StandingsSnapshot:
        try:
            rows = (
                self.db.query(models.EntryGameweek)
                .filter(models.EntryGameweek.league_id == league_id, models.EntryGameweek.gw == gw)
                .order_by(models.EntryGameweek.feed_order.asc(), models.EntryGameweek.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise AdapterUnavailable("standings snapshot unavailable", league_id=league_id, gw=gw) from exc

        return StandingsSnapshot(
            entries=[
                EntrySnapshot(
                    entry_id=r.entry_id,
                    team_name=r.team_name,
                    manager_name=r.manager_name,
                    gw_points=to_int(r.gw_points),
                    total_points=to_int(r.total_points),
                    bench_points=to_int(r.bench_points),
                    transfer_count=to_int(r.transfer_count),
                )
                for r in rows
            ]
        )

    def get_picks(self, league_id: int, gw: int, entry_id: int) -> PicksSnapshot | None:
        try:
            row = self._entry_row(league_id, gw, entry_id)
            picks = list(row.picks) if row else []
        except SQLAlchemyError as exc:
            raise AdapterUnavailable("picks unavailable", league_id=league_id, gw=gw) from exc

        if not picks:
            return None

        def line(p: models.EntryPick) -> PlayerLine:
            return PlayerLine(
                player_id=p.player_id,
                name=p.player_name,
                points=to_int(p.points),
                multiplier=to_int(p.multiplier),
                position=p.position,
                is_captain=bool(p.is_captain),
                is_vice_captain=bool(p.is_vice_captain),
            )

        return PicksSnapshot(
            starters=[line(p) for p in picks if p.position <= STARTING_POSITIONS],
            bench=[line(p) for p in picks if p.position > STARTING_POSITIONS],
            captain_id=_sole_flagged(picks, "is_captain"),
            vice_captain_id=_sole_flagged(picks, "is_vice_captain"),
        )

    def get_transfers(self, league_id: int, gw: int, entry_id: int) -> TransfersSnapshot:
        try:
            row = self._entry_row(league_id, gw, entry_id)
            transfers = list(row.transfers) if row else []
        except SQLAlchemyError as exc:
            raise AdapterUnavailable("transfers unavailable", league_id=league_id, gw=gw) from exc

        if row is None:
            return TransfersSnapshot()

        return TransfersSnapshot(
            transfers=[
                TransferPair(
                    player_in=PlayerRef(player_id=t.player_in_id, name=t.player_in_name),
                    player_out=PlayerRef(player_id=t.player_out_id, name=t.player_out_name),
                )
                for t in transfers
            ],
            chip=_parse_chip(row.chip),
            transfer_cost=to_int(row.transfer_cost),
        )

    def get_player_points(self, gw: int, player_ids: Iterable[int]) -> dict[int, int]:
        ids = list(set(player_ids))
        if not ids:
            return {}
        try:
            rows = (
                self.db.query(models.PlayerGameweekPoints)
                .filter(
                    models.PlayerGameweekPoints.gw == gw,
                    models.PlayerGameweekPoints.player_id.in_(ids),
                )
                .all()
            )
        except SQLAlchemyError as exc:
            raise AdapterUnavailable("player points unavailable", gw=gw) from exc
        return {r.player_id: to_int(r.points) for r in rows}

    def first_gameweek(self, league_id: int) -> int | None:
        try:
            row = (
                self.db.query(func.min(models.EntryGameweek.gw))
                .filter(models.EntryGameweek.league_id == league_id)
                .first()
            )
        except SQLAlchemyError as exc:
            raise AdapterUnavailable("league history unavailable", league_id=league_id) from exc
        return row[0] if row and row[0] is not None else None
