# league_iq/logic/decisions.py
from __future__ import annotations

import logging
from typing import Iterable

from ..schemas import (
    ActivityImpactRow,
    CaptainChange,
    ChipRow,
    ChipType,
    ChipUsage,
    DecisionBreakdown,
    DecisionImpactRecord,
    EntrySnapshot,
    PicksSnapshot,
    PlayerLine,
    TransferImpact,
    TransferPair,
    TransferRow,
)
from ..services.adapter import RawDataAdapter, SnapshotCache
from ..services.gameweeks import gameweek_range, previous_gameweek
from .standings import enrich_standings, unique_entries

logger = logging.getLogger(__name__)

TRIPLE_CAPTAIN_MULTIPLIER = 3
CAPTAIN_MULTIPLIER = 2


def _cached(adapter: RawDataAdapter) -> SnapshotCache:
    return adapter if isinstance(adapter, SnapshotCache) else SnapshotCache(adapter)


# --- Transfers -------------------------------------------------------------------


def transfer_impacts(transfers: Iterable[TransferPair], points: dict[int, int]) -> list[TransferImpact]:
    """
    impact = points(player in) - points(player out), both in the same gameweek.
    Players without a known score count as 0.
    """
    out: list[TransferImpact] = []
    for t in transfers:
        pin = points.get(t.player_in.player_id, 0)
        pout = points.get(t.player_out.player_id, 0)
        out.append(
            TransferImpact(
                player_in_name=t.player_in.name,
                player_out_name=t.player_out.name,
                player_in_points=pin,
                player_out_points=pout,
                impact=pin - pout,
            )
        )
    return out


def transfer_hit_cost(transfer_cost: int, chip: ChipType | None) -> int:
    """Points deducted for transfers as a non-positive number; Free Hit transfers cost nothing."""
    if chip == ChipType.FREE_HIT:
        return 0
    return -transfer_cost


def transfer_impact(
    impacts: Iterable[TransferImpact], transfer_cost: int, chip: ChipType | None
) -> tuple[int, int, int]:
    """(gross, hit_cost, net). A manager who made no transfers scores (0, 0, 0)."""
    impacts = list(impacts)
    if not impacts:
        return 0, 0, 0
    gross = sum(t.impact for t in impacts)
    hit = transfer_hit_cost(transfer_cost, chip)
    return gross, hit, gross + hit


# --- Chips -----------------------------------------------------------------------


def armband_line(picks: PicksSnapshot) -> PlayerLine | None:
    """
    The pick that carried the Triple Captain armband: the one scored at 3x
    (the vice when the captain did not play), else the flagged captain.
    """
    for p in (*picks.starters, *picks.bench):
        if p.multiplier == TRIPLE_CAPTAIN_MULTIPLIER:
            return p
    return picks.find(picks.captain_id)


def chip_impact(chip: ChipType | None, picks: PicksSnapshot | None) -> int:
    """
    bboost: bench points that counted because of the chip.
    3xc: the third captain multiple, i.e. the tripled captain score divided by 3.
    Wildcard and Free Hit change the squad, not the score: 0.
    """
    if picks is None or chip is None:
        return 0
    if chip == ChipType.BENCH_BOOST:
        return sum(p.points for p in picks.bench)
    if chip == ChipType.TRIPLE_CAPTAIN:
        armband = armband_line(picks)
        if armband is None:
            return 0
        tripled = armband.points * TRIPLE_CAPTAIN_MULTIPLIER
        return tripled // TRIPLE_CAPTAIN_MULTIPLIER
    return 0


# --- Captaincy -------------------------------------------------------------------


def resolve_captain_change(
    previous: PicksSnapshot | None,
    current: PicksSnapshot | None,
    points: dict[int, int],
) -> CaptainChange:
    """
    Compare last gameweek's captain with this gameweek's. Both captains are
    scored with this gameweek's points. Missing or ambiguous captain data is
    reported as "no change".
    """
    cur_line = current.find(current.captain_id) if current else None
    base = CaptainChange(
        current_captain=cur_line.name if cur_line else None,
        current_captain_points=cur_line.points if cur_line else None,
    )
    if previous is None or current is None:
        return base
    if previous.captain_id is None or cur_line is None:
        logger.debug("captain missing on one side of the transition; treating as unchanged")
        return base

    prev_id = previous.captain_id
    prev_line = previous.find(prev_id)
    still_in_squad = prev_id in current.squad_ids()
    prev_now = current.find(prev_id)
    prev_points = prev_now.points if prev_now is not None else points.get(prev_id)

    return base.model_copy(
        update={
            "previous_captain": prev_line.name if prev_line else None,
            "previous_captain_points": prev_points,
            "changed": prev_id != cur_line.player_id,
            "previous_captain_still_in_squad": still_in_squad,
        }
    )


def captain_impact(change: CaptainChange) -> int:
    """
    Value of switching the armband: 2 x (new captain - old captain).
    Unchanged captaincy scores 0 whatever the outcome; a departed old captain
    scores 0 because the transfer already accounts for him.
    """
    if not change.changed or not change.previous_captain_still_in_squad:
        return 0
    if change.current_captain_points is None or change.previous_captain_points is None:
        return 0
    return CAPTAIN_MULTIPLIER * (change.current_captain_points - change.previous_captain_points)


# --- Per-gameweek scoring ----------------------------------------------------------


def _points_lookup(
    adapter: RawDataAdapter, gw: int, picks: PicksSnapshot | None, player_ids: Iterable[int]
) -> dict[int, int]:
    known: dict[int, int] = {}
    if picks is not None:
        for p in (*picks.starters, *picks.bench):
            known[p.player_id] = p.points
    missing = {pid for pid in player_ids if pid not in known}
    if missing:
        known.update(adapter.get_player_points(gw, missing))
    return known


def score_entry(adapter: RawDataAdapter, league_id: int, gw: int, entry_id: int) -> DecisionBreakdown:
    snapshot = adapter.get_transfers(league_id, gw, entry_id)
    picks = adapter.get_picks(league_id, gw, entry_id)
    prev_gw = previous_gameweek(gw)
    prev_picks = adapter.get_picks(league_id, prev_gw, entry_id) if prev_gw is not None else None

    wanted = [t.player_in.player_id for t in snapshot.transfers]
    wanted += [t.player_out.player_id for t in snapshot.transfers]
    if prev_picks is not None and prev_picks.captain_id is not None:
        wanted.append(prev_picks.captain_id)
    points = _points_lookup(adapter, gw, picks, wanted)

    impacts = transfer_impacts(snapshot.transfers, points)
    gross, hit, net = transfer_impact(impacts, snapshot.transfer_cost, snapshot.chip)
    chip_pts = chip_impact(snapshot.chip, picks)
    change = resolve_captain_change(prev_picks, picks, points)
    cap_pts = captain_impact(change)

    chip_captain = None
    if snapshot.chip == ChipType.TRIPLE_CAPTAIN and picks is not None:
        line = armband_line(picks)
        chip_captain = line.name if line else None

    return DecisionBreakdown(
        entry_id=entry_id,
        transfers=impacts,
        chip=ChipUsage(chip=snapshot.chip, extra_points=chip_pts),
        chip_captain_name=chip_captain,
        captain=change,
        impact=DecisionImpactRecord(
            transfer_impact_gross=gross,
            transfer_hit_cost=hit,
            transfer_impact_net=net,
            chip_impact=chip_pts,
            captain_impact=cap_pts,
            gw_decision_score=net + chip_pts + cap_pts,
        ),
    )


def score_gameweek(
    adapter: RawDataAdapter,
    league_id: int,
    gw: int,
    entries: Iterable[EntrySnapshot] | None = None,
) -> dict[int, DecisionBreakdown]:
    """Decision breakdown for every manager in the league's snapshot for `gw`."""
    if entries is None:
        entries = adapter.get_standings_snapshot(league_id, gw).entries
    return {e.entry_id: score_entry(adapter, league_id, gw, e.entry_id) for e in unique_entries(entries)}


def influence_totals(scores_by_gw: Iterable[dict[int, int]]) -> dict[int, int]:
    """
    Fold ordered per-gameweek decision scores into running totals per entry.
    A gameweek without a score for an entry adds nothing.
    """
    totals: dict[int, int] = {}
    for scores in scores_by_gw:
        for entry_id, score in scores.items():
            totals[entry_id] = totals.get(entry_id, 0) + score
    return totals


def decision_history(adapter: RawDataAdapter, league_id: int, gw: int) -> list[dict[int, int]]:
    """gw_decision_score per entry for each gameweek from the first tracked one through `gw`."""
    first = adapter.first_gameweek(league_id)
    if first is None or first > gw:
        first = gw
    return [
        {eid: b.impact.gw_decision_score for eid, b in score_gameweek(adapter, league_id, g).items()}
        for g in gameweek_range(first, gw)
    ]


# --- Public operations -------------------------------------------------------------


def compute_activity_impact(
    adapter: RawDataAdapter,
    league_id: int,
    gw: int,
    current_gw: int | None = None,
) -> list[ActivityImpactRow]:
    """
    ManagerIQ rows for one gameweek, ordered by league rank, each carrying the
    running influence total recomputed from the league's first tracked gameweek.
    """
    adapter = _cached(adapter)
    standings = enrich_standings(adapter, league_id, gw, current_gw)
    if not standings:
        return []

    breakdowns = score_gameweek(adapter, league_id, gw)
    running = influence_totals(decision_history(adapter, league_id, gw))

    rows: list[ActivityImpactRow] = []
    for rec in standings:
        b = breakdowns[rec.entry_id]
        rows.append(
            ActivityImpactRow(
                **b.impact.model_dump(exclude={"running_influence_total"}),
                running_influence_total=running.get(rec.entry_id, b.impact.gw_decision_score),
                entry_id=rec.entry_id,
                rank=rec.rank,
                movement=rec.movement,
                team_name=rec.team_name,
                manager_name=rec.manager_name,
                chip=b.chip.chip,
                chip_captain_name=b.chip_captain_name,
                transfers=b.transfers,
                previous_captain_name=b.captain.previous_captain,
                previous_captain_points=b.captain.previous_captain_points,
                current_captain_name=b.captain.current_captain,
                current_captain_points=b.captain.current_captain_points,
            )
        )
    return rows


def list_chips(adapter: RawDataAdapter, league_id: int, gw: int) -> list[ChipRow]:
    """Chip played by each manager in `gw` (None when no chip), in standings order."""
    adapter = _cached(adapter)
    rows: list[ChipRow] = []
    for rec in enrich_standings(adapter, league_id, gw):
        snap = adapter.get_transfers(league_id, gw, rec.entry_id)
        rows.append(
            ChipRow(
                entry_id=rec.entry_id,
                team_name=rec.team_name,
                manager_name=rec.manager_name,
                chip=snap.chip,
            )
        )
    return rows


def list_transfers(adapter: RawDataAdapter, league_id: int, gw: int) -> list[TransferRow]:
    """Transfers made by each manager in `gw` with their point impact, in standings order."""
    adapter = _cached(adapter)
    rows: list[TransferRow] = []
    for rec in enrich_standings(adapter, league_id, gw):
        snap = adapter.get_transfers(league_id, gw, rec.entry_id)
        ids = [t.player_in.player_id for t in snap.transfers] + [t.player_out.player_id for t in snap.transfers]
        points = _points_lookup(adapter, gw, adapter.get_picks(league_id, gw, rec.entry_id), ids)
        rows.append(
            TransferRow(
                entry_id=rec.entry_id,
                team_name=rec.team_name,
                manager_name=rec.manager_name,
                transfers=transfer_impacts(snap.transfers, points),
            )
        )
    return rows
