# league_iq/logic/lineups.py
from __future__ import annotations

from ..schemas import GW1BenchLine, GW1PlayerLine, GW1StandingRow, PicksSnapshot
from ..services.adapter import RawDataAdapter, SnapshotCache
from .standings import enrich_standings


def _starter_lines(picks: PicksSnapshot) -> list[GW1PlayerLine]:
    lines: list[GW1PlayerLine] = []
    for p in picks.starters:
        lines.append(
            GW1PlayerLine(
                name=p.name,
                points=p.points,
                is_captain=p.is_captain,
                # captain flag wins if upstream sets both
                is_vice_captain=p.is_vice_captain and not p.is_captain,
            )
        )
    return lines


def compute_gw1_table(adapter: RawDataAdapter, league_id: int, gw: int = 1) -> list[GW1StandingRow]:
    """
    Standings for a single gameweek (ranked exactly like enrich_standings) with
    each manager's starting eleven and bench for the per-player tooltip.
    """
    adapter = adapter if isinstance(adapter, SnapshotCache) else SnapshotCache(adapter)

    rows: list[GW1StandingRow] = []
    for rec in enrich_standings(adapter, league_id, gw):
        picks = adapter.get_picks(league_id, gw, rec.entry_id)
        rows.append(
            GW1StandingRow(
                **rec.model_dump(),
                gw_players=_starter_lines(picks) if picks else [],
                bench_players=[GW1BenchLine(name=p.name, points=p.points) for p in picks.bench] if picks else [],
            )
        )
    return rows
