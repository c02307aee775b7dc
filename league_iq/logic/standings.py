# league_iq/logic/standings.py
from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from ..schemas import EntrySnapshot, ManagerGameweekRecord, StandingsStats
from ..services.adapter import RawDataAdapter
from ..services.gameweeks import previous_gameweek

T = TypeVar("T")


def check_gameweek(gw: int, current_gw: int | None) -> None:
    if gw < 1:
        raise ValueError(f"Invalid gameweek {gw}. Expected >= 1.")
    if current_gw is not None and gw > current_gw:
        raise ValueError(f"Gameweek {gw} is after the current gameweek {current_gw}.")


def unique_entries(entries: Iterable[EntrySnapshot]) -> list[EntrySnapshot]:
    """Drop repeated entry ids, keeping the first occurrence in feed order."""
    seen: set[int] = set()
    out: list[EntrySnapshot] = []
    for e in entries:
        if e.entry_id in seen:
            continue
        seen.add(e.entry_id)
        out.append(e)
    return out


def rank_entries(entries: Iterable[EntrySnapshot]) -> dict[int, int]:
    """
    Positions 1..N by total_points desc; equal totals go to the lower entry id.
    Every manager gets a distinct rank, so ranks always sum to N(N+1)/2.
    """
    ordered = sorted(unique_entries(entries), key=lambda e: (-e.total_points, e.entry_id))
    return {e.entry_id: i for i, e in enumerate(ordered, start=1)}


def select_extreme(
    items: Iterable[T],
    value: Callable[[T], int],
    entry_id: Callable[[T], int],
    *,
    highest: bool = True,
) -> T | None:
    """
    The item holding the max (or min) value; ties go to the lower entry id.
    None for an empty input.
    """
    pool = list(items)
    if not pool:
        return None
    if highest:
        return min(pool, key=lambda x: (-value(x), entry_id(x)))
    return min(pool, key=lambda x: (value(x), entry_id(x)))


def enrich_standings(
    adapter: RawDataAdapter,
    league_id: int,
    gw: int,
    current_gw: int | None = None,
) -> list[ManagerGameweekRecord]:
    """
    Standings for one gameweek with rank movement against the previous one.
    Points are passed through as supplied (live or final). An empty league
    yields an empty list.
    """
    check_gameweek(gw, current_gw)

    entries = unique_entries(adapter.get_standings_snapshot(league_id, gw).entries)
    if not entries:
        return []

    ranks = rank_entries(entries)

    prev_ranks: dict[int, int] = {}
    prev_gw = previous_gameweek(gw)
    if prev_gw is not None:
        prev_ranks = rank_entries(adapter.get_standings_snapshot(league_id, prev_gw).entries)

    records: list[ManagerGameweekRecord] = []
    for e in entries:
        rank = ranks[e.entry_id]
        prev = prev_ranks.get(e.entry_id)
        records.append(
            ManagerGameweekRecord(
                entry_id=e.entry_id,
                team_name=e.team_name,
                manager_name=e.manager_name,
                rank=rank,
                previous_rank=prev,
                movement=(prev - rank) if prev is not None else 0,
                gw_points=e.gw_points,
                total_points=e.total_points,
                bench_points=e.bench_points,
                transfer_count=e.transfer_count,
            )
        )

    records.sort(key=lambda r: r.rank)
    return records


def gameweek_stats(records: list[ManagerGameweekRecord]) -> StandingsStats | None:
    """Headline cards for one gameweek (most/fewest points, most bench, most transfers)."""
    if not records:
        return None

    def eid(r: ManagerGameweekRecord) -> int:
        return r.entry_id

    return StandingsStats(
        most_points=select_extreme(records, lambda r: r.gw_points, eid),
        fewest_points=select_extreme(records, lambda r: r.gw_points, eid, highest=False),
        most_bench=select_extreme(records, lambda r: r.bench_points, eid),
        most_transfers=select_extreme(records, lambda r: r.transfer_count, eid),
    )
