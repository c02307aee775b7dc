# league_iq/logic/trends.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..config import TREND_WINDOW_DEFAULT
from ..schemas import (
    ManagerGameweekRecord,
    TrendOut,
    TrendPoint,
    TrendSeries,
    TrendSeriesSet,
)
from ..services.adapter import RawDataAdapter, SnapshotCache
from ..services.gameweeks import gameweek_range, trend_window
from .decisions import score_gameweek
from .standings import enrich_standings, select_extreme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ManagerWeek:
    """One manager's numbers for one gameweek, as the trend categories see them."""

    entry_id: int
    team_name: str
    manager_name: str
    gw_points: int
    bench_points: int
    transfer_count: int
    gw_decision_score: int
    captain_impact: int


# (series name, metric, highest?)
CATEGORIES: list[tuple[str, Callable[[_ManagerWeek], int], bool]] = [
    ("most_points", lambda m: m.gw_points, True),
    ("fewest_points", lambda m: m.gw_points, False),
    ("most_bench", lambda m: m.bench_points, True),
    ("fewest_bench", lambda m: m.bench_points, False),
    ("most_transfers", lambda m: m.transfer_count, True),
    ("most_influence", lambda m: m.gw_decision_score, True),
    ("least_influence", lambda m: m.gw_decision_score, False),
    ("best_captain_call", lambda m: m.captain_impact, True),
    ("worst_captain_call", lambda m: m.captain_impact, False),
]


def _manager_weeks(adapter: RawDataAdapter, league_id: int, gw: int) -> list[_ManagerWeek]:
    standings: list[ManagerGameweekRecord] = enrich_standings(adapter, league_id, gw)
    if not standings:
        return []
    decisions = score_gameweek(adapter, league_id, gw)
    out: list[_ManagerWeek] = []
    for r in standings:
        impact = decisions[r.entry_id].impact
        out.append(
            _ManagerWeek(
                entry_id=r.entry_id,
                team_name=r.team_name,
                manager_name=r.manager_name,
                gw_points=r.gw_points,
                bench_points=r.bench_points,
                transfer_count=r.transfer_count,
                gw_decision_score=impact.gw_decision_score,
                captain_impact=impact.captain_impact,
            )
        )
    return out


def trend_point(gw: int, weeks: list[_ManagerWeek], metric: Callable[[_ManagerWeek], int], highest: bool) -> TrendPoint:
    """Who held the extremum in this gameweek; an empty gameweek keeps its slot with a null value."""
    holder = select_extreme(weeks, metric, lambda m: m.entry_id, highest=highest)
    if holder is None:
        return TrendPoint(gw=gw)
    return TrendPoint(
        gw=gw,
        value=metric(holder),
        entry_id=holder.entry_id,
        team_name=holder.team_name,
        manager_name=holder.manager_name,
    )


def series_average(points: list[TrendPoint]) -> float | None:
    values = [p.value for p in points if p.value is not None]
    if not values:
        return None
    return sum(values) / len(values)


def compute_trend(
    adapter: RawDataAdapter,
    league_id: int,
    end_gw: int,
    window: int = TREND_WINDOW_DEFAULT,
) -> TrendOut:
    """
    Nine record-holder series over the trailing window ending at end_gw.
    Each gameweek is evaluated on its own; the holder may differ per point.
    """
    if end_gw < 1:
        raise ValueError(f"Invalid gameweek {end_gw}. Expected >= 1.")
    adapter = adapter if isinstance(adapter, SnapshotCache) else SnapshotCache(adapter)

    from_gw, to_gw = trend_window(end_gw, window, adapter.first_gameweek(league_id))
    logger.debug("trend league=%s window=%s..%s", league_id, from_gw, to_gw)

    weeks_by_gw = {gw: _manager_weeks(adapter, league_id, gw) for gw in gameweek_range(from_gw, to_gw)}

    series: dict[str, TrendSeries] = {}
    for name, metric, highest in CATEGORIES:
        points = [trend_point(gw, weeks, metric, highest) for gw, weeks in weeks_by_gw.items()]
        series[name] = TrendSeries(points=points, average=series_average(points))

    return TrendOut(
        league_id=league_id,
        from_gw=from_gw,
        to_gw=to_gw,
        window=window,
        series=TrendSeriesSet(**series),
    )
