# tests/test_trends.py
import pytest

from league_iq.logic.trends import CATEGORIES, compute_trend
from league_iq.services.adapter import InMemoryRawDataAdapter
from league_iq.services.gameweeks import trend_window

from fpl_fixtures import LEAGUE, entry, line, picks, standings

SERIES_NAMES = {
    "most_points",
    "fewest_points",
    "most_bench",
    "fewest_bench",
    "most_transfers",
    "most_influence",
    "least_influence",
    "best_captain_call",
    "worst_captain_call",
}


def _adapter(by_gw, picks_by_key=None):
    return InMemoryRawDataAdapter(
        standings={(LEAGUE, gw): snap for gw, snap in by_gw.items()},
        picks=picks_by_key or {},
    )


def test_window_truncates_to_available_history():
    adapter = _adapter(
        {
            1: standings(entry(1, 40, gw_points=40), entry(2, 30, gw_points=30)),
            2: standings(entry(1, 90, gw_points=50), entry(2, 100, gw_points=70)),
            3: standings(entry(1, 150, gw_points=60), entry(2, 130, gw_points=30)),
        }
    )
    out = compute_trend(adapter, LEAGUE, 3, 8)

    assert (out.from_gw, out.to_gw, out.window) == (1, 3, 8)
    most = out.series.most_points
    assert [p.gw for p in most.points] == [1, 2, 3]
    assert [p.value for p in most.points] == [40, 70, 60]
    assert most.average == pytest.approx((40 + 70 + 60) / 3)


def test_window_starts_at_first_tracked_gameweek():
    adapter = _adapter({gw: standings(entry(1, gw * 10, gw_points=10)) for gw in (5, 6, 7)})
    out = compute_trend(adapter, LEAGUE, 7, 8)
    assert out.from_gw == 5
    assert len(out.series.fewest_points.points) == 3


def test_missing_gameweek_keeps_its_slot():
    adapter = _adapter(
        {
            1: standings(entry(1, 10, gw_points=10)),
            2: standings(entry(1, 30, gw_points=20)),
            4: standings(entry(1, 60, gw_points=30)),
        }
    )
    series = compute_trend(adapter, LEAGUE, 4, 4).series.most_points

    assert [p.gw for p in series.points] == [1, 2, 3, 4]
    gap = series.points[2]
    assert gap.value is None and gap.entry_id is None
    assert series.average == pytest.approx(20.0)


def test_record_holder_can_change_each_gameweek():
    adapter = _adapter(
        {
            1: standings(entry(1, 80, gw_points=80, bench=2), entry(2, 50, gw_points=50, bench=9)),
            2: standings(entry(1, 120, gw_points=40, bench=7), entry(2, 140, gw_points=90, bench=1)),
        }
    )
    series = compute_trend(adapter, LEAGUE, 2, 8).series

    assert [p.entry_id for p in series.most_points.points] == [1, 2]
    assert [p.manager_name for p in series.fewest_points.points] == ["M2", "M1"]
    assert [p.entry_id for p in series.most_bench.points] == [2, 1]
    assert [p.entry_id for p in series.fewest_bench.points] == [1, 2]


def test_ties_go_to_lower_entry_id():
    adapter = _adapter({1: standings(entry(9, 44, gw_points=44), entry(3, 44, gw_points=44), entry(5, 44, gw_points=44))})
    series = compute_trend(adapter, LEAGUE, 1, 8).series

    assert series.most_points.points[0].entry_id == 3
    assert series.fewest_points.points[0].entry_id == 3
    assert series.most_transfers.points[0].entry_id == 3


def test_captain_call_series():
    adapter = _adapter(
        {
            1: standings(entry(1, 50), entry(2, 50)),
            2: standings(entry(1, 100), entry(2, 100)),
        },
        {
            (LEAGUE, 1, 1): picks([line(10, 5, 1, captain=True), line(20, 5, 2)]),
            (LEAGUE, 2, 1): picks([line(10, 2, 1), line(20, 8, 2, captain=True)]),
            (LEAGUE, 1, 2): picks([line(30, 5, 1, captain=True), line(40, 5, 2)]),
            (LEAGUE, 2, 2): picks([line(30, 9, 1), line(40, 1, 2, captain=True)]),
        },
    )
    series = compute_trend(adapter, LEAGUE, 2, 2).series

    best, worst = series.best_captain_call.points[1], series.worst_captain_call.points[1]
    assert (best.entry_id, best.value) == (1, 12)
    assert (worst.entry_id, worst.value) == (2, -16)
    assert series.most_influence.points[1].entry_id == 1
    assert series.least_influence.points[1].value == -16


def test_all_series_present_for_empty_league():
    out = compute_trend(_adapter({}), LEAGUE, 2, 8)
    names = set(out.series.model_dump().keys())
    assert names == SERIES_NAMES == {name for name, _, _ in CATEGORIES}
    for s in out.series.model_dump().values():
        assert all(p["value"] is None for p in s["points"])
        assert s["average"] is None


def test_trend_window_bounds():
    assert trend_window(10, 8) == (3, 10)
    assert trend_window(3, 8) == (1, 3)
    assert trend_window(10, 8, first_gw=6) == (6, 10)
    assert trend_window(38, 100) == (1, 38)
    with pytest.raises(ValueError):
        trend_window(5, 0)
