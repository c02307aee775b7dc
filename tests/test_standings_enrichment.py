# tests/test_standings_enrichment.py
import pytest

from league_iq.logic.standings import enrich_standings, gameweek_stats, rank_entries
from league_iq.services.adapter import InMemoryRawDataAdapter

from fpl_fixtures import LEAGUE, entry, standings


def _adapter(by_gw):
    return InMemoryRawDataAdapter(standings={(LEAGUE, gw): snap for gw, snap in by_gw.items()})


def test_ranks_are_distinct_positions():
    snap = standings(entry(7, 50), entry(3, 50), entry(9, 61), entry(1, 12), entry(4, 50))
    rows = enrich_standings(_adapter({1: snap}), LEAGUE, 1)

    n = len(rows)
    assert sorted(r.rank for r in rows) == list(range(1, n + 1))
    assert sum(r.rank for r in rows) == n * (n + 1) // 2

    # equal totals go to the lower entry id
    assert [r.entry_id for r in rows] == [9, 3, 4, 7, 1]


def test_movement_against_previous_gameweek():
    adapter = _adapter(
        {
            1: standings(entry(1, 10), entry(2, 20)),
            2: standings(entry(1, 40), entry(2, 30), entry(5, 35)),
        }
    )
    rows = {r.entry_id: r for r in enrich_standings(adapter, LEAGUE, 2)}

    assert rows[1].rank == 1 and rows[1].previous_rank == 2 and rows[1].movement == 1
    assert rows[2].rank == 3 and rows[2].previous_rank == 1 and rows[2].movement == -2

    # joined this gameweek: no comparison available
    assert rows[5].previous_rank is None
    assert rows[5].movement == 0


def test_opening_gameweek_has_no_previous_rank():
    rows = enrich_standings(_adapter({1: standings(entry(1, 5), entry(2, 9))}), LEAGUE, 1)
    assert all(r.previous_rank is None and r.movement == 0 for r in rows)


def test_empty_league_yields_empty_table():
    assert enrich_standings(_adapter({}), LEAGUE, 3) == []
    assert gameweek_stats([]) is None


def test_gameweek_after_current_is_rejected():
    with pytest.raises(ValueError):
        enrich_standings(_adapter({}), LEAGUE, 5, current_gw=4)
    with pytest.raises(ValueError):
        enrich_standings(_adapter({}), LEAGUE, 0)


def test_same_inputs_same_output():
    adapter = _adapter({1: standings(entry(2, 8)), 2: standings(entry(1, 30), entry(2, 30))})
    first = [r.model_dump() for r in enrich_standings(adapter, LEAGUE, 2)]
    second = [r.model_dump() for r in enrich_standings(adapter, LEAGUE, 2)]
    assert first == second


def test_repeated_entry_keeps_first_feed_row():
    ranks = rank_entries([entry(1, 10), entry(1, 99), entry(2, 20)])
    assert ranks == {2: 1, 1: 2}


def test_headline_stats_pick_extremes_with_id_tiebreak():
    snap = standings(
        entry(4, 100, gw_points=70, bench=3, transfers=2),
        entry(2, 90, gw_points=70, bench=11, transfers=0),
        entry(8, 80, gw_points=31, bench=11, transfers=2),
    )
    stats = gameweek_stats(enrich_standings(_adapter({1: snap}), LEAGUE, 1))

    assert stats.most_points.entry_id == 2
    assert stats.fewest_points.entry_id == 8
    assert stats.most_bench.entry_id == 2
    assert stats.most_transfers.entry_id == 4
