# league_iq/services/adapter.py
from __future__ import annotations

from typing import Iterable, Protocol

from ..schemas import (
    PicksSnapshot,
    StandingsSnapshot,
    TransfersSnapshot,
)

__all__ = [
    "RawDataAdapter",
    "InMemoryRawDataAdapter",
    "SnapshotCache",
]


class RawDataAdapter(Protocol):
    """
    Read-only source of per-league, per-gameweek FPL data.

    Implementations raise `AdapterUnavailable` when their backing store fails.
    Points may be final (finished GW) or live (in-progress GW); callers do not
    distinguish the two.
    """

    def get_standings_snapshot(self, league_id: int, gw: int) -> StandingsSnapshot: ...

    def get_picks(self, league_id: int, gw: int, entry_id: int) -> PicksSnapshot | None: ...

    def get_transfers(self, league_id: int, gw: int, entry_id: int) -> TransfersSnapshot: ...

    def get_player_points(self, gw: int, player_ids: Iterable[int]) -> dict[int, int]: ...

    def first_gameweek(self, league_id: int) -> int | None: ...


class InMemoryRawDataAdapter:
    """
    Adapter over already-fetched payloads, keyed by (league_id, gw[, entry_id]).
    Missing keys behave like an empty feed.
    """

    def __init__(
        self,
        standings: dict[tuple[int, int], StandingsSnapshot] | None = None,
        picks: dict[tuple[int, int, int], PicksSnapshot] | None = None,
        transfers: dict[tuple[int, int, int], TransfersSnapshot] | None = None,
        player_points: dict[tuple[int, int], int] | None = None,
    ):
        self.standings = standings or {}
        self.picks = picks or {}
        self.transfers = transfers or {}
        self.player_points = player_points or {}

    def get_standings_snapshot(self, league_id: int, gw: int) -> StandingsSnapshot:
        return self.standings.get((league_id, gw), StandingsSnapshot())

    def get_picks(self, league_id: int, gw: int, entry_id: int) -> PicksSnapshot | None:
        return self.picks.get((league_id, gw, entry_id))

    def get_transfers(self, league_id: int, gw: int, entry_id: int) -> TransfersSnapshot:
        return self.transfers.get((league_id, gw, entry_id), TransfersSnapshot())

    def get_player_points(self, gw: int, player_ids: Iterable[int]) -> dict[int, int]:
        out: dict[int, int] = {}
        for pid in player_ids:
            if (gw, pid) in self.player_points:
                out[pid] = self.player_points[(gw, pid)]
        return out

    def first_gameweek(self, league_id: int) -> int | None:
        gws = [gw for (lid, gw), snap in self.standings.items() if lid == league_id and snap.entries]
        return min(gws) if gws else None


class SnapshotCache:
    """
    Per-request memo in front of an adapter: each (league, gw[, entry]) is
    fetched at most once and reused as an immutable snapshot for the rest of
    the computation. Discard it with the request.
    """

    def __init__(self, adapter: RawDataAdapter):
        self._adapter = adapter
        self._standings: dict[tuple[int, int], StandingsSnapshot] = {}
        self._picks: dict[tuple[int, int, int], PicksSnapshot | None] = {}
        self._transfers: dict[tuple[int, int, int], TransfersSnapshot] = {}
        self._points: dict[tuple[int, int], int] = {}
        self._points_missing: set[tuple[int, int]] = set()
        self._first: dict[int, int | None] = {}

    def get_standings_snapshot(self, league_id: int, gw: int) -> StandingsSnapshot:
        key = (league_id, gw)
        if key not in self._standings:
            self._standings[key] = self._adapter.get_standings_snapshot(league_id, gw)
        return self._standings[key]

    def get_picks(self, league_id: int, gw: int, entry_id: int) -> PicksSnapshot | None:
        key = (league_id, gw, entry_id)
        if key not in self._picks:
            self._picks[key] = self._adapter.get_picks(league_id, gw, entry_id)
        return self._picks[key]

    def get_transfers(self, league_id: int, gw: int, entry_id: int) -> TransfersSnapshot:
        key = (league_id, gw, entry_id)
        if key not in self._transfers:
            self._transfers[key] = self._adapter.get_transfers(league_id, gw, entry_id)
        return self._transfers[key]

    def get_player_points(self, gw: int, player_ids: Iterable[int]) -> dict[int, int]:
        wanted = {pid for pid in player_ids}
        unknown = [
            pid for pid in wanted if (gw, pid) not in self._points and (gw, pid) not in self._points_missing
        ]
        if unknown:
            fetched = self._adapter.get_player_points(gw, unknown)
            for pid in unknown:
                if pid in fetched:
                    self._points[(gw, pid)] = fetched[pid]
                else:
                    self._points_missing.add((gw, pid))
        return {pid: self._points[(gw, pid)] for pid in wanted if (gw, pid) in self._points}

    def first_gameweek(self, league_id: int) -> int | None:
        if league_id not in self._first:
            self._first[league_id] = self._adapter.first_gameweek(league_id)
        return self._first[league_id]
