# league_iq/schemas.py
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# -----------------------
# Shared / Enums
# -----------------------
class ChipType(str, Enum):
    WILDCARD = "wildcard"
    TRIPLE_CAPTAIN = "3xc"
    BENCH_BOOST = "bboost"
    FREE_HIT = "freehit"


# -----------------------
# Raw data adapter snapshots (read-only inputs to the analytics core)
# -----------------------
class EntrySnapshot(BaseModel):
    entry_id: int
    team_name: str
    manager_name: str
    gw_points: int = 0
    total_points: int = 0
    bench_points: int = 0
    transfer_count: int = 0

    model_config = ConfigDict(frozen=True)


class StandingsSnapshot(BaseModel):
    # Upstream feed order is preserved
    entries: list[EntrySnapshot] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class PlayerLine(BaseModel):
    player_id: int
    name: str
    points: int = 0  # raw GW points, before the pick multiplier
    multiplier: int = 1
    position: int = 0
    is_captain: bool = False
    is_vice_captain: bool = False

    model_config = ConfigDict(frozen=True)


class PicksSnapshot(BaseModel):
    starters: list[PlayerLine] = Field(default_factory=list)
    bench: list[PlayerLine] = Field(default_factory=list)
    captain_id: int | None = None
    vice_captain_id: int | None = None

    model_config = ConfigDict(frozen=True)

    def squad_ids(self) -> set[int]:
        return {p.player_id for p in self.starters} | {p.player_id for p in self.bench}

    def find(self, player_id: int | None) -> PlayerLine | None:
        if player_id is None:
            return None
        for p in (*self.starters, *self.bench):
            if p.player_id == player_id:
                return p
        return None


class PlayerRef(BaseModel):
    player_id: int
    name: str

    model_config = ConfigDict(frozen=True)


class TransferPair(BaseModel):
    player_in: PlayerRef
    player_out: PlayerRef

    model_config = ConfigDict(frozen=True)


class TransfersSnapshot(BaseModel):
    transfers: list[TransferPair] = Field(default_factory=list)
    chip: ChipType | None = None
    transfer_cost: int = 0  # points deducted, as reported upstream (usually 0, 4, 8, ...)

    model_config = ConfigDict(frozen=True)


# -----------------------
# Standings
# -----------------------
class ManagerGameweekRecord(BaseModel):
    entry_id: int
    team_name: str
    manager_name: str
    rank: int
    previous_rank: int | None = None
    movement: int = 0  # positive = moved up
    gw_points: int
    total_points: int
    bench_points: int
    transfer_count: int


class StandingsStats(BaseModel):
    most_points: ManagerGameweekRecord | None = None
    fewest_points: ManagerGameweekRecord | None = None
    most_bench: ManagerGameweekRecord | None = None
    most_transfers: ManagerGameweekRecord | None = None


class StandingsOut(BaseModel):
    league_id: int
    gw: int
    current_gw: int
    live: bool
    standings: list[ManagerGameweekRecord]
    stats: StandingsStats | None = None


# -----------------------
# Decision impact (ManagerIQ)
# -----------------------
class TransferImpact(BaseModel):
    player_in_name: str
    player_out_name: str
    player_in_points: int
    player_out_points: int
    impact: int


class ChipUsage(BaseModel):
    chip: ChipType | None = None
    extra_points: int = 0

    model_config = ConfigDict(use_enum_values=True)


class CaptainChange(BaseModel):
    previous_captain: str | None = None
    previous_captain_points: int | None = None
    current_captain: str | None = None
    current_captain_points: int | None = None
    changed: bool = False
    previous_captain_still_in_squad: bool = False


class DecisionImpactRecord(BaseModel):
    transfer_impact_gross: int = 0
    transfer_hit_cost: int = 0
    transfer_impact_net: int = 0
    chip_impact: int = 0
    captain_impact: int = 0
    gw_decision_score: int = 0
    running_influence_total: int = 0


class DecisionBreakdown(BaseModel):
    """Everything the scorer derived for one manager in one gameweek."""

    entry_id: int
    transfers: list[TransferImpact]
    chip: ChipUsage
    chip_captain_name: str | None = None
    captain: CaptainChange
    impact: DecisionImpactRecord


class ActivityImpactRow(DecisionImpactRecord):
    entry_id: int
    rank: int
    movement: int
    team_name: str
    manager_name: str
    chip: ChipType | None = None
    chip_captain_name: str | None = None
    transfers: list[TransferImpact] = Field(default_factory=list)
    previous_captain_name: str | None = None
    previous_captain_points: int | None = None
    current_captain_name: str | None = None
    current_captain_points: int | None = None

    model_config = ConfigDict(use_enum_values=True)


class ChipRow(BaseModel):
    entry_id: int
    team_name: str
    manager_name: str
    chip: ChipType | None = None

    model_config = ConfigDict(use_enum_values=True)


class TransferRow(BaseModel):
    entry_id: int
    team_name: str
    manager_name: str
    transfers: list[TransferImpact]


# -----------------------
# Trends
# -----------------------
class TrendPoint(BaseModel):
    gw: int
    value: int | None = None
    entry_id: int | None = None
    team_name: str | None = None
    manager_name: str | None = None


class TrendSeries(BaseModel):
    points: list[TrendPoint]
    average: float | None = None


class TrendSeriesSet(BaseModel):
    most_points: TrendSeries
    fewest_points: TrendSeries
    most_bench: TrendSeries
    fewest_bench: TrendSeries
    most_transfers: TrendSeries
    most_influence: TrendSeries
    least_influence: TrendSeries
    best_captain_call: TrendSeries
    worst_captain_call: TrendSeries


class TrendOut(BaseModel):
    league_id: int
    from_gw: int
    to_gw: int
    window: int
    series: TrendSeriesSet


# -----------------------
# GW1 lineup table
# -----------------------
class GW1PlayerLine(BaseModel):
    name: str
    points: int
    is_captain: bool
    is_vice_captain: bool


class GW1BenchLine(BaseModel):
    name: str
    points: int


class GW1StandingRow(ManagerGameweekRecord):
    gw_players: list[GW1PlayerLine] = Field(default_factory=list)
    bench_players: list[GW1BenchLine] = Field(default_factory=list)


# -----------------------
# Cache seeding payloads
# -----------------------
class LeagueCreate(BaseModel):
    id: int
    name: str


class LeagueOut(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class GameweekIn(BaseModel):
    id: int = Field(..., ge=1)
    is_current: bool = False
    is_finished: bool = False


class GameweekOut(BaseModel):
    id: int
    is_current: bool
    is_finished: bool

    model_config = ConfigDict(from_attributes=True)


class PickIn(BaseModel):
    player_id: int
    name: str
    position: int = Field(..., ge=1, le=15)
    points: int = 0
    multiplier: int = 1
    is_captain: bool = False
    is_vice_captain: bool = False


class TransferIn(BaseModel):
    player_in_id: int
    player_in_name: str
    player_out_id: int
    player_out_name: str


class EntryGameweekIn(BaseModel):
    entry_id: int
    team_name: str
    manager_name: str
    gw_points: int = 0
    total_points: int = 0
    bench_points: int = 0
    transfer_count: int | None = None  # defaults to len(transfers)
    transfer_cost: int = 0
    chip: ChipType | None = None
    picks: list[PickIn] = Field(default_factory=list)
    transfers: list[TransferIn] = Field(default_factory=list)


class SnapshotIn(BaseModel):
    entries: list[EntryGameweekIn]


class PlayerPointsIn(BaseModel):
    player_id: int
    name: str | None = None
    points: int


class UpsertResult(BaseModel):
    inserted: int
    updated: int
