# league_iq/models.py
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base

# -----------------------
# Snapshot cache tables
#
# These mirror what the upstream FPL feed returns per league/gameweek. The
# analytics core only ever reads them through the raw data adapter.
# -----------------------


class League(Base):
    __tablename__ = "leagues"

    # FPL classic league id, not autoincremented
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    entries = relationship("EntryGameweek", back_populates="league", cascade="all, delete-orphan")


class Gameweek(Base):
    __tablename__ = "gameweeks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)  # 1..38
    is_current: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_finished: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)


class EntryGameweek(Base):
    """
    One manager (FPL entry) in one league for one gameweek.
    `feed_order` keeps the position the entry had in the upstream standings feed.
    """

    __tablename__ = "entry_gameweeks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    league_id: Mapped[int] = mapped_column(Integer, ForeignKey("leagues.id", ondelete="CASCADE"), index=True)
    gw: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    entry_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    team_name: Mapped[str] = mapped_column(String(120), nullable=False)
    manager_name: Mapped[str] = mapped_column(String(120), nullable=False)

    gw_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bench_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    transfer_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    transfer_cost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    chip: Mapped[str | None] = mapped_column(String(16), nullable=True)  # wildcard|3xc|bboost|freehit

    feed_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    league = relationship("League", back_populates="entries")
    picks = relationship(
        "EntryPick",
        back_populates="entry_gameweek",
        cascade="all, delete-orphan",
        order_by="EntryPick.position",
    )
    transfers = relationship(
        "EntryTransfer",
        back_populates="entry_gameweek",
        cascade="all, delete-orphan",
        order_by="EntryTransfer.id",
    )

    __table_args__ = (UniqueConstraint("league_id", "gw", "entry_id", name="uq_entry_gameweek"),)


class EntryPick(Base):
    __tablename__ = "entry_picks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    entry_gameweek_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("entry_gameweeks.id", ondelete="CASCADE"), index=True
    )

    player_id: Mapped[int] = mapped_column(Integer, nullable=False)
    player_name: Mapped[str] = mapped_column(String(120), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)  # 1..11 starters, 12..15 bench
    multiplier: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # raw, un-multiplied
    is_captain: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_vice_captain: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    entry_gameweek = relationship("EntryGameweek", back_populates="picks")

    __table_args__ = (UniqueConstraint("entry_gameweek_id", "position", name="uq_pick_position"),)


class EntryTransfer(Base):
    __tablename__ = "entry_transfers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    entry_gameweek_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("entry_gameweeks.id", ondelete="CASCADE"), index=True
    )

    player_in_id: Mapped[int] = mapped_column(Integer, nullable=False)
    player_in_name: Mapped[str] = mapped_column(String(120), nullable=False)
    player_out_id: Mapped[int] = mapped_column(Integer, nullable=False)
    player_out_name: Mapped[str] = mapped_column(String(120), nullable=False)

    entry_gameweek = relationship("EntryGameweek", back_populates="transfers")


class PlayerGameweekPoints(Base):
    """
    Live/final points per player per gameweek (FPL "element" event points).
    Needed for players that are not in a squad, e.g. the player transferred out.
    """

    __tablename__ = "player_gameweek_points"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    gw: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    player_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    player_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("gw", "player_id", name="uq_player_gw_points"),)
