"""snapshot cache baseline

Revision ID: 5c1f0e9a7b21
Revises:
Create Date: 2026-09-30 00:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5c1f0e9a7b21"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # leagues (ids are upstream FPL league ids)
    op.create_table(
        "leagues",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_leagues_id", "leagues", ["id"])

    # gameweeks
    op.create_table(
        "gameweeks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False, nullable=False),
        sa.Column("is_current", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_finished", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    # entry_gameweeks
    op.create_table(
        "entry_gameweeks",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "league_id",
            sa.Integer(),
            sa.ForeignKey("leagues.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("gw", sa.Integer(), nullable=False),
        sa.Column("entry_id", sa.Integer(), nullable=False),
        sa.Column("team_name", sa.String(length=120), nullable=False),
        sa.Column("manager_name", sa.String(length=120), nullable=False),
        sa.Column("gw_points", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_points", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("bench_points", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("transfer_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("transfer_cost", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("chip", sa.String(length=16), nullable=True),
        sa.Column("feed_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("league_id", "gw", "entry_id", name="uq_entry_gameweek"),
    )
    op.create_index("ix_entry_gameweeks_id", "entry_gameweeks", ["id"])
    op.create_index("ix_entry_gameweeks_league_id", "entry_gameweeks", ["league_id"])
    op.create_index("ix_entry_gameweeks_gw", "entry_gameweeks", ["gw"])
    op.create_index("ix_entry_gameweeks_entry_id", "entry_gameweeks", ["entry_id"])

    # entry_picks
    op.create_table(
        "entry_picks",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "entry_gameweek_id",
            sa.Integer(),
            sa.ForeignKey("entry_gameweeks.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("player_id", sa.Integer(), nullable=False),
        sa.Column("player_name", sa.String(length=120), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("multiplier", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("points", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_captain", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_vice_captain", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint("entry_gameweek_id", "position", name="uq_pick_position"),
    )
    op.create_index("ix_entry_picks_id", "entry_picks", ["id"])
    op.create_index("ix_entry_picks_entry_gameweek_id", "entry_picks", ["entry_gameweek_id"])

    # entry_transfers
    op.create_table(
        "entry_transfers",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "entry_gameweek_id",
            sa.Integer(),
            sa.ForeignKey("entry_gameweeks.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("player_in_id", sa.Integer(), nullable=False),
        sa.Column("player_in_name", sa.String(length=120), nullable=False),
        sa.Column("player_out_id", sa.Integer(), nullable=False),
        sa.Column("player_out_name", sa.String(length=120), nullable=False),
    )
    op.create_index("ix_entry_transfers_id", "entry_transfers", ["id"])
    op.create_index("ix_entry_transfers_entry_gameweek_id", "entry_transfers", ["entry_gameweek_id"])

    # player_gameweek_points
    op.create_table(
        "player_gameweek_points",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("gw", sa.Integer(), nullable=False),
        sa.Column("player_id", sa.Integer(), nullable=False),
        sa.Column("player_name", sa.String(length=120), nullable=True),
        sa.Column("points", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("gw", "player_id", name="uq_player_gw_points"),
    )
    op.create_index("ix_player_gameweek_points_id", "player_gameweek_points", ["id"])
    op.create_index("ix_player_gameweek_points_gw", "player_gameweek_points", ["gw"])
    op.create_index("ix_player_gameweek_points_player_id", "player_gameweek_points", ["player_id"])


def downgrade() -> None:
    op.drop_table("player_gameweek_points")
    op.drop_table("entry_transfers")
    op.drop_table("entry_picks")
    op.drop_table("entry_gameweeks")
    op.drop_table("gameweeks")
    op.drop_table("leagues")
