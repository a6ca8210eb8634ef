"""initial schema

Revision ID: 20261018_0001
Revises: None
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "participants",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("team_name", sa.String(length=200), nullable=False),
        sa.Column("participant_name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column("language", sa.String(length=64), nullable=False),
        sa.Column("experience", sa.String(length=64), nullable=False),
        sa.Column("team_type", sa.String(length=64), nullable=False),
        sa.Column(
            "registration_date",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_participants_email", "participants", ["email"], unique=True)
    op.create_index("ix_participants_language", "participants", ["language"], unique=False)

    op.create_table(
        "rounds",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("round_number", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("language", sa.String(length=64), nullable=False),
        sa.Column("difficulty", sa.String(length=32), nullable=False, server_default="medium"),
        sa.Column("points", sa.Integer(), nullable=False, server_default="10"),
        sa.Column("hint", sa.Text(), nullable=True),
        sa.Column("time_limit", sa.Integer(), nullable=True),
        sa.Column("correct_answer", sa.Text(), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_rounds_round_number", "rounds", ["round_number"], unique=False)

    op.create_table(
        "submissions",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            "participant_id",
            sa.BigInteger(),
            sa.ForeignKey("participants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("round_id", sa.BigInteger(), sa.ForeignKey("rounds.id", ondelete="CASCADE"), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column("points_earned", sa.Integer(), nullable=False),
        sa.Column("time_taken", sa.Integer(), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_submissions_participant_id", "submissions", ["participant_id"], unique=False)
    op.create_index("ix_submissions_round_id", "submissions", ["round_id"], unique=False)

    op.create_table(
        "leaderboard",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            "participant_id",
            sa.BigInteger(),
            sa.ForeignKey("participants.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("team_name", sa.String(length=200), nullable=False),
        sa.Column("participant_name", sa.String(length=200), nullable=False),
        sa.Column("language", sa.String(length=64), nullable=False),
        sa.Column("total_points", sa.Integer(), nullable=False),
        sa.Column("rounds_completed", sa.Integer(), nullable=False),
        sa.Column("average_time", sa.Float(), nullable=False),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_leaderboard_language", "leaderboard", ["language"], unique=False)
    op.create_index(
        "ix_leaderboard_ranking",
        "leaderboard",
        ["total_points", "average_time"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_leaderboard_ranking", table_name="leaderboard")
    op.drop_index("ix_leaderboard_language", table_name="leaderboard")
    op.drop_table("leaderboard")

    op.drop_index("ix_submissions_round_id", table_name="submissions")
    op.drop_index("ix_submissions_participant_id", table_name="submissions")
    op.drop_table("submissions")

    op.drop_index("ix_rounds_round_number", table_name="rounds")
    op.drop_table("rounds")

    op.drop_index("ix_participants_language", table_name="participants")
    op.drop_index("ix_participants_email", table_name="participants")
    op.drop_table("participants")
