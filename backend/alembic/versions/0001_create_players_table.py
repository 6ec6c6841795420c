"""Create players table."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001_create_players_table"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "players",
        sa.Column("wallet", sa.String(length=64), nullable=False),
        sa.Column("inventory", sa.JSON(), nullable=False),
        sa.Column("last_checkpoint_gold", sa.Float(), nullable=False),
        sa.Column("checkpoint_timestamp", sa.BigInteger(), nullable=False),
        sa.Column("total_mining_power", sa.Float(), nullable=False),
        sa.Column("has_land", sa.Boolean(), nullable=False),
        sa.Column("land_purchase_date", sa.BigInteger(), nullable=True),
        sa.Column("last_activity", sa.BigInteger(), nullable=False),
        sa.Column("pending_payouts", sa.JSON(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("wallet", name=op.f("pk_players")),
    )


def downgrade() -> None:
    op.drop_table("players")
