from __future__ import annotations
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = "20261019_0002"
down_revision = "20261019_0001"
branch_labels = None
depends_on = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")

def upgrade() -> None:
    op.create_table(
        "game_states",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("player_key", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("current_location_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("visible_clue_indices", JSONType, nullable=False),
        sa.Column("start_time", sa.BigInteger(), nullable=True),
        sa.Column("end_time", sa.BigInteger(), nullable=True),
        sa.Column("show_intro", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("completed_locations", JSONType, nullable=False),
        sa.Column("skipped_locations", JSONType, nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_game_states_player_key", "game_states", ["player_key"], unique=True)
    op.create_index("ix_game_states_user_id", "game_states", ["user_id"])

def downgrade() -> None:
    op.drop_index("ix_game_states_user_id", table_name="game_states")
    op.drop_index("ix_game_states_player_key", table_name="game_states")
    op.drop_table("game_states")
