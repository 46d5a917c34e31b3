from __future__ import annotations
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Integer, String, func
from scavenger.db import Base
from scavenger.models.location import JSONType


class GameStateRecord(Base):
    __tablename__ = "game_states"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 'user:<id>' for logged-in players, 'anon:<uuid>' for cookie-only players
    player_key: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=True
    )

    current_location_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    visible_clue_indices: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    start_time: Mapped[int | None] = mapped_column(BigInteger, nullable=True)  # epoch ms
    end_time: Mapped[int | None] = mapped_column(BigInteger, nullable=True)  # epoch ms
    show_intro: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    completed_locations: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    skipped_locations: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
