from __future__ import annotations
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, CheckConstraint, String, Text, DateTime, ForeignKey, Integer, func
from scavenger.db import Base


class Submission(Base):
    __tablename__ = "submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    location_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("locations.id", ondelete="CASCADE"), index=True, nullable=False
    )

    storage_key: Mapped[str] = mapped_column(Text(), nullable=False)
    mime_type: Mapped[str | None] = mapped_column(String(64), nullable=True)

    answer: Mapped[str] = mapped_column(Text(), nullable=False)
    correct_answer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)  # computed server-side

    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Admin review (one-way: reviewed never goes back to False)
    admin_comment: Mapped[str | None] = mapped_column(Text(), nullable=True)
    reviewed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("NOT reviewed OR admin_comment IS NOT NULL", name="ck_submissions_review_has_comment"),
    )
