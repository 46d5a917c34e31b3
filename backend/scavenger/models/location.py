from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from scavenger.db import Base

JSONType = JSON().with_variant(JSONB(), "postgresql")

class Location(Base):
    """A hunt target. Rows are never updated; id order is the hunt order."""
    __tablename__ = "locations"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    clues: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    answer: Mapped[str] = mapped_column(Text(), nullable=False)
