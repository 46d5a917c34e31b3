from __future__ import annotations
from typing import Literal
from pydantic import Field, field_validator
from scavenger.schemas.base import CamelModel

Phase = Literal["not_started", "in_progress", "completed"]


class GameState(CamelModel):
    current_location_index: int = Field(default=0, ge=0)
    visible_clue_indices: list[int] = Field(default_factory=lambda: [0])
    start_time: int | None = None  # epoch ms
    end_time: int | None = None  # epoch ms
    show_intro: bool = True
    completed_locations: list[int] = Field(default_factory=list)
    skipped_locations: list[int] = Field(default_factory=list)

    @field_validator("visible_clue_indices", "completed_locations", "skipped_locations")
    @classmethod
    def non_negative(cls, v: list[int]):
        if any(i < 0 for i in v):
            raise ValueError("indices must be >= 0")
        return v


class AnswerRequest(CamelModel):
    answer: str


class GameActionResult(CamelModel):
    state: GameState
    correct: bool | None = None
    revealed_answer: str | None = None


class GameSummary(CamelModel):
    phase: Phase
    total_locations: int
    completed: int
    skipped: int
    elapsed_seconds: int | None = None
