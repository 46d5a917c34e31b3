from __future__ import annotations
from datetime import datetime
from scavenger.schemas.base import CamelModel


class SubmissionPublic(CamelModel):
    id: int
    user_id: int
    location_id: int
    # served via the /uploads proxy; storage keys stay internal
    image_url: str
    answer: str
    correct_answer: bool
    submitted_at: datetime
    admin_comment: str | None = None
    reviewed: bool


class ReviewRequest(CamelModel):
    admin_comment: str | None = None
    reviewed: bool | None = None
