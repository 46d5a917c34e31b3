from __future__ import annotations
from datetime import datetime, timezone as dt_tz
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from scavenger.models.location import Location
from scavenger.models.submission import Submission
from scavenger.schemas.submission import SubmissionPublic
from scavenger.services.answers import answers_match


class InvalidReview(ValueError):
    pass

class AlreadyReviewed(Exception):
    pass


def image_url_for(storage_key: str) -> str:
    return f"/uploads/{storage_key}"

def to_public(s: Submission) -> SubmissionPublic:
    return SubmissionPublic(
        id=s.id,
        user_id=s.user_id,
        location_id=s.location_id,
        image_url=image_url_for(s.storage_key),
        answer=s.answer,
        correct_answer=s.correct_answer,
        submitted_at=s.submitted_at,
        admin_comment=s.admin_comment,
        reviewed=s.reviewed,
    )


def build_submission(*, user_id: int, location: Location, answer: str, storage_key: str, mime_type: str | None) -> Submission:
    # correctness is always recomputed here; the client never gets to claim it
    return Submission(
        user_id=user_id,
        location_id=location.id,
        storage_key=storage_key,
        mime_type=mime_type,
        answer=answer,
        correct_answer=answers_match(answer, location.answer),
        reviewed=False,
    )


def validate_review(admin_comment: str | None, reviewed: bool | None) -> str:
    """Returns the cleaned comment or raises InvalidReview."""
    comment = (admin_comment or "").strip()
    if not comment or reviewed is None:
        raise InvalidReview("Admin comment and reviewed status are required")
    if reviewed is not True:
        raise InvalidReview("Reviews cannot be reopened; reviewed must be true")
    return comment


def apply_review(sub: Submission, comment: str, now: datetime | None = None) -> Submission:
    if sub.reviewed:
        raise AlreadyReviewed(f"Submission {sub.id} has already been reviewed")
    sub.admin_comment = comment
    sub.reviewed = True
    sub.reviewed_at = now or datetime.now(dt_tz.utc)
    return sub


async def list_for_user(session: AsyncSession, user_id: int) -> list[Submission]:
    q = (
        select(Submission)
        .where(Submission.user_id == user_id)
        .order_by(Submission.submitted_at.desc(), Submission.id.desc())
    )
    return list((await session.execute(q)).scalars().all())

async def list_all(session: AsyncSession, reviewed: bool | None = None) -> list[Submission]:
    q = select(Submission)
    if reviewed is not None:
        q = q.where(Submission.reviewed == reviewed)
    q = q.order_by(Submission.submitted_at.desc(), Submission.id.desc())
    return list((await session.execute(q)).scalars().all())
