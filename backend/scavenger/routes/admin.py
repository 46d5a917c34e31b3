from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
import structlog
from scavenger.auth_deps import require_admin
from scavenger.db import get_session
from scavenger.models.submission import Submission
from scavenger.models.user import User
from scavenger.schemas.submission import ReviewRequest, SubmissionPublic
from scavenger.services.submissions import (
    AlreadyReviewed, InvalidReview, apply_review, list_all, to_public, validate_review,
)

router = APIRouter(prefix="/api/admin", tags=["admin"])
log = structlog.get_logger()


@router.get("/submissions", response_model=list[SubmissionPublic])
async def all_submissions(
    reviewed: bool | None = Query(default=None, description="filter by review status"),
    session: AsyncSession = Depends(get_session),
    admin: User = Depends(require_admin),
):
    return [to_public(s) for s in await list_all(session, reviewed=reviewed)]


@router.put("/submissions/{submission_id}", response_model=SubmissionPublic)
async def review_submission(
    submission_id: int,
    payload: ReviewRequest,
    session: AsyncSession = Depends(get_session),
    admin: User = Depends(require_admin),
):
    try:
        comment = validate_review(payload.admin_comment, payload.reviewed)
    except InvalidReview as e:
        raise HTTPException(status_code=400, detail=str(e))

    sub = await session.get(Submission, submission_id)
    if not sub:
        raise HTTPException(status_code=404, detail="Submission not found")
    try:
        apply_review(sub, comment)
    except AlreadyReviewed:
        raise HTTPException(status_code=409, detail="Submission has already been reviewed")
    await session.commit()
    await session.refresh(sub)
    log.info("submission_reviewed", submission_id=sub.id, admin_id=admin.id)
    return to_public(sub)
