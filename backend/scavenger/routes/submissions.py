from __future__ import annotations
import uuid
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog
from scavenger.auth_deps import get_current_user
from scavenger.config import settings
from scavenger.db import get_session
from scavenger.models.location import Location
from scavenger.models.user import User
from scavenger.schemas.submission import SubmissionPublic
from scavenger.services.media import validate_image, ext_for_mime
from scavenger.services.storage import MediaStorage, get_storage
from scavenger.services.submissions import build_submission, list_for_user, to_public

router = APIRouter(prefix="/api/submissions", tags=["submissions"])
log = structlog.get_logger()


@router.post("", response_model=SubmissionPublic, status_code=201)
async def create_submission(
    image: UploadFile | None = File(default=None, description="Photo proof (JPEG or PNG)"),
    location_id: str | None = Form(default=None, alias="locationId"),
    answer: str | None = Form(default=None),
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
    storage: MediaStorage = Depends(get_storage),
):
    if image is None:
        raise HTTPException(status_code=400, detail="Image upload is required")
    if not location_id or not answer or not answer.strip():
        raise HTTPException(status_code=400, detail="LocationId and answer are required")
    try:
        loc_id = int(location_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="LocationId must be an integer")

    location = await session.get(Location, loc_id)
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")

    data = await image.read()
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=400, detail="Image too large")
    try:
        mime = validate_image(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid image: {e}")

    storage_key = f"submissions/{user.id}/{location.id}/{uuid.uuid4().hex}.{ext_for_mime(mime)}"
    storage.put_bytes(storage_key, data, mime)

    sub = build_submission(
        user_id=user.id, location=location, answer=answer.strip(), storage_key=storage_key, mime_type=mime
    )
    user_id, location_id = user.id, location.id
    session.add(sub)
    try:
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        storage.delete(storage_key)  # no row points at it
        log.exception("submission_save_failed", user_id=user_id, location_id=location_id)
        raise HTTPException(status_code=500, detail="Failed to create submission")
    await session.refresh(sub)
    log.info("submission_created", submission_id=sub.id, user_id=user.id, location_id=location.id,
             correct=sub.correct_answer)
    return to_public(sub)


@router.get("/my", response_model=list[SubmissionPublic])
async def my_submissions(session: AsyncSession = Depends(get_session), user: User = Depends(get_current_user)):
    return [to_public(s) for s in await list_for_user(session, user.id)]
