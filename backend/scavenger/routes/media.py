from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from scavenger.auth_deps import get_current_user
from scavenger.services.storage import MediaStorage, get_storage

router = APIRouter(tags=["media"])

@router.get("/uploads/{key:path}", dependencies=[Depends(get_current_user)])
async def get_upload(key: str, storage: MediaStorage = Depends(get_storage)):
    """Serve a stored photo. Login required, any user."""
    try:
        data, content_type = storage.get_bytes(key)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Image not found")
    return Response(content=data, media_type=content_type)
