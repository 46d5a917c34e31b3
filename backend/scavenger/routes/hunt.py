from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from scavenger.db import get_session
from scavenger.schemas.location import LocationPublic
from scavenger.services.locations import list_locations

router = APIRouter(prefix="/api", tags=["hunt"])

INTRO = {
    "title": "Scavenger Hunt Adventure",
    "instructions": [
        "Welcome to our interactive scavenger hunt!",
        "You'll receive clues about different locations one at a time.",
        "For each location, try to guess the answer based on the clues.",
        "If you're stuck, you can request more clues.",
        "When you solve a location, take a photo of it (or something related) to prove your answer.",
        "Your progress is saved, so you can continue the hunt anytime.",
        "Complete all locations to finish the hunt!",
        "Admins will review your submissions and provide feedback.",
    ],
}

@router.get("/locations", response_model=list[LocationPublic])
async def get_locations(session: AsyncSession = Depends(get_session)):
    # answers are included; the hunt is a casual, non-adversarial game
    return [LocationPublic.model_validate(loc) for loc in await list_locations(session)]

@router.get("/intro")
async def intro():
    return INTRO
