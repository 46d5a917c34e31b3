from __future__ import annotations
from scavenger.schemas.base import CamelModel

class LocationPublic(CamelModel):
    id: int
    name: str
    clues: list[str]
    answer: str
