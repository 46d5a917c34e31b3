from __future__ import annotations
from pydantic import Field
from scavenger.schemas.base import CamelModel

class RegisterRequest(CamelModel):
    username: str = Field(min_length=3, max_length=32, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(min_length=6, max_length=128)

class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

class UserPublic(CamelModel):
    id: int
    username: str
    is_admin: bool
