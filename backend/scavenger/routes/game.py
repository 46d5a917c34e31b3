from __future__ import annotations
import re
import uuid
from dataclasses import dataclass
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession
import structlog
from scavenger.auth_deps import get_optional_user
from scavenger.config import settings
from scavenger.db import get_session
from scavenger.models.user import User
from scavenger.schemas.game import AnswerRequest, GameActionResult, GameState, GameSummary
from scavenger.services import progression
from scavenger.services.game_store import anon_key, load_state, save_state, user_key
from scavenger.services.locations import list_locations

router = APIRouter(prefix="/api/game-state", tags=["game"])
log = structlog.get_logger()

_PLAYER_TOKEN = re.compile(r"^[0-9a-f]{32}$")
PLAYER_COOKIE_MAX_AGE = 365 * 24 * 3600


@dataclass
class Player:
    key: str
    user_id: int | None = None


async def get_player(
    request: Request,
    response: Response,
    user: User | None = Depends(get_optional_user),
) -> Player:
    """Logged-in users keep state under their account; everyone else gets a cookie-scoped player id."""
    if user is not None:
        return Player(key=user_key(user.id), user_id=user.id)
    token = request.cookies.get(settings.player_cookie_name)
    if not token or not _PLAYER_TOKEN.match(token):
        token = uuid.uuid4().hex
        response.set_cookie(
            settings.player_cookie_name,
            token,
            max_age=PLAYER_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
            secure=settings.cookie_secure,
        )
    return Player(key=anon_key(token))


async def _current_state(session: AsyncSession, player: Player) -> GameState:
    return await load_state(session, player.key) or progression.initial_state()


@router.get("", response_model=GameState)
async def get_game_state(session: AsyncSession = Depends(get_session), player: Player = Depends(get_player)):
    state = await load_state(session, player.key)
    if state is None:
        raise HTTPException(status_code=404, detail="Game state not found")
    return state


@router.post("")
async def put_game_state(
    payload: GameState,
    session: AsyncSession = Depends(get_session),
    player: Player = Depends(get_player),
):
    # Stored as sent: the client owns its progress (see DESIGN.md open questions)
    await save_state(session, player.key, payload, user_id=player.user_id)
    return {"message": "Game state saved successfully"}


@router.post("/start", response_model=GameActionResult)
async def start_hunt(session: AsyncSession = Depends(get_session), player: Player = Depends(get_player)):
    locations = await list_locations(session)
    state = progression.start(await _current_state(session, player), locations)
    await save_state(session, player.key, state, user_id=player.user_id)
    log.info("hunt_started", player=player.key)
    return GameActionResult(state=state)


@router.post("/answer", response_model=GameActionResult)
async def check_answer(
    payload: AnswerRequest,
    session: AsyncSession = Depends(get_session),
    player: Player = Depends(get_player),
):
    locations = await list_locations(session)
    before = await _current_state(session, player)
    state, correct = progression.check_answer(before, locations, payload.answer)
    if state is not before:
        await save_state(session, player.key, state, user_id=player.user_id)
    log.info("answer_checked", player=player.key, location_index=before.current_location_index, correct=correct)
    return GameActionResult(state=state, correct=correct)


@router.post("/next-clue", response_model=GameActionResult)
async def next_clue(session: AsyncSession = Depends(get_session), player: Player = Depends(get_player)):
    locations = await list_locations(session)
    before = await _current_state(session, player)
    state = progression.request_next_clue(before, locations)
    if state is not before:
        await save_state(session, player.key, state, user_id=player.user_id)
    return GameActionResult(state=state)


@router.post("/skip", response_model=GameActionResult)
async def skip_location(session: AsyncSession = Depends(get_session), player: Player = Depends(get_player)):
    locations = await list_locations(session)
    before = await _current_state(session, player)
    state, answer = progression.give_up_and_skip(before, locations)
    if state is not before:
        await save_state(session, player.key, state, user_id=player.user_id)
        log.info("location_skipped", player=player.key, location_index=before.current_location_index)
    return GameActionResult(state=state, revealed_answer=answer)


@router.post("/restart", response_model=GameActionResult)
async def restart_hunt(session: AsyncSession = Depends(get_session), player: Player = Depends(get_player)):
    state = progression.restart()
    await save_state(session, player.key, state, user_id=player.user_id)
    log.info("hunt_restarted", player=player.key)
    return GameActionResult(state=state)


@router.get("/summary", response_model=GameSummary)
async def summary(session: AsyncSession = Depends(get_session), player: Player = Depends(get_player)):
    locations = await list_locations(session)
    return progression.summarize(await _current_state(session, player), locations)
