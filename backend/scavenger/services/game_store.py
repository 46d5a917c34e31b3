from __future__ import annotations
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from scavenger.models.game_state import GameStateRecord
from scavenger.schemas.game import GameState


def user_key(user_id: int) -> str:
    return f"user:{user_id}"

def anon_key(token: str) -> str:
    return f"anon:{token}"


def _to_state(rec: GameStateRecord) -> GameState:
    return GameState(
        current_location_index=rec.current_location_index,
        visible_clue_indices=list(rec.visible_clue_indices or []),
        start_time=rec.start_time,
        end_time=rec.end_time,
        show_intro=rec.show_intro,
        completed_locations=list(rec.completed_locations or []),
        skipped_locations=list(rec.skipped_locations or []),
    )


async def load_state(session: AsyncSession, player_key: str) -> GameState | None:
    rec = await session.scalar(select(GameStateRecord).where(GameStateRecord.player_key == player_key))
    return _to_state(rec) if rec else None


async def save_state(session: AsyncSession, player_key: str, state: GameState, user_id: int | None = None) -> None:
    """Upsert the player's state. Plain read-modify-write: concurrent saves are last-writer-wins."""
    rec = await session.scalar(select(GameStateRecord).where(GameStateRecord.player_key == player_key))
    if rec is None:
        rec = GameStateRecord(player_key=player_key, user_id=user_id)
        session.add(rec)
    rec.current_location_index = state.current_location_index
    rec.visible_clue_indices = list(state.visible_clue_indices)
    rec.start_time = state.start_time
    rec.end_time = state.end_time
    rec.show_intro = state.show_intro
    rec.completed_locations = list(state.completed_locations)
    rec.skipped_locations = list(state.skipped_locations)
    await session.commit()
