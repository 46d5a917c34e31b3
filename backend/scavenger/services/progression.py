"""
Hunt progression: a small state machine over GameState.

    not_started --start--> in_progress --(last location solved/skipped)--> completed
         \___________________restart (from anywhere)___________________/

Every transition takes the current state plus the ordered location list and
returns a new GameState; the input is never modified. Transitions other than
restart are no-ops once the hunt is completed or the index has run past the
location list (stale state saved against a shorter hunt).
"""
from __future__ import annotations
import time
from typing import Protocol, Sequence
from scavenger.schemas.game import GameState, GameSummary, Phase
from scavenger.services.answers import answers_match


class HuntLocation(Protocol):
    clues: list[str]
    answer: str


def now_ms() -> int:
    return int(time.time() * 1000)


def initial_state() -> GameState:
    return GameState()


def phase(state: GameState) -> Phase:
    if state.end_time is not None:
        return "completed"
    if state.show_intro:
        return "not_started"
    return "in_progress"


def _frozen(state: GameState, locations: Sequence[HuntLocation]) -> bool:
    return state.current_location_index >= len(locations) or state.end_time is not None


def start(state: GameState, locations: Sequence[HuntLocation], now: int | None = None) -> GameState:
    if _frozen(state, locations) or not state.show_intro:
        return state
    return state.model_copy(update={
        "show_intro": False,
        "start_time": now if now is not None else now_ms(),
        "visible_clue_indices": [0],
    })


def _advance(state: GameState, total: int, now: int, skipped: bool) -> GameState:
    idx = state.current_location_index
    update: dict = {"completed_locations": [*state.completed_locations, idx]}
    if skipped:
        update["skipped_locations"] = [*state.skipped_locations, idx]
    if idx + 1 >= total:
        # terminal: index stays on the last location
        update["end_time"] = now
    else:
        update["current_location_index"] = idx + 1
        update["visible_clue_indices"] = [0]
    return state.model_copy(update=update)


def check_answer(
    state: GameState, locations: Sequence[HuntLocation], guess: str, now: int | None = None
) -> tuple[GameState, bool]:
    """Returns (new_state, correct). A wrong guess leaves the state untouched."""
    if _frozen(state, locations):
        return state, False
    location = locations[state.current_location_index]
    if not answers_match(guess, location.answer):
        return state, False
    return _advance(state, len(locations), now if now is not None else now_ms(), skipped=False), True


def request_next_clue(state: GameState, locations: Sequence[HuntLocation]) -> GameState:
    if _frozen(state, locations):
        return state
    clues = locations[state.current_location_index].clues
    visible = set(state.visible_clue_indices)
    for i in range(len(clues)):
        if i not in visible:
            return state.model_copy(update={"visible_clue_indices": [*state.visible_clue_indices, i]})
    # every clue already showing; the caller should offer skip instead
    return state


def all_clues_visible(state: GameState, locations: Sequence[HuntLocation]) -> bool:
    if state.current_location_index >= len(locations):
        return True
    clues = locations[state.current_location_index].clues
    return set(range(len(clues))) <= set(state.visible_clue_indices)


def give_up_and_skip(
    state: GameState, locations: Sequence[HuntLocation], now: int | None = None
) -> tuple[GameState, str | None]:
    """Returns (new_state, revealed_answer). The answer is None when nothing was skipped."""
    if _frozen(state, locations):
        return state, None
    answer = locations[state.current_location_index].answer
    return _advance(state, len(locations), now if now is not None else now_ms(), skipped=True), answer


def restart(now: int | None = None) -> GameState:
    return initial_state().model_copy(update={
        "show_intro": False,
        "start_time": now if now is not None else now_ms(),
    })


def summarize(state: GameState, locations: Sequence[HuntLocation], now: int | None = None) -> GameSummary:
    elapsed = None
    if state.start_time is not None:
        end = state.end_time if state.end_time is not None else (now if now is not None else now_ms())
        elapsed = max(0, (end - state.start_time) // 1000)
    return GameSummary(
        phase=phase(state),
        total_locations=len(locations),
        completed=len(state.completed_locations),
        skipped=len(state.skipped_locations),
        elapsed_seconds=elapsed,
    )
