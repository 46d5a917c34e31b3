from types import SimpleNamespace
import pytest
from scavenger.schemas.game import GameState
from scavenger.services import progression
from scavenger.services.locations import DEFAULT_LOCATIONS

NOW = 1_700_000_000_000


@pytest.fixture
def locations():
    return [SimpleNamespace(**loc) for loc in DEFAULT_LOCATIONS]


@pytest.fixture
def started(locations):
    return progression.start(progression.initial_state(), locations, now=NOW)


def test_initial_state_is_not_started():
    state = progression.initial_state()
    assert progression.phase(state) == "not_started"
    assert state.visible_clue_indices == [0]
    assert state.start_time is None and state.end_time is None


def test_start_moves_to_in_progress(started):
    assert progression.phase(started) == "in_progress"
    assert started.show_intro is False
    assert started.start_time == NOW
    assert started.visible_clue_indices == [0]


def test_start_twice_keeps_original_start_time(started, locations):
    again = progression.start(started, locations, now=NOW + 5000)
    assert again.start_time == NOW


def test_exact_answer_is_correct_for_every_location(locations):
    for i, loc in enumerate(locations):
        state = GameState(current_location_index=i, show_intro=False, start_time=NOW,
                          completed_locations=list(range(i)))
        _, correct = progression.check_answer(state, locations, loc.answer, now=NOW)
        assert correct, loc.answer


def test_partial_answer_is_correct(started, locations):
    state, correct = progression.check_answer(started, locations, "Pizza", now=NOW)
    assert correct
    assert state.current_location_index == 1
    assert state.completed_locations == [0]


def test_wrong_answer_changes_nothing(started, locations):
    state, correct = progression.check_answer(started, locations, "Rose Bowl", now=NOW)
    assert not correct
    assert state == started


def test_correct_answer_resets_visible_clues(started, locations):
    state = progression.request_next_clue(started, locations)
    state = progression.request_next_clue(state, locations)
    assert state.visible_clue_indices == [0, 1, 2]
    state, correct = progression.check_answer(state, locations, "prime pizza", now=NOW)
    assert correct
    assert state.visible_clue_indices == [0]


def test_full_run_completes_hunt(started, locations):
    state = started
    for loc in locations:
        assert len(state.completed_locations) == state.current_location_index
        state, correct = progression.check_answer(state, locations, loc.answer, now=NOW + 60_000)
        assert correct
    assert progression.phase(state) == "completed"
    assert state.end_time == NOW + 60_000
    assert len(state.completed_locations) == len(locations)
    # terminal location keeps its index
    assert state.current_location_index == len(locations) - 1


def test_completed_hunt_ignores_further_transitions(started, locations):
    state = started
    for loc in locations:
        state, _ = progression.check_answer(state, locations, loc.answer, now=NOW)
    last = locations[-1].answer
    after, correct = progression.check_answer(state, locations, last, now=NOW + 1)
    assert not correct
    assert after is state
    assert progression.request_next_clue(state, locations) is state
    assert progression.give_up_and_skip(state, locations, now=NOW + 1) == (state, None)


def test_next_clue_reveals_each_clue_once(started, locations):
    clues = locations[0].clues
    state = started
    for _ in range(len(clues)):
        state = progression.request_next_clue(state, locations)
    assert sorted(state.visible_clue_indices) == list(range(len(clues)))
    assert len(state.visible_clue_indices) == len(clues)
    assert progression.all_clues_visible(state, locations)
    assert progression.request_next_clue(state, locations) is state


def test_next_clue_fills_lowest_gap(locations):
    state = GameState(show_intro=False, visible_clue_indices=[0, 2])
    assert progression.request_next_clue(state, locations).visible_clue_indices == [0, 2, 1]


def test_skip_reveals_answer_and_advances(started, locations):
    state, answer = progression.give_up_and_skip(started, locations, now=NOW)
    assert answer == locations[0].answer
    assert state.current_location_index == 1
    assert state.completed_locations == [0]
    assert state.skipped_locations == [0]
    assert state.visible_clue_indices == [0]


def test_skip_on_last_location_completes(locations):
    last = len(locations) - 1
    state = GameState(current_location_index=last, show_intro=False, start_time=NOW,
                      completed_locations=list(range(last)))
    state, answer = progression.give_up_and_skip(state, locations, now=NOW + 10)
    assert answer == locations[last].answer
    assert state.end_time == NOW + 10
    assert state.current_location_index == last


def test_stale_index_is_a_no_op(locations):
    stale = GameState(current_location_index=len(locations), show_intro=False)
    assert progression.check_answer(stale, locations, "Starbucks") == (stale, False)
    assert progression.request_next_clue(stale, locations) is stale
    assert progression.give_up_and_skip(stale, locations) == (stale, None)
    assert progression.start(stale, locations) is stale


def test_restart_after_completion(started, locations):
    state = started
    for loc in locations:
        state, _ = progression.check_answer(state, locations, loc.answer, now=NOW)
    assert progression.phase(state) == "completed"

    fresh = progression.restart(now=NOW + 99)
    assert progression.phase(fresh) == "in_progress"
    assert fresh.current_location_index == 0
    assert fresh.visible_clue_indices == [0]
    assert fresh.end_time is None
    assert fresh.start_time == NOW + 99
    assert fresh.completed_locations == [] and fresh.skipped_locations == []


def test_transitions_do_not_mutate_input(started, locations):
    snapshot = started.model_copy(deep=True)
    progression.request_next_clue(started, locations)
    progression.check_answer(started, locations, "Prime Pizza", now=NOW)
    progression.give_up_and_skip(started, locations, now=NOW)
    assert started == snapshot


def test_summary_reports_elapsed_time(started, locations):
    state, _ = progression.give_up_and_skip(started, locations, now=NOW)
    s = progression.summarize(state, locations, now=NOW + 90_500)
    assert s.phase == "in_progress"
    assert s.total_locations == len(locations)
    assert s.completed == 1 and s.skipped == 1
    assert s.elapsed_seconds == 90

    assert progression.summarize(progression.initial_state(), locations).elapsed_seconds is None
