"""
Slot editing on a game in progress: remove to queue, pull from queue, swap,
and ending a game that still has empty slots.
"""
from openplay.models.activity import ActivityType
from openplay.models.game import TeamSide
from openplay.services import session_engine
from openplay.services.commands import run_command
from tests.helpers import assert_invariants, make_session, player_id, queue_names


def _in_progress(names=("Alice", "Bob", "Cara", "Dee", "Eve", "Finn")):
    state = make_session(names=list(names))
    court_id = state.courts[0].id
    state = session_engine.auto_assign_next_game(state, court_id)
    return state, court_id


def test_remove_player_goes_second_in_queue():
    state, court_id = _in_progress()
    assert queue_names(state) == ["Eve", "Finn"]

    state = session_engine.remove_player_from_game(state, court_id, TeamSide.team1, 0)
    game = state.find_court(court_id).current_game
    assert game.team1[0] is None
    assert queue_names(state) == ["Eve", "Alice", "Finn"]
    entry = state.activity_log[0]
    assert entry.type is ActivityType.player_removed
    assert entry.message == "Alice removed from Court 1 and moved to 2nd in queue"
    assert_invariants(state)


def test_pull_player_fills_slot_from_queue_head():
    state, court_id = _in_progress()
    state = session_engine.remove_player_from_game(state, court_id, TeamSide.team1, 0)
    state = session_engine.pull_player_to_game(state, court_id, TeamSide.team1, 0)

    game = state.find_court(court_id).current_game
    assert game.team1[0] == player_id(state, "Eve")
    assert queue_names(state) == ["Alice", "Finn"]
    assert state.activity_log[0].type is ActivityType.player_added
    assert state.activity_log[0].message == "Eve pulled from queue to Court 1"
    assert_invariants(state)


def test_remove_with_empty_queue_lands_at_head():
    state, court_id = _in_progress(names=("Alice", "Bob", "Cara", "Dee"))
    state = session_engine.remove_player_from_game(state, court_id, TeamSide.team2, 1)
    assert queue_names(state) == ["Dee"]


def test_pull_into_occupied_slot_is_rejected():
    state, court_id = _in_progress()
    result = run_command(session_engine.pull_player_to_game, state, court_id, TeamSide.team1, 0)
    assert result.applied is False
    assert result.reason == "slot is occupied"


def test_pull_with_empty_queue_is_rejected():
    state, court_id = _in_progress(names=("Alice", "Bob", "Cara", "Dee"))
    state = session_engine.remove_player_from_game(state, court_id, TeamSide.team1, 0)
    state = session_engine.dequeue(state, player_id(state, "Alice"))
    assert session_engine.pull_player_to_game(state, court_id, TeamSide.team1, 0) is state


def test_remove_from_empty_slot_is_rejected():
    state, court_id = _in_progress()
    state = session_engine.remove_player_from_game(state, court_id, TeamSide.team1, 0)
    assert session_engine.remove_player_from_game(state, court_id, TeamSide.team1, 0) is state


def test_slot_out_of_range_is_rejected():
    state, court_id = _in_progress()
    assert session_engine.remove_player_from_game(state, court_id, TeamSide.team1, 2) is state


def test_editing_without_game_is_rejected():
    state = make_session(names=["Alice"])
    assert session_engine.remove_player_from_game(state, state.courts[0].id, TeamSide.team1, 0) is state


def test_swap_players_between_teams():
    state, court_id = _in_progress()
    state = session_engine.swap_players(state, court_id, TeamSide.team1, 1, TeamSide.team2, 0)
    game = state.find_court(court_id).current_game
    assert [state.player_name(p) for p in game.team1] == ["Alice", "Cara"]
    assert [state.player_name(p) for p in game.team2] == ["Bob", "Dee"]


def test_end_game_skips_empty_slots():
    state, court_id = _in_progress()
    state = session_engine.remove_player_from_game(state, court_id, TeamSide.team2, 0)
    state = session_engine.end_game(state, court_id, TeamSide.team1)

    played = {p.name: p.games_played for p in state.players}
    assert played == {"Alice": 1, "Bob": 1, "Cara": 0, "Dee": 1, "Eve": 0, "Finn": 0}
    assert queue_names(state) == ["Eve", "Cara", "Finn", "Alice", "Bob", "Dee"]
    assert_invariants(state)


def test_end_game_rejects_winner_with_no_players():
    state, court_id = _in_progress()
    state = session_engine.remove_player_from_game(state, court_id, TeamSide.team2, 0)
    state = session_engine.remove_player_from_game(state, court_id, TeamSide.team2, 1)
    result = run_command(session_engine.end_game, state, court_id, TeamSide.team2)
    assert result.applied is False
    assert state.games_completed == []
