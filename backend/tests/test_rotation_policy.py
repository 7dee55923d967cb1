"""
Rotation Policy: auto-assignment across the four rotation modes.
"""
import pytest

from openplay.models.court import CourtStatus
from openplay.models.game import TeamSide
from openplay.models.session import RotationMode
from openplay.services import session_engine
from openplay.services.rotation_policy import eligible_queue, select_next_teams
from tests.helpers import assert_invariants, make_session, player_id, queue_names


def _team_names(state, court_id):
    game = state.find_court(court_id).current_game
    return [state.player_name(p) for p in game.team1], [state.player_name(p) for p in game.team2]


class TestFullRotation:
    def test_auto_assign_takes_first_four(self, full_rotation_session):
        """Alice, Bob vs Cara, Dee; queue empties."""
        state = full_rotation_session
        court_id = state.courts[0].id
        state = session_engine.auto_assign_next_game(state, court_id)
        assert _team_names(state, court_id) == (["Alice", "Bob"], ["Cara", "Dee"])
        assert state.queue == []
        assert_invariants(state)

    def test_end_game_then_queue_in_team_order(self, full_rotation_session):
        state = full_rotation_session
        court_id = state.courts[0].id
        state = session_engine.auto_assign_next_game(state, court_id)
        state = session_engine.end_game(state, court_id, TeamSide.team1)
        assert state.games_completed[0].winner is TeamSide.team1
        assert queue_names(state) == ["Alice", "Bob", "Cara", "Dee"]
        assert state.find_court(court_id).status is CourtStatus.available

    def test_skill_based_behaves_like_full_rotation(self):
        state = make_session(RotationMode.skill_based, names=["Alice", "Bob", "Cara", "Dee", "Eve"])
        court_id = state.courts[0].id
        state = session_engine.auto_assign_next_game(state, court_id)
        assert _team_names(state, court_id) == (["Alice", "Bob"], ["Cara", "Dee"])
        assert queue_names(state) == ["Eve"]

    def test_fewer_than_four_is_noop(self):
        state = make_session(names=["Alice", "Bob", "Cara"])
        assert session_engine.auto_assign_next_game(state, state.courts[0].id) is state

    def test_inactive_players_are_skipped_not_dequeued(self):
        state = make_session(names=["Alice", "Bob", "Cara", "Dee", "Eve"])
        state = session_engine.toggle_player_active(state, player_id(state, "Bob"))
        court_id = state.courts[0].id
        state = session_engine.auto_assign_next_game(state, court_id)
        assert _team_names(state, court_id) == (["Alice", "Cara"], ["Dee", "Eve"])
        assert queue_names(state) == ["Bob"]

    def test_court_not_available_is_noop(self, full_rotation_session):
        state = full_rotation_session
        court_id = state.courts[0].id
        state = session_engine.set_court_status(state, court_id, CourtStatus.maintenance)
        assert select_next_teams(state, court_id) is None
        assert session_engine.auto_assign_next_game(state, court_id) is state


@pytest.mark.parametrize("mode", [RotationMode.winners_stay, RotationMode.king_of_court])
class TestWinnersStay:
    def test_winners_stay_against_next_two(self, mode):
        """Eve and Finn join mid-game; winners Alice & Bob face them next."""
        state = make_session(mode, names=["Alice", "Bob", "Cara", "Dee"])
        court_id = state.courts[0].id
        state = session_engine.auto_assign_next_game(state, court_id)
        state = session_engine.add_players(state, ["Eve", "Finn"])
        state = session_engine.end_game(state, court_id, TeamSide.team1)

        state = session_engine.auto_assign_next_game(state, court_id)
        assert _team_names(state, court_id) == (["Alice", "Bob"], ["Eve", "Finn"])
        assert queue_names(state) == ["Cara", "Dee"]
        assert_invariants(state)

    def test_winners_are_never_their_own_challengers(self, mode):
        state = make_session(mode, names=["Alice", "Bob", "Cara", "Dee"])
        court_id = state.courts[0].id
        state = session_engine.auto_assign_next_game(state, court_id)
        state = session_engine.end_game(state, court_id, TeamSide.team2)
        # queue is [Alice, Bob, Cara, Dee]; Cara & Dee won
        state = session_engine.auto_assign_next_game(state, court_id)
        assert _team_names(state, court_id) == (["Cara", "Dee"], ["Alice", "Bob"])
        assert state.queue == []

    def test_inactive_winner_falls_back_to_full_rotation(self, mode):
        state = make_session(mode, names=["Alice", "Bob", "Cara", "Dee"])
        court_id = state.courts[0].id
        state = session_engine.auto_assign_next_game(state, court_id)
        state = session_engine.add_players(state, ["Eve", "Finn", "Gus"])
        state = session_engine.end_game(state, court_id, TeamSide.team1)
        state = session_engine.toggle_player_active(state, player_id(state, "Alice"))

        # queue: Eve, Finn, Gus, Cara, Dee, Alice(inactive), Bob
        state = session_engine.auto_assign_next_game(state, court_id)
        assert _team_names(state, court_id) == (["Eve", "Finn"], ["Gus", "Cara"])
        assert queue_names(state) == ["Dee", "Alice", "Bob"]

    def test_end_game_with_auto_assign_refills_in_one_step(self, mode):
        state = make_session(mode, names=["Alice", "Bob", "Cara", "Dee", "Eve", "Finn"])
        court_id = state.courts[0].id
        state = session_engine.auto_assign_next_game(state, court_id)
        state = session_engine.end_game(state, court_id, TeamSide.team1, auto_assign=True)
        assert _team_names(state, court_id) == (["Alice", "Bob"], ["Eve", "Finn"])
        assert queue_names(state) == ["Cara", "Dee"]


def test_eligible_queue_excludes_unknown_and_inactive():
    state = make_session(names=["Alice", "Bob"])
    state = session_engine.toggle_player_active(state, player_id(state, "Bob"))
    assert eligible_queue(state) == [player_id(state, "Alice")]
