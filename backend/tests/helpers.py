"""Engine-level helpers shared by the service tests."""
from openplay.models.court import CourtStatus
from openplay.models.session import RotationMode, SessionConfig
from openplay.services import session_engine


def make_session(rotation_mode=RotationMode.full_rotation, court_count=1, names=()):
    """Engine-level helper: a fresh session with names queued in order."""
    state = session_engine.create_session(
        SessionConfig(name="Tuesday Open Play", court_count=court_count, rotation_mode=rotation_mode)
    )
    for name in names:
        state = session_engine.add_player(state, name)
    return state


def player_id(state, name):
    return next(p.id for p in state.players if p.name == name)


def queue_names(state):
    return [state.player_name(pid) for pid in state.queue]


def assert_invariants(state):
    """Queue and seated players are disjoint; current_game iff in_game."""
    seated = state.seated_player_ids()
    assert not seated & set(state.queue)
    assert len(state.queue) == len(set(state.queue))
    for court in state.courts:
        assert (court.status is CourtStatus.in_game) == (court.current_game is not None)


