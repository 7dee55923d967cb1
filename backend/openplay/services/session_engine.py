"""
Session Facade: the engine's command surface.

Every command takes the current PlaySession (or None) and returns the next
one. A rejected precondition, including "no session active", returns the
input unchanged; use commands.run_command(...) to learn why.

Commands never block and never talk to storage or transport.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from openplay.models.activity import ActivityType
from openplay.models.court import Court, CourtStatus
from openplay.models.game import GameScore, TeamSide
from openplay.models.player import Player
from openplay.models.session import PlaySession, SessionConfig
from openplay.services import activity_log, court_lifecycle, queue_manager
from openplay.services.commands import CommandRejected, command
from openplay.services.rotation_policy import select_next_teams
from openplay.utils.courts import default_court_names
from openplay.utils.ids import generate_share_code

logger = logging.getLogger(__name__)


# ── Session ──────────────────────────────────────────────────────────────


def create_session(config: SessionConfig) -> PlaySession:
    session = PlaySession(
        name=config.name,
        location=config.location,
        date=config.date,
        time=config.time,
        courts=[Court(name=name) for name in default_court_names(config.court_count)],
        rotation_mode=config.rotation_mode,
        share_code=generate_share_code(),
    )
    activity_log.record(session, ActivityType.player_added, "Session started")
    logger.info(
        "Session %s created: %d courts, rotation=%s",
        session.id,
        len(session.courts),
        session.rotation_mode.value,
    )
    return session


def end_session(session: Optional[PlaySession]) -> None:
    """Tear the session down. The whole state, log included, is discarded."""
    if session is not None:
        logger.info("Session %s ended after %d games", session.id, len(session.games_completed))
    return None


# ── Courts ───────────────────────────────────────────────────────────────


@command
def add_court(session: PlaySession) -> None:
    court_lifecycle.add_court(session)


@command
def remove_court(session: PlaySession, court_id: str) -> None:
    court_lifecycle.remove_court(session, court_id)


@command
def rename_court(session: PlaySession, court_id: str, name: str) -> None:
    court_lifecycle.rename_court(session, court_id, name)


@command
def set_court_status(session: PlaySession, court_id: str, status: CourtStatus) -> None:
    court_lifecycle.set_court_status(session, court_id, CourtStatus(status))


# ── Players ──────────────────────────────────────────────────────────────


def _add_player(session: PlaySession, name: str, skill_level: Optional[int], move_to_front: bool) -> Player:
    name = (name or "").strip()
    if not name:
        raise CommandRejected("player name is empty")
    player = Player(name=name, skill_level=skill_level)
    session.players.append(player)
    queue_manager.enqueue(session.queue, player.id, at_front=move_to_front)
    if move_to_front:
        message = f"{name} added and moved to front of queue"
    else:
        message = f"{name} joined the session"
    activity_log.record(session, ActivityType.player_added, message, player_ids=[player.id], player_names=[name])
    return player


@command
def add_player(
    session: PlaySession,
    name: str,
    skill_level: Optional[int] = None,
    move_to_front: bool = False,
) -> None:
    _add_player(session, name, skill_level, move_to_front)


@command
def add_players(session: PlaySession, names: List[str], move_to_front: bool = False) -> None:
    """Add a batch of new names. With move_to_front the first name ends at position 0."""
    new_names, _ = queue_manager.split_new_names(session.players, names)
    if not new_names:
        raise CommandRejected("no new names to add")
    ordered = list(reversed(new_names)) if move_to_front else new_names
    for name in ordered:
        _add_player(session, name, None, move_to_front)


def add_players_from_text(
    session: Optional[PlaySession],
    text: str,
    move_to_front: bool = False,
) -> Tuple[Optional[PlaySession], List[str]]:
    """Parse a pasted roster and add the new names.

    Returns (next session, duplicate names that were skipped).
    """
    if session is None:
        return session, []
    names = queue_manager.parse_names(text)
    _, duplicates = queue_manager.split_new_names(session.players, names)
    return add_players(session, names, move_to_front), duplicates


@command
def remove_player(session: PlaySession, player_id: str) -> None:
    player = session.find_player(player_id)
    if player is None:
        raise CommandRejected(f"player {player_id} not found")
    if player_id in session.seated_player_ids():
        raise CommandRejected(f"{player.name} is in a game")
    session.players.remove(player)
    queue_manager.dequeue(session.queue, player_id)


@command
def toggle_player_active(session: PlaySession, player_id: str) -> None:
    player = session.find_player(player_id)
    if player is None:
        raise CommandRejected(f"player {player_id} not found")
    player.is_active = not player.is_active


def is_name_duplicate(session: Optional[PlaySession], name: str) -> bool:
    if session is None:
        return False
    return queue_manager.is_name_duplicate(session.players, name)


# ── Queue ────────────────────────────────────────────────────────────────


@command
def enqueue(session: PlaySession, player_id: str, at_front: bool = False) -> None:
    player = session.find_player(player_id)
    if player is None:
        raise CommandRejected(f"player {player_id} not found")
    if player_id in session.seated_player_ids():
        raise CommandRejected(f"{player.name} is in a game")
    if not queue_manager.enqueue(session.queue, player_id, at_front=at_front):
        raise CommandRejected(f"{player.name} is already queued")
    activity_log.record(
        session,
        ActivityType.player_queued,
        f"{player.name} joined the queue",
        player_ids=[player_id],
        player_names=[player.name],
    )


@command
def dequeue(session: PlaySession, player_id: str) -> None:
    if not queue_manager.dequeue(session.queue, player_id):
        raise CommandRejected(f"player {player_id} is not queued")


def _move(session: PlaySession, player_id: str, offset: int) -> None:
    new_index = queue_manager.move(session.queue, player_id, offset)
    if new_index is None:
        raise CommandRejected("player is not queued or already at the boundary")
    name = session.player_name(player_id)
    direction = "up" if offset < 0 else "down"
    activity_log.record(
        session,
        ActivityType.player_moved_up if offset < 0 else ActivityType.player_moved_down,
        f"{name} moved {direction} to position {new_index + 1}",
        player_ids=[player_id],
        player_names=[name],
    )


@command
def move_up(session: PlaySession, player_id: str) -> None:
    _move(session, player_id, -1)


@command
def move_down(session: PlaySession, player_id: str) -> None:
    _move(session, player_id, 1)


@command
def move_to_front(session: PlaySession, player_id: str) -> None:
    if not queue_manager.move_to_front(session.queue, player_id):
        raise CommandRejected("player is not queued or already first")
    name = session.player_name(player_id)
    activity_log.record(
        session,
        ActivityType.player_moved_front,
        f"{name} skipped to front of queue",
        player_ids=[player_id],
        player_names=[name],
    )


# ── Games ────────────────────────────────────────────────────────────────


@command
def start_game(session: PlaySession, court_id: str, team1: List[str], team2: List[str]) -> None:
    court_lifecycle.start_game(session, court_id, team1, team2)


def _auto_assign(session: PlaySession, court_id: str) -> None:
    selection = select_next_teams(session, court_id)
    if selection is None:
        raise CommandRejected("not enough eligible players for this court")
    court_lifecycle.start_game(session, court_id, selection.team1, selection.team2)


@command
def auto_assign_next_game(session: PlaySession, court_id: str) -> None:
    _auto_assign(session, court_id)


@command
def end_game(
    session: PlaySession,
    court_id: str,
    winner: TeamSide,
    score: Optional[GameScore] = None,
    auto_assign: bool = False,
) -> None:
    """End the game on court_id; with auto_assign, refill the court in the same transaction."""
    court_lifecycle.end_game(session, court_id, winner, score)
    if auto_assign:
        try:
            _auto_assign(session, court_id)
        except CommandRejected as exc:
            logger.debug("Court %s left open after game: %s", court_id, exc.reason)


@command
def cancel_game(session: PlaySession, court_id: str) -> None:
    court_lifecycle.cancel_game(session, court_id)


@command
def swap_players(
    session: PlaySession,
    court_id: str,
    from_team: TeamSide,
    from_slot: int,
    to_team: TeamSide,
    to_slot: int,
) -> None:
    court_lifecycle.swap_players(session, court_id, from_team, from_slot, to_team, to_slot)


@command
def remove_player_from_game(session: PlaySession, court_id: str, team: TeamSide, slot: int) -> None:
    court_lifecycle.remove_player_from_game(session, court_id, team, slot)


@command
def pull_player_to_game(session: PlaySession, court_id: str, team: TeamSide, slot: int) -> None:
    court_lifecycle.pull_player_to_game(session, court_id, team, slot)


# ── Queries ──────────────────────────────────────────────────────────────


def get_player(session: Optional[PlaySession], player_id: str) -> Optional[Player]:
    if session is None:
        return None
    return session.find_player(player_id)


def players_in_queue(session: Optional[PlaySession]) -> List[Player]:
    if session is None:
        return []
    return [p for p in (session.find_player(pid) for pid in session.queue) if p is not None]


def available_players(session: Optional[PlaySession]) -> List[Player]:
    """Active players not seated in any game."""
    if session is None:
        return []
    seated = session.seated_player_ids()
    return [p for p in session.players if p.is_active and p.id not in seated]


def wait_minutes(player: Player, now: Optional[datetime] = None) -> int:
    """Whole minutes since the player checked in."""
    now = now or datetime.utcnow()
    return max(0, int((now - player.checked_in_at).total_seconds() // 60))
