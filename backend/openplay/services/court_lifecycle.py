"""
Court & Game Lifecycle.

Per-court state machine:

    available   --start_game------> in_game
    in_game     --end_game--------> available
    in_game     --cancel_game-----> maintenance
    available  <--set_court_status--> maintenance

All functions mutate the given session in place and raise CommandRejected
when a precondition fails. They are wrapped into atomic commands by
session_engine; never call them on a session you can't throw away.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from openplay.models.activity import ActivityType
from openplay.models.court import Court, CourtStatus
from openplay.models.game import SLOTS_PER_TEAM, Game, GameScore, TeamSide
from openplay.models.session import PlaySession
from openplay.services import activity_log, queue_manager
from openplay.services.commands import CommandRejected
from openplay.services.score_parser import format_score
from openplay.utils.courts import clean_court_name, default_court_name

logger = logging.getLogger(__name__)


def require_court(session: PlaySession, court_id: str) -> Court:
    court = session.find_court(court_id)
    if court is None:
        raise CommandRejected(f"court {court_id} not found")
    return court


def require_game(session: PlaySession, court_id: str) -> Tuple[Court, Game]:
    court = require_court(session, court_id)
    if court.status is not CourtStatus.in_game or court.current_game is None:
        raise CommandRejected(f"{court.name} has no game in progress")
    return court, court.current_game


def _require_slot(slot: int) -> None:
    if not 0 <= slot < SLOTS_PER_TEAM:
        raise CommandRejected(f"slot {slot} out of range")


def _names(session: PlaySession, player_ids: List[Optional[str]]) -> List[str]:
    return [session.player_name(pid) if pid else "" for pid in player_ids]


# ── Courts ───────────────────────────────────────────────────────────────


def add_court(session: PlaySession) -> Court:
    court = Court(name=default_court_name(len(session.courts) + 1))
    session.courts.append(court)
    return court


def remove_court(session: PlaySession, court_id: str) -> None:
    court = require_court(session, court_id)
    if court.status is CourtStatus.in_game:
        raise CommandRejected(f"{court.name} is in play")
    if len(session.courts) <= 1:
        raise CommandRejected("cannot remove the last court")
    session.courts.remove(court)


def rename_court(session: PlaySession, court_id: str, name: str) -> None:
    court = require_court(session, court_id)
    cleaned = clean_court_name(name)
    if cleaned is None:
        raise CommandRejected("court name is empty")
    if cleaned == court.name:
        raise CommandRejected("court name unchanged")
    court.name = cleaned


def set_court_status(session: PlaySession, court_id: str, status: CourtStatus) -> None:
    """Toggle between available and maintenance. Games only start via start_game."""
    court = require_court(session, court_id)
    if court.status is CourtStatus.in_game:
        raise CommandRejected(f"{court.name} is in play")
    if status is CourtStatus.in_game:
        raise CommandRejected("use start_game to put a court in play")
    if court.status is status:
        raise CommandRejected(f"{court.name} is already {status.value}")
    court.status = status


# ── Games ────────────────────────────────────────────────────────────────


def start_game(session: PlaySession, court_id: str, team1: List[str], team2: List[str]) -> Game:
    court = require_court(session, court_id)
    if court.status is not CourtStatus.available:
        raise CommandRejected(f"{court.name} is not available")

    team1, team2 = list(team1), list(team2)
    if len(team1) != SLOTS_PER_TEAM or len(team2) != SLOTS_PER_TEAM:
        raise CommandRejected("each team needs exactly two players")
    player_ids = team1 + team2
    if not all(player_ids) or len(set(player_ids)) != len(player_ids):
        raise CommandRejected("a game needs four distinct players")
    seated = session.seated_player_ids()
    for pid in player_ids:
        if session.find_player(pid) is None:
            raise CommandRejected(f"player {pid} not found")
        if pid in seated:
            raise CommandRejected(f"{session.player_name(pid)} is already in a game")

    for pid in player_ids:
        queue_manager.dequeue(session.queue, pid)

    game = Game(court_id=court.id, team1=team1, team2=team2)
    court.status = CourtStatus.in_game
    court.current_game = game

    team1_names = _names(session, team1)
    team2_names = _names(session, team2)
    activity_log.record(
        session,
        ActivityType.game_started,
        f"Game started on {court.name}: {' & '.join(team1_names)} vs {' & '.join(team2_names)}",
        player_ids=player_ids,
        court_id=court.id,
        court_name=court.name,
        team1_names=team1_names,
        team2_names=team2_names,
    )
    logger.info("Game %s started on %s (session %s)", game.id, court.name, session.id)
    return game


def end_game(
    session: PlaySession,
    court_id: str,
    winner: TeamSide,
    score: Optional[GameScore] = None,
) -> Game:
    """Complete the game, credit stats to occupied slots, and requeue the players at the tail."""
    court, game = require_game(session, court_id)
    winner = TeamSide(winner)
    winners = game.team_players(winner)
    losers = game.team_players(winner.other)
    if not winners:
        raise CommandRejected(f"{winner.value} has no players to credit the win")

    game.ended_at = datetime.utcnow()
    game.winner = winner
    game.score = score

    for pid in winners + losers:
        player = session.find_player(pid)
        if player is None:
            continue
        player.games_played += 1
        if pid in winners:
            player.games_won += 1

    court.status = CourtStatus.available
    court.current_game = None
    session.games_completed.append(game)

    # Winners-stay modes queue the losers first; the rotation policy may pull
    # the winners straight back out for the next game on this court.
    if session.rotation_mode.winners_stay_on:
        requeue = losers + winners
    else:
        requeue = game.player_ids()
    queue_manager.extend_tail(session.queue, [pid for pid in requeue if session.find_player(pid)])

    winner_names = _names(session, winners)
    loser_names = _names(session, losers)
    message = f"{court.name}: {' & '.join(winner_names)} defeated {' & '.join(loser_names)}"
    if score is not None:
        message += f" ({format_score(score)})"
    activity_log.record(
        session,
        ActivityType.game_ended,
        message,
        player_ids=game.player_ids(),
        court_id=court.id,
        court_name=court.name,
        winner=winner,
        team1_names=_names(session, game.team1),
        team2_names=_names(session, game.team2),
    )
    logger.info("Game %s on %s ended, winner=%s", game.id, court.name, winner.value)
    return game


def cancel_game(session: PlaySession, court_id: str) -> Game:
    """Discard the game, put its players back at the head, and flag the court for inspection."""
    court, game = require_game(session, court_id)
    player_ids = [pid for pid in game.player_ids() if session.find_player(pid)]

    queue_manager.prepend(session.queue, player_ids)
    court.status = CourtStatus.maintenance
    court.current_game = None

    names = _names(session, player_ids)
    activity_log.record(
        session,
        ActivityType.game_ended,
        f"{court.name}: Game cancelled - {', '.join(names)} returned to queue",
        player_ids=player_ids,
        player_names=names,
        court_id=court.id,
        court_name=court.name,
    )
    logger.info("Game %s on %s cancelled; court set to maintenance", game.id, court.name)
    return game


# ── Slot editing on a game in progress ───────────────────────────────────


def swap_players(
    session: PlaySession,
    court_id: str,
    from_team: TeamSide,
    from_slot: int,
    to_team: TeamSide,
    to_slot: int,
) -> None:
    _, game = require_game(session, court_id)
    _require_slot(from_slot)
    _require_slot(to_slot)
    from_team, to_team = TeamSide(from_team), TeamSide(to_team)
    if from_team is to_team and from_slot == to_slot:
        raise CommandRejected("cannot swap a slot with itself")
    source = game.team(from_team)
    target = game.team(to_team)
    source[from_slot], target[to_slot] = target[to_slot], source[from_slot]


def remove_player_from_game(session: PlaySession, court_id: str, team: TeamSide, slot: int) -> str:
    """Empty a slot and send its player to second place in the queue.

    Index 0 stays with whoever has waited longest; an empty queue puts the
    player at index 0.
    """
    court, game = require_game(session, court_id)
    _require_slot(slot)
    slots = game.team(TeamSide(team))
    player_id = slots[slot]
    if not player_id:
        raise CommandRejected("slot is already empty")

    slots[slot] = None
    queue_manager.insert_at(session.queue, player_id, 1)

    name = session.player_name(player_id)
    activity_log.record(
        session,
        ActivityType.player_removed,
        f"{name} removed from {court.name} and moved to 2nd in queue",
        player_ids=[player_id],
        player_names=[name],
        court_id=court.id,
        court_name=court.name,
    )
    return player_id


def pull_player_to_game(session: PlaySession, court_id: str, team: TeamSide, slot: int) -> str:
    """Fill an empty slot with the head of the queue."""
    court, game = require_game(session, court_id)
    _require_slot(slot)
    slots = game.team(TeamSide(team))
    if slots[slot]:
        raise CommandRejected("slot is occupied")
    if not session.queue:
        raise CommandRejected("queue is empty")

    player_id = session.queue.pop(0)
    slots[slot] = player_id

    name = session.player_name(player_id)
    activity_log.record(
        session,
        ActivityType.player_added,
        f"{name} pulled from queue to {court.name}",
        player_ids=[player_id],
        player_names=[name],
        court_id=court.id,
        court_name=court.name,
    )
    return player_id
