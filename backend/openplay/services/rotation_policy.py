"""
Rotation Policy: who fills a court that just freed up.

full_rotation / skill_based:
    next four eligible queue members; team1 = [q0, q1], team2 = [q2, q3].
    (skill_based keeps skill_level as data only; selection is identical.)

winners_stay / king_of_court:
    if the last completed game on this court has a winner and both winners
    are still active and not seated elsewhere, the winners stay as team1 and
    the next two eligible queue members (other than the winners) form team2.
    Otherwise fall back to full rotation.

Eligibility: the queued id has a Player record with is_active=True.
Inactive players keep their queue position; they are skipped, not dequeued.

Pure selection only. Starting the game is the lifecycle's job.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from openplay.models.court import CourtStatus
from openplay.models.game import Game
from openplay.models.session import PlaySession


@dataclass
class TeamSelection:
    team1: List[str]
    team2: List[str]


def is_eligible(session: PlaySession, player_id: str) -> bool:
    player = session.find_player(player_id)
    return bool(player and player.is_active)


def eligible_queue(session: PlaySession) -> List[str]:
    """Queue order, restricted to eligible players not already seated."""
    seated = session.seated_player_ids()
    return [pid for pid in session.queue if pid not in seated and is_eligible(session, pid)]


def last_completed_game(session: PlaySession, court_id: str) -> Optional[Game]:
    for game in reversed(session.games_completed):
        if game.court_id == court_id:
            return game
    return None


def _staying_winners(session: PlaySession, court_id: str) -> Optional[List[str]]:
    game = last_completed_game(session, court_id)
    if game is None or game.winner is None:
        return None
    winners = game.team(game.winner)
    if len(winners) != 2 or not all(winners):
        return None
    seated = session.seated_player_ids()
    if any(pid in seated or not is_eligible(session, pid) for pid in winners):
        return None
    return list(winners)


def select_next_teams(session: PlaySession, court_id: str) -> Optional[TeamSelection]:
    """Pick the next pairing for court_id, or None when the court can't be filled."""
    court = session.find_court(court_id)
    if court is None or court.status is not CourtStatus.available:
        return None

    candidates = eligible_queue(session)

    if session.rotation_mode.winners_stay_on:
        winners = _staying_winners(session, court_id)
        if winners:
            challengers = [pid for pid in candidates if pid not in winners]
            if len(challengers) >= 2:
                return TeamSelection(team1=winners, team2=challengers[:2])

    if len(candidates) >= 4:
        return TeamSelection(team1=candidates[0:2], team2=candidates[2:4])
    return None
