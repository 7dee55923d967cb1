"""
Game runtime on a court: start / end / cancel, auto-assign from the queue,
and slot editing (swap, remove to queue, pull from queue) while a game is
in progress.
"""
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlmodel import Session

from openplay.database import get_session
from openplay.models.game import Game, TeamSide
from openplay.services import session_engine
from openplay.services.score_parser import parse_game_score
from openplay.utils.session_guards import CommandResponse, execute_command, require_session

router = APIRouter()


class GameStart(BaseModel):
    team1: List[str] = Field(min_length=2, max_length=2)
    team2: List[str] = Field(min_length=2, max_length=2)


class GameEnd(BaseModel):
    winner: TeamSide
    score: Optional[Any] = None  # "11-7" or {"team1": 11, "team2": 7}
    auto_assign: bool = False


class SlotSwap(BaseModel):
    from_team: TeamSide
    from_slot: int = Field(ge=0, le=1)
    to_team: TeamSide
    to_slot: int = Field(ge=0, le=1)


@router.post("/sessions/{session_id}/courts/{court_id}/game", response_model=CommandResponse)
def start_game(session_id: str, court_id: str, payload: GameStart, session: Session = Depends(get_session)):
    return execute_command(session, session_id, session_engine.start_game, court_id, payload.team1, payload.team2)


@router.post("/sessions/{session_id}/courts/{court_id}/game/end", response_model=CommandResponse)
def end_game(session_id: str, court_id: str, payload: GameEnd, session: Session = Depends(get_session)):
    """Record the winner (and optional score); players return to the queue tail"""
    score = parse_game_score(payload.score)
    if payload.score not in (None, "") and score is None:
        raise HTTPException(status_code=422, detail=f"Unrecognized score: {payload.score!r}")
    return execute_command(
        session,
        session_id,
        session_engine.end_game,
        court_id,
        payload.winner,
        score,
        auto_assign=payload.auto_assign,
    )


@router.post("/sessions/{session_id}/courts/{court_id}/game/cancel", response_model=CommandResponse)
def cancel_game(session_id: str, court_id: str, session: Session = Depends(get_session)):
    """Discard the game; players go back to the head of the queue and the court to maintenance"""
    return execute_command(session, session_id, session_engine.cancel_game, court_id)


@router.post("/sessions/{session_id}/courts/{court_id}/auto-assign", response_model=CommandResponse)
def auto_assign_next_game(session_id: str, court_id: str, session: Session = Depends(get_session)):
    """Fill an available court from the queue according to the session's rotation mode"""
    return execute_command(session, session_id, session_engine.auto_assign_next_game, court_id)


@router.post("/sessions/{session_id}/courts/{court_id}/game/swap", response_model=CommandResponse)
def swap_players(session_id: str, court_id: str, payload: SlotSwap, session: Session = Depends(get_session)):
    return execute_command(
        session,
        session_id,
        session_engine.swap_players,
        court_id,
        payload.from_team,
        payload.from_slot,
        payload.to_team,
        payload.to_slot,
    )


@router.post(
    "/sessions/{session_id}/courts/{court_id}/game/slots/{team}/{slot}/remove",
    response_model=CommandResponse,
)
def remove_player_from_game(
    session_id: str,
    court_id: str,
    team: TeamSide,
    slot: int,
    session: Session = Depends(get_session),
):
    """Empty the slot; the player goes to 2nd place in the queue"""
    return execute_command(session, session_id, session_engine.remove_player_from_game, court_id, team, slot)


@router.post(
    "/sessions/{session_id}/courts/{court_id}/game/slots/{team}/{slot}/pull",
    response_model=CommandResponse,
)
def pull_player_to_game(
    session_id: str,
    court_id: str,
    team: TeamSide,
    slot: int,
    session: Session = Depends(get_session),
):
    """Fill an empty slot with the head of the queue"""
    return execute_command(session, session_id, session_engine.pull_player_to_game, court_id, team, slot)


@router.get("/sessions/{session_id}/games", response_model=List[Game])
def list_completed_games(session_id: str, session: Session = Depends(get_session)):
    """Completed games, oldest first"""
    return require_session(session, session_id).games_completed
