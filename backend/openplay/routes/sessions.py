"""
Session command surface: session lifecycle, courts, players and the queue.

Game endpoints live in routes/games.py.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field, field_validator
from sqlmodel import Session

from openplay.database import get_session
from openplay.models.court import CourtStatus
from openplay.models.player import Player
from openplay.models.session import PlaySession, RotationMode, SessionConfig
from openplay.services import session_engine, session_store
from openplay.services.session_sharing import encode_session
from openplay.utils.session_guards import CommandResponse, execute_command, require_session

router = APIRouter()


class SessionCreate(BaseModel):
    name: str
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    court_count: int = Field(default=1, ge=1)
    rotation_mode: RotationMode = RotationMode.full_rotation

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()


class SessionSummary(BaseModel):
    id: str
    name: str
    share_code: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ShareResponse(BaseModel):
    share_code: Optional[str] = None
    token: str


class CourtRename(BaseModel):
    name: str


class CourtStatusUpdate(BaseModel):
    status: CourtStatus


class PlayerCreate(BaseModel):
    name: str
    skill_level: Optional[int] = Field(default=None, ge=1, le=5)
    move_to_front: bool = False


class PlayersBatchCreate(BaseModel):
    names: str  # Newline / comma / semicolon separated
    move_to_front: bool = False


class PlayersBatchResponse(CommandResponse):
    duplicates: List[str] = []


class DuplicateCheck(BaseModel):
    name: str
    duplicate: bool


class QueueDirection(str, Enum):
    up = "up"
    down = "down"
    front = "front"


class QueueMove(BaseModel):
    direction: QueueDirection


class QueueEntry(BaseModel):
    position: int  # 1-based
    player: Player
    wait_minutes: int


_MOVES = {
    QueueDirection.up: session_engine.move_up,
    QueueDirection.down: session_engine.move_down,
    QueueDirection.front: session_engine.move_to_front,
}


# ── Session ──────────────────────────────────────────────────────────────


@router.post("/sessions", response_model=PlaySession, status_code=201)
def create_session(payload: SessionCreate, session: Session = Depends(get_session)):
    """Create a session with court_count courts named Court 1..N"""
    state = session_engine.create_session(SessionConfig(**payload.model_dump()))
    session_store.save_session(session, state)
    return state


@router.get("/sessions", response_model=List[SessionSummary])
def list_sessions(session: Session = Depends(get_session)):
    """List active sessions"""
    return session_store.list_sessions(session)


@router.get("/sessions/{session_id}", response_model=PlaySession)
def get_session_snapshot(session_id: str, session: Session = Depends(get_session)):
    """Full snapshot of one session"""
    return require_session(session, session_id)


@router.delete("/sessions/{session_id}", status_code=204)
def end_session(session_id: str, session: Session = Depends(get_session)):
    """End the session and discard its state, log included"""
    state = require_session(session, session_id)
    session_engine.end_session(state)
    session_store.delete_session(session, session_id)
    return Response(status_code=204)


@router.get("/sessions/{session_id}/share", response_model=ShareResponse)
def share_session(session_id: str, session: Session = Depends(get_session)):
    """Share code plus a self-contained token of the current snapshot"""
    state = require_session(session, session_id)
    return ShareResponse(share_code=state.share_code, token=encode_session(state))


# ── Courts ───────────────────────────────────────────────────────────────


@router.post("/sessions/{session_id}/courts", response_model=CommandResponse)
def add_court(session_id: str, session: Session = Depends(get_session)):
    return execute_command(session, session_id, session_engine.add_court)


@router.delete("/sessions/{session_id}/courts/{court_id}", response_model=CommandResponse)
def remove_court(session_id: str, court_id: str, session: Session = Depends(get_session)):
    """Rejected (applied=false) while the court is in play or when it is the last court"""
    return execute_command(session, session_id, session_engine.remove_court, court_id)


@router.put("/sessions/{session_id}/courts/{court_id}/name", response_model=CommandResponse)
def rename_court(session_id: str, court_id: str, payload: CourtRename, session: Session = Depends(get_session)):
    return execute_command(session, session_id, session_engine.rename_court, court_id, payload.name)


@router.put("/sessions/{session_id}/courts/{court_id}/status", response_model=CommandResponse)
def set_court_status(
    session_id: str,
    court_id: str,
    payload: CourtStatusUpdate,
    session: Session = Depends(get_session),
):
    return execute_command(session, session_id, session_engine.set_court_status, court_id, payload.status)


# ── Players ──────────────────────────────────────────────────────────────


@router.post("/sessions/{session_id}/players", response_model=CommandResponse)
def add_player(session_id: str, payload: PlayerCreate, session: Session = Depends(get_session)):
    return execute_command(
        session,
        session_id,
        session_engine.add_player,
        payload.name,
        skill_level=payload.skill_level,
        move_to_front=payload.move_to_front,
    )


@router.post("/sessions/{session_id}/players/batch", response_model=PlayersBatchResponse)
def add_players(session_id: str, payload: PlayersBatchCreate, session: Session = Depends(get_session)):
    """Add a pasted roster; names matching existing players are reported, not added"""
    state = require_session(session, session_id)
    next_state, duplicates = session_engine.add_players_from_text(state, payload.names, payload.move_to_front)
    applied = next_state is not state
    if applied:
        session_store.save_session(session, next_state)
    return PlayersBatchResponse(
        applied=applied,
        reason=None if applied else "no new names to add",
        session=next_state,
        duplicates=duplicates,
    )


@router.get("/sessions/{session_id}/players/duplicate", response_model=DuplicateCheck)
def check_duplicate_name(session_id: str, name: str = Query(...), session: Session = Depends(get_session)):
    state = require_session(session, session_id)
    return DuplicateCheck(name=name, duplicate=session_engine.is_name_duplicate(state, name))


@router.get("/sessions/{session_id}/players/available", response_model=List[Player])
def list_available_players(session_id: str, session: Session = Depends(get_session)):
    """Active players not currently seated in a game"""
    return session_engine.available_players(require_session(session, session_id))


@router.delete("/sessions/{session_id}/players/{player_id}", response_model=CommandResponse)
def remove_player(session_id: str, player_id: str, session: Session = Depends(get_session)):
    return execute_command(session, session_id, session_engine.remove_player, player_id)


@router.post("/sessions/{session_id}/players/{player_id}/toggle-active", response_model=CommandResponse)
def toggle_player_active(session_id: str, player_id: str, session: Session = Depends(get_session)):
    return execute_command(session, session_id, session_engine.toggle_player_active, player_id)


# ── Queue ────────────────────────────────────────────────────────────────


@router.get("/sessions/{session_id}/queue", response_model=List[QueueEntry])
def get_queue(session_id: str, session: Session = Depends(get_session)):
    """Queue in play order with wait times"""
    state = require_session(session, session_id)
    now = datetime.utcnow()
    return [
        QueueEntry(position=i + 1, player=p, wait_minutes=session_engine.wait_minutes(p, now))
        for i, p in enumerate(session_engine.players_in_queue(state))
    ]


@router.post("/sessions/{session_id}/queue/{player_id}", response_model=CommandResponse)
def enqueue(
    session_id: str,
    player_id: str,
    at_front: bool = Query(False),
    session: Session = Depends(get_session),
):
    return execute_command(session, session_id, session_engine.enqueue, player_id, at_front=at_front)


@router.delete("/sessions/{session_id}/queue/{player_id}", response_model=CommandResponse)
def dequeue(session_id: str, player_id: str, session: Session = Depends(get_session)):
    return execute_command(session, session_id, session_engine.dequeue, player_id)


@router.post("/sessions/{session_id}/queue/{player_id}/move", response_model=CommandResponse)
def move_in_queue(session_id: str, player_id: str, payload: QueueMove, session: Session = Depends(get_session)):
    """Move one place up/down, or jump to the front"""
    return execute_command(session, session_id, _MOVES[payload.direction], player_id)
