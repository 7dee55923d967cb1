"""
Session Guards and Command Runner for the HTTP layer

Provides reusable guards that load a stored session or fail the request:
- Unknown session id -> 404
- Unknown or inactive share code -> 404

execute_command() is the load -> run one engine command -> save cycle used
by every mutating endpoint. Rejected commands are not errors: they return
200 with applied=False and the unchanged snapshot.
"""
from typing import Callable, Optional

from fastapi import HTTPException
from pydantic import BaseModel
from sqlmodel import Session

from openplay.models.session import PlaySession
from openplay.services import session_store
from openplay.services.commands import run_command


class CommandResponse(BaseModel):
    applied: bool
    reason: Optional[str] = None
    session: PlaySession


def execute_command(session: Session, session_id: str, fn: Callable, *args, **kwargs) -> CommandResponse:
    state = require_session(session, session_id)
    result = run_command(fn, state, *args, **kwargs)
    if result.applied:
        session_store.save_session(session, result.session)
    return CommandResponse(applied=result.applied, reason=result.reason, session=result.session)


def require_session(session: Session, session_id: str) -> PlaySession:
    """
    Load the session snapshot for session_id, otherwise raise 404.

    Args:
        session: Database session
        session_id: PlaySession id

    Returns:
        PlaySession rebuilt from the stored snapshot

    Raises:
        HTTPException 404: Session not found
    """
    state = session_store.load_session(session, session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return state


def require_shared_session(session: Session, share_code: str) -> PlaySession:
    state = session_store.load_by_share_code(session, share_code)
    if state is None:
        raise HTTPException(status_code=404, detail=f"No active session for share code '{share_code}'")
    return state
