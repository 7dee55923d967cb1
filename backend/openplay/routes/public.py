"""
Public read-only API endpoints.

No auth required. Used by spectators following a shared session by code or
by a self-contained share token.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from openplay.database import get_session
from openplay.models.session import PlaySession
from openplay.services.session_sharing import decode_session
from openplay.utils.session_guards import require_shared_session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/public/sessions/{share_code}", response_model=PlaySession)
def get_shared_session(share_code: str, session: Session = Depends(get_session)):
    """Latest snapshot of the session published under share_code"""
    return require_shared_session(session, share_code)


@router.get("/public/shared", response_model=PlaySession)
def decode_shared_token(token: str = Query(...)):
    """Decode a share token back into a snapshot (no storage lookup)"""
    state = decode_session(token)
    if state is None:
        logger.warning("Rejected malformed share token (%d chars)", len(token))
        raise HTTPException(status_code=400, detail="Invalid share token")
    return state
