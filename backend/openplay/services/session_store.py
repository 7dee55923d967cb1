"""
Persistence for session snapshots.

The engine state is stored as one opaque JSON blob per session
(SessionRecord.state_json). Only id, name, share_code and is_active are
lifted into columns for lookups.
"""
from typing import List, Optional

from sqlmodel import Session, select

from openplay.models.session import PlaySession
from openplay.models.session_record import SessionRecord, utc_now
from openplay.services.session_sharing import snapshot


def to_session(record: SessionRecord) -> PlaySession:
    return PlaySession.model_validate(record.state_json)


def save_session(session: Session, state: PlaySession) -> SessionRecord:
    """Insert or overwrite the record for state.id (last writer wins)."""
    record = session.get(SessionRecord, state.id)
    if record is None:
        record = SessionRecord(id=state.id, name=state.name)
    record.name = state.name
    record.share_code = state.share_code
    record.is_active = state.is_active
    record.state_json = snapshot(state)
    record.updated_at = utc_now()
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def load_session(session: Session, session_id: str) -> Optional[PlaySession]:
    record = session.get(SessionRecord, session_id)
    if record is None:
        return None
    return to_session(record)


def load_by_share_code(session: Session, share_code: str) -> Optional[PlaySession]:
    record = session.exec(
        select(SessionRecord).where(SessionRecord.share_code == share_code.strip().upper())
    ).first()
    if record is None or not record.is_active:
        return None
    return to_session(record)


def list_sessions(session: Session, active_only: bool = True) -> List[SessionRecord]:
    query = select(SessionRecord)
    if active_only:
        query = query.where(SessionRecord.is_active == True)  # noqa: E712
    return list(session.exec(query.order_by(SessionRecord.created_at)).all())


def delete_session(session: Session, session_id: str) -> bool:
    record = session.get(SessionRecord, session_id)
    if record is None:
        return False
    session.delete(record)
    session.commit()
    return True
