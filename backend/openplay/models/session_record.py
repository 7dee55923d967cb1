from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import JSON, DateTime
from sqlmodel import Column, Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionRecord(SQLModel, table=True):
    """Storage row for one session; the engine state lives in state_json as an opaque snapshot."""

    __tablename__ = "playsession"

    id: str = Field(primary_key=True)  # Same id as the PlaySession inside state_json
    name: str
    share_code: Optional[str] = Field(default=None, index=True, unique=True)
    is_active: bool = Field(default=True)
    state_json: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    # Timezone-aware UTC
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, onupdate=utc_now),
    )
