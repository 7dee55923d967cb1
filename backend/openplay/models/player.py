from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from openplay.utils.ids import new_id


class Player(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str  # Displayed as entered; duplicate checks are trimmed + case-insensitive
    skill_level: Optional[int] = None  # 1-5, informational only
    games_played: int = 0
    games_won: int = 0
    checked_in_at: datetime = Field(default_factory=datetime.utcnow)
    is_active: bool = True  # Inactive players stay in the queue but are skipped by rotation
