from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from openplay.models.game import TeamSide
from openplay.utils.ids import new_id


class ActivityType(str, Enum):
    game_started = "game_started"
    game_ended = "game_ended"
    player_added = "player_added"
    player_queued = "player_queued"
    player_moved_front = "player_moved_front"
    player_moved_up = "player_moved_up"
    player_moved_down = "player_moved_down"
    player_removed = "player_removed"


class ActivityDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_ids: Optional[List[str]] = None
    player_names: Optional[List[str]] = None
    court_id: Optional[str] = None
    court_name: Optional[str] = None
    winner: Optional[TeamSide] = None
    team1_names: Optional[List[str]] = None
    team2_names: Optional[List[str]] = None


class ActivityLogEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    type: ActivityType
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    message: str
    details: Optional[ActivityDetails] = None
