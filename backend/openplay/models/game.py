from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from openplay.utils.ids import new_id

SLOTS_PER_TEAM = 2


class TeamSide(str, Enum):
    team1 = "team1"
    team2 = "team2"

    @property
    def other(self) -> "TeamSide":
        return TeamSide.team2 if self is TeamSide.team1 else TeamSide.team1


class GameScore(BaseModel):
    team1: int = Field(ge=0)
    team2: int = Field(ge=0)


class Game(BaseModel):
    id: str = Field(default_factory=new_id)
    court_id: str  # Back-reference only; the court owns the game while it is in progress
    # Player ids per slot. None = empty slot (only after maintenance editing).
    team1: List[Optional[str]]
    team2: List[Optional[str]]
    started_at: datetime = Field(default_factory=datetime.utcnow)
    ended_at: Optional[datetime] = None
    winner: Optional[TeamSide] = None
    score: Optional[GameScore] = None

    @field_validator("team1", "team2")
    @classmethod
    def validate_slot_count(cls, v):
        if len(v) != SLOTS_PER_TEAM:
            raise ValueError(f"a team has exactly {SLOTS_PER_TEAM} slots")
        return [pid or None for pid in v]

    def team(self, side: TeamSide) -> List[Optional[str]]:
        return self.team1 if side is TeamSide.team1 else self.team2

    def team_players(self, side: TeamSide) -> List[str]:
        """Occupied slots of one team, in slot order."""
        return [pid for pid in self.team(side) if pid]

    def player_ids(self) -> List[str]:
        """Occupied slots, team1 then team2."""
        return self.team_players(TeamSide.team1) + self.team_players(TeamSide.team2)
