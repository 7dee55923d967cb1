from datetime import datetime
from enum import Enum
from typing import List, Optional, Set

from pydantic import BaseModel, Field

from openplay.models.activity import ActivityLogEntry
from openplay.models.court import Court, CourtStatus
from openplay.models.game import Game
from openplay.models.player import Player
from openplay.utils.ids import new_id


class RotationMode(str, Enum):
    winners_stay = "winners_stay"
    full_rotation = "full_rotation"
    king_of_court = "king_of_court"
    skill_based = "skill_based"

    @property
    def winners_stay_on(self) -> bool:
        return self in (RotationMode.winners_stay, RotationMode.king_of_court)


class SessionConfig(BaseModel):
    name: str
    location: Optional[str] = None
    date: Optional[str] = None  # Display only
    time: Optional[str] = None  # Display only
    court_count: int = Field(default=1, ge=1)
    rotation_mode: RotationMode = RotationMode.full_rotation


class PlaySession(BaseModel):
    """
    Aggregate root for one live open-play session.

    Owns its courts, players, queue, completed games and activity log.
    A game is either the current_game of exactly one court or an entry in
    games_completed, never both. activity_log is newest-first.
    """

    id: str = Field(default_factory=new_id)
    name: str
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    courts: List[Court] = Field(default_factory=list)
    players: List[Player] = Field(default_factory=list)
    queue: List[str] = Field(default_factory=list)  # Player ids, index 0 plays next
    rotation_mode: RotationMode = RotationMode.full_rotation
    games_completed: List[Game] = Field(default_factory=list)
    activity_log: List[ActivityLogEntry] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    is_active: bool = True
    share_code: Optional[str] = None

    def find_court(self, court_id: str) -> Optional[Court]:
        return next((c for c in self.courts if c.id == court_id), None)

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def player_name(self, player_id: Optional[str]) -> str:
        player = self.find_player(player_id) if player_id else None
        return player.name if player else "Player"

    def seated_player_ids(self) -> Set[str]:
        """Players occupying a slot in any in-progress game."""
        seated: Set[str] = set()
        for court in self.courts:
            if court.status is CourtStatus.in_game and court.current_game:
                seated.update(court.current_game.player_ids())
        return seated
