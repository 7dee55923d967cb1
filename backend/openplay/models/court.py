from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from openplay.models.game import Game
from openplay.utils.ids import new_id


class CourtStatus(str, Enum):
    available = "available"
    in_game = "in_game"
    maintenance = "maintenance"


class Court(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    status: CourtStatus = CourtStatus.available
    current_game: Optional[Game] = None

    @model_validator(mode="after")
    def validate_current_game(self):
        # current_game is set if and only if the court is in a game
        if (self.status is CourtStatus.in_game) != (self.current_game is not None):
            raise ValueError("current_game must be set exactly when status is in_game")
        return self
