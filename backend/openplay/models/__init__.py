from openplay.models.activity import ActivityDetails, ActivityLogEntry, ActivityType
from openplay.models.court import Court, CourtStatus
from openplay.models.game import Game, GameScore, TeamSide
from openplay.models.player import Player
from openplay.models.session import PlaySession, RotationMode, SessionConfig
from openplay.models.session_record import SessionRecord

__all__ = [
    "ActivityDetails",
    "ActivityLogEntry",
    "ActivityType",
    "Court",
    "CourtStatus",
    "Game",
    "GameScore",
    "TeamSide",
    "Player",
    "PlaySession",
    "RotationMode",
    "SessionConfig",
    "SessionRecord",
]
