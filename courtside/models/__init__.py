from courtside.models.user import User, ROLES
from courtside.models.team import Team
from courtside.models.player import Player, POSITIONS
from courtside.models.game import Game, GAME_STATUSES
from courtside.models.game_stat import GameStat

__all__ = [
    "User",
    "Team",
    "Player",
    "Game",
    "GameStat",
    "ROLES",
    "POSITIONS",
    "GAME_STATUSES",
]
