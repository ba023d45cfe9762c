from courtside.services.user_service import UserService
from courtside.services.roster_service import RosterService
from courtside.services.team_service import TeamService
from courtside.services.player_service import PlayerService
from courtside.services.game_service import GameService

__all__ = [
    "UserService",
    "RosterService",
    "TeamService",
    "PlayerService",
    "GameService",
]
