"""Response shapes. Field names follow the public camelCase JSON contract."""
from typing import Optional

from courtside.models import User, Team, Player, Game, GameStat


def user_summary(user: Optional[User]) -> Optional[dict]:
    if user is None:
        return None
    return {"id": user.id, "name": user.name, "email": user.email}


def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "team": user.team_id,
        "playerProfile": user.player_profile_id,
        "createdAt": user.created_at,
    }


def colors(team: Team) -> dict:
    return {"primary": team.primary_color, "secondary": team.secondary_color}


def team_summary(team: Optional[Team]) -> Optional[dict]:
    if team is None:
        return None
    return {"id": team.id, "name": team.name, "colors": colors(team), "coach": team.coach_id}


def player_stats(player: Player) -> dict:
    return {
        "pointsPerGame": player.points_per_game,
        "reboundsPerGame": player.rebounds_per_game,
        "assistsPerGame": player.assists_per_game,
        "stealsPerGame": player.steals_per_game,
        "blocksPerGame": player.blocks_per_game,
    }


def roster_entry(player: Player) -> dict:
    return {
        "id": player.id,
        "name": player.name,
        "position": player.position,
        "jerseyNumber": player.jersey_number,
        "stats": player_stats(player),
        "isActive": player.is_active,
    }


def team_to_dict(team: Team) -> dict:
    """Needs ``coach`` and ``players`` loaded."""
    return {
        "id": team.id,
        "name": team.name,
        "coach": user_summary(team.coach),
        "description": team.description,
        "foundedYear": team.founded_year,
        "homeVenue": team.home_venue,
        "colors": colors(team),
        "logo": team.logo,
        "isActive": team.is_active,
        "players": [roster_entry(p) for p in team.players],
        "stats": {
            "wins": team.wins,
            "losses": team.losses,
            "winPercentage": team.win_percentage,
        },
        "createdAt": team.created_at,
    }


def player_to_dict(player: Player) -> dict:
    """Needs ``team`` and ``user`` loaded."""
    return {
        "id": player.id,
        "name": player.name,
        "user": user_summary(player.user),
        "team": team_summary(player.team),
        "position": player.position,
        "jerseyNumber": player.jersey_number,
        "height": player.height,
        "weight": player.weight,
        "age": player.age,
        "stats": player_stats(player),
        "isActive": player.is_active,
        "createdAt": player.created_at,
    }


def game_stat_to_dict(line: GameStat) -> dict:
    player = line.player
    return {
        "player": {
            "id": player.id,
            "name": player.name,
            "team": player.team_id,
            "position": player.position,
        } if player else None,
        "points": line.points,
        "rebounds": line.rebounds,
        "assists": line.assists,
        "steals": line.steals,
        "blocks": line.blocks,
        "minutesPlayed": line.minutes_played,
    }


def game_to_dict(game: Game) -> dict:
    """Needs both teams and ``game_stats.player`` loaded."""
    return {
        "id": game.id,
        "homeTeam": {"id": game.home_team.id, "name": game.home_team.name},
        "awayTeam": {"id": game.away_team.id, "name": game.away_team.name},
        "homeScore": game.home_score,
        "awayScore": game.away_score,
        "gameDate": game.game_date,
        "status": game.status,
        "quarter": game.quarter,
        "timeRemaining": game.time_remaining,
        "venue": game.venue,
        "attendance": game.attendance,
        "gameStats": [game_stat_to_dict(line) for line in game.game_stats],
        "createdAt": game.created_at,
    }
