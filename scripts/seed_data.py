#!/usr/bin/env python3
"""
Seed script to populate a demo league: an admin, two coaches with a team
each, a few players and one scheduled game.
Every account uses the password `courtside123`.
"""
import asyncio
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from courtside.database import AsyncSessionLocal, init_db
from courtside.services import UserService, TeamService, PlayerService, GameService

PASSWORD = "courtside123"

TEAMS = [
    ("Harbor City Hawks", "Coach Rivera", "rivera@courtside.dev", "#0B3D91", "#FFFFFF"),
    ("Northside Comets", "Coach Okafor", "okafor@courtside.dev", "#5B2C83", "#F2C14E"),
]

ROSTERS = {
    "Harbor City Hawks": [
        ("Jalen Brooks", "PG", 3, "6-1", 180, 24),
        ("Marcus Hale", "SF", 23, "6-7", 215, 27),
        ("Dre Whitfield", "C", 34, "6-11", 250, 29),
    ],
    "Northside Comets": [
        ("Tariq Bell", "SG", 11, "6-4", 195, 22),
        ("Owen Marsh", "PF", 42, "6-9", 235, 26),
        ("Luis Ortega", "PG", 5, "6-0", 175, 25),
    ],
}


async def seed_all():
    """Seed the demo league."""
    print("🏀 Courtside League Backend - Data Seeder")
    print("=" * 50)
    
    print("\n📦 Initializing database tables...")
    await init_db()
    print("✅ Tables created")
    
    async with AsyncSessionLocal() as db:
        admin = await UserService.create_user(db, "League Office", "office@courtside.dev", PASSWORD, role="admin")
        print(f"\n👤 Admin: {admin.email}")
        
        teams = []
        for name, coach_name, coach_email, primary, secondary in TEAMS:
            coach = await UserService.create_user(db, coach_name, coach_email, PASSWORD, role="coach")
            team = await TeamService.create_team(db, coach, {
                "name": name,
                "primary_color": primary,
                "secondary_color": secondary,
            })
            teams.append(team)
            print(f"🏟️  {team.name} (coach {coach.email})")
            
            for player_name, position, jersey, height, weight, age in ROSTERS[name]:
                email = player_name.lower().replace(" ", ".") + "@courtside.dev"
                account = await UserService.create_user(db, player_name, email, PASSWORD)
                await PlayerService.create_player(db, coach, {
                    "name": player_name,
                    "user_id": account.id,
                    "team_id": team.id,
                    "position": position,
                    "jersey_number": jersey,
                    "height": height,
                    "weight": weight,
                    "age": age,
                })
                print(f"   - #{jersey} {player_name} ({position})")
        
        game = await GameService.create_game(db, admin, {
            "home_team_id": teams[0].id,
            "away_team_id": teams[1].id,
            "game_date": (datetime.utcnow() + timedelta(days=3)).replace(hour=19, minute=30, second=0, microsecond=0),
            "venue": "Harbor City Arena",
        })
        print(f"\n📅 Game {game.id}: {teams[1].name} @ {teams[0].name}")
    
    print("\n✨ Seeding complete!")
    print("\nNext steps:")
    print("  1. Start the server: uvicorn courtside.main:app --reload --port 5000")
    print("  2. Log in: POST /api/auth/login with any seeded email")
    print("  3. Use the API: http://localhost:5000/docs")


if __name__ == "__main__":
    asyncio.run(seed_all())
