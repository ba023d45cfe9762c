"""
Shared fixtures: a throwaway SQLite database, an app client and helpers
for creating accounts, teams, players and games over the API.
"""
import asyncio
import os
import tempfile

import pytest

_tmpdir = tempfile.mkdtemp(prefix="courtside-tests-")

# Settings are read once at import time, so configure before importing courtside
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'courtside-test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["USE_REDIS"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DEBUG"] = "false"

from fastapi.testclient import TestClient

from courtside.database import AsyncSessionLocal, Base, engine
from courtside.main import create_app
from courtside.services import UserService

PASSWORD = "secret123"


async def _reset_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def _create_user(name: str, email: str, role: str) -> int:
    async with AsyncSessionLocal() as db:
        user = await UserService.create_user(db, name=name, email=email, password=PASSWORD, role=role)
        return user.id


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def account(body: dict) -> dict:
    """Flatten an auth response into what tests need."""
    token = body["data"]["token"]
    return {
        "id": body["data"]["user"]["id"],
        "token": token,
        "headers": auth_headers(token),
    }


@pytest.fixture(autouse=True)
def fresh_database():
    asyncio.run(_reset_schema())
    yield


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def register(client):
    def _register(name: str, email: str, role: str = "player") -> dict:
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": PASSWORD, "role": role},
        )
        assert response.status_code == 201, response.text
        return account(response.json())

    return _register


@pytest.fixture
def admin(client):
    asyncio.run(_create_user("League Office", "office@courtside.dev", "admin"))
    response = client.post("/api/auth/login", json={"email": "office@courtside.dev", "password": PASSWORD})
    assert response.status_code == 200, response.text
    return account(response.json())


@pytest.fixture
def coach(register):
    return register("Ken Carter", "carter@courtside.dev", "coach")


@pytest.fixture
def rival_coach(register):
    return register("Norman Dale", "dale@courtside.dev", "coach")


@pytest.fixture
def outsider_coach(register):
    return register("Herman Boone", "boone@courtside.dev", "coach")


@pytest.fixture
def make_team(client):
    def _make_team(owner: dict, name: str, **fields) -> dict:
        response = client.post("/api/teams", json={"name": name, **fields}, headers=owner["headers"])
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make_team


@pytest.fixture
def team(make_team, coach):
    return make_team(coach, "Richmond Oilers", homeVenue="Richmond High Gym")


@pytest.fixture
def rival_team(make_team, rival_coach):
    return make_team(rival_coach, "Hickory Huskers")


@pytest.fixture
def make_player(client, register):
    """Register a player-role user and give them a profile on ``team_id``."""

    def _make_player(owner: dict, team_id: int, name: str, jersey: int, position: str = "PG") -> dict:
        email = name.lower().replace(" ", ".") + "@courtside.dev"
        user = register(name, email)
        response = client.post(
            "/api/players",
            json={
                "name": name,
                "user": user["id"],
                "team": team_id,
                "position": position,
                "jerseyNumber": jersey,
                "height": "6-2",
                "weight": 185,
                "age": 21,
            },
            headers=owner["headers"],
        )
        assert response.status_code == 201, response.text
        player = response.json()["data"]
        player["account"] = user
        return player

    return _make_player


@pytest.fixture
def make_game(client):
    def _make_game(owner: dict, home_id: int, away_id: int, game_date: str = "2026-11-02T19:30:00Z", **fields) -> dict:
        response = client.post(
            "/api/games",
            json={"homeTeam": home_id, "awayTeam": away_id, "gameDate": game_date, **fields},
            headers=owner["headers"],
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make_game


@pytest.fixture
def game(make_game, coach, team, rival_team):
    return make_game(coach, team["id"], rival_team["id"], venue="Richmond High Gym")
