"""
Tests for the team endpoints: ownership, win percentage and roster edits.
"""
from datetime import datetime


class TestCreateTeam:
    """POST /api/teams"""

    def test_coach_creates_own_team(self, client, coach):
        response = client.post(
            "/api/teams",
            json={"name": "  Richmond Oilers ", "colors": {"primary": "#8B0000"}},
            headers=coach["headers"],
        )

        assert response.status_code == 201
        team = response.json()["data"]
        assert team["name"] == "Richmond Oilers"
        assert team["coach"]["id"] == coach["id"]
        assert team["colors"] == {"primary": "#8B0000", "secondary": "#FFFFFF"}
        assert team["players"] == []
        assert team["isActive"] is True
        assert team["stats"] == {"wins": 0, "losses": 0, "winPercentage": 0.0}

    def test_coach_cannot_create_team_for_someone_else(self, client, coach, rival_coach):
        response = client.post(
            "/api/teams",
            json={"name": "Richmond Oilers", "coach": rival_coach["id"]},
            headers=coach["headers"],
        )

        assert response.status_code == 201
        assert response.json()["data"]["coach"]["id"] == coach["id"]

    def test_admin_must_name_a_coach(self, client, admin):
        response = client.post("/api/teams", json={"name": "Orphans"}, headers=admin["headers"])

        assert response.status_code == 400
        assert response.json()["message"] == "Coach must be specified"

    def test_admin_names_a_coach(self, client, admin, coach):
        response = client.post(
            "/api/teams",
            json={"name": "Richmond Oilers", "coach": coach["id"]},
            headers=admin["headers"],
        )

        assert response.status_code == 201
        assert response.json()["data"]["coach"]["id"] == coach["id"]

    def test_admin_cannot_name_a_non_coach(self, client, admin, register):
        player = register("Timo Cruz", "timo@courtside.dev")

        response = client.post(
            "/api/teams",
            json={"name": "Richmond Oilers", "coach": player["id"]},
            headers=admin["headers"],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid coach specified"

    def test_player_role_is_forbidden(self, client, register):
        player = register("Timo Cruz", "timo@courtside.dev")

        response = client.post("/api/teams", json={"name": "Pickup Crew"}, headers=player["headers"])

        assert response.status_code == 403
        assert response.json()["message"] == "User role player is not authorized to access this route"

    def test_duplicate_name(self, client, team, rival_coach):
        response = client.post("/api/teams", json={"name": "Richmond Oilers"}, headers=rival_coach["headers"])

        assert response.status_code == 400
        assert response.json()["message"] == "Team name already exists"

    def test_founded_year_in_future(self, client, coach):
        response = client.post(
            "/api/teams",
            json={"name": "Time Travelers", "foundedYear": datetime.now().year + 1},
            headers=coach["headers"],
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "foundedYear"

    def test_unauthenticated(self, client):
        response = client.post("/api/teams", json={"name": "Anonymous"})

        assert response.status_code == 401


class TestReadTeams:
    """GET /api/teams"""

    def test_list_and_filter_by_coach(self, client, team, rival_team, coach):
        response = client.get("/api/teams")
        body = response.json()
        assert body["count"] == 2
        assert [t["name"] for t in body["data"]] == ["Hickory Huskers", "Richmond Oilers"]

        response = client.get("/api/teams", params={"coach": coach["id"]})
        assert [t["id"] for t in response.json()["data"]] == [team["id"]]

    def test_filter_by_active_flag(self, client, coach, team, rival_team):
        client.put(f"/api/teams/{team['id']}", json={"isActive": False}, headers=coach["headers"])

        response = client.get("/api/teams", params={"isActive": "false"})

        assert [t["id"] for t in response.json()["data"]] == [team["id"]]

    def test_get_missing_team(self, client):
        response = client.get("/api/teams/999")

        assert response.status_code == 404
        assert response.json()["message"] == "Team not found"


class TestUpdateTeam:
    """PUT /api/teams/{id}"""

    def test_win_percentage_follows_record(self, client, coach, team):
        response = client.put(
            f"/api/teams/{team['id']}",
            json={"stats": {"wins": 3, "losses": 1}},
            headers=coach["headers"],
        )
        assert response.status_code == 200
        assert response.json()["data"]["stats"] == {"wins": 3, "losses": 1, "winPercentage": 0.75}

        response = client.put(
            f"/api/teams/{team['id']}",
            json={"stats": {"wins": 0, "losses": 0}},
            headers=coach["headers"],
        )
        assert response.json()["data"]["stats"]["winPercentage"] == 0.0

    def test_negative_record_rejected(self, client, coach, team):
        response = client.put(
            f"/api/teams/{team['id']}",
            json={"stats": {"wins": -1}},
            headers=coach["headers"],
        )

        assert response.status_code == 400

    def test_other_coach_is_forbidden(self, client, team, rival_coach):
        response = client.put(
            f"/api/teams/{team['id']}",
            json={"name": "Stolen Name"},
            headers=rival_coach["headers"],
        )

        assert response.status_code == 403
        assert client.get(f"/api/teams/{team['id']}").json()["data"]["name"] == "Richmond Oilers"

    def test_admin_updates_any_team(self, client, admin, team):
        response = client.put(
            f"/api/teams/{team['id']}",
            json={"description": "Undefeated season"},
            headers=admin["headers"],
        )

        assert response.status_code == 200
        assert response.json()["data"]["description"] == "Undefeated season"

    def test_only_admin_reassigns_coach(self, client, coach, rival_coach, admin, team):
        response = client.put(
            f"/api/teams/{team['id']}",
            json={"coach": rival_coach["id"]},
            headers=coach["headers"],
        )
        assert response.status_code == 400

        response = client.put(
            f"/api/teams/{team['id']}",
            json={"coach": rival_coach["id"]},
            headers=admin["headers"],
        )
        assert response.status_code == 200
        assert response.json()["data"]["coach"]["id"] == rival_coach["id"]

    def test_rename_to_taken_name(self, client, coach, team, rival_team):
        response = client.put(
            f"/api/teams/{team['id']}",
            json={"name": "Hickory Huskers"},
            headers=coach["headers"],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Team name already exists"


class TestRoster:
    """POST/DELETE /api/teams/{id}/players"""

    def test_remove_and_re_add_player(self, client, coach, team, make_player):
        player = make_player(coach, team["id"], "Timo Cruz", 5)

        response = client.delete(f"/api/teams/{team['id']}/players/{player['id']}", headers=coach["headers"])
        assert response.status_code == 200
        assert response.json()["data"]["players"] == []
        assert client.get(f"/api/players/{player['id']}").json()["data"]["team"] is None
        me = client.get("/api/auth/me", headers=player["account"]["headers"]).json()["data"]
        assert me["team"] is None
        assert me["playerProfile"]["id"] == player["id"]

        response = client.post(
            f"/api/teams/{team['id']}/players",
            json={"playerId": player["id"]},
            headers=coach["headers"],
        )
        assert response.status_code == 200
        assert [p["id"] for p in response.json()["data"]["players"]] == [player["id"]]
        me = client.get("/api/auth/me", headers=player["account"]["headers"]).json()["data"]
        assert me["team"] == team["id"]

    def test_add_player_already_on_team(self, client, coach, team, make_player):
        player = make_player(coach, team["id"], "Timo Cruz", 5)

        response = client.post(
            f"/api/teams/{team['id']}/players",
            json={"playerId": player["id"]},
            headers=coach["headers"],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Player is already on this team"

    def test_add_player_with_clashing_jersey(self, client, coach, rival_coach, team, rival_team, make_player):
        make_player(coach, team["id"], "Timo Cruz", 5)
        newcomer = make_player(rival_coach, rival_team["id"], "Worm Lucas", 5)
        client.delete(f"/api/teams/{rival_team['id']}/players/{newcomer['id']}", headers=rival_coach["headers"])

        response = client.post(
            f"/api/teams/{team['id']}/players",
            json={"playerId": newcomer["id"]},
            headers=coach["headers"],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Jersey number already taken in this team"
        assert len(client.get(f"/api/teams/{team['id']}").json()["data"]["players"]) == 1

    def test_cannot_pull_player_off_another_coachs_roster(self, client, coach, rival_coach, team, rival_team, make_player):
        player = make_player(coach, team["id"], "Timo Cruz", 5)

        response = client.post(
            f"/api/teams/{rival_team['id']}/players",
            json={"playerId": player["id"]},
            headers=rival_coach["headers"],
        )

        assert response.status_code == 403
        assert client.get(f"/api/players/{player['id']}").json()["data"]["team"]["id"] == team["id"]
        assert client.get(f"/api/teams/{rival_team['id']}").json()["data"]["players"] == []
        me = client.get("/api/auth/me", headers=player["account"]["headers"]).json()["data"]
        assert me["team"] == team["id"]

    def test_admin_moves_player_between_rosters(self, client, admin, coach, team, rival_team, make_player):
        player = make_player(coach, team["id"], "Timo Cruz", 5)

        response = client.post(
            f"/api/teams/{rival_team['id']}/players",
            json={"playerId": player["id"]},
            headers=admin["headers"],
        )

        assert response.status_code == 200
        assert [p["id"] for p in response.json()["data"]["players"]] == [player["id"]]
        assert client.get(f"/api/teams/{team['id']}").json()["data"]["players"] == []

    def test_remove_player_not_on_team(self, client, coach, rival_coach, team, rival_team, make_player):
        player = make_player(rival_coach, rival_team["id"], "Worm Lucas", 5)

        response = client.delete(f"/api/teams/{team['id']}/players/{player['id']}", headers=coach["headers"])

        assert response.status_code == 404
        assert response.json()["message"] == "Player not found on this team"

    def test_other_coach_cannot_edit_roster(self, client, coach, rival_coach, team, make_player):
        player = make_player(coach, team["id"], "Timo Cruz", 5)

        response = client.delete(f"/api/teams/{team['id']}/players/{player['id']}", headers=rival_coach["headers"])

        assert response.status_code == 403
        assert client.get(f"/api/players/{player['id']}").json()["data"]["team"]["id"] == team["id"]


class TestDeleteTeam:
    """DELETE /api/teams/{id}"""

    def test_delete_clears_player_and_user_refs(self, client, coach, team, make_player):
        player = make_player(coach, team["id"], "Timo Cruz", 5)

        response = client.delete(f"/api/teams/{team['id']}", headers=coach["headers"])

        assert response.status_code == 200
        assert response.json()["message"] == "Team deleted successfully"
        assert client.get(f"/api/teams/{team['id']}").status_code == 404
        assert client.get(f"/api/players/{player['id']}").json()["data"]["team"] is None
        me = client.get("/api/auth/me", headers=player["account"]["headers"]).json()["data"]
        assert me["team"] is None

    def test_team_with_games_is_kept(self, client, coach, team, game):
        response = client.delete(f"/api/teams/{team['id']}", headers=coach["headers"])

        assert response.status_code == 400
        assert client.get(f"/api/teams/{team['id']}").status_code == 200

    def test_other_coach_is_forbidden(self, client, team, rival_coach):
        response = client.delete(f"/api/teams/{team['id']}", headers=rival_coach["headers"])

        assert response.status_code == 403
        assert client.get(f"/api/teams/{team['id']}").status_code == 200
