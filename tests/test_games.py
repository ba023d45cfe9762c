"""
Tests for the game endpoints: scheduling, filters, box scores and scores.
"""


class TestCreateGame:
    """POST /api/games"""

    def test_defaults(self, client, game, team, rival_team):
        assert game["homeTeam"] == {"id": team["id"], "name": "Richmond Oilers"}
        assert game["awayTeam"] == {"id": rival_team["id"], "name": "Hickory Huskers"}
        assert game["homeScore"] == 0
        assert game["awayScore"] == 0
        assert game["status"] == "scheduled"
        assert game["quarter"] == 1
        assert game["timeRemaining"] == "12:00"
        assert game["gameDate"] == "2026-11-02T19:30:00"
        assert game["gameStats"] == []

    def test_offset_dates_are_stored_as_utc(self, make_game, coach, team, rival_team):
        game = make_game(coach, team["id"], rival_team["id"], game_date="2026-11-02T14:30:00-05:00")

        assert game["gameDate"] == "2026-11-02T19:30:00"

    def test_away_coach_may_schedule(self, make_game, rival_coach, team, rival_team):
        game = make_game(rival_coach, team["id"], rival_team["id"])

        assert game["homeTeam"]["id"] == team["id"]

    def test_teams_must_differ(self, client, coach, team):
        response = client.post(
            "/api/games",
            json={"homeTeam": team["id"], "awayTeam": team["id"], "gameDate": "2026-11-02T19:30:00Z"},
            headers=coach["headers"],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Home and away teams must be different"

    def test_missing_team(self, client, coach, team):
        response = client.post(
            "/api/games",
            json={"homeTeam": team["id"], "awayTeam": 999, "gameDate": "2026-11-02T19:30:00Z"},
            headers=coach["headers"],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Away team not found"

    def test_coach_of_neither_team_is_forbidden(self, client, outsider_coach, team, rival_team):
        response = client.post(
            "/api/games",
            json={"homeTeam": team["id"], "awayTeam": rival_team["id"], "gameDate": "2026-11-02T19:30:00Z"},
            headers=outsider_coach["headers"],
        )

        assert response.status_code == 403
        assert client.get("/api/games").json()["count"] == 0

    def test_game_date_required(self, client, coach, team, rival_team):
        response = client.post(
            "/api/games",
            json={"homeTeam": team["id"], "awayTeam": rival_team["id"]},
            headers=coach["headers"],
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "gameDate"

    def test_box_score_with_unknown_player(self, client, coach, team, rival_team):
        response = client.post(
            "/api/games",
            json={
                "homeTeam": team["id"],
                "awayTeam": rival_team["id"],
                "gameDate": "2026-11-02T19:30:00Z",
                "gameStats": [{"player": 404, "points": 10}],
            },
            headers=coach["headers"],
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "gameStats", "message": "Player 404 not found"}]


class TestListGames:
    """GET /api/games"""

    def test_filters(self, client, make_game, coach, make_team, team, rival_team):
        third = make_team(coach, "Thunder Valley")
        early = make_game(coach, team["id"], rival_team["id"], "2026-11-02T19:30:00Z")
        late = make_game(coach, third["id"], rival_team["id"], "2026-11-09T19:30:00Z", status="completed")

        def ids(**params):
            response = client.get("/api/games", params=params)
            assert response.status_code == 200
            return [g["id"] for g in response.json()["data"]]

        assert ids() == [early["id"], late["id"]]
        assert ids(status="completed") == [late["id"]]
        assert ids(team=str(team["id"])) == [early["id"]]
        assert ids(team="huskers") == [early["id"], late["id"]]
        assert ids(team="thunder") == [late["id"]]
        assert ids(date="2026-11-09") == [late["id"]]
        assert ids(**{"from": "2026-11-03"}) == [late["id"]]
        assert ids(to="2026-11-02") == [early["id"]]
        assert ids(**{"from": "2026-11-01", "to": "2026-11-30"}) == [early["id"], late["id"]]

    def test_non_ascii_digit_team_is_a_name_search(self, client, game):
        response = client.get("/api/games", params={"team": "²"})

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_unknown_status_is_rejected(self, client):
        response = client.get("/api/games", params={"status": "postponed"})

        assert response.status_code == 400

    def test_get_missing_game(self, client):
        response = client.get("/api/games/77")

        assert response.status_code == 404
        assert response.json()["message"] == "Game not found"


class TestUpdateGame:
    """PUT /api/games/{id}"""

    def test_partial_update_with_box_score(self, client, coach, team, game, make_player):
        player = make_player(coach, team["id"], "Timo Cruz", 5)

        response = client.put(
            f"/api/games/{game['id']}",
            json={
                "venue": "Butler Fieldhouse",
                "attendance": 15000,
                "gameStats": [{"player": player["id"], "points": 21, "minutesPlayed": 32}],
            },
            headers=coach["headers"],
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["venue"] == "Butler Fieldhouse"
        assert data["attendance"] == 15000
        assert data["status"] == "scheduled"
        assert data["gameStats"][0]["player"]["name"] == "Timo Cruz"
        assert data["gameStats"][0]["minutesPlayed"] == 32

        response = client.put(f"/api/games/{game['id']}", json={"gameStats": []}, headers=coach["headers"])
        assert response.json()["data"]["gameStats"] == []

    def test_away_coach_may_update(self, client, rival_coach, game):
        response = client.put(f"/api/games/{game['id']}", json={"status": "in_progress"}, headers=rival_coach["headers"])

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "in_progress"

    def test_outsider_is_forbidden(self, client, outsider_coach, game):
        response = client.put(f"/api/games/{game['id']}", json={"venue": "Elsewhere"}, headers=outsider_coach["headers"])

        assert response.status_code == 403
        assert client.get(f"/api/games/{game['id']}").json()["data"]["venue"] == "Richmond High Gym"

    def test_quarter_out_of_range(self, client, coach, game):
        response = client.put(f"/api/games/{game['id']}", json={"quarter": 5}, headers=coach["headers"])

        assert response.status_code == 400


class TestScore:
    """PUT /api/games/{id}/score"""

    def test_score_update_persists(self, client, coach, game):
        response = client.put(
            f"/api/games/{game['id']}/score",
            json={"homeScore": 57, "awayScore": 61, "status": "in_progress", "quarter": 3, "timeRemaining": "4:12"},
            headers=coach["headers"],
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert (data["homeScore"], data["awayScore"]) == (57, 61)
        assert data["quarter"] == 3

        stored = client.get(f"/api/games/{game['id']}").json()["data"]
        assert (stored["homeScore"], stored["awayScore"]) == (57, 61)
        assert stored["status"] == "in_progress"
        assert stored["timeRemaining"] == "4:12"

    def test_scores_are_required(self, client, coach, game):
        response = client.put(f"/api/games/{game['id']}/score", json={"homeScore": 10}, headers=coach["headers"])

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "awayScore"

    def test_negative_score(self, client, coach, game):
        response = client.put(
            f"/api/games/{game['id']}/score",
            json={"homeScore": -2, "awayScore": 0},
            headers=coach["headers"],
        )

        assert response.status_code == 400

    def test_player_role_is_forbidden(self, client, game, register):
        fan = register("Shooter Flatch", "shooter@courtside.dev")

        response = client.put(
            f"/api/games/{game['id']}/score",
            json={"homeScore": 2, "awayScore": 0},
            headers=fan["headers"],
        )

        assert response.status_code == 403
        assert client.get(f"/api/games/{game['id']}").json()["data"]["homeScore"] == 0

    def test_outsider_coach_is_forbidden(self, client, outsider_coach, game):
        response = client.put(
            f"/api/games/{game['id']}/score",
            json={"homeScore": 2, "awayScore": 0},
            headers=outsider_coach["headers"],
        )

        assert response.status_code == 403
        assert client.get(f"/api/games/{game['id']}").json()["data"]["homeScore"] == 0

    def test_missing_game(self, client, admin):
        response = client.put("/api/games/77/score", json={"homeScore": 1, "awayScore": 0}, headers=admin["headers"])

        assert response.status_code == 404


class TestDeleteGame:
    """DELETE /api/games/{id}"""

    def test_delete(self, client, coach, game):
        response = client.delete(f"/api/games/{game['id']}", headers=coach["headers"])

        assert response.status_code == 200
        assert response.json()["message"] == "Game deleted successfully"
        assert client.get(f"/api/games/{game['id']}").status_code == 404

    def test_outsider_is_forbidden(self, client, outsider_coach, game):
        response = client.delete(f"/api/games/{game['id']}", headers=outsider_coach["headers"])

        assert response.status_code == 403
        assert client.get(f"/api/games/{game['id']}").status_code == 200
