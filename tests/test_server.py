"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from wraith.server.main import app, sessions


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    sessions.cleanup_all()


@pytest.fixture
def game_id(client):
    r = client.post("/api/games", json={"seed": 42, "players": ["alice", "bob"]})
    assert r.status_code == 200
    return r.json()["gameId"]


def test_health(client):
    r = client.get("/api")
    assert r.status_code == 200
    assert r.json()["status"] == "operational"


def test_parse_orders(client):
    r = client.post("/api/orders/parse", json={"text": "assemble C1 500 factory-1 structural\nlaunch S1\n"})
    assert r.status_code == 200
    data = r.json()
    assert data["orders"] == ["assemble C1 500 factory-1 structural"]
    assert len(data["errors"]) == 1
    assert data["errors"][0]["line"] == 2
    assert data["errors"][0]["type"] == "unknown_command"
    assert ";;" in data["echo"]


def test_create_game(client):
    r = client.post("/api/games", json={"seed": 42, "players": ["alice", "bob"]})
    assert r.status_code == 200
    data = r.json()
    assert data["seed"] == 42
    assert data["turn"] == "0001/1"
    assert data["players"] == [{"id": 1, "name": "alice"}, {"id": 2, "name": "bob"}]


def test_create_game_requires_players(client):
    r = client.post("/api/games", json={"seed": 42, "players": []})
    assert r.status_code == 422
    r = client.post("/api/games", json={"seed": 42, "players": ["a", "a"]})
    assert r.status_code == 400


class TestGameFlow:
    """Stage orders, run a turn, inspect the result."""

    def test_submit_orders(self, client, game_id):
        r = client.post(
            f"/api/games/{game_id}/orders", json={"playerId": 1, "text": 'name S1 "Intrepid"\n'}
        )
        assert r.status_code == 200
        data = r.json()
        assert data["accepted"] is True
        assert data["orders"] == 1

    def test_submit_orders_with_errors(self, client, game_id):
        r = client.post(f"/api/games/{game_id}/orders", json={"playerId": 1, "text": "control\n"})
        assert r.json()["accepted"] is False
        assert len(r.json()["errors"]) == 1

    def test_unknown_player(self, client, game_id):
        r = client.post(f"/api/games/{game_id}/orders", json={"playerId": 9, "text": ""})
        assert r.status_code == 400

    def test_run_turn(self, client, game_id):
        client.post(
            f"/api/games/{game_id}/orders",
            json={"playerId": 1, "text": 'name S1 "Intrepid"\ncontrol C3\n'},
        )
        r = client.post(f"/api/games/{game_id}/turn", json={})
        assert r.status_code == 200
        data = r.json()
        assert data["turn"] == "0001/2"
        assert "control" in data["phasesRun"]
        assert len(data["errors"]["1"]) == 1

        r = client.get(f"/api/games/{game_id}/hulls/S1")
        assert r.status_code == 200
        assert r.json()["name"] == "Intrepid"

    def test_run_selected_phases(self, client, game_id):
        r = client.post(f"/api/games/{game_id}/turn", json={"phases": ["combat", "fuel-allocation"]})
        data = r.json()
        assert data["phasesRun"] == ["fuel-allocation"]
        assert data["phasesSkipped"] == ["combat"]

    def test_unknown_phase_rejected(self, client, game_id):
        r = client.post(f"/api/games/{game_id}/turn", json={"phases": ["teleport"]})
        assert r.status_code == 400

    def test_get_hull(self, client, game_id):
        r = client.get(f"/api/games/{game_id}/hulls/c1")
        assert r.status_code == 200
        data = r.json()
        assert data["hullId"] == "C1"
        assert data["owner"] == 1
        assert data["population"]["professional"] == 2_000_000
        assert data["inventory"]["FUEL"]["stowed"] == 5_000_000
        assert len(data["mineGroups"]) == 4

    def test_missing_hull(self, client, game_id):
        r = client.get(f"/api/games/{game_id}/hulls/C99")
        assert r.status_code == 404

    def test_delete_game(self, client, game_id):
        assert client.delete(f"/api/games/{game_id}").status_code == 200
        assert client.get(f"/api/games/{game_id}/hulls/C1").status_code == 404


def test_missing_game(client):
    r = client.post("/api/games/game-nope/turn", json={})
    assert r.status_code == 404
