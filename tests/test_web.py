"""Tests for the Flask JSON API."""

from unittest.mock import patch

import pytest

from alien_clicker.data.balance import BALANCE
from alien_clicker.engine.game_state import GameState
from alien_clicker.web import server


@pytest.fixture
def make_client(tmp_path):
    def _make(state: GameState):
        server.configure(BALANCE, tmp_path / "save.json", state=state)
        return server.app.test_client()
    return _make


def test_state(make_client):
    client = make_client(GameState(points=100))
    resp = client.get("/api/state")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["points"] == 100
    assert data["points_per_hit"] == 1.0
    assert [s["id"] for s in data["stats"]][0] == "ship"


def test_hit_awards_points(make_client):
    client = make_client(GameState())
    with patch.object(server._rng, "random", return_value=0.99):
        data = client.post("/api/action/hit").get_json()
    assert data["earned"] == 1.0
    assert data["points"] == 1.0


def test_buy_stat(make_client):
    client = make_client(GameState(points=10))
    data = client.post("/api/action/buy/stat/ship").get_json()
    assert data["bought"] is True
    assert data["stats"][0]["level"] == 1


def test_buy_stat_unknown(make_client):
    client = make_client(GameState())
    assert client.post("/api/action/buy/stat/nope").status_code == 404


def test_buy_sub_upgrade_locked(make_client):
    client = make_client(GameState(points=1e9))
    data = client.post("/api/action/buy/sub/death_pact").get_json()
    assert data["bought"] is False


def test_buy_prestige_upgrade(make_client):
    client = make_client(GameState(prestige_points=5))
    data = client.post("/api/action/buy/prestige/prestige_damage").get_json()
    assert data["bought"] is True
    assert data["prestige_points"] == 4


def test_ascension_info(make_client):
    client = make_client(GameState(level=110, sub_upgrades={"meaning_of_life": True}))
    data = client.get("/api/ascension").get_json()
    assert data["can_ascend"] is True
    assert data["breakdown"]["total"] == 10
    hull = next(u for u in data["upgrades"] if u["id"] == "prestige_hull")
    assert hull["cost"] == 10


def test_ascend_refused_when_not_ready(make_client):
    client = make_client(GameState(level=50))
    assert client.post("/api/action/ascend").status_code == 400


def test_ascend(make_client, tmp_path):
    client = make_client(GameState(level=110, sub_upgrades={"meaning_of_life": True}))
    data = client.post("/api/action/ascend").get_json()
    assert data["gained"] == 10
    assert data["prestige_level"] == 1
    assert (tmp_path / "save.json").exists()


def test_save(make_client, tmp_path):
    client = make_client(GameState(points=3))
    assert client.post("/api/action/save").get_json() == {"saved": True}
    assert (tmp_path / "save.json").exists()
