"""Tests for game state serialization."""

import tempfile
from pathlib import Path

import pytest

from wraith.engine.galaxy_generator import generate_galaxy
from wraith.engine.turn_executor import TurnExecutor
from wraith.utils.serialization import game_from_dict, game_to_dict, load_game, save_game


def test_save_and_load_game():
    """A saved game loads back with the same arena."""
    game = generate_galaxy(42, ["alice", "bob"])
    game.year, game.quarter = 3, 2
    game.order_errors = {1: ["line 1: no such colony C99"]}

    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = Path(tmpdir) / "test_game.json"
        save_game(game, str(filepath))
        loaded = load_game(str(filepath))

    assert loaded.seed == game.seed
    assert loaded.turn == "0003/2"
    assert loaded.next_id == game.next_id
    assert set(loaded.players) == set(game.players)
    assert set(loaded.planets) == set(game.planets)
    assert set(loaded.deposits) == set(game.deposits)
    assert [h.hull_id for h in loaded.hulls_in_order()] == [h.hull_id for h in game.hulls_in_order()]
    assert loaded.order_errors == {1: ["line 1: no such colony C99"]}


def test_round_trip_preserves_hull_state():
    game = generate_galaxy(7, ["alice"])
    TurnExecutor(game).execute([], "fuel-allocation", "labor-allocation", "mine-production")

    loaded = game_from_dict(game_to_dict(game))

    for hull in game.hulls_in_order():
        other = loaded.find_hull(hull.hull_id)
        assert other.kind == hull.kind
        assert other.owner == hull.owner
        assert other.population == hull.population
        assert [(i.unit.code, i.active_qty, i.stowed_qty) for i in other.inventory] == [
            (i.unit.code, i.active_qty, i.stowed_qty) for i in hull.inventory
        ]
        assert [g.stages for g in other.mine_groups] == [g.stages for g in hull.mine_groups]
        assert [g.product.code for g in other.factory_groups] == [
            g.product.code for g in hull.factory_groups
        ]
    for id_, deposit in game.deposits.items():
        assert loaded.deposits[id_].remaining_qty == deposit.remaining_qty
        assert loaded.deposits[id_].product is loaded.catalog[deposit.product.code]


def test_units_resolve_through_catalog():
    game = generate_galaxy(7, ["alice"])
    loaded = game_from_dict(game_to_dict(game))
    colony = loaded.find_colony("C1")
    assert colony.inventory[0].unit is loaded.catalog[colony.inventory[0].unit.code]


def test_unknown_unit_code_fails():
    data = game_to_dict(generate_galaxy(7, ["alice"]))
    data["hulls"][0]["inventory"][0]["unit"] = "XYZ-1"
    with pytest.raises(KeyError):
        game_from_dict(data)


def test_load_missing_file():
    with pytest.raises(FileNotFoundError):
        load_game("/nonexistent/wraith/game.json")
