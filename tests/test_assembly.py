"""Tests for checking assemble orders in the assembly phase."""

import pytest

from wraith.engine.assembly import check_assemble_order, execute_assembly_orders
from wraith.engine.turn_executor import TurnExecutor
from wraith.interface.order_parser import parse_orders
from wraith.models.errors import OrderError, OrderErrorType
from wraith.models.galaxy import Deposit, Planet
from wraith.models.game import Game
from wraith.models.hull import Hull, HullKind
from wraith.models.order import PhaseOrders
from wraith.models.player import Player


def create_game():
    """Player 1 owns C1 on a planet with deposit DP1; C2 is unowned."""
    game = Game(seed=7)
    game.players = {1: Player(1, "alice"), 2: Player(2, "bob")}
    game.planets[1] = Planet(id=1, star_id=1, orbit_no=3, kind="terrestrial", deposit_ids=[5])
    game.deposits[5] = Deposit(
        id=5,
        no=1,
        planet_id=1,
        product=game.catalog["FUEL"],
        initial_qty=1_000,
        remaining_qty=1_000,
        yield_pct=0.5,
    )
    game.add_hull(Hull(id=10, hull_id="C1", kind=HullKind.OPEN, planet_id=1, owner=1))
    game.add_hull(Hull(id=11, hull_id="C2", kind=HullKind.ORBITAL, planet_id=1))
    return game


def orders_for(player_id, text):
    result = parse_orders(text)
    assert result.rejected == []
    return PhaseOrders.from_orders(player_id, result.orders)


def first_order(text):
    return parse_orders(text).orders[0]


class TestCheckAssembleOrder:
    def setup_method(self):
        self.game = create_game()

    def test_valid_orders_resolve(self):
        for text in (
            "assemble C1 500 factory-1 structural\n",
            "assemble C1 100 farm-1\n",
            "assemble C1 1_500 mine-1 dp1\n",
        ):
            assert check_assemble_order(self.game, 1, first_order(text)).hull_id == "C1"

    def test_unknown_hull(self):
        with pytest.raises(OrderError) as info:
            check_assemble_order(self.game, 1, first_order("assemble C9 10 farm-1\n"))
        assert info.value.error_type == OrderErrorType.LOOKUP
        assert info.value.message == "no such colony C9"

    def test_hull_owned_by_someone_else(self):
        for player_id, text in ((2, "assemble C1 10 farm-1\n"), (1, "assemble C2 10 farm-1\n")):
            with pytest.raises(OrderError) as info:
                check_assemble_order(self.game, player_id, first_order(text))
            assert info.value.error_type == OrderErrorType.OWNERSHIP

    def test_unknown_unit(self):
        with pytest.raises(OrderError) as info:
            check_assemble_order(self.game, 1, first_order("assemble C1 10 factory-99 structural\n"))
        assert info.value.error_type == OrderErrorType.LOOKUP
        assert info.value.message == "no such unit factory-99"

    def test_unknown_deposit(self):
        with pytest.raises(OrderError) as info:
            check_assemble_order(self.game, 1, first_order("assemble C1 10 mine-1 DP4\n"))
        assert info.value.error_type == OrderErrorType.LOOKUP
        assert info.value.message == "no such deposit DP4 at C1"


def test_batch_reports_each_bad_order_and_keeps_going():
    game = create_game()
    text = (
        "assemble C9 10 farm-1\n"
        "assemble C1 10 farm-1\n"
        "assemble C1 10 mine-1 DP4\n"
    )
    errors = execute_assembly_orders(game, orders_for(1, text))

    assert errors == ["line 1: no such colony C9", "line 3: no such deposit DP4 at C1"]


def test_assembly_phase_collects_errors_without_changing_hulls():
    game = create_game()
    orders = [orders_for(1, "assemble C1 10 mine-1 DP4\nassemble C1 10 farm-1\n")]

    results = TurnExecutor(game).execute(orders, "assembly")

    assert results.phases_run == ["assembly"]
    assert results.errors[1] == ["line 1: no such deposit DP4 at C1"]
    assert game.order_errors[1] == results.errors[1]
    colony = game.find_colony("C1")
    assert colony.farm_groups == [] and colony.mine_groups == []
    assert game.deposits[5].remaining_qty == 1_000
