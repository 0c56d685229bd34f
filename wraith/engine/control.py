"""Control phase: claiming and naming colonies and ships.

Every order in the batch is tried on its own. A failed order is reported
and the rest of the batch still runs.
"""

import logging
from typing import List

from ..models.errors import OrderError, OrderErrorType
from ..models.game import Game
from ..models.hull import Hull
from ..models.order import ControlOrder, NameOrder, Phase, PhaseOrders

logger = logging.getLogger(__name__)


def _claim(hull: Hull, player_id: int, what: str) -> None:
    if hull.owner is not None and hull.owner != player_id:
        raise OrderError(
            OrderErrorType.OWNERSHIP,
            f"{what} {hull.hull_id} is controlled by another player",
        )
    hull.owner = player_id


def control_colony(game: Game, player_id: int, hull_id: str) -> Hull:
    """Give a colony to a player.

    Raises:
        OrderError: If the colony does not exist or belongs to another player
    """
    colony = game.find_colony(hull_id)
    if colony is None:
        raise OrderError(OrderErrorType.LOOKUP, f"no such colony {hull_id}")
    _claim(colony, player_id, "colony")
    logger.info("player %d controls colony %s", player_id, colony.hull_id)
    return colony


def control_ship(game: Game, player_id: int, hull_id: str) -> Hull:
    """Give a ship to a player.

    Raises:
        OrderError: If the ship does not exist or belongs to another player
    """
    ship = game.find_ship(hull_id)
    if ship is None:
        raise OrderError(OrderErrorType.LOOKUP, f"no such ship {hull_id}")
    _claim(ship, player_id, "ship")
    logger.info("player %d controls ship %s", player_id, ship.hull_id)
    return ship


def name_hull(game: Game, player_id: int, hull_id: str, name: str) -> Hull:
    """Rename a colony or ship owned by the player.

    Raises:
        OrderError: If the hull does not exist or the player does not own it
    """
    hull = game.find_hull(hull_id)
    what = "ship" if hull_id.upper().startswith("S") else "colony"
    if hull is None:
        raise OrderError(OrderErrorType.LOOKUP, f"no such {what} {hull_id}")
    if hull.owner != player_id:
        raise OrderError(OrderErrorType.OWNERSHIP, f"{what} {hull.hull_id} is not yours to name")
    hull.name = name
    logger.info("player %d named %s %r", player_id, hull.hull_id, name)
    return hull


def execute_control_orders(game: Game, phase_orders: PhaseOrders) -> List[str]:
    """Apply one player's control and name orders.

    Args:
        game: Current game state
        phase_orders: The player's orders grouped by phase

    Returns:
        Error messages for the orders that failed, in submission order
    """
    errors = []
    player_id = phase_orders.player_id
    for order in phase_orders.for_phase(Phase.CONTROL):
        try:
            if isinstance(order, NameOrder):
                name_hull(game, player_id, order.hull_id, order.name)
            elif isinstance(order, ControlOrder):
                if order.targets_ship:
                    control_ship(game, player_id, order.hull_id)
                else:
                    control_colony(game, player_id, order.hull_id)
            else:
                logger.warning("control phase ignoring %s order", type(order).__name__)
        except OrderError as e:
            logger.warning("player %d line %d: %s", player_id, order.line, e.message)
            errors.append(f"line {order.line}: {e.message}")
    return errors
