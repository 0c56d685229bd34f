"""Assembly phase: checking assemble orders against the game.

Group creation does not change the game yet. Each order is resolved
(hull, unit, product, deposit) so players hear about bad ids this turn.
"""

import logging
from typing import List

from ..models.errors import OrderError, OrderErrorType
from ..models.game import Game
from ..models.hull import Hull
from ..models.order import AssembleOrder, Phase, PhaseOrders
from ..models.unit import Unit

logger = logging.getLogger(__name__)


def _resolve_unit(game: Game, keyword: str) -> Unit:
    try:
        return game.catalog.from_keyword(keyword)
    except KeyError:
        raise OrderError(OrderErrorType.LOOKUP, f"no such unit {keyword}")


def check_assemble_order(game: Game, player_id: int, order: AssembleOrder) -> Hull:
    """Resolve every id an assemble order names.

    Args:
        game: Current game state
        player_id: Player who submitted the order
        order: Parsed assemble order

    Returns:
        The hull the group would be assembled in

    Raises:
        OrderError: If an id does not resolve or the player does not own the hull
    """
    what = "ship" if order.targets_ship else "colony"
    hull = game.find_hull(order.hull_id)
    if hull is None:
        raise OrderError(OrderErrorType.LOOKUP, f"no such {what} {order.hull_id}")
    if hull.owner != player_id:
        raise OrderError(OrderErrorType.OWNERSHIP, f"{what} {hull.hull_id} is not yours")

    _resolve_unit(game, order.unit)
    if order.product is not None:
        _resolve_unit(game, order.product)
    if order.deposit_id is not None:
        deposit = game.deposit_by_code(game.planet_of(hull), order.deposit_id)
        if deposit is None:
            raise OrderError(
                OrderErrorType.LOOKUP, f"no such deposit {order.deposit_id} at {hull.hull_id}"
            )
    return hull


def execute_assembly_orders(game: Game, phase_orders: PhaseOrders) -> List[str]:
    """Check one player's assemble orders.

    Returns:
        Error messages for the orders that failed, in submission order
    """
    errors = []
    player_id = phase_orders.player_id
    for order in phase_orders.for_phase(Phase.ASSEMBLY):
        if not isinstance(order, AssembleOrder):
            logger.warning("assembly phase ignoring %s order", type(order).__name__)
            continue
        try:
            hull = check_assemble_order(game, player_id, order)
        except OrderError as e:
            logger.warning("player %d line %d: %s", player_id, order.line, e.message)
            errors.append(f"line {order.line}: {e.message}")
            continue
        logger.info(
            "player %d: %d %s for a %s group at %s accepted (not executed)",
            player_id,
            order.quantity,
            order.unit,
            order.group_kind,
            hull.hull_id,
        )
    return errors
