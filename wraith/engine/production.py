"""Production pipeline for farm, mine and factory groups.

Every group has a four stage buffer. Each turn finished work moves one stage
closer to completion, first in first out, and new production enters stage 1.
No stage hands on more than the group produced this turn, so a group that
loses its workers stalls instead of flushing its buffer.

Stage 4 holds finished goods. Bookkeeping moves them into the hull's
inventory at the end of the turn.
"""

import logging
import math
from typing import Callable, Dict, List, Optional

from ..models.game import Game
from ..models.galaxy import Deposit
from ..models.hull import Hull, InventoryUnit
from ..models.unit import Unit
from ..utils.constants import QUARTERS_PER_YEAR, STAGE_COUNT
from .allocation import ResourcePools, allocate, is_solar_powered

logger = logging.getLogger(__name__)

YieldFunction = Callable[[int], int]


def advance_stages(
    stages: List[int], units_produced: int, yield_fn: Optional[YieldFunction] = None
) -> List[int]:
    """Advance a stage buffer by one turn.

    Args:
        stages: Current buffer, quantities at 25/50/75/100% completion
        units_produced: Raw quantity produced this turn
        yield_fn: Converts raw production into usable product (mines lose
            some of what they extract). Defaults to no loss.

    Returns:
        New stage buffer; the input list is not modified
    """
    if len(stages) != STAGE_COUNT:
        raise ValueError(f"Invalid stages: {stages} (must have {STAGE_COUNT} slots)")
    if units_produced < 0:
        raise ValueError(f"Invalid units_produced: {units_produced} (must be >= 0)")

    new_stages = list(stages)
    # promote from the back of the buffer so nothing moves twice
    for stage in range(STAGE_COUNT - 1, 0, -1):
        moved = min(new_stages[stage - 1], units_produced)
        new_stages[stage - 1] -= moved
        new_stages[stage] += moved

    new_stages[0] += yield_fn(units_produced) if yield_fn else units_produced
    return new_stages


def mine_yield(deposit: Deposit) -> YieldFunction:
    """Yield function for a deposit: usable product is ceil(qty * yield_pct)."""

    def _yield(qty: int) -> int:
        # round first so 10 * 0.3 does not ceil to 4
        return math.ceil(round(qty * deposit.yield_pct, 9))

    return _yield


def mining_rate(unit: Unit, active: int) -> int:
    """Mass units a mine group extracts per turn."""
    return active * 100 * unit.tech_level // QUARTERS_PER_YEAR


def farming_rate(unit: Unit, active: int) -> int:
    """Food units a farm group grows per turn."""
    if unit.tech_level == 1:
        return active * 100 // QUARTERS_PER_YEAR
    return active * 20 * unit.tech_level // QUARTERS_PER_YEAR


def _tonnage_rate(unit: Unit, active: int, product: Unit) -> int:
    # factories turn out 20 tonnes per tech level per year
    tonnes = active * 20 * unit.tech_level // QUARTERS_PER_YEAR
    if product.mass_per_unit <= 0:
        return tonnes
    return math.floor(tonnes / product.mass_per_unit)


def _research_rate(unit: Unit, active: int, product: Unit) -> int:
    return active * unit.tech_level // QUARTERS_PER_YEAR


# product kind -> rate function; kinds not listed use the tonnage rate
FACTORY_RATES: Dict[str, Callable[[Unit, int, Unit], int]] = {
    "research": _research_rate,
}


def factory_rate(unit: Unit, active: int, product: Unit) -> int:
    """Units of `product` a factory group manufactures per turn.

    Args:
        unit: Factory unit type
        active: Active factory units
        product: Unit being manufactured

    Returns:
        Finished units per turn
    """
    rate = FACTORY_RATES.get(product.kind, _tonnage_rate)
    return rate(unit, active, product)


def farm_production(game: Game, hull: Hull, pools: ResourcePools) -> None:
    """Run every farm group on a hull for one turn."""
    planet = game.planets.get(hull.planet_id)
    for group in hull.farm_groups:
        produced = 0
        for group_unit in group.units:
            solar = is_solar_powered(group_unit.unit, hull, planet)
            allocation = allocate(pools, group_unit.unit, group_unit.active_qty, solar)
            produced += farming_rate(group_unit.unit, allocation.active)
        group.stages = advance_stages(group.stages, produced)
        logger.debug("%s: farm group %d produced %d", hull.hull_id, group.no, produced)


def mine_production(game: Game, hull: Hull, pools: ResourcePools) -> None:
    """Run every mine group on a hull for one turn.

    Extraction never takes more than the deposit has left. The deposit loses
    everything extracted; only the yield reaches the stage buffer.
    """
    for group in hull.mine_groups:
        deposit = game.deposits[group.deposit_id]
        allocation = allocate(pools, group.unit.unit, group.unit.active_qty)
        produced = min(mining_rate(group.unit.unit, allocation.active), deposit.remaining_qty)
        deposit.remaining_qty -= produced
        group.stages = advance_stages(group.stages, produced, mine_yield(deposit))
        logger.debug(
            "%s: mine group %d extracted %d from %s (%d remaining)",
            hull.hull_id,
            group.no,
            produced,
            deposit.code,
            deposit.remaining_qty,
        )


def factory_production(game: Game, hull: Hull, pools: ResourcePools) -> None:
    """Run every factory group on a hull for one turn."""
    for group in hull.factory_groups:
        produced = 0
        for group_unit in group.units:
            allocation = allocate(pools, group_unit.unit, group_unit.active_qty)
            produced += factory_rate(group_unit.unit, allocation.active, group.product)
        group.stages = advance_stages(group.stages, produced)
        logger.debug(
            "%s: factory group %d produced %d %s",
            hull.hull_id,
            group.no,
            produced,
            group.product.code,
        )


def _stow(hull: Hull, unit: Unit, qty: int) -> None:
    item = hull.find_inventory(unit.code)
    if item is None:
        item = InventoryUnit(unit=unit)
        hull.inventory.append(item)
    item.stowed_qty += qty


def deliver_finished_goods(game: Game, hull: Hull) -> int:
    """Move finished goods out of stage 4 into the hull's stowed inventory.

    Returns:
        Total units delivered
    """
    delivered = 0
    groups: List[tuple] = [("farm", g, g.product) for g in hull.farm_groups]
    groups.extend(("mine", g, game.deposits[g.deposit_id].product) for g in hull.mine_groups)
    groups.extend(("factory", g, g.product) for g in hull.factory_groups)

    for kind, group, product in groups:
        finished = group.stages[-1]
        if finished <= 0:
            continue
        _stow(hull, product, finished)
        group.stages[-1] = 0
        delivered += finished
        logger.debug(
            "%s: %s group %d delivered %d %s", hull.hull_id, kind, group.no, finished, product.code
        )
    return delivered
