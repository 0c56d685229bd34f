"""Resource allocation: fuel and labor for unit groups.

Each hull carries per-turn pools of fuel and labor. Groups draw on the pools
one at a time, first come first served, so the order in which a phase walks
a hull's groups decides who goes short.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..models.galaxy import Planet
from ..models.hull import Hull, HullKind
from ..models.unit import Unit
from ..utils.constants import (
    PROFESSIONALS_PER_UNIT,
    SOLAR_FARM_CODES,
    SOLAR_MAX_ORBIT,
    UNSKILLED_PER_UNIT,
)

logger = logging.getLogger(__name__)


@dataclass
class ResourcePools:
    """Per-hull counters for one turn.

    Pools only ever go down during a turn. The executor owns them and hands
    them to the phase bodies.
    """

    fuel: int = 0
    professional: int = 0
    unskilled: int = 0
    non_combat_deaths: int = 0
    life_support_capacity: int = 0


@dataclass
class Allocation:
    """What one unit group actually received."""

    active: int
    fuel: int = 0
    professional: int = 0
    unskilled: int = 0


def is_solar_powered(unit: Unit, hull: Hull, planet: Optional[Planet]) -> bool:
    """Return True if the unit runs on sunlight instead of fuel.

    Only farms FRM-2 through FRM-5 on an orbital colony close to its star
    qualify.
    """
    if unit.code not in SOLAR_FARM_CODES:
        return False
    if hull.kind != HullKind.ORBITAL or planet is None:
        return False
    return planet.orbit_no <= SOLAR_MAX_ORBIT


def max_capacity(
    pools: ResourcePools,
    unit: Unit,
    desired: int,
    solar_powered: bool = False,
    professionals_per_unit: int = PROFESSIONALS_PER_UNIT,
    unskilled_per_unit: int = UNSKILLED_PER_UNIT,
) -> int:
    """Compute how many of `desired` units the pools can run this turn.

    Args:
        pools: The hull's remaining fuel and labor
        unit: Unit type being activated
        desired: Configured active quantity
        solar_powered: Skip the fuel cap
        professionals_per_unit: Professionals needed per active unit
        unskilled_per_unit: Unskilled workers needed per active unit

    Returns:
        Active quantity, never more than `desired`
    """
    qty = max(desired, 0)

    if not solar_powered and unit.uses_fuel:
        qty = min(qty, math.floor(pools.fuel / unit.fuel_per_unit_per_turn))
        # float division can overshoot by one when the rate is inexact
        while qty > 0 and unit.fuel_used(qty) > pools.fuel:
            qty -= 1

    if professionals_per_unit > 0:
        qty = min(qty, pools.professional // professionals_per_unit)
    if unskilled_per_unit > 0:
        qty = min(qty, pools.unskilled // unskilled_per_unit)

    return max(qty, 0)


def allocate(
    pools: ResourcePools,
    unit: Unit,
    desired: int,
    solar_powered: bool = False,
    professionals_per_unit: int = PROFESSIONALS_PER_UNIT,
    unskilled_per_unit: int = UNSKILLED_PER_UNIT,
) -> Allocation:
    """Activate as many units as the pools allow and charge the pools.

    Consumption is deducted immediately, so a later call against the same
    pools sees what this one left behind.

    Returns:
        Allocation with the active quantity and the resources consumed
    """
    active = max_capacity(
        pools, unit, desired, solar_powered, professionals_per_unit, unskilled_per_unit
    )
    allocation = Allocation(
        active=active,
        fuel=0 if solar_powered else unit.fuel_used(active),
        professional=active * professionals_per_unit,
        unskilled=active * unskilled_per_unit,
    )
    pools.fuel -= allocation.fuel
    pools.professional -= allocation.professional
    pools.unskilled -= allocation.unskilled

    logger.debug(
        "allocate %s: desired %d active %d fuel %d pro %d usk %d",
        unit.code,
        desired,
        allocation.active,
        allocation.fuel,
        allocation.professional,
        allocation.unskilled,
    )
    return allocation


def fuel_initialization(hull: Hull, pools: ResourcePools) -> None:
    """Pool every fuel line of the hull into one available fuel counter."""
    pools.fuel = sum(item.total_qty for item in hull.fuel_lines())


def labor_initialization(hull: Hull, pools: ResourcePools) -> None:
    """Make the hull's professionals and unskilled workers available for work."""
    pools.professional = hull.population.professional
    pools.unskilled = hull.population.unskilled
