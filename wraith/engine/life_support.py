"""Life support phase.

Enclosed colonies, orbital colonies and ships keep their people alive with
life-support units. Each active unit supports tech level squared people. When
the population outgrows the capacity, the excess dies, spread across the
population classes in proportion to their size.
"""

import logging
from typing import Dict

from ..models.hull import CIVILIAN_CLASSES, Hull, Population
from .allocation import ResourcePools, allocate

logger = logging.getLogger(__name__)


def apportion_deaths(shortfall: int, population: Population) -> Dict[str, int]:
    """Split a death toll across population classes.

    Each class loses round(shortfall * qty / total), rounding half up. Any
    remainder left by rounding goes to the largest classes first, and no
    class loses more people than it has.

    Args:
        shortfall: Number of people who die
        population: Population to take them from

    Returns:
        Class code -> deaths, summing to the shortfall (capped at the total
        population)
    """
    quantities = {code: population.quantity(code) for code in CIVILIAN_CLASSES}
    total = sum(quantities.values())
    shortfall = min(max(shortfall, 0), total)
    if shortfall == 0:
        return {code: 0 for code in CIVILIAN_CLASSES}

    deaths = {
        code: (2 * shortfall * qty + total) // (2 * total) for code, qty in quantities.items()
    }

    # largest class first; ties go in class order
    largest_first = sorted(CIVILIAN_CLASSES, key=lambda code: -quantities[code])
    remainder = shortfall - sum(deaths.values())
    while remainder != 0:
        for code in largest_first:
            if remainder > 0 and deaths[code] < quantities[code]:
                deaths[code] += 1
                remainder -= 1
            elif remainder < 0 and deaths[code] > 0:
                deaths[code] -= 1
                remainder += 1
            if remainder == 0:
                break
    return deaths


def life_support(hull: Hull, pools: ResourcePools) -> int:
    """Run life support for one hull.

    Life-support units are fueled in hull unit order. They need no workers.

    Returns:
        Number of people who died for lack of life support
    """
    if not hull.needs_life_support:
        return 0

    capacity = 0
    for hull_unit in hull.hull_units:
        if hull_unit.unit.kind != "life-support":
            continue
        allocation = allocate(
            pools,
            hull_unit.unit,
            hull_unit.quantity,
            professionals_per_unit=0,
            unskilled_per_unit=0,
        )
        capacity += allocation.active * hull_unit.unit.tech_level**2
    pools.life_support_capacity = capacity

    population = hull.population
    shortfall = population.total - capacity
    if shortfall <= 0:
        return 0

    deaths = apportion_deaths(shortfall, population)
    for code, dead in deaths.items():
        population.set_quantity(code, population.quantity(code) - dead)
    # the dead no longer work this turn
    pools.professional = min(pools.professional, population.professional)
    pools.unskilled = min(pools.unskilled, population.unskilled)
    died = sum(deaths.values())
    pools.non_combat_deaths += died
    logger.info(
        "%s: life support for %d of %d, %d died", hull.hull_id, capacity, capacity + shortfall, died
    )
    return died
