"""Turn execution orchestrator.

The caller names the phases to run and their order; the executor imposes no
ordering of its own. Each phase is a method on `TurnExecutor`, looked up in a
dispatch table keyed by `Phase`. Phases without rules yet are stubs that log
and do nothing, so giving one real behavior only means replacing its entry in
the table.

After the requested phases, bookkeeping always runs:
1. Births for colonies, added to the unemployed
2. Birth and death counters recorded on the population
3. Fuel inventory collapsed into the first fuel line
4. Finished production delivered to inventory
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List

from ..models.game import Game
from ..models.hull import Hull
from ..models.order import Phase, PhaseOrders
from ..utils.constants import BIRTH_RATE, QUARTERS_PER_YEAR
from .allocation import ResourcePools, fuel_initialization, labor_initialization
from .assembly import execute_assembly_orders
from .control import execute_control_orders
from .life_support import life_support
from .production import (
    deliver_finished_goods,
    factory_production,
    farm_production,
    mine_production,
)

logger = logging.getLogger(__name__)

# Phases that are recognized but have no rules yet
STUB_PHASES = (
    Phase.COMBAT,
    Phase.SETUP,
    Phase.DISASSEMBLY,
    Phase.TRANSFER,
    Phase.TRADE,
    Phase.SURVEY,
    Phase.ESPIONAGE,
    Phase.MOVEMENT,
    Phase.DRAFT,
    Phase.PAY,
    Phase.RATION,
)


@dataclass
class TurnResults:
    """Outcome of one call to `TurnExecutor.execute`."""

    errors: Dict[int, List[str]] = field(default_factory=dict)  # player id -> messages
    phases_run: List[str] = field(default_factory=list)
    phases_skipped: List[str] = field(default_factory=list)


class TurnExecutor:
    """Runs the named phases of a turn against one game.

    Per-hull resource pools live on the executor for the duration of a call
    to `execute`.
    """

    def __init__(self, game: Game):
        self.game = game
        self.pools: Dict[int, ResourcePools] = {}
        self.handlers: Dict[Phase, Callable[[List[PhaseOrders]], None]] = {
            Phase.FUEL_ALLOCATION: self.execute_phase_fuel_allocation,
            Phase.LABOR_ALLOCATION: self.execute_phase_labor_allocation,
            Phase.LIFE_SUPPORT: self.execute_phase_life_support,
            Phase.FARM_PRODUCTION: self.execute_phase_farm_production,
            Phase.MINE_PRODUCTION: self.execute_phase_mine_production,
            Phase.FACTORY_PRODUCTION: self.execute_phase_factory_production,
            Phase.RETOOL: self.execute_phase_retool,
            Phase.ASSEMBLY: self.execute_phase_assembly,
            Phase.CONTROL: self.execute_phase_control,
        }
        self._results = TurnResults()

    def execute(self, all_orders: Iterable[PhaseOrders], *phase_names: str) -> TurnResults:
        """Run the named phases in the order given, then bookkeeping.

        Unknown and unimplemented phase names are logged and skipped.

        Args:
            all_orders: Every player's orders, grouped by phase
            *phase_names: Phases to run, e.g. "fuel-allocation", "control"

        Returns:
            TurnResults with per-player order errors and the phases run
        """
        orders = list(all_orders)
        self._results = TurnResults(errors={po.player_id: [] for po in orders})
        self.initialize_pools()

        for name in phase_names:
            try:
                phase = Phase(name)
            except ValueError:
                logger.warning("unknown phase %r skipped", name)
                self._results.phases_skipped.append(name)
                continue

            handler = self.handlers.get(phase)
            if handler is None:
                logger.info("phase %s: not implemented", phase.value)
                self._results.phases_skipped.append(phase.value)
                continue

            logger.info("%s: phase %s", self.game.turn, phase.value)
            handler(orders)
            self._results.phases_run.append(phase.value)

        self.execute_bookkeeping()
        self.game.order_errors = {
            player_id: list(errors) for player_id, errors in self._results.errors.items()
        }
        return self._results

    def initialize_pools(self) -> None:
        """Start each hull's turn with its fuel and labor on hand."""
        self.pools = {}
        for hull in self.game.hulls_in_order():
            pools = ResourcePools()
            fuel_initialization(hull, pools)
            labor_initialization(hull, pools)
            self.pools[hull.id] = pools

    # =========================================================================
    # PHASES
    # =========================================================================

    def execute_phase_fuel_allocation(self, orders: List[PhaseOrders]) -> None:
        for hull in self.game.hulls_in_order():
            fuel_initialization(hull, self.pools[hull.id])

    def execute_phase_labor_allocation(self, orders: List[PhaseOrders]) -> None:
        for hull in self.game.hulls_in_order():
            labor_initialization(hull, self.pools[hull.id])

    def execute_phase_life_support(self, orders: List[PhaseOrders]) -> None:
        for hull in self.game.hulls_in_order():
            life_support(hull, self.pools[hull.id])

    def execute_phase_farm_production(self, orders: List[PhaseOrders]) -> None:
        for hull in self.game.hulls_in_order():
            farm_production(self.game, hull, self.pools[hull.id])

    def execute_phase_mine_production(self, orders: List[PhaseOrders]) -> None:
        for hull in self.game.hulls_in_order():
            mine_production(self.game, hull, self.pools[hull.id])

    def execute_phase_factory_production(self, orders: List[PhaseOrders]) -> None:
        for hull in self.game.hulls_in_order():
            factory_production(self.game, hull, self.pools[hull.id])

    def execute_phase_retool(self, orders: List[PhaseOrders]) -> None:
        self._log_submitters(Phase.RETOOL, orders)

    def execute_phase_assembly(self, orders: List[PhaseOrders]) -> None:
        for phase_orders in orders:
            errors = execute_assembly_orders(self.game, phase_orders)
            self._results.errors.setdefault(phase_orders.player_id, []).extend(errors)

    def execute_phase_control(self, orders: List[PhaseOrders]) -> None:
        for phase_orders in orders:
            errors = execute_control_orders(self.game, phase_orders)
            self._results.errors.setdefault(phase_orders.player_id, []).extend(errors)

    def _log_submitters(self, phase: Phase, orders: List[PhaseOrders]) -> None:
        for phase_orders in orders:
            submitted = phase_orders.for_phase(phase)
            if submitted:
                logger.info(
                    "phase %s: player %d submitted %d orders",
                    phase.value,
                    phase_orders.player_id,
                    len(submitted),
                )

    # =========================================================================
    # BOOKKEEPING
    # =========================================================================

    def execute_bookkeeping(self) -> None:
        for hull in self.game.hulls_in_order():
            pools = self.pools[hull.id]
            self._update_population(hull, pools)
            self._collapse_fuel(hull, pools)
            deliver_finished_goods(self.game, hull)

    def _update_population(self, hull: Hull, pools: ResourcePools) -> None:
        population = hull.population
        births = 0
        if hull.is_colony:
            births = int(population.total * BIRTH_RATE / QUARTERS_PER_YEAR)
        population.unemployed += births
        population.births_prior_turn = births
        population.natural_deaths_prior_turn = pools.non_combat_deaths

    def _collapse_fuel(self, hull: Hull, pools: ResourcePools) -> None:
        # the first fuel line holds the balance; any others are emptied
        for i, item in enumerate(hull.fuel_lines()):
            item.active_qty = 0
            item.stowed_qty = pools.fuel if i == 0 else 0


def advance_turn(game: Game) -> str:
    """Move the game clock forward one quarter.

    Returns:
        The new turn, "YYYY/Q"
    """
    game.quarter += 1
    if game.quarter > QUARTERS_PER_YEAR:
        game.quarter = 1
        game.year += 1
    return game.turn
