"""Turn engine: allocation, production, life support, control and phases."""

from .allocation import Allocation, ResourcePools, allocate, is_solar_powered, max_capacity
from .assembly import check_assemble_order, execute_assembly_orders
from .control import control_colony, control_ship, execute_control_orders, name_hull
from .galaxy_generator import generate_galaxy
from .life_support import apportion_deaths, life_support
from .production import (
    FACTORY_RATES,
    advance_stages,
    deliver_finished_goods,
    factory_rate,
    farming_rate,
    mine_yield,
    mining_rate,
)
from .turn_executor import STUB_PHASES, TurnExecutor, TurnResults, advance_turn

__all__ = [
    "Allocation",
    "FACTORY_RATES",
    "ResourcePools",
    "STUB_PHASES",
    "TurnExecutor",
    "TurnResults",
    "advance_stages",
    "advance_turn",
    "allocate",
    "apportion_deaths",
    "check_assemble_order",
    "control_colony",
    "control_ship",
    "deliver_finished_goods",
    "execute_assembly_orders",
    "execute_control_orders",
    "factory_rate",
    "farming_rate",
    "generate_galaxy",
    "is_solar_powered",
    "life_support",
    "max_capacity",
    "mine_yield",
    "mining_rate",
    "name_hull",
]
