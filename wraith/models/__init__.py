"""Data models for the Wraith turn engine."""

from .catalog import UnitCatalog, build_catalog
from .errors import InvariantError, OrderError, OrderErrorType
from .galaxy import Deposit, Planet, Star, System
from .game import Game
from .groups import FactoryGroup, FarmGroup, GroupUnit, MineGroup
from .hull import Hull, HullKind, HullUnit, InventoryUnit, Pay, Population, Rations
from .order import (
    AssembleOrder,
    ControlOrder,
    NameOrder,
    Order,
    Phase,
    PhaseOrders,
    RejectedOrder,
)
from .player import Player
from .unit import Unit

__all__ = [
    "AssembleOrder",
    "ControlOrder",
    "Deposit",
    "FactoryGroup",
    "FarmGroup",
    "Game",
    "GroupUnit",
    "Hull",
    "HullKind",
    "HullUnit",
    "InventoryUnit",
    "InvariantError",
    "MineGroup",
    "NameOrder",
    "Order",
    "OrderError",
    "OrderErrorType",
    "Pay",
    "Phase",
    "PhaseOrders",
    "Planet",
    "Player",
    "Population",
    "Rations",
    "RejectedOrder",
    "Star",
    "System",
    "Unit",
    "UnitCatalog",
    "build_catalog",
]
