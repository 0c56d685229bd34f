"""Game state container: an arena of galaxy entities keyed by stable ids."""

from dataclasses import dataclass, field
from typing import Optional

from .catalog import UnitCatalog, build_catalog
from .galaxy import Deposit, Planet, Star, System
from .hull import Hull
from .player import Player


@dataclass
class Game:
    """Main game state container.

    Holds every player, system, star, planet, deposit and hull, each keyed by
    its integer id. Entities refer to one another by id, so the arena can be
    serialized without chasing cycles. All engine logic operates on this
    state.
    """

    seed: int  # RNG seed used to generate the galaxy
    year: int = 1
    quarter: int = 1
    catalog: UnitCatalog = field(default_factory=build_catalog)
    players: dict[int, Player] = field(default_factory=dict)
    systems: dict[int, System] = field(default_factory=dict)
    stars: dict[int, Star] = field(default_factory=dict)
    planets: dict[int, Planet] = field(default_factory=dict)
    deposits: dict[int, Deposit] = field(default_factory=dict)
    hulls: dict[int, Hull] = field(default_factory=dict)
    order_errors: dict[int, list[str]] = field(
        default_factory=dict
    )  # Player ID -> errors from the last executed turn
    next_id: int = 1  # next free arena id

    def __post_init__(self):
        """Validate game data after initialization."""
        if self.year < 0:
            raise ValueError(f"Invalid year: {self.year} (must be >= 0)")
        if not (1 <= self.quarter <= 4):
            raise ValueError(f"Invalid quarter: {self.quarter} (must be 1-4)")

    @property
    def turn(self) -> str:
        return f"{self.year:04d}/{self.quarter}"

    def new_id(self) -> int:
        """Reserve the next arena id."""
        id_ = self.next_id
        self.next_id += 1
        return id_

    def add_hull(self, hull: Hull) -> Hull:
        if hull.id in self.hulls:
            raise ValueError(f"Duplicate hull id: {hull.id}")
        if self.find_hull(hull.hull_id) is not None:
            raise ValueError(f"Duplicate hull_id: {hull.hull_id}")
        self.hulls[hull.id] = hull
        self.next_id = max(self.next_id, hull.id + 1)
        return hull

    def hulls_in_order(self) -> list[Hull]:
        """Every hull in ascending arena id order, the processing order for phases."""
        return [self.hulls[id_] for id_ in sorted(self.hulls)]

    def find_hull(self, hull_id: str) -> Optional[Hull]:
        hull_id = hull_id.upper()
        for hull in self.hulls.values():
            if hull.hull_id == hull_id:
                return hull
        return None

    def find_colony(self, hull_id: str) -> Optional[Hull]:
        hull = self.find_hull(hull_id)
        return hull if hull is not None and hull.is_colony else None

    def find_ship(self, hull_id: str) -> Optional[Hull]:
        hull = self.find_hull(hull_id)
        return hull if hull is not None and hull.is_ship else None

    def hulls_owned_by(self, player_id: int) -> list[Hull]:
        return [hull for hull in self.hulls_in_order() if hull.owner == player_id]

    def planet_of(self, hull: Hull) -> Planet:
        return self.planets[hull.planet_id]

    def deposit_by_code(self, planet: Planet, code: str) -> Optional[Deposit]:
        """Find a deposit on a planet by its "DP<no>" code."""
        code = code.upper()
        for deposit_id in planet.deposit_ids:
            deposit = self.deposits[deposit_id]
            if deposit.code == code:
                return deposit
        return None
