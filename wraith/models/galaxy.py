"""Galaxy data models: systems, stars, planets and deposits.

Entities reference each other by stable integer id. The `Game` arena owns
them all and resolves the ids.
"""

from dataclasses import dataclass, field
from typing import Optional

from .unit import Unit

PLANET_KINDS = ("asteroid-belt", "empty", "gas-giant", "terrestrial")


@dataclass
class System:
    """A location in the galaxy holding one or more stars."""

    id: int
    x: int
    y: int
    z: int
    star_ids: list[int] = field(default_factory=list)

    @property
    def coords(self) -> str:
        return f"{self.x}/{self.y}/{self.z}"


@dataclass
class Star:
    """A star in a system, with planets in orbits 1-10."""

    id: int
    system_id: int
    sequence: str  # "A", "B", ...
    kind: str
    planet_ids: list[int] = field(default_factory=list)


@dataclass
class Planet:
    """An orbit around a star. It may be empty."""

    id: int
    star_id: int
    orbit_no: int  # 1...10
    kind: str
    habitability_no: int = 0  # 0...25
    deposit_ids: list[int] = field(default_factory=list)

    def __post_init__(self):
        """Validate planet data after initialization."""
        if not (1 <= self.orbit_no <= 10):
            raise ValueError(f"Invalid orbit_no: {self.orbit_no} (must be 1-10)")
        if self.kind not in PLANET_KINDS:
            raise ValueError(f"Invalid kind: {self.kind} (must be one of {PLANET_KINDS})")


@dataclass
class Deposit:
    """A finite natural resource on a planet.

    Mining extracts mass units from `remaining_qty`; only `yield_pct` of the
    extracted mass becomes usable product.
    """

    id: int
    no: int  # deposit number on the planet, rendered as DP<no>
    planet_id: int
    product: Unit  # fuel, gold, metallics, or non-metallics
    initial_qty: int
    remaining_qty: int
    yield_pct: float  # 0.0 - 1.0
    controlled_by: Optional[int] = None  # arena id of the controlling hull

    def __post_init__(self):
        """Validate deposit data after initialization."""
        if not (0.0 <= self.yield_pct <= 1.0):
            raise ValueError(f"Invalid yield_pct: {self.yield_pct} (must be 0.0-1.0)")
        if self.remaining_qty < 0:
            raise ValueError(f"Invalid remaining_qty: {self.remaining_qty} (must be >= 0)")

    @property
    def code(self) -> str:
        return f"DP{self.no}"
