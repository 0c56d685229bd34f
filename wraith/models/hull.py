"""Hull data model: a colony or a ship.

A hull is the unit of ownership and production. It owns its structure
(hull units), its cargo (inventory), its population and its production
groups. Ownership is an id reference to a `Player`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..utils.constants import LIFE_SUPPORT_HULL_KINDS
from .errors import InvariantError
from .groups import FactoryGroup, FarmGroup, MineGroup
from .unit import Unit


class HullKind(str, Enum):
    """Kinds of colonies and ships."""
    OPEN = "open"
    SURFACE = "surface"
    ENCLOSED = "enclosed"
    ORBITAL = "orbital"
    SHIP = "ship"


@dataclass
class HullUnit:
    """Units built into the structure of a hull (life support, sensors, ...)."""

    unit: Unit
    quantity: int

    def __post_init__(self):
        if self.quantity < 0:
            raise ValueError(f"Invalid quantity: {self.quantity} (must be >= 0)")


@dataclass
class InventoryUnit:
    """Cargo carried by a hull, split into active and stowed quantities."""

    unit: Unit
    active_qty: int = 0
    stowed_qty: int = 0

    def __post_init__(self):
        if self.active_qty < 0 or self.stowed_qty < 0:
            raise ValueError(
                f"Invalid quantities for {self.unit.code}: "
                f"active {self.active_qty}, stowed {self.stowed_qty} (must be >= 0)"
            )

    @property
    def total_qty(self) -> int:
        return self.active_qty + self.stowed_qty


# Population class code -> Population attribute
POPULATION_CLASSES = {
    "PRO": "professional",
    "SLD": "soldier",
    "USK": "unskilled",
    "UEM": "unemployed",
    "CNW": "construction_crew",
    "SPY": "spy_team",
}

# Classes that count toward total population and share life support
CIVILIAN_CLASSES = ("PRO", "SLD", "USK", "UEM")


@dataclass
class Population:
    """Population of a hull by class."""

    professional: int = 0
    soldier: int = 0
    unskilled: int = 0
    unemployed: int = 0
    construction_crew: int = 0
    spy_team: int = 0
    rebel_pct: float = 0.0
    births_prior_turn: int = 0
    natural_deaths_prior_turn: int = 0

    @property
    def total(self) -> int:
        return self.professional + self.soldier + self.unskilled + self.unemployed

    def quantity(self, code: str) -> int:
        """Return the number of people in a population class.

        Raises:
            InvariantError: If the class code is not recognized
        """
        try:
            return getattr(self, POPULATION_CLASSES[code])
        except KeyError:
            raise InvariantError(f"assert(population class != {code!r})") from None

    def set_quantity(self, code: str, qty: int) -> None:
        """Set the number of people in a population class.

        Raises:
            InvariantError: If the class code is not recognized or qty is negative
        """
        if code not in POPULATION_CLASSES:
            raise InvariantError(f"assert(population class != {code!r})")
        if qty < 0:
            raise InvariantError(f"assert({code} population {qty} >= 0)")
        setattr(self, POPULATION_CLASSES[code], qty)


@dataclass
class Pay:
    """Pay rates by population class."""

    professional_pct: float = 1.0
    soldier_pct: float = 1.0
    unskilled_pct: float = 1.0

    def rate(self, code: str) -> float:
        """Pay rate for a class. Unemployed people are not paid."""
        if code == "PRO":
            return self.professional_pct
        elif code == "SLD":
            return self.soldier_pct
        elif code == "USK":
            return self.unskilled_pct
        elif code == "UEM":
            return 0.0
        raise InvariantError(f"assert(pay class != {code!r})")


@dataclass
class Rations:
    """Food ration rates by population class."""

    professional_pct: float = 1.0
    soldier_pct: float = 1.0
    unskilled_pct: float = 1.0
    unemployed_pct: float = 1.0

    def rate(self, code: str) -> float:
        if code == "PRO":
            return self.professional_pct
        elif code == "SLD":
            return self.soldier_pct
        elif code == "USK":
            return self.unskilled_pct
        elif code == "UEM":
            return self.unemployed_pct
        raise InvariantError(f"assert(ration class != {code!r})")


@dataclass
class Hull:
    """A colony or ship.

    Hulls are created at galaxy generation and are never destroyed during
    normal play, only reassigned to another owner.
    """

    id: int  # unique arena identifier
    hull_id: str  # "C" or "S" followed by the serial number
    kind: HullKind
    planet_id: int
    name: str = ""
    tech_level: int = 1
    owner: Optional[int] = None  # player id, None when unclaimed
    hull_units: list[HullUnit] = field(default_factory=list)
    inventory: list[InventoryUnit] = field(default_factory=list)
    population: Population = field(default_factory=Population)
    pay: Pay = field(default_factory=Pay)
    rations: Rations = field(default_factory=Rations)
    factory_groups: list[FactoryGroup] = field(default_factory=list)
    farm_groups: list[FarmGroup] = field(default_factory=list)
    mine_groups: list[MineGroup] = field(default_factory=list)

    def __post_init__(self):
        """Validate hull data after initialization."""
        self.kind = HullKind(self.kind)
        expected = "S" if self.kind == HullKind.SHIP else "C"
        if not self.hull_id.startswith(expected) or not self.hull_id[1:].isdigit():
            raise ValueError(
                f"Invalid hull_id: {self.hull_id} (a {self.kind.value} id must be {expected}<digits>)"
            )

    @property
    def is_ship(self) -> bool:
        return self.kind == HullKind.SHIP

    @property
    def is_colony(self) -> bool:
        return self.kind != HullKind.SHIP

    @property
    def needs_life_support(self) -> bool:
        return self.kind.value in LIFE_SUPPORT_HULL_KINDS

    def fuel_lines(self) -> list[InventoryUnit]:
        """Inventory lines holding fuel, in inventory order."""
        return [item for item in self.inventory if item.unit.kind == "fuel"]

    def find_inventory(self, code: str) -> Optional[InventoryUnit]:
        for item in self.inventory:
            if item.unit.code == code:
                return item
        return None
