"""Unit data model for catalog entries."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Unit:
    """A kind of thing in the game: a factory, a tonne of fuel, a farm.

    Units are immutable once the catalog is built. Rates are per active unit
    per turn.
    """

    code: str  # e.g. "FCT-1", "FUEL", "STUN"
    kind: str  # e.g. "factory", "fuel", "structural"
    tech_level: int  # 0 for units without a tech level
    name: str
    mass_per_unit: float  # metric tonnes
    volume_per_unit: float  # cubic meters
    fuel_per_unit_per_turn: float = 0.0
    mets_per_unit_per_turn: float = 0.0
    non_mets_per_unit_per_turn: float = 0.0

    def __post_init__(self):
        """Validate unit data after initialization."""
        if not self.code:
            raise ValueError("code cannot be empty")
        if self.tech_level < 0:
            raise ValueError(f"Invalid tech_level: {self.tech_level} (must be >= 0)")
        if self.fuel_per_unit_per_turn < 0:
            raise ValueError(
                f"Invalid fuel_per_unit_per_turn: {self.fuel_per_unit_per_turn} (must be >= 0)"
            )

    @property
    def uses_fuel(self) -> bool:
        return self.fuel_per_unit_per_turn >= 0.001

    def fuel_used(self, qty: int) -> int:
        """Fuel consumed by `qty` active units in one turn, rounded up."""
        if not self.uses_fuel or qty <= 0:
            return 0
        return math.ceil(qty * self.fuel_per_unit_per_turn)
