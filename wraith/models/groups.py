"""Production group data models.

A group is a cluster of identical production units dedicated to one output.
Every group carries a four slot stage buffer holding output at 25%, 50%, 75%
and 100% completion.
"""

from dataclasses import dataclass, field

from ..utils.constants import STAGE_COUNT
from .unit import Unit


def _empty_stages() -> list[int]:
    return [0] * STAGE_COUNT


def _validate_stages(stages: list[int]) -> None:
    if len(stages) != STAGE_COUNT:
        raise ValueError(f"Invalid stages: {stages} (must have {STAGE_COUNT} slots)")
    if any(qty < 0 for qty in stages):
        raise ValueError(f"Invalid stages: {stages} (must be >= 0)")


@dataclass
class GroupUnit:
    """Units of one type working inside a group."""

    unit: Unit
    active_qty: int

    def __post_init__(self):
        """Validate group unit data after initialization."""
        if self.active_qty < 0:
            raise ValueError(f"Invalid active_qty: {self.active_qty} (must be >= 0)")


@dataclass
class FactoryGroup:
    """Factories on a hull manufacturing a single product."""

    no: int  # group number, 1...29
    product: Unit
    units: list[GroupUnit] = field(default_factory=list)
    stages: list[int] = field(default_factory=_empty_stages)

    def __post_init__(self):
        _validate_stages(self.stages)


@dataclass
class FarmGroup:
    """Farms on a hull growing food."""

    no: int
    product: Unit
    units: list[GroupUnit] = field(default_factory=list)
    stages: list[int] = field(default_factory=_empty_stages)

    def __post_init__(self):
        _validate_stages(self.stages)


@dataclass
class MineGroup:
    """Mines working a single deposit.

    All mine units in a group share one type and tech level.
    """

    no: int
    deposit_id: int
    unit: GroupUnit
    stages: list[int] = field(default_factory=_empty_stages)

    def __post_init__(self):
        _validate_stages(self.stages)
