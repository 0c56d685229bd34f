"""Order data models for parsed player intent.

Orders are produced by the order parser and grouped by phase before the
turn executor applies them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Phase(str, Enum):
    """Every phase name the turn executor recognizes."""
    FUEL_ALLOCATION = "fuel-allocation"
    LABOR_ALLOCATION = "labor-allocation"
    LIFE_SUPPORT = "life-support"
    FARM_PRODUCTION = "farm-production"
    MINE_PRODUCTION = "mine-production"
    FACTORY_PRODUCTION = "factory-production"
    COMBAT = "combat"
    SETUP = "setup"
    DISASSEMBLY = "disassembly"
    RETOOL = "retool"
    TRANSFER = "transfer"
    ASSEMBLY = "assembly"
    TRADE = "trade"
    SURVEY = "survey"
    ESPIONAGE = "espionage"
    MOVEMENT = "movement"
    DRAFT = "draft"
    PAY = "pay"
    RATION = "ration"
    CONTROL = "control"


@dataclass
class Order:
    """Base class for a successfully parsed order.

    Every order targets one hull and remembers the input line it came from.
    """

    line: int  # line number in the submitted text
    hull_id: str  # "C<n>" or "S<n>"

    def __post_init__(self):
        """Validate order data after initialization."""
        if self.line <= 0:
            raise ValueError(f"Invalid line: {self.line} (must be > 0)")
        if not self.hull_id or self.hull_id[0] not in "CS":
            raise ValueError(f"Invalid hull_id: {self.hull_id!r} (must be a colony or ship id)")

    @property
    def targets_ship(self) -> bool:
        return self.hull_id.startswith("S")

    @property
    def phase(self) -> Phase:
        raise NotImplementedError


@dataclass
class AssembleOrder(Order):
    """Assemble units into a factory, farm, or mine group."""

    quantity: int = 0
    unit: str = ""  # unit keyword, e.g. "factory-1"
    product: Optional[str] = None  # factory groups only, e.g. "structural"
    deposit_id: Optional[str] = None  # mine groups only, e.g. "DP1"

    def __post_init__(self):
        super().__post_init__()
        if self.quantity < 0:
            raise ValueError(f"Invalid quantity: {self.quantity} (must be >= 0)")
        if not self.unit:
            raise ValueError("unit cannot be empty")

    @property
    def phase(self) -> Phase:
        return Phase.ASSEMBLY

    @property
    def group_kind(self) -> str:
        """Kind of group the order builds: factory, farm, or mine."""
        return self.unit.rsplit("-", 1)[0]

    def __str__(self) -> str:
        text = f"assemble {self.hull_id} {self.quantity} {self.unit}"
        if self.product is not None:
            text += f" {self.product}"
        if self.deposit_id is not None:
            text += f" {self.deposit_id}"
        return text


@dataclass
class NameOrder(Order):
    """Assign a display name to a colony or ship."""

    name: str = ""

    @property
    def phase(self) -> Phase:
        return Phase.CONTROL

    def __str__(self) -> str:
        return f'name {self.hull_id} "{self.name}"'


@dataclass
class ControlOrder(Order):
    """Claim ownership of a colony or ship."""

    @property
    def phase(self) -> Phase:
        return Phase.CONTROL

    def __str__(self) -> str:
        return f"control {self.hull_id}"


@dataclass
class RejectedOrder:
    """An input line that failed to parse.

    Keeps the text of every token consumed on the line (including those
    discarded during error recovery) so the line can be echoed back to the
    player with the errors.
    """

    line: int
    tokens: list[str] = field(default_factory=list)
    errors: list = field(default_factory=list)  # OrderParseError instances

    def __str__(self) -> str:
        text = " ".join(self.tokens)
        for error in self.errors:
            text += f"  ;; {error.message}"
        return text.strip()


@dataclass
class PhaseOrders:
    """One player's parsed orders grouped by the phase that executes them."""

    player_id: int
    orders: dict[Phase, list[Order]] = field(default_factory=dict)

    @classmethod
    def from_orders(cls, player_id: int, orders: list[Order]) -> "PhaseOrders":
        """Group a flat order list by phase, keeping submission order."""
        grouped: dict[Phase, list[Order]] = {}
        for order in orders:
            grouped.setdefault(order.phase, []).append(order)
        return cls(player_id=player_id, orders=grouped)

    def for_phase(self, phase: Phase) -> list[Order]:
        return self.orders.get(phase, [])
