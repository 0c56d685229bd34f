"""Unit catalog: the static reference data for every unit in the game.

The catalog is built once and handed to the engine explicitly. It is a
read-only mapping from unit code to `Unit`.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from ..utils.constants import MAX_TECH_LEVEL
from .unit import Unit

# kind -> (code prefix, uses tech level)
UNIT_CODES = {
    "automation": ("AUT", True),
    "consumer-goods": ("CNGD", False),
    "factory": ("FCT", True),
    "farm": ("FRM", True),
    "food": ("FOOD", False),
    "fuel": ("FUEL", False),
    "gold": ("GOLD", False),
    "hyper-drive": ("HDR", True),
    "life-support": ("LSP", True),
    "light-structural": ("LTSU", False),
    "metallics": ("MTLS", False),
    "mine": ("MIN", True),
    "non-metallics": ("NMTS", False),
    "research": ("RSCH", False),
    "sensor": ("SNR", True),
    "space-drive": ("SDR", True),
    "structural": ("STUN", False),
    "transport": ("TPT", True),
}


def unit_attributes(kind: str, tech_level: int) -> tuple[float, float, float, float]:
    """Return (metallics, non-metallics, mass, fuel per turn) for one unit.

    Args:
        kind: Unit kind, e.g. "factory"
        tech_level: Tech level of the unit (0 for untiered units)

    Returns:
        Tuple of per-unit material costs, mass and fuel use

    Raises:
        KeyError: If the kind is not a catalog kind
    """
    tl = float(tech_level)
    if kind == "automation":
        return 2 * tl, 2 * tl, 4 * tl, 0
    if kind == "consumer-goods":
        return 0.2, 0.4, 0.6, 0
    if kind == "factory":
        return 8 * tl, 4 * tl, 12 + 2 * tl, 0.5 * tl
    if kind == "farm":
        if tech_level == 1:
            return 4 + tl, 2 + tl, 6 + 2 * tl, 0.5 * tl
        if tech_level < 6:
            return 4 + tl, 4 + tl, 6 + 2 * tl, 0.5 * tl
        return 4 + tl, 2 + tl, 6 + 2 * tl, tl
    if kind == "food":
        return 0, 0, 6, 0
    if kind in ("fuel", "gold", "metallics", "non-metallics"):
        return 0, 0, 1, 0
    if kind == "hyper-drive":
        return 25 * tl, 20 * tl, 45 * tl, 0
    if kind == "life-support":
        return 3 * tl, 5 * tl, 8 * tl, tl
    if kind == "light-structural":
        return 0.01, 0.04, 0.05, 0
    if kind == "mine":
        return 5 + tl, 5 + tl, 10 + 2 * tl, 0.5 * tl
    if kind == "research":
        return 0, 0, 0, 0
    if kind == "sensor":
        return 10 * tl, 20 * tl, 40 * tl, tl / 20
    if kind == "space-drive":
        return 15 * tl, 10 * tl, 25 * tl, 0
    if kind == "structural":
        return 0.1, 0.4, 0.5, 0
    if kind == "transport":
        return 3 * tl, tl, 4 * tl, 0.1 * tl * tl
    raise KeyError(f"Unknown unit kind: {kind!r}")


def make_unit(kind: str, tech_level: int = 0) -> Unit:
    """Build the catalog entry for one kind at one tech level."""
    prefix, tiered = UNIT_CODES[kind]
    if not tiered:
        tech_level = 0
    mets, non_mets, mass, fuel = unit_attributes(kind, tech_level)
    return Unit(
        code=f"{prefix}-{tech_level}" if tiered else prefix,
        kind=kind,
        tech_level=tech_level,
        name=kind,
        mass_per_unit=mass,
        volume_per_unit=mass,
        fuel_per_unit_per_turn=fuel,
        mets_per_unit_per_turn=mets,
        non_mets_per_unit_per_turn=non_mets,
    )


class UnitCatalog(Mapping):
    """Read-only mapping from unit code to `Unit`."""

    def __init__(self, units):
        self._units = MappingProxyType({unit.code: unit for unit in units})

    def __getitem__(self, code: str) -> Unit:
        return self._units[code.upper()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def of_kind(self, kind: str) -> list[Unit]:
        """All units of one kind, lowest tech level first."""
        return sorted(
            (u for u in self._units.values() if u.kind == kind), key=lambda u: u.tech_level
        )

    def from_keyword(self, keyword: str) -> Unit:
        """Resolve an order-language unit keyword to its catalog entry.

        Tiered units are written "<kind>-<tech level>" (e.g. "factory-2");
        untiered units are written by kind (e.g. "structural").

        Raises:
            KeyError: If the keyword names no catalog unit
        """
        keyword = keyword.lower()
        if keyword in UNIT_CODES and not UNIT_CODES[keyword][1]:
            return self[UNIT_CODES[keyword][0]]
        kind, _, level = keyword.rpartition("-")
        if kind in UNIT_CODES and UNIT_CODES[kind][1] and level.isdigit():
            return self[f"{UNIT_CODES[kind][0]}-{int(level)}"]
        raise KeyError(f"Unknown unit: {keyword!r}")


def build_catalog(max_tech_level: int = MAX_TECH_LEVEL) -> UnitCatalog:
    """Build the full unit catalog.

    Args:
        max_tech_level: Highest tech level generated for tiered units

    Returns:
        Catalog containing every kind at every tech level
    """
    units = []
    for kind, (_, tiered) in UNIT_CODES.items():
        if tiered:
            units.extend(make_unit(kind, tl) for tl in range(1, max_tech_level + 1))
        else:
            units.append(make_unit(kind))
    return UnitCatalog(units)
