"""Galaxy generation: home systems and starting positions.

Each player gets a home system with a single star. The home planet sits in
orbit 3 and carries a rich set of deposits; the other orbits are rolled at
random. Every player starts with a surface colony on the home planet, an
orbital colony above it and one ship.
"""

import logging
from typing import List, Sequence, Tuple

from ..models import (
    Deposit,
    FactoryGroup,
    FarmGroup,
    Game,
    GroupUnit,
    Hull,
    HullKind,
    HullUnit,
    InventoryUnit,
    MineGroup,
    Planet,
    Player,
    Population,
    Star,
    System,
)
from ..utils import GameRNG
from ..utils.constants import GALAXY_RADIUS, HOME_ORBIT, ORBITS_PER_STAR

logger = logging.getLogger(__name__)

# Planet kinds of the home star, orbits 1-10; the home planet is in HOME_ORBIT
HOME_STAR_LAYOUT = (
    "terrestrial",
    "terrestrial",
    "terrestrial",
    "terrestrial",
    "asteroid-belt",
    "terrestrial",
    "gas-giant",
    "gas-giant",
    "terrestrial",
    "asteroid-belt",
)

DEPOSIT_PRODUCTS = {
    "fuel": "FUEL",
    "gold": "GOLD",
    "metallic": "MTLS",
    "non-metallic": "NMTS",
}

MIN_DEPOSIT_QTY = 100_000


def generate_galaxy(seed: int, player_names: Sequence[str]) -> Game:
    """Generate a new game with one home system per player.

    Algorithm:
    1. Place one home system per player at a free point in the galaxy cube
    2. Give each home system a single star with ten orbits, the home
       planet in orbit 3
    3. Roll deposits for every non-empty planet
    4. Create the starting colonies and ship for the player

    Args:
        seed: RNG seed; the same seed and names always build the same game
        player_names: One name per player, in player id order

    Returns:
        Game ready for its first turn
    """
    if not player_names:
        raise ValueError("player_names cannot be empty")
    if len(set(player_names)) != len(player_names):
        raise ValueError(f"Duplicate player names: {list(player_names)}")

    rng = GameRNG(seed)
    game = Game(seed=seed)
    occupied: set[Tuple[int, int, int]] = set()

    for no, name in enumerate(player_names, start=1):
        player = Player(id=no, name=name)
        game.players[player.id] = player

        coords = _free_coordinates(rng, occupied)
        occupied.add(coords)
        home_planet = _generate_home_system(game, rng, coords)
        _generate_starting_hulls(game, player, home_planet, no)
        logger.info("home system for %s at %d/%d/%d", name, *coords)

    return game


def _free_coordinates(rng: GameRNG, occupied: set) -> Tuple[int, int, int]:
    while True:
        coords = tuple(rng.randint(-GALAXY_RADIUS, GALAXY_RADIUS) for _ in range(3))
        if coords not in occupied:
            return coords


def _generate_home_system(game: Game, rng: GameRNG, coords: Tuple[int, int, int]) -> Planet:
    """Build a home system and return its home planet."""
    system = System(id=game.new_id(), x=coords[0], y=coords[1], z=coords[2])
    game.systems[system.id] = system
    star = Star(id=game.new_id(), system_id=system.id, sequence="A", kind="A")
    game.stars[star.id] = star
    system.star_ids.append(star.id)

    home_planet = None
    for orbit_no, kind in enumerate(HOME_STAR_LAYOUT[:ORBITS_PER_STAR], start=1):
        if orbit_no == HOME_ORBIT:
            planet = Planet(
                id=game.new_id(),
                star_id=star.id,
                orbit_no=orbit_no,
                kind=kind,
                habitability_no=25,
            )
            deposits = _home_deposits()
            home_planet = planet
        else:
            planet = Planet(
                id=game.new_id(),
                star_id=star.id,
                orbit_no=orbit_no,
                kind=kind,
                habitability_no=_habitability(rng, kind, orbit_no),
            )
            deposits = _random_deposits(rng, kind)
        game.planets[planet.id] = planet
        star.planet_ids.append(planet.id)

        for deposit_no, (product, yield_pct, qty) in enumerate(deposits, start=1):
            deposit = Deposit(
                id=game.new_id(),
                no=deposit_no,
                planet_id=planet.id,
                product=game.catalog[DEPOSIT_PRODUCTS[product]],
                initial_qty=qty,
                remaining_qty=qty,
                yield_pct=yield_pct,
            )
            game.deposits[deposit.id] = deposit
            planet.deposit_ids.append(deposit.id)

    return home_planet


def _habitability(rng: GameRNG, kind: str, orbit_no: int) -> int:
    if kind == "terrestrial" and orbit_no <= 5:
        return rng.roll(3, 4) - 3
    if kind == "gas-giant" and 3 <= orbit_no <= 5:
        return rng.roll(2, 2) - 2
    return 0


def _home_deposits() -> List[Tuple[str, float, int]]:
    """The fixed deposits of a home planet: (product, yield, quantity)."""
    deposits = [
        ("gold", 0.07, 300_000),
        ("fuel", 0.25, 99_999_999),
        ("non-metallic", 0.25, 99_999_999),
        ("metallic", 0.25, 99_999_999),
    ]
    for product, loss, qty, ratio, count in (
        ("fuel", 0.45, 90_000_000, 8, 8),
        ("non-metallic", 0.95, 90_000_000, 8, 22),
        ("metallic", 0.95, 90_000_000, 9, 40),
    ):
        while len(deposits) < count:
            loss, qty = loss * 0.9, qty * ratio // 10
            deposits.append((product, round(1 - loss, 4), qty))
    return deposits


def _random_deposit(rng: GameRNG, gas_giant: bool) -> Tuple[str, float, int]:
    roll = rng.randint(0, 20)
    if gas_giant:
        product = "metallic" if roll <= 15 else "non-metallic" if roll <= 19 else "fuel"
    else:
        product = (
            "metallic" if roll <= 10
            else "non-metallic" if roll <= 17
            else "fuel" if roll <= 19
            else "gold"
        )

    if product == "metallic":
        yield_pct, qty = 0.75 + rng.randint(0, 24) / 100, rng.randint(0, 99) * 1_000_000
    elif product == "non-metallic":
        yield_pct, qty = 0.50 + rng.randint(0, 24) / 100, rng.randint(0, 99) * 1_000_000
    elif product == "fuel":
        yield_pct, qty = 0.10 + rng.randint(0, 34) / 100, rng.randint(0, 99) * 1_000_000
    else:
        yield_pct, qty = 0.01 + rng.randint(0, 4) / 100, rng.randint(0, 29) * 100_000
    return product, round(yield_pct, 2), max(qty, MIN_DEPOSIT_QTY)


def _random_deposits(rng: GameRNG, kind: str) -> List[Tuple[str, float, int]]:
    if kind == "empty":
        return []
    if kind == "gas-giant":
        return [_random_deposit(rng, gas_giant=True)]
    return [_random_deposit(rng, gas_giant=False) for _ in range(rng.randint(1, 40))]


def _inventory(game: Game, code: str, active: int = 0, stowed: int = 0) -> InventoryUnit:
    return InventoryUnit(unit=game.catalog[code], active_qty=active, stowed_qty=stowed)


def _generate_starting_hulls(game: Game, player: Player, planet: Planet, no: int) -> None:
    catalog = game.catalog
    deposits = [game.deposits[id_] for id_ in planet.deposit_ids]

    surface = Hull(
        id=game.new_id(),
        hull_id=f"C{2 * no - 1}",
        kind=HullKind.OPEN,
        planet_id=planet.id,
        name="Not Named",
        owner=player.id,
        population=Population(
            professional=2_000_000,
            soldier=2_500_000,
            unskilled=6_000_000,
            unemployed=5_900_000,
            rebel_pct=0.0125,
        ),
        hull_units=[
            HullUnit(catalog["STUN"], 87_500_000),
            HullUnit(catalog["SNR-1"], 50),
        ],
        inventory=[
            _inventory(game, "CNGD", stowed=2_000_000),
            _inventory(game, "FCT-1", active=275_000, stowed=3_750_000),
            _inventory(game, "FOOD", stowed=7_500_000),
            _inventory(game, "FRM-1", active=170_000),
            _inventory(game, "FUEL", stowed=5_000_000),
            _inventory(game, "MTLS", active=100_000),
            _inventory(game, "MIN-1", active=100_000, stowed=30_000),
            _inventory(game, "NMTS", active=100_000),
            _inventory(game, "STUN", stowed=150_000),
            _inventory(game, "TPT-1", active=5_000),
        ],
        farm_groups=[
            FarmGroup(no=1, product=catalog["FOOD"], units=[GroupUnit(catalog["FRM-1"], 170_000)]),
        ],
        factory_groups=[
            FactoryGroup(
                no=1, product=catalog["STUN"], units=[GroupUnit(catalog["FCT-1"], 175_000)]
            ),
            FactoryGroup(
                no=2, product=catalog["CNGD"], units=[GroupUnit(catalog["FCT-1"], 100_000)]
            ),
        ],
        mine_groups=[
            MineGroup(1, deposits[0].id, GroupUnit(catalog["MIN-1"], 1_000), [1_000] * 3 + [0]),
            MineGroup(2, deposits[1].id, GroupUnit(catalog["MIN-1"], 50_000), [1_250_000] * 3 + [0]),
            MineGroup(3, deposits[2].id, GroupUnit(catalog["MIN-1"], 100_000), [2_500_000] * 3 + [0]),
            MineGroup(4, deposits[4].id, GroupUnit(catalog["MIN-1"], 100_000), [2_500_000] * 3 + [0]),
        ],
    )
    game.add_hull(surface)
    for group in surface.mine_groups:
        game.deposits[group.deposit_id].controlled_by = surface.id

    orbital = Hull(
        id=game.new_id(),
        hull_id=f"C{2 * no}",
        kind=HullKind.ORBITAL,
        planet_id=planet.id,
        name="Not Named",
        owner=player.id,
        population=Population(
            professional=10_000,
            soldier=20,
            unskilled=30_000,
            unemployed=500,
            construction_crew=100,
        ),
        hull_units=[
            HullUnit(catalog["STUN"], 45_000_000),
            HullUnit(catalog["LSP-1"], 45_000),
            HullUnit(catalog["SNR-1"], 5_000),
        ],
        inventory=[
            _inventory(game, "CNGD", stowed=2_000),
            _inventory(game, "FOOD", stowed=500_000),
            _inventory(game, "FUEL", stowed=500_000),
            _inventory(game, "HDR-1", stowed=500),
            _inventory(game, "LTSU", active=45_000_000, stowed=5_000),
            _inventory(game, "MTLS", stowed=100_000),
            _inventory(game, "NMTS", stowed=100_000),
            _inventory(game, "SDR-1", stowed=250),
        ],
    )
    game.add_hull(orbital)

    ship = Hull(
        id=game.new_id(),
        hull_id=f"S{no}",
        kind=HullKind.SHIP,
        planet_id=planet.id,
        name="Not Named",
        owner=player.id,
        population=Population(professional=200, soldier=50, unskilled=600),
        hull_units=[
            HullUnit(catalog["LTSU"], 1_000_000),
            HullUnit(catalog["LSP-1"], 1_000),
            HullUnit(catalog["HDR-1"], 500),
            HullUnit(catalog["SDR-1"], 250),
            HullUnit(catalog["SNR-1"], 100),
        ],
        inventory=[
            _inventory(game, "FOOD", stowed=5_000),
            _inventory(game, "FUEL", stowed=50_000),
        ],
    )
    game.add_hull(ship)
