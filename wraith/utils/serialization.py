"""Game state serialization to/from JSON.

This module saves and loads the whole arena: players, galaxy, deposits and
hulls. Units are written by catalog code and resolved through the catalog
when the game is loaded.
"""

import json
from pathlib import Path
from typing import Any

from ..models.catalog import UnitCatalog
from ..models.galaxy import Deposit, Planet, Star, System
from ..models.game import Game
from ..models.groups import FactoryGroup, FarmGroup, GroupUnit, MineGroup
from ..models.hull import Hull, HullUnit, InventoryUnit, Pay, Population, Rations
from ..models.player import Player
from .constants import STATE_DIR_NAME


def _resolve(filepath: str, create: bool = False) -> Path:
    path = Path(filepath)
    if not path.is_absolute():
        state_dir = Path(__file__).parent.parent.parent / STATE_DIR_NAME
        if create:
            state_dir.mkdir(exist_ok=True)
        path = state_dir / filepath
    return path


def save_game(game: Game, filepath: str) -> Path:
    """Save game state to JSON file.

    Args:
        game: Game state to save
        filepath: Path to save file (resolved under the state directory if relative)

    Returns:
        Path the game was written to

    Example:
        save_game(game, "my_game.json")  # Saves to state/my_game.json
        save_game(game, "/absolute/path/game.json")  # Saves to absolute path
    """
    path = _resolve(filepath, create=True)
    with open(path, "w") as f:
        json.dump(game_to_dict(game), f, indent=2)
    return path


def load_game(filepath: str) -> Game:
    """Load game state from JSON file.

    Args:
        filepath: Path to saved game file

    Returns:
        Loaded Game object

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If JSON is invalid or malformed
        KeyError: If the file names a unit the catalog does not know
    """
    path = _resolve(filepath)
    with open(path) as f:
        data = json.load(f)
    return game_from_dict(data)


def game_to_dict(game: Game) -> dict[str, Any]:
    """Convert Game object to JSON-compatible dictionary."""
    return {
        "seed": game.seed,
        "year": game.year,
        "quarter": game.quarter,
        "next_id": game.next_id,
        "players": [{"id": p.id, "name": p.name} for p in game.players.values()],
        "systems": [
            {"id": s.id, "x": s.x, "y": s.y, "z": s.z, "star_ids": s.star_ids}
            for s in game.systems.values()
        ],
        "stars": [
            {
                "id": s.id,
                "system_id": s.system_id,
                "sequence": s.sequence,
                "kind": s.kind,
                "planet_ids": s.planet_ids,
            }
            for s in game.stars.values()
        ],
        "planets": [
            {
                "id": p.id,
                "star_id": p.star_id,
                "orbit_no": p.orbit_no,
                "kind": p.kind,
                "habitability_no": p.habitability_no,
                "deposit_ids": p.deposit_ids,
            }
            for p in game.planets.values()
        ],
        "deposits": [_serialize_deposit(d) for d in game.deposits.values()],
        "hulls": [_serialize_hull(h) for h in game.hulls_in_order()],
        "order_errors": {str(pid): errors for pid, errors in game.order_errors.items()},
    }


def game_from_dict(data: dict[str, Any]) -> Game:
    """Reconstruct Game object from dictionary."""
    game = Game(seed=data["seed"], year=data["year"], quarter=data["quarter"])
    catalog = game.catalog

    for p in data["players"]:
        game.players[p["id"]] = Player(id=p["id"], name=p["name"])
    for s in data["systems"]:
        game.systems[s["id"]] = System(
            id=s["id"], x=s["x"], y=s["y"], z=s["z"], star_ids=list(s["star_ids"])
        )
    for s in data["stars"]:
        game.stars[s["id"]] = Star(
            id=s["id"],
            system_id=s["system_id"],
            sequence=s["sequence"],
            kind=s["kind"],
            planet_ids=list(s["planet_ids"]),
        )
    for p in data["planets"]:
        game.planets[p["id"]] = Planet(
            id=p["id"],
            star_id=p["star_id"],
            orbit_no=p["orbit_no"],
            kind=p["kind"],
            habitability_no=p["habitability_no"],
            deposit_ids=list(p["deposit_ids"]),
        )
    for d in data["deposits"]:
        deposit = _deserialize_deposit(d, catalog)
        game.deposits[deposit.id] = deposit
    for h in data["hulls"]:
        game.add_hull(_deserialize_hull(h, catalog))

    game.order_errors = {int(pid): list(errors) for pid, errors in data.get("order_errors", {}).items()}
    game.next_id = max(game.next_id, data.get("next_id", 1))
    return game


def _serialize_deposit(deposit: Deposit) -> dict[str, Any]:
    return {
        "id": deposit.id,
        "no": deposit.no,
        "planet_id": deposit.planet_id,
        "product": deposit.product.code,
        "initial_qty": deposit.initial_qty,
        "remaining_qty": deposit.remaining_qty,
        "yield_pct": deposit.yield_pct,
        "controlled_by": deposit.controlled_by,
    }


def _deserialize_deposit(data: dict[str, Any], catalog: UnitCatalog) -> Deposit:
    return Deposit(
        id=data["id"],
        no=data["no"],
        planet_id=data["planet_id"],
        product=catalog[data["product"]],
        initial_qty=data["initial_qty"],
        remaining_qty=data["remaining_qty"],
        yield_pct=data["yield_pct"],
        controlled_by=data.get("controlled_by"),
    )


def _serialize_group_units(units: list[GroupUnit]) -> list[dict[str, Any]]:
    return [{"unit": gu.unit.code, "active_qty": gu.active_qty} for gu in units]


def _deserialize_group_units(data: list[dict[str, Any]], catalog: UnitCatalog) -> list[GroupUnit]:
    return [GroupUnit(unit=catalog[gu["unit"]], active_qty=gu["active_qty"]) for gu in data]


def _serialize_hull(hull: Hull) -> dict[str, Any]:
    """Convert Hull to dictionary."""
    population = hull.population
    return {
        "id": hull.id,
        "hull_id": hull.hull_id,
        "kind": hull.kind.value,
        "planet_id": hull.planet_id,
        "name": hull.name,
        "tech_level": hull.tech_level,
        "owner": hull.owner,
        "hull_units": [{"unit": hu.unit.code, "quantity": hu.quantity} for hu in hull.hull_units],
        "inventory": [
            {"unit": item.unit.code, "active_qty": item.active_qty, "stowed_qty": item.stowed_qty}
            for item in hull.inventory
        ],
        "population": {
            "professional": population.professional,
            "soldier": population.soldier,
            "unskilled": population.unskilled,
            "unemployed": population.unemployed,
            "construction_crew": population.construction_crew,
            "spy_team": population.spy_team,
            "rebel_pct": population.rebel_pct,
            "births_prior_turn": population.births_prior_turn,
            "natural_deaths_prior_turn": population.natural_deaths_prior_turn,
        },
        "pay": {
            "professional_pct": hull.pay.professional_pct,
            "soldier_pct": hull.pay.soldier_pct,
            "unskilled_pct": hull.pay.unskilled_pct,
        },
        "rations": {
            "professional_pct": hull.rations.professional_pct,
            "soldier_pct": hull.rations.soldier_pct,
            "unskilled_pct": hull.rations.unskilled_pct,
            "unemployed_pct": hull.rations.unemployed_pct,
        },
        "factory_groups": [
            {
                "no": g.no,
                "product": g.product.code,
                "units": _serialize_group_units(g.units),
                "stages": list(g.stages),
            }
            for g in hull.factory_groups
        ],
        "farm_groups": [
            {
                "no": g.no,
                "product": g.product.code,
                "units": _serialize_group_units(g.units),
                "stages": list(g.stages),
            }
            for g in hull.farm_groups
        ],
        "mine_groups": [
            {
                "no": g.no,
                "deposit_id": g.deposit_id,
                "unit": g.unit.unit.code,
                "active_qty": g.unit.active_qty,
                "stages": list(g.stages),
            }
            for g in hull.mine_groups
        ],
    }


def _deserialize_hull(data: dict[str, Any], catalog: UnitCatalog) -> Hull:
    """Reconstruct Hull from dictionary."""
    return Hull(
        id=data["id"],
        hull_id=data["hull_id"],
        kind=data["kind"],
        planet_id=data["planet_id"],
        name=data.get("name", ""),
        tech_level=data.get("tech_level", 1),
        owner=data.get("owner"),
        hull_units=[HullUnit(catalog[hu["unit"]], hu["quantity"]) for hu in data["hull_units"]],
        inventory=[
            InventoryUnit(catalog[item["unit"]], item["active_qty"], item["stowed_qty"])
            for item in data["inventory"]
        ],
        population=Population(**data["population"]),
        pay=Pay(**data["pay"]),
        rations=Rations(**data["rations"]),
        factory_groups=[
            FactoryGroup(
                no=g["no"],
                product=catalog[g["product"]],
                units=_deserialize_group_units(g["units"], catalog),
                stages=list(g["stages"]),
            )
            for g in data["factory_groups"]
        ],
        farm_groups=[
            FarmGroup(
                no=g["no"],
                product=catalog[g["product"]],
                units=_deserialize_group_units(g["units"], catalog),
                stages=list(g["stages"]),
            )
            for g in data["farm_groups"]
        ],
        mine_groups=[
            MineGroup(
                no=g["no"],
                deposit_id=g["deposit_id"],
                unit=GroupUnit(catalog[g["unit"]], g["active_qty"]),
                stages=list(g["stages"]),
            )
            for g in data["mine_groups"]
        ],
    )
