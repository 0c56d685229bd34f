#!/usr/bin/env python3
"""Wraith - command line entry point.

Generate a galaxy, check order files, and run turns against a saved game.
"""

import argparse
import logging
import sys
from pathlib import Path

from wraith.engine.galaxy_generator import generate_galaxy
from wraith.engine.turn_executor import TurnExecutor, advance_turn
from wraith.interface.order_parser import parse_orders
from wraith.models.order import PhaseOrders
from wraith.utils.constants import DEFAULT_PHASES, RNG_SEED_DEFAULT
from wraith.utils.serialization import load_game, save_game


def cmd_new(args) -> int:
    """Generate a new game and save it."""
    players = [name.strip() for name in args.players.split(",") if name.strip()]
    print(f"Generating new galaxy with seed {args.seed} for {len(players)} players...")
    try:
        game = generate_galaxy(args.seed, players)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    path = save_game(game, args.save)
    print(f"Game saved to {path} (Turn {game.turn})")
    for hull in game.hulls_in_order():
        print(f"  {hull.hull_id:<6} {hull.kind.value:<9} {game.players[hull.owner].name}")
    return 0


def read_orders(path) -> str | None:
    """Read an order file, printing an error and returning None on failure."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        print(f"Error: File {path} not found.")
    except UnicodeDecodeError:
        print(f"Error: File {path} is not valid UTF-8 text.")
    return None


def cmd_parse(args) -> int:
    """Parse an order file and echo it with errors annotated."""
    text = read_orders(args.file)
    if text is None:
        return 1
    result = parse_orders(text)
    print(result.echo())
    print(f";; {len(result.orders)} orders, {len(result.errors)} errors")
    return 1 if result.errors else 0


def _parse_order_spec(spec: str) -> tuple[int, Path]:
    player, sep, file = spec.partition("=")
    if not sep or not player.isdigit():
        raise argparse.ArgumentTypeError(f"expected PLAYER_ID=FILE, got {spec!r}")
    return int(player), Path(file)


def cmd_run(args) -> int:
    """Run one turn against a saved game."""
    try:
        game = load_game(args.load)
    except FileNotFoundError:
        print(f"Error: File {args.load} not found.")
        return 1
    print(f"Game loaded (Turn {game.turn}, Seed {game.seed})")

    all_orders = []
    for player_id, path in args.orders:
        if player_id not in game.players:
            print(f"Error: no player {player_id} in this game")
            return 1
        text = read_orders(path)
        if text is None:
            return 1
        result = parse_orders(text)
        for error in result.errors:
            print(f"player {player_id}: {path}:{error.line}: {error.message}")
        all_orders.append(PhaseOrders.from_orders(player_id, result.orders))

    phases = args.phases or list(DEFAULT_PHASES)
    results = TurnExecutor(game).execute(all_orders, *phases)
    for player_id, errors in results.errors.items():
        for error in errors:
            print(f"player {player_id}: {error}")
    if results.phases_skipped:
        print(f"Skipped phases: {', '.join(results.phases_skipped)}")

    turn = game.turn
    advance_turn(game)
    path = save_game(game, args.save or args.load)
    print(f"Turn {turn} complete; game saved to {path} (Turn {game.turn})")
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Wraith - turn engine for a play-by-mail strategy game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s new --players alice,bob --save game.json
  %(prog)s parse orders.txt
  %(prog)s run --load game.json --orders 1=alice.txt --orders 2=bob.txt
  %(prog)s run --load game.json --phases fuel-allocation life-support control
        """,
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new = subparsers.add_parser("new", help="Generate a new game")
    new.add_argument(
        "--seed",
        type=int,
        default=RNG_SEED_DEFAULT,
        help=f"Random seed for galaxy generation (default: {RNG_SEED_DEFAULT})",
    )
    new.add_argument("--players", required=True, help="Comma separated player names")
    new.add_argument("--save", required=True, metavar="FILE", help="Save game to JSON file")
    new.set_defaults(func=cmd_new)

    check = subparsers.add_parser("parse", help="Check an order file")
    check.add_argument("file", metavar="FILE", help="Order file to parse")
    check.set_defaults(func=cmd_parse)

    run = subparsers.add_parser("run", help="Run a turn")
    run.add_argument("--load", required=True, metavar="FILE", help="Load game from JSON file")
    run.add_argument(
        "--orders",
        type=_parse_order_spec,
        action="append",
        default=[],
        metavar="PLAYER_ID=FILE",
        help="Order file for a player (repeatable)",
    )
    run.add_argument(
        "--phases",
        nargs="+",
        metavar="PHASE",
        help="Phases to run, in order (default: the standard turn)",
    )
    run.add_argument("--save", metavar="FILE", help="Save to FILE instead of overwriting --load")
    run.set_defaults(func=cmd_run)

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
