"""
Tokenduel CLI - Command-line interface for the engine.

Usage:
    tokenduel simulate [--ruleset NAME | --table FILE] [--seed N]   Run a bot-vs-bot duel
    tokenduel validate <table_file>                                Validate an action table
"""

import argparse
import logging
import random
import sys

from .config import TOKENDUEL_LOG_LEVEL, CombatSettings
from .rulesets import RULESETS


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tokenduel - Token-based turn combat engine",
        prog="tokenduel",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run a bot-vs-bot duel")
    simulate_parser.add_argument("--table", help="JSON action table (overrides --ruleset)")
    simulate_parser.add_argument(
        "--ruleset",
        choices=sorted(RULESETS),
        default="skirmish",
        help="Built-in table to use",
    )
    simulate_parser.add_argument("--seed", type=int, default=None, help="Seed for all rolls")
    simulate_parser.add_argument("--max-ticks", type=int, default=500, help="Stop after N ticks")
    simulate_parser.add_argument(
        "--policy",
        choices=["random", "first"],
        default="random",
        help="Policy for both sides",
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate an action table")
    validate_parser.add_argument("table_file", help="Path to table file")

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else getattr(logging, TOKENDUEL_LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    if args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "validate":
        cmd_validate(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_simulate(args):
    """Run a duel between two policies."""
    from .bots import FirstLegalPolicy, RandomPolicy
    from .display import format_actor, snapshot_actor
    from .engine_core import CombatStateMachine, Side
    from .session import Duel
    from .tables import TableValidationError, build_actions, build_actors, load_action_table

    try:
        table = load_action_table(args.table) if args.table else RULESETS[args.ruleset]()
        actions = build_actions(table)
        first, second = build_actors(table)
    except FileNotFoundError:
        print(f"Error: File not found: {args.table}")
        sys.exit(1)
    except TableValidationError as e:
        print("Error: invalid table")
        for err in e.errors:
            print(f"  - {err}")
        sys.exit(1)

    seed = args.seed if args.seed is not None else random.randrange(2**32)
    if args.policy == "first":
        policies = {Side.FIRST: FirstLegalPolicy(), Side.SECOND: FirstLegalPolicy()}
    else:
        policies = {Side.FIRST: RandomPolicy(seed), Side.SECOND: RandomPolicy(seed + 1)}

    try:
        settings = CombatSettings.from_env()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    machine = CombatStateMachine(first, second, settings=settings)
    duel = Duel(machine, actions, policies, random.Random(seed))

    print(f"Table: {table.name} (seed {seed})")
    print(f"{first.name} vs {second.name}\n")
    result = duel.run(max_ticks=args.max_ticks)

    for line in result.log:
        print(f"  {line}")
    print(f"\nResult: {result.state.value} after {result.ticks} ticks, {result.rounds} round(s)")
    for actor in (first, second):
        print(f"  {format_actor(snapshot_actor(actor))}")
    if result.winner_name:
        print(f"Winner: {result.winner_name}")
    return result


def cmd_validate(args):
    """Validate an action table."""
    from .tables import TableValidationError, load_action_table, validate_table

    print(f"Validating: {args.table_file}")
    try:
        table = load_action_table(args.table_file)
    except FileNotFoundError:
        print(f"Error: File not found: {args.table_file}")
        sys.exit(1)
    except TableValidationError as e:
        print("\nErrors:")
        for err in e.errors:
            print(f"  - {err}")
        sys.exit(1)

    result = validate_table(table)
    print(f"Table: {table.name}")
    print(f"Actions: {len(table.actions)}")
    print(f"Actors: {len(table.actors)}")

    if result.warnings:
        print("\nWarnings:")
        for w in result.warnings:
            print(f"  - {w}")
    return result


if __name__ == "__main__":
    main()
