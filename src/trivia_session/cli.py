# Area: Shared
"""
trivia_session.cli — Command-line interface
===========================================

Usage:
    python -m trivia_session --demo                     # Simulated game
    python -m trivia_session --demo --players 6
    python -m trivia_session --demo --config config.json

Demo mode can be enabled via:
    1. CLI flag: --demo
    2. Environment variable: DEMO_MODE=true
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from ._shared.logging_config import setup_logging
from .config import load_config
from .demo import format_leaderboard, run_demo
from .errors import ConfigError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Trivia session core - run a simulated game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m trivia_session --demo
  python -m trivia_session --demo --players 6 --seed 42
  python -m trivia_session --demo --questions my_questions.json
  DEMO_MODE=true python -m trivia_session
        """,
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run a simulated game with bot players on a virtual clock",
    )
    parser.add_argument(
        "--players",
        type=int,
        default=4,
        help="Number of bot players (default: 4)",
    )
    parser.add_argument(
        "--questions",
        type=str,
        help="Path to a JSON question bank (default: bundled demo questions)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON config file",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible game",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every published event",
    )

    return parser.parse_args(argv)


def is_demo_mode(args: argparse.Namespace) -> bool:
    """Check if demo mode is enabled via CLI or environment."""
    if args.demo:
        return True
    return os.environ.get("DEMO_MODE", "").lower() in ("true", "1", "yes")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not is_demo_mode(args):
        print("Error: only demo mode can run from the command line.", file=sys.stderr)
        print("Use --demo, or embed TriviaSession in your host platform.", file=sys.stderr)
        return 1

    if args.players < 1:
        print("Error: --players must be at least 1", file=sys.stderr)
        return 1

    setup_logging(config["log_file"], logging.DEBUG if args.verbose else logging.INFO)

    try:
        leaderboard = run_demo(
            players=args.players,
            questions_path=args.questions or config.get("questions_path"),
            config=config,
            seed=args.seed,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print()
    print("Final leaderboard")
    print(format_leaderboard(leaderboard))
    return 0
