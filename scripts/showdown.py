#!/usr/bin/env python3
"""Deal random hold'em showdowns and rank every player's best hand.

Usage:
    # Three heads-up showdowns
    uv run scripts/showdown.py

    # Six players, reproducible deal, build log on stderr
    uv run scripts/showdown.py --players 6 --seed 7 --verbose

    # Cross-check with the scalar classifier on all CPUs
    uv run scripts/showdown.py --config reference
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from handrank.engine import format_cards, standard_deck
from handrank.lookup import (
    EXPECTED_CLASSES,
    FastConfig,
    HandEvaluator,
    ReferenceConfig,
    TableConfig,
    evaluate_best,
)

BOARD_SIZE = 5
HOLE_SIZE = 2


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Rank random hold'em showdowns against the 7462-class table",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=str,
        default="fast",
        choices=["fast", "reference"],
        help="Table build preset to use",
    )
    parser.add_argument("--workers", type=int, help="Worker processes (reference preset)")
    parser.add_argument("--hands", type=int, default=3, help="Number of hands to deal")
    parser.add_argument("--players", type=int, default=2, help="Players per hand")
    parser.add_argument("--seed", type=int, help="Random seed for the deal")
    parser.add_argument("--verbose", action="store_true", help="Log table build progress")

    return parser.parse_args()


def get_config_preset(name: str) -> TableConfig:
    """Get configuration preset by name."""
    if name == "fast":
        return FastConfig()
    elif name == "reference":
        return ReferenceConfig()
    else:
        raise ValueError(f"Unknown config preset: {name}")


def play_hand(evaluator: HandEvaluator, rng: random.Random, num_players: int) -> None:
    """Deal one hand and print the showdown."""
    deck = list(standard_deck())
    rng.shuffle(deck)

    holes = [[deck.pop() for _ in range(HOLE_SIZE)] for _ in range(num_players)]
    board = [deck.pop() for _ in range(BOARD_SIZE)]

    print(f"Board: {format_cards(board)}")
    print()

    ranks = {}
    for seat, hole in enumerate(holes, start=1):
        evaluation = evaluate_best(hole + board, evaluator.table)
        ranks[seat] = evaluation.rank
        print(f"Player {seat}: {format_cards(hole)}")
        print(
            f"  Category: {evaluator.get_hand_name(evaluation.category)}"
            f"  Index: {evaluation.rank} (1=best, {EXPECTED_CLASSES}=worst)"
        )

    best_rank = min(ranks.values())
    winners = [seat for seat, rank in ranks.items() if rank == best_rank]
    if len(winners) == 1:
        print(f"Result: Player {winners[0]} wins (lower index = better)")
    else:
        print(f"Result: Tie between players {', '.join(map(str, winners))}")


def main() -> None:
    """Showdown entry point."""
    args = parse_args()

    max_players = (52 - BOARD_SIZE) // HOLE_SIZE
    if not 2 <= args.players <= max_players:
        print(f"--players must be between 2 and {max_players}", file=sys.stderr)
        sys.exit(2)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(message)s")

    config = get_config_preset(args.config)
    if args.workers is not None:
        config = TableConfig.from_dict({**config.to_dict(), "n_workers": args.workers})

    print("Building canonical 5-card hand table...")
    evaluator = HandEvaluator(config=config)
    print(f"Canonical table built. Distinct classes: {len(evaluator.table)}")

    rng = random.Random(args.seed)
    for hand_number in range(1, args.hands + 1):
        print()
        print("=" * 60)
        print(f"HAND #{hand_number}")
        print("=" * 60)
        play_hand(evaluator, rng, args.players)

    print()
    print("Done.")


if __name__ == "__main__":
    main()
