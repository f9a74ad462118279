"""
Draw odds simulation.

Samples rarities with the live rarity table and reports observed
percentages next to the configured weights. Touches no player state.
Can be run as a standalone script to sanity check odds after editing tiers.
"""

import argparse
import logging
import random

from cardvault.db.kv_store import InMemoryStore
from cardvault.models.rarity import Rarity
from cardvault.services.card_game import build_game

logger = logging.getLogger(__name__)

DEFAULT_SAMPLES = 100_000


def run_simulation(samples: int = DEFAULT_SAMPLES, seed: int | None = None) -> dict[Rarity, float]:
    """
    Run a rarity simulation.

    Args:
        samples: Number of rarities to sample
        seed: Optional RNG seed for reproducible runs

    Returns:
        Observed percentage per rarity tier
    """
    game = build_game(InMemoryStore(), rng=random.Random(seed))
    results = game.gacha.simulate_draws(samples)

    for tier in game.rarities.tiers():
        logger.info(
            "%-10s expected %6.2f%%  observed %6.2f%%",
            tier.key.value,
            tier.weight * 100,
            results[tier.key],
        )

    logger.info("Simulation complete: %d samples", samples)
    return results


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for running the simulation."""
    parser = argparse.ArgumentParser(description="Simulate gacha rarity odds")
    parser.add_argument("--samples", type=int, default=DEFAULT_SAMPLES)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    run_simulation(args.samples, args.seed)


if __name__ == "__main__":
    main()
