"""
Command line entry point.

    python -m monster_battle                      # pygame window
    python -m monster_battle --headless --seed 3  # autoplay in the log
    python -m monster_battle --config battle.json --policy first
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Optional

from battlekit.core.errors import ConfigError
from battlekit.core.log import configure_logging
from battlekit.display.base import DisplayState
from battlekit.display.headless import HeadlessDisplay
from monster_battle.battle import BattleEngine, TargetPolicy, start_battle_thread
from monster_battle.config import BattleConfig, load_battle_config

logger = logging.getLogger("monster_battle")

POLICIES = {
    "first": TargetPolicy.FIRST_LIVING,
    "random": TargetPolicy.RANDOM_LIVING,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monster_battle",
        description="Turn-based monster battle.",
    )
    parser.add_argument("--config", metavar="PATH", help="battle config JSON file")
    parser.add_argument("--seed", type=int, help="random seed")
    parser.add_argument("--policy", choices=sorted(POLICIES), help="target policy")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="play automatically without a window",
    )
    parser.add_argument(
        "--turns",
        type=int,
        default=100,
        help="headless action budget before the battle is aborted",
    )
    parser.add_argument("--log-level", default="INFO", help="logging level")
    return parser


def load_config(args: argparse.Namespace) -> BattleConfig:
    """Read the config file (if any) and apply command line overrides."""
    config = load_battle_config(args.config) if args.config else BattleConfig()

    updates = {}
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.policy is not None:
        updates["target_policy"] = POLICIES[args.policy]
    if updates:
        config = config.model_copy(update=updates)
    return config


def autoplay_chooser(rng: random.Random, budget: int):
    """Pick random action codes until ``budget`` requests have been answered."""
    remaining = [budget]

    def choose(state: DisplayState) -> Optional[int]:
        if remaining[0] <= 0:
            return None
        remaining[0] -= 1
        return rng.randrange(len(state.labels))

    return choose


def run_headless(config: BattleConfig, turns: int) -> int:
    config = config.model_copy(update={
        "turn_pause": 0.0,
        "highlight_duration": 0.0,
        "build_pause": 0.0,
    })
    display = HeadlessDisplay(chooser=autoplay_chooser(random.Random(config.seed), turns))
    result = BattleEngine(display, config).run()
    logger.info(
        f"Result: {result.phase.name} in {result.turns} turns, "
        f"HP {result.player_health}/{result.player_max_health}, "
        f"{result.living_combatants} monsters left"
    )
    return 0


def run_window(config: BattleConfig) -> int:
    # Imported here so headless runs never load pygame
    from battlekit.ui import PygameDisplay

    display = PygameDisplay(config.window, action_timeout=config.action_timeout)
    engine = BattleEngine(display, config)
    worker = start_battle_thread(engine)
    display.run(worker)
    worker.join(timeout=1.0)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = load_config(args)
    except ConfigError as e:
        logger.error(str(e))
        return 2

    if args.headless:
        return run_headless(config, args.turns)
    return run_window(config)


if __name__ == "__main__":
    sys.exit(main())
