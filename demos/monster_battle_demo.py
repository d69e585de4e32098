"""
Monster Battle Demo

Demonstrates:
- Build choice (Fighter / Tank / Healer / Ninja)
- Turn-based battle against three random monsters
- Items consumed from the front of the inventory
- Battle events logged from the event bus

Controls:
- Click a button, or press 1-4
- Escape: Quit
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from battlekit.core.events import EventBus
from battlekit.core.log import configure_logging
from battlekit.ui import PygameDisplay
from monster_battle.battle import BattleEngine, BattleEvent, start_battle_thread
from monster_battle.config import BattleConfig, load_battle_config

logger = logging.getLogger("monster_battle.demo")


def log_event(event):
    details = ", ".join(f"{k}={v}" for k, v in event.data.items())
    logger.info(f"{event.type.name} {details}")


def main():
    configure_logging(logging.INFO)

    config_path = Path(__file__).parent / "battle.json"
    if config_path.exists():
        config = load_battle_config(config_path)
    else:
        config = BattleConfig()

    events = EventBus()
    for event_type in BattleEvent:
        events.subscribe(event_type, log_event)

    display = PygameDisplay(config.window, event_bus=events, action_timeout=config.action_timeout)
    engine = BattleEngine(display, config, event_bus=events)

    worker = start_battle_thread(engine)
    display.run(worker)

    result = engine.result()
    print(f"Battle over: {result.phase.name} after {result.turns} turns")


if __name__ == "__main__":
    main()
