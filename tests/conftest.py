import random

import pytest
from unittest.mock import MagicMock, patch


@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.
    """
    with patch('pygame.init'), \
         patch('pygame.quit'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.font'), \
         patch('pygame.mouse'):

        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)

        yield


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from battlekit.core.events import EventBus
    return EventBus()


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def config():
    """Battle config with no pauses and no build choice."""
    from monster_battle.config import BattleConfig
    return BattleConfig(
        seed=42,
        choose_build=False,
        turn_pause=0.0,
        highlight_duration=0.0,
        build_pause=0.0,
    )


@pytest.fixture
def make_state():
    """Build a BattleState from (name, health, damage) tuples."""
    from monster_battle.battle.state import BattleState
    from monster_battle.battle.targeting import TargetPolicy
    from monster_battle.components import Combatant, PlayerVitals

    def _make(monsters=(), current=100, maximum=100, policy=TargetPolicy.FIRST_LIVING):
        return BattleState(
            combatants=[
                Combatant(name=name, health=health, damage=damage)
                for name, health, damage in monsters
            ],
            vitals=PlayerVitals(current=current, maximum=maximum),
            target_policy=policy,
        )

    return _make
