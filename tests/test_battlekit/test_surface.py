import pytest

from battlekit.core.errors import ActionLabelError
from battlekit.display.surface import (
    CombatantView,
    DisplaySurface,
    MessageLog,
    validate_labels,
)
from battlekit.display.headless import HeadlessDisplay


def test_validate_labels_accepts_four():
    assert validate_labels(["Attack", "Defend", "Heal", "Use Item"]) == (
        "Attack", "Defend", "Heal", "Use Item",
    )


@pytest.mark.parametrize("labels", [
    ["Attack", "Defend", "Heal"],
    ["A", "B", "C", "D", "E"],
    [],
    "ABCD",
    ["A", "B", "C", 4],
])
def test_validate_labels_rejects(labels):
    with pytest.raises(ActionLabelError):
        validate_labels(labels)


def test_action_label_error_is_value_error():
    with pytest.raises(ValueError):
        validate_labels(["only one"])


def test_message_log_keeps_last_three():
    log = MessageLog()
    for message in ["one", "two", "three", "four"]:
        log.push(message)

    assert log.messages == ["two", "three", "four"]
    assert log.latest == "four"
    assert len(log) == 3


def test_message_log_empty():
    log = MessageLog()
    assert log.latest == ""
    assert log.messages == []


def test_combatant_view_health_percent():
    view = CombatantView(name="Monster 1", health=-5, max_health=50, damage=12.5, speed=3)
    assert not view.is_alive
    assert view.health_percent == 0.0

    view = CombatantView(name="Monster 2", health=25, max_health=50, damage=12.5, speed=3)
    assert view.is_alive
    assert view.health_percent == 0.5


def test_combatant_view_is_frozen():
    view = CombatantView(name="Monster 1", health=10, max_health=10, damage=1.0, speed=1)
    with pytest.raises(AttributeError):
        view.health = 0


def test_headless_display_satisfies_protocol():
    assert isinstance(HeadlessDisplay(), DisplaySurface)
