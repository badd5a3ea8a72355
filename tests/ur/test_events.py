"""Unit tests for /src/ur/events.py"""

from unittest.mock import Mock

from src.ur.events import EventBus, GameWon, TurnStarted


def test_publish_reaches_every_listener_in_order() -> None:
    bus = EventBus()
    received: list[tuple[str, object]] = []
    bus.subscribe(lambda event: received.append(("first", event)))
    bus.subscribe(lambda event: received.append(("second", event)))

    event = TurnStarted(player_id=1)
    bus.publish(event)
    assert received == [("first", event), ("second", event)]


def test_failing_listener_does_not_stop_delivery() -> None:
    bus = EventBus()
    broken = Mock(side_effect=RuntimeError("boom"))
    healthy = Mock()
    bus.subscribe(broken)
    bus.subscribe(healthy)

    bus.publish(GameWon(player_id=0))  # must not raise
    broken.assert_called_once()
    healthy.assert_called_once_with(GameWon(player_id=0))


def test_unsubscribe() -> None:
    bus = EventBus()
    listener = Mock()
    bus.subscribe(listener)
    bus.unsubscribe(listener)
    bus.unsubscribe(listener)  # unknown listeners are ignored
    bus.publish(GameWon(player_id=0))
    listener.assert_not_called()


def test_events_are_values() -> None:
    assert TurnStarted(player_id=0) == TurnStarted(player_id=0, bonus=False)
    assert TurnStarted(player_id=0) != TurnStarted(player_id=0, bonus=True)
