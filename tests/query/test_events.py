"""Tests for the subscriber registry."""

from catalog_hub.query.events import Subscribers


def test_notify_in_subscription_order():
    """Listeners should be notified in subscription order."""
    calls = []
    subscribers = Subscribers()
    subscribers.subscribe(lambda value: calls.append(("first", value)))
    subscribers.subscribe(lambda value: calls.append(("second", value)))

    subscribers.notify(1)

    assert calls == [("first", 1), ("second", 1)]


def test_unsubscribe_removes_listener(mocker):
    """The returned unsubscribe function should remove the listener."""
    listener = mocker.Mock()
    subscribers = Subscribers()
    unsubscribe = subscribers.subscribe(listener)

    unsubscribe()
    unsubscribe()
    subscribers.notify("x")

    listener.assert_not_called()
    assert len(subscribers) == 0


def test_listener_error_is_logged_and_isolated(mocker, caplog):
    """A failing listener should be logged without stopping the rest."""
    good = mocker.Mock()
    subscribers = Subscribers("test listener")
    subscribers.subscribe(mocker.Mock(side_effect=ValueError("bad")))
    subscribers.subscribe(good)

    subscribers.notify()

    good.assert_called_once_with()
    assert "Error in test listener" in caplog.text
