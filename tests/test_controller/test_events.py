"""Tests for the input event hub."""

from unittest.mock import MagicMock

from aptsearch.controller.events import InputEventHub, PointerEvent, get_event_hub


class Owner:
    pass


class TestInputEventHub:
    """Tests for InputEventHub."""

    def test_dispatch_reaches_listener(self, hub):
        handler = MagicMock()
        hub.subscribe(Owner(), handler)

        event = PointerEvent(region="results")
        hub.dispatch(event)

        handler.assert_called_once_with(event)

    def test_one_listener_per_owner(self, hub):
        owner = Owner()
        first, second = MagicMock(), MagicMock()

        hub.subscribe(owner, first)
        hub.subscribe(owner, second)
        hub.dispatch(PointerEvent(region="results"))

        assert hub.listener_count(owner) == 1
        first.assert_not_called()
        second.assert_called_once()

    def test_owners_are_independent(self, hub):
        a, b = Owner(), Owner()
        hub.subscribe(a, MagicMock())
        hub.subscribe(b, MagicMock())

        assert hub.listener_count() == 2

    def test_release(self, hub):
        owner = Owner()
        handler = MagicMock()
        subscription = hub.subscribe(owner, handler)

        subscription.release()
        subscription.release()
        hub.dispatch(PointerEvent(region="results"))

        assert not subscription.active
        assert hub.listener_count() == 0
        handler.assert_not_called()

    def test_stale_subscription_release_keeps_replacement(self, hub):
        owner = Owner()
        old = hub.subscribe(owner, MagicMock())
        new = hub.subscribe(owner, MagicMock())

        old.release()

        assert new.active
        assert hub.listener_count(owner) == 1

    def test_context_manager_releases(self, hub):
        with hub.subscribe(Owner(), MagicMock()) as subscription:
            assert subscription.active

        assert hub.listener_count() == 0

    def test_global_hub_is_shared(self):
        assert get_event_hub() is get_event_hub()
        assert isinstance(get_event_hub(), InputEventHub)
