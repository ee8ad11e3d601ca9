"""Process-wide input event hub.

Views subscribe to pointer events (e.g. "clicked outside the search box")
through a single shared hub. Each owner holds at most one subscription; a
second ``subscribe`` for the same owner replaces the first instead of
stacking another listener.
"""

from collections.abc import Callable

from pydantic import BaseModel, Field

from aptsearch.logging import get_logger

logger = get_logger("aptsearch.controller.events")

SEARCH_REGION = "search"


class PointerEvent(BaseModel):
    """A click or tap somewhere in the interface."""

    region: str = Field(description="Name of the region that received the event")


EventHandler = Callable[[PointerEvent], None]


class Subscription:
    """Handle for one registered listener.

    Usable as a context manager; leaving the block releases the listener.
    """

    def __init__(self, hub: "InputEventHub", owner: object, handler: EventHandler):
        self.hub = hub
        self.owner = owner
        self.handler = handler

    @property
    def active(self) -> bool:
        return self.hub._listeners.get(id(self.owner)) is self

    def release(self) -> None:
        """Remove the listener. Releasing twice is harmless."""
        if self.active:
            del self.hub._listeners[id(self.owner)]
            logger.debug("Released input listener", owner=type(self.owner).__name__)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *args) -> None:
        self.release()


class InputEventHub:
    """Dispatches pointer events to subscribed views."""

    def __init__(self):
        self._listeners: dict[int, Subscription] = {}

    def subscribe(self, owner: object, handler: EventHandler) -> Subscription:
        """Register ``handler`` as the one listener for ``owner``.

        Args:
            owner: The view instance the listener belongs to
            handler: Called with every dispatched event

        Returns:
            Subscription: Handle used to release the listener
        """
        subscription = Subscription(self, owner, handler)
        if id(owner) in self._listeners:
            logger.debug("Replacing input listener", owner=type(owner).__name__)
        self._listeners[id(owner)] = subscription
        return subscription

    def listener_count(self, owner: object | None = None) -> int:
        """Count active listeners, optionally only those of one owner."""
        if owner is None:
            return len(self._listeners)
        return 1 if id(owner) in self._listeners else 0

    def dispatch(self, event: PointerEvent) -> None:
        """Deliver an event to every active listener."""
        for subscription in list(self._listeners.values()):
            subscription.handler(event)


# Global hub instance
_hub: InputEventHub | None = None


def get_event_hub() -> InputEventHub:
    """Get the process-wide input event hub.

    Returns:
        InputEventHub: The shared hub
    """
    global _hub
    if _hub is None:
        _hub = InputEventHub()
    return _hub
