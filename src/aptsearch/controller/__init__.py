"""Search state, suggestion fetching and pagination control."""

from aptsearch.controller.debounce import Debouncer
from aptsearch.controller.events import (
    SEARCH_REGION,
    InputEventHub,
    PointerEvent,
    Subscription,
    get_event_hub,
)
from aptsearch.controller.search import GENERIC_ERROR_MESSAGE, SearchController
from aptsearch.controller.session import SearchSession
from aptsearch.controller.state import (
    PaginationState,
    PhaseEvent,
    SearchPhase,
    SearchStateMachine,
)
from aptsearch.controller.suggestions import SuggestionFetcher
from aptsearch.controller.view import SearchView

__all__ = [
    # Controller
    "SearchController",
    "GENERIC_ERROR_MESSAGE",
    "SuggestionFetcher",
    "SearchSession",
    "SearchView",
    # State
    "SearchPhase",
    "PhaseEvent",
    "SearchStateMachine",
    "PaginationState",
    # Scheduling and events
    "Debouncer",
    "InputEventHub",
    "PointerEvent",
    "Subscription",
    "SEARCH_REGION",
    "get_event_hub",
]
