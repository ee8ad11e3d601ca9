"""Search state: request phase machine and pagination arithmetic.

The request lifecycle is modelled as one explicit phase instead of a set of
independent flags, so combinations such as "loading while showing an error"
cannot be represented. Pagination is an orthogonal sub-state.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from aptsearch.logging import get_logger

logger = get_logger("aptsearch.controller.state")


class SearchPhase(str, Enum):
    """Phase of a search view."""

    IDLE = "idle"
    SUGGESTING = "suggesting"
    SEARCHING = "searching"
    ERROR = "error"


class PhaseEvent(str, Enum):
    """Inputs that move a search view between phases."""

    PANEL_OPENED = "panel_opened"
    PANEL_CLOSED = "panel_closed"
    REQUEST_STARTED = "request_started"
    REQUEST_SUCCEEDED = "request_succeeded"
    REQUEST_FAILED = "request_failed"


TRANSITIONS: dict[SearchPhase, dict[PhaseEvent, SearchPhase]] = {
    SearchPhase.IDLE: {
        PhaseEvent.PANEL_OPENED: SearchPhase.SUGGESTING,
        PhaseEvent.REQUEST_STARTED: SearchPhase.SEARCHING,
    },
    SearchPhase.SUGGESTING: {
        PhaseEvent.PANEL_CLOSED: SearchPhase.IDLE,
        PhaseEvent.REQUEST_STARTED: SearchPhase.SEARCHING,
    },
    SearchPhase.SEARCHING: {
        PhaseEvent.REQUEST_SUCCEEDED: SearchPhase.IDLE,
        PhaseEvent.REQUEST_FAILED: SearchPhase.ERROR,
    },
    # The error banner stays up until the next request attempt.
    SearchPhase.ERROR: {
        PhaseEvent.REQUEST_STARTED: SearchPhase.SEARCHING,
    },
}


class SearchStateMachine:
    """Finite state machine over SearchPhase.

    Events that have no transition from the current phase are ignored.
    """

    def __init__(self, initial: SearchPhase = SearchPhase.IDLE):
        self.phase = initial

    def can_fire(self, event: PhaseEvent) -> bool:
        """Check whether an event has a transition from the current phase."""
        return event in TRANSITIONS[self.phase]

    def fire(self, event: PhaseEvent) -> bool:
        """Apply an event.

        Args:
            event: The event to apply

        Returns:
            bool: True if the phase changed
        """
        target = TRANSITIONS[self.phase].get(event)
        if target is None:
            logger.debug("Ignored phase event", phase=self.phase.value, phase_event=event.value)
            return False

        logger.debug("Phase transition", source=self.phase.value, target=target.value)
        self.phase = target
        return True


class PaginationState(BaseModel):
    """Current page position within a result set.

    ``start`` and ``end`` are derived on every access and never stored.
    """

    model_config = ConfigDict(validate_assignment=True)

    page: int = Field(default=0, ge=0, description="Zero-based page index")
    page_size: int = Field(default=10, ge=1, description="Results per page")
    total_results: int = Field(default=0, ge=0, description="Total hits reported by the backend")

    @property
    def start(self) -> int:
        """One-based index of the first result on the current page."""
        return self.page * self.page_size + 1

    @property
    def end(self) -> int:
        """One-based index of the last result on the current page."""
        return min((self.page + 1) * self.page_size, self.total_results)

    @property
    def can_go_back(self) -> bool:
        return self.page > 0

    @property
    def can_go_forward(self) -> bool:
        return (self.page + 1) * self.page_size < self.total_results

    @property
    def page_count(self) -> int:
        """Number of pages needed for all results."""
        return -(-self.total_results // self.page_size)

    def accepts(self, new_page: int) -> bool:
        """Check whether navigating to ``new_page`` is permitted.

        Backward moves need a non-negative target; forward moves need the
        target page to start inside the result set.
        """
        if new_page < 0:
            return False
        if new_page > self.page and new_page * self.page_size >= self.total_results:
            return False
        return True
