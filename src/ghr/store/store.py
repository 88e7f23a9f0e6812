"""Client-side report collection state.

The store owns the set of fetched reports. ``refresh()`` is its only write
path: every successful refresh installs a fresh tuple, so observers can
detect a change by identity (``store.reports is not previous``) or by
``version`` without comparing contents.

Everything runs on one asyncio event loop with a single writer, so no
locking is needed. The store is not thread-safe.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from ghr.errors import DecodeError, GhrError, TransportError
from ghr.report.models import WrappedReport, decode_wrapped_reports

logger = logging.getLogger(__name__)


class StoreState(str, Enum):
    """Lifecycle of the report collection."""

    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass(frozen=True)
class StoreChange:
    """Passed to listeners after every state transition."""

    previous: StoreState
    current: StoreState
    version: int
    reports_changed: bool = False


class ReportSource(Protocol):
    """Anything that can fetch the raw report collection."""

    async def fetch(self) -> Any: ...

    def describe(self) -> str: ...


Listener = Callable[[StoreChange], None]


class ReportStore:
    """Holds the fetched reports and keeps them in sync with a source.

    Args:
        source: Where reports come from (HTTP client or file source).
        surface_errors: When True, a failed refresh moves the store to
            ``ERROR`` and keeps the exception in ``error``. When False, the
            store silently returns to the state it had before the refresh.
    """

    def __init__(self, source: ReportSource, surface_errors: bool = True) -> None:
        self._source = source
        self._surface_errors = surface_errors
        self._state = StoreState.EMPTY
        self._reports: tuple[WrappedReport, ...] = ()
        self._version = 0
        self._error: GhrError | None = None
        self._listeners: dict[int, Listener] = {}
        self._next_listener_id = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def source(self) -> ReportSource:
        return self._source

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def reports(self) -> tuple[WrappedReport, ...]:
        """Current snapshot. Replaced, never mutated, by ``refresh()``."""
        return self._reports

    @property
    def version(self) -> int:
        """Incremented each time a new snapshot is installed."""
        return self._version

    @property
    def error(self) -> GhrError | None:
        """The failure behind the ``ERROR`` state, if any."""
        return self._error

    def get(self, report_id: str) -> WrappedReport | None:
        """Look up a report in the current snapshot by id."""
        for wrapped in self._reports:
            if wrapped.id == report_id:
                return wrapped
        return None

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state transitions.

        Returns:
            A callable that removes the listener.
        """
        listener_id = self._next_listener_id
        self._next_listener_id += 1
        self._listeners[listener_id] = listener

        def unsubscribe() -> None:
            self._listeners.pop(listener_id, None)

        return unsubscribe

    def _transition(self, state: StoreState, reports_changed: bool = False) -> None:
        change = StoreChange(
            previous=self._state,
            current=state,
            version=self._version,
            reports_changed=reports_changed,
        )
        self._state = state
        logger.debug(f"Report store: {change.previous.value} -> {state.value}")

        for listener in list(self._listeners.values()):
            try:
                listener(change)
            except Exception:
                logger.exception("Report store listener failed")

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def refresh(self) -> bool:
        """Fetch the collection and replace the snapshot.

        A call made while a refresh is already in flight is ignored.

        Returns:
            True if a new snapshot was installed, False if the call was
            ignored or the fetch failed.
        """
        if self._state is StoreState.LOADING:
            logger.debug("Refresh already in progress; ignoring")
            return False

        resting_state = self._state
        self._transition(StoreState.LOADING)
        logger.debug(f"Fetching reports from {self._source.describe()}")
        try:
            payload = await self._source.fetch()
            reports = decode_wrapped_reports(payload)
        except (TransportError, DecodeError) as e:
            self._fail(e, resting_state)
            return False
        except BaseException:
            self._transition(resting_state)
            raise

        self._reports = reports
        self._version += 1
        self._error = None
        logger.info(f"Loaded {len(reports)} report(s)")
        self._transition(StoreState.LOADED, reports_changed=True)
        return True

    def _fail(self, error: GhrError, resting_state: StoreState) -> None:
        logger.warning(f"Report refresh failed: {error}")
        if self._surface_errors:
            self._error = error
            self._transition(StoreState.ERROR)
        else:
            self._transition(resting_state)
