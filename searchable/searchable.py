"""
Query/filter reconciliation.

Searchable keeps the raw query current on every input event and recomputes
the filtered results whenever the query actually changes, either directly or
through a trailing-edge debouncer. The host renders by calling render(),
typically from a subscribe() listener.
"""

from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar, Union

from .config import DebounceConfig
from .scheduler import Debouncer, build_scheduler
from .filtering import Predicate, apply_query
from .logger import get_logger
from .render import PresentationMode, RenderCallback, RenderContext, RenderDispatcher
from .state import QueryState

logger = get_logger()

T = TypeVar("T")

DebounceSetting = Union[DebounceConfig, bool, int, float, None]


class Searchable(Generic[T]):
    """
    Filters a caller-owned candidate list against a live query.

    States:
    - IDLE: results reflect the last query that was reconciled
    - PENDING: a debounced recomputation is scheduled and has not fired
    """

    IDLE = "idle"
    PENDING = "pending"

    def __init__(
        self,
        items: Sequence[T],
        predicate: Predicate,
        initial_query: str = "",
        debounce: DebounceSetting = True,
        debounce_duration: Optional[float] = None,
        children: Optional[RenderCallback] = None,
        render: Optional[RenderCallback] = None,
        loop: Optional[Any] = None,
    ):
        """
        Args:
            items: Candidate list, read by reference whenever filtering runs
            predicate: predicate(item, query) -> bool
            initial_query: Query the first result set is computed from
            debounce: DebounceConfig, True (default duration), False/None
                (synchronous) or a duration in milliseconds
            debounce_duration: Milliseconds to use when debounce is True
            children: Children-style presentation callback
            render: Render-style presentation callback (exclusive with children)
            loop: Timer source for debouncing (default: running asyncio loop)

        Raises:
            PresentationConflictError: If both children and render are given
        """
        self._dispatcher = RenderDispatcher(PresentationMode.from_callbacks(children, render))
        if not callable(predicate):
            raise TypeError(f"predicate must be callable, got {type(predicate).__name__}")

        self._candidates = items
        self._predicate = predicate
        self.debounce_config = DebounceConfig.coerce(debounce, debounce_duration)

        # First materialization is never deferred
        self._state: QueryState[T] = QueryState(
            initial_query, apply_query(items, initial_query, predicate)
        )
        self._observed_query = initial_query
        self._recompute: Optional[Callable] = None
        self._recompute = build_scheduler(
            self.filter_and_set_state, self.debounce_config, loop=loop
        )
        self._closed = False

        logger.debug(
            "Searchable created",
            candidates=len(items),
            initial_query=initial_query,
            debounce=repr(self.debounce_config),
            presentation=self._dispatcher.mode.kind,
        )

    # Read-only views

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def query(self) -> str:
        return self._state.query

    @property
    def results(self) -> List[T]:
        return self._state.items

    @property
    def candidates(self) -> Sequence[T]:
        return self._candidates

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def phase(self) -> str:
        if isinstance(self._recompute, Debouncer) and self._recompute.pending:
            return self.PENDING
        return self.IDLE

    # Input path

    def on_change(self, text: str) -> None:
        """Input handler: the new query is visible immediately."""
        if self._closed:
            logger.debug("Input ignored after close", query=text)
            return
        if not isinstance(text, str):
            raise TypeError(f"query must be a string, got {type(text).__name__}")
        self._state.set_query(text)
        # Subscribers have seen the new query before any filtering runs
        self.reconcile()

    handle_change = on_change

    def set_candidates(self, items: Sequence[T]) -> None:
        """Swap the candidate list. Results are not recomputed until the query changes."""
        self._candidates = items

    # Reconciliation

    def reconcile(self) -> bool:
        """
        Request a recomputation if the query changed since the last one seen.

        Safe to call on every host render; only an actual change triggers work.

        Returns:
            True if a recomputation was requested
        """
        if self._closed:
            return False
        query = self._state.query
        if query == self._observed_query:
            return False
        self._observed_query = query
        self._request(query)
        return True

    def refresh(self) -> None:
        """Recompute for the current query, e.g. after the candidate list changed."""
        if self._closed:
            return
        self._request(self._state.query)

    def _request(self, query: str) -> None:
        logger.record_recompute_requested()
        logger.debug("Recomputation requested", query=query, phase=self.phase)
        self._recompute(self._candidates, query)

    def filter_and_set_state(self, candidates: Sequence[T], query: str) -> None:
        """
        Filter candidates for query and store the result. May run deferred.

        A predicate exception leaves the previous results in place and
        propagates to the caller.
        """
        try:
            items = apply_query(candidates, query, self._predicate)
        except Exception as e:
            logger.record_predicate_failure()
            logger.error(
                "Predicate failed, keeping previous results",
                query=query,
                error=type(e).__name__,
            )
            raise
        self._state.set_items(items)
        logger.record_recompute_applied()
        logger.debug("Results updated", query=query, matches=len(items))

    # Presentation

    def subscribe(self, listener: Callable[["Searchable"], None]) -> Callable[[], None]:
        """Call listener(self) after every state change; returns an unsubscribe function."""
        return self._state.subscribe(lambda _state: listener(self))

    def context(self) -> RenderContext:
        return RenderContext(
            items=self._state.items,
            query=self._state.query,
            on_change=self.on_change,
        )

    def render(self) -> Any:
        logger.record_render()
        return self._dispatcher.dispatch(self.context())

    # Teardown

    def close(self) -> None:
        """Cancel any pending recomputation and stop reacting to input."""
        if self._closed:
            return
        self._closed = True
        if isinstance(self._recompute, Debouncer) and self._recompute.cancel():
            logger.record_recompute_cancelled()
            logger.debug("Pending recomputation cancelled on close", query=self._state.query)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self):
        return (
            f"<Searchable query={self._state.query!r} "
            f"results={len(self._state.items)}/{len(self._candidates)} {self.phase}>"
        )
