from typing import Callable, Generic, List, Sequence, TypeVar

T = TypeVar("T")

Listener = Callable[["QueryState"], None]


class QueryState(Generic[T]):
    """
    Current query text and the filtered result set derived from it.

    Mutated only through set_query (input path) and set_items (recompute
    path). Every mutation notifies subscribers afterwards.
    """

    def __init__(self, query: str = "", items: Sequence[T] = ()):
        self._query = query
        self._items: List[T] = list(items)
        self._listeners: List[Listener] = []

    @property
    def query(self) -> str:
        return self._query

    @property
    def items(self) -> List[T]:
        # Copy so callers cannot mutate the stored result set
        return list(self._items)

    def set_query(self, text: str) -> None:
        self._query = text
        self._notify()

    def set_items(self, items: Sequence[T]) -> None:
        self._items = list(items)
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    def __repr__(self):
        return f"QueryState(query={self._query!r}, items={len(self._items)})"
