from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")

Predicate = Callable[[T, str], bool]


def filter_items(candidates: Sequence[T], query: str, predicate: Predicate) -> List[T]:
    """
    Returns the candidates for which predicate(item, query) is true.
    Single pass, input order kept. Exceptions from predicate propagate as-is.
    """
    return [item for item in candidates if predicate(item, query)]


def apply_query(candidates: Sequence[T], query: str, predicate: Predicate) -> List[T]:
    """
    filter_items with the empty-query policy applied: an empty query passes
    every candidate through and the predicate is never called.
    """
    if query == "":
        return list(candidates)
    return filter_items(candidates, query, predicate)
