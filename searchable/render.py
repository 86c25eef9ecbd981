"""
Presentation dispatch.

Exactly one caller-supplied callback (children-style or render-style)
receives the current items, query and change handler.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


class PresentationConflictError(ValueError):
    """Raised when both children and render callbacks are supplied."""
    pass


@dataclass(frozen=True)
class RenderContext(Generic[T]):
    """What a presentation callback receives."""

    items: List[T]
    query: str
    on_change: Callable[[str], None]

    def __getitem__(self, key: str) -> Any:
        if key not in ("items", "query", "on_change"):
            raise KeyError(key)
        return getattr(self, key)

    def keys(self):
        return ("items", "query", "on_change")


RenderCallback = Callable[[RenderContext], Any]


class PresentationMode:
    """Tagged choice of presentation callback, fixed at construction."""

    CHILDREN = "children"
    RENDER = "render"
    NONE = "none"

    __slots__ = ("kind", "callback")

    def __init__(self, kind: str, callback: Optional[RenderCallback] = None):
        self.kind = kind
        self.callback = callback

    @classmethod
    def children(cls, callback: RenderCallback) -> "PresentationMode":
        return cls(cls.CHILDREN, callback)

    @classmethod
    def render(cls, callback: RenderCallback) -> "PresentationMode":
        return cls(cls.RENDER, callback)

    @classmethod
    def none(cls) -> "PresentationMode":
        return cls(cls.NONE)

    @classmethod
    def from_callbacks(
        cls,
        children: Optional[RenderCallback] = None,
        render: Optional[RenderCallback] = None,
    ) -> "PresentationMode":
        """
        Pick the mode from the two optional callback slots.

        Raises:
            PresentationConflictError: If both slots are filled
            TypeError: If a supplied slot is not callable
        """
        if children is not None and render is not None:
            raise PresentationConflictError(
                "Pass either children or render, not both"
            )
        for name, cb in (("children", children), ("render", render)):
            if cb is not None and not callable(cb):
                raise TypeError(f"{name} must be callable, got {type(cb).__name__}")
        if children is not None:
            return cls.children(children)
        if render is not None:
            return cls.render(render)
        return cls.none()

    def __repr__(self):
        return f"PresentationMode.{self.kind}()"


class RenderDispatcher:
    def __init__(self, mode: PresentationMode):
        self.mode = mode

    def dispatch(self, context: RenderContext) -> Any:
        """Invoke the selected callback; None when no callback was supplied."""
        if self.mode.kind == PresentationMode.NONE:
            return None
        return self.mode.callback(context)
