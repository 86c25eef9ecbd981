"""
Tests for presentation dispatch.
"""

import pytest
from searchable.render import (
    PresentationConflictError,
    PresentationMode,
    RenderContext,
    RenderDispatcher,
)


def _context():
    return RenderContext(items=[1], query="q", on_change=lambda value: None)


class TestPresentationMode:
    """Test callback slot selection."""

    def test_children(self):
        cb = lambda ctx: "children"
        mode = PresentationMode.from_callbacks(children=cb)
        assert mode.kind == PresentationMode.CHILDREN
        assert mode.callback is cb

    def test_render(self):
        cb = lambda ctx: "render"
        mode = PresentationMode.from_callbacks(render=cb)
        assert mode.kind == PresentationMode.RENDER
        assert mode.callback is cb

    def test_neither(self):
        assert PresentationMode.from_callbacks().kind == PresentationMode.NONE

    def test_both_rejected(self):
        """Supplying both slots is a usage error."""
        with pytest.raises(PresentationConflictError):
            PresentationMode.from_callbacks(children=lambda c: 1, render=lambda c: 2)

    def test_conflict_is_value_error(self):
        assert issubclass(PresentationConflictError, ValueError)

    def test_non_callable_rejected(self):
        with pytest.raises(TypeError, match="render"):
            PresentationMode.from_callbacks(render="<p>")


class TestRenderDispatcher:

    def test_invokes_selected_callback(self):
        received = []
        dispatcher = RenderDispatcher(PresentationMode.render(lambda ctx: received.append(ctx) or "out"))
        ctx = _context()

        assert dispatcher.dispatch(ctx) == "out"
        assert received == [ctx]

    def test_none_mode_outputs_nothing(self):
        assert RenderDispatcher(PresentationMode.none()).dispatch(_context()) is None


class TestRenderContext:

    def test_attribute_and_key_access(self):
        ctx = _context()
        assert ctx.items == [1]
        assert ctx["query"] == "q"
        assert callable(ctx["on_change"])
        assert dict(ctx)["items"] == [1]

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            _context()["value"]

    def test_frozen(self):
        ctx = _context()
        with pytest.raises(AttributeError):
            ctx.query = "other"
