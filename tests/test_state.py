"""
Tests for QueryState.
"""

from searchable.state import QueryState


class TestQueryState:

    def test_initial_values(self):
        state = QueryState("Jake", [1, 2])
        assert state.query == "Jake"
        assert state.items == [1, 2]

    def test_defaults(self):
        state = QueryState()
        assert state.query == ""
        assert state.items == []

    def test_set_query(self):
        state = QueryState()
        state.set_query("Ja")
        assert state.query == "Ja"

    def test_set_items_replaces_wholesale(self):
        """Stored result set is a new list, not the caller's."""
        source = [1, 2, 3]
        state = QueryState()
        state.set_items(source)
        source.append(4)
        assert state.items == [1, 2, 3]

    def test_items_view_cannot_mutate_state(self):
        state = QueryState("", [1])
        state.items.append(2)
        assert state.items == [1]

    def test_listeners_notified_after_mutation(self):
        """Listeners see the new value."""
        seen = []
        state = QueryState()
        state.subscribe(lambda s: seen.append((s.query, s.items)))

        state.set_query("a")
        state.set_items(["x"])

        assert seen == [("a", []), ("a", ["x"])]

    def test_unsubscribe(self):
        seen = []
        state = QueryState()
        unsubscribe = state.subscribe(lambda s: seen.append(s.query))

        state.set_query("a")
        unsubscribe()
        unsubscribe()
        state.set_query("b")

        assert seen == ["a"]
