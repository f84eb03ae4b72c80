"""
Contract tests for the selection policy

Covers:
- Mode parsing and mode properties
- Empty and single-item collections in every mode
- Per-mode behavior (random, weighted, smart, shuffle, sequential, primary)
- Queue handling across mode switches
"""

import pytest

from soundpool.errors import EmptyCollectionError, SelectionError
from soundpool.selection.selection_policy import SelectionMode, SelectionState, draw_item
from soundpool.selection.weighted_list import WeightedList
from soundpool.tests.contracts.test_doubles import (
    FakeClip,
    ScriptedRandomSource,
    StuckRandomSource,
    make_clips,
)


def draws(mode, collection, state, rng, count):
    return [draw_item(mode, collection, state, rng) for _ in range(count)]


class TestSelectionMode:
    """Tests for SelectionMode parsing."""

    @pytest.mark.parametrize("name, expected", [
        ("smart", SelectionMode.SMART),
        ("SMART_WEIGHTED", SelectionMode.SMART_WEIGHTED),
        ("smart-weighted", SelectionMode.SMART_WEIGHTED),
        ("SmartWeighted", SelectionMode.SMART_WEIGHTED),
        ("Random Weighted", SelectionMode.RANDOM_WEIGHTED),
        ("primaryonly", SelectionMode.PRIMARY_ONLY),
        (SelectionMode.SHUFFLE, SelectionMode.SHUFFLE),
    ])
    def test_parse(self, name, expected):
        assert SelectionMode.parse(name) is expected

    def test_parse_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown selection mode"):
            SelectionMode.parse("loudest")

    def test_mode_properties(self):
        assert {m for m in SelectionMode if m.uses_queue} == {SelectionMode.SHUFFLE, SelectionMode.SEQUENTIAL}
        assert {m for m in SelectionMode if m.avoids_repeats} == {
            SelectionMode.SMART, SelectionMode.SMART_WEIGHTED, SelectionMode.SHUFFLE,
        }


class TestEmptyAndSingle:
    """Tests for collections of size 0 and 1."""

    @pytest.mark.parametrize("mode", list(SelectionMode))
    def test_empty_collection_fails_without_state_change(self, mode, rng):
        collection = WeightedList()
        state = SelectionState.for_collection(collection)
        state.last_drawn = "previous"

        with pytest.raises(EmptyCollectionError):
            draw_item(mode, collection, state, rng)

        assert state.last_drawn == "previous"

    @pytest.mark.parametrize("mode", list(SelectionMode))
    def test_single_item_every_mode(self, mode, rng):
        """Every mode returns the only item on every call, including repeat-avoiding ones."""
        only = FakeClip("only")
        collection = WeightedList([(only, 1.0)])
        state = SelectionState.for_collection(collection)

        for _ in range(10):
            assert draw_item(mode, collection, state, rng) is only
        assert state.last_drawn is only


class TestMembership:
    """Every draw returns a member of the collection."""

    @pytest.mark.parametrize("mode", list(SelectionMode))
    def test_draw_returns_member(self, mode, rng):
        items = make_clips("A", "B", "C", "D", "E")
        collection = WeightedList((item, float(i + 1)) for i, item in enumerate(items))
        state = SelectionState.for_collection(collection)

        for item in draws(mode, collection, state, rng, 50):
            assert item in collection
            assert state.last_drawn is item


class TestRandomModes:
    """Tests for RANDOM and RANDOM_WEIGHTED."""

    def test_random_may_repeat(self, weighted_list, selection_state, clips):
        source = ScriptedRandomSource(indices=[0, 0])
        result = draws(SelectionMode.RANDOM, weighted_list, selection_state, source, 2)
        assert result == [clips[0], clips[0]]

    def test_random_weighted_may_repeat(self, weighted_list, selection_state, clips):
        source = ScriptedRandomSource(weighted=[1, 1])
        result = draws(SelectionMode.RANDOM_WEIGHTED, weighted_list, selection_state, source, 2)
        assert result == [clips[1], clips[1]]

    def test_random_weighted_follows_weights(self, rng):
        light, heavy = make_clips("light", "heavy")
        collection = WeightedList([(light, 0.0), (heavy, 1.0)])
        state = SelectionState.for_collection(collection)

        assert all(item is heavy for item in draws(SelectionMode.RANDOM_WEIGHTED, collection, state, rng, 50))


class TestSmartModes:
    """Tests for SMART and SMART_WEIGHTED repeat-avoidance."""

    def test_smart_redraws_scripted_repeat(self, weighted_list, selection_state, clips):
        """A sequence that would repeat A is stepped around."""
        source = ScriptedRandomSource(indices=[0, 0, 0, 1])
        result = draws(SelectionMode.SMART, weighted_list, selection_state, source, 2)

        assert result == [clips[0], clips[1]]
        assert source.index_calls == 4

    def test_smart_weighted_redraws_scripted_repeat(self, weighted_list, selection_state, clips):
        source = ScriptedRandomSource(weighted=[2, 2, 0])
        result = draws(SelectionMode.SMART_WEIGHTED, weighted_list, selection_state, source, 2)

        assert result == [clips[2], clips[0]]

    @pytest.mark.parametrize("mode", [SelectionMode.SMART, SelectionMode.SMART_WEIGHTED])
    def test_never_repeats_consecutively(self, mode, rng):
        items = make_clips("A", "B")
        collection = WeightedList([(items[0], 1.0), (items[1], 10.0)])
        state = SelectionState.for_collection(collection)

        result = draws(mode, collection, state, rng, 200)
        for previous, current in zip(result, result[1:]):
            assert previous is not current

    def test_smart_weighted_dominant_last_item(self, rng):
        """If only the last-drawn item has weight, the draw moves to the others."""
        heavy, quiet_1, quiet_2 = make_clips("heavy", "quiet_1", "quiet_2")
        collection = WeightedList([(heavy, 5.0), (quiet_1, 0.0), (quiet_2, 0.0)])
        state = SelectionState.for_collection(collection)

        result = draws(SelectionMode.SMART_WEIGHTED, collection, state, rng, 40)

        for previous, current in zip(result, result[1:]):
            assert previous is not current
        # heavy wins every weighted draw it is eligible for
        assert all(item is heavy for item in result[0::2])
        assert all(item is not heavy for item in result[1::2])

    def test_redraw_cap_raises(self, weighted_list, selection_state, clips):
        """A source that can only produce the last-drawn item fails instead of spinning."""
        selection_state.last_drawn = clips[0]
        with pytest.raises(SelectionError):
            draw_item(SelectionMode.SMART, weighted_list, selection_state, StuckRandomSource(seed=1))
        assert selection_state.last_drawn is clips[0]


class TestShuffleMode:
    """Tests for SHUFFLE."""

    def test_cycles_are_permutations_without_boundary_repeat(self, rng):
        items = make_clips("A", "B", "C", "D", "E")
        collection = WeightedList((item, 1.0) for item in items)
        state = SelectionState.for_collection(collection)
        size = len(items)

        result = draws(SelectionMode.SHUFFLE, collection, state, rng, size * 30)
        cycles = [result[i:i + size] for i in range(0, len(result), size)]

        for cycle in cycles:
            assert {id(item) for item in cycle} == {id(item) for item in items}
        for previous, following in zip(cycles, cycles[1:]):
            assert previous[-1] is not following[0]

    def test_two_items_alternate(self, rng):
        items = make_clips("A", "B")
        collection = WeightedList((item, 1.0) for item in items)
        state = SelectionState.for_collection(collection)

        result = draws(SelectionMode.SHUFFLE, collection, state, rng, 40)
        for previous, current in zip(result, result[1:]):
            assert previous is not current

    def test_queue_populated_lazily(self, weighted_list, selection_state, rng):
        assert selection_state.queue.empty()
        draw_item(SelectionMode.SHUFFLE, weighted_list, selection_state, rng)
        assert selection_state.queue.size() == 2
        assert selection_state.queue_mode is SelectionMode.SHUFFLE

    def test_ignores_weights(self, rng):
        items = make_clips("A", "B", "C")
        collection = WeightedList([(items[0], 0.0), (items[1], 0.0), (items[2], 9.0)])
        state = SelectionState.for_collection(collection)

        cycle = draws(SelectionMode.SHUFFLE, collection, state, rng, 3)
        assert {id(item) for item in cycle} == {id(item) for item in items}


class TestSequentialMode:
    """Tests for SEQUENTIAL."""

    def test_follows_insertion_order_and_wraps(self, weighted_list, selection_state, clips, rng):
        result = draws(SelectionMode.SEQUENTIAL, weighted_list, selection_state, rng, 7)
        assert result == [clips[0], clips[1], clips[2], clips[0], clips[1], clips[2], clips[0]]

    def test_ignores_weights(self, clips, rng):
        collection = WeightedList([(clips[0], 0.0), (clips[1], 5.0), (clips[2], 0.0)])
        state = SelectionState.for_collection(collection)
        assert draws(SelectionMode.SEQUENTIAL, collection, state, rng, 3) == clips


class TestPrimaryOnlyMode:
    """Tests for PRIMARY_ONLY."""

    def test_always_first_item(self, weighted_list, selection_state, clips, rng):
        result = draws(SelectionMode.PRIMARY_ONLY, weighted_list, selection_state, rng, 10)
        assert all(item is clips[0] for item in result)


class TestModeSwitching:
    """Tests for queue handling when the mode changes between draws."""

    def test_switch_sequential_to_shuffle_repopulates(self, weighted_list, selection_state, clips, rng):
        head = draws(SelectionMode.SEQUENTIAL, weighted_list, selection_state, rng, 2)
        assert head == [clips[0], clips[1]]

        cycle = draws(SelectionMode.SHUFFLE, weighted_list, selection_state, rng, 3)
        assert {id(item) for item in cycle} == {id(clip) for clip in clips}
        assert cycle[0] is not clips[1], "shuffle must not repeat the last sequential item"

    def test_switch_shuffle_to_sequential_starts_from_first(self, weighted_list, selection_state, clips, rng):
        draws(SelectionMode.SHUFFLE, weighted_list, selection_state, rng, 1)
        result = draws(SelectionMode.SEQUENTIAL, weighted_list, selection_state, rng, 3)
        assert result == clips

    def test_non_queue_mode_invalidates_queue(self, weighted_list, selection_state, clips, rng):
        """Returning to SEQUENTIAL after another mode starts a fresh pass."""
        draws(SelectionMode.SEQUENTIAL, weighted_list, selection_state, rng, 2)
        draw_item(SelectionMode.RANDOM, weighted_list, selection_state, rng)

        assert selection_state.queue.empty()
        assert selection_state.queue_mode is None
        assert draws(SelectionMode.SEQUENTIAL, weighted_list, selection_state, rng, 3) == clips

    def test_state_reset(self, weighted_list, selection_state, rng):
        draws(SelectionMode.SHUFFLE, weighted_list, selection_state, rng, 1)
        selection_state.reset()

        assert selection_state.last_drawn is None
        assert selection_state.queue.empty()
        assert selection_state.queue_mode is None

    def test_swapped_collection_rebinds_queue(self, selection_state, rng):
        """A state used with a different collection refills from that collection."""
        replacement = make_clips("X", "Y")
        collection = WeightedList((item, 1.0) for item in replacement)

        result = draws(SelectionMode.SEQUENTIAL, collection, selection_state, rng, 2)
        assert result == replacement
        assert selection_state.queue.collection is collection
