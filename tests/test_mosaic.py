"""
Test suite for mosaictree.mosaic — the stateful holder of the current tree.

    §1  Callbacks
    §2  Pane actions (remove, expand, replace, split, auto-arrange)
    §3  Resize
    §4  Drag: hide, drop, show
    §5  Serialized read-modify-write under threads
"""

import itertools
import logging
import os
import sys
import threading

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mosaictree.config import ResizeOptions
from mosaictree.core import (
    Direction, DropPosition, Hidden, Leaf, MosaicError, PathNotFoundError, Split,
    get_leaves, get_node_at_path,
)
from mosaictree.formats import from_python
from mosaictree.logging_config import setup_logging
from mosaictree.mosaic import Mosaic
from mosaictree.updates import Patch, Set, Update


AB = from_python({"direction": "row", "first": "a", "second": "b", "splitPercentage": 50})


class Recorder:
    """Collects the trees passed to on_change / on_release."""

    def __init__(self):
        self.changes = []
        self.releases = []

    def mosaic(self, initial_value=AB, **kwargs):
        return Mosaic(initial_value,
                      on_change=self.changes.append,
                      on_release=self.releases.append,
                      **kwargs)


# ═══════════════════════════════════════════════════════════════════
#  §1  CALLBACKS
# ═══════════════════════════════════════════════════════════════════

class TestCallbacks:

    def test_update_notifies_both(self):
        rec = Recorder()
        mosaic = rec.mosaic()
        result = mosaic.update_tree([Update((), Patch(split_percentage=30))])
        assert result.split_percentage == 30
        assert rec.changes == [result]
        assert rec.releases == [result]
        assert mosaic.get_root() is result

    def test_suppress_on_release(self):
        rec = Recorder()
        mosaic = rec.mosaic()
        mosaic.update_tree([Update((), Patch(split_percentage=30))], suppress_on_release=True)
        assert len(rec.changes) == 1
        assert rec.releases == []

    def test_unchanged_tree_does_not_notify(self):
        rec = Recorder()
        mosaic = rec.mosaic()
        mosaic.update_tree([Update(["first", "first"], Patch(split_percentage=30))])
        assert rec.changes == []
        assert mosaic.get_root() is AB

    def test_empty_mosaic_ignores_updates(self):
        rec = Recorder()
        mosaic = rec.mosaic(None)
        assert mosaic.update_tree([Update((), Patch(split_percentage=30))]) is None
        assert mosaic.expand(["first"]) is None
        assert mosaic.remove(["first"]) is None
        assert rec.changes == []

    def test_emptied_mosaic_can_be_filled_again(self):
        rec = Recorder()
        mosaic = rec.mosaic(Leaf("a"))
        mosaic.remove([])
        assert mosaic.update_tree([Update((), Set(Leaf("b")))]) == Leaf("b")
        assert rec.releases == [None, Leaf("b")]

        mosaic.remove([])
        assert mosaic.replace_with([], AB) is AB
        assert mosaic.leaf_keys() == ["a", "b"]

    def test_replace_with_new_on_empty_mosaic(self):
        mosaic = Mosaic(None, create_node=lambda: "first-pane")
        assert mosaic.replace_with_new([]) == Leaf("first-pane")

    def test_nested_replace_on_empty_mosaic_is_noop(self):
        rec = Recorder()
        mosaic = rec.mosaic(None)
        assert mosaic.replace_with(["first"], Leaf("b")) is None
        assert rec.changes == []


# ═══════════════════════════════════════════════════════════════════
#  §2  PANE ACTIONS
# ═══════════════════════════════════════════════════════════════════

class TestPaneActions:

    def test_remove(self):
        mosaic = Mosaic(AB)
        assert mosaic.remove(["first"]) == Leaf("b")
        assert mosaic.leaf_keys() == ["b"]

    def test_remove_last_pane_empties_mosaic(self):
        rec = Recorder()
        mosaic = rec.mosaic(Leaf("a"))
        assert mosaic.remove([]) is None
        assert mosaic.get_root() is None
        assert rec.releases == [None]

    def test_remove_bad_path_propagates(self):
        with pytest.raises(PathNotFoundError):
            Mosaic(AB).remove(["first", "second"])

    def test_expand(self):
        mosaic = Mosaic(AB)
        assert mosaic.expand(["second"]).split_percentage == 30
        assert mosaic.expand(["first"], 60).split_percentage == 60

    def test_replace_with(self):
        mosaic = Mosaic(AB)
        assert mosaic.replace_with(["second"], Leaf("z")) == Split(Direction.ROW, Leaf("a"), Leaf("z"), 50)

    def test_split_window(self):
        counter = itertools.count(1)
        mosaic = Mosaic(AB, create_node=lambda: f"new-{next(counter)}")
        result = mosaic.split_window(["second"], Direction.COLUMN)
        assert result.second == Split(Direction.COLUMN, Leaf("b"), Leaf("new-1"), 50)
        assert result.first is AB.first

    def test_split_window_missing_path(self):
        mosaic = Mosaic(AB, create_node=lambda: "x")
        assert mosaic.split_window(["first", "first"]) is AB

    def test_split_window_requires_create_node(self):
        with pytest.raises(MosaicError):
            Mosaic(AB).split_window(["first"])

    def test_replace_with_new(self):
        mosaic = Mosaic(AB, create_node=lambda: Leaf("fresh"))
        assert mosaic.replace_with_new(["first"]).first == Leaf("fresh")

    def test_auto_arrange(self):
        chain = from_python({
            "direction": "row",
            "first": "a",
            "second": {
                "direction": "row",
                "first": "b",
                "second": {"direction": "row", "first": "c", "second": "d"},
            },
        })
        mosaic = Mosaic(chain)
        result = mosaic.auto_arrange()
        assert get_leaves(result) == ["a", "b", "c", "d"]
        assert result.first == Split(Direction.COLUMN, Leaf("a"), Leaf("b"), 50)


# ═══════════════════════════════════════════════════════════════════
#  §3  RESIZE
# ═══════════════════════════════════════════════════════════════════

class TestResize:

    def test_drag_then_release(self):
        rec = Recorder()
        mosaic = rec.mosaic()
        mosaic.resize([], 40, release=False)
        mosaic.resize([], 35, release=False)
        mosaic.resize([], 35)
        assert [t.split_percentage for t in rec.changes] == [40, 35]
        assert rec.releases == []  # final release changed nothing

        mosaic.resize([], 45)
        assert rec.releases[-1].split_percentage == 45

    def test_clamped_to_minimum(self):
        mosaic = Mosaic(AB)
        assert mosaic.resize([], 5).split_percentage == 20
        assert mosaic.resize([], 99).split_percentage == 80

    def test_custom_minimum(self):
        mosaic = Mosaic(AB, resize=ResizeOptions(minimum_pane_size_percentage=5))
        assert mosaic.resize([], 3).split_percentage == 5

    def test_invalid_resize_options(self):
        with pytest.raises(ValueError):
            ResizeOptions(minimum_pane_size_percentage=60)


# ═══════════════════════════════════════════════════════════════════
#  §4  DRAG
# ═══════════════════════════════════════════════════════════════════

class TestDrag:

    def test_hide_then_drop(self):
        rec = Recorder()
        mosaic = rec.mosaic()
        hidden = mosaic.hide(["first"])
        assert get_node_at_path(hidden, ["first"]) == Hidden()
        assert mosaic.is_dragging
        assert rec.releases == []

        result = mosaic.drop(["first"], ["second"], DropPosition.RIGHT)
        assert result == Split(Direction.ROW, Leaf("b"), Leaf("a"), 50)
        assert not mosaic.is_dragging
        assert rec.releases == [result]

    def test_show_puts_pane_back(self):
        mosaic = Mosaic(AB)
        mosaic.hide(["first"])
        assert mosaic.show() == AB
        assert not mosaic.is_dragging

    def test_self_drop_puts_pane_back(self):
        mosaic = Mosaic(AB)
        mosaic.hide(["first"])
        assert mosaic.drop(["first"], ["first"], DropPosition.LEFT) == AB
        assert not mosaic.is_dragging

    def test_drop_without_hide(self):
        mosaic = Mosaic(AB)
        result = mosaic.drop(["second"], ["first"], DropPosition.TOP)
        assert result == Split(Direction.COLUMN, Leaf("b"), Leaf("a"), 50)

    def test_show_without_drag(self):
        mosaic = Mosaic(AB)
        assert mosaic.show() is AB

    def test_hide_missing_path_starts_no_drag(self):
        mosaic = Mosaic(AB)
        assert mosaic.hide(["first", "first"]) is AB
        assert not mosaic.is_dragging

    def test_second_hide_puts_first_pane_back(self):
        mosaic = Mosaic(AB)
        mosaic.hide(["first"])
        hidden = mosaic.hide(["second"])
        assert hidden == Split(Direction.ROW, Leaf("a"), Hidden(), 50)
        assert mosaic.show() == AB


class TestEditsDuringDrag:

    ABC = from_python({
        "direction": "row",
        "first": "a",
        "second": {"direction": "column", "first": "b", "second": "c", "splitPercentage": 50},
        "splitPercentage": 50,
    })

    def test_resize_during_drag_survives_drop(self):
        mosaic = Mosaic(self.ABC)
        mosaic.hide(["first"])
        mosaic.resize(["second"], 30)
        result = mosaic.drop(["first"], ["second", "first"], DropPosition.LEFT)
        assert result == from_python({
            "direction": "column",
            "first": {"direction": "row", "first": "a", "second": "b", "splitPercentage": 50},
            "second": "c",
            "splitPercentage": 30,
        })

    def test_remove_during_drag_survives_show(self):
        mosaic = Mosaic(self.ABC)
        mosaic.hide(["first"])
        mosaic.remove(["second", "second"])
        assert mosaic.show() == from_python({
            "direction": "row", "first": "a", "second": "b", "splitPercentage": 50,
        })
        assert mosaic.leaf_keys() == ["a", "b"]

    def test_update_during_drag_survives_show(self):
        mosaic = Mosaic(self.ABC)
        mosaic.hide(["second", "first"])
        mosaic.update_tree([Update((), Patch(direction=Direction.COLUMN))])
        result = mosaic.show()
        assert result.direction is Direction.COLUMN
        assert get_leaves(result) == ["a", "b", "c"]

    def test_drop_follows_placeholder_that_moved(self):
        root = from_python({
            "direction": "row",
            "first": {"direction": "column", "first": "a", "second": "b", "splitPercentage": 50},
            "second": "c",
            "splitPercentage": 50,
        })
        mosaic = Mosaic(root)
        mosaic.hide(["first", "first"])
        mosaic.remove(["first", "second"])  # placeholder collapses up to ["first"]
        result = mosaic.drop(["first", "first"], ["second"], DropPosition.BOTTOM)
        assert result == Split(Direction.COLUMN, Leaf("c"), Leaf("a"), 50)

    def test_removed_placeholder_ends_drag(self):
        mosaic = Mosaic(AB)
        mosaic.hide(["first"])
        assert mosaic.remove(["first"]) == Leaf("b")
        assert mosaic.drop(["first"], [], DropPosition.LEFT) == Leaf("b")
        assert not mosaic.is_dragging
        assert mosaic.show() == Leaf("b")


# ═══════════════════════════════════════════════════════════════════
#  §5  THREADS
# ═══════════════════════════════════════════════════════════════════

class TestConcurrency:

    def test_concurrent_splits_are_not_lost(self):
        counter = itertools.count()
        mosaic = Mosaic(Leaf("root"), create_node=lambda: f"pane-{next(counter)}")
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            for _ in range(25):
                mosaic.split_window([])

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        keys = mosaic.leaf_keys()
        assert len(keys) == 1 + 8 * 25
        assert len(set(keys)) == len(keys)


class TestLogging:

    def test_setup_logging_is_idempotent(self):
        logger = setup_logging(logging.DEBUG)
        try:
            setup_logging(logging.DEBUG)
            assert logger.name == "mosaictree"
            assert len(logger.handlers) == 1
            assert logger.level == logging.DEBUG
        finally:
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)
