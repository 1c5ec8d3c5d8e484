"""
mosaictree.mosaic — The authoritative holder of a mosaic's current tree.

Every gesture is a read-modify-write of "the current tree": read it,
build updates against it, apply them, store the result.  Two gestures
computed against the same snapshot would lose one of them, so Mosaic
runs each step under one lock.

    on_change(tree)   every new tree, including intermediate ones
                      (a divider being dragged, a pane hidden at drag start)
    on_release(tree)  completed gestures only

A drag keeps only the dragged subtree aside.  The tree itself stays the
single source of truth while the drag is active: edits made meanwhile
land in it, and drop() or show() put the subtree back wherever its
Hidden placeholder sits at that moment.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any, Hashable, Optional, Sequence

from .config import DEFAULT_EXPAND_PERCENTAGE, DEFAULT_SPLIT_PERCENTAGE, ResizeOptions
from .core import (
    Branch, Direction, DropPosition, Leaf, MosaicError, MosaicNode, MosaicTree,
    NodeKind, Path, RootRemovalError, Split,
    as_path, create_balanced_tree_from_leaves, format_path, get_leaves, get_node_at_path,
)
from .drag import create_drag_to_updates
from .geometry import clamp_split_percentage
from .updates import (
    Update, create_expand_update, create_hide_update, create_remove_update,
    create_replace_update, create_resize_update, update_tree,
)

logger = logging.getLogger(__name__)

TreeCallback = Callable[[MosaicTree], Any]


def _find_hidden(root: MosaicTree) -> Optional[Path]:
    """Path of the first Hidden placeholder in pre-order, or None."""
    stack = [(root, ())]
    while stack:
        node, path = stack.pop()
        if node is None:
            continue
        if node.kind is NodeKind.HIDDEN:
            return path
        if node.kind is NodeKind.SPLIT:
            stack.append((node.second, path + (Branch.SECOND,)))
            stack.append((node.first, path + (Branch.FIRST,)))
    return None


class Mosaic:
    """
    Holds the current tree of one mosaic and applies gestures to it.

    `create_node` supplies the pane key (or node) for split_window and
    replace_with_new.
    """

    def __init__(
        self,
        initial_value: MosaicTree = None,
        on_change: Optional[TreeCallback] = None,
        on_release: Optional[TreeCallback] = None,
        create_node: Optional[Callable[[], Any]] = None,
        resize: ResizeOptions = ResizeOptions(),
    ) -> None:
        self._lock = threading.RLock()
        self._root = initial_value
        self._dragged: Optional[MosaicNode] = None
        self._on_change = on_change
        self._on_release = on_release
        self._create_node = create_node
        self.resize_options = resize

    # ── state ──────────────────────────────────────────────────────

    def get_root(self) -> MosaicTree:
        with self._lock:
            return self._root

    @property
    def is_dragging(self) -> bool:
        with self._lock:
            return self._dragged is not None

    def _commit(self, new_root: MosaicTree, release: bool = True) -> MosaicTree:
        """Store `new_root` and notify.  Caller holds the lock."""
        if new_root is self._root:
            return new_root
        logger.info("Tree replaced (%d panes)", len(get_leaves(new_root)))
        self._root = new_root
        if self._on_change is not None:
            self._on_change(new_root)
        if release and self._on_release is not None:
            self._on_release(new_root)
        return new_root

    # ── generic ────────────────────────────────────────────────────

    def update_tree(self, updates: Sequence[Update],
                    suppress_on_release: bool = False) -> MosaicTree:
        with self._lock:
            return self._commit(update_tree(self._root, updates),
                                release=not suppress_on_release)

    # ── pane actions ───────────────────────────────────────────────

    def expand(self, path: Sequence[Branch],
               percentage: float = DEFAULT_EXPAND_PERCENTAGE) -> MosaicTree:
        with self._lock:
            if self._root is None:
                return None
            update = create_expand_update(path, percentage)
            return self._commit(update_tree(self._root, [update]))

    def remove(self, path: Sequence[Branch]) -> MosaicTree:
        """Close the pane at `path`.  Closing the last pane empties the mosaic."""
        with self._lock:
            if self._root is None:
                return None
            try:
                update = create_remove_update(self._root, path)
            except RootRemovalError:
                logger.info("Removed root node at %s; mosaic is now empty",
                            format_path(as_path(path)))
                return self._commit(None)
            return self._commit(update_tree(self._root, [update]))

    def replace_with(self, path: Sequence[Branch], node: MosaicTree) -> MosaicTree:
        """Put `node` at `path`.  On an empty mosaic only the root path applies."""
        with self._lock:
            return self._commit(update_tree(self._root, [create_replace_update(path, node)]))

    def _new_node(self) -> MosaicNode:
        if self._create_node is None:
            raise MosaicError("create_node is required to add panes")
        node = self._create_node()
        if isinstance(node, MosaicNode):
            return node
        return Leaf(node)

    def split_window(self, path: Sequence[Branch],
                     direction: Direction = Direction.ROW) -> MosaicTree:
        """Split the pane at `path`; the new pane from create_node goes second."""
        new_node = self._new_node()
        with self._lock:
            current = get_node_at_path(self._root, path)
            if current is None:
                return self._root
            joint = Split(Direction(direction), current, new_node, DEFAULT_SPLIT_PERCENTAGE)
            return self._commit(update_tree(self._root, [create_replace_update(path, joint)]))

    def replace_with_new(self, path: Sequence[Branch]) -> MosaicTree:
        return self.replace_with(path, self._new_node())

    def auto_arrange(self, start_direction: Direction = Direction.ROW) -> MosaicTree:
        """Rebuild the layout as a balanced tree of the current panes."""
        with self._lock:
            leaves = get_leaves(self._root)
            return self._commit(create_balanced_tree_from_leaves(leaves, start_direction))

    # ── resize ─────────────────────────────────────────────────────

    def resize(self, path: Sequence[Branch], percentage: float,
               release: bool = True) -> MosaicTree:
        """
        Move the divider of the split at `path`.

        While the handle is being dragged pass release=False; the final
        position is committed with release=True.
        """
        percentage = clamp_split_percentage(
            percentage, self.resize_options.minimum_pane_size_percentage
        )
        with self._lock:
            if self._root is None:
                return None
            update = create_resize_update(path, percentage)
            return self._commit(update_tree(self._root, [update]), release=release)

    # ── drag and drop ──────────────────────────────────────────────

    def _unhide(self) -> tuple[MosaicTree, Optional[Path]]:
        """
        Current tree with the dragged subtree back in its placeholder.

        Ends the drag.  Caller holds the lock.  The path is None when no
        drag was active or the placeholder was removed meanwhile.
        """
        dragged, self._dragged = self._dragged, None
        if dragged is None:
            return self._root, None
        hidden_at = _find_hidden(self._root)
        if hidden_at is None:
            logger.debug("Dragged %r no longer has a placeholder in the tree", dragged)
            return self._root, None
        return update_tree(self._root, [create_replace_update(hidden_at, dragged)]), hidden_at

    def hide(self, path: Sequence[Branch]) -> MosaicTree:
        """Hide the pane being dragged.  drop() or show() must follow."""
        with self._lock:
            if self._dragged is not None:
                self._commit(self._unhide()[0], release=False)
            node = get_node_at_path(self._root, path)
            if node is None or node.kind is NodeKind.HIDDEN:
                return self._root
            self._dragged = node
            return self._commit(update_tree(self._root, [create_hide_update(path)]),
                                release=False)

    def show(self) -> MosaicTree:
        """Cancel a drag: put the dragged subtree back where it is hidden."""
        with self._lock:
            return self._commit(self._unhide()[0])

    def drop(self, source_path: Sequence[Branch], destination_path: Sequence[Branch],
             position: DropPosition) -> MosaicTree:
        """
        Move the subtree at `source_path` beside `destination_path`.

        Paths refer to the current tree.  While a drag is active the
        source is the hidden subtree, wherever its placeholder now sits;
        a drop that needs no structural change just shows it again.
        """
        with self._lock:
            was_dragging = self._dragged is not None
            base, hidden_at = self._unhide()
            if was_dragging:
                if hidden_at is None:
                    return self._commit(base)
                if hidden_at != as_path(source_path):
                    logger.debug("Drop source %s moved to %s during the drag",
                                 format_path(as_path(source_path)), format_path(hidden_at))
                source_path = hidden_at
            if base is None:
                return None
            updates = create_drag_to_updates(base, source_path, destination_path, position)
            if not updates:
                logger.debug("Drop %s -> %s (%s) needs no change",
                             format_path(as_path(source_path)),
                             format_path(as_path(destination_path)),
                             DropPosition(position).value)
            return self._commit(update_tree(base, updates))

    def leaf_keys(self) -> list[Hashable]:
        return get_leaves(self.get_root())
