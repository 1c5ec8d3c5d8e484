"""
mosaictree.core — Mosaic Tree Data Model
=========================================

§1  THE MODEL
─────────────

A mosaic is a recursive binary split of a rectangular area into panes.
The set T of mosaic trees is the smallest set satisfying:

    (1)  None                         ∈ T   the empty layout
    (2)  Leaf(k)                      ∈ T   for any hashable pane key k
    (3)  Split(d, a, b, p)            ∈ T   for a, b ∈ T \\ {None},
                                            d ∈ {row, column}, p ∈ [0, 100]
    (4)  Hidden()                     ∈ T   transient drag placeholder

`p` is the share of the split axis given to `a` (the FIRST child).  An
absent percentage means 50.

Splits own their children exclusively.  There are no back references
and no node identities: a node is addressed only by its position.


§2  PATHS
─────────

A path is a tuple of branch selectors (FIRST / SECOND) walked from the
root.  The empty tuple is the root.  A path is only meaningful against
the snapshot it was computed from; edits that collapse a split shift
every path running through it (see mosaictree.drag).

Prefix tests are explicit element-wise loops over the selectors.


§3  PERSISTENCE
───────────────

Nodes are frozen.  Every edit rebuilds only the Splits on the path from
the root to the edit point and reuses every other subtree by reference
(structural sharing).  Consumers may rely on `is` to detect unchanged
subtrees.

Author: mosaictree contributors
License: MIT
"""

from dataclasses import dataclass, replace
from enum import Enum, IntEnum, auto
from typing import Any, Hashable, Iterable, Optional, Sequence, Union


# ═══════════════════════════════════════════════════════════════════
#  ENUMERATIONS
# ═══════════════════════════════════════════════════════════════════

class Direction(str, Enum):
    """Split axis.  ROW places children side by side, COLUMN stacks them."""
    ROW = "row"
    COLUMN = "column"


class Branch(str, Enum):
    """Child selector of a Split."""
    FIRST = "first"
    SECOND = "second"


class Corner(IntEnum):
    TOP_LEFT = 1
    TOP_RIGHT = 2
    BOTTOM_LEFT = 3
    BOTTOM_RIGHT = 4


class DropPosition(str, Enum):
    """Side of the destination pane a dragged subtree is dropped on."""
    TOP = "TOP"
    BOTTOM = "BOTTOM"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class NodeKind(Enum):
    """Variant tag of a MosaicNode."""
    LEAF = auto()
    SPLIT = auto()
    HIDDEN = auto()


DEFAULT_SPLIT_PERCENTAGE = 50


# ═══════════════════════════════════════════════════════════════════
#  ERRORS
# ═══════════════════════════════════════════════════════════════════

class MosaicError(Exception):
    """Base class for every error raised by mosaictree."""


class PathNotFoundError(MosaicError, LookupError):
    """A path that must resolve does not address a node of the tree."""

    def __init__(self, path: Sequence["Branch"], message: Optional[str] = None):
        self.path = tuple(path)
        if message is None:
            message = f"Node at path {format_path(self.path)} not found"
        super().__init__(message)


class RootRemovalError(MosaicError, ValueError):
    """Removal of the whole tree was requested; there is no sibling to promote."""


# ═══════════════════════════════════════════════════════════════════
#  NODES
# ═══════════════════════════════════════════════════════════════════

class MosaicNode:
    """Base class for mosaic nodes.  Not instantiated directly."""
    __slots__ = ()

    kind: NodeKind


@dataclass(frozen=True, slots=True)
class Leaf(MosaicNode):
    """
    A pane.  `key` is the caller's identifier for what the pane shows.

    Examples:
        Leaf("editor")
        Leaf(42)
    """
    key: Hashable

    kind = NodeKind.LEAF

    def __repr__(self) -> str:
        return f"Leaf({self.key!r})"


@dataclass(frozen=True, slots=True)
class Split(MosaicNode):
    """
    An internal node dividing its region between two children.

    Examples:
        Split(Direction.ROW, Leaf("a"), Leaf("b"))            # a | b
        Split(Direction.COLUMN, Leaf("a"), Leaf("b"), 30)     # a over b, 30/70
    """
    direction: Direction
    first: MosaicNode
    second: MosaicNode
    split_percentage: Optional[float] = None

    kind = NodeKind.SPLIT

    @property
    def percentage(self) -> float:
        """Effective split percentage (50 when unset)."""
        if self.split_percentage is None:
            return DEFAULT_SPLIT_PERCENTAGE
        return self.split_percentage

    def child(self, branch: Branch) -> MosaicNode:
        return self.first if branch == Branch.FIRST else self.second

    def with_child(self, branch: Branch, node: MosaicNode) -> "Split":
        """Copy of this split with one child swapped; the other is shared."""
        if branch == Branch.FIRST:
            return replace(self, first=node)
        return replace(self, second=node)

    def __repr__(self) -> str:
        return (f"Split({self.direction.value}, {self.first!r}, {self.second!r}, "
                f"{self.split_percentage!r})")


@dataclass(frozen=True, slots=True)
class Hidden(MosaicNode):
    """
    Placeholder left where a subtree was hidden at drag start.

    Distinct from the empty tree (None): a Hidden node still occupies a
    branch of its parent split, so sibling paths stay valid until the
    drop commits a real structural change.
    """

    kind = NodeKind.HIDDEN

    def __repr__(self) -> str:
        return "Hidden()"


MosaicTree = Optional[MosaicNode]
Path = tuple[Branch, ...]


# ═══════════════════════════════════════════════════════════════════
#  PATHS
# ═══════════════════════════════════════════════════════════════════

def as_path(path: Iterable[Union[Branch, str]]) -> Path:
    """Normalize a sequence of branches or "first"/"second" strings."""
    items = list(path)
    try:
        return tuple(Branch(b) for b in items)
    except ValueError:
        raise ValueError(f"Invalid path {items!r}: selectors must be 'first' or 'second'") from None


def format_path(path: Sequence[Branch]) -> str:
    return "/".join(Branch(b).value for b in path) or "(root)"


def parent_path(path: Sequence[Branch]) -> Path:
    return tuple(path[:-1])


def is_path_prefix(prefix: Sequence[Branch], path: Sequence[Branch],
                   strict: bool = False) -> bool:
    """True if `prefix` addresses `path` itself or one of its ancestors."""
    if len(prefix) > len(path):
        return False
    if strict and len(prefix) == len(path):
        return False
    for i in range(len(prefix)):
        if prefix[i] != path[i]:
            return False
    return True


# ═══════════════════════════════════════════════════════════════════
#  TREE PRIMITIVES
# ═══════════════════════════════════════════════════════════════════

def is_parent(node: MosaicTree) -> bool:
    """True if `node` is a Split."""
    return node is not None and node.kind is NodeKind.SPLIT


def get_other_direction(direction: Direction) -> Direction:
    return Direction.COLUMN if direction == Direction.ROW else Direction.ROW


def get_other_branch(branch: Branch) -> Branch:
    return Branch.SECOND if branch == Branch.FIRST else Branch.FIRST


def get_leaves(node: MosaicTree) -> list[Hashable]:
    """
    Keys of every pane, first subtree before second.

    Hidden placeholders show nothing and contribute no key.
    """
    if node is None:
        return []
    if node.kind is NodeKind.SPLIT:
        return get_leaves(node.first) + get_leaves(node.second)
    if node.kind is NodeKind.LEAF:
        return [node.key]
    return []


def get_node_at_path(node: MosaicTree, path: Sequence[Union[Branch, str]]) -> MosaicTree:
    """
    Walk `path` from `node`.

    Returns None when the path runs into a non-Split before it is
    exhausted.  Never raises for well-formed selectors.
    """
    current = node
    for branch in path:
        if not is_parent(current):
            return None
        current = current.child(Branch(branch))
    return current


def get_and_assert_node_at_path_exists(
    node: MosaicTree, path: Sequence[Union[Branch, str]]
) -> MosaicNode:
    """Like get_node_at_path, but raises PathNotFoundError on a miss."""
    result = get_node_at_path(node, path)
    if result is None:
        raise PathNotFoundError(as_path(path))
    return result


def _as_leaf(item: Any) -> MosaicNode:
    if isinstance(item, MosaicNode):
        return item
    return Leaf(item)


def create_balanced_tree_from_leaves(
    leaves: Sequence[Any], start_direction: Direction = Direction.ROW
) -> MosaicTree:
    """
    Build a tree of depth O(log n) holding `leaves` in order.

    Items may be pane keys or ready-made nodes.  The list is bisected at
    n // 2; each half is built with the perpendicular direction and the
    halves are joined 50/50.  One item is returned as its leaf verbatim.
    """
    if len(leaves) == 0:
        return None
    if len(leaves) == 1:
        return _as_leaf(leaves[0])

    mid = len(leaves) // 2
    child_direction = get_other_direction(start_direction)
    first = create_balanced_tree_from_leaves(leaves[:mid], child_direction)
    second = create_balanced_tree_from_leaves(leaves[mid:], child_direction)

    return Split(start_direction, first, second, DEFAULT_SPLIT_PERCENTAGE)


def get_path_to_corner(node: MosaicTree, corner: Corner) -> Path:
    """
    Path to the pane touching `corner` of the layout.

    A row split's first child is on the left, a column split's first
    child is on top; at each level pick the child on the corner's side.
    """
    is_top = corner in (Corner.TOP_LEFT, Corner.TOP_RIGHT)
    is_left = corner in (Corner.TOP_LEFT, Corner.BOTTOM_LEFT)

    path: list[Branch] = []
    current = node
    while is_parent(current):
        if current.direction == Direction.COLUMN:
            branch = Branch.FIRST if is_top else Branch.SECOND
        else:
            branch = Branch.FIRST if is_left else Branch.SECOND
        path.append(branch)
        current = current.child(branch)

    return tuple(path)


def count_nodes(node: MosaicTree) -> int:
    if node is None:
        return 0
    if is_parent(node):
        return 1 + count_nodes(node.first) + count_nodes(node.second)
    return 1


def get_tree_depth(node: MosaicTree) -> int:
    if node is None:
        return 0
    if is_parent(node):
        return 1 + max(get_tree_depth(node.first), get_tree_depth(node.second))
    return 1
