"""
mosaictree.updates — Update algebra for mosaic trees.

An Update is a (path, spec) pair.  A spec is either

    Set(node)                  replace the addressed node wholesale
    Patch(split_percentage=…,  edit the addressed Split in place;
          direction=…,         `first` / `second` are nested specs applied
          first=…, second=…)   to its own children (no path segment used)

A batch is a list of updates applied left to right to one base tree,
each update seeing the result of the previous one.

THE INTERPRETER (update_tree)
    • A root-level Set replaces the whole tree.
    • Otherwise the path is descended copy-on-write: only the Splits on
      the path are rebuilt, everything off the path is shared.
    • A path that runs into a leaf (or a Hidden placeholder) before it is
      exhausted makes the update a no-op.  Batches computed against a
      slightly stale shape degrade instead of failing halfway.
    • update_tree never raises.

THE CONSTRUCTORS (create_*_update)
    Validate against the tree at call time and raise there:
    RootRemovalError, PathNotFoundError.
"""

import logging
from dataclasses import dataclass
from typing import Hashable, Optional, Sequence, Union

from .config import DEFAULT_EXPAND_PERCENTAGE, DEFAULT_SPLIT_PERCENTAGE
from .core import (
    Branch, Direction, Hidden, Leaf, MosaicNode, MosaicTree, Path,
    PathNotFoundError, RootRemovalError, Split,
    as_path, format_path, get_and_assert_node_at_path_exists,
    get_other_branch, is_parent, parent_path,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  UPDATE REPRESENTATION
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Set:
    """Replace the addressed node.  `node` may be None only at the root."""
    node: MosaicTree


@dataclass(frozen=True, slots=True)
class Patch:
    """Partial edit of the addressed Split."""
    split_percentage: Optional[float] = None
    direction: Optional[Direction] = None
    first: Optional["UpdateSpec"] = None
    second: Optional["UpdateSpec"] = None

    def for_branch(self, branch: Branch) -> Optional["UpdateSpec"]:
        return self.first if branch == Branch.FIRST else self.second


UpdateSpec = Union[Set, Patch]


@dataclass(frozen=True)
class Update:
    """One structural edit: `spec` applied at `path`."""
    path: Path
    spec: UpdateSpec

    def __post_init__(self):
        object.__setattr__(self, "path", as_path(self.path))

    def __repr__(self) -> str:
        return f"Update({format_path(self.path)}: {self.spec!r})"


# ═══════════════════════════════════════════════════════════════════
#  INTERPRETER
# ═══════════════════════════════════════════════════════════════════

def update_tree(root: MosaicTree, updates: Sequence[Update]) -> MosaicTree:
    """
    Apply `updates` in order and return the resulting tree.

    `root` is never modified.  Subtrees untouched by the batch are the
    very same objects in the result.
    """
    current = root
    for update in updates:
        if not update.path and isinstance(update.spec, Set):
            current = update.spec.node
        elif current is None:
            logger.debug("Dropped %r: tree is empty", update)
        else:
            current = _apply_at_path(current, update.path, update.spec, update)
    return current


def _apply_at_path(node: MosaicNode, path: Path, spec: UpdateSpec,
                   update: Update) -> MosaicNode:
    if not path:
        return _apply_spec(node, spec)

    if not is_parent(node):
        logger.debug("Dropped %r: path runs through non-split %r", update, node)
        return node

    branch, rest = path[0], path[1:]
    child = node.child(branch)
    if not rest and isinstance(spec, Set):
        new_child = spec.node
    else:
        new_child = _apply_at_path(child, rest, spec, update)

    if new_child is child:
        return node
    return node.with_child(branch, new_child)


def _apply_spec(node: MosaicNode, spec: UpdateSpec) -> MosaicNode:
    """Apply `spec` to `node` itself."""
    if isinstance(spec, Set):
        return spec.node

    if not is_parent(node):
        return node

    result = node
    if spec.split_percentage is not None and spec.split_percentage != node.split_percentage:
        result = Split(result.direction, result.first, result.second, spec.split_percentage)
    if spec.direction is not None and spec.direction != node.direction:
        result = Split(Direction(spec.direction), result.first, result.second,
                       result.split_percentage)

    for branch in (Branch.FIRST, Branch.SECOND):
        child_spec = spec.for_branch(branch)
        if child_spec is None:
            continue
        child = result.child(branch)
        new_child = _apply_spec(child, child_spec)
        if new_child is not child:
            result = result.with_child(branch, new_child)

    return result


# ═══════════════════════════════════════════════════════════════════
#  CONSTRUCTORS
# ═══════════════════════════════════════════════════════════════════

def create_remove_update(root: MosaicTree, path: Sequence[Branch]) -> Update:
    """
    Remove the node at `path` by promoting its sibling into the parent's place.

    Raises RootRemovalError for the empty path (or an empty tree) and
    PathNotFoundError when the parent does not resolve to a Split.
    """
    path = as_path(path)
    if root is None or not path:
        raise RootRemovalError("Cannot remove the root node")

    parent_at = parent_path(path)
    parent = get_and_assert_node_at_path_exists(root, parent_at)
    if not is_parent(parent):
        raise PathNotFoundError(
            parent_at, f"Node at path {format_path(parent_at)} is not a split"
        )

    sibling = parent.child(get_other_branch(path[-1]))
    return Update(parent_at, Set(sibling))


def create_expand_update(path: Sequence[Branch],
                         percentage: float = DEFAULT_EXPAND_PERCENTAGE) -> Update:
    """Give the node at `path` `percentage` percent of its parent split."""
    path = as_path(path)
    if not path:
        raise PathNotFoundError(path, "Cannot expand the root node: it has no parent split")

    split_percentage = percentage if path[-1] == Branch.FIRST else 100 - percentage
    return Update(parent_path(path), Patch(split_percentage=split_percentage))


def create_hide_update(path: Sequence[Branch]) -> Update:
    """Put a Hidden placeholder at `path`.  Drag-only; a drop must follow."""
    return Update(as_path(path), Set(Hidden()))


def create_replace_update(path: Sequence[Branch], node: MosaicTree) -> Update:
    return Update(as_path(path), Set(node))


def create_split_update(path: Sequence[Branch], new_leaf: Union[MosaicNode, Hashable],
                        direction: Direction = Direction.ROW) -> Update:
    """Seed a 50/50 split at `path` with `new_leaf` on both sides."""
    if not isinstance(new_leaf, MosaicNode):
        new_leaf = Leaf(new_leaf)
    return Update(as_path(path),
                  Set(Split(Direction(direction), new_leaf, new_leaf, DEFAULT_SPLIT_PERCENTAGE)))


def create_resize_update(path: Sequence[Branch], percentage: float) -> Update:
    """Move the divider of the Split at `path`."""
    return Update(as_path(path), Patch(split_percentage=percentage))
