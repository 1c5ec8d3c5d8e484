"""
mosaictree.drag — Moving a subtree next to another by drag and drop.

Given a source path S, a destination path D and a drop side, produce the
batch that detaches the subtree at S and re-attaches it beside the
subtree at D inside a new 50/50 split.

ALGORITHM
─────────
Detaching S collapses its parent P = S[:-1]: the sibling of S moves up
into P's place.  Every path that ran through P and then through the
sibling branch loses that one segment.  D must be rebased accordingly
before the second update is emitted.

    1. S or D unresolvable, or S == D                  →  []
    2. D strictly inside S (the dragged subtree)       →  []
    3. D a strict ancestor of S                        →  [Set(D, joint)]
         S is detached inside D's subtree first, so the joint is built
         from the already-collapsed destination.
    4. D a sibling of S (same parent P)                →  [remove S, Set(P, joint)]
         D itself moves up into P.
    5. P a strict ancestor of D                        →  [remove S, Set(D', joint)]
         D runs through the sibling branch (case 2 took the other one),
         D' = P + D[len(P)+1:].
    6. otherwise (disjoint)                            →  [remove S, Set(D, joint)]

Joint: ROW for LEFT/RIGHT, COLUMN for TOP/BOTTOM; the source is FIRST for
LEFT/TOP and SECOND for RIGHT/BOTTOM; split percentage 50.

After the batch is applied every leaf of the input tree is present
exactly once.
"""

import logging
from typing import Optional, Sequence

from .config import DEFAULT_SPLIT_PERCENTAGE
from .core import (
    Branch, Direction, DropPosition, MosaicNode, MosaicTree, NodeKind, Path, Split,
    as_path, format_path, get_node_at_path, is_path_prefix, parent_path,
)
from .updates import Set, Update, create_remove_update, update_tree

logger = logging.getLogger(__name__)


def _joint_node(source: MosaicNode, destination: MosaicNode,
                position: DropPosition) -> Split:
    position = DropPosition(position)
    if position in (DropPosition.LEFT, DropPosition.RIGHT):
        direction = Direction.ROW
    else:
        direction = Direction.COLUMN

    if position in (DropPosition.LEFT, DropPosition.TOP):
        return Split(direction, source, destination, DEFAULT_SPLIT_PERCENTAGE)
    return Split(direction, destination, source, DEFAULT_SPLIT_PERCENTAGE)


def _resolve(root: MosaicTree, path: Sequence[Branch]) -> MosaicTree:
    node = get_node_at_path(root, path)
    if node is None or node.kind is NodeKind.HIDDEN:
        return None
    return node


def rebase_destination_path(source_path: Sequence[Branch],
                            destination_path: Sequence[Branch]) -> Optional[Path]:
    """
    Where `destination_path` points once the node at `source_path` is removed.

    Returns None when the destination disappears with the source (it is
    the source or lies inside it).  Both paths are taken as non-empty
    source and resolvable destination of the same tree.
    """
    source_path = as_path(source_path)
    destination_path = as_path(destination_path)
    if is_path_prefix(source_path, destination_path):
        return None

    source_parent = parent_path(source_path)
    if is_path_prefix(source_parent, destination_path, strict=True):
        # destination runs through the sibling branch that collapses into the parent
        return source_parent + destination_path[len(source_parent) + 1:]
    return destination_path


def create_drag_to_updates(root: MosaicTree, source_path: Sequence[Branch],
                           destination_path: Sequence[Branch],
                           position: DropPosition) -> list[Update]:
    """
    Batch that moves the subtree at `source_path` to `position` of the
    subtree at `destination_path`.

    Returns [] for drops that need no structural change or cannot be
    honoured (unresolvable paths, a self-drop, a drop inside the
    dragged subtree).
    """
    source_path = as_path(source_path)
    destination_path = as_path(destination_path)

    source = _resolve(root, source_path)
    destination = _resolve(root, destination_path)
    if source is None or destination is None:
        logger.debug("Ignoring drop: %s -> %s does not resolve",
                     format_path(source_path), format_path(destination_path))
        return []

    if source_path == destination_path:
        return []

    if is_path_prefix(source_path, destination_path, strict=True):
        logger.debug("Ignoring drop: %s lies inside dragged subtree %s",
                     format_path(destination_path), format_path(source_path))
        return []

    if is_path_prefix(destination_path, source_path, strict=True):
        relative_source_path = source_path[len(destination_path):]
        updated_destination = update_tree(
            destination, [create_remove_update(destination, relative_source_path)]
        )
        return [Update(destination_path,
                       Set(_joint_node(source, updated_destination, position)))]

    rebased = rebase_destination_path(source_path, destination_path)
    return [
        create_remove_update(root, source_path),
        Update(rebased, Set(_joint_node(source, destination, position))),
    ]
