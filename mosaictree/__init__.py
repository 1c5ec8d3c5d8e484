"""
Mosaic Trees
============

Immutable binary split layouts of panes, and the algebra that edits them.

    Split(row, Leaf("a"), Split(column, Leaf("b"), Leaf("c")))

        ┌─────┬─────┐
        │     │  b  │
        │  a  ├─────┤
        │     │  c  │
        └─────┴─────┘

Every edit (resize, split, remove, expand, drag to a new spot) is an
Update addressed by a path of FIRST/SECOND selectors.  Applying a batch
of updates yields a brand-new tree that shares every untouched subtree
with the old one.
"""

from mosaictree.core import (
    # Types
    Branch,
    Corner,
    Direction,
    DropPosition,
    Hidden,
    Leaf,
    MosaicNode,
    MosaicTree,
    NodeKind,
    Path,
    Split,
    # Errors
    MosaicError,
    PathNotFoundError,
    RootRemovalError,
    # Primitives
    as_path,
    count_nodes,
    create_balanced_tree_from_leaves,
    get_and_assert_node_at_path_exists,
    get_leaves,
    get_node_at_path,
    get_other_branch,
    get_other_direction,
    get_path_to_corner,
    get_tree_depth,
    is_parent,
    is_path_prefix,
)
from mosaictree.updates import (
    Patch, Set, Update, UpdateSpec,
    update_tree,
    create_expand_update, create_hide_update, create_remove_update,
    create_replace_update, create_resize_update, create_split_update,
)
from mosaictree.drag import create_drag_to_updates
from mosaictree.geometry import (
    BoundingBox, SplitLayout, TileLayout, ROOT_BOUNDING_BOX,
    clamp_split_percentage, contains_point, create_bounding_box,
    get_height, get_split_layouts, get_tile_layouts, get_width, split,
)
from mosaictree.formats import from_python, to_python
from mosaictree.config import ResizeOptions
from mosaictree.mosaic import Mosaic

__version__ = "0.1.0"
__all__ = [
    "Branch", "Corner", "Direction", "DropPosition", "NodeKind",
    "MosaicNode", "MosaicTree", "Leaf", "Split", "Hidden", "Path",
    "MosaicError", "PathNotFoundError", "RootRemovalError",
    "as_path", "is_path_prefix", "is_parent", "get_leaves",
    "get_node_at_path", "get_and_assert_node_at_path_exists",
    "create_balanced_tree_from_leaves", "get_path_to_corner",
    "get_other_direction", "get_other_branch", "count_nodes", "get_tree_depth",
    "Update", "UpdateSpec", "Set", "Patch", "update_tree",
    "create_remove_update", "create_expand_update", "create_hide_update",
    "create_replace_update", "create_split_update", "create_resize_update",
    "create_drag_to_updates",
    "BoundingBox", "ROOT_BOUNDING_BOX", "create_bounding_box", "get_width",
    "get_height", "split", "contains_point", "clamp_split_percentage",
    "TileLayout", "SplitLayout", "get_tile_layouts", "get_split_layouts",
    "from_python", "to_python",
    "ResizeOptions", "Mosaic",
]
