"""
mosaictree.geometry — Projection of a mosaic onto the plane.

Coordinates live in a normalized [0, 100] space on both axes; mapping
to pixels is the caller's business.

    • BoundingBox ↔ (top, right, bottom, left)
    • split()              one Split → two child regions
    • get_tile_layouts()   whole tree → region of every pane
    • get_split_layouts()  whole tree → region divided by every Split
"""

from dataclasses import dataclass
from typing import Hashable

from .config import MINIMUM_PANE_SIZE_PERCENTAGE
from .core import Branch, Direction, MosaicTree, NodeKind, Path


@dataclass(frozen=True, slots=True)
class BoundingBox:
    top: float
    right: float
    bottom: float
    left: float


def create_bounding_box(top: float, right: float, bottom: float, left: float) -> BoundingBox:
    return BoundingBox(top, right, bottom, left)


ROOT_BOUNDING_BOX = BoundingBox(0, 100, 100, 0)


def get_width(box: BoundingBox) -> float:
    return box.right - box.left


def get_height(box: BoundingBox) -> float:
    return box.bottom - box.top


def split(box: BoundingBox, percentage: float,
          direction: Direction) -> tuple[BoundingBox, BoundingBox]:
    """
    Divide `box` at `percentage` of its width (ROW) or height (COLUMN).

    The percentage is clamped to [0, 100].  The two halves share the
    dividing line and together cover `box` exactly.
    """
    percent = max(0, min(100, percentage))

    if direction == Direction.ROW:
        split_point = box.left + get_width(box) * percent / 100
        return (
            BoundingBox(box.top, split_point, box.bottom, box.left),
            BoundingBox(box.top, box.right, box.bottom, split_point),
        )

    split_point = box.top + get_height(box) * percent / 100
    return (
        BoundingBox(box.top, box.right, split_point, box.left),
        BoundingBox(split_point, box.right, box.bottom, box.left),
    )


def contains_point(box: BoundingBox, x: float, y: float) -> bool:
    """Inclusive on every edge."""
    return box.left <= x <= box.right and box.top <= y <= box.bottom


def clamp_split_percentage(percentage: float,
                           minimum: float = MINIMUM_PANE_SIZE_PERCENTAGE) -> float:
    """Keep both panes of a resized split at least `minimum` percent."""
    return max(minimum, min(100 - minimum, percentage))


# ═══════════════════════════════════════════════════════════════════
#  TREE LAYOUT
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class TileLayout:
    """Region occupied by one pane."""
    key: Hashable
    path: Path
    box: BoundingBox


@dataclass(frozen=True, slots=True)
class SplitLayout:
    """Region divided by one Split; where its resize handle sits."""
    path: Path
    direction: Direction
    percentage: float
    box: BoundingBox


def get_tile_layouts(root: MosaicTree,
                     box: BoundingBox = ROOT_BOUNDING_BOX) -> list[TileLayout]:
    """Regions of every pane, in leaf order.  Hidden subtrees are skipped."""
    tiles: list[TileLayout] = []
    _collect_tiles(root, (), box, tiles)
    return tiles


def _collect_tiles(node: MosaicTree, path: Path, box: BoundingBox,
                   tiles: list[TileLayout]) -> None:
    if node is None:
        return
    if node.kind is NodeKind.LEAF:
        tiles.append(TileLayout(node.key, path, box))
    elif node.kind is NodeKind.SPLIT:
        first_box, second_box = split(box, node.percentage, node.direction)
        _collect_tiles(node.first, path + (Branch.FIRST,), first_box, tiles)
        _collect_tiles(node.second, path + (Branch.SECOND,), second_box, tiles)


def get_split_layouts(root: MosaicTree,
                      box: BoundingBox = ROOT_BOUNDING_BOX) -> list[SplitLayout]:
    """Every Split with the region it divides, parents before children."""
    splits: list[SplitLayout] = []
    stack = [(root, (), box)]
    while stack:
        node, path, node_box = stack.pop()
        if node is None or node.kind is not NodeKind.SPLIT:
            continue
        splits.append(SplitLayout(path, node.direction, node.percentage, node_box))
        first_box, second_box = split(node_box, node.percentage, node.direction)
        # second pushed first so the first subtree is visited first
        stack.append((node.second, path + (Branch.SECOND,), second_box))
        stack.append((node.first, path + (Branch.FIRST,), first_box))
    return splits
