"""
Benchmark: mosaictree update and drag costs on large layouts.

Measures:
    1. Balanced builder — tree construction over n panes
    2. update_tree — path-copying vs a full deep copy per edit
    3. Drag relocation — create_drag_to_updates + update_tree
    4. Layout projection — tile and split regions for a whole tree

The point is NOT raw speed — the point is:
    an edit costs O(depth), independent of the number of panes.
"""

import copy
import os
import random
import sys
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from mosaictree.core import (
    Branch, DropPosition, Leaf, Split,
    count_nodes, create_balanced_tree_from_leaves, get_leaves, get_tree_depth,
)
from mosaictree.drag import create_drag_to_updates
from mosaictree.geometry import get_split_layouts, get_tile_layouts
from mosaictree.updates import Patch, Set, Update, update_tree


SIZES = [16, 256, 4096, 65536]
REPEAT = 200


def _leaf_paths(node, path=()):
    if isinstance(node, Split):
        yield from _leaf_paths(node.first, path + (Branch.FIRST,))
        yield from _leaf_paths(node.second, path + (Branch.SECOND,))
    else:
        yield path


def _timed(fn, repeat=1):
    t0 = time.perf_counter()
    for _ in range(repeat):
        result = fn()
    return result, (time.perf_counter() - t0) / repeat


# ═══════════════════════════════════════════════════════════════════
#  BENCHMARKS
# ═══════════════════════════════════════════════════════════════════

def benchmark_builder():
    """Balanced tree construction."""
    print("=" * 70)
    print("  §1  BALANCED BUILDER")
    print("=" * 70)
    print()

    for n in SIZES:
        keys = [f"pane-{i}" for i in range(n)]
        tree, dt = _timed(lambda: create_balanced_tree_from_leaves(keys))
        print(f"  n={n:>6}: nodes={count_nodes(tree):>7}  depth={get_tree_depth(tree):>3}  "
              f"time={dt*1000:>9.2f}ms")

    print()


def benchmark_update_tree():
    """Path-copying edit vs copying the whole tree first."""
    print("=" * 70)
    print("  §2  update_tree (path copying vs deep copy)")
    print("=" * 70)
    print()

    random.seed(0)
    for n in SIZES:
        root = create_balanced_tree_from_leaves([f"pane-{i}" for i in range(n)])
        paths = list(_leaf_paths(root))
        batch = [
            Update(random.choice(paths), Set(Leaf("replacement"))),
            Update(random.choice(paths)[:-1], Patch(split_percentage=30)),
        ]

        result, dt = _timed(lambda: update_tree(root, batch), REPEAT)
        shared = result.second is root.second or result.first is root.first

        deep_repeat = max(1, REPEAT // n)
        _, dt_deep = _timed(lambda: update_tree(copy.deepcopy(root), batch), deep_repeat)

        print(f"  n={n:>6}: update={dt*1e6:>9.1f}µs  "
              f"deepcopy+update={dt_deep*1e6:>12.1f}µs  "
              f"shared={'✓' if shared else '✗'}")

    print()


def benchmark_drag():
    """Random relocations on large trees."""
    print("=" * 70)
    print("  §3  DRAG RELOCATION")
    print("=" * 70)
    print()

    random.seed(1)
    for n in SIZES:
        root = create_balanced_tree_from_leaves([f"pane-{i}" for i in range(n)])
        paths = list(_leaf_paths(root))
        pairs = [(random.choice(paths), random.choice(paths), random.choice(list(DropPosition)))
                 for _ in range(REPEAT)]

        t0 = time.perf_counter()
        lost = 0
        for source, destination, position in pairs:
            result = update_tree(root, create_drag_to_updates(root, source, destination, position))
            if n <= 256 and len(get_leaves(result)) != n:
                lost += 1
        dt = (time.perf_counter() - t0) / len(pairs)

        check = f"lost={lost}" if n <= 256 else "lost=(unchecked)"
        print(f"  n={n:>6}: drag={dt*1e6:>9.1f}µs  {check}")

    print()


def benchmark_layout():
    """Projecting a tree onto the unit square."""
    print("=" * 70)
    print("  §4  LAYOUT PROJECTION")
    print("=" * 70)
    print()

    for n in SIZES:
        root = create_balanced_tree_from_leaves([f"pane-{i}" for i in range(n)])
        tiles, dt_tiles = _timed(lambda: get_tile_layouts(root))
        splits, dt_splits = _timed(lambda: get_split_layouts(root))
        print(f"  n={n:>6}: tiles={len(tiles):>6} in {dt_tiles*1000:>8.2f}ms  "
              f"splits={len(splits):>6} in {dt_splits*1000:>8.2f}ms")

    print()


def main():
    print()
    print("╔══════════════════════════════════════════════════════════════════════╗")
    print("║          MOSAIC LAYOUT TREE — BENCHMARK SUITE                        ║")
    print("║          mosaictree v0.1.0                                           ║")
    print("╚══════════════════════════════════════════════════════════════════════╝")
    print()

    benchmark_builder()
    benchmark_update_tree()
    benchmark_drag()
    benchmark_layout()

    print("=" * 70)
    print("  SUMMARY")
    print("=" * 70)
    print()
    print("  Edits rebuild only the nodes along the edited path:")
    print("    1. update_tree cost tracks tree depth, not pane count")
    print("    2. Every subtree off the edit path is reused by identity")
    print("    3. A drag is at most two updates, each O(depth)")
    print()


if __name__ == "__main__":
    main()
