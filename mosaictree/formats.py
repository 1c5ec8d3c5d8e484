"""
mosaictree.formats — Convert between plain Python literals and mosaic nodes.

Supported conversions:
    • nested dict literals  ↔ MosaicNode

Literal shape:
    {"direction": "row" | "column",
     "first": <literal>, "second": <literal>,
     "splitPercentage": <number>}          (splitPercentage optional)
    None                                   → empty tree
    anything else                          → Leaf(key)
"""

from typing import Any

from .core import Direction, Leaf, MosaicTree, NodeKind, Split

_SPLIT_KEYS = ("direction", "first", "second")
_OPTIONAL_KEYS = ("splitPercentage",)


def from_python(obj: Any) -> MosaicTree:
    """
    Convert a literal into a mosaic tree.

        from_python({"direction": "row", "first": "a", "second": "b"})
            → Split(row, Leaf('a'), Leaf('b'), None)

    Nested structures are converted recursively.  Dicts are always read
    as splits; a dict missing a split key, or carrying any key outside
    the literal shape, raises ValueError.
    """
    if obj is None:
        return None
    if isinstance(obj, dict):
        missing = [k for k in _SPLIT_KEYS if k not in obj]
        if missing:
            raise ValueError(f"Split literal is missing {', '.join(missing)}: {obj!r}")
        unknown = [k for k in obj if k not in _SPLIT_KEYS + _OPTIONAL_KEYS]
        if unknown:
            raise ValueError(f"Split literal has unknown keys {', '.join(map(str, unknown))}: {obj!r}")
        first = from_python(obj["first"])
        second = from_python(obj["second"])
        if first is None or second is None:
            raise ValueError(f"Split children cannot be empty: {obj!r}")
        return Split(Direction(obj["direction"]), first, second, obj.get("splitPercentage"))
    return Leaf(obj)


def to_python(node: MosaicTree) -> Any:
    """
    Convert a mosaic tree back to a literal.

    Inverse of from_python:
        to_python(from_python(obj)) == obj
    Hidden placeholders have no literal form and raise TypeError.
    """
    if node is None:
        return None
    if node.kind is NodeKind.LEAF:
        return node.key
    if node.kind is NodeKind.SPLIT:
        literal = {
            "direction": node.direction.value,
            "first": to_python(node.first),
            "second": to_python(node.second),
        }
        if node.split_percentage is not None:
            literal["splitPercentage"] = node.split_percentage
        return literal
    raise TypeError(f"No literal form for {node!r}")
