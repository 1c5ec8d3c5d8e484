"""
Defaults & Options
==================
Central registry of the percentages used when callers do not pass their own.

Exports:
    DEFAULT_SPLIT_PERCENTAGE (int): share of the first child in a new split.
    DEFAULT_EXPAND_PERCENTAGE (int): share an expanded pane receives.
    MINIMUM_PANE_SIZE_PERCENTAGE (int): smallest share a resize may leave.
    ResizeOptions: per-mosaic resize limits.
"""
from dataclasses import dataclass

from .core import DEFAULT_SPLIT_PERCENTAGE

DEFAULT_EXPAND_PERCENTAGE: int = 70
MINIMUM_PANE_SIZE_PERCENTAGE: int = 20

__all__ = [
    "DEFAULT_SPLIT_PERCENTAGE",
    "DEFAULT_EXPAND_PERCENTAGE",
    "MINIMUM_PANE_SIZE_PERCENTAGE",
    "ResizeOptions",
]


@dataclass(frozen=True)
class ResizeOptions:
    """Limits applied while a split handle is dragged."""
    minimum_pane_size_percentage: float = MINIMUM_PANE_SIZE_PERCENTAGE

    def __post_init__(self):
        if not 0 <= self.minimum_pane_size_percentage <= 50:
            raise ValueError(
                f"minimum_pane_size_percentage must be in [0, 50], "
                f"got {self.minimum_pane_size_percentage}"
            )
