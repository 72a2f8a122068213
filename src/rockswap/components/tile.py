"""Cell contents for the board.

A cell holds exactly one of three shapes: ``Empty``, ``Normal(color)`` or
``Special(color, kind)``. Values are immutable; the board replaces them instead
of editing in place, so a snapshot handed to the renderer never changes under it.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


class SpecialKind(Enum):
    """Special tile flavours created from long runs."""
    AREA_CLEAR = auto()
    WILDCARD = auto()


@dataclass(frozen=True, slots=True)
class Empty:
    """No content. Breaks runs and is filled by gravity/refill."""


@dataclass(frozen=True, slots=True)
class Normal:
    color: int


@dataclass(frozen=True, slots=True)
class Special:
    """Colored tile carrying a special kind.

    Wildcards keep their color for rendering only; matching ignores it.
    """
    color: int
    kind: SpecialKind


Tile = Union[Empty, Normal, Special]

EMPTY = Empty()


def is_empty(tile: Tile) -> bool:
    return isinstance(tile, Empty)


def is_wildcard(tile: Tile) -> bool:
    return isinstance(tile, Special) and tile.kind is SpecialKind.WILDCARD


def is_area_clear(tile: Tile) -> bool:
    return isinstance(tile, Special) and tile.kind is SpecialKind.AREA_CLEAR


def match_color(tile: Tile) -> Optional[int]:
    """Color used for matching, or None for empty cells and wildcards."""
    if isinstance(tile, Normal):
        return tile.color
    if isinstance(tile, Special) and tile.kind is not SpecialKind.WILDCARD:
        return tile.color
    return None


def promote(tile: Tile, kind: SpecialKind) -> Special:
    """Return the special variant of a colored tile, keeping its base color."""
    if isinstance(tile, Empty):
        raise ValueError("Cannot promote an empty cell")
    return Special(color=tile.color, kind=kind)
