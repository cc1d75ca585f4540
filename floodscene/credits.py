"""Attribution aggregation for streamed 3D tiles.

Every traversal of the tileset selects a new set of visible tiles.  The
displayed credit line is rebuilt from that selection alone, so credits for
tiles that scrolled out of view are dropped.
"""

import logging
from typing import Iterable, List, Mapping, Union

from .models import Tile

logger = logging.getLogger(__name__)

CREDIT_SEPARATOR = ";"
CREDIT_JOINER = "; "

TileLike = Union[Tile, Mapping]


def _as_tile(tile: TileLike) -> Tile:
    if isinstance(tile, Tile):
        return tile
    return Tile.from_dict(dict(tile))


def credit_tokens(tiles: Iterable[TileLike]) -> List[str]:
    """Unique credit tokens across *tiles*, in order of first appearance.

    Tokens are compared verbatim (case and surrounding whitespace count).
    Tiles without an attribution and empty tokens contribute nothing.
    """
    unique = {}
    for tile in tiles:
        attribution = _as_tile(tile).copyright
        if not attribution:
            continue
        for token in attribution.split(CREDIT_SEPARATOR):
            if token:
                unique.setdefault(token, None)
    return list(unique)


def aggregate_credits(tiles: Iterable[TileLike]) -> str:
    """Join the unique credits of one traversal into the display string."""
    return CREDIT_JOINER.join(credit_tokens(tiles))


class CreditAggregator:
    """Holds the credit line for the most recent traversal.

    :meth:`on_traversal_complete` is the only way the credit line changes.
    The result depends on the given tiles alone, never on earlier calls.
    """

    def __init__(self) -> None:
        self._credits = ""
        self._traversals = 0

    @property
    def credits(self) -> str:
        return self._credits

    @property
    def traversals(self) -> int:
        return self._traversals

    def on_traversal_complete(self, selected_tiles: Iterable[TileLike]) -> str:
        tiles = list(selected_tiles)
        credits = aggregate_credits(tiles)
        self._traversals += 1
        if credits != self._credits:
            logger.debug(f"Credits updated from {len(tiles)} tiles: {credits!r}")
        self._credits = credits
        return credits

    def clear(self) -> None:
        self._credits = ""
