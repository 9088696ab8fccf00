"""Bottom-up availability rule for tiles in a column."""

from typing import Collection, List, Optional

from .models import Tile, TileState


def tile_state(
    tile: Tile,
    column: List[Tile],
    index: int,
    selected_ids: Collection[str],
) -> TileState:
    """
    Classify a tile as SELECTED, ACTIVE or BLOCKED.

    A tile is ACTIVE when it sits at the bottom of its column or when the
    tile directly below it is selected, so letters come off bottom-up.
    """
    if tile.id in selected_ids:
        return "SELECTED"

    if index == 0:
        return "ACTIVE"

    if column[index - 1].id in selected_ids:
        return "ACTIVE"

    return "BLOCKED"


def selectable_tile(column: List[Tile], selected_ids: Collection[str]) -> Optional[Tile]:
    """The one ACTIVE tile of a column, if any."""
    for index, tile in enumerate(column):
        if tile_state(tile, column, index, selected_ids) == "ACTIVE":
            return tile
    return None


def topmost_selected(column: List[Tile], selected_ids: Collection[str]) -> Optional[Tile]:
    """The selected tile with no selected tile above it; the only one that may be deselected."""
    for tile in reversed(column):
        if tile.id in selected_ids:
            return tile
    return None
