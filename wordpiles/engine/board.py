from typing import Collection, Dict, List, Optional, Tuple
from pydantic import BaseModel, Field

from .availability import tile_state
from .models import Tile, TileState


class Board(BaseModel):
    """
    The column stacks of a level.

    Columns are lists of tiles with index 0 at the bottom. Tiles are only
    ever appended during generation and removed by id once their word is
    matched, so survivors keep their relative order.

    Attributes:
        columns: One tile list per column
        row_count: Configured visual height (may be exceeded on overflow)
    """

    columns: List[List[Tile]] = Field(default_factory=list)
    row_count: int = Field(default=0, ge=0)

    @classmethod
    def empty(cls, column_count: int, row_count: int) -> "Board":
        """Create a board with empty columns."""
        return cls(columns=[[] for _ in range(column_count)], row_count=row_count)

    @property
    def column_count(self) -> int:
        """Number of columns."""
        return len(self.columns)

    @property
    def tile_count(self) -> int:
        """Number of tiles still on the board."""
        return sum(len(column) for column in self.columns)

    def tiles(self) -> List[Tile]:
        """All tiles, column by column, bottom-up."""
        return [tile for column in self.columns for tile in column]

    def locate(self, tile_id: str) -> Optional[Tuple[int, int]]:
        """
        Find a tile's position.

        Returns:
            (column index, index within column), or None if the tile is gone
        """
        for column_index, column in enumerate(self.columns):
            for index, tile in enumerate(column):
                if tile.id == tile_id:
                    return column_index, index
        return None

    def get_tile(self, tile_id: str) -> Optional[Tile]:
        """Look up a live tile by id."""
        position = self.locate(tile_id)
        if position is None:
            return None
        column_index, index = position
        return self.columns[column_index][index]

    def state_of(self, tile_id: str, selected_ids: Collection[str]) -> Optional[TileState]:
        """Availability of a live tile, or None if it is not on the board."""
        position = self.locate(tile_id)
        if position is None:
            return None
        column_index, index = position
        column = self.columns[column_index]
        return tile_state(column[index], column, index, selected_ids)

    def states(self, selected_ids: Collection[str]) -> Dict[str, TileState]:
        """Availability of every tile, keyed by tile id."""
        return {
            tile.id: tile_state(tile, column, index, selected_ids)
            for column in self.columns
            for index, tile in enumerate(column)
        }

    def remove_tiles(self, tile_ids: Collection[str]) -> int:
        """
        Remove tiles by identity; tiles above them drop down.

        Returns:
            Number of tiles removed
        """
        ids = set(tile_ids)
        removed = 0
        for i, column in enumerate(self.columns):
            kept = [tile for tile in column if tile.id not in ids]
            removed += len(column) - len(kept)
            self.columns[i] = kept
        return removed

    def render(self) -> str:
        """Plain-text picture of the stacks, top row first."""
        if not self.columns:
            return ""

        height = max(len(column) for column in self.columns)
        lines = [
            ''.join(column[row].char if row < len(column) else '.' for column in self.columns)
            for row in range(height - 1, -1, -1)
        ]
        return '\n'.join(lines)

    def get_state(self) -> Dict:
        """
        Get the board as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "column_count": self.column_count,
            "row_count": self.row_count,
            "tile_count": self.tile_count,
            "columns": [[tile.char for tile in column] for column in self.columns],
        }
