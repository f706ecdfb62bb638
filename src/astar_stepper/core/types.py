# src/astar_stepper/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterator, Optional, Sequence, Tuple

Cell = Tuple[int, int]  # (x, y)


class ConfigError(ValueError):
    """Invalid grid dimensions, endpoints or probabilities."""


class Tile(IntEnum):
    BLANK = 0
    OBSTACLE = 1


@dataclass(frozen=True)
class Grid:
    width: int
    height: int
    cells: Tuple[Tuple[Tile, ...], ...]   # [row][col]

    @classmethod
    def blank(cls, width: int, height: int) -> "Grid":
        if width <= 0 or height <= 0:
            raise ConfigError(f"grid must be at least 1x1, got {width}x{height}")
        row = tuple(Tile.BLANK for _ in range(width))
        return cls(width, height, tuple(row for _ in range(height)))

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Grid":
        """Parse a text map, one string per row; '#' is an obstacle."""
        if not rows or not rows[0]:
            raise ConfigError("empty map")
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise ConfigError("map rows differ in length")
        cells = tuple(
            tuple(Tile.OBSTACLE if ch == "#" else Tile.BLANK for ch in r)
            for r in rows
        )
        return cls(width, len(rows), cells)

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, c: Cell) -> Tile:
        x, y = c
        return self.cells[y][x]

    def is_block(self, c: Cell) -> bool:
        return self.in_bounds(c) and self.tile_at(c) == Tile.OBSTACLE

    def obstacles(self) -> Iterator[Cell]:
        for y, row in enumerate(self.cells):
            for x, tile in enumerate(row):
                if tile == Tile.OBSTACLE:
                    yield (x, y)

    def with_blank(self, *cells: Cell) -> "Grid":
        """Copy of this grid with the given cells forced to BLANK."""
        rows = [list(r) for r in self.cells]
        for x, y in cells:
            rows[y][x] = Tile.BLANK
        return replace(self, cells=tuple(tuple(r) for r in rows))


@dataclass(frozen=True)
class Node:
    position: Cell
    parent: Optional[Cell] = None   # handle into the closed set, never owned
    g: int = 0
    h: int = 0
    f: int = 0
