# src/astar_stepper/core/grid_gen.py
#!/usr/bin/env python3
"""
Random obstacle maps for the demo.

Two passes over the grid (x outer, y inner):
- pass 1 scatters single obstacles with `obstacle_probability`
- pass 2 grows them: every blank cell touching a pass-1 obstacle (N/E/S/W)
  becomes an obstacle with `adjacent_boost_probability`

Pass 2 reads the pass-1 snapshot, so obstacles placed during pass 2 never
feed further growth in the same pass.
"""

import logging
import random
from typing import List, Optional

from astar_stepper.core.types import Cell, ConfigError, Grid, Tile

logger = logging.getLogger(__name__)

OBSTACLE_PROBABILITY = 0.05
ADJACENT_OBSTACLE_PROBABILITY = 0.3


def _check_probability(name: str, p: float) -> None:
    if not 0.0 <= p <= 1.0:
        raise ConfigError(f"{name} must be within [0, 1], got {p}")


def _adjacent_to_obstacle(cols: List[List[Tile]], x: int, y: int) -> bool:
    width, height = len(cols), len(cols[0])
    for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
        if 0 <= nx < width and 0 <= ny < height and cols[nx][ny] == Tile.OBSTACLE:
            return True
    return False


def generate(
    width: int,
    height: int,
    obstacle_probability: float = OBSTACLE_PROBABILITY,
    adjacent_boost_probability: float = ADJACENT_OBSTACLE_PROBABILITY,
    rng: Optional[random.Random] = None,
) -> Grid:
    if width <= 0 or height <= 0:
        raise ConfigError(f"grid must be at least 1x1, got {width}x{height}")
    _check_probability("obstacle_probability", obstacle_probability)
    _check_probability("adjacent_boost_probability", adjacent_boost_probability)
    rng = rng or random.Random()

    # column-major while generating: cols[x][y]
    cols = [[Tile.BLANK] * height for _ in range(width)]

    # first pass puts random dots on the grid
    for x in range(width):
        for y in range(height):
            if rng.random() < obstacle_probability and cols[x][y] == Tile.BLANK:
                cols[x][y] = Tile.OBSTACLE

    # second pass beefs up the dots
    seeded = [col[:] for col in cols]
    for x in range(width):
        for y in range(height):
            if seeded[x][y] == Tile.BLANK and _adjacent_to_obstacle(seeded, x, y):
                if rng.random() < adjacent_boost_probability:
                    cols[x][y] = Tile.OBSTACLE

    cells = tuple(tuple(cols[x][y] for x in range(width)) for y in range(height))
    grid = Grid(width, height, cells)
    logger.debug("generated %dx%d grid with %d obstacles",
                 width, height, sum(1 for _ in grid.obstacles()))
    return grid


def random_cell(width: int, height: int, rng: Optional[random.Random] = None) -> Cell:
    rng = rng or random.Random()
    return (rng.randrange(width), rng.randrange(height))
