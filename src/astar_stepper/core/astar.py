# src/astar_stepper/core/astar.py
#!/usr/bin/env python3
"""
A* search, one expansion per step() for animation.

Session API used by the viewer (or any other tick loop):
- initialize_search(...) / start_search(grid, start, goal) -> AStarSearch
- step(session) -> Node | None
- is_goal_reached(session), is_exhausted(session), reconstruct_path(session)

Heuristic:
- Manhattan distance, 4-connected moves with unit cost.

Tie-breaking:
- The open set is scanned in insertion order and the first node with the
  lowest f wins. A node replaced by a cheaper one moves to the back.
  This keeps runs on the same grid reproducible frame for frame.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from astar_stepper.core.frontier import NodeSet
from astar_stepper.core.grid_gen import (
    ADJACENT_OBSTACLE_PROBABILITY,
    OBSTACLE_PROBABILITY,
    generate,
)
from astar_stepper.core.path import reconstruct
from astar_stepper.core.types import Cell, ConfigError, Grid, Node

logger = logging.getLogger(__name__)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(b[0] - a[0]) + abs(b[1] - a[1])


def _check_endpoints(grid: Grid, start: Cell, goal: Cell) -> None:
    for label, c in (("start", start), ("goal", goal)):
        if not grid.in_bounds(c):
            raise ConfigError(f"{label} {c} outside {grid.width}x{grid.height} grid")


@dataclass
class AStarSearch:
    grid: Grid
    start: Cell
    goal: Cell
    name: str = "A*"

    # Internal state
    open: NodeSet = field(default_factory=NodeSet)
    closed: NodeSet = field(default_factory=NodeSet)
    current: Optional[Node] = None
    popped_count: int = 0
    done: bool = False

    def __post_init__(self) -> None:
        _check_endpoints(self.grid, self.start, self.goal)
        self.grid = self.grid.with_blank(self.start, self.goal)
        self.reset()

    # -------------------- lifecycle --------------------

    def reset(self) -> None:
        """Clear all state and seed with the start node."""
        self.open.clear()
        self.closed.clear()
        self.current = None
        self.popped_count = 0
        self.done = False
        self.open.insert(Node(self.start))

    # -------------------- helpers --------------------

    def _neighbors4(self, c: Cell) -> List[Cell]:
        """In-bounds neighbours in N, E, S, W order."""
        x, y = c
        candidates = [(x, y - 1), (x + 1, y), (x, y + 1), (x - 1, y)]
        return [n for n in candidates if self.grid.in_bounds(n)]

    # -------------------- main stepping logic --------------------

    def step(self) -> Optional[Node]:
        """
        Run ONE A* expansion:
          - Pop the lowest-f open node and close it.
          - Score each open-able neighbour; add it, or swap it in if it
            reaches a known cell with a lower g.
        Returns the expanded node, or None once the search is over.
        """
        if self.done or not self.open:
            return None

        current = self.open.lowest_cost()
        self.open.remove(current.position)
        self.closed.insert(current)
        self.current = current
        self.popped_count += 1
        logger.debug("expand %s g=%d h=%d f=%d",
                      current.position, current.g, current.h, current.f)

        for pos in self._neighbors4(current.position):
            if pos in self.closed or self.grid.is_block(pos):
                continue
            g = current.g + 1
            h = manhattan(pos, self.goal)
            candidate = Node(pos, current.position, g, h, g + h)

            existing = self.open.find(pos)
            if existing is None:
                self.open.insert(candidate)
            elif existing.g > candidate.g:
                self.open.replace(candidate)

        if self.goal in self.closed:
            self.done = True
            logger.info("%s reached %s after %d expansions (path %d cells)",
                        self.name, self.goal, self.popped_count, len(self.path()))
        elif not self.open:
            logger.info("%s exhausted after %d expansions, no path to %s",
                        self.name, self.popped_count, self.goal)
        return current

    # -------------------- queries --------------------

    @property
    def goal_reached(self) -> bool:
        return self.goal in self.closed

    @property
    def exhausted(self) -> bool:
        return not self.open and not self.goal_reached

    @property
    def status(self) -> str:
        if self.goal_reached:
            return "done"
        if self.exhausted:
            return "no_path"
        return "running"

    def path(self) -> List[Cell]:
        return reconstruct(self.closed, self.goal)

    def metrics(self) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open),
            "closed_count": len(self.closed),
            "path_len": len(self.path()),
        }


# -------------------- session API --------------------

def start_search(grid: Grid, start: Cell, goal: Cell) -> AStarSearch:
    """Search on a given grid; start and goal are forced to blank."""
    return AStarSearch(grid, start, goal)


def initialize_search(
    width: int,
    height: int,
    start: Cell,
    goal: Cell,
    obstacle_probability: float = OBSTACLE_PROBABILITY,
    adjacent_boost_probability: float = ADJACENT_OBSTACLE_PROBABILITY,
    rng: Optional[random.Random] = None,
) -> AStarSearch:
    grid = generate(width, height, obstacle_probability,
                    adjacent_boost_probability, rng)
    return start_search(grid, start, goal)


def step(session: AStarSearch) -> Optional[Node]:
    return session.step()


def is_goal_reached(session: AStarSearch) -> bool:
    return session.goal_reached


def is_exhausted(session: AStarSearch) -> bool:
    return session.exhausted


def reconstruct_path(session: AStarSearch) -> List[Cell]:
    return session.path()


def run(
    session: AStarSearch,
    on_tick: Optional[Callable[[AStarSearch, Optional[Node]], None]] = None,
    max_ticks: Optional[int] = None,
) -> int:
    """Drive `session` until it finishes or `max_ticks` ticks have run."""
    ticks = 0
    while session.status == "running":
        if max_ticks is not None and ticks >= max_ticks:
            break
        node = session.step()
        ticks += 1
        if on_tick is not None:
            on_tick(session, node)
    return ticks
