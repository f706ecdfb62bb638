# src/astar_stepper/core/path.py
#!/usr/bin/env python3
from typing import List

from astar_stepper.core.frontier import NodeSet
from astar_stepper.core.types import Cell


def reconstruct(closed: NodeSet, goal: Cell) -> List[Cell]:
    """Positions from `goal` back to the start; empty until the goal is closed."""
    path: List[Cell] = []
    node = closed.find(goal)
    while node is not None:
        path.append(node.position)
        if node.parent is None:
            break
        node = closed.find(node.parent)
    return path
