# src/astar_stepper/core/frontier.py
#!/usr/bin/env python3
"""
Open/closed node sets keyed by position.

A dict keeps insertion order, which is the order `lowest_cost` scans in:
on equal f the node inserted earliest wins.
"""

from typing import Dict, Iterator, List, Optional

from astar_stepper.core.types import Cell, Node


class NodeSet:
    def __init__(self) -> None:
        self._nodes: Dict[Cell, Node] = {}

    def __contains__(self, position: Cell) -> bool:
        return position in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def find(self, position: Cell) -> Optional[Node]:
        return self._nodes.get(position)

    def insert(self, node: Node) -> None:
        if node.position in self._nodes:
            raise KeyError(f"node already present at {node.position}")
        self._nodes[node.position] = node

    def remove(self, position: Cell) -> Node:
        return self._nodes.pop(position)

    def replace(self, node: Node) -> Node:
        """Swap the node at `node.position`; the new one goes to the back."""
        old = self._nodes.pop(node.position)
        self._nodes[node.position] = node
        return old

    def lowest_cost(self) -> Optional[Node]:
        best: Optional[Node] = None
        for node in self._nodes.values():
            if best is None or node.f < best.f:
                best = node
        return best

    def positions(self) -> List[Cell]:
        return list(self._nodes)

    def clear(self) -> None:
        self._nodes.clear()
