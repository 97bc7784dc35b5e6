from __future__ import annotations
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from .models import CodeEdge, CodeNode

"""Directed adjacency index for layout planning."""


class DependencyIndex:
    """Successor/predecessor lists and in-degrees over a node set.

    Edges that reference an unknown node are skipped and remembered in
    ``dangling_edges``. Duplicate edges are kept so in-degrees match the
    edge list.
    """

    def __init__(self, node_ids: Iterable[str]) -> None:
        self._node_ids: List[str] = list(dict.fromkeys(node_ids))
        self._known = set(self._node_ids)
        self._successors: Dict[str, List[str]] = defaultdict(list)
        self._predecessors: Dict[str, List[str]] = defaultdict(list)
        self.dangling_edges: List[CodeEdge] = []

    @classmethod
    def from_graph(
        cls, nodes: Iterable[CodeNode], edges: Iterable[CodeEdge]
    ) -> DependencyIndex:
        index = cls(node.id for node in nodes)
        for edge in edges:
            index.add_edge(edge)
        return index

    def add_edge(self, edge: CodeEdge) -> bool:
        """Register ``edge``. Returns False if an endpoint is unknown."""
        if edge.source not in self._known or edge.target not in self._known:
            self.dangling_edges.append(edge)
            return False
        self._successors[edge.source].append(edge.target)
        self._predecessors[edge.target].append(edge.source)
        return True

    @property
    def node_ids(self) -> List[str]:
        """Node ids in insertion order."""
        return list(self._node_ids)

    def successors(self, node_id: str) -> List[str]:
        """Return a snapshot of the targets of ``node_id``'s outgoing edges."""

        return list(self._successors.get(node_id, []))

    def in_degree(self, node_id: str) -> int:
        return len(self._predecessors.get(node_id, []))

    def in_degrees(self) -> Dict[str, int]:
        return {node_id: self.in_degree(node_id) for node_id in self._node_ids}

    def roots(self) -> List[str]:
        """Nodes without incoming edges, in insertion order."""
        return [n for n in self._node_ids if self.in_degree(n) == 0]

    def reachable_from(
        self, start: str, exclude: Optional[set] = None
    ) -> List[str]:
        """Nodes reachable from ``start`` (inclusive), skipping ``exclude``."""
        exclude = exclude or set()
        if start in exclude:
            return []
        seen = {start}
        order = [start]
        stack = [start]
        while stack:
            current = stack.pop()
            for succ in self._successors.get(current, []):
                if succ not in seen and succ not in exclude:
                    seen.add(succ)
                    order.append(succ)
                    stack.append(succ)
        return order

    def topological_levels(self) -> tuple[List[List[str]], List[str]]:
        """Kahn leveling: each frontier of in-degree-zero nodes is one level.

        Returns ``(levels, leftover)`` where ``leftover`` holds nodes that
        never drained because they sit on or behind a cycle.
        """
        remaining = self.in_degrees()
        frontier = [n for n in self._node_ids if remaining[n] == 0]
        levels: List[List[str]] = []
        placed = set()

        while frontier:
            levels.append(frontier)
            placed.update(frontier)
            next_frontier: List[str] = []
            for node_id in frontier:
                for succ in self._successors.get(node_id, []):
                    remaining[succ] -= 1
                    if remaining[succ] == 0:
                        next_frontier.append(succ)
            frontier = next_frontier

        leftover = [n for n in self._node_ids if n not in placed]
        return levels, leftover


__all__ = ["DependencyIndex"]
