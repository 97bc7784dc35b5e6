"""Structural metrics for project dependency graphs."""

from dataclasses import dataclass, field
from typing import List

import numpy as np
from scipy.sparse import coo_matrix
from scipy.sparse.csgraph import connected_components

from depgraph3d.src.graph.dependency_index import DependencyIndex
from depgraph3d.src.graph.models import index_nodes, resolvable_edges
from .project import CodeGraph


@dataclass
class GraphMetrics:
    node_count: int = 0
    edge_count: int = 0
    complexity: int = 0
    depth: int = 0
    technologies: List[str] = field(default_factory=list)


def count_components(graph: CodeGraph) -> int:
    """Number of weakly connected components; dangling edges are ignored."""
    n = len(graph.nodes)
    if n == 0:
        return 0

    index = index_nodes(graph.nodes)
    pairs = [
        (index[e.source], index[e.target])
        for e in resolvable_edges(graph.nodes, graph.edges)
    ]
    rows = np.array([p[0] for p in pairs], dtype=np.int64)
    cols = np.array([p[1] for p in pairs], dtype=np.int64)
    adjacency = coo_matrix(
        (np.ones(len(pairs), dtype=np.int8), (rows, cols)), shape=(n, n)
    )
    n_components, _ = connected_components(adjacency, directed=True, connection="weak")
    return int(n_components)


def graph_complexity(graph: CodeGraph) -> int:
    """Cyclomatic complexity ``max(1, E - N + 2P)``."""
    edges = len(graph.edges)
    nodes = len(graph.nodes)
    return max(1, edges - nodes + 2 * count_components(graph))


def graph_depth(graph: CodeGraph) -> int:
    """Deepest first-discovery depth of a depth-first walk from the roots.

    Each node is counted at the depth where the walk first reaches it; when
    no node lacks incoming edges the walk starts from the first node.
    """
    if not graph.nodes:
        return 0

    index = DependencyIndex.from_graph(graph.nodes, graph.edges)
    roots = index.roots() or [graph.nodes[0].id]
    visited = set()
    max_depth = 0

    for root in roots:
        stack = [(root, 0)]
        while stack:
            node_id, depth = stack.pop()
            if node_id in visited:
                continue
            visited.add(node_id)
            max_depth = max(max_depth, depth)
            for succ in reversed(index.successors(node_id)):
                stack.append((succ, depth + 1))
    return max_depth


def compute_metrics(graph: CodeGraph) -> GraphMetrics:
    return GraphMetrics(
        node_count=len(graph.nodes),
        edge_count=len(graph.edges),
        complexity=graph_complexity(graph),
        depth=graph_depth(graph),
        technologies=list(graph.metadata.technologies),
    )
