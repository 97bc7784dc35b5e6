"""Graph data model: nodes, edges and the dependency index."""

from .models import (
    CodeNode,
    CodeEdge,
    NodeType,
    EdgeType,
    index_nodes,
    resolvable_edges,
)
from .dependency_index import DependencyIndex

__all__ = [
    "CodeNode",
    "CodeEdge",
    "NodeType",
    "EdgeType",
    "index_nodes",
    "resolvable_edges",
    "DependencyIndex",
]
