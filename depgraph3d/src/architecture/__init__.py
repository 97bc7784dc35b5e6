"""Project graphs: containers, registry, metrics and JSON serialization."""

from .project import ArchitectureType, CodeGraph, ProjectMetadata
from .metrics import GraphMetrics, compute_metrics
from .serialization import (
    graph_from_dict,
    graph_to_dict,
    dumps_graph,
    loads_graph,
    load_graph,
)
from .registry import (
    GraphRegistry,
    NodeDependencies,
    NodeSearchResult,
    TimelineEntry,
)

__all__ = [
    "ArchitectureType",
    "CodeGraph",
    "ProjectMetadata",
    "GraphMetrics",
    "compute_metrics",
    "graph_from_dict",
    "graph_to_dict",
    "dumps_graph",
    "loads_graph",
    "load_graph",
    "GraphRegistry",
    "NodeDependencies",
    "NodeSearchResult",
    "TimelineEntry",
]
