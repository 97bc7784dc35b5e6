from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from depgraph3d.src.common.constants import DEFAULT_CONFIG, LayoutConfig
from depgraph3d.src.common.diagnostics import LayoutDiagnostics
from depgraph3d.src.graph.models import CodeNode
from depgraph3d.src.layout.layout_engine import LayoutEngine
from depgraph3d.src.layout.layout_plan import RandomSource
from .metrics import GraphMetrics, compute_metrics
from .project import CodeGraph
from .serialization import dumps_graph

"""Context object holding project graphs and answering queries over them."""


@dataclass
class NodeSearchResult:
    graph: CodeGraph
    nodes: List[CodeNode] = field(default_factory=list)


@dataclass
class NodeDependencies:
    dependencies: List[str] = field(default_factory=list)  # outgoing targets
    dependents: List[str] = field(default_factory=list)  # incoming sources


@dataclass
class TimelineEntry:
    project: CodeGraph
    start_date: Optional[date]
    end_date: Optional[date]


class GraphRegistry:
    """Holds project graphs and lays them out.

    Pass one registry explicitly to whatever needs graph data; there is no
    module-level instance.

    Usage:
        registry = GraphRegistry(rng=7)
        registry.add_graph(graph)
        metrics = registry.get_graph_metrics(graph.id)
    """

    def __init__(
        self,
        graphs: Optional[Iterable[CodeGraph]] = None,
        diagnostics: Optional[LayoutDiagnostics] = None,
        rng: RandomSource = None,
        config: LayoutConfig = DEFAULT_CONFIG,
    ):
        self.diagnostics = diagnostics or LayoutDiagnostics()
        self.config = config
        self.engine = LayoutEngine(self.diagnostics, rng)
        self._graphs: List[CodeGraph] = []
        for graph in graphs or []:
            self.add_graph(graph)

    @property
    def graphs(self) -> List[CodeGraph]:
        return list(self._graphs)

    def add_graph(self, graph: CodeGraph, apply_layout: bool = True) -> CodeGraph:
        """Register ``graph``, replacing one with the same id, and lay it out."""
        self._graphs = [g for g in self._graphs if g.id != graph.id]
        self._graphs.append(graph)
        graph.rebuild_indexes()
        if apply_layout:
            self.refresh_layout(graph.id)
        return graph

    def get_graph(self, project_id: str) -> Optional[CodeGraph]:
        for graph in self._graphs:
            if graph.id == project_id:
                return graph
        return None

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def refresh_layout(self, project_id: str, optimize: Optional[bool] = None) -> None:
        """Re-run the graph's configured layout, then the crossing pass."""
        graph = self.get_graph(project_id)
        if graph is None:
            self.diagnostics.warning(
                f"Cannot refresh unknown project '{project_id}'", stage="registry"
            )
            return

        if optimize is None:
            optimize = self.config.optimize

        layout = graph.layout
        self.engine.apply_layout(
            graph.nodes, graph.edges, layout.algorithm, layout.parameters, layout.bounds
        )
        if optimize:
            self.engine.optimize_layout(
                graph.nodes,
                graph.edges,
                layout.parameters,
                bounds=layout.bounds,
                trials=self.config.optimizer_trials,
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_projects_by_technology(self, technology: str) -> List[CodeGraph]:
        needle = technology.lower()
        return [
            g
            for g in self._graphs
            if any(needle in tech.lower() for tech in g.metadata.technologies)
        ]

    def get_projects_by_architecture(self, architecture: str) -> List[CodeGraph]:
        needle = architecture.lower()
        return [
            g for g in self._graphs if needle in g.metadata.architecture.value.lower()
        ]

    def get_projects_by_time_range(self, start: date, end: date) -> List[CodeGraph]:
        """Projects whose active period overlaps ``[start, end]``.

        Projects without a start date are skipped; a missing end date means
        the project is still running.
        """
        today = date.today()
        matches = []
        for graph in self._graphs:
            project_start = graph.metadata.start_date
            if project_start is None:
                continue
            project_end = graph.metadata.end_date or today
            if project_start <= end and project_end >= start:
                matches.append(graph)
        return matches

    def search_nodes(self, query: str) -> List[NodeSearchResult]:
        """Case-insensitive match on node name, description or technologies."""
        needle = query.lower()
        results = []
        for graph in self._graphs:
            matching = [n for n in graph.nodes if _node_matches(n, needle)]
            if matching:
                results.append(NodeSearchResult(graph=graph, nodes=matching))
        return results

    def get_node_dependencies(self, project_id: str, node_id: str) -> NodeDependencies:
        graph = self.get_graph(project_id)
        if graph is None:
            return NodeDependencies()
        return NodeDependencies(
            dependencies=[e.target for e in graph.edges if e.source == node_id],
            dependents=[e.source for e in graph.edges if e.target == node_id],
        )

    def get_graph_metrics(self, project_id: str) -> GraphMetrics:
        graph = self.get_graph(project_id)
        if graph is None:
            return GraphMetrics()
        return compute_metrics(graph)

    def export_graph_data(self, project_id: str) -> str:
        """JSON document for the graph, or an empty string if unknown."""
        graph = self.get_graph(project_id)
        if graph is None:
            return ""
        return dumps_graph(graph)

    def get_project_timeline(self) -> List[TimelineEntry]:
        """Projects ordered by start date; undated projects go last."""
        entries = [
            TimelineEntry(g, g.metadata.start_date, g.metadata.end_date)
            for g in self._graphs
        ]
        return sorted(
            entries,
            key=lambda e: (e.start_date is None, e.start_date or date.min),
        )


def _node_matches(node: CodeNode, needle: str) -> bool:
    if needle in node.name.lower():
        return True
    description = node.metadata.get("description")
    if isinstance(description, str) and needle in description.lower():
        return True
    technologies = node.metadata.get("technologies") or []
    return any(needle in str(tech).lower() for tech in technologies)
