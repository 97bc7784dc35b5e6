"""Project-level graph containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from depgraph3d.src.graph.models import CodeEdge, CodeNode
from depgraph3d.src.layout.layout_plan import GraphLayout


class ArchitectureType(str, Enum):
    MONOLITH = "monolith"
    MICROSERVICES = "microservices"
    SERVERLESS = "serverless"
    HYBRID = "hybrid"


@dataclass
class ProjectMetadata:
    """Descriptive information about the project a graph belongs to."""

    name: str = ""
    description: str = ""
    technologies: List[str] = field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None  # None while the project is ongoing
    company: str = ""
    role: str = ""
    team_size: int = 0
    architecture: ArchitectureType = ArchitectureType.MONOLITH


@dataclass
class CodeGraph:
    """A project's dependency graph together with its layout configuration."""

    id: str
    name: str = ""
    description: str = ""
    nodes: List[CodeNode] = field(default_factory=list)
    edges: List[CodeEdge] = field(default_factory=list)
    layout: GraphLayout = field(default_factory=GraphLayout)
    metadata: ProjectMetadata = field(default_factory=ProjectMetadata)

    _node_map: Dict[str, CodeNode] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def rebuild_indexes(self) -> None:
        """Rebuild the node lookup after modifying ``nodes``."""
        self._node_map = {n.id: n for n in self.nodes}

    def get_node(self, node_id: str) -> Optional[CodeNode]:
        """Look up a node by id.

        The cached lookup is rebuilt on a miss or when the cached node no
        longer carries ``node_id`` or no longer belongs to ``nodes``, so
        in-place edits of the node list are picked up.
        """
        node = self._node_map.get(node_id)
        if node is None or node.id != node_id or not self._holds(node):
            self.rebuild_indexes()
            node = self._node_map.get(node_id)
        return node

    def _holds(self, node: CodeNode) -> bool:
        return any(n is node for n in self.nodes)
