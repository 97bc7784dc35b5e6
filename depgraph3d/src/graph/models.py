from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from depgraph3d.src.geometry.vector import Vector3


class NodeType(str, Enum):
    """Kinds of architecture entities a node can stand for."""

    FILE = "file"
    DIRECTORY = "directory"
    FUNCTION = "function"
    CLASS = "class"
    MODULE = "module"
    COMPONENT = "component"
    SERVICE = "service"
    DATABASE = "database"
    API = "api"
    LIBRARY = "library"


class EdgeType(str, Enum):
    """Relationship tags. Ignored by layout math, consumed by callers."""

    IMPORT = "import"
    DEPENDENCY = "dependency"
    INHERITANCE = "inheritance"
    COMPOSITION = "composition"
    CALL = "call"
    DATA_FLOW = "data_flow"


@dataclass
class CodeNode:
    """A graph vertex with a mutable 3D position.

    ``size`` and ``metadata`` are opaque to the layout engine.
    """

    id: str
    name: str = ""
    type: NodeType = NodeType.MODULE
    size: float = 1.0
    position: Optional[Vector3] = None  # None until placed by a layout
    metadata: Dict[str, Any] = field(default_factory=dict)

    def place(self, x: float, y: float, z: float) -> None:
        """Overwrite the position in place, attaching one if the node has none."""
        if self.position is None:
            self.position = Vector3(x, y, z)
        else:
            self.position.set(x, y, z)


@dataclass
class CodeEdge:
    """A directed, weighted relationship between two nodes."""

    source: str
    target: str
    weight: float = 1.0  # relationship strength in (0, 1]
    type: EdgeType = EdgeType.DEPENDENCY
    id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def key(self) -> str:
        """Identifier used for lookups; falls back to ``source->target``."""
        return self.id or f"{self.source}->{self.target}"


def index_nodes(nodes: Iterable[CodeNode]) -> Dict[str, int]:
    """Map node id to its index in ``nodes``. Later duplicates win."""
    return {node.id: i for i, node in enumerate(nodes)}


def resolvable_edges(
    nodes: List[CodeNode], edges: Iterable[CodeEdge]
) -> List[CodeEdge]:
    """Edges whose source and target both exist in ``nodes``."""
    known = {node.id for node in nodes}
    return [e for e in edges if e.source in known and e.target in known]
