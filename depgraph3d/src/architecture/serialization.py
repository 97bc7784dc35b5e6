"""JSON (de)serialization of project graphs.

Document layout::

    {
      "id": "...", "name": "...", "description": "...",
      "nodes": [{"id", "name", "type", "size", "position": [x, y, z] | null, "metadata"}],
      "edges": [{"id", "source", "target", "type", "weight", "metadata"}],
      "layout": {"algorithm", "parameters": {...}, "bounds": {"min": [...], "max": [...]}},
      "metadata": {"name", "technologies", "start_date", "end_date", ...}
    }

Everything except ``id`` and ``nodes`` is optional and falls back to
``DEFAULT_CONFIG``.
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

from depgraph3d.src.common.constants import DEFAULT_CONFIG
from depgraph3d.src.common.exceptions import GraphFormatError
from depgraph3d.src.geometry.bounds import BoundingBox
from depgraph3d.src.geometry.vector import Vector3
from depgraph3d.src.graph.models import CodeEdge, CodeNode, EdgeType, NodeType
from depgraph3d.src.layout.layout_plan import (
    GraphLayout,
    LayoutAlgorithm,
    LayoutParameters,
)
from .project import ArchitectureType, CodeGraph, ProjectMetadata


def _vector(values: Any, what: str) -> Vector3:
    if not isinstance(values, (list, tuple)) or len(values) != 3:
        raise GraphFormatError(f"{what} must be a list of three numbers")
    try:
        return Vector3.from_array(values)
    except (TypeError, ValueError):
        raise GraphFormatError(f"{what} must be a list of three numbers") from None


def _date(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise GraphFormatError(f"Invalid ISO date '{value}'") from None


def _enum(enum_cls, value, default):
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        raise GraphFormatError(
            f"Unknown {enum_cls.__name__} value '{value}'"
        ) from None


def _mapping(value: Any, what: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise GraphFormatError(f"{what} must be a JSON object")
    return value


def _number(value: Any, what: str, kind=float):
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise GraphFormatError(
            f"{what} must be {'an integer' if kind is int else 'a number'}, "
            f"got {value!r}"
        ) from None


# ----------------------------------------------------------------------
# Encoding
# ----------------------------------------------------------------------


def node_to_dict(node: CodeNode) -> Dict[str, Any]:
    return {
        "id": node.id,
        "name": node.name,
        "type": node.type.value,
        "size": node.size,
        "position": list(node.position.to_tuple()) if node.position else None,
        "metadata": node.metadata,
    }


def edge_to_dict(edge: CodeEdge) -> Dict[str, Any]:
    return {
        "id": edge.id,
        "source": edge.source,
        "target": edge.target,
        "type": edge.type.value,
        "weight": edge.weight,
        "metadata": edge.metadata,
    }


def graph_to_dict(graph: CodeGraph) -> Dict[str, Any]:
    params = graph.layout.parameters
    meta = graph.metadata
    return {
        "id": graph.id,
        "name": graph.name,
        "description": graph.description,
        "nodes": [node_to_dict(n) for n in graph.nodes],
        "edges": [edge_to_dict(e) for e in graph.edges],
        "layout": {
            "algorithm": graph.layout.algorithm.value,
            "parameters": {
                "node_spacing": params.node_spacing,
                "edge_length": params.edge_length,
                "repulsion_strength": params.repulsion_strength,
                "attraction_strength": params.attraction_strength,
                "iterations": params.iterations,
            },
            "bounds": {
                "min": list(graph.layout.bounds.min.to_tuple()),
                "max": list(graph.layout.bounds.max.to_tuple()),
            },
        },
        "metadata": {
            "name": meta.name,
            "description": meta.description,
            "technologies": list(meta.technologies),
            "start_date": meta.start_date.isoformat() if meta.start_date else None,
            "end_date": meta.end_date.isoformat() if meta.end_date else None,
            "company": meta.company,
            "role": meta.role,
            "team_size": meta.team_size,
            "architecture": meta.architecture.value,
        },
    }


def dumps_graph(graph: CodeGraph, indent: Optional[int] = 2) -> str:
    return json.dumps(graph_to_dict(graph), indent=indent)


# ----------------------------------------------------------------------
# Decoding
# ----------------------------------------------------------------------


def node_from_dict(data: Dict[str, Any]) -> CodeNode:
    if not isinstance(data, dict):
        raise GraphFormatError("Node entry must be a JSON object")
    if "id" not in data:
        raise GraphFormatError("Node entry is missing 'id'")
    node_id = str(data["id"])
    position = data.get("position")
    return CodeNode(
        id=node_id,
        name=data.get("name", node_id),
        type=_enum(NodeType, data.get("type"), NodeType.MODULE),
        size=_number(data.get("size", 1.0), f"Size of node '{node_id}'"),
        position=_vector(position, f"Position of node '{node_id}'")
        if position is not None
        else None,
        metadata=dict(
            _mapping(data.get("metadata"), f"Metadata of node '{node_id}'")
        ),
    )


def edge_from_dict(data: Dict[str, Any]) -> CodeEdge:
    if not isinstance(data, dict):
        raise GraphFormatError("Edge entry must be a JSON object")
    if "source" not in data or "target" not in data:
        raise GraphFormatError("Edge entry needs 'source' and 'target'")
    return CodeEdge(
        source=str(data["source"]),
        target=str(data["target"]),
        weight=_number(data.get("weight", 1.0), "Edge weight"),
        type=_enum(EdgeType, data.get("type"), EdgeType.DEPENDENCY),
        id=data.get("id"),
        metadata=dict(_mapping(data.get("metadata"), "Edge metadata")),
    )


def parameters_from_dict(data: Dict[str, Any]) -> LayoutParameters:
    """Build LayoutParameters, coercing each value to its declared type."""
    data = _mapping(data, "layout.parameters")
    known = set(LayoutParameters.__dataclass_fields__)
    unknown = set(data) - known
    if unknown:
        raise GraphFormatError(
            f"Unknown layout parameter(s): {', '.join(sorted(unknown))}"
        )

    values = {}
    for name, value in data.items():
        kind = int if name == "iterations" else float
        values[name] = _number(value, f"Layout parameter '{name}'", kind)
    return LayoutParameters(**values)


def layout_from_dict(data: Dict[str, Any]) -> GraphLayout:
    data = _mapping(data, "layout")
    algorithm = _enum(
        LayoutAlgorithm,
        data.get("algorithm"),
        LayoutAlgorithm(DEFAULT_CONFIG.default_algorithm),
    )
    bounds_data = data.get("bounds")
    if bounds_data is None:
        bounds = BoundingBox.cube(DEFAULT_CONFIG.bounds_half_extent)
    else:
        bounds_data = _mapping(bounds_data, "layout.bounds")
        bounds = BoundingBox(
            _vector(bounds_data.get("min"), "bounds.min"),
            _vector(bounds_data.get("max"), "bounds.max"),
        )
    return GraphLayout(
        algorithm=algorithm,
        parameters=parameters_from_dict(data.get("parameters")),
        bounds=bounds,
    )


def metadata_from_dict(data: Dict[str, Any]) -> ProjectMetadata:
    data = _mapping(data, "metadata")
    technologies = data.get("technologies") or []
    if not isinstance(technologies, list):
        raise GraphFormatError("metadata.technologies must be a list")
    return ProjectMetadata(
        name=data.get("name", ""),
        description=data.get("description", ""),
        technologies=[str(tech) for tech in technologies],
        start_date=_date(data.get("start_date")),
        end_date=_date(data.get("end_date")),
        company=data.get("company", ""),
        role=data.get("role", ""),
        team_size=_number(data.get("team_size", 0), "metadata.team_size", int),
        architecture=_enum(
            ArchitectureType, data.get("architecture"), ArchitectureType.MONOLITH
        ),
    )


def graph_from_dict(data: Dict[str, Any]) -> CodeGraph:
    if not isinstance(data, dict):
        raise GraphFormatError("Graph document must be a JSON object")
    if "id" not in data:
        raise GraphFormatError("Graph document is missing 'id'")
    if not isinstance(data.get("nodes"), list):
        raise GraphFormatError("Graph document needs a 'nodes' list")
    edges = data.get("edges") or []
    if not isinstance(edges, list):
        raise GraphFormatError("Graph document 'edges' must be a list")

    graph = CodeGraph(
        id=str(data["id"]),
        name=data.get("name", ""),
        description=data.get("description", ""),
        nodes=[node_from_dict(n) for n in data["nodes"]],
        edges=[edge_from_dict(e) for e in edges],
        layout=layout_from_dict(data.get("layout")),
        metadata=metadata_from_dict(data.get("metadata")),
    )
    graph.rebuild_indexes()
    return graph


def loads_graph(text: str) -> CodeGraph:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphFormatError(f"Invalid JSON: {e.msg} (line {e.lineno})") from e
    return graph_from_dict(data)


def load_graph(path: Union[str, Path]) -> CodeGraph:
    path = Path(path)
    try:
        return loads_graph(path.read_text(encoding="utf-8"))
    except GraphFormatError as e:
        raise GraphFormatError(e.message, path=str(path)) from e
