"""
Pytest configuration for the depgraph3d project.
Ensures that the root directory is in the Python path so imports work correctly,
and provides small graphs shared by the test suites.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to Python path
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from depgraph3d.src.geometry.bounds import BoundingBox  # noqa: E402
from depgraph3d.src.graph.models import CodeEdge, CodeNode, NodeType  # noqa: E402
from depgraph3d.src.layout.layout_plan import LayoutParameters  # noqa: E402


@pytest.fixture
def bounds():
    """A 40-unit cube centered on the origin."""
    return BoundingBox.cube(20.0)


@pytest.fixture
def parameters():
    return LayoutParameters(
        node_spacing=5.0,
        edge_length=8.0,
        repulsion_strength=100.0,
        attraction_strength=0.1,
        iterations=50,
    )


@pytest.fixture
def service_graph():
    """A small service architecture: api -> services -> tables."""
    nodes = [
        CodeNode("api-gateway", "API Gateway", NodeType.API),
        CodeNode("auth-service", "Auth Service", NodeType.SERVICE),
        CodeNode("property-service", "Property Service", NodeType.SERVICE),
        CodeNode("tenant-service", "Tenant Service", NodeType.SERVICE),
        CodeNode("user-table", "Users", NodeType.DATABASE),
        CodeNode("property-table", "Properties", NodeType.DATABASE),
        CodeNode("tenant-table", "Tenants", NodeType.DATABASE),
    ]
    edges = [
        CodeEdge("api-gateway", "auth-service", 0.9),
        CodeEdge("api-gateway", "property-service", 0.8),
        CodeEdge("api-gateway", "tenant-service", 0.8),
        CodeEdge("auth-service", "user-table", 0.7),
        CodeEdge("property-service", "property-table", 0.9),
        CodeEdge("tenant-service", "tenant-table", 0.8),
        CodeEdge("property-service", "auth-service", 0.5),
    ]
    return nodes, edges
