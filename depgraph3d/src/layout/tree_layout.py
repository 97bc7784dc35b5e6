"""Tree layout for rooted, tree-dominant dependency graphs.

Roots share the horizontal extent of the box. Below each node its children
are spread ``node_spacing`` apart, centered under the parent, one level
lower. Shared descendants keep the first position they were given.
"""

from typing import List, Optional

from depgraph3d.src.common.constants import DEPTH_SPREAD
from depgraph3d.src.common.diagnostics import LayoutDiagnostics
from depgraph3d.src.geometry.bounds import BoundingBox
from depgraph3d.src.graph.dependency_index import DependencyIndex
from depgraph3d.src.graph.models import CodeEdge, CodeNode
from .layout_plan import LayoutParameters, RandomSource, resolve_rng


def find_tree_roots(
    nodes: List[CodeNode],
    index: DependencyIndex,
    diagnostics: Optional[LayoutDiagnostics] = None,
) -> List[str]:
    """Nodes without incoming edges, then one extra root per unreached part.

    Falls back to the first node when every node has an incoming edge.
    Unreached nodes (e.g. a separate cyclic component) are promoted to roots
    in input order so the whole graph gets placed.
    """
    diagnostics = diagnostics or LayoutDiagnostics()
    if not nodes:
        return []

    roots = index.roots()
    if not roots:
        roots = [nodes[0].id]
        diagnostics.info(
            f"No node without incoming edges; using '{nodes[0].id}' as root",
            stage="tree",
        )

    covered = set()
    for root in roots:
        covered.update(index.reachable_from(root, exclude=covered))

    promoted = 0
    for node_id in index.node_ids:
        if node_id not in covered:
            roots.append(node_id)
            covered.update(index.reachable_from(node_id, exclude=covered))
            promoted += 1

    if promoted:
        diagnostics.info(
            f"Promoted {promoted} unreached node(s) to tree roots", stage="tree"
        )
    return roots


def apply_tree_layout(
    nodes: List[CodeNode],
    edges: List[CodeEdge],
    parameters: LayoutParameters,
    bounds: BoundingBox,
    *,
    rng: RandomSource = None,
    diagnostics: Optional[LayoutDiagnostics] = None,
    show_progress: bool = False,
) -> None:
    if not nodes:
        return
    rng = resolve_rng(rng)
    index = DependencyIndex.from_graph(nodes, edges)
    roots = find_tree_roots(nodes, index, diagnostics)
    by_id = {node.id: node for node in nodes}

    spacing = parameters.node_spacing
    slot_width = bounds.width / len(roots)
    center_z = bounds.center.z
    visited = set()
    cursor_x = bounds.min.x

    for root in roots:
        # Explicit stack in pre-order; avoids the recursion limit on deep trees
        stack = [(root, cursor_x, bounds.max.y)]
        while stack:
            node_id, x, y = stack.pop()
            if node_id in visited:
                continue
            visited.add(node_id)

            z = center_z + (rng.random() - 0.5) * bounds.depth * DEPTH_SPREAD
            node = by_id[node_id]
            node.place(x, y, z)
            bounds.clamp(node.position)

            # The row is centered on every child, placed or not; only unplaced
            # children take consecutive slots from its left end.
            all_children = list(dict.fromkeys(index.successors(node_id)))
            children = [c for c in all_children if c not in visited]
            first_x = x - (len(all_children) - 1) * spacing / 2
            for i in reversed(range(len(children))):
                stack.append((children[i], first_x + i * spacing, y - spacing))

        cursor_x += slot_width
