#!/usr/bin/env python3
"""
depgraph3d CLI - Command-line interface for the 3D dependency-graph layout engine.

Usage:
    depgraph3d graph.json                          # Lay out with the graph's own settings
    depgraph3d graph.json -a circular              # Override the algorithm
    depgraph3d graph.json -o positioned.json       # Save the positioned graph
    depgraph3d graph.json --seed 7 --metrics       # Reproducible run, print metrics
"""

import json
import logging
import sys
from pathlib import Path

import click

from depgraph3d.src.architecture.metrics import compute_metrics
from depgraph3d.src.architecture.serialization import graph_to_dict, loads_graph
from depgraph3d.src.common.constants import DEFAULT_CONFIG, LayoutConfig
from depgraph3d.src.common.diagnostics import LayoutDiagnostics
from depgraph3d.src.common.exceptions import LayoutError
from depgraph3d.src.layout.layout_engine import LayoutEngine
from depgraph3d.src.layout.layout_plan import LayoutAlgorithm, resolve_algorithm


def layout_graph_source(
    source_text: str,
    algorithm: str | None = None,
    iterations: int | None = None,
    seed: int | None = None,
    optimize: bool = True,
    trials: int | None = None,
    include_metrics: bool = False,
    log_level: str = "warning",
    show_progress: bool = False,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> tuple[bool, str, list]:
    """
    Lay out a JSON graph document and return the positioned document.

    Args:
        source_text: The graph document as JSON text
        algorithm: Layout algorithm override (default: the document's own)
        iterations: Iteration count override for force-directed layout
        seed: Seed for every random step (default: nondeterministic)
        optimize: Run the crossing-minimization pass after layout
        trials: Optimizer trial count (default: config.optimizer_trials)
        include_metrics: Add a "metrics" object to the output
        log_level: Minimum severity kept in the diagnostics
        show_progress: Show tqdm progress bars
        config: Layout configuration defaults

    Returns:
        (success: bool, result: str, diagnostics: list)
    """
    diagnostics = LayoutDiagnostics(log_level=log_level)

    try:
        graph = loads_graph(source_text)
    except LayoutError as e:
        diagnostics.error(e.message, stage="serialization")
        return False, "Reading graph failed", diagnostics.get_messages()

    requested = graph.layout.algorithm if algorithm is None else algorithm
    graph.layout.algorithm = resolve_algorithm(requested) or LayoutAlgorithm.FORCE_DIRECTED
    if iterations is not None:
        graph.layout.parameters.iterations = iterations

    engine = LayoutEngine(diagnostics, rng=seed, show_progress=show_progress)
    layout = graph.layout
    try:
        # Unknown names fall back to force_directed with a warning
        engine.apply_layout(
            graph.nodes, graph.edges, requested, layout.parameters, layout.bounds
        )
    except LayoutError as e:
        diagnostics.error(e.message, stage="layout")
        return False, "Layout failed", diagnostics.get_messages()

    if optimize:
        engine.optimize_layout(
            graph.nodes,
            graph.edges,
            layout.parameters,
            bounds=layout.bounds,
            trials=config.optimizer_trials if trials is None else trials,
        )

    document = graph_to_dict(graph)
    if include_metrics:
        metrics = compute_metrics(graph)
        document["metrics"] = {
            "node_count": metrics.node_count,
            "edge_count": metrics.edge_count,
            "complexity": metrics.complexity,
            "depth": metrics.depth,
            "technologies": metrics.technologies,
        }

    return True, json.dumps(document, indent=2), diagnostics.get_messages()


def setup_logging(level: str) -> None:
    """Setup logging configuration."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    logging.basicConfig(level=numeric_level, format="%(levelname)s: %(message)s")


@click.command()
@click.argument("graph_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output file for the positioned graph (default: stdout)",
)
@click.option(
    "-a",
    "--algorithm",
    type=click.Choice([a.value for a in LayoutAlgorithm], case_sensitive=False),
    default=None,
    help="Layout algorithm (default: the one stored in the graph file)",
)
@click.option("--iterations", type=int, default=None, help="Force-directed iterations")
@click.option("--seed", type=int, default=None, help="Random seed for reproducible layouts")
@click.option("--no-optimize", is_flag=True, help="Skip the edge-crossing optimizer")
@click.option(
    "--trials",
    type=int,
    default=DEFAULT_CONFIG.optimizer_trials,
    help=f"Crossing optimizer trials (default: {DEFAULT_CONFIG.optimizer_trials})",
)
@click.option("--metrics", is_flag=True, help="Include graph metrics in the output")
@click.option("--progress", is_flag=True, help="Show progress bars")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
    help="Set the logging level",
)
def main(
    graph_file,
    output,
    algorithm,
    iterations,
    seed,
    no_optimize,
    trials,
    metrics,
    progress,
    log_level,
):
    """Assign 3D positions to the nodes of a dependency graph JSON file."""
    setup_logging(log_level)
    verbose = log_level in ["debug", "info"]

    try:
        source_text = graph_file.read_text(encoding="utf-8")
        if verbose:
            click.echo(f"Laying out {graph_file}...", err=True)
    except OSError as e:
        click.echo(f"Failed to read graph file: {e}", err=True)
        sys.exit(1)

    success, result, diagnostic_messages = layout_graph_source(
        source_text,
        algorithm=algorithm,
        iterations=iterations,
        seed=seed,
        optimize=not no_optimize,
        trials=trials,
        include_metrics=metrics,
        log_level=log_level,
        show_progress=progress,
    )

    if not success:
        click.echo(f"Layout failed: {result}", err=True)
        for message in diagnostic_messages:
            click.echo(message, err=True)
        sys.exit(1)

    if output:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(result, encoding="utf-8")
            if verbose:
                click.echo(f"Positioned graph saved to {output}", err=True)
        except OSError as e:
            click.echo(f"Failed to write output file: {e}", err=True)
            sys.exit(1)
    else:
        click.echo(result)

    if verbose:
        msg_count = len(diagnostic_messages)
        msg = (
            f"Layout completed with {msg_count} diagnostic(s)."
            if msg_count
            else "Layout completed successfully."
        )
        click.echo(msg, err=True)


if __name__ == "__main__":
    main()
