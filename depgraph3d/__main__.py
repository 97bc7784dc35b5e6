#!/usr/bin/env python3
"""
depgraph3d CLI - Entry point for the layout engine.

This module allows running the layout tool as:
    python -m depgraph3d graph.json
    depgraph3d graph.json  (when installed via pip)
"""

from depgraph3d.cli import main

if __name__ == "__main__":
    main()
