"""Common utilities shared across the layout engine."""

from .diagnostics import LayoutDiagnostics, DiagnosticSeverity, Diagnostic
from .exceptions import LayoutError, GraphFormatError
from .constants import *

__all__ = [
    "LayoutDiagnostics",
    "DiagnosticSeverity",
    "Diagnostic",
    "LayoutError",
    "GraphFormatError",
    # Constants
    "FORCE_DAMPING",
    "MIN_REPULSION_DISTANCE",
    "OPTIMIZER_TRIALS",
    "LayoutConfig",
    "DEFAULT_CONFIG",
]
