import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .exceptions import LayoutError

"""Unified diagnostic collection for layout and optimization passes."""

logger = logging.getLogger("depgraph3d")


class DiagnosticSeverity(Enum):
    """Severity levels for layout diagnostics."""

    DEBUG = "debug"  # Internal engine information
    INFO = "info"  # Informational messages for users
    WARNING = "warning"  # Anomalies that were worked around
    ERROR = "error"  # Input the engine could not lay out


_SEVERITY_ORDER = [
    DiagnosticSeverity.DEBUG,
    DiagnosticSeverity.INFO,
    DiagnosticSeverity.WARNING,
    DiagnosticSeverity.ERROR,
]

_LOGGING_LEVELS = {
    DiagnosticSeverity.DEBUG: logging.DEBUG,
    DiagnosticSeverity.INFO: logging.INFO,
    DiagnosticSeverity.WARNING: logging.WARNING,
    DiagnosticSeverity.ERROR: logging.ERROR,
}


@dataclass
class Diagnostic:
    """A single diagnostic message with context."""

    severity: DiagnosticSeverity
    message: str
    stage: str  # force_directed, hierarchical, tree, optimizer, registry, ...
    node_id: Optional[str] = None


class LayoutDiagnostics:
    """Central diagnostic collection for layout runs.

    Records every message at or above ``log_level`` and mirrors it to the
    ``depgraph3d`` logger.

    Usage:
        diagnostics = LayoutDiagnostics(log_level="info")
        diagnostics.warning("3 nodes pinned to last level", stage="hierarchical")
        print(diagnostics.format_for_user())
    """

    def __init__(self, log_level: str = "warning", raise_errors: bool = False):
        try:
            self.min_severity = DiagnosticSeverity(log_level.lower())
        except ValueError:
            raise ValueError(f"Invalid log level: {log_level}") from None
        self.raise_errors = raise_errors
        self.diagnostics: List[Diagnostic] = []
        self._error_count = 0
        self._warning_count = 0
        self.default_stage = "layout"

    def debug(
        self, message: str, stage: str | None = None, node_id: Optional[str] = None
    ) -> None:
        """Add an internal message (shown at debug level only)."""
        self._add(DiagnosticSeverity.DEBUG, message, stage, node_id)

    def info(
        self, message: str, stage: str | None = None, node_id: Optional[str] = None
    ) -> None:
        """Add an informational message."""
        self._add(DiagnosticSeverity.INFO, message, stage, node_id)

    def warning(
        self, message: str, stage: str | None = None, node_id: Optional[str] = None
    ) -> None:
        """Add a warning (always recorded, layout continues)."""
        self._add(DiagnosticSeverity.WARNING, message, stage, node_id)
        self._warning_count += 1

    def error(
        self, message: str, stage: str | None = None, node_id: Optional[str] = None
    ) -> None:
        """Add an error. Raises LayoutError when ``raise_errors`` is set."""
        self._add(DiagnosticSeverity.ERROR, message, stage, node_id)
        self._error_count += 1
        if self.raise_errors:
            raise LayoutError(message, stage=stage or self.default_stage)

    def _add(
        self,
        severity: DiagnosticSeverity,
        message: str,
        stage: str | None,
        node_id: Optional[str],
    ) -> None:
        diag = Diagnostic(
            severity=severity,
            message=message,
            stage=stage or self.default_stage,
            node_id=node_id,
        )
        logger.log(_LOGGING_LEVELS[severity], self._format_diagnostic(diag))
        if _SEVERITY_ORDER.index(severity) < _SEVERITY_ORDER.index(self.min_severity):
            return
        self.diagnostics.append(diag)

    def has_errors(self) -> bool:
        """Check if any errors have been recorded."""
        return self._error_count > 0

    def error_count(self) -> int:
        """Get the number of errors."""
        return self._error_count

    def warning_count(self) -> int:
        """Get the number of warnings."""
        return self._warning_count

    def get_messages(
        self, min_severity: DiagnosticSeverity = DiagnosticSeverity.WARNING
    ) -> List[str]:
        """Get formatted messages at or above the specified severity level."""
        threshold = _SEVERITY_ORDER.index(min_severity)
        return [
            self._format_diagnostic(diag)
            for diag in self.diagnostics
            if _SEVERITY_ORDER.index(diag.severity) >= threshold
        ]

    def _format_diagnostic(self, diag: Diagnostic) -> str:
        # Format: SEVERITY [stage:node]: message
        location = diag.stage
        if diag.node_id:
            location = f"{location}:{diag.node_id}"
        return f"{diag.severity.value.upper()} [{location}]: {diag.message}"

    def format_for_user(self) -> str:
        """Format all recorded diagnostics for user-friendly output."""
        if not self.diagnostics:
            return "No diagnostics."

        messages = self.get_messages(self.min_severity)
        summary = (
            f"\nLayout summary: {self._error_count} error(s), "
            f"{self._warning_count} warning(s)"
        )
        return "\n".join(messages) + summary

    def merge(self, other: "LayoutDiagnostics") -> None:
        """Merge diagnostics from another collector."""
        self.diagnostics.extend(other.diagnostics)
        self._error_count += other._error_count
        self._warning_count += other._warning_count
