"""Result objects and diagnostic types for XML doclet generation.

A generation run never raises to its caller; it reports its outcome through a
GenerationResult carrying diagnostics and metrics.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    NOTE = auto()       # Informational notes (option echo, ignored options)
    WARNING = auto()    # Output was produced but altered
    ERROR = auto()      # Generation failed


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class GenerationMetrics:
    """Counters and timings for one generation pass."""

    processing_time_ms: float = 0.0
    memory_used_bytes: int = 0
    bytes_written: int = 0
    packages: int = 0
    types: int = 0
    fields: int = 0
    comments: int = 0
    skipped_members: int = 0
    sanitized_characters: int = 0

    @property
    def elements_written(self) -> int:
        """Number of XML elements written, the root element included."""
        return 1 + self.packages + self.types + self.fields + self.comments

    @property
    def bytes_per_element(self) -> float:
        """Average output size per element."""
        if self.bytes_written == 0:
            return 0.0
        return self.bytes_written / self.elements_written


@dataclass
class GenerationResult:
    """Outcome of a generation run.

    Truthy exactly when the output file holds a complete, well-formed document.
    """

    success: bool
    output_path: Optional[Path] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    metrics: GenerationMetrics = field(default_factory=GenerationMetrics)
    correlation_id: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success

    @property
    def errors(self) -> List[DiagnosticEntry]:
        """Diagnostics with ERROR severity."""
        return [d for d in self.diagnostics if d.severity == DiagnosticSeverity.ERROR]

    @property
    def error_message(self) -> Optional[str]:
        """Message of the first error, if any."""
        errors = self.errors
        return errors[0].message if errors else None

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None
    ) -> DiagnosticEntry:
        """Append a diagnostic stamped with this result's correlation ID."""
        entry = DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            details=details,
            correlation_id=self.correlation_id,
        )
        self.diagnostics.append(entry)
        return entry

    def summary(self) -> Dict[str, Any]:
        """Plain-dict summary suitable for JSON output."""
        return {
            "success": self.success,
            "output_path": str(self.output_path) if self.output_path else None,
            "packages": self.metrics.packages,
            "types": self.metrics.types,
            "fields": self.metrics.fields,
            "comments": self.metrics.comments,
            "bytes_written": self.metrics.bytes_written,
            "processing_time_ms": round(self.metrics.processing_time_ms, 3),
            "diagnostics": [
                {"severity": d.severity.name, "message": d.message, "component": d.component}
                for d in self.diagnostics
            ],
        }
