"""Shared utilities for XML doclet generation.

This module provides the configuration object, result and diagnostic types,
and the logging helpers used across all components.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    DocletConfig,
    parse_bool,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    GenerationMetrics,
    GenerationResult,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "DocletConfig",
    "parse_bool",
    "CorrelationLogger",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "GenerationMetrics",
    "GenerationResult",
]
