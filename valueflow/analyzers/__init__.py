"""Analyzers for ValueFlow

This module contains the analysis pass and its collaborators.

Modules:
- Analyzer: Single-pass driver over top-level statements
- ValueDetector: Resolves expressions to Values
- DiagnosticLogger: Collects unresolved arguments and skipped statements
"""

from valueflow.analyzers.analyzer import (
    Analyzer, UnsupportedAssignmentTarget, analyze
)
from valueflow.analyzers.value_detector import ValueDetector
from valueflow.analyzers.diagnostics_logger import (
    DiagnosticLogger, SkipReason, UnresolvedArgumentRecord,
    SkippedStatementRecord, DiscardedWriteRecord
)

__all__ = [
    'Analyzer',
    'UnsupportedAssignmentTarget',
    'analyze',
    'ValueDetector',
    'DiagnosticLogger',
    'SkipReason',
    'UnresolvedArgumentRecord',
    'SkippedStatementRecord',
    'DiscardedWriteRecord',
]
