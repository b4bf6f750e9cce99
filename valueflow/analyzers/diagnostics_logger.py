"""Diagnostics logger for value-flow analysis

Collects the non-fatal events of an analysis pass with configurable
verbosity. Unresolved call arguments are always kept as warnings;
skipped statements and dropped writes are bookkeeping that only shows up
in verbose summaries.
"""

from typing import List
from dataclasses import dataclass
from enum import Enum


class SkipReason(Enum):
    """Why a statement was not analyzed"""
    DYNAMIC_CALL = "dynamic call target"


@dataclass
class UnresolvedArgumentRecord:
    """An argument whose value could not be determined

    Attributes:
        function: Called function name
        parameter: Parameter name the argument was bound to
        line: Source line of the call
    """
    function: str
    parameter: str
    line: int

    def format(self) -> str:
        """Format record for display

        Returns:
            Formatted string representation
        """
        return (
            f"No value found for parameter '{self.parameter}' "
            f"of function '{self.function}' at line {self.line}"
        )


@dataclass
class SkippedStatementRecord:
    """A statement the analyzer passed over"""
    kind: str
    reason: SkipReason
    line: int

    def format(self) -> str:
        return f"  Skipped {self.kind} at line {self.line}: {self.reason.value}"


@dataclass
class DiscardedWriteRecord:
    """An unresolved assignment dropped in favor of a resolved one

    Attributes:
        name: Variable name
        kept_line: Line of the resolved value that stays visible
        discarded_line: Line of the unresolved write that was dropped
    """
    name: str
    kept_line: int
    discarded_line: int

    def format(self) -> str:
        return (
            f"  Kept '{self.name}' from line {self.kept_line}, "
            f"dropped unresolved write at line {self.discarded_line}"
        )


class DiagnosticLogger:
    """Logs diagnostics produced while analyzing a program

    Usage Example:
        logger = DiagnosticLogger()
        analyzer = Analyzer(logger=logger)
        analyzer.analyze(statements)

        if logger.warnings:
            print(logger.print_summary(), file=sys.stderr)
    """

    def __init__(self, verbose: bool = False) -> None:
        """Initialize diagnostics logger

        Args:
            verbose: If True, summaries include skipped statements and dropped writes
        """
        self.verbose = verbose
        self.unresolved_arguments: List[UnresolvedArgumentRecord] = []
        self.skipped_statements: List[SkippedStatementRecord] = []
        self.discarded_writes: List[DiscardedWriteRecord] = []
        self.warnings: List[str] = []

    def log_unresolved_argument(self, function: str, parameter: str, line: int) -> None:
        """Log an argument whose value could not be resolved

        Args:
            function: Called function name
            parameter: Bound parameter name
            line: Call line
        """
        record = UnresolvedArgumentRecord(function=function, parameter=parameter, line=line)
        self.unresolved_arguments.append(record)
        self.warnings.append(record.format())

    def log_skipped(self, kind: str, reason: SkipReason, line: int) -> None:
        self.skipped_statements.append(
            SkippedStatementRecord(kind=kind, reason=reason, line=line)
        )

    def log_discarded_write(self, name: str, kept_line: int, discarded_line: int) -> None:
        self.discarded_writes.append(
            DiscardedWriteRecord(name=name, kept_line=kept_line, discarded_line=discarded_line)
        )

    def get_statistics(self) -> dict:
        """Get diagnostics statistics

        Returns:
            Dictionary with counts of unresolved arguments, skipped
            statements, discarded writes and warnings
        """
        return {
            "unresolved_arguments": len(self.unresolved_arguments),
            "skipped_statements": len(self.skipped_statements),
            "discarded_writes": len(self.discarded_writes),
            "warnings": len(self.warnings),
        }

    def print_summary(self) -> str:
        """Generate formatted summary string

        Returns:
            Formatted summary as string
        """
        stats = self.get_statistics()
        lines = ["=== Value Flow Diagnostics ==="]

        if self.warnings:
            lines.append(f"\nWarnings ({len(self.warnings)}):")
            for warning in self.warnings:
                lines.append(f"  {warning}")
            lines.append("")

        lines.append(f"Unresolved arguments: {stats['unresolved_arguments']}")
        lines.append(f"Skipped statements: {stats['skipped_statements']}")
        lines.append(f"Discarded writes: {stats['discarded_writes']}")

        if self.verbose:
            if self.skipped_statements:
                lines.append("\nSkipped statements:")
                for record in self.skipped_statements:
                    lines.append(record.format())
            if self.discarded_writes:
                lines.append("\nDiscarded writes:")
                for record in self.discarded_writes:
                    lines.append(record.format())

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all logged records and warnings"""
        self.unresolved_arguments.clear()
        self.skipped_statements.clear()
        self.discarded_writes.clear()
        self.warnings.clear()
