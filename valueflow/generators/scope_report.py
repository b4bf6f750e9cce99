"""Scope report generator for ValueFlow

Renders an analyzed scope tree as indented text, or as plain dictionaries
for structured consumers.
"""

from typing import Any, Dict, List

from valueflow.core.scope import Scope
from valueflow.core.value import Value


class ScopeReportGenerator:
    """Generates a readable report of a scope tree"""

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent

    def generate(self, scope: Scope) -> str:
        """Generate the report for a scope and everything below it

        Args:
            scope: Root scope (usually the global scope)

        Returns:
            Report text
        """
        lines: List[str] = []
        self._emit_scope(scope, 0, lines, title=f"scope {scope.name}")
        return "\n".join(lines)

    def _emit_scope(self, scope: Scope, depth: int, lines: List[str], title: str) -> None:
        pad = self.indent * depth
        lines.append(f"{pad}{title}")
        pad += self.indent

        if scope.variables:
            lines.append(f"{pad}variables:")
            for name, history in scope.variables.items():
                for value in history.values():
                    lines.append(f"{pad}{self.indent}{name} = {format_value(value)}")

        if scope.parameters:
            lines.append(f"{pad}parameters:")
            for name, value in scope.parameters.items():
                lines.append(f"{pad}{self.indent}{name} = {format_value(value)}")

        for name, nested in scope.nested.items():
            self._emit_scope(nested, depth + 1, lines, title=f"function {name}")

        for line, specialized in scope.specialized.items():
            self._emit_scope(specialized, depth + 1, lines, title=f"specialized at line {line}")


def format_value(value: Value) -> str:
    """Format a value as ``payload: type @line``"""
    return f"{format_payload(value.value)}: {value.type_label} @{value.line}"


def format_payload(payload: Any) -> str:
    if payload is None:
        return "?"
    if isinstance(payload, tuple):
        return "[" + ", ".join(format_payload(v.value) for v in payload) + "]"
    return repr(payload)


def value_to_dict(value: Value) -> Dict[str, Any]:
    payload = value.value
    if isinstance(payload, tuple):
        payload = [value_to_dict(v) for v in payload]
    return {
        "name": value.name,
        "value": payload,
        "type": value.type_label,
        "line": value.line,
    }


def scope_to_dict(scope: Scope) -> Dict[str, Any]:
    """Convert a scope tree into plain dictionaries

    Args:
        scope: Root scope

    Returns:
        Dictionary with name, variables, parameters, nested and specialized
    """
    return {
        "name": scope.name,
        "variables": {
            name: [value_to_dict(v) for v in history.values()]
            for name, history in scope.variables.items()
        },
        "parameters": {
            name: value_to_dict(v) for name, v in scope.parameters.items()
        },
        "nested": {
            name: scope_to_dict(s) for name, s in scope.nested.items()
        },
        "specialized": {
            line: scope_to_dict(s) for line, s in scope.specialized.items()
        },
    }
