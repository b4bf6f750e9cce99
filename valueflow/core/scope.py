"""Scope management for ValueFlow

A scope tracks, for one environment (the global program or one declared
function):
- The assignment history of each variable, keyed by source line
- Parameter bindings (declared defaults, or the values seen at a call)
- Function scopes declared inside it
- Per-call-site specializations of its parameters, keyed by call line

Variable lookup falls back to the lexically enclosing scope; function and
parameter lookup never does.
"""

from typing import Dict, List, Optional

from valueflow.core.value import Value


class Scope:
    """Represents a named analysis environment"""

    def __init__(self, name: str, outer: Optional["Scope"] = None) -> None:
        """Initialize scope

        Args:
            name: Scope name ("global" or the declared function name)
            outer: Enclosing scope used for variable lookup (None for global scope)
        """
        self.name = name
        self.outer = outer
        self.variables: Dict[str, Dict[int, Value]] = {}
        self.parameters: Dict[str, Value] = {}
        self.nested: Dict[str, Scope] = {}
        self.specialized: Dict[int, Scope] = {}

    def __repr__(self) -> str:
        return (
            f"Scope(name={self.name!r}, variables={sorted(self.variables)}, "
            f"parameters={list(self.parameters)}, nested={list(self.nested)}, "
            f"specialized={sorted(self.specialized)})"
        )

    def lookup_variable(self, name: str) -> List[Value]:
        """Look up a variable's history, checking outer scopes

        Args:
            name: Variable name

        Returns:
            Recorded values in insertion order, empty if never recorded
        """
        if name in self.variables:
            return list(self.variables[name].values())
        if self.outer is not None:
            return self.outer.lookup_variable(name)
        return []

    def latest_value(self, name: str) -> Optional[Value]:
        """Get the most recently recorded value of a variable"""
        history = self.lookup_variable(name)
        return history[-1] if history else None

    def lookup_nested_scope(self, name: str) -> Optional["Scope"]:
        """Look up a function scope declared in this scope only"""
        return self.nested.get(name)

    def lookup_parameter(self, name: str) -> Optional[Value]:
        return self.parameters.get(name)

    def lookup_parameter_at(self, index: int) -> Optional[Value]:
        """Look up a parameter by declaration position

        Args:
            index: Parameter index (0-based)

        Returns:
            Parameter value if the index is in range, None otherwise
        """
        if 0 <= index < len(self.parameters):
            return list(self.parameters.values())[index]
        return None

    def lookup_specialization(self, line: int) -> Optional["Scope"]:
        return self.specialized.get(line)

    def attach(self, scope: "Scope") -> None:
        """Register a function scope under its own name

        A later declaration with the same name replaces the earlier one.
        """
        self.nested[scope.name] = scope

    def snapshot(self) -> "Scope":
        """Copy this scope's parameter bindings into a fresh scope

        The copy shares the outer scope but starts with no variables,
        nested scopes or specializations of its own.
        """
        copy = Scope(self.name, self.outer)
        copy.parameters = dict(self.parameters)
        return copy

    def specialize(self, scope_name: str, values: Dict[str, Value],
                   line: Optional[int] = None) -> Optional["Scope"]:
        """Record the parameters a function sees at one call site

        Args:
            scope_name: Called function name
            values: Argument values keyed by the parameter name they bind to
            line: Call site line (default: line of the first argument value)

        Returns:
            The specialized scope, or None if there were no arguments
        """
        if not values:
            return None

        scope = self.nested.get(scope_name)
        if scope is None:
            scope = Scope(scope_name, self)
            self.attach(scope)

        if line is None:
            line = next(iter(values.values())).line

        specialized = scope.snapshot()
        scope.specialized[line] = specialized

        for value in values.values():
            specialized.record_parameter(value)

        return specialized

    def record_value(self, value: Value) -> bool:
        """Record an assignment in the variable's history

        A resolved value is never replaced by an unresolved one: if the most
        recent entry has a payload and the new value does not, the new value
        is dropped.

        Args:
            value: Value to record

        Returns:
            True if the value was recorded, False if it was dropped
        """
        history = self.variables.get(value.name)
        if history:
            last = next(reversed(history.values()))
            if last.is_resolved and not value.is_resolved:
                return False
        else:
            history = self.variables.setdefault(value.name, {})

        history[value.line] = value
        return True

    def record_parameter(self, value: Value) -> None:
        self.parameters[value.name] = value

    def get_depth(self) -> int:
        """Get nesting depth of this scope

        Returns:
            Depth (0 for global scope)
        """
        depth = 0
        current = self
        while current.outer:
            depth += 1
            current = current.outer
        return depth

    def is_global(self) -> bool:
        return self.outer is None
