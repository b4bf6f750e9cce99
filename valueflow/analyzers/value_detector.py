"""Value detection for ValueFlow

Resolves an expression to the most specific Value it can, reading (never
writing) the scope it is evaluated in:

1. Variable references resolve to the latest recorded value, or to the
   parameter bound to the target name
2. Int, float and string literals resolve to themselves
3. Array literals resolve element by element, unifying key and value types
4. Anything else is resolved through its children: a single informative
   child passes through unchanged, several make an ambiguous union
"""

from typing import List, Optional

from valueflow.core import syntax
from valueflow.core.scope import Scope
from valueflow.core.type_system import Type, INT, FLOAT, STRING, unify
from valueflow.core.value import Value


class ValueDetector:
    """Infers Values from syntax nodes"""

    def detect(self, name: str, node: syntax.Node, scope: Scope) -> Value:
        """Detect the value of an expression

        Args:
            name: Name the resulting value is associated with
            node: Expression node
            scope: Scope to resolve variables and parameters in

        Returns:
            Detected value; unresolved values have a None payload
        """
        if isinstance(node, syntax.Variable):
            value = self._detect_variable(name, node, scope)
            if value is not None:
                return value
        elif isinstance(node, syntax.IntLiteral):
            return Value(name=name, value=node.value, type=INT, line=node.line)
        elif isinstance(node, syntax.FloatLiteral):
            return Value(name=name, value=node.value, type=FLOAT, line=node.line)
        elif isinstance(node, syntax.StringLiteral):
            return Value(name=name, value=node.value, type=STRING, line=node.line)
        elif isinstance(node, syntax.ArrayLiteral):
            return self._detect_array(name, node, scope)
        elif isinstance(node, syntax.Call):
            # Return values are not modeled; only the callee is inspected
            return self._detect_children(name, node, [node.func], scope)

        return self._detect_children(name, node, node.children(), scope)

    def _detect_variable(self, name: str, node: syntax.Variable,
                         scope: Scope) -> Optional[Value]:
        history = scope.lookup_variable(node.name)
        if history:
            return history[-1]
        return scope.lookup_parameter(name)

    def _detect_array(self, name: str, node: syntax.ArrayLiteral, scope: Scope) -> Value:
        key_type: Optional[Type] = None
        value_type: Optional[Type] = None
        values: List[Value] = []

        for i, item in enumerate(node.items):
            if item.key is None:
                key_type = unify(key_type, INT)
            else:
                key = self.detect(f"key_{i}", item.key, scope)
                key_type = unify(key_type, key.type)

            value = self.detect(f"value_{i}", item.value, scope)
            value_type = unify(value_type, value.type)
            values.append(value)

        return Value(
            name=name,
            value=tuple(values),
            type=Type.array_of(key_type, value_type),
            line=node.line,
        )

    def _detect_children(self, name: str, node: syntax.Node,
                         children: List[syntax.Node], scope: Scope) -> Value:
        resolved = []
        for child in children:
            value = self.detect(name, child, scope)
            if value.is_resolved:
                resolved.append(value)

        if len(resolved) == 1:
            return resolved[0]

        if len(resolved) > 1:
            return Value(
                name=name,
                value=None,
                type=Type.union(v.type for v in resolved),
                line=node.line,
            )

        return Value(name=name, value=None, type=Type.unknown(), line=node.line)
