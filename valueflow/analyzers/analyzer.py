"""Value-flow analyzer for ValueFlow

Single top-level pass over a program's statements:
- Assignments record the detected right-hand value in the global scope
- Function declarations create a function scope holding the parameters
- Calls to statically named functions record a specialization of the
  callee's parameters, keyed by the line of the first argument's value

Statement bodies (function bodies, branches, loops) are not visited.
"""

from typing import Dict, Optional, Sequence

from valueflow.core import syntax
from valueflow.core.scope import Scope
from valueflow.core.type_system import Type, ARRAY
from valueflow.core.value import Value
from valueflow.analyzers.diagnostics_logger import DiagnosticLogger, SkipReason
from valueflow.analyzers.value_detector import ValueDetector


GLOBAL_SCOPE_NAME = "global"

# Request input array every program starts with
SEEDED_VARIABLE = "_GET"


class UnsupportedAssignmentTarget(NotImplementedError):
    """Raised for an assignment whose target is not a plain variable"""

    def __init__(self, target: syntax.Node, line: int) -> None:
        super().__init__(
            f"Unsupported assignment target {target.kind} at line {line}"
        )
        self.target = target
        self.line = line


class Analyzer:
    """Infers values of variables and call-site parameters

    Usage Example:
        analyzer = Analyzer()
        scope = analyzer.analyze(statements)

        foo = scope.lookup_nested_scope("foo")
        for line, call in foo.specialized.items():
            print(line, call.parameters)
    """

    def __init__(self, logger: Optional[DiagnosticLogger] = None, verbose: bool = False) -> None:
        """Initialize analyzer with a seeded global scope

        Args:
            logger: Diagnostics logger (default: a new one)
            verbose: Verbosity of the default logger
        """
        self.logger = logger if logger is not None else DiagnosticLogger(verbose=verbose)
        self.detector = ValueDetector()
        self.scope = Scope(GLOBAL_SCOPE_NAME)
        self.scope.record_value(Value(name=SEEDED_VARIABLE, value=(), type=ARRAY, line=0))

    def analyze(self, statements: Sequence[syntax.Node]) -> Scope:
        """Analyze statements in source order

        Args:
            statements: Top-level statements of a program

        Returns:
            The populated global scope

        Raises:
            UnsupportedAssignmentTarget: If an assignment target is not a variable
        """
        for stmt in statements:
            self.visit_node(stmt)
        return self.scope

    def visit_node(self, node: syntax.Node) -> None:
        """Analyze one top-level statement"""
        if isinstance(node, syntax.Assign):
            self._visit_assign(node)
        elif isinstance(node, syntax.Call):
            self._visit_call(node)
        elif isinstance(node, syntax.FunctionDecl):
            self._visit_function(node)

    def _visit_assign(self, node: syntax.Assign) -> None:
        target = node.target
        if not isinstance(target, syntax.Variable):
            raise UnsupportedAssignmentTarget(target, node.line)

        value = self.detector.detect(target.name, node.value, self.scope)
        previous = self.scope.latest_value(target.name)
        if not self.scope.record_value(value.with_name(target.name)):
            self.logger.log_discarded_write(target.name, previous.line, value.line)

    def _visit_call(self, node: syntax.Call) -> None:
        function = node.static_name()
        if function is None:
            self.logger.log_skipped(node.func.kind, SkipReason.DYNAMIC_CALL, node.line)
            return

        callee = self.scope.lookup_nested_scope(function)
        values: Dict[str, Value] = {}
        for i, arg in enumerate(node.args):
            param_name = self._bind_argument(arg, i, callee)

            value = self.detector.detect(param_name, arg.value, self.scope)
            if not value.is_resolved:
                self.logger.log_unresolved_argument(function, param_name, node.line)

            values[param_name] = value.with_name(param_name)

        self.scope.specialize(function, values)

    def _bind_argument(self, arg: syntax.Argument, index: int,
                       callee: Optional[Scope]) -> str:
        if arg.name is not None:
            return arg.name
        if callee is not None:
            param = callee.lookup_parameter_at(index)
            if param is not None:
                return param.name
        return f"#{index}"

    def _visit_function(self, node: syntax.FunctionDecl) -> None:
        scope = Scope(node.name, self.scope)
        self.scope.attach(scope)

        for param in node.params:
            if param.default is None:
                value = Value(
                    name=param.name,
                    value=None,
                    type=Type.declared(param.type_annotation),
                    line=param.line,
                )
            else:
                detected = self.detector.detect(param.name, param.default, self.scope)
                value = Value(
                    name=param.name,
                    value=detected.value,
                    type=detected.type,
                    line=param.line,
                )
            scope.record_parameter(value)


def analyze(statements: Sequence[syntax.Node],
            logger: Optional[DiagnosticLogger] = None) -> Scope:
    """Analyze a program and return its global scope

    Args:
        statements: Top-level statements of a program
        logger: Optional diagnostics logger

    Returns:
        The populated global scope
    """
    return Analyzer(logger=logger).analyze(statements)
