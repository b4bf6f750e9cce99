"""Tests for the value-flow analyzer

Test Coverage:
- Global scope seeding
- Assignments and the history rule
- Function declarations and parameter defaults
- Call specialization, argument name binding and diagnostics
- Fatal assignment targets
"""

import pytest
from valueflow.core import syntax
from valueflow.analyzers.analyzer import (
    Analyzer, UnsupportedAssignmentTarget, analyze
)
from valueflow.analyzers.diagnostics_logger import DiagnosticLogger, SkipReason


def assign(name, value, line):
    return syntax.Assign(syntax.Variable(name, line=line), value, line=line)


def call(name, *args, line):
    return syntax.Call(syntax.Name(name, line=line), list(args), line=line)


def arg(value, name=None):
    return syntax.Argument(value, name)


def function(name, *params, line):
    return syntax.FunctionDecl(name, list(params), [], line=line)


class TestSeeding:
    """Test the initial global scope"""

    def test_global_scope(self):
        """Test the global scope name and seeded input array"""
        analyzer = Analyzer()
        assert analyzer.scope.name == "global"
        seeded = analyzer.scope.latest_value("_GET")
        assert seeded.value == ()
        assert seeded.type_label == "array"
        assert seeded.line == 0

    def test_empty_array_literal_matches_seeded_type(self):
        """Test an empty array literal has the same type as the seeded input"""
        scope = analyze([assign("empty", syntax.ArrayLiteral([], line=1), line=1)])
        assert scope.latest_value("empty").type_label == scope.latest_value("_GET").type_label == "array"

    def test_empty_program(self):
        """Test analyzing nothing returns the seeded scope"""
        scope = analyze([])
        assert list(scope.variables) == ["_GET"]


class TestAssignments:
    """Test assignment statements"""

    def test_literal_assignment(self):
        """Test an assignment records the detected value"""
        scope = analyze([assign("a", syntax.IntLiteral(23, line=3), line=3)])
        value = scope.latest_value("a")
        assert (value.name, value.value, value.type_label, value.line) == ("a", 23, "int", 3)

    def test_copy_assignment_binds_target_name(self):
        """Test a copied value is recorded under the assigned name"""
        scope = analyze([
            assign("a", syntax.IntLiteral(23, line=3), line=3),
            assign("b", syntax.Variable("a", line=4), line=4),
        ])
        value = scope.latest_value("b")
        assert value.name == "b"
        assert value.value == 23
        assert value.line == 3
        assert len(scope.lookup_variable("a")) == 1

    def test_resolved_writes_are_kept(self):
        """Test two resolved writes both stay in the history"""
        scope = analyze([
            assign("a", syntax.IntLiteral(23, line=3), line=3),
            assign("a", syntax.StringLiteral("foobar", line=5), line=5),
        ])
        assert [v.value for v in scope.lookup_variable("a")] == [23, "foobar"]

    def test_unresolved_write_is_dropped(self):
        """Test an unresolved write keeps the earlier value visible"""
        logger = DiagnosticLogger()
        scope = Analyzer(logger=logger).analyze([
            assign("a", syntax.IntLiteral(23, line=3), line=3),
            assign("a", syntax.Variable("unknown", line=4), line=4),
        ])
        assert scope.latest_value("a").value == 23
        assert len(scope.lookup_variable("a")) == 1
        assert len(logger.discarded_writes) == 1
        record = logger.discarded_writes[0]
        assert (record.name, record.kept_line, record.discarded_line) == ("a", 3, 4)

    def test_non_variable_target_aborts(self):
        """Test assigning to anything but a variable is fatal"""
        target = syntax.OtherExpr("Index", [syntax.Variable("t"), syntax.Name("x")], line=2)
        statements = [
            assign("a", syntax.IntLiteral(1, line=1), line=1),
            syntax.Assign(target, syntax.IntLiteral(2, line=2), line=2),
            assign("b", syntax.IntLiteral(3, line=3), line=3),
        ]
        with pytest.raises(UnsupportedAssignmentTarget) as excinfo:
            analyze(statements)
        assert excinfo.value.line == 2
        assert excinfo.value.target is target
        assert "Index" in str(excinfo.value)

    def test_fatal_error_is_not_implemented_error(self):
        """Test the fatal condition can be caught as NotImplementedError"""
        target = syntax.OtherExpr("Index", line=1)
        with pytest.raises(NotImplementedError):
            analyze([syntax.Assign(target, syntax.IntLiteral(1), line=1)])


class TestFunctionDeclarations:
    """Test function declaration statements"""

    def test_declared_parameters(self):
        """Test parameters without defaults are unresolved"""
        scope = analyze([function(
            "bar", syntax.Param("arg", type_annotation="int", line=1), line=1,
        )])
        bar = scope.lookup_nested_scope("bar")
        assert bar.outer is scope
        param = bar.lookup_parameter("arg")
        assert param.value is None
        assert param.type_label == "int"
        assert param.line == 1

    def test_annotation_kept_as_written(self):
        """Test declared annotations keep their spelling"""
        scope = analyze([function(
            "foo", syntax.Param("pairs", type_annotation="array<int,string>", line=1), line=1,
        )])
        param = scope.lookup_nested_scope("foo").lookup_parameter("pairs")
        assert param.type_label == "array<int,string>"

    def test_missing_annotation_is_mixed(self):
        """Test parameters without annotation or default are mixed"""
        scope = analyze([function("foo", syntax.Param("value", line=1), line=1)])
        assert scope.lookup_nested_scope("foo").lookup_parameter("value").type_label == "mixed"

    def test_default_value(self):
        """Test defaults are detected and their type replaces the annotation"""
        param = syntax.Param(
            "limit", default=syntax.IntLiteral(10, line=2),
            type_annotation="mixed", line=2,
        )
        scope = analyze([function("foo", param, line=2)])
        value = scope.lookup_nested_scope("foo").lookup_parameter("limit")
        assert value.value == 10
        assert value.type_label == "int"

    def test_body_is_not_visited(self):
        """Test statements inside a function body are ignored"""
        decl = syntax.FunctionDecl("foo", [], [
            assign("inner", syntax.IntLiteral(1, line=2), line=2),
        ], line=1)
        scope = analyze([decl])
        assert scope.lookup_variable("inner") == []
        assert scope.lookup_nested_scope("foo").variables == {}

    def test_redeclaration_replaces_scope(self):
        """Test the last declaration of a name wins"""
        scope = analyze([
            function("foo", syntax.Param("a", line=1), line=1),
            function("foo", syntax.Param("b", line=2), line=2),
        ])
        assert list(scope.lookup_nested_scope("foo").parameters) == ["b"]


class TestCalls:
    """Test call statements"""

    def test_named_argument(self):
        """Test a named argument binds to its name"""
        scope = analyze([
            function("foo", syntax.Param("value", line=1), line=1),
            call("foo", arg(syntax.IntLiteral(42, line=3), "value"), line=3),
        ])
        foo = scope.lookup_nested_scope("foo")
        param = foo.lookup_specialization(3).lookup_parameter("value")
        assert param.value == 42
        assert param.type_label == "int"

    def test_positional_names_from_declaration(self):
        """Test positional arguments take the declared parameter names"""
        scope = analyze([
            function("f", syntax.Param("a", line=1), syntax.Param("b", line=1), line=1),
            call("f", arg(syntax.IntLiteral(1, line=2)), arg(syntax.StringLiteral("x", line=2)), line=2),
        ])
        specialized = scope.lookup_nested_scope("f").lookup_specialization(2)
        assert list(specialized.parameters) == ["a", "b"]
        assert specialized.lookup_parameter("a").value == 1
        assert specialized.lookup_parameter("b").value == "x"

    def test_extra_positional_arguments(self):
        """Test arguments beyond the declared parameters get synthetic names"""
        scope = analyze([
            function("quatz", syntax.Param("is", variadic=True, line=1), line=1),
            call("quatz", *(arg(syntax.IntLiteral(i, line=2)) for i in (1, 2, 3)), line=2),
        ])
        specialized = scope.lookup_nested_scope("quatz").lookup_specialization(2)
        assert list(specialized.parameters) == ["is", "#1", "#2"]
        assert specialized.lookup_parameter("#2").value == 3

    def test_undeclared_function(self):
        """Test calling an unknown function creates its scope lazily"""
        scope = analyze([
            call("array_key_exists",
                 arg(syntax.IntLiteral(1, line=4)),
                 arg(syntax.StringLiteral("y", line=4)), line=4),
        ])
        callee = scope.lookup_nested_scope("array_key_exists")
        assert callee is not None
        assert callee.parameters == {}
        assert list(callee.lookup_specialization(4).parameters) == ["#0", "#1"]

    def test_call_without_arguments(self):
        """Test a call without arguments records nothing"""
        scope = analyze([call("foo", line=1)])
        assert scope.lookup_nested_scope("foo") is None

    def test_argument_from_variable(self):
        """Test variable arguments take the variable's latest value"""
        scope = analyze([
            function("foo", syntax.Param("value", line=1), line=1),
            assign("a", syntax.IntLiteral(23, line=2), line=2),
            call("foo", arg(syntax.Variable("a", line=3), "value"), line=3),
        ])
        param = scope.lookup_nested_scope("foo").lookup_specialization(2).lookup_parameter("value")
        assert param.name == "value"
        assert param.value == 23
        assert param.line == 2

    def test_specialization_keyed_by_first_argument_line(self):
        """Test the specialization is stored under the first argument's line"""
        scope = analyze([
            function("foo", syntax.Param("value", line=1), line=1),
            call("foo", arg(syntax.IntLiteral(42, line=3)), line=3),
            assign("a", syntax.IntLiteral(23, line=4), line=4),
            call("foo", arg(syntax.Variable("a", line=5)), line=5),
        ])
        foo = scope.lookup_nested_scope("foo")
        assert sorted(foo.specialized) == [3, 4]
        assert foo.lookup_specialization(5) is None
        assert foo.lookup_specialization(4).lookup_parameter("value").value == 23

    def test_unresolved_argument_is_reported(self):
        """Test unresolved arguments are logged and still recorded"""
        logger = DiagnosticLogger()
        scope = Analyzer(logger=logger).analyze([
            function("abc", syntax.Param("b", line=1), line=1),
            call("abc", arg(syntax.Variable("missing", line=5)), line=5),
        ])
        param = scope.lookup_nested_scope("abc").lookup_specialization(5).lookup_parameter("b")
        assert param.value is None
        assert len(logger.unresolved_arguments) == 1
        record = logger.unresolved_arguments[0]
        assert (record.function, record.parameter, record.line) == ("abc", "b", 5)

    def test_argument_falls_back_to_caller_parameter(self):
        """Test an unknown variable resolves to the caller's parameter"""
        analyzer = Analyzer()
        analyzer.scope.record_parameter(
            analyzer.detector.detect("b", syntax.IntLiteral(7, line=1), analyzer.scope)
        )
        analyzer.analyze([
            function("abc", syntax.Param("b", line=2), line=2),
            call("abc", arg(syntax.Variable("missing", line=3)), line=3),
        ])
        specialized = analyzer.scope.lookup_nested_scope("abc").lookup_specialization(1)
        assert specialized.lookup_parameter("b").value == 7

    def test_dynamic_call_is_skipped(self):
        """Test calls without a static name change nothing"""
        logger = DiagnosticLogger()
        dynamic = syntax.Call(syntax.Variable("fn", line=2), [arg(syntax.IntLiteral(1, line=2))], line=2)
        scope = Analyzer(logger=logger).analyze([dynamic])
        assert scope.nested == {}
        assert logger.warnings == []
        assert logger.skipped_statements[0].reason == SkipReason.DYNAMIC_CALL

    def test_repeated_specialization_keeps_defaults(self):
        """Test calls never change the declared parameters"""
        scope = analyze([
            function("foo", syntax.Param("value", line=1), line=1),
            call("foo", arg(syntax.IntLiteral(1, line=2)), line=2),
            call("foo", arg(syntax.IntLiteral(2, line=3)), line=3),
        ])
        foo = scope.lookup_nested_scope("foo")
        assert foo.lookup_parameter("value").value is None
        assert sorted(foo.specialized) == [2, 3]


class TestOtherStatements:
    """Test statements the analyzer does not handle"""

    def test_other_statements_are_ignored(self):
        """Test branches and loops leave the scope untouched"""
        branch = syntax.OtherStmt("If", [
            assign("x", syntax.IntLiteral(1, line=2), line=2),
        ], line=1)
        scope = analyze([branch])
        assert scope.lookup_variable("x") == []

    def test_visit_node_single_statement(self):
        """Test statements can be fed one at a time"""
        analyzer = Analyzer()
        analyzer.visit_node(assign("a", syntax.IntLiteral(1, line=1), line=1))
        assert analyzer.scope.latest_value("a").value == 1


class TestEndToEnd:
    """Test the documented end-to-end scenario"""

    def test_foo_scenario(self):
        """Test values flow from assignments into call specializations"""
        scope = analyze([
            function("foo", syntax.Param("value", type_annotation="mixed", line=1), line=1),
            call("foo", arg(syntax.IntLiteral(42, line=2), "value"), line=2),
            assign("a", syntax.IntLiteral(23, line=3), line=3),
            call("foo", arg(syntax.Variable("a", line=4), "value"), line=4),
            assign("a", syntax.StringLiteral("foobar", line=5), line=5),
        ])

        history = scope.lookup_variable("a")
        assert [(v.value, v.type_label, v.line) for v in history] == [
            (23, "int", 3),
            ("foobar", "string", 5),
        ]

        foo = scope.lookup_nested_scope("foo")
        assert sorted(foo.specialized) == [2, 3]
        first = foo.lookup_specialization(2).lookup_parameter("value")
        second = foo.lookup_specialization(3).lookup_parameter("value")
        assert (first.value, first.type_label) == (42, "int")
        assert (second.value, second.type_label) == (23, "int")
