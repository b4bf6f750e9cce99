"""Lua front end for ValueFlow

Translates luaparser's AST into ValueFlow syntax nodes:
- Names become variable references, numbers and strings become literals
- Table constructors become array literals
- Assignments are split into one statement per target
- Calls get a static callee only when the callee is a plain name
- Named functions become function declarations with their parameters

Nodes without a dedicated translation keep their children under a
generic node so the analyzer can still look inside them.
"""

from itertools import zip_longest
from pathlib import Path
from typing import Any, List, Union

try:
    from luaparser import ast as luaparser_ast
    from luaparser import astnodes
except ImportError:
    raise ImportError(
        "luaparser is required. Install with: pip install luaparser"
    )

from valueflow.core import syntax


VARARGS_NAME = "..."


class LuaTreeAdapter:
    """Converts a Lua chunk into a list of ValueFlow statements

    Uses double dispatch on the luaparser node class name; nodes without a
    ``visit_<ClassName>`` method go through generic_visit.
    """

    def __init__(self) -> None:
        self._current_line = 0

    def convert_chunk(self, chunk: astnodes.Chunk) -> List[syntax.Node]:
        """Convert the top-level block of a chunk

        Args:
            chunk: Parsed Lua chunk

        Returns:
            Top-level statements in source order
        """
        self._current_line = 0
        return self.convert_statements(chunk.body.body)

    def convert_statements(self, nodes: List[astnodes.Node]) -> List[syntax.Node]:
        statements = []
        for node in nodes:
            if isinstance(node, astnodes.Comment):
                continue
            line = self._get_line_number(node) or self._first_descendant_line(node)
            if line:
                self._current_line = line
            converted = self.visit(node)
            for stmt in (converted if isinstance(converted, list) else [converted]):
                if isinstance(stmt, syntax.OtherExpr):
                    stmt = syntax.OtherStmt(stmt.name, stmt.operands, line=stmt.line)
                statements.append(stmt)
        return statements

    def visit(self, node: Any) -> Union[syntax.Node, List[syntax.Node]]:
        """Visit a node using double-dispatch pattern

        Args:
            node: luaparser node

        Returns:
            Converted node (a list of nodes for multi-target assignments)
        """
        saved_line = self._current_line
        line = self._get_line_number(node)
        if line:
            self._current_line = line
        try:
            method = getattr(self, f"visit_{node.__class__.__name__}", self.generic_visit)
            return method(node)
        finally:
            self._current_line = saved_line

    def generic_visit(self, node: Any) -> syntax.Node:
        """Keep an unrecognized node with its converted children"""
        operands = []
        for child in self.get_children(node):
            converted = self.visit(child)
            if isinstance(converted, list):
                operands.extend(converted)
            else:
                operands.append(converted)
        return syntax.OtherExpr(node.__class__.__name__, operands, line=self._current_line)

    def get_children(self, node: Any) -> list:
        """Get all child nodes of a node

        Args:
            node: luaparser node

        Returns:
            List of child nodes, comments excluded
        """
        children = []
        if hasattr(node, "__dict__"):
            for key, value in node.__dict__.items():
                if key.startswith("_") or key == "comments":
                    continue
                items = value if isinstance(value, list) else [value]
                for item in items:
                    if isinstance(item, astnodes.Node) and not isinstance(item, astnodes.Comment):
                        children.append(item)
        return children

    def visit_Name(self, node: astnodes.Name) -> syntax.Node:
        return syntax.Variable(node.id, line=self._current_line)

    def visit_Number(self, node: astnodes.Number) -> syntax.Node:
        if isinstance(node.n, int) and not isinstance(node.n, bool):
            return syntax.IntLiteral(node.n, line=self._current_line)
        return syntax.FloatLiteral(float(node.n), line=self._current_line)

    def visit_String(self, node: astnodes.String) -> syntax.Node:
        string_value = node.s.decode() if isinstance(node.s, bytes) else node.s
        return syntax.StringLiteral(string_value, line=self._current_line)

    def visit_Table(self, node: astnodes.Table) -> syntax.Node:
        line = self._current_line
        items = [self._convert_field(f) for f in (node.fields or [])]
        return syntax.ArrayLiteral(items, line=line)

    def _convert_field(self, field: astnodes.Field) -> syntax.ArrayItem:
        line = self._get_line_number(field) or self._current_line
        value = self.visit(field.value)
        key = field.key
        between_brackets = getattr(field, "between_brackets", False)

        if key is None:
            return syntax.ArrayItem(value, line=line)
        if not between_brackets and isinstance(key, astnodes.Name):
            # {name = value}
            return syntax.ArrayItem(value, syntax.StringLiteral(key.id, line=line), line=line)
        if not between_brackets and isinstance(key, astnodes.Number):
            # Positional field numbered by the parser
            return syntax.ArrayItem(value, line=line)
        return syntax.ArrayItem(value, self.visit(key), line=line)

    def visit_Index(self, node: astnodes.Index) -> syntax.Node:
        notation = getattr(node, "notation", None)
        if getattr(notation, "name", None) == "DOT" and isinstance(node.idx, astnodes.Name):
            idx = syntax.Name(node.idx.id, line=self._current_line)
        else:
            idx = self.visit(node.idx)
        return syntax.OtherExpr("Index", [self.visit(node.value), idx], line=self._current_line)

    def visit_Call(self, node: astnodes.Call) -> syntax.Node:
        line = self._current_line
        if isinstance(node.func, astnodes.Name):
            func = syntax.Name(node.func.id, line=line)
        else:
            func = self.visit(node.func)
        args = [syntax.Argument(self.visit(arg), line=line) for arg in node.args]
        return syntax.Call(func, args, line=line)

    def visit_Invoke(self, node: astnodes.Invoke) -> syntax.Node:
        line = self._current_line
        func = syntax.OtherExpr("Invoke", [self.visit(node.source)], line=line)
        args = [syntax.Argument(self.visit(arg), line=line) for arg in node.args]
        return syntax.Call(func, args, line=line)

    def visit_Assign(self, node: astnodes.Assign) -> List[syntax.Node]:
        line = self._current_line
        statements = []
        for target, value in zip_longest(node.targets, node.values or []):
            if target is None:
                break
            converted_value = (
                self.visit(value) if value is not None
                else syntax.OtherExpr("Nil", line=line)
            )
            statements.append(syntax.Assign(self.visit(target), converted_value, line=line))
        return statements

    def visit_LocalAssign(self, node: astnodes.LocalAssign) -> List[syntax.Node]:
        return self.visit_Assign(node)

    def visit_Function(self, node: astnodes.Function) -> syntax.Node:
        if not isinstance(node.name, astnodes.Name):
            # function t.f() ... end assigns into a table
            return self.generic_visit(node)

        line = self._current_line
        params = []
        for arg in node.args:
            if isinstance(arg, astnodes.Name):
                params.append(syntax.Param(arg.id, line=line))
            elif isinstance(arg, astnodes.Varargs):
                params.append(syntax.Param(VARARGS_NAME, variadic=True, line=line))

        body = self.convert_statements(node.body.body)
        return syntax.FunctionDecl(node.name.id, params, body, line=line)

    def visit_LocalFunction(self, node: astnodes.LocalFunction) -> syntax.Node:
        return self.visit_Function(node)

    def visit_AnonymousFunction(self, node: astnodes.AnonymousFunction) -> syntax.Node:
        # Closure bodies are opaque; the value stays unresolved
        return syntax.OtherExpr("AnonymousFunction", line=self._current_line)

    def _get_line_number(self, node: Any) -> int:
        """Get the source line of a node

        Returns:
            Line number (1-based) or 0 if not available
        """
        line = getattr(node, "line", None)
        if isinstance(line, int) and line > 0:
            return line
        if hasattr(node, '_first_token') and node._first_token:
            return int(node._first_token.line)
        return 0

    def _first_descendant_line(self, node: Any) -> int:
        for child in self.get_children(node):
            line = self._get_line_number(child) or self._first_descendant_line(child)
            if line:
                return line
        return 0


def parse_source(source: str) -> List[syntax.Node]:
    """Parse Lua source into ValueFlow statements

    Args:
        source: Lua source code

    Returns:
        Top-level statements

    Raises:
        SyntaxException: If the source is not valid Lua
    """
    tree = luaparser_ast.parse(source)
    return LuaTreeAdapter().convert_chunk(tree)


def parse_file(input_file: Path) -> List[syntax.Node]:
    """Parse a Lua file into ValueFlow statements

    Args:
        input_file: Path to Lua source file

    Returns:
        Top-level statements

    Raises:
        FileNotFoundError: If input_file doesn't exist
        SyntaxException: If the source is not valid Lua
    """
    if not input_file.exists():
        raise FileNotFoundError(f"Input file not found: {input_file}")

    with open(input_file, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_source(source)
