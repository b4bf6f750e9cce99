"""Syntax tree consumed by the ValueFlow analyzer

A small closed set of node variants. Front ends translate their parser's
tree into these nodes; the analyzer never looks at parser objects directly.
Each node knows its source line and can enumerate its immediate children
in left-to-right order, which the value detector uses for nodes it has no
specific rule for.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Node:
    """Base syntax node"""
    line: int = field(default=0, kw_only=True)

    def children(self) -> List['Node']:
        """Get immediate child nodes in structural order"""
        return []

    @property
    def kind(self) -> str:
        return self.__class__.__name__


# Expressions

@dataclass
class Variable(Node):
    """Reference to a variable"""
    name: str


@dataclass
class Name(Node):
    """Static identifier naming a function"""
    identifier: str


@dataclass
class IntLiteral(Node):
    value: int


@dataclass
class FloatLiteral(Node):
    value: float


@dataclass
class StringLiteral(Node):
    value: str


@dataclass
class ArrayItem(Node):
    """Array element; key is None for positional elements"""
    value: Node
    key: Optional[Node] = None

    def children(self) -> List[Node]:
        if self.key is None:
            return [self.value]
        return [self.key, self.value]


@dataclass
class ArrayLiteral(Node):
    items: List[ArrayItem] = field(default_factory=list)

    def children(self) -> List[Node]:
        return list(self.items)


@dataclass
class Argument(Node):
    """Call argument; name is set for named arguments"""
    value: Node
    name: Optional[str] = None

    def children(self) -> List[Node]:
        return [self.value]


@dataclass
class Call(Node):
    """Function call, as an expression or as a statement"""
    func: Node
    args: List[Argument] = field(default_factory=list)

    def static_name(self) -> Optional[str]:
        """Get the callee name, or None for a dynamic call target"""
        if isinstance(self.func, Name):
            return self.func.identifier
        return None

    def children(self) -> List[Node]:
        return [self.func, *self.args]


@dataclass
class OtherExpr(Node):
    """Any expression without a dedicated variant (operators, casts, ...)"""
    name: str
    operands: List[Node] = field(default_factory=list)

    @property
    def kind(self) -> str:
        return self.name

    def children(self) -> List[Node]:
        return list(self.operands)


# Statements

@dataclass
class Assign(Node):
    target: Node
    value: Node

    def children(self) -> List[Node]:
        return [self.target, self.value]


@dataclass
class Param(Node):
    """Declared function parameter"""
    name: str
    default: Optional[Node] = None
    type_annotation: Optional[str] = None
    variadic: bool = False

    def children(self) -> List[Node]:
        return [self.default] if self.default is not None else []


@dataclass
class FunctionDecl(Node):
    name: str
    params: List[Param] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)

    def children(self) -> List[Node]:
        return [*self.params, *self.body]


@dataclass
class OtherStmt(Node):
    """Any statement without a dedicated variant (if, loops, return, ...)"""
    name: str
    operands: List[Node] = field(default_factory=list)

    @property
    def kind(self) -> str:
        return self.name

    def children(self) -> List[Node]:
        return list(self.operands)
