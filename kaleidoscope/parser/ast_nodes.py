"""
Abstract Syntax Tree node definitions for Kaleidoscope.

Every node is a frozen dataclass: nodes are built once by the parser and
compared structurally afterwards. Child sequences are stored as tuples so a
returned tree cannot be modified or shared by accident.

Expression variants:
    NumberExpr    numeric literal
    VariableExpr  reference to a parameter
    BinaryExpr    `lhs op rhs`
    CallExpr      `name(arg, ...)`

Top-level nodes:
    Prototype     function name and parameter names
    Function      prototype plus body; a nameless prototype marks a
                  top-level expression
"""

from dataclasses import dataclass
from typing import Tuple, Union


class Expr:
    """Base class for expression nodes."""
    __slots__ = ()


@dataclass(frozen=True)
class NumberExpr(Expr):
    """Numeric literal, e.g. `1.0`."""
    value: float


@dataclass(frozen=True)
class VariableExpr(Expr):
    """Reference to a variable, e.g. `x`."""
    name: str


@dataclass(frozen=True)
class BinaryExpr(Expr):
    """Binary operation; `op` is always a character from the precedence table."""
    op: str
    lhs: Expr
    rhs: Expr


@dataclass(frozen=True)
class CallExpr(Expr):
    """Function call. Arity is checked by code generation, not here."""
    name: str
    args: Tuple[Expr, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'args', tuple(self.args))


@dataclass(frozen=True)
class Prototype:
    """Function signature: a name and the names of its parameters."""
    name: str
    params: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'params', tuple(self.params))

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def is_anonymous(self) -> bool:
        """True for the synthetic prototype wrapping a top-level expression."""
        return self.name == "" and not self.params


@dataclass(frozen=True)
class Function:
    """Function definition (or a wrapped top-level expression)."""
    prototype: Prototype
    body: Expr

    @classmethod
    def anonymous(cls, body: Expr) -> 'Function':
        """Wrap a top-level expression in a nameless, parameterless function."""
        return cls(Prototype("", ()), body)

    @property
    def is_anonymous(self) -> bool:
        return self.prototype.is_anonymous


Node = Union[Expr, Prototype, Function]


def dump(node: Node) -> str:
    """
    Render a node as an S-expression.

    >>> dump(Function.anonymous(BinaryExpr('+', NumberExpr(1.0), VariableExpr('x'))))
    '(toplevel (+ 1.0 x))'
    """
    if isinstance(node, NumberExpr):
        return repr(node.value)
    if isinstance(node, VariableExpr):
        return node.name
    if isinstance(node, BinaryExpr):
        return f"({node.op} {dump(node.lhs)} {dump(node.rhs)})"
    if isinstance(node, CallExpr):
        parts = ["call", node.name] + [dump(arg) for arg in node.args]
        return "(" + " ".join(parts) + ")"
    if isinstance(node, Prototype):
        return f"(extern {node.name} ({' '.join(node.params)}))"
    if isinstance(node, Function):
        if node.is_anonymous:
            return f"(toplevel {dump(node.body)})"
        proto = node.prototype
        return f"(def {proto.name} ({' '.join(proto.params)}) {dump(node.body)})"
    raise TypeError(f"Not an AST node: {node!r}")
