"""AST: parse-time node definitions.

The variant set is closed: the generator handles exactly these classes and
nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass, fields


# ============================================================
# BASES
# ============================================================


@dataclass
class Node:
    """Base for all nodes."""


@dataclass
class Stmt(Node):
    """Base for all statements."""


@dataclass
class Expr(Node):
    """Base for all expressions."""


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass
class Identifier(Expr):
    """Name as written in the source."""

    name: str


@dataclass
class Literal(Expr):
    """Number (float), string body, bool, or None for null."""

    value: float | str | bool | None


@dataclass
class Assignment(Expr):
    """left = right. The target is always a plain identifier."""

    operator: str
    left: Identifier
    right: Expr


@dataclass
class Binary(Expr):
    """left op right."""

    operator: str
    left: Expr
    right: Expr


@dataclass
class Unary(Expr):
    """op argument."""

    operator: str
    argument: Expr
    prefix: bool = True


@dataclass
class Call(Expr):
    """callee(arguments)."""

    callee: Expr
    arguments: list[Expr]


@dataclass
class Member(Expr):
    """object.property, or object[property] when computed."""

    object: Expr
    property: Expr
    computed: bool


# ============================================================
# STATEMENTS
# ============================================================


@dataclass
class Block(Stmt):
    """{ body }."""

    body: list[Stmt]


@dataclass
class VariableDeclarator(Node):
    """id = init?."""

    id: Identifier
    init: Expr | None


@dataclass
class VariableDeclaration(Stmt):
    """let/const declarators. kind is "let" or "const"."""

    kind: str
    declarators: list[VariableDeclarator]


@dataclass
class FunctionDeclaration(Stmt):
    """function name(params) { body }."""

    name: Identifier
    params: list[Identifier]
    body: Block


@dataclass
class If(Stmt):
    """if (test) consequent else alternate."""

    test: Expr
    consequent: Stmt
    alternate: Stmt | None


@dataclass
class For(Stmt):
    """for (init; test; update) body."""

    init: Stmt | None
    test: Expr | None
    update: Expr | None
    body: Stmt


@dataclass
class While(Stmt):
    """while (test) body."""

    test: Expr
    body: Stmt


@dataclass
class Return(Stmt):
    """return argument?."""

    argument: Expr | None


@dataclass
class ExpressionStatement(Stmt):
    """Bare expression as statement."""

    expression: Expr


@dataclass
class Program(Node):
    """Top-level statement list."""

    body: list[Stmt]


NODE_TYPES: tuple[type[Node], ...] = (
    Program,
    FunctionDeclaration,
    VariableDeclaration,
    VariableDeclarator,
    Block,
    If,
    For,
    While,
    Return,
    ExpressionStatement,
    Assignment,
    Binary,
    Unary,
    Identifier,
    Literal,
    Call,
    Member,
)


def to_dict(node: object) -> object:
    """Convert a node (or list of nodes) into plain dicts tagged with "type"."""
    if isinstance(node, list):
        return [to_dict(n) for n in node]
    if isinstance(node, Node):
        d: dict[str, object] = {"type": type(node).__name__}
        for f in fields(node):
            d[f.name] = to_dict(getattr(node, f.name))
        return d
    return node
