"""Generator: renders the AST as JavaScript source.

Total over the node classes in `rjs/ast.py`; anything else raises
GeneratorError instead of producing best-effort text.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from .ast import (
    Assignment,
    Binary,
    Block,
    Call,
    Expr,
    ExpressionStatement,
    For,
    FunctionDeclaration,
    Identifier,
    If,
    Literal,
    Member,
    Node,
    Program,
    Return,
    Stmt,
    Unary,
    VariableDeclaration,
    VariableDeclarator,
    While,
)
from .errors import GeneratorError
from .tables import RUSSIAN, Dialect

logger = logging.getLogger(__name__)


def generate(node: Node, dialect: Dialect = RUSSIAN) -> str:
    """Render any AST node as JavaScript text."""
    return _Emitter(dialect).emit(node)


class _Emitter:
    _INDENT: str = "  "

    # Expression precedence (higher binds tighter)
    _PREC_ASSIGN: int = 1
    _PREC_OR: int = 2
    _PREC_AND: int = 3
    _PREC_EQUALITY: int = 4
    _PREC_COMPARISON: int = 5
    _PREC_TERM: int = 6
    _PREC_FACTOR: int = 7
    _PREC_UNARY: int = 8
    _PREC_POSTFIX: int = 9
    _PREC_PRIMARY: int = 10

    _BIN_PREC: dict[str, int] = {
        "||": _PREC_OR,
        "&&": _PREC_AND,
        "==": _PREC_EQUALITY,
        "!=": _PREC_EQUALITY,
        "===": _PREC_EQUALITY,
        "!==": _PREC_EQUALITY,
        "<": _PREC_COMPARISON,
        "<=": _PREC_COMPARISON,
        ">": _PREC_COMPARISON,
        ">=": _PREC_COMPARISON,
        "+": _PREC_TERM,
        "-": _PREC_TERM,
        "*": _PREC_FACTOR,
        "/": _PREC_FACTOR,
        "%": _PREC_FACTOR,
    }

    def __init__(self, dialect: Dialect) -> None:
        self._dialect: Dialect = dialect
        self._lines: list[str] = []
        self._indent_level: int = 0

    # ── Public ──────────────────────────────────────────────

    def emit(self, node: Node) -> str:
        if isinstance(node, Program):
            return self.emit_program(node)
        if isinstance(node, Stmt):
            self._lines = []
            self._indent_level = 0
            self._emit_stmt(node)
            return "\n".join(self._lines)
        if isinstance(node, VariableDeclarator):
            return self._render_declarator(node)
        if isinstance(node, Expr):
            return self._render_expr(node, self._PREC_ASSIGN)
        raise GeneratorError(type(node).__name__)

    def emit_program(self, program: Program) -> str:
        self._lines = []
        self._indent_level = 0
        for stmt in program.body:
            self._emit_stmt(stmt)
        logger.debug("generated %d lines", len(self._lines))
        text = "\n".join(self._lines)
        if text == "":
            return ""
        return text + "\n"

    # ── Lines / Blocks ──────────────────────────────────────

    def _emit_line(self, line: str) -> None:
        self._lines.append(self._INDENT * self._indent_level + line)

    def _emit_stmts(self, stmts: list[Stmt]) -> None:
        self._indent_level += 1
        for stmt in stmts:
            self._emit_stmt(stmt)
        self._indent_level -= 1

    def _body_stmts(self, body: Stmt) -> list[Stmt]:
        # Non-block bodies get braces so a later else cannot re-associate.
        if isinstance(body, Block):
            return body.body
        return [body]

    def _emit_braced(self, header: str, body: Stmt) -> None:
        stmts = self._body_stmts(body)
        opener = header + " {" if header != "" else "{"
        if len(stmts) == 0:
            self._emit_line(opener + "}")
            return
        self._emit_line(opener)
        self._emit_stmts(stmts)
        self._emit_line("}")

    # ── Stmts ───────────────────────────────────────────────

    def _emit_stmt(self, stmt: Stmt) -> None:
        if isinstance(stmt, VariableDeclaration):
            self._emit_line(self._render_declaration(stmt) + ";")
            return
        if isinstance(stmt, ExpressionStatement):
            self._emit_line(self._render_expr(stmt.expression, self._PREC_ASSIGN) + ";")
            return
        if isinstance(stmt, Return):
            if stmt.argument is None:
                self._emit_line("return;")
            else:
                self._emit_line(
                    "return " + self._render_expr(stmt.argument, self._PREC_ASSIGN) + ";"
                )
            return
        if isinstance(stmt, FunctionDeclaration):
            params: list[str] = []
            for p in stmt.params:
                params.append(self._render_name(p.name))
            header = (
                "function "
                + self._render_name(stmt.name.name)
                + "("
                + ", ".join(params)
                + ")"
            )
            self._emit_braced(header, stmt.body)
            return
        if isinstance(stmt, Block):
            self._emit_braced("", stmt)
            return
        if isinstance(stmt, If):
            self._emit_if(stmt)
            return
        if isinstance(stmt, For):
            self._emit_braced("for (" + self._render_for_clauses(stmt) + ")", stmt.body)
            return
        if isinstance(stmt, While):
            test = self._render_expr(stmt.test, self._PREC_ASSIGN)
            self._emit_braced("while (" + test + ")", stmt.body)
            return
        raise GeneratorError(type(stmt).__name__)

    def _emit_if(self, stmt: If) -> None:
        header = "if (" + self._render_expr(stmt.test, self._PREC_ASSIGN) + ")"
        if stmt.alternate is None:
            self._emit_braced(header, stmt.consequent)
            return
        self._emit_line(header + " {")
        self._emit_stmts(self._body_stmts(stmt.consequent))

        alternate: Stmt | None = stmt.alternate
        while alternate is not None:
            if isinstance(alternate, If):
                test = self._render_expr(alternate.test, self._PREC_ASSIGN)
                self._emit_line("} else if (" + test + ") {")
                self._emit_stmts(self._body_stmts(alternate.consequent))
                alternate = alternate.alternate
            else:
                self._emit_line("} else {")
                self._emit_stmts(self._body_stmts(alternate))
                alternate = None
        self._emit_line("}")

    def _render_for_clauses(self, stmt: For) -> str:
        if stmt.init is None:
            init = ""
        elif isinstance(stmt.init, VariableDeclaration):
            init = self._render_declaration(stmt.init)
        elif isinstance(stmt.init, ExpressionStatement):
            init = self._render_expr(stmt.init.expression, self._PREC_ASSIGN)
        else:
            raise GeneratorError(type(stmt.init).__name__)
        text = init + ";"
        if stmt.test is not None:
            text += " " + self._render_expr(stmt.test, self._PREC_ASSIGN)
        text += ";"
        if stmt.update is not None:
            text += " " + self._render_expr(stmt.update, self._PREC_ASSIGN)
        return text

    def _render_declaration(self, decl: VariableDeclaration) -> str:
        # let-kind bindings always come out as var
        keyword = "const" if decl.kind == "const" else "var"
        parts: list[str] = []
        for d in decl.declarators:
            parts.append(self._render_declarator(d))
        return keyword + " " + ", ".join(parts)

    def _render_declarator(self, decl: VariableDeclarator) -> str:
        name = self._render_name(decl.id.name)
        if decl.init is None:
            return name
        return name + " = " + self._render_expr(decl.init, self._PREC_ASSIGN)

    # ── Exprs ───────────────────────────────────────────────

    def _expr_prec(self, expr: Expr) -> int:
        if isinstance(expr, Assignment):
            return self._PREC_ASSIGN
        if isinstance(expr, Binary):
            if expr.operator not in self._BIN_PREC:
                raise GeneratorError("Binary(" + expr.operator + ")")
            return self._BIN_PREC[expr.operator]
        if isinstance(expr, Unary):
            return self._PREC_UNARY
        if isinstance(expr, (Call, Member)):
            return self._PREC_POSTFIX
        return self._PREC_PRIMARY

    def _render_expr(self, expr: Expr, parent_prec: int) -> str:
        text = self._render_expr_inner(expr)
        if self._expr_prec(expr) < parent_prec:
            return "(" + text + ")"
        return text

    def _render_operand(self, expr: Expr, parent_prec: int) -> str:
        # Binary operands of a binary operator are always grouped explicitly.
        if isinstance(expr, Binary):
            return "(" + self._render_expr_inner(expr) + ")"
        return self._render_expr(expr, parent_prec)

    def _render_expr_inner(self, expr: Expr) -> str:
        if isinstance(expr, Literal):
            return self._render_literal(expr)
        if isinstance(expr, Identifier):
            return self._render_name(expr.name)
        if isinstance(expr, Assignment):
            left = self._render_name(expr.left.name)
            right = self._render_expr(expr.right, self._PREC_ASSIGN)
            return left + " " + expr.operator + " " + right
        if isinstance(expr, Binary):
            op_prec = self._expr_prec(expr)
            left = self._render_operand(expr.left, op_prec)
            right = self._render_operand(expr.right, op_prec)
            return left + " " + expr.operator + " " + right
        if isinstance(expr, Unary):
            argument = self._render_expr(expr.argument, self._PREC_UNARY)
            if expr.operator == "-" and argument.startswith("-"):
                return expr.operator + " " + argument
            return expr.operator + argument
        if isinstance(expr, Member):
            obj = self._render_object(expr.object)
            if expr.computed:
                return obj + "[" + self._render_expr(expr.property, self._PREC_ASSIGN) + "]"
            if not isinstance(expr.property, Identifier):
                raise GeneratorError("Member(" + type(expr.property).__name__ + ")")
            return obj + "." + self._render_name(expr.property.name)
        if isinstance(expr, Call):
            callee = self._render_object(expr.callee)
            args: list[str] = []
            for a in expr.arguments:
                args.append(self._render_expr(a, self._PREC_ASSIGN))
            return callee + "(" + ", ".join(args) + ")"
        raise GeneratorError(type(expr).__name__)

    def _render_object(self, expr: Expr) -> str:
        # 1.x would lex as a number followed by garbage
        if isinstance(expr, Literal) and self._is_number(expr.value):
            return "(" + self._render_literal(expr) + ")"
        return self._render_expr(expr, self._PREC_POSTFIX)

    # ── Names ───────────────────────────────────────────────

    def _render_name(self, name: str) -> str:
        alias = self._dialect.builtin_aliases.get(name)
        if alias is not None:
            return alias
        out = ""
        for ch in name:
            out += self._dialect.transliteration.get(ch, ch)
        if out == name:
            return out
        if out == "" or (out[0] >= "0" and out[0] <= "9"):
            out = "_" + out
        if self._dialect.keyword(out) is not None:
            out += "_"
        return out

    # ── Literals ────────────────────────────────────────────

    def _is_number(self, value: object) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    def _render_literal(self, lit: Literal) -> str:
        value = lit.value
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return self._quote_string(value)
        if self._is_number(value):
            return self._format_number(float(value))
        raise GeneratorError("Literal(" + type(value).__name__ + ")")

    def _quote_string(self, body: str) -> str:
        out = '"'
        i = 0
        while i < len(body):
            ch = body[i]
            if ch == "\\" and i + 1 < len(body):
                out += body[i : i + 2]
                i += 2
                continue
            if ch == "\\":
                out += "\\\\"
            elif ch == '"':
                out += '\\"'
            else:
                out += ch
            i += 1
        return out + '"'

    def _format_number(self, value: float) -> str:
        """JavaScript's Number#toString for finite and special values."""
        if value != value:
            return "NaN"
        if value == float("inf"):
            return "Infinity"
        if value == float("-inf"):
            return "-Infinity"
        if value == 0:
            return "0"
        text = repr(value)
        if "e" not in text:
            if text.endswith(".0"):
                return text[:-2]
            return text
        if 1e-6 <= abs(value) < 1e21:
            return format(Decimal(text), "f")
        mantissa, exp = text.split("e")
        sign = "-" if exp.startswith("-") else "+"
        digits = exp.lstrip("+-").lstrip("0")
        if mantissa.endswith(".0"):
            mantissa = mantissa[:-2]
        return mantissa + "e" + sign + digits
