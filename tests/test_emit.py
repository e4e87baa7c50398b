"""Generator tests: grouping, names, literals, and statement layout."""

from dataclasses import dataclass

import pytest

from rjs import GeneratorError, generate, translate
from rjs.ast import (
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
    Program,
    Return,
    Stmt,
    Unary,
    VariableDeclaration,
    VariableDeclarator,
    While,
)

a = Identifier("a")
b = Identifier("b")
c = Identifier("c")


@dataclass
class Bogus(Expr):
    pass


@dataclass
class BogusStmt(Stmt):
    pass


def test_nested_binary_is_always_grouped():
    assert generate(Binary("+", Binary("+", a, b), c)) == "(a + b) + c"
    assert generate(Binary("+", a, Binary("*", b, c))) == "a + (b * c)"
    assert generate(Binary("&&", Binary("==", a, b), c)) == "(a == b) && c"


def test_looser_operand_is_grouped():
    assert generate(Binary("+", Assignment("=", a, Literal(1.0)), Literal(2.0))) == (
        "(a = 1) + 2"
    )
    assert generate(Unary("-", Binary("+", a, b))) == "-(a + b)"
    assert generate(Member(Binary("+", a, b), Identifier("x"), False)) == "(a + b).x"
    assert generate(Call(Unary("!", a), [])) == "(!a)()"


def test_double_negation_keeps_a_space():
    assert generate(Unary("-", Unary("-", a))) == "- -a"
    assert generate(Unary("!", Unary("!", a))) == "!!a"


def test_number_object_is_grouped():
    assert generate(Member(Literal(1.0), Identifier("x"), False)) == "(1).x"


def test_member_and_call():
    assert generate(Member(a, Literal(0.0), True)) == "a[0]"
    assert generate(Call(Member(a, b, False), [Literal(1.0), c])) == "a.b(1, c)"
    assert generate(Assignment("=", a, Assignment("=", b, c))) == "a = b = c"


@pytest.mark.parametrize(
    "value,text",
    [
        (3.0, "3"),
        (2.5, "2.5"),
        (0.0, "0"),
        (0.1, "0.1"),
        (0.00001, "0.00001"),
        (1e-7, "1e-7"),
        (1.5e-7, "1.5e-7"),
        (1e16, "10000000000000000"),
        (123456789012345680000.0, "123456789012345680000"),
        (1e21, "1e+21"),
        (2.5e30, "2.5e+30"),
        (float("inf"), "Infinity"),
        (float("nan"), "NaN"),
    ],
)
def test_number_text(value: float, text: str):
    assert generate(Literal(value)) == text


def test_other_literals():
    assert generate(Literal(True)) == "true"
    assert generate(Literal(False)) == "false"
    assert generate(Literal(None)) == "null"


def test_strings_are_double_quoted():
    assert generate(Literal("it's")) == '"it\'s"'
    assert generate(Literal('a"b')) == '"a\\"b"'
    assert generate(Literal('a\\"b')) == '"a\\"b"'
    assert generate(Literal("a\\nb")) == '"a\\nb"'
    assert generate(Literal("a\\")) == '"a\\\\"'


@pytest.mark.parametrize(
    "name,text",
    [
        ("Щука", "Shchuka"),
        ("ёж", "yozh"),
        ("объект", "obekt"),
        ("имя_2", "imya_2"),
        ("предупреждение", "warn"),
        ("консоль", "console"),
        ("plain_name", "plain_name"),
        ("$x", "$x"),
        ("иф", "if_"),
        ("ь", "_"),
        ("ъ1", "_1"),
    ],
)
def test_names(name: str, text: str):
    assert generate(Identifier(name)) == text


def test_declarations_render_var_and_const():
    decl = VariableDeclaration(
        "let", [VariableDeclarator(a, Literal(1.0)), VariableDeclarator(b, None)]
    )
    assert generate(decl) == "var a = 1, b;"
    assert generate(VariableDeclaration("const", [VariableDeclarator(c, a)])) == (
        "const c = a;"
    )


def test_non_block_bodies_get_braces():
    stmt = While(a, ExpressionStatement(Call(b, [])))
    assert generate(stmt) == "while (a) {\n  b();\n}"


def test_empty_bodies():
    assert generate(Block([])) == "{}"
    assert generate(FunctionDeclaration(Identifier("f"), [], Block([]))) == "function f() {}"
    assert generate(For(None, None, None, Block([]))) == "for (;;) {}"


def test_for_clauses():
    stmt = For(
        VariableDeclaration("let", [VariableDeclarator(Identifier("и"), Literal(0.0))]),
        Binary("<", Identifier("и"), Literal(3.0)),
        Assignment("=", Identifier("и"), Binary("+", Identifier("и"), Literal(1.0))),
        Return(None),
    )
    assert generate(stmt) == "for (var i = 0; i < 3; i = i + 1) {\n  return;\n}"


def test_else_if_chain_is_flattened():
    stmt = If(a, Return(a), If(b, Return(b), Block([Return(None)])))
    assert generate(stmt) == (
        "if (a) {\n"
        "  return a;\n"
        "} else if (b) {\n"
        "  return b;\n"
        "} else {\n"
        "  return;\n"
        "}"
    )


def test_nested_indentation():
    fn = FunctionDeclaration(
        Identifier("f"),
        [Identifier("х")],
        Block([If(Identifier("х"), Block([Return(Literal(1.0))]), None)]),
    )
    assert generate(fn) == "function f(kh) {\n  if (kh) {\n    return 1;\n  }\n}"


def test_program_ends_with_newline():
    prog = Program([ExpressionStatement(a), ExpressionStatement(b)])
    assert generate(prog) == "a;\nb;\n"
    assert generate(Program([])) == ""


def test_unknown_nodes_raise():
    with pytest.raises(GeneratorError) as exc_info:
        generate(Binary("+", a, Bogus()))
    assert exc_info.value.node_kind == "Bogus"
    with pytest.raises(GeneratorError):
        generate(Program([BogusStmt()]))
    with pytest.raises(GeneratorError):
        generate(Binary("**", a, b))
    with pytest.raises(GeneratorError):
        generate(Literal([1]))  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "source",
    [
        "если (иф) { вернуть ь; }",
        "а = -(-б);",
        "x = (1).y + 0.5;",
        "f(а = 1, 'it\\'s');",
        "для (;;) если (а) б(); иначе в();",
        "переменная а = 1000000000000000000000;",
        "переменная а = 0.0000001;",
    ],
)
def test_translation_is_a_fixed_point(source: str):
    once = translate(source)
    assert translate(once) == once
