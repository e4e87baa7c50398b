"""Parser tests: tree shapes, console calls, limits, and error recovery."""

from types import MappingProxyType

import pytest

from rjs import ParseError, Parser, RUSSIAN, parse, tokenize
from rjs.ast import (
    Assignment,
    Binary,
    Block,
    Call,
    ExpressionStatement,
    For,
    FunctionDeclaration,
    Identifier,
    If,
    Literal,
    Member,
    Program,
    Unary,
    VariableDeclaration,
    VariableDeclarator,
    While,
    to_dict,
)
from rjs.tables import Dialect


def parse_src(source: str, dialect: Dialect = RUSSIAN) -> Program:
    return parse(tokenize(source, dialect), dialect)


def parse_expr(source: str):
    stmt = parse_src(source + ";").body[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


def test_factor_binds_tighter_than_term():
    assert parse_expr("1 + 2 * 3") == Binary(
        "+", Literal(1.0), Binary("*", Literal(2.0), Literal(3.0))
    )


def test_binary_operators_associate_left():
    assert parse_expr("a - b - c") == Binary(
        "-", Binary("-", Identifier("a"), Identifier("b")), Identifier("c")
    )


def test_logical_precedence():
    assert parse_expr("a || b && c == d") == Binary(
        "||",
        Identifier("a"),
        Binary("&&", Identifier("b"), Binary("==", Identifier("c"), Identifier("d"))),
    )


def test_assignment_associates_right():
    assert parse_expr("a = b = 1") == Assignment(
        "=", Identifier("a"), Assignment("=", Identifier("b"), Literal(1.0))
    )


def test_unary_nests():
    assert parse_expr("!-x") == Unary("!", Unary("-", Identifier("x")))


def test_parentheses_group():
    assert parse_expr("(1 + 2) * 3") == Binary(
        "*", Binary("+", Literal(1.0), Literal(2.0)), Literal(3.0)
    )


def test_postfix_chain():
    assert parse_expr("a.b[0](c)") == Call(
        Member(Member(Identifier("a"), Identifier("b"), False), Literal(0.0), True),
        [Identifier("c")],
    )


def test_literals():
    assert parse_expr("'привет'") == Literal("привет")
    assert parse_expr('"a\\"b"') == Literal('a\\"b')
    assert parse_expr("истина") == Literal(True)
    assert parse_expr("false") == Literal(False)
    assert parse_expr("нуль") == Literal(None)
    assert parse_expr("2.5") == Literal(2.5)


def test_undefined_and_this_are_names():
    assert parse_expr("неопределено") == Identifier("undefined")
    assert parse_expr("этот.x") == Member(Identifier("this"), Identifier("x"), False)


def test_console_call_matches_generic_chaining():
    plain = Dialect(
        name="plain",
        keyword_aliases=RUSSIAN.keyword_aliases,
        builtin_aliases=MappingProxyType({}),
        transliteration=RUSSIAN.transliteration,
    )
    source = 'консоль.лог("a", 1);'
    special = parse_src(source)
    generic = parse_src(source, plain)
    assert special == generic
    assert special.body[0].expression == Call(
        Member(Identifier("консоль"), Identifier("лог"), False),
        [Literal("a"), Literal(1.0)],
    )


def test_console_call_result_keeps_chaining():
    assert parse_expr("console.log(1).x") == Member(
        Call(Member(Identifier("console"), Identifier("log"), False), [Literal(1.0)]),
        Identifier("x"),
        False,
    )


def test_console_without_call_is_member_access():
    assert parse_expr("консоль.лог") == Member(
        Identifier("консоль"), Identifier("лог"), False
    )


def test_declarations():
    prog = parse_src("переменная а = 1, б; константа в = 2; var г;")
    assert prog.body == [
        VariableDeclaration(
            "let",
            [
                VariableDeclarator(Identifier("а"), Literal(1.0)),
                VariableDeclarator(Identifier("б"), None),
            ],
        ),
        VariableDeclaration("const", [VariableDeclarator(Identifier("в"), Literal(2.0))]),
        VariableDeclaration("let", [VariableDeclarator(Identifier("г"), None)]),
    ]


def test_function_declaration():
    prog = parse_src("функция f(a, b) { вернуть a; }")
    fn = prog.body[0]
    assert isinstance(fn, FunctionDeclaration)
    assert fn.name == Identifier("f")
    assert fn.params == [Identifier("a"), Identifier("b")]
    assert isinstance(fn.body, Block)
    assert len(fn.body.body) == 1


def _params(n: int) -> str:
    return ", ".join("p" + str(i) for i in range(n))


def test_255_parameters_accepted():
    fn = parse_src("function f(" + _params(255) + ") {}").body[0]
    assert len(fn.params) == 255


def test_256_parameters_rejected():
    with pytest.raises(ParseError) as exc_info:
        parse_src("function f(" + _params(256) + ") {}")
    assert exc_info.value.msg == "cannot have more than 255 parameters"


def test_if_else_if():
    stmt = parse_src("если (а) б; иначе если (в) г; иначе { }").body[0]
    assert isinstance(stmt, If)
    assert stmt.consequent == ExpressionStatement(Identifier("б"))
    assert isinstance(stmt.alternate, If)
    assert stmt.alternate.alternate == Block([])


def test_for_with_empty_clauses():
    stmt = parse_src("для (;;) { }").body[0]
    assert stmt == For(None, None, None, Block([]))


def test_for_with_all_clauses():
    stmt = parse_src("для (переменная и = 0; и < 3; и = и + 1) f(и);").body[0]
    assert isinstance(stmt, For)
    assert isinstance(stmt.init, VariableDeclaration)
    assert stmt.test == Binary("<", Identifier("и"), Literal(3.0))
    assert isinstance(stmt.update, Assignment)
    assert isinstance(stmt.body, ExpressionStatement)


def test_while():
    stmt = parse_src("пока (x) { x = x - 1; }").body[0]
    assert isinstance(stmt, While)
    assert stmt.test == Identifier("x")


def test_empty_program():
    assert parse_src("") == Program([])
    assert parse_src("// nothing here") == Program([])


def test_invalid_assignment_target():
    with pytest.raises(ParseError) as exc_info:
        parse_src("a.b = 1;")
    e = exc_info.value
    assert (e.msg, e.line, e.col) == ("invalid assignment target", 1, 5)


@pytest.mark.parametrize("source", ["этот = 1;", "this = 1;", "x = этот = 1;"])
def test_this_is_not_an_assignment_target(source: str):
    with pytest.raises(ParseError) as exc_info:
        parse_src(source)
    assert exc_info.value.msg == "invalid assignment target"


def test_undefined_and_this_read_as_values():
    assert parse_expr("x = этот") == Assignment("=", Identifier("x"), Identifier("this"))


def test_template_literal_rejected():
    with pytest.raises(ParseError) as exc_info:
        parse_src("x = `t`;")
    assert exc_info.value.msg == "template literals are not supported"


def test_missing_semicolon_at_end_of_input():
    with pytest.raises(ParseError) as exc_info:
        parse_src("переменная а = 1")
    e = exc_info.value
    assert (e.line, e.col) == (1, 17)
    assert e.msg == "expected ';' after variable declaration, got end of input"


def test_recovery_collects_every_error_and_raises_the_first():
    parser = Parser(tokenize("а = ;\nб = ;\nв1 = 1;"))
    with pytest.raises(ParseError) as exc_info:
        parser.parse_program()
    assert len(parser.errors) == 2
    assert exc_info.value is parser.errors[0]
    assert (parser.errors[1].line, parser.errors[1].col) == (2, 5)


def test_recovery_resumes_at_declaration_keyword():
    parser = Parser(tokenize("а = = 1 переменная б = ;"))
    with pytest.raises(ParseError):
        parser.parse_program()
    assert [e.col for e in parser.errors] == [5, 24]


def test_to_dict_tags_node_types():
    d = to_dict(parse_src("x = 1;"))
    assert d == {
        "type": "Program",
        "body": [
            {
                "type": "ExpressionStatement",
                "expression": {
                    "type": "Assignment",
                    "operator": "=",
                    "left": {"type": "Identifier", "name": "x"},
                    "right": {"type": "Literal", "value": 1.0},
                },
            }
        ],
    }
