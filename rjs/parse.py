"""Parser: recursive descent, one method per grammar production."""

from __future__ import annotations

import logging

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
    Program,
    Return,
    Stmt,
    Unary,
    VariableDeclaration,
    VariableDeclarator,
    While,
)
from .errors import ParseError
from .tables import RUSSIAN, Dialect
from .tokens import (
    TK_AND,
    TK_BANG,
    TK_BANG_DOUBLE_EQUALS,
    TK_BANG_EQUALS,
    TK_COMMA,
    TK_DOT,
    TK_DOUBLE_EQUALS,
    TK_EQUALS,
    TK_GREATER,
    TK_GREATER_EQUALS,
    TK_IDENT,
    TK_LEFT_BRACE,
    TK_LEFT_BRACKET,
    TK_LEFT_PAREN,
    TK_LESS,
    TK_LESS_EQUALS,
    TK_MINUS,
    TK_NUMBER,
    TK_OR,
    TK_PERCENT,
    TK_PLUS,
    TK_RIGHT_BRACE,
    TK_RIGHT_BRACKET,
    TK_RIGHT_PAREN,
    TK_SEMICOLON,
    TK_SLASH,
    TK_STAR,
    TK_STRING,
    TK_TEMPLATE,
    TK_TRIPLE_EQUALS,
    Token,
    keyword_kind,
)

logger = logging.getLogger(__name__)

TK_LET = keyword_kind("let")
TK_CONST = keyword_kind("const")
TK_VAR = keyword_kind("var")
TK_FUNCTION = keyword_kind("function")
TK_IF = keyword_kind("if")
TK_ELSE = keyword_kind("else")
TK_FOR = keyword_kind("for")
TK_WHILE = keyword_kind("while")
TK_RETURN = keyword_kind("return")
TK_TRUE = keyword_kind("true")
TK_FALSE = keyword_kind("false")
TK_NULL = keyword_kind("null")
TK_UNDEFINED = keyword_kind("undefined")
TK_THIS = keyword_kind("this")

MAX_PARAMS = 255

DECLARATION_KINDS: set[str] = {TK_LET, TK_CONST, TK_VAR}

# Tokens that begin a new declaration; error recovery stops in front of them.
DECLARATION_STARTS: set[str] = {
    TK_FUNCTION,
    TK_LET,
    TK_CONST,
    TK_VAR,
    TK_IF,
    TK_FOR,
    TK_WHILE,
    TK_RETURN,
}

EQUALITY_OPS: set[str] = {
    TK_DOUBLE_EQUALS,
    TK_BANG_EQUALS,
    TK_TRIPLE_EQUALS,
    TK_BANG_DOUBLE_EQUALS,
}

COMPARISON_OPS: set[str] = {TK_LESS, TK_LESS_EQUALS, TK_GREATER, TK_GREATER_EQUALS}

TERM_OPS: set[str] = {TK_PLUS, TK_MINUS}

FACTOR_OPS: set[str] = {TK_STAR, TK_SLASH, TK_PERCENT}

UNARY_OPS: set[str] = {TK_BANG, TK_MINUS}


class Parser:
    """Recursive descent parser over a token list."""

    def __init__(self, tokens: list[Token], dialect: Dialect = RUSSIAN):
        self.tokens: list[Token] = tokens
        self.dialect: Dialect = dialect
        self.pos: int = 0
        self.errors: list[ParseError] = []

    # ── Helpers ──────────────────────────────────────────────

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int) -> Token | None:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return None
        return self.tokens[idx]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def check(self, kind: str) -> bool:
        return not self.at_end() and self.tokens[self.pos].kind == kind

    def check_in(self, kinds: set[str]) -> bool:
        return not self.at_end() and self.tokens[self.pos].kind in kinds

    def match(self, kind: str) -> bool:
        if self.check(kind):
            self.pos += 1
            return True
        return False

    def expect(self, kind: str, what: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise self.error("expected " + what + ", got " + self._describe())

    def error(self, msg: str) -> ParseError:
        line, col = self._error_pos()
        return ParseError(msg, line, col)

    def _describe(self) -> str:
        if self.at_end():
            return "end of input"
        return "'" + self.current().lexeme + "'"

    def _error_pos(self) -> tuple[int, int]:
        """Position of the current token, or just past the last one at end."""
        if not self.at_end():
            tok = self.current()
            return tok.line, tok.column
        if len(self.tokens) == 0:
            return 1, 1
        last = self.tokens[-1]
        newlines = last.lexeme.count("\n")
        if newlines == 0:
            return last.line, last.column + len(last.lexeme)
        tail = last.lexeme[last.lexeme.rfind("\n") + 1 :]
        return last.line + newlines, len(tail) + 1

    # ── Top Level ────────────────────────────────────────────

    def parse_program(self) -> Program:
        """Parse every declaration; raise the first error after recovering."""
        body: list[Stmt] = []
        self.errors = []
        while not self.at_end():
            start = self.pos
            try:
                body.append(self.parse_declaration())
            except ParseError as e:
                logger.debug("recovering from parse error: %s", e)
                self.errors.append(e)
                self.synchronize(start)
        if len(self.errors) > 0:
            raise self.errors[0]
        logger.debug("parsed %d top-level statements", len(body))
        return Program(body)

    def synchronize(self, start: int) -> None:
        """Skip past the next ';' or up to the next declaration keyword."""
        if self.pos == start and not self.at_end():
            self.advance()
        while not self.at_end():
            if self.pos > start and self.previous().kind == TK_SEMICOLON:
                return
            if self.current().kind in DECLARATION_STARTS:
                return
            self.advance()

    def parse_declaration(self) -> Stmt:
        if self.check_in(DECLARATION_KINDS):
            return self.parse_variable_declaration()
        if self.check(TK_FUNCTION):
            return self.parse_function_declaration()
        return self.parse_statement()

    def parse_variable_declaration(self) -> VariableDeclaration:
        """VarDecl = ( 'let' | 'var' | 'const' ) Declarator ( ',' Declarator )* ';'"""
        kind = "const" if self.advance().kind == TK_CONST else "let"
        declarators: list[VariableDeclarator] = []
        while True:
            name_tok = self.expect(TK_IDENT, "variable name")
            init: Expr | None = None
            if self.match(TK_EQUALS):
                init = self.parse_expression()
            declarators.append(VariableDeclarator(Identifier(name_tok.lexeme), init))
            if not self.match(TK_COMMA):
                break
        self.expect(TK_SEMICOLON, "';' after variable declaration")
        return VariableDeclaration(kind, declarators)

    def parse_function_declaration(self) -> FunctionDeclaration:
        self.expect(TK_FUNCTION, "'function'")
        name_tok = self.expect(TK_IDENT, "function name")
        self.expect(TK_LEFT_PAREN, "'(' after function name")
        params: list[Identifier] = []
        if not self.check(TK_RIGHT_PAREN):
            while True:
                if len(params) >= MAX_PARAMS:
                    raise self.error(
                        "cannot have more than " + str(MAX_PARAMS) + " parameters"
                    )
                param_tok = self.expect(TK_IDENT, "parameter name")
                params.append(Identifier(param_tok.lexeme))
                if not self.match(TK_COMMA):
                    break
        self.expect(TK_RIGHT_PAREN, "')' after parameters")
        body = self.parse_block()
        return FunctionDeclaration(Identifier(name_tok.lexeme), params, body)

    # ── Statements ───────────────────────────────────────────

    def parse_statement(self) -> Stmt:
        if self.check(TK_IF):
            return self.parse_if()
        if self.check(TK_FOR):
            return self.parse_for()
        if self.check(TK_WHILE):
            return self.parse_while()
        if self.check(TK_RETURN):
            return self.parse_return()
        if self.check(TK_LEFT_BRACE):
            return self.parse_block()
        return self.parse_expression_statement()

    def parse_block(self) -> Block:
        self.expect(TK_LEFT_BRACE, "'{'")
        body: list[Stmt] = []
        while not self.check(TK_RIGHT_BRACE) and not self.at_end():
            body.append(self.parse_declaration())
        self.expect(TK_RIGHT_BRACE, "'}' after block")
        return Block(body)

    def parse_if(self) -> If:
        self.expect(TK_IF, "'if'")
        self.expect(TK_LEFT_PAREN, "'(' after 'if'")
        test = self.parse_expression()
        self.expect(TK_RIGHT_PAREN, "')' after if condition")
        consequent = self.parse_declaration()
        alternate: Stmt | None = None
        if self.match(TK_ELSE):
            alternate = self.parse_declaration()
        return If(test, consequent, alternate)

    def parse_for(self) -> For:
        self.expect(TK_FOR, "'for'")
        self.expect(TK_LEFT_PAREN, "'(' after 'for'")
        init: Stmt | None
        if self.match(TK_SEMICOLON):
            init = None
        elif self.check_in(DECLARATION_KINDS):
            init = self.parse_variable_declaration()
        else:
            init = self.parse_expression_statement()
        test: Expr | None = None
        if not self.check(TK_SEMICOLON):
            test = self.parse_expression()
        self.expect(TK_SEMICOLON, "';' after loop condition")
        update: Expr | None = None
        if not self.check(TK_RIGHT_PAREN):
            update = self.parse_expression()
        self.expect(TK_RIGHT_PAREN, "')' after for clauses")
        body = self.parse_declaration()
        return For(init, test, update, body)

    def parse_while(self) -> While:
        self.expect(TK_WHILE, "'while'")
        self.expect(TK_LEFT_PAREN, "'(' after 'while'")
        test = self.parse_expression()
        self.expect(TK_RIGHT_PAREN, "')' after while condition")
        body = self.parse_declaration()
        return While(test, body)

    def parse_return(self) -> Return:
        self.expect(TK_RETURN, "'return'")
        argument: Expr | None = None
        if not self.check(TK_SEMICOLON):
            argument = self.parse_expression()
        self.expect(TK_SEMICOLON, "';' after return value")
        return Return(argument)

    def parse_expression_statement(self) -> ExpressionStatement:
        expr = self.parse_expression()
        self.expect(TK_SEMICOLON, "';' after expression")
        return ExpressionStatement(expr)

    # ── Expressions ──────────────────────────────────────────

    def parse_expression(self) -> Expr:
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        """Assignment = Or ( '=' Assignment )?

        The target must be an identifier other than this.
        """
        expr = self.parse_or()
        if self.check(TK_EQUALS):
            equals = self.advance()
            value = self.parse_assignment()
            if isinstance(expr, Identifier) and expr.name != "this":
                return Assignment("=", expr, value)
            raise ParseError("invalid assignment target", equals.line, equals.column)
        return expr

    def parse_or(self) -> Expr:
        """Or = And ( '||' And )*"""
        left = self.parse_and()
        while self.check(TK_OR):
            op = self.advance().lexeme
            right = self.parse_and()
            left = Binary(op, left, right)
        return left

    def parse_and(self) -> Expr:
        """And = Equality ( '&&' Equality )*"""
        left = self.parse_equality()
        while self.check(TK_AND):
            op = self.advance().lexeme
            right = self.parse_equality()
            left = Binary(op, left, right)
        return left

    def parse_equality(self) -> Expr:
        """Equality = Comparison ( ( '==' | '!=' | '===' | '!==' ) Comparison )*"""
        left = self.parse_comparison()
        while self.check_in(EQUALITY_OPS):
            op = self.advance().lexeme
            right = self.parse_comparison()
            left = Binary(op, left, right)
        return left

    def parse_comparison(self) -> Expr:
        """Comparison = Term ( ( '<' | '<=' | '>' | '>=' ) Term )*"""
        left = self.parse_term()
        while self.check_in(COMPARISON_OPS):
            op = self.advance().lexeme
            right = self.parse_term()
            left = Binary(op, left, right)
        return left

    def parse_term(self) -> Expr:
        """Term = Factor ( ( '+' | '-' ) Factor )*"""
        left = self.parse_factor()
        while self.check_in(TERM_OPS):
            op = self.advance().lexeme
            right = self.parse_factor()
            left = Binary(op, left, right)
        return left

    def parse_factor(self) -> Expr:
        """Factor = Unary ( ( '*' | '/' | '%' ) Unary )*"""
        left = self.parse_unary()
        while self.check_in(FACTOR_OPS):
            op = self.advance().lexeme
            right = self.parse_unary()
            left = Binary(op, left, right)
        return left

    def parse_unary(self) -> Expr:
        """Unary = ( '!' | '-' ) Unary | Postfix"""
        if self.check_in(UNARY_OPS):
            op = self.advance().lexeme
            argument = self.parse_unary()
            return Unary(op, argument)
        return self.parse_postfix()

    def parse_postfix(self) -> Expr:
        """Postfix = Primary ( '.' IDENT | '[' Expr ']' | '(' Args ')' )*"""
        expr = self.parse_primary()
        while True:
            if self.match(TK_DOT):
                name_tok = self.expect(TK_IDENT, "property name after '.'")
                expr = Member(expr, Identifier(name_tok.lexeme), False)
            elif self.match(TK_LEFT_BRACKET):
                prop = self.parse_expression()
                self.expect(TK_RIGHT_BRACKET, "']' after computed property")
                expr = Member(expr, prop, True)
            elif self.match(TK_LEFT_PAREN):
                expr = Call(expr, self.parse_arguments())
            else:
                break
        return expr

    def parse_arguments(self) -> list[Expr]:
        """Args = ( Expr ( ',' Expr )* )? ')' The '(' is already consumed."""
        args: list[Expr] = []
        if not self.check(TK_RIGHT_PAREN):
            args.append(self.parse_expression())
            while self.match(TK_COMMA):
                args.append(self.parse_expression())
        self.expect(TK_RIGHT_PAREN, "')' after arguments")
        return args

    def parse_primary(self) -> Expr:
        """Parse a primary expression."""
        if self.at_end():
            raise self.error("expected expression, got end of input")
        tok = self.current()

        # Literals
        if tok.kind == TK_NUMBER:
            self.advance()
            return Literal(float(tok.lexeme))
        if tok.kind == TK_STRING:
            self.advance()
            return Literal(tok.lexeme[1:-1])
        if tok.kind == TK_TRUE:
            self.advance()
            return Literal(True)
        if tok.kind == TK_FALSE:
            self.advance()
            return Literal(False)
        if tok.kind == TK_NULL:
            self.advance()
            return Literal(None)

        # Keywords that behave as plain names in expression position
        if tok.kind == TK_UNDEFINED or tok.kind == TK_THIS:
            self.advance()
            return Identifier(tok.lexeme)

        if tok.kind == TK_IDENT:
            if self._at_console_call():
                return self.parse_console_call()
            self.advance()
            return Identifier(tok.lexeme)

        if tok.kind == TK_LEFT_PAREN:
            self.advance()
            expr = self.parse_expression()
            self.expect(TK_RIGHT_PAREN, "')' after expression")
            return expr

        if tok.kind == TK_TEMPLATE:
            raise self.error("template literals are not supported")

        raise self.error("expected expression, got " + self._describe())

    def _at_console_call(self) -> bool:
        """Lookahead: console-alias IDENT '.' IDENT '('."""
        name = self.current().lexeme
        if self.dialect.builtin_aliases.get(name, name) != "console":
            return False
        dot = self.peek(1)
        method = self.peek(2)
        paren = self.peek(3)
        return (
            dot is not None
            and dot.kind == TK_DOT
            and method is not None
            and method.kind == TK_IDENT
            and paren is not None
            and paren.kind == TK_LEFT_PAREN
        )

    def parse_console_call(self) -> Call:
        """ConsoleCall = console '.' IDENT '(' Args ')'.

        Builds the same tree generic member/call chaining would; the postfix
        loop continues from here.
        """
        obj = Identifier(self.expect(TK_IDENT, "console").lexeme)
        self.expect(TK_DOT, "'.' after console")
        method = Identifier(self.expect(TK_IDENT, "console method name").lexeme)
        self.expect(TK_LEFT_PAREN, "'(' after console method")
        return Call(Member(obj, method, False), self.parse_arguments())


def parse(tokens: list[Token], dialect: Dialect = RUSSIAN) -> Program:
    """Parse a token list into a Program, raising the first ParseError."""
    return Parser(tokens, dialect).parse_program()
