"""Recursive-descent parser for lox. Consumes the Scanner's tokens and produces a list of statements.

```
<program>     ::= <declaration>* EOF
<declaration> ::= <var_decl> | <statement>
<var_decl>    ::= "var" IDENTIFIER ( "=" <expression> )? ";"
<statement>   ::= "print" <expression> ";" | "{" <declaration>* "}" | <expression> ";"

<expression>  ::= <assignment>
<assignment>  ::= IDENTIFIER "=" <assignment> | <equality>      ; right-associative
<equality>    ::= <comparison> ( ( "!=" | "==" ) <comparison> )*  ; every binary level is left-associative
<comparison>  ::= <term> ( ( ">" | ">=" | "<" | "<=" ) <term> )*
<term>        ::= <factor> ( ( "-" | "+" ) <factor> )*
<factor>      ::= <unary> ( ( "/" | "*" ) <unary> )*
<unary>       ::= ( "!" | "-" ) <unary> | <primary>
<primary>     ::= NUMBER | STRING | "true" | "false" | "nil" | IDENTIFIER | "(" <expression> ")"
```

Faults are not raised: a parse method that fails reports the fault to the Diagnostics collector and returns None, and
every caller hands that None straight back up. The declaration loop is the only place that acts on it, by discarding
tokens up to the next statement boundary and carrying on, so a single pass reports every independent syntax fault.
"""

from lox.core.syntax import (Assign, Binary, Block, ExpressionStatement, Grouping, Literal, PrintStatement, Unary,
                             VarDeclaration, Variable)
from lox.core.tokens import TokenKind
from lox.lang.error import Diagnostics


class Parser:
    """Parses one token list. Use a fresh Parser per token list."""
    # tokens that can only start a statement: parsing resumes before them after a fault
    STATEMENT_STARTS = {
        TokenKind.CLASS,
        TokenKind.FOR,
        TokenKind.FUN,
        TokenKind.IF,
        TokenKind.PRINT,
        TokenKind.RETURN,
        TokenKind.VAR,
        TokenKind.WHILE,
    }
    LITERALS = {
        TokenKind.FALSE: False,
        TokenKind.TRUE: True,
        TokenKind.NIL: None,
    }

    def __init__(self, tokens, diagnostics=None):
        self.tokens = tokens
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.current = 0

    def parse(self):
        """Returns the statements that parsed successfully. Failed declarations are reported and left out."""
        statements = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    # statements

    def declaration(self):
        if self.match(TokenKind.VAR):
            stmt = self.var_declaration()
        else:
            stmt = self.statement()

        if stmt is None:
            self.synchronize()
        return stmt

    def var_declaration(self):
        name = self.consume(TokenKind.IDENTIFIER, "Expect variable name.")
        if name is None:
            return None

        initializer = None
        if self.match(TokenKind.EQUAL):
            initializer = self.expression()
            if initializer is None:
                return None

        if self.consume(TokenKind.SEMICOLON, "Expect ';' after variable declaration.") is None:
            return None
        return VarDeclaration(name, initializer)

    def statement(self):
        if self.match(TokenKind.PRINT):
            return self.print_statement()
        if self.match(TokenKind.LEFT_BRACE):
            statements = self.block()
            return None if statements is None else Block(statements)
        return self.expression_statement()

    def print_statement(self):
        value = self.expression()
        if value is None or self.consume(TokenKind.SEMICOLON, "Expect ';' after value.") is None:
            return None
        return PrintStatement(value)

    def expression_statement(self):
        expr = self.expression()
        if expr is None or self.consume(TokenKind.SEMICOLON, "Expect ';' after expression.") is None:
            return None
        return ExpressionStatement(expr)

    def block(self):
        """Parses the declarations of a block; the opening brace has already been consumed. Faults inside the block
        are recovered from inside the block.
        """
        statements = []
        while not self.check(TokenKind.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)

        if self.consume(TokenKind.RIGHT_BRACE, "Expect '}' after block.") is None:
            return None
        return statements

    # expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.equality()
        if expr is None:
            return None

        if self.match(TokenKind.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if value is None:
                return None

            if isinstance(expr, Variable):
                return Assign(expr.name, value)

            # no resynchronization needed, the left-hand side stands in for the assignment
            self.diagnostics.error_at(equals, "Invalid assignment target.")

        return expr

    def equality(self):
        return self._binary(self.comparison, TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)

    def comparison(self):
        return self._binary(self.term, TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS,
                            TokenKind.LESS_EQUAL)

    def term(self):
        return self._binary(self.factor, TokenKind.MINUS, TokenKind.PLUS)

    def factor(self):
        return self._binary(self.unary, TokenKind.SLASH, TokenKind.STAR)

    def _binary(self, operand, *kinds):
        """Parses a left-associative binary level: operand ( kinds operand )*"""
        expr = operand()
        while expr is not None and self.match(*kinds):
            operator = self.previous()
            right = operand()
            if right is None:
                return None
            expr = Binary(expr, operator, right)
        return expr

    def unary(self):
        if self.match(TokenKind.BANG, TokenKind.MINUS):
            operator = self.previous()
            right = self.unary()
            return None if right is None else Unary(operator, right)
        return self.primary()

    def primary(self):
        if self.match(*Parser.LITERALS):
            return Literal(Parser.LITERALS[self.previous().kind])

        if self.match(TokenKind.NUMBER, TokenKind.STRING):
            return Literal(self.previous().literal)

        if self.match(TokenKind.IDENTIFIER):
            return Variable(self.previous())

        if self.match(TokenKind.LEFT_PAREN):
            expr = self.expression()
            if expr is None or self.consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.") is None:
                return None
            return Grouping(expr)

        self.diagnostics.error_at(self.peek(), "Expect expression.")
        return None

    # token helpers

    def synchronize(self):
        """Discards tokens until just after a ';' or just before a token that starts a statement."""
        self.advance()

        while not self.is_at_end():
            if self.previous().kind is TokenKind.SEMICOLON:
                return
            if self.peek().kind in Parser.STATEMENT_STARTS:
                return
            self.advance()

    def match(self, *kinds):
        """Consumes the next token if it is any of kinds."""
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind, message):
        """Consumes and returns the next token if it is of kind, otherwise reports message and returns None."""
        if self.check(kind):
            return self.advance()

        self.diagnostics.error_at(self.peek(), message)
        return None

    def check(self, kind):
        if self.is_at_end():
            return False
        return self.peek().kind is kind

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().kind is TokenKind.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]


def parse(tokens, diagnostics=None):
    """Returns the statements of tokens, reporting syntax faults to diagnostics."""
    return Parser(tokens, diagnostics).parse()
