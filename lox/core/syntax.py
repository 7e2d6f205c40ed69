"""Abstract syntax tree for lox.

```
<expr> ::= Literal(value) | Grouping(expression) | Unary(operator, right) | Binary(left, operator, right)
         | Variable(name) | Assign(name, value)
<stmt> ::= ExpressionStatement(expression) | PrintStatement(expression) | VarDeclaration(name, initializer)
         | Block(statements)
```

Each node owns its children outright (a tree: no sharing, no cycles). Nodes are dispatched with accept(visitor), which
calls the visitor's visit_<node> method; see lox.core.interpreter and lox.core.printer for the two visitors.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from lox.core.tokens import Token


class Expr(ABC):
    """Superclass for expression nodes."""

    @abstractmethod
    def accept(self, visitor):
        """Calls the visit method of visitor that corresponds to this node's type."""


class Stmt(ABC):
    """Superclass for statement nodes."""

    @abstractmethod
    def accept(self, visitor):
        """Calls the visit method of visitor that corresponds to this node's type."""


@dataclass(frozen=True)
class Literal(Expr):
    value: object

    def accept(self, visitor):
        return visitor.visit_literal(self)


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_grouping(self)


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_unary(self)


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_binary(self)


@dataclass(frozen=True)
class Variable(Expr):
    name: Token

    def accept(self, visitor):
        return visitor.visit_variable(self)


@dataclass(frozen=True)
class Assign(Expr):
    """Assignment is an expression: it yields the assigned value."""
    name: Token
    value: Expr

    def accept(self, visitor):
        return visitor.visit_assign(self)


@dataclass(frozen=True)
class ExpressionStatement(Stmt):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_expression_statement(self)


@dataclass(frozen=True)
class PrintStatement(Stmt):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_print_statement(self)


@dataclass(frozen=True)
class VarDeclaration(Stmt):
    name: Token
    initializer: Optional[Expr]

    def accept(self, visitor):
        return visitor.visit_var_declaration(self)


@dataclass(frozen=True)
class Block(Stmt):
    """Statements executed in their own scope, enclosed by the scope the block appears in."""
    statements: List[Stmt]

    def accept(self, visitor):
        return visitor.visit_block(self)
