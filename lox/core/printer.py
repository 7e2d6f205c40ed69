"""Readable rendering of syntax trees, used for debugging the parser (lox --ast) and in tests.

Format (prefix notation, every node parenthesized except literals and variables):
    1 + 2 * 3;            ->  (; (+ 1 (* 2 3)))
    var x = "a";          ->  (var x "a")
    { print -x; }         ->  (block (print (- x)))
"""

from lox.core.values import stringify


class AstPrinter:
    """Visitor that renders expressions and statements as strings."""

    def print(self, node):
        return node.accept(self)

    def parenthesize(self, name, *nodes):
        parts = [name] + [self.print(node) for node in nodes]
        return "(" + " ".join(parts) + ")"

    def visit_literal(self, expr):
        if isinstance(expr.value, str):
            return f"\"{expr.value}\""
        return stringify(expr.value)

    def visit_grouping(self, expr):
        return self.parenthesize("group", expr.expression)

    def visit_unary(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.right)

    def visit_binary(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_variable(self, expr):
        return expr.name.lexeme

    def visit_assign(self, expr):
        return f"(= {expr.name.lexeme} {self.print(expr.value)})"

    def visit_expression_statement(self, stmt):
        return self.parenthesize(";", stmt.expression)

    def visit_print_statement(self, stmt):
        return self.parenthesize("print", stmt.expression)

    def visit_var_declaration(self, stmt):
        initializer = "nil" if stmt.initializer is None else self.print(stmt.initializer)
        return f"(var {stmt.name.lexeme} {initializer})"

    def visit_block(self, stmt):
        return self.parenthesize("block", *stmt.statements)
