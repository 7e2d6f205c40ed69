"""Tree-walking evaluator for lox. Statements are executed in order against a chain of Environments; expressions are
evaluated to plain Python values (see lox.core.values).

Runtime faults are raised as LoxRuntimeError from wherever they happen and caught once, in interpret, which reports the
first fault and abandons the rest of the run. Side effects that happened before the fault (output, bindings) stand.
"""

import operator
import sys

from lox.core.environment import Environment
from lox.core.tokens import TokenKind
from lox.core.values import divide, is_equal, is_number, is_truthy, stringify
from lox.lang.error import Diagnostics, LoxRuntimeError


class Interpreter:
    """Evaluates statements. The global scope lives as long as the Interpreter, so that an interactive session keeps
    its declarations from one line to the next.
    """
    NUMERIC_OPERATORS = {
        TokenKind.MINUS: operator.sub,
        TokenKind.SLASH: divide,
        TokenKind.STAR: operator.mul,
        TokenKind.GREATER: operator.gt,
        TokenKind.GREATER_EQUAL: operator.ge,
        TokenKind.LESS: operator.lt,
        TokenKind.LESS_EQUAL: operator.le,
    }

    def __init__(self, diagnostics=None, out=None):
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.out = out if out is not None else sys.stdout

        self.globals = Environment()
        self.environment = self.globals  # innermost scope of the statement being executed

    def interpret(self, statements):
        """Executes statements in order, stopping at (and reporting) the first runtime fault. Returns whether every
        statement ran.
        """
        try:
            for stmt in statements:
                self.execute(stmt)
        except LoxRuntimeError as error:
            self.diagnostics.report_runtime(error.token.line, error.message)
            return False
        return True

    def evaluate_line(self, expr):
        """Evaluates a single expression for echoing in interactive mode. Returns its text, or None after reporting a
        runtime fault.
        """
        try:
            return stringify(self.evaluate(expr))
        except LoxRuntimeError as error:
            self.diagnostics.report_runtime(error.token.line, error.message)
            return None

    def execute(self, stmt):
        stmt.accept(self)

    def evaluate(self, expr):
        return expr.accept(self)

    def execute_block(self, statements, environment):
        """Executes statements with environment as the innermost scope, restoring the current scope afterwards."""
        previous = self.environment
        try:
            self.environment = environment
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    # statements

    def visit_expression_statement(self, stmt):
        self.evaluate(stmt.expression)

    def visit_print_statement(self, stmt):
        value = self.evaluate(stmt.expression)
        print(stringify(value), file=self.out)

    def visit_var_declaration(self, stmt):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    def visit_block(self, stmt):
        self.execute_block(stmt.statements, Environment(self.environment))

    # expressions

    def visit_literal(self, expr):
        return expr.value

    def visit_grouping(self, expr):
        return self.evaluate(expr.expression)

    def visit_unary(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.kind is TokenKind.MINUS:
            self.check_number_operands(expr.operator, right)
            return -right
        if expr.operator.kind is TokenKind.BANG:
            return not is_truthy(right)

        raise LoxRuntimeError(expr.operator, f"Unknown unary operator '{expr.operator.lexeme}'.")

    def visit_binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        kind = expr.operator.kind

        if kind is TokenKind.EQUAL_EQUAL:
            return is_equal(left, right)
        if kind is TokenKind.BANG_EQUAL:
            return not is_equal(left, right)

        if kind is TokenKind.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(expr.operator, "Operands must be two numbers or two strings.")

        if kind in Interpreter.NUMERIC_OPERATORS:
            self.check_number_operands(expr.operator, left, right)
            return Interpreter.NUMERIC_OPERATORS[kind](left, right)

        raise LoxRuntimeError(expr.operator, f"Unknown binary operator '{expr.operator.lexeme}'.")

    def visit_variable(self, expr):
        return self.environment.get(expr.name)

    def visit_assign(self, expr):
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    @staticmethod
    def check_number_operands(operator_token, *operands):
        if all(is_number(operand) for operand in operands):
            return
        if len(operands) == 1:
            raise LoxRuntimeError(operator_token, "Operand must be a number.")
        raise LoxRuntimeError(operator_token, "Operands must be numbers.")
