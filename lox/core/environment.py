"""Lexical scopes. Each Environment maps names to values and links to the Environment enclosing it; the outermost
Environment is the global scope. Only the Interpreter mutates environments.
"""

from lox.lang.error import LoxRuntimeError


class Environment:
    """One scope in the chain of scopes."""

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        """Binds name in this scope only, shadowing any binding of name in an enclosing scope."""
        self.values[name] = value

    def get(self, name):
        """Returns the value bound to name (a Token) in the nearest scope that declares it."""
        scope = self.resolve(name)
        return scope.values[name.lexeme]

    def assign(self, name, value):
        """Rebinds name (a Token) in the nearest scope that declares it."""
        scope = self.resolve(name)
        scope.values[name.lexeme] = value

    def resolve(self, name):
        """Walks outwards from this scope to the first one that declares name."""
        scope = self
        while scope is not None:
            if name.lexeme in scope.values:
                return scope
            scope = scope.enclosing

        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def __contains__(self, name):
        return name in self.values or (self.enclosing is not None and name in self.enclosing)

    def __repr__(self):
        return f"Environment({self.values}, enclosing={self.enclosing!r})"
