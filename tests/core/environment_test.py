import unittest

from lox.core.environment import Environment
from lox.core.tokens import Token, TokenKind
from lox.lang.error import LoxRuntimeError


def name(lexeme, line=1):
    return Token(TokenKind.IDENTIFIER, lexeme, None, line)


class EnvironmentTestCase(unittest.TestCase):

    def setUp(self):
        self.globals = Environment()
        self.globals.define("a", 1.0)
        self.globals.define("b", "global")

        self.inner = Environment(Environment(self.globals))
        self.inner.define("a", 2.0)

    def test_get_walks_outwards(self):
        self.assertEqual(2.0, self.inner.get(name("a")))
        self.assertEqual("global", self.inner.get(name("b")))
        self.assertEqual(1.0, self.globals.get(name("a")))

    def test_define_shadows_only_innermost(self):
        self.inner.define("b", "shadow")

        self.assertEqual("shadow", self.inner.get(name("b")))
        self.assertEqual("global", self.globals.get(name("b")))

    def test_assign_updates_nearest_declaring_scope(self):
        self.inner.assign(name("b"), "assigned")
        self.inner.assign(name("a"), 3.0)

        self.assertEqual("assigned", self.globals.get(name("b")))
        self.assertEqual(1.0, self.globals.get(name("a")))
        self.assertEqual(3.0, self.inner.get(name("a")))
        self.assertNotIn("b", self.inner.values)

    def test_undefined(self):
        for action in (lambda: self.inner.get(name("c", 7)), lambda: self.inner.assign(name("c", 7), None)):
            with self.assertRaises(LoxRuntimeError) as raised:
                action()
            self.assertEqual("Undefined variable 'c'.", raised.exception.message)
            self.assertEqual(7, raised.exception.token.line)

    def test_nil_binding_is_declared(self):
        self.globals.define("n", None)

        self.assertIsNone(self.inner.get(name("n")))
        self.assertIn("n", self.inner)
        self.assertNotIn("missing", self.inner)


if __name__ == '__main__':
    unittest.main()
