import unittest

from lox.core.lexical import Scanner, scan
from lox.core.tokens import Token, TokenKind
from lox.lang.error import Diagnostics


def kinds(source, diagnostics=None):
    return [token.kind for token in scan(source, diagnostics)]


class ScannerTestCase(unittest.TestCase):

    def test_empty_source(self):
        should_be_empty = ["", "   ", "\t\r\n", "// comment", "/* block */", "/* multi\nline */ // and more\n"]
        for case in should_be_empty:
            tokens = scan(case)
            self.assertEqual(1, len(tokens), case)
            self.assertEqual(TokenKind.EOF, tokens[0].kind, case)

    def test_single_character_tokens(self):
        expected = [
            TokenKind.LEFT_PAREN,
            TokenKind.RIGHT_PAREN,
            TokenKind.LEFT_BRACE,
            TokenKind.RIGHT_BRACE,
            TokenKind.COMMA,
            TokenKind.DOT,
            TokenKind.MINUS,
            TokenKind.PLUS,
            TokenKind.SEMICOLON,
            TokenKind.STAR,
            TokenKind.EOF,
        ]
        self.assertEqual(expected, kinds("(){},.-+;*"))

    def test_one_or_two_character_tokens(self):
        expected = [
            TokenKind.BANG,
            TokenKind.BANG_EQUAL,
            TokenKind.EQUAL,
            TokenKind.EQUAL_EQUAL,
            TokenKind.GREATER,
            TokenKind.GREATER_EQUAL,
            TokenKind.LESS,
            TokenKind.LESS_EQUAL,
            TokenKind.EOF,
        ]
        self.assertEqual(expected, kinds("! != = == > >= < <="))

    def test_maximal_munch(self):
        cases = {
            "!==": [TokenKind.BANG_EQUAL, TokenKind.EQUAL],
            "===": [TokenKind.EQUAL_EQUAL, TokenKind.EQUAL],
            "<==>": [TokenKind.LESS_EQUAL, TokenKind.EQUAL, TokenKind.GREATER],
            "a/b": [TokenKind.IDENTIFIER, TokenKind.SLASH, TokenKind.IDENTIFIER],
        }
        for case, expected in cases.items():
            self.assertEqual(expected + [TokenKind.EOF], kinds(case), case)

    def test_string(self):
        tokens = scan("\"hi mom!\"")

        self.assertEqual(2, len(tokens))
        self.assertEqual(TokenKind.STRING, tokens[0].kind)
        self.assertEqual("hi mom!", tokens[0].literal)
        self.assertEqual("\"hi mom!\"", tokens[0].lexeme)
        self.assertEqual(TokenKind.EOF, tokens[1].kind)

    def test_multiline_string(self):
        tokens = scan("\"one\ntwo\"\nx")

        self.assertEqual("one\ntwo", tokens[0].literal)
        self.assertEqual(TokenKind.IDENTIFIER, tokens[1].kind)
        self.assertEqual(3, tokens[1].line)

    def test_number(self):
        tokens = scan("123 123.7890")

        self.assertEqual(3, len(tokens))
        self.assertEqual(TokenKind.NUMBER, tokens[0].kind)
        self.assertEqual(123.0, tokens[0].literal)
        self.assertEqual(TokenKind.NUMBER, tokens[1].kind)
        self.assertEqual(123.789, tokens[1].literal)
        self.assertEqual("123.7890", tokens[1].lexeme)

    def test_trailing_dot(self):
        tokens = scan("12.")

        self.assertEqual([TokenKind.NUMBER, TokenKind.DOT, TokenKind.EOF], [token.kind for token in tokens])
        self.assertEqual(12.0, tokens[0].literal)
        self.assertEqual("12", tokens[0].lexeme)

    def test_identifiers_and_keywords(self):
        cases = {
            "var": TokenKind.VAR,
            "print": TokenKind.PRINT,
            "nil": TokenKind.NIL,
            "true": TokenKind.TRUE,
            "while": TokenKind.WHILE,
            "variable": TokenKind.IDENTIFIER,
            "_private": TokenKind.IDENTIFIER,
            "x1_y2": TokenKind.IDENTIFIER,
            "Print": TokenKind.IDENTIFIER,
        }
        for case, expected in cases.items():
            tokens = scan(case)
            self.assertEqual(expected, tokens[0].kind, case)
            self.assertEqual(case, tokens[0].lexeme, case)
            self.assertIsNone(tokens[0].literal, case)

    def test_line_numbers(self):
        tokens = scan("a\nb // c\n/* d\ne */ f\n")

        self.assertEqual([1, 2, 4], [token.line for token in tokens[:-1]])
        self.assertEqual(5, tokens[-1].line)

    def test_statement(self):
        expected = [
            Token(TokenKind.VAR, "var", None, 1),
            Token(TokenKind.IDENTIFIER, "a", None, 1),
            Token(TokenKind.EQUAL, "=", None, 1),
            Token(TokenKind.NUMBER, "2", 2.0, 1),
            Token(TokenKind.SEMICOLON, ";", None, 1),
            Token(TokenKind.EOF, "", None, 1),
        ]
        self.assertEqual(expected, scan("var a = 2;"))

    def test_idempotence(self):
        source = "var x = \"s\";\n{ print x + 1.5; } // done"
        self.assertEqual(Scanner(source).scan_tokens(), Scanner(source).scan_tokens())


class LexicalFaultTestCase(unittest.TestCase):

    def test_unexpected_character(self):
        diagnostics = Diagnostics()
        tokens = scan("a @ b # c", diagnostics)

        self.assertTrue(diagnostics.had_error)
        self.assertEqual(["[1] Error: Unexpected character."] * 2, diagnostics.messages)
        self.assertEqual(["a", "b", "c", ""], [token.lexeme for token in tokens])

    def test_unterminated_string(self):
        diagnostics = Diagnostics()
        tokens = scan("print \"oops\nstill going", diagnostics)

        self.assertEqual(["[2] Error: Unterminated string."], diagnostics.messages)
        self.assertEqual([TokenKind.PRINT, TokenKind.EOF], [token.kind for token in tokens])

    def test_unterminated_block_comment(self):
        diagnostics = Diagnostics()
        tokens = scan("x /* never\nclosed", diagnostics)

        self.assertEqual(["[2] Error: Unterminated block comment."], diagnostics.messages)
        self.assertEqual([TokenKind.IDENTIFIER, TokenKind.EOF], [token.kind for token in tokens])

    def test_multiple_faults(self):
        diagnostics = Diagnostics()
        scan("@\n$\n\"", diagnostics)

        expected = [
            "[1] Error: Unexpected character.",
            "[2] Error: Unexpected character.",
            "[3] Error: Unterminated string.",
        ]
        self.assertEqual(expected, diagnostics.messages)

    def test_valid_source_reports_nothing(self):
        diagnostics = Diagnostics()
        scan("var a = 1;\nprint a >= 2 != !true;", diagnostics)

        self.assertFalse(diagnostics.had_error)
        self.assertEqual([], diagnostics.messages)


if __name__ == '__main__':
    unittest.main()
