"""Lexical analysis for lox. Turns a source string into a flat list of Tokens, always terminated by a single EOF token.

Scanning never stops at a fault: unexpected characters, unterminated strings and unterminated block comments are
reported through the Diagnostics collector and scanning resumes at the next character, so a single pass surfaces every
independent lexical fault. The lexical grammar can be loosely defined as follows:

```
<number>     ::= <digit>+ ( "." <digit>+ )?
<string>     ::= '"' <char except '"'>* '"'           ; may span lines, no escapes
<identifier> ::= <alpha> ( <alpha> | <digit> )*        ; <alpha> is [A-Za-z_]
<comment>    ::= "//" <char>* | "/*" <char>* "*/"      ; block comments do not nest
```
"""

from lox.core.tokens import KEYWORDS, Token, TokenKind
from lox.lang.error import Diagnostics


class Scanner:
    """Single-pass scanner over one source string. Use a fresh Scanner per source."""
    SINGLE = {
        "(": TokenKind.LEFT_PAREN,
        ")": TokenKind.RIGHT_PAREN,
        "{": TokenKind.LEFT_BRACE,
        "}": TokenKind.RIGHT_BRACE,
        ",": TokenKind.COMMA,
        ".": TokenKind.DOT,
        "-": TokenKind.MINUS,
        "+": TokenKind.PLUS,
        ";": TokenKind.SEMICOLON,
        "*": TokenKind.STAR,
    }
    # char: (kind if followed by "=", kind otherwise)
    DOUBLE = {
        "!": (TokenKind.BANG_EQUAL, TokenKind.BANG),
        "=": (TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
        "<": (TokenKind.LESS_EQUAL, TokenKind.LESS),
        ">": (TokenKind.GREATER_EQUAL, TokenKind.GREATER),
    }
    WHITESPACE = " \r\t"
    UNTERMINATED_COMMENT = "Unterminated block comment."
    UNTERMINATED_STRING = "Unterminated string."

    def __init__(self, source, diagnostics=None):
        self.source = source
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        self.tokens = []
        self.start = 0    # first character of the lexeme being scanned
        self.current = 0  # character about to be consumed
        self.line = 1

    def scan_tokens(self):
        """Scans the whole source and returns its tokens."""
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenKind.EOF, "", None, self.line))
        return self.tokens

    def scan_token(self):
        """Scans a single lexeme starting at self.start."""
        char = self.advance()

        if char in Scanner.SINGLE:
            self.add_token(Scanner.SINGLE[char])
        elif char in Scanner.DOUBLE:
            with_equal, without = Scanner.DOUBLE[char]
            self.add_token(with_equal if self.match("=") else without)
        elif char == "/":
            if self.match("/"):
                while self.peek() != "\n" and not self.is_at_end():
                    self.advance()
            elif self.match("*"):
                self.block_comment()
            else:
                self.add_token(TokenKind.SLASH)
        elif char in Scanner.WHITESPACE:
            pass
        elif char == "\n":
            self.line += 1
        elif char == "\"":
            self.string()
        elif self.is_digit(char):
            self.number()
        elif self.is_alpha(char):
            self.identifier()
        else:
            self.diagnostics.report_at(self.line, "Unexpected character.")

    def block_comment(self):
        """Consumes a /* ... */ comment; the opening delimiter has already been consumed."""
        while not self.is_at_end():
            if self.peek() == "*" and self.peek_next() == "/":
                self.current += 2
                return
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        self.diagnostics.report_at(self.line, Scanner.UNTERMINATED_COMMENT)

    def string(self):
        """Consumes a string literal; the opening quote has already been consumed."""
        while self.peek() != "\"" and not self.is_at_end():
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.is_at_end():
            self.diagnostics.report_at(self.line, Scanner.UNTERMINATED_STRING)
            return

        self.advance()  # closing quote
        self.add_token(TokenKind.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        """Consumes a number literal. A trailing '.' without digits after it is not part of the number."""
        while self.is_digit(self.peek()):
            self.advance()

        if self.peek() == "." and self.is_digit(self.peek_next()):
            self.advance()
            while self.is_digit(self.peek()):
                self.advance()

        self.add_token(TokenKind.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        """Consumes an identifier and reclassifies it if it is a reserved word."""
        while self.is_alpha(self.peek()) or self.is_digit(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER))

    def add_token(self, kind, literal=None):
        self.tokens.append(Token(kind, self.source[self.start:self.current], literal, self.line))

    def advance(self):
        char = self.source[self.current]
        self.current += 1
        return char

    def match(self, expected):
        """Consumes the next character only if it is expected."""
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        return "" if self.is_at_end() else self.source[self.current]

    def peek_next(self):
        return "" if self.current + 1 >= len(self.source) else self.source[self.current + 1]

    def is_at_end(self):
        return self.current >= len(self.source)

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"

    @staticmethod
    def is_alpha(char):
        return char == "_" or "a" <= char <= "z" or "A" <= char <= "Z"


def scan(source, diagnostics=None):
    """Returns the tokens of source, reporting lexical faults to diagnostics."""
    return Scanner(source, diagnostics).scan_tokens()
