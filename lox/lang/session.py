"""Session control for lox. Runs the scan -> parse -> evaluate pipeline over a whole script or, in command-line mode,
over one entry at a time while keeping the global scope alive between entries.
"""

from lox.core.interpreter import Interpreter
from lox.core.lexical import Scanner
from lox.core.parser import Parser
from lox.core.syntax import Assign, ExpressionStatement
from lox.core.tokens import TokenKind
from lox.lang.error import EX_NOINPUT, Diagnostics, LoxError


class Session:
    """Governs a lox session: one Interpreter (and so one global scope) and one Diagnostics collector."""
    SH_FILE = "<in>"  # command-line interpreter filename
    UNTERMINATED = (Scanner.UNTERMINATED_STRING, Scanner.UNTERMINATED_COMMENT)

    def __init__(self, error_handler=None, path=None, cmd_line=False, out=None):
        self.error_handler = error_handler
        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.diagnostics = Diagnostics(error_handler)
        self.interpreter = Interpreter(self.diagnostics, out)
        self.results = []  # echoed values of expression entries, only collected in command-line mode

        if self.cmd_line and self.error_handler is not None:
            self.error_handler.fatal = False

        if path == Session.SH_FILE and not cmd_line:
            raise LoxError("'<in>' is a reserved filename")

    def load(self):
        """Returns the source of this session's script."""
        if self.path is None or self.path == Session.SH_FILE:
            raise LoxError("session has no script to load")

        try:
            with open(self.path, "r", encoding="utf-8") as file:
                return file.read()
        except (OSError, UnicodeDecodeError):
            raise LoxError("'{}' could not be opened", self.path, exit_code=EX_NOINPUT)

    def tokenize(self, source):
        """Scans source, reporting lexical faults."""
        return Scanner(source, self.diagnostics).scan_tokens()

    def parse(self, source):
        """Scans and parses source, reporting lexical and syntax faults."""
        return Parser(self.tokenize(source), self.diagnostics).parse()

    def run(self, source):
        """Runs source through the whole pipeline. Evaluation is skipped if any lexical or syntax fault was reported.
        In command-line mode, faults from previous entries are forgotten first, and the value of an entry that is a
        single (non-assignment) expression statement is appended to self.results.
        """
        if self.cmd_line:
            self.diagnostics.reset()

        statements = self.parse(source)
        if self.diagnostics.had_error:
            return

        if self.cmd_line and self._is_echoable(statements):
            result = self.interpreter.evaluate_line(statements[0].expression)
            if result is not None:
                self.results.append(result)
        else:
            self.interpreter.interpret(statements)

    def run_file(self):
        """Runs this session's script and returns the exit code its diagnostics call for."""
        self.run(self.load())
        return self.diagnostics.exit_code

    def pop(self):
        """Returns and forgets the oldest echoed result."""
        return self.results.pop(0)

    @staticmethod
    def _is_echoable(statements):
        return (len(statements) == 1 and isinstance(statements[0], ExpressionStatement)
                and not isinstance(statements[0].expression, Assign))

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins line to the unfinished entry prev. Returns the joined entry and whether it still needs more lines: a
        block is left open, or a string or block comment runs to the end of the entry. Braces inside strings and
        comments do not count.
        """
        line = prev + "\n" + line if prev else line

        scratch = Diagnostics()
        tokens = Scanner(line, scratch).scan_tokens()
        if any(diagnostic.message in Session.UNTERMINATED for diagnostic in scratch.reported):
            return line, True

        opened = sum(1 for token in tokens if token.kind is TokenKind.LEFT_BRACE)
        closed = sum(1 for token in tokens if token.kind is TokenKind.RIGHT_BRACE)
        return line, opened > closed
