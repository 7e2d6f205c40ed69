"""Error handling for the lox interpreter. Faults found while scanning, parsing or evaluating are recorded in a
Diagnostics collector, which is inspected by the caller after a run. Only LoxErrors should escape a Session: if another
type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys
from dataclasses import dataclass

from termcolor import colored

from lox.core.tokens import TokenKind


EX_OK = 0
EX_USAGE = 64     # invalid invocation
EX_DATAERR = 65   # lexical or syntax fault
EX_NOINPUT = 66   # script could not be read
EX_SOFTWARE = 70  # runtime fault (or internal error)


class LoxError(Exception):
    """Templates an error message so that it can be used to throw a lox error. '{}' slots in msg are filled with exprs,
    which are bolded when rendered in color.
    """

    def __init__(self, msg, exprs=None, exit_code=EX_SOFTWARE, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        super().__init__(msg.format(*exprs))
        self.template = msg
        self.exprs = exprs
        self.exit_code = exit_code
        self.internal = internal

    def render(self, color=True):
        """Returns the message with the offending snippets filled in (and bolded if color)."""
        if not color:
            return str(self)
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))


class LoxRuntimeError(LoxError):
    """Fault raised while evaluating a program. Carries the token whose evaluation failed, for line attribution."""

    def __init__(self, token, message):
        super().__init__("{}", message)
        self.token = token
        self.message = message


@dataclass(frozen=True)
class Diagnostic:
    """A single reported fault. Renders exactly as the interpreter reports it on stderr."""
    line: int
    message: str
    where: str = ""
    runtime: bool = False

    def __str__(self):
        if self.runtime:
            return f"{self.message}\n[line {self.line}]"
        return f"[{self.line}] Error{self.where}: {self.message}"


class Diagnostics:
    """Collects faults reported by the Scanner, the Parser and the Interpreter during a run. The two sticky flags decide
    whether evaluation proceeds and which exit code the command-line layer selects.
    """

    def __init__(self, handler=None):
        self.handler = handler  # if given, every diagnostic is also emitted as soon as it is reported
        self.reported = []
        self.had_error = False
        self.had_runtime_error = False

    def report_at(self, line, message, where=""):
        """Records a lexical or syntax fault."""
        self._record(Diagnostic(line, message, where))
        self.had_error = True

    def error_at(self, token, message):
        """Records a syntax fault anchored at token."""
        if token.kind is TokenKind.EOF:
            self.report_at(token.line, message, " at end")
        else:
            self.report_at(token.line, message, f" at '{token.lexeme}'")

    def report_runtime(self, line, message):
        """Records a runtime fault."""
        self._record(Diagnostic(line, message, runtime=True))
        self.had_runtime_error = True

    def reset(self):
        """Clears all recorded faults. Called at the start of each interactive line."""
        self.reported = []
        self.had_error = False
        self.had_runtime_error = False

    @property
    def messages(self):
        return [str(diagnostic) for diagnostic in self.reported]

    @property
    def exit_code(self):
        if self.had_error:
            return EX_DATAERR
        if self.had_runtime_error:
            return EX_SOFTWARE
        return EX_OK

    def _record(self, diagnostic):
        self.reported.append(diagnostic)
        if self.handler is not None:
            self.handler.emit(diagnostic)


class ErrorHandler:
    """Context manager that renders diagnostics and converts stray Python errors into lox errors."""
    ERROR = "red"

    def __init__(self, fatal=True, stream=None, color=True):
        self.fatal = fatal
        self.stream = stream if stream is not None else sys.stderr
        self.color = color

    def _paint(self, text, attrs=("bold",)):
        if not self.color:
            return text
        return colored(text, ErrorHandler.ERROR, attrs=list(attrs))

    def emit(self, diagnostic):
        """Prints a diagnostic as soon as it is reported."""
        if diagnostic.runtime:
            msg = self._paint(diagnostic.message) + f"\n[line {diagnostic.line}]"
        else:
            msg = f"[{diagnostic.line}] " + self._paint("Error") + f"{diagnostic.where}: {diagnostic.message}"
        print(msg, file=self.stream)

    def throw(self, error):
        """Prints error, a LoxError, and exits with its exit code if this handler is fatal."""
        error_msg = ""
        if error.internal:
            error_msg += self._paint("[internal] ")

        error_msg += self._paint("error: ") + error.render(self.color)
        print(error_msg, file=self.stream)

        if self.fatal:
            sys.exit(error.exit_code)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LoxError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LoxError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, LoxError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LoxError("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
