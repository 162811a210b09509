import logging
import sys

from .tokens import TokenType

logger = logging.getLogger(__name__)


class LoxError(Exception):
    """Base class for all pylox errors."""


class ParseError(LoxError):
    """Unwinds the parser to the next statement boundary."""


class InternalError(LoxError):
    """Raised when the interpreter's own invariants are broken."""


class LoxRuntimeError(LoxError):
    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message


class UndefinedVariable(LoxRuntimeError):
    pass


class UndefinedPropertyError(LoxRuntimeError):
    pass


class LoxTypeError(LoxRuntimeError):
    pass


class ArityError(LoxRuntimeError):
    def __init__(self, token, expected, got):
        super().__init__(
            token, f"Expected {expected} arguments but got {got}.")
        self.expected = expected
        self.got = got


class StackOverflow(LoxRuntimeError):
    pass


class ErrorReporter:
    """Collects scan, parse, resolve and runtime diagnostics.

    The two flags are independent: ``had_error`` covers every static error,
    ``had_runtime_error`` is set by the first runtime error of a run.
    """

    def __init__(self, stream=None):
        self.stream = stream
        self.had_error = False
        self.had_runtime_error = False
        self.diagnostics = []

    def error(self, line, message):
        self.report(line, "", message)

    def error_at(self, token, message):
        if token.type == TokenType.EOF:
            self.report(token.line, " at end", message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def report(self, line, where, message):
        text = f"[line {line}] Error{where}: {message}"
        self.diagnostics.append(text)
        self.write(text)
        self.had_error = True

    def runtime_error(self, error):
        text = f"{error.message}\n[line {error.token.line}]"
        logger.debug("runtime error %s: %s",
                     type(error).__name__, error.message)
        self.diagnostics.append(text)
        self.write(text)
        self.had_runtime_error = True

    def write(self, text):
        print(text, file=self.stream or sys.stderr)

    def reset(self):
        self.had_error = False
        self.had_runtime_error = False
        self.diagnostics.clear()
