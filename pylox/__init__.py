from .errors import ErrorReporter, LoxError, LoxRuntimeError
from .interpreter import Interpreter
from .lox import Lox

__all__ = ["ErrorReporter", "Interpreter", "Lox", "LoxError",
           "LoxRuntimeError"]
