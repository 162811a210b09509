import enum
import logging

from .syntax import Expr, Stmt

logger = logging.getLogger(__name__)


class FunctionType(enum.Enum):
    NONE = enum.auto()
    FUNCTION = enum.auto()
    METHOD = enum.auto()
    INITIALIZER = enum.auto()


class ClassType(enum.Enum):
    NONE = enum.auto()
    CLASS = enum.auto()
    SUBCLASS = enum.auto()


class Binding(enum.Enum):
    # A name missing from a scope has not been seen there yet.
    DECLARED = enum.auto()
    DEFINED = enum.auto()


class Resolver:
    """Static pass that records how far away each local variable lives.

    Scopes opened here must line up one to one with the environments the
    interpreter creates: blocks, function calls, the ``this`` binding of a
    bound method and the ``super`` environment of a subclass.
    """

    def __init__(self, interpreter, reporter):
        self.interpreter = interpreter
        self.reporter = reporter
        self.scopes = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE
        self.resolved = 0

    def resolve(self, statements):
        self.resolve_all(statements)
        logger.debug("resolved %d local references", self.resolved)

    def resolve_all(self, statements):
        for statement in statements:
            self.resolve_stmt(statement)

    def resolve_stmt(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                self.begin_scope()
                self.resolve_all(statements)
                self.end_scope()
            case Stmt.Class():
                self.resolve_class(stmt)
            case Stmt.Expression(expression) | Stmt.Print(expression):
                self.resolve_expr(expression)
            case Stmt.Function(name):
                self.declare(name)
                self.define(name)
                self.resolve_function(stmt, FunctionType.FUNCTION)
            case Stmt.If(condition, then_branch, else_branch):
                self.resolve_expr(condition)
                self.resolve_stmt(then_branch)
                if else_branch is not None:
                    self.resolve_stmt(else_branch)
            case Stmt.Return(keyword, value):
                self.resolve_return(keyword, value)
            case Stmt.Var(name, initializer):
                self.declare(name)
                if initializer is not None:
                    self.resolve_expr(initializer)
                self.define(name)
            case Stmt.While(condition, body):
                self.resolve_expr(condition)
                self.resolve_stmt(body)
            case _:
                raise TypeError(f"Unknown statement {stmt!r}")

    def resolve_expr(self, expr):
        match expr:
            case Expr.Assign(name, value):
                self.resolve_expr(value)
                self.resolve_local(expr, name)
            case Expr.Binary(left, _, right) | Expr.Logical(left, _, right):
                self.resolve_expr(left)
                self.resolve_expr(right)
            case Expr.Call(callee, _, arguments):
                self.resolve_expr(callee)
                for argument in arguments:
                    self.resolve_expr(argument)
            case Expr.Get(obj, _):
                self.resolve_expr(obj)
            case Expr.Grouping(expression):
                self.resolve_expr(expression)
            case Expr.Literal():
                pass
            case Expr.Set(obj, _, value):
                self.resolve_expr(value)
                self.resolve_expr(obj)
            case Expr.Super(keyword, _):
                if self.current_class == ClassType.NONE:
                    self.reporter.error_at(
                        keyword, "Can't use 'super' outside of a class.")
                elif self.current_class != ClassType.SUBCLASS:
                    self.reporter.error_at(
                        keyword,
                        "Can't use 'super' in a class with no superclass.")
                self.resolve_local(expr, keyword)
            case Expr.This(keyword):
                if self.current_class == ClassType.NONE:
                    self.reporter.error_at(
                        keyword, "Can't use 'this' outside of a class.")
                    return
                self.resolve_local(expr, keyword)
            case Expr.Unary(_, right):
                self.resolve_expr(right)
            case Expr.Variable(name):
                if (self.scopes and
                        self.scopes[-1].get(name.lexeme) == Binding.DECLARED):
                    self.reporter.error_at(
                        name,
                        "Can't read local variable in its own initializer.")
                self.resolve_local(expr, name)
            case _:
                raise TypeError(f"Unknown expression {expr!r}")

    def resolve_class(self, stmt):
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self.declare(stmt.name)
        self.define(stmt.name)

        if stmt.superclass is not None:
            if stmt.name.lexeme == stmt.superclass.name.lexeme:
                self.reporter.error_at(
                    stmt.superclass.name, "A class can't inherit from itself.")
            self.current_class = ClassType.SUBCLASS
            self.resolve_expr(stmt.superclass)
            self.begin_scope()
            self.scopes[-1]["super"] = Binding.DEFINED

        self.begin_scope()
        self.scopes[-1]["this"] = Binding.DEFINED
        for method in stmt.methods:
            kind = FunctionType.METHOD
            if method.name.lexeme == "init":
                kind = FunctionType.INITIALIZER
            self.resolve_function(method, kind)
        self.end_scope()

        if stmt.superclass is not None:
            self.end_scope()

        self.current_class = enclosing_class

    def resolve_function(self, function, kind):
        enclosing_function = self.current_function
        self.current_function = kind

        self.begin_scope()
        for param in function.params:
            self.declare(param)
            self.define(param)
        self.resolve_all(function.body)
        self.end_scope()

        self.current_function = enclosing_function

    def resolve_return(self, keyword, value):
        if self.current_function == FunctionType.NONE:
            self.reporter.error_at(keyword, "Can't return from top-level code.")
        if value is not None:
            if self.current_function == FunctionType.INITIALIZER:
                self.reporter.error_at(
                    keyword, "Can't return a value from an initializer.")
            self.resolve_expr(value)

    def begin_scope(self):
        self.scopes.append({})

    def end_scope(self):
        self.scopes.pop()

    def declare(self, name):
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            self.reporter.error_at(
                name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = Binding.DECLARED

    def define(self, name):
        if self.scopes:
            self.scopes[-1][name.lexeme] = Binding.DEFINED

    def resolve_local(self, expr, name):
        for distance, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.interpreter.resolve(expr, distance)
                self.resolved += 1
                return
