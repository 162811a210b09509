import logging
import math

from .environment import Environment
from .errors import (
    LoxRuntimeError, LoxTypeError, ArityError, UndefinedPropertyError,
    StackOverflow)
from .runtime import (
    LoxCallable, LoxClass, LoxFunction, LoxInstance, NATIVES,
    is_equal, is_truthy, stringify)
from .syntax import Expr, Stmt
from .tokens import TokenType as T

logger = logging.getLogger(__name__)


class Returning:
    """Completion of a statement that executed ``return``."""

    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value


NUMBER_OPERATORS = {
    T.MINUS: lambda a, b: a - b,
    T.STAR: lambda a, b: a * b,
    T.GREATER: lambda a, b: a > b,
    T.GREATER_EQUAL: lambda a, b: a >= b,
    T.LESS: lambda a, b: a < b,
    T.LESS_EQUAL: lambda a, b: a <= b,
}


def divide(left, right):
    if right != 0.0:
        return left / right
    # IEEE 754 results; Python raises ZeroDivisionError instead.
    if left == 0.0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


class Interpreter:
    def __init__(self, reporter, stdout=None):
        self.reporter = reporter
        self.stdout = stdout
        self.globals = Environment()
        self.environment = self.globals
        self.locals = {}

        for native in NATIVES:
            self.globals.define(native.name, native)

    def interpret(self, statements):
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            self.reporter.runtime_error(error)

    def resolve(self, expr, depth):
        self.locals[expr] = depth

    # Statements return None on normal completion, or a Returning signal
    # that unwinds to the enclosing function call.

    def execute(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                return self.execute_block(
                    statements, Environment(self.environment))
            case Stmt.Class():
                self.execute_class(stmt)
            case Stmt.Expression(expression):
                self.evaluate(expression)
            case Stmt.Function(name):
                function = LoxFunction(stmt, self.environment)
                self.environment.define(name.lexeme, function)
            case Stmt.If(condition, then_branch, else_branch):
                if is_truthy(self.evaluate(condition)):
                    return self.execute(then_branch)
                if else_branch is not None:
                    return self.execute(else_branch)
            case Stmt.Print(expression):
                value = self.evaluate(expression)
                print(stringify(value), file=self.stdout)
            case Stmt.Return(_, value):
                if value is not None:
                    return Returning(self.evaluate(value))
                return Returning(None)
            case Stmt.Var(name, initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer)
                self.environment.define(name.lexeme, value)
            case Stmt.While(condition, body):
                while is_truthy(self.evaluate(condition)):
                    if (signal := self.execute(body)) is not None:
                        return signal
            case _:
                raise TypeError(f"Unknown statement {stmt!r}")
        return None

    def execute_block(self, statements, environment):
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                if (signal := self.execute(statement)) is not None:
                    return signal
            return None
        finally:
            self.environment = previous

    def execute_class(self, stmt):
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise LoxTypeError(
                    stmt.superclass.name, "Superclass must be a class.")

        self.environment.define(stmt.name.lexeme, None)

        if superclass is not None:
            self.environment = Environment(self.environment)
            self.environment.define("super", superclass)

        methods = {
            method.name.lexeme: LoxFunction(
                method, self.environment, method.name.lexeme == "init")
            for method in stmt.methods}
        klass = LoxClass(stmt.name.lexeme, superclass, methods)

        if superclass is not None:
            self.environment = self.environment.enclosing

        self.environment.assign(stmt.name, klass)
        logger.debug("defined class %s with %d methods", klass.name,
                     len(methods))

    def evaluate(self, expr):
        match expr:
            case Expr.Literal(value):
                return value
            case Expr.Grouping(expression):
                return self.evaluate(expression)
            case Expr.Variable(name) | Expr.This(name):
                return self.look_up_variable(name, expr)
            case Expr.Assign(name, value):
                value = self.evaluate(value)
                if (distance := self.locals.get(expr)) is not None:
                    self.environment.assign_at(distance, name.lexeme, value)
                else:
                    self.globals.assign(name, value)
                return value
            case Expr.Logical(left, operator, right):
                left = self.evaluate(left)
                if operator.type == T.OR:
                    if is_truthy(left):
                        return left
                elif not is_truthy(left):
                    return left
                return self.evaluate(right)
            case Expr.Unary(operator, right):
                return self.unary(operator, self.evaluate(right))
            case Expr.Binary(left, operator, right):
                left = self.evaluate(left)
                right = self.evaluate(right)
                return self.binary(operator, left, right)
            case Expr.Call(callee, paren, arguments):
                callee = self.evaluate(callee)
                arguments = [self.evaluate(argument)
                             for argument in arguments]
                return self.call(callee, paren, arguments)
            case Expr.Get(obj, name):
                obj = self.evaluate(obj)
                if not isinstance(obj, LoxInstance):
                    raise LoxTypeError(
                        name, "Only instances have properties.")
                return obj.get(name)
            case Expr.Set(obj, name, value):
                obj = self.evaluate(obj)
                if not isinstance(obj, LoxInstance):
                    raise LoxTypeError(name, "Only instances have fields.")
                value = self.evaluate(value)
                obj.set(name, value)
                return value
            case Expr.Super(_, method):
                return self.super_method(expr, method)
            case _:
                raise TypeError(f"Unknown expression {expr!r}")

    def look_up_variable(self, name, expr):
        if (distance := self.locals.get(expr)) is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def super_method(self, expr, method):
        distance = self.locals[expr]
        superclass = self.environment.get_at(distance, "super")
        # "this" always lives in the environment just inside "super".
        instance = self.environment.get_at(distance - 1, "this")

        function = superclass.find_method(method.lexeme)
        if function is None:
            raise UndefinedPropertyError(
                method, f"Undefined property '{method.lexeme}'.")
        return function.bind(instance)

    def call(self, callee, paren, arguments):
        if not isinstance(callee, LoxCallable):
            raise LoxTypeError(paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity():
            raise ArityError(paren, callee.arity(), len(arguments))
        try:
            return callee.call(self, arguments)
        except RecursionError:
            raise StackOverflow(paren, "Stack overflow.") from None

    def unary(self, operator, right):
        match operator.type:
            case T.BANG:
                return not is_truthy(right)
            case T.MINUS:
                self.check_number_operands(operator, right)
                return -right
        raise TypeError(f"Unknown unary operator {operator.lexeme}")

    def binary(self, operator, left, right):
        match operator.type:
            case T.EQUAL_EQUAL:
                return is_equal(left, right)
            case T.BANG_EQUAL:
                return not is_equal(left, right)
            case T.PLUS:
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise LoxTypeError(
                    operator,
                    f"Operands of '{operator.lexeme}' must be two numbers "
                    "or two strings.")
            case T.SLASH:
                self.check_number_operands(operator, left, right)
                return divide(left, right)
            case operator_type if operator_type in NUMBER_OPERATORS:
                self.check_number_operands(operator, left, right)
                return NUMBER_OPERATORS[operator_type](left, right)
        raise TypeError(f"Unknown binary operator {operator.lexeme}")

    def check_number_operands(self, operator, *operands):
        if all(isinstance(operand, float) for operand in operands):
            return
        if len(operands) == 1:
            raise LoxTypeError(
                operator, f"Operand of '{operator.lexeme}' must be a number.")
        raise LoxTypeError(
            operator, f"Operands of '{operator.lexeme}' must be numbers.")
