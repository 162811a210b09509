from .runtime import stringify
from .syntax import Expr, Stmt


class AstPrinter:
    def print(self, node):
        if isinstance(node, Stmt):
            return self.statement(node)
        return self.expression(node)

    def statement(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                return self.parenthesize_statements("block", statements)
            case Stmt.Class(name, superclass, methods):
                head = f"class {name.lexeme}"
                if superclass is not None:
                    head += f" < {superclass.name.lexeme}"
                return self.parenthesize_statements(head, methods)
            case Stmt.Expression(expression):
                return f"(; {self.expression(expression)})"
            case Stmt.Function(name, params, body):
                names = " ".join(param.lexeme for param in params)
                return self.parenthesize_statements(
                    f"fun {name.lexeme}({names})", body)
            case Stmt.If(condition, then_branch, None):
                return (f"(if {self.expression(condition)} "
                        f"{self.statement(then_branch)})")
            case Stmt.If(condition, then_branch, else_branch):
                return (f"(if-else {self.expression(condition)} "
                        f"{self.statement(then_branch)} "
                        f"{self.statement(else_branch)})")
            case Stmt.Print(expression):
                return f"(print {self.expression(expression)})"
            case Stmt.Return(_, None):
                return "(return)"
            case Stmt.Return(_, value):
                return f"(return {self.expression(value)})"
            case Stmt.Var(name, None):
                return f"(var {name.lexeme})"
            case Stmt.Var(name, initializer):
                return f"(var {name.lexeme} = {self.expression(initializer)})"
            case Stmt.While(condition, body):
                return (f"(while {self.expression(condition)} "
                        f"{self.statement(body)})")
        raise TypeError(f"Unknown statement {stmt!r}")

    def expression(self, expr):
        match expr:
            case Expr.Assign(name, value):
                return f"(= {name.lexeme} {self.expression(value)})"
            case (Expr.Binary(left, operator, right)
                  | Expr.Logical(left, operator, right)):
                return self.parenthesize(operator.lexeme, left, right)
            case Expr.Call(callee, _, arguments):
                return self.parenthesize("call", callee, *arguments)
            case Expr.Get(obj, name):
                return f"(. {self.expression(obj)} {name.lexeme})"
            case Expr.Grouping(expression):
                return self.parenthesize("group", expression)
            case Expr.Literal(str() as value):
                return f"\"{value}\""
            case Expr.Literal(value):
                return stringify(value)
            case Expr.Set(obj, name, value):
                return (f"(= (. {self.expression(obj)} {name.lexeme}) "
                        f"{self.expression(value)})")
            case Expr.Super(_, method):
                return f"(super {method.lexeme})"
            case Expr.This():
                return "this"
            case Expr.Unary(operator, right):
                return self.parenthesize(operator.lexeme, right)
            case Expr.Variable(name):
                return name.lexeme
        raise TypeError(f"Unknown expression {expr!r}")

    def parenthesize(self, name, *exprs):
        parts = [name] + [self.expression(expr) for expr in exprs]
        return f"({' '.join(parts)})"

    def parenthesize_statements(self, name, statements):
        parts = [name] + [self.statement(stmt) for stmt in statements]
        return f"({' '.join(parts)})"
