import logging

from .errors import ParseError
from .syntax import Expr, Stmt
from .tokens import TokenType as T

logger = logging.getLogger(__name__)

MAX_ARGUMENTS = 255

STATEMENT_KEYWORDS = {
    T.CLASS, T.FUN, T.VAR, T.FOR, T.IF, T.WHILE, T.PRINT, T.RETURN,
}


class Parser:
    def __init__(self, tokens, reporter):
        self.tokens = tokens
        self.reporter = reporter
        self.current = 0

    def parse(self):
        statements = []
        try:
            while not self.at_end():
                if (statement := self.declaration()) is not None:
                    statements.append(statement)
        except RecursionError:
            # The rest of the input is abandoned; the error blocks execution.
            self.error(self.peek(), "Too much nesting.")
        logger.debug("parsed %d top-level statements", len(statements))
        return statements

    def declaration(self):
        try:
            if self.match(T.CLASS):
                return self.class_declaration()
            if self.match(T.FUN):
                return self.function("function")
            if self.match(T.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None

    def class_declaration(self):
        name = self.consume(T.IDENTIFIER, "Expect class name.")

        superclass = None
        if self.match(T.LESS):
            superclass = Expr.Variable(
                self.consume(T.IDENTIFIER, "Expect superclass name."))

        self.consume(T.LEFT_BRACE, "Expect '{' before class body.")
        methods = []
        while not self.check(T.RIGHT_BRACE) and not self.at_end():
            methods.append(self.function("method"))
        self.consume(T.RIGHT_BRACE, "Expect '}' after class body.")
        return Stmt.Class(name, superclass, methods)

    def function(self, kind):
        name = self.consume(T.IDENTIFIER, f"Expect {kind} name.")
        self.consume(T.LEFT_PAREN, f"Expect '(' after {kind} name.")

        params = []
        if not self.check(T.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self.error(self.peek(),
                               "Can't have more than 255 parameters.")
                params.append(
                    self.consume(T.IDENTIFIER, "Expect parameter name."))
                if not self.match(T.COMMA):
                    break

        self.consume(T.RIGHT_PAREN, "Expect ')' after parameters.")
        self.consume(T.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        return Stmt.Function(name, params, self.block())

    def var_declaration(self):
        name = self.consume(T.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self.match(T.EQUAL):
            initializer = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after variable declaration.")
        return Stmt.Var(name, initializer)

    def statement(self):
        if self.match(T.FOR):
            return self.for_statement()
        if self.match(T.IF):
            return self.if_statement()
        if self.match(T.PRINT):
            return self.print_statement()
        if keyword := self.match(T.RETURN):
            return self.return_statement(keyword)
        if self.match(T.WHILE):
            return self.while_statement()
        if self.match(T.LEFT_BRACE):
            return Stmt.Block(self.block())
        return self.expression_statement()

    def block(self):
        statements = []
        while not self.check(T.RIGHT_BRACE) and not self.at_end():
            if (statement := self.declaration()) is not None:
                statements.append(statement)
        self.consume(T.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def for_statement(self):
        self.consume(T.LEFT_PAREN, "Expect '(' after 'for'.")

        if self.match(T.SEMICOLON):
            initializer = None
        elif self.match(T.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(T.SEMICOLON):
            condition = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(T.RIGHT_PAREN):
            increment = self.expression()
        self.consume(T.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()
        if increment is not None:
            body = Stmt.Block([body, Stmt.Expression(increment)])
        if condition is None:
            condition = Expr.Literal(True)
        body = Stmt.While(condition, body)
        if initializer is not None:
            body = Stmt.Block([initializer, body])
        return body

    def if_statement(self):
        self.consume(T.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(T.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.statement()
        else_branch = None
        if self.match(T.ELSE):
            else_branch = self.statement()
        return Stmt.If(condition, then_branch, else_branch)

    def print_statement(self):
        value = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after value.")
        return Stmt.Print(value)

    def return_statement(self, keyword):
        value = None
        if not self.check(T.SEMICOLON):
            value = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after return value.")
        return Stmt.Return(keyword, value)

    def while_statement(self):
        self.consume(T.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(T.RIGHT_PAREN, "Expect ')' after condition.")
        return Stmt.While(condition, self.statement())

    def expression_statement(self):
        expr = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after expression.")
        return Stmt.Expression(expr)

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.logic_or()
        if equals := self.match(T.EQUAL):
            value = self.assignment()
            match expr:
                case Expr.Variable(name):
                    return Expr.Assign(name, value)
                case Expr.Get(obj, name):
                    return Expr.Set(obj, name, value)
            # Reported without unwinding; parsing carries on.
            self.error(equals, "Invalid assignment target.")
        return expr

    def logic_or(self):
        expr = self.logic_and()
        while operator := self.match(T.OR):
            expr = Expr.Logical(expr, operator, self.logic_and())
        return expr

    def logic_and(self):
        expr = self.equality()
        while operator := self.match(T.AND):
            expr = Expr.Logical(expr, operator, self.equality())
        return expr

    def equality(self):
        expr = self.comparison()
        while operator := self.match(T.BANG_EQUAL, T.EQUAL_EQUAL):
            expr = Expr.Binary(expr, operator, self.comparison())
        return expr

    def comparison(self):
        expr = self.term()
        while operator := self.match(
                T.GREATER, T.GREATER_EQUAL, T.LESS, T.LESS_EQUAL):
            expr = Expr.Binary(expr, operator, self.term())
        return expr

    def term(self):
        expr = self.factor()
        while operator := self.match(T.MINUS, T.PLUS):
            expr = Expr.Binary(expr, operator, self.factor())
        return expr

    def factor(self):
        expr = self.unary()
        while operator := self.match(T.SLASH, T.STAR):
            expr = Expr.Binary(expr, operator, self.unary())
        return expr

    def unary(self):
        if operator := self.match(T.BANG, T.MINUS):
            return Expr.Unary(operator, self.unary())
        return self.call()

    def call(self):
        expr = self.primary()
        while True:
            if self.match(T.LEFT_PAREN):
                expr = self.finish_call(expr)
            elif self.match(T.DOT):
                name = self.consume(
                    T.IDENTIFIER, "Expect property name after '.'.")
                expr = Expr.Get(expr, name)
            else:
                return expr

    def finish_call(self, callee):
        arguments = []
        if not self.check(T.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self.error(self.peek(),
                               "Can't have more than 255 arguments.")
                arguments.append(self.expression())
                if not self.match(T.COMMA):
                    break
        paren = self.consume(T.RIGHT_PAREN, "Expect ')' after arguments.")
        return Expr.Call(callee, paren, arguments)

    def primary(self):
        if self.match(T.FALSE):
            return Expr.Literal(False)
        if self.match(T.TRUE):
            return Expr.Literal(True)
        if self.match(T.NIL):
            return Expr.Literal(None)
        if token := self.match(T.NUMBER, T.STRING):
            return Expr.Literal(token.literal)
        if keyword := self.match(T.SUPER):
            self.consume(T.DOT, "Expect '.' after 'super'.")
            method = self.consume(
                T.IDENTIFIER, "Expect superclass method name.")
            return Expr.Super(keyword, method)
        if keyword := self.match(T.THIS):
            return Expr.This(keyword)
        if name := self.match(T.IDENTIFIER):
            return Expr.Variable(name)
        if self.match(T.LEFT_PAREN):
            expr = self.expression()
            self.consume(T.RIGHT_PAREN, "Expect ')' after expression.")
            return Expr.Grouping(expr)
        raise self.error(self.peek(), "Expect expression.")

    def synchronize(self):
        self.advance()
        while not self.at_end():
            if self.previous().type == T.SEMICOLON:
                return
            if self.peek().type in STATEMENT_KEYWORDS:
                return
            self.advance()

    def consume(self, token_type, message):
        if token := self.match(token_type):
            return token
        raise self.error(self.peek(), message)

    def match(self, *token_types):
        if self.peek().type in token_types:
            return self.advance()
        return None

    def check(self, token_type):
        return self.peek().type == token_type

    def advance(self):
        token = self.peek()
        if not self.at_end():
            self.current += 1
        return token

    def at_end(self):
        return self.peek().type == T.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def error(self, token, message):
        self.reporter.error_at(token, message)
        return ParseError(message)
