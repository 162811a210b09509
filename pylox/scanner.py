import logging

from .tokens import KEYWORDS, Token, TokenType

logger = logging.getLogger(__name__)

SINGLE_CHARACTER_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# Operators that gain an "=" suffix: (without, with).
EQUAL_SUFFIXED_TOKENS = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}


def is_digit(c):
    return "0" <= c <= "9"


def is_alpha(c):
    return "a" <= c <= "z" or "A" <= c <= "Z" or c == "_"


def is_alphanumeric(c):
    return is_alpha(c) or is_digit(c)


class Scanner:
    def __init__(self, source, reporter):
        self.source = source
        self.reporter = reporter
        self.start = 0
        self.current = 0
        self.line = 1
        self.tokens = []

    def scan_tokens(self):
        while not self.at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        logger.debug("scanned %d tokens over %d lines",
                     len(self.tokens), self.line)
        return self.tokens

    def scan_token(self):
        c = self.advance()
        if c in SINGLE_CHARACTER_TOKENS:
            self.add_token(SINGLE_CHARACTER_TOKENS[c])
            return
        if c in EQUAL_SUFFIXED_TOKENS:
            plain, suffixed = EQUAL_SUFFIXED_TOKENS[c]
            self.add_token(suffixed if self.match("=") else plain)
            return

        match c:
            case "/":
                if self.match("/"):
                    self.comment()
                else:
                    self.add_token(TokenType.SLASH)
            case " " | "\r" | "\t":
                pass
            case "\n":
                self.line += 1
            case "\"":
                self.string()
            case _ if is_digit(c):
                self.number()
            case _ if is_alpha(c):
                self.identifier()
            case _:
                self.reporter.error(self.line, "Unexpected character.")

    def comment(self):
        while self.peek() != "\n" and not self.at_end():
            self.current += 1

    def string(self):
        while self.peek() != "\"" and not self.at_end():
            if self.peek() == "\n":
                self.line += 1
            self.current += 1

        if self.at_end():
            self.reporter.error(self.line, "Unterminated string.")
            return

        self.current += 1  # closing "
        self.add_token(TokenType.STRING,
                       self.source[self.start + 1:self.current - 1])

    def number(self):
        while is_digit(self.peek()):
            self.current += 1

        if self.peek() == "." and is_digit(self.peek_next()):
            self.current += 1
            while is_digit(self.peek()):
                self.current += 1

        self.add_token(TokenType.NUMBER,
                       float(self.source[self.start:self.current]))

    def identifier(self):
        while is_alphanumeric(self.peek()):
            self.current += 1

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def add_token(self, type, literal=None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(type, lexeme, literal, self.line))

    def match(self, expected):
        if self.at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def advance(self):
        c = self.source[self.current]
        self.current += 1
        return c

    def peek(self):
        if self.at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def at_end(self):
        return self.current >= len(self.source)
