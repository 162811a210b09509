import logging

from . import config
from .errors import ErrorReporter
from .interpreter import Interpreter
from .parser import Parser
from .printer import AstPrinter
from .resolver import Resolver
from .scanner import Scanner

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STATIC_ERROR = 65
EXIT_RUNTIME_ERROR = 70


class Lox:
    def __init__(self, reporter=None, stdout=None):
        self.reporter = reporter or ErrorReporter()
        self.stdout = stdout
        self.interpreter = Interpreter(self.reporter, stdout)

    def parse(self, source):
        tokens = Scanner(source, self.reporter).scan_tokens()
        return Parser(tokens, self.reporter).parse()

    def run(self, source):
        statements = self.parse(source)
        if self.reporter.had_error:
            logger.debug("syntax errors, not resolving")
            return

        Resolver(self.interpreter, self.reporter).resolve(statements)
        if self.reporter.had_error:
            logger.debug("resolution errors, not interpreting")
            return

        self.interpreter.interpret(statements)

    def print_ast(self, source):
        statements = self.parse(source)
        printer = AstPrinter()
        for statement in statements:
            print(printer.print(statement), file=self.stdout)

    def exit_code(self):
        if self.reporter.had_error:
            return EXIT_STATIC_ERROR
        if self.reporter.had_runtime_error:
            return EXIT_RUNTIME_ERROR
        return EXIT_OK

    def run_file(self, filename, print_ast=False):
        with open(filename, "r", encoding="utf-8") as file:
            source = file.read()
        logger.debug("running %s", filename)
        if print_ast:
            self.print_ast(source)
        else:
            self.run(source)
        return self.exit_code()

    def run_prompt(self, lines=None):
        if lines is None:
            lines = self.read_lines()
        for line in lines:
            self.run(line)
            # Only static errors are forgotten; later lines still run.
            self.reporter.had_error = False

    def read_lines(self):
        prompt = config.get_prompt()
        while True:
            try:
                yield input(prompt)
            except EOFError:
                print(file=self.stdout)
                return
