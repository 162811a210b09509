import io

import pytest

from pylox.errors import ErrorReporter
from pylox.lox import Lox


@pytest.fixture
def reporter():
    return ErrorReporter(stream=io.StringIO())


@pytest.fixture
def lox(reporter):
    return Lox(reporter)


@pytest.fixture
def run(lox, capsys):
    """Run a Lox snippet and return the printed lines."""
    def _run(source):
        lox.run(source)
        return capsys.readouterr().out.splitlines()
    return _run


@pytest.fixture
def run_error(lox, capsys):
    """Run a snippet expected to fail at run time.

    Returns the printed lines and the single runtime error reported.
    """
    def _run_error(source):
        raised = []
        lox.reporter.runtime_error = raised.append
        lox.run(source)
        out = capsys.readouterr().out.splitlines()
        assert len(raised) == 1, out
        return out, raised[0]
    return _run_error
