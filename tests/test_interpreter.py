import pytest

from pylox.errors import (
    ArityError, LoxTypeError, StackOverflow, UndefinedVariable)
from pylox.resolver import Resolver


def test_arithmetic_and_strings(run):
    assert run('print 1 + 2; print "a" + "b"; print 7 / 2; print -(3 * 2);'
               ) == ["3", "ab", "3.5", "-6"]


def test_comparison_and_equality(run):
    assert run("""
    print 1 < 2; print 2 <= 1; print 3 > 3; print 3 >= 3;
    print nil == nil; print nil == false; print 1 == "1"; print "a" != "b";
    print 0 == false; print 1 == true;
    """) == ["true", "false", "false", "true",
             "true", "false", "false", "true",
             "false", "false"]


def test_truthiness(run):
    assert run("""
    if (0) print "zero"; if ("") print "empty";
    if (nil) print "nil"; else print "not nil";
    print !nil; print !0;
    """) == ["zero", "empty", "not nil", "true", "false"]


def test_logical_operators_short_circuit(run):
    assert run("""
    var calls = 0;
    fun touch() { calls = calls + 1; return true; }
    print nil or "right"; print "left" or touch();
    print false and touch(); print 1 and 2;
    print calls;
    """) == ["right", "left", "false", "2", "0"]


def test_shadowing_and_block_restoration(run):
    assert run('var a = "outer"; { var a = "inner"; print a; } print a;'
               ) == ["inner", "outer"]


def test_assignment_reaches_enclosing_scope(run):
    assert run("""
    var a = 1;
    { var b = 2; { a = a + b; b = 10; } print b; }
    print a;
    """) == ["10", "3"]


def test_while_and_for(run):
    assert run("""
    var i = 0; while (i < 3) { print i; i = i + 1; }
    for (var j = 0; j < 2; j = j + 1) print j;
    """) == ["0", "1", "2", "0", "1"]


def test_uninitialized_variable_is_nil(run):
    assert run("var a; print a;") == ["nil"]


def test_functions_and_recursion(run):
    assert run("""
    fun fib(n) { if (n < 2) return n; return fib(n - 1) + fib(n - 2); }
    print fib(10);
    fun noop() {}
    print noop();
    print fib;
    print clock;
    """) == ["55", "nil", "<fn fib>", "<native fn>"]


def test_return_unwinds_nested_blocks_and_loops(run):
    assert run("""
    fun find(limit) {
      var i = 0;
      while (true) {
        { if (i == limit) { return i; } }
        i = i + 1;
      }
    }
    print find(4);
    var after = "still global";
    print after;
    """) == ["4", "still global"]


def test_closure_observes_defining_scope(run):
    assert run("""
    fun make() { var x = "closed"; fun inner() { print x; } return inner; }
    var x = "global";
    make()();
    """) == ["closed"]


def test_closures_capture_by_reference(run):
    assert run("""
    fun counter() {
      var count = 0;
      fun increment() { count = count + 1; return count; }
      return increment;
    }
    var a = counter(); var b = counter();
    a(); a();
    print a(); print b();
    """) == ["3", "1"]


def test_resolution_is_static(run):
    # The closure keeps the "a" it resolved to, even after a
    # shadowing declaration in the same block.
    assert run("""
    var a = "global";
    {
      fun show() { print a; }
      show();
      var a = "block";
      show();
    }
    """) == ["global", "global"]


def test_clock_returns_number(run):
    assert run("print clock() > 0;") == ["true"]


def test_same_ast_runs_deterministically(lox, capsys):
    statements = lox.parse("""
    fun fact(n) { if (n <= 1) return 1; return n * fact(n - 1); }
    { var r = fact(5); print r; }
    """)
    for _ in range(2):
        Resolver(lox.interpreter, lox.reporter).resolve(statements)
        lox.interpreter.interpret(statements)
    assert capsys.readouterr().out.splitlines() == ["120", "120"]


def test_mixed_addition_is_a_type_error(run_error):
    out, error = run_error('print "before"; print 1 + "a"; print "after";')
    assert out == ["before"]
    assert isinstance(error, LoxTypeError)
    assert error.message == "Operands of '+' must be two numbers or two strings."
    assert error.token.lexeme == "+"


@pytest.mark.parametrize("source, message", [
    ('-"a";', "Operand of '-' must be a number."),
    ('1 < "a";', "Operands of '<' must be numbers."),
    ("nil * 2;", "Operands of '*' must be numbers."),
])
def test_operand_type_errors_name_the_operator(run_error, source, message):
    _, error = run_error(source)
    assert isinstance(error, LoxTypeError)
    assert error.message == message


def test_division_by_zero_follows_ieee(run, reporter):
    assert run("""
    print "before";
    print 1 / 0; print -1 / 0; print 0 / 0; print 1 / -0;
    print 1 / 0 > 1000;
    print "after";
    """) == ["before", "Infinity", "-Infinity", "NaN", "-Infinity",
             "true", "after"]
    assert not reporter.had_runtime_error


def test_undefined_variable(run_error):
    _, error = run_error("print nope;")
    assert isinstance(error, UndefinedVariable)
    assert error.message == "Undefined variable 'nope'."


def test_assignment_never_declares(run_error):
    _, error = run_error("nope = 1;")
    assert isinstance(error, UndefinedVariable)


def test_calling_a_non_callable(run_error):
    _, error = run_error('"text"();')
    assert isinstance(error, LoxTypeError)
    assert error.message == "Can only call functions and classes."


def test_arity_is_checked_at_call_time(run_error):
    out, error = run_error('fun f(a, b) {} print "defined"; f(1);')
    assert out == ["defined"]
    assert isinstance(error, ArityError)
    assert error.message == "Expected 2 arguments but got 1."
    assert (error.expected, error.got) == (2, 1)


def test_arguments_evaluate_left_to_right(run):
    assert run("""
    fun show(x) { print x; return x; }
    fun pair(a, b) {}
    pair(show(1), show(2));
    """) == ["1", "2"]


def test_runtime_error_restores_environment(lox, run_error):
    run_error("{ var a = 1; { fun f() { return nope; } f(); } }")
    assert lox.interpreter.environment is lox.interpreter.globals


def test_unbounded_recursion_is_a_runtime_error(lox, run_error):
    _, error = run_error("fun f() { f(); } f();")
    assert isinstance(error, StackOverflow)
    assert lox.interpreter.environment is lox.interpreter.globals


def test_runtime_error_is_reported_once(lox, reporter, capsys):
    lox.run("print 1; print -nil; print 2;")
    assert capsys.readouterr().out.splitlines() == ["1"]
    assert reporter.had_runtime_error
    assert not reporter.had_error
    assert reporter.diagnostics == [
        "Operand of '-' must be a number.\n[line 1]"]
