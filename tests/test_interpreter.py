import io

from lox.diagnostics import Diagnostics
from lox.interpreter import Interpreter, divide, parse_program, run_program
from lox.values import Number, String


def run(source):
    """Run source in a fresh interpreter; return (stdout lines, diagnostics)."""
    out = io.StringIO()
    diagnostics = Diagnostics(stream=io.StringIO())
    run_program(source, Interpreter(diagnostics, out=out))
    return out.getvalue().splitlines(), diagnostics


def test_string_concatenation():
    assert run_program('"a" + "b";', Interpreter(Diagnostics(stream=io.StringIO()))) == String("ab")


def test_plus_with_mixed_operands_fails():
    lines, diagnostics = run('print 1 + "b";')
    assert lines == []
    assert diagnostics.had_runtime_error
    assert not diagnostics.had_error
    assert diagnostics.messages == ["Operands must be two numbers or two strings.\n[line 1]"]


def test_block_declarations_do_not_leak():
    lines, _ = run("var x = 1; { var x = 2; } print x;")
    assert lines == ["1"]


def test_block_assignment_updates_outer_binding():
    lines, _ = run("var a = 1; { a = 2; { a = a + 1; } } print a;")
    assert lines == ["3"]


def test_if_else():
    lines, _ = run('if (false) print "a"; else print "b";')
    assert lines == ["b"]


def test_for_loop_scope():
    lines, diagnostics = run("for (var i = 0; i < 3; i = i + 1) print i;\nprint i;")
    assert lines == ["0", "1", "2"]
    assert diagnostics.messages == ["Undefined variable 'i'.\n[line 2]"]


def test_assignment_to_undeclared_variable_fails_at_runtime():
    diagnostics = Diagnostics(stream=io.StringIO())
    statements = parse_program("y = 1;", diagnostics)
    assert statements is not None
    assert not diagnostics.had_error

    Interpreter(diagnostics).interpret(statements)
    assert diagnostics.had_runtime_error
    assert diagnostics.messages == ["Undefined variable 'y'.\n[line 1]"]


def test_first_runtime_error_aborts_the_run():
    lines, diagnostics = run('print 1;\nprint -"x";\nprint 2;')
    assert lines == ["1"]
    assert diagnostics.messages == ["Operand must be a number.\n[line 2]"]


def test_environment_restored_after_error_in_nested_blocks():
    interpreter = Interpreter(Diagnostics(stream=io.StringIO()), out=io.StringIO())
    run_program("var a = 1; { var a = 2; { var a = 3; print a - nil; } }", interpreter)
    assert interpreter.diagnostics.had_runtime_error
    assert interpreter.environment is interpreter.globals
    assert interpreter.globals.values == {'a': Number(1.0)}
    run_program("print a;", interpreter)
    assert interpreter.out.getvalue() == "1\n"


def test_syntax_error_skips_execution():
    lines, diagnostics = run('print "a";\nprint (;')
    assert lines == []
    assert diagnostics.had_error
    assert not diagnostics.had_runtime_error


def test_scan_error_skips_execution():
    lines, diagnostics = run('print "a"; @')
    assert lines == []
    assert diagnostics.messages == ["[line 1] Error: Unexpected character."]


def test_bindings_accumulate_across_runs():
    out = io.StringIO()
    interpreter = Interpreter(Diagnostics(stream=io.StringIO()), out=out)
    run_program("var a = 1;", interpreter)
    run_program("a = a + 1;", interpreter)
    run_program("print a;", interpreter)
    assert out.getvalue() == "2\n"


def test_truthiness():
    lines, _ = run(
        'if (0) print "zero"; if ("") print "empty";'
        'if (nil) print "nil"; else print "nil is falsy";'
        'print !false; print !0; print !nil;'
    )
    assert lines == ["zero", "empty", "nil is falsy", "true", "false", "true"]


def test_logical_operators_short_circuit():
    lines, diagnostics = run(
        'print nil or "x"; print "a" or undefined; print false and undefined;'
        'print 1 and 2; print nil and 2; print false or nil;'
    )
    assert lines == ["x", "a", "false", "2", "nil", "nil"]
    assert not diagnostics.had_runtime_error


def test_comparison_requires_numbers():
    lines, diagnostics = run('print 1 < 2; print 2 <= 2; print 3 > 4; print 3 >= 4;\nprint "a" < "b";')
    assert lines == ["true", "true", "false", "false"]
    assert diagnostics.messages == ["Operands must be numbers.\n[line 2]"]


def test_arithmetic_requires_numbers():
    for op in ('-', '*', '/'):
        _, diagnostics = run(f'print "a" {op} 1;')
        assert diagnostics.messages == ["Operands must be numbers.\n[line 1]"]


def test_equality_never_fails():
    lines, diagnostics = run(
        'print nil == false; print 1 == "1"; print "a" == "a";'
        'print nil == nil; print 1 != 2; print true != true;'
    )
    assert lines == ["false", "false", "true", "true", "true", "false"]
    assert not diagnostics.had_runtime_error


def test_number_formatting():
    lines, _ = run(
        "print 1; print 2.5; print 1 / 3; print 10 / 0; print -10 / 0;"
        "print 0 / 0; print 0 / 0 == 0 / 0; print -0; print 1000000 * 1000000;"
    )
    assert lines == [
        "1", "2.5", "0.3333333333333333", "inf", "-inf",
        "NaN", "false", "-0", "1000000000000",
    ]


def test_divide():
    assert divide(6.0, 3.0) == 2.0
    assert divide(1.0, -0.0) == float('-inf')


def test_variables():
    lines, _ = run('var a; print a; var a = "again"; print a; var b = a = "c"; print a + b;')
    assert lines == ["nil", "again", "cc"]


def test_while_loop():
    lines, _ = run("var n = 3; while (n > 0) { print n; n = n - 1; }")
    assert lines == ["3", "2", "1"]


def test_print_goes_to_stdout_by_default(capsys):
    run_program('print "shown";', Interpreter(Diagnostics()))
    assert capsys.readouterr().out == "shown\n"


def test_runtime_error_goes_to_stderr_by_default(capsys):
    run_program('print -"x";', Interpreter(Diagnostics()))
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "Operand must be a number.\n[line 1]\n"
