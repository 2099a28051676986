import pytest

from lox.ast import Binary, Block, Expression, Literal, Print, Var, While
from lox.ast_printer import print_stmt
from lox.diagnostics import Diagnostics
from lox.parser import PanicRecovery, Parser, RecoveryState
from lox.scanner import scan_tokens
from lox.tokens import Token, TokenType
from lox.values import TRUE, Number


def make_parser(source):
    diagnostics = Diagnostics()
    return Parser(scan_tokens(source, diagnostics), diagnostics), diagnostics


def parse(source):
    parser, diagnostics = make_parser(source)
    return parser.parse(), diagnostics


def printed(source):
    statements, diagnostics = parse(source)
    assert not diagnostics.had_error, diagnostics.messages
    return [print_stmt(s) for s in statements]


def test_multiplication_binds_tighter_than_addition():
    statements, _ = parse("1 + 2 * 3;")
    expr = statements[0].expression
    assert isinstance(expr, Binary)
    assert expr.operator.type is TokenType.PLUS
    assert expr.left == Literal(Number(1.0))
    assert isinstance(expr.right, Binary)
    assert expr.right.operator.type is TokenType.STAR
    assert printed("1 + 2 * 3;") == ["(; (+ 1 (* 2 3)))"]


def test_binary_levels_are_left_associative():
    assert printed("1 - 2 - 3;") == ["(; (- (- 1 2) 3))"]
    assert printed("8 / 4 / 2;") == ["(; (/ (/ 8 4) 2))"]
    assert printed("a or b or c;") == ["(; (or (or a b) c))"]


def test_precedence_ladder():
    assert printed("(1 + 2) * 3;") == ["(; (* (group (+ 1 2)) 3))"]
    assert printed("!-x;") == ["(; (! (- x)))"]
    assert printed("a or b and c;") == ["(; (or a (and b c)))"]
    assert printed("1 < 2 == true;") == ["(; (== (< 1 2) true))"]
    assert printed("x = 1 + 2 > 3 and y;") == ["(; (= x (and (> (+ 1 2) 3) y)))"]


def test_assignment_is_right_associative():
    assert printed("a = b = 1;") == ["(; (= a (= b 1)))"]


@pytest.mark.parametrize('source', ["1 + 2 = 3;", "1 = ;", "(a) = 1;", "a + b = print 2;"])
def test_invalid_assignment_target(source):
    statements, diagnostics = parse(source)
    assert statements is None
    assert diagnostics.messages == ["[line 1] Error at '=': Invalid assignment target."]


def test_assignment_to_undeclared_name_parses():
    statements, diagnostics = parse("y = 1;")
    assert not diagnostics.had_error
    assert print_stmt(statements[0]) == "(; (= y 1))"


def test_statements():
    assert printed('print "hi"; var a; var b = nil; { a; }') == [
        "(print hi)",
        "(var a)",
        "(var b nil)",
        "(block (; a))",
    ]


def test_dangling_else_binds_to_nearest_if():
    assert printed("if (a) if (b) print 1; else print 2;") == [
        "(if a (if b (print 1) (print 2)))",
    ]


def test_while_statement():
    assert printed("while (i < 3) i = i + 1;") == ["(while (< i 3) (; (= i (+ i 1))))"]


def test_for_is_desugared_into_block_and_while():
    statements, _ = parse("for (var i = 0; i < 3; i = i + 1) print i;")
    outer = statements[0]
    assert isinstance(outer, Block)
    assert isinstance(outer.statements[0], Var)
    loop = outer.statements[1]
    assert isinstance(loop, While)
    assert isinstance(loop.body, Block)
    assert isinstance(loop.body.statements[0], Print)
    assert isinstance(loop.body.statements[1], Expression)
    assert print_stmt(outer) == (
        "(block (var i 0) (while (< i 3) (block (print i) (; (= i (+ i 1))))))"
    )


def test_for_with_empty_clauses():
    statements, _ = parse("for (;;) print 1;")
    loop = statements[0]
    assert isinstance(loop, While)
    assert loop.condition == Literal(TRUE)
    assert print_stmt(loop) == "(while true (print 1))"


def test_for_with_expression_initializer():
    assert printed("for (i = 0; i < 1;) print i;") == [
        "(block (; (= i 0)) (while (< i 1) (print i)))",
    ]


def test_error_locations():
    _, diagnostics = parse("print 1")
    assert diagnostics.messages == ["[line 1] Error at end: Expect ';' after value."]
    _, diagnostics = parse("print (1;")
    assert diagnostics.messages == ["[line 1] Error at ';': Expect ')' after expression."]
    _, diagnostics = parse("{ print 1;")
    assert diagnostics.messages == ["[line 1] Error at end: Expect '}' after block."]
    _, diagnostics = parse("if x) print 1;")
    assert diagnostics.messages == ["[line 1] Error at 'x': Expect '(' after 'if'."]
    _, diagnostics = parse("\n\nvar 1 = 2;")
    assert diagnostics.messages == ["[line 3] Error at '1': Expect variable name."]


def test_recovery_stops_at_next_statement():
    parser, diagnostics = make_parser("var = 1; print 2;")
    assert parser.parse() is None
    assert diagnostics.messages == ["[line 1] Error at '=': Expect variable name."]
    assert parser.peek().type is TokenType.PRINT
    assert parser.recovery.state is RecoveryState.RESUMED


def test_recovery_stops_before_statement_keyword():
    parser, _ = make_parser("print 1 + + while (x) x;")
    assert parser.parse() is None
    assert parser.peek().type is TokenType.WHILE


def test_malformed_statement_reports_only_once():
    _, diagnostics = parse("print 1 +; print 2; print (;")
    assert len(diagnostics.messages) == 1
    _, diagnostics = parse("{ { var = 1; } } print 1;")
    assert diagnostics.messages == ["[line 1] Error at '=': Expect variable name."]


def test_parse_expression():
    parser, diagnostics = make_parser("1 + 2")
    expr = parser.parse_expression()
    assert isinstance(expr, Binary)
    assert not diagnostics.had_error


def tok(type, lexeme=''):
    return Token(type, lexeme, None, 1)


def test_panic_recovery_state_machine():
    recovery = PanicRecovery()
    assert recovery.state is RecoveryState.RESUMED
    # observing while resumed changes nothing
    assert recovery.observe(tok(TokenType.NUMBER), tok(TokenType.PLUS)) is RecoveryState.RESUMED

    recovery.enter()
    assert recovery.panicking
    assert recovery.observe(tok(TokenType.NUMBER), tok(TokenType.PLUS)) is RecoveryState.SEEKING_BOUNDARY
    assert recovery.observe(tok(TokenType.SEMICOLON), tok(TokenType.IDENTIFIER)) is RecoveryState.RESUMED
    assert not recovery.panicking

    recovery.enter()
    assert recovery.observe(tok(TokenType.NUMBER), tok(TokenType.RETURN)) is RecoveryState.RESUMED
    recovery.enter()
    assert recovery.observe(tok(TokenType.NUMBER), tok(TokenType.EOF)) is RecoveryState.RESUMED
    recovery.enter()
    # 'else' does not start a statement
    assert recovery.observe(tok(TokenType.RIGHT_BRACE), tok(TokenType.ELSE)) is RecoveryState.SEEKING_BOUNDARY
