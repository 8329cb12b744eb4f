import sys
import io
from contextlib import redirect_stderr

from .lexer import Lexer
from .parser import Parser
from .ast_printer import AstPrinter
from .diagnostics import Diagnostics
from .tokens import Token, TokenType
from . import ast_nodes as ast

def _parse(source_code):
    diagnostics = Diagnostics()
    f = io.StringIO()
    with redirect_stderr(f):
        tokens = Lexer(source_code, diagnostics).scan_tokens()
        statements = Parser(tokens, diagnostics).parse()
    return statements, diagnostics, f.getvalue()

def run_parser_test(name, source_code, expected_ast_str, expected_errors=None):
    """
    Runs a full lexer -> parser -> ast_printer test.
    """
    print(f"--- Running Parser Test: {name} ---")

    statements, diagnostics, errors = _parse(source_code)

    if diagnostics.had_error != bool(expected_errors):
        print(f"FAIL: {name} - unexpected error flag {diagnostics.had_error}")
        print(errors.strip())
        return False
    for fragment in expected_errors or []:
        if fragment not in errors:
            print(f"FAIL: {name}")
            print(f"Expected error containing: '{fragment}'")
            print(f"Got errors: '{errors.strip()}'")
            return False

    printer = AstPrinter()
    actual_ast_str = printer.print_program(statements)

    # Normalize by stripping whitespace from each line and joining
    normalized_actual = "\n".join(line.strip() for line in actual_ast_str.strip().split('\n'))
    normalized_expected = "\n".join(line.strip() for line in expected_ast_str.strip().split('\n'))

    if normalized_actual == normalized_expected:
        print(f"PASS: {name}")
        return True
    else:
        print(f"FAIL: {name}")
        print("\n--- EXPECTED AST ---")
        print(normalized_expected)
        print("\n--- ACTUAL AST ---")
        print(normalized_actual)
        print("\n--------------------")
        return False


def test_variable_declaration_and_precedence():
    assert run_parser_test("Variable Declaration and Precedence",
                           "var x = 10 * (2 + 3);",
                           "(var x (* 10 (group (+ 2 3))))")


def test_equality_chain():
    assert run_parser_test("Expression Statement with Equality",
                           "1 + 1 == 2 != false;",
                           "(expr_stmt (!= (== (+ 1 1) 2) false))")


def test_declaration_without_initializer():
    assert run_parser_test("Declaration without Initializer", "var y;", "(var y)")


def test_left_associative_terms():
    assert run_parser_test("Left Associative Terms",
                           "1 - 2 - 3; 8 / 4 * 2;",
                           """
                           (expr_stmt (- (- 1 2) 3))
                           (expr_stmt (* (/ 8 4) 2))
                           """)


def test_comparison_binds_tighter_than_equality():
    assert run_parser_test("Comparison Precedence",
                           "1 < 2 == 3 >= 4;",
                           "(expr_stmt (== (< 1 2) (>= 3 4)))")


def test_nested_unary():
    assert run_parser_test("Nested Unary", "print !!true; print -(-1);",
                           """
                           (print (! (! true)))
                           (print (- (group (- 1))))
                           """)


def test_assignment_is_right_associative():
    assert run_parser_test("Right Associative Assignment", "a = b = nil;",
                           "(expr_stmt (assign a (assign b nil)))")


def test_block_statement():
    assert run_parser_test("Block Statement", 'var a = 1; { var a = "in"; print a; }',
                           """
                           (var a 1)
                           (block (var a "in") (print a))
                           """)


def test_invalid_assignment_target_keeps_parsing():
    assert run_parser_test("Invalid Assignment Target", "1 + 2 = 3; print 4;",
                           """
                           (expr_stmt (+ 1 2))
                           (print 4)
                           """,
                           expected_errors=["[line 1] Error at '=': Invalid assignment target."])


def test_recovers_after_malformed_statement():
    statements, diagnostics, errors = _parse("var = 1; print 2;")
    assert diagnostics.had_error
    assert "[line 1] Error at '=': Expect variable name." in errors
    assert len(statements) == 2
    assert statements[0] is None
    assert isinstance(statements[1], ast.Print)
    assert statements[1].expression == ast.Literal(2.0)


def test_synchronizes_on_statement_keyword():
    statements, diagnostics, errors = _parse("print 1 + * 2 3 var b = 2;")
    assert "[line 1] Error at '*': Expect expression." in errors
    assert AstPrinter().print_program(statements) == "<error>\n(var b 2)"


def test_missing_semicolon_at_end():
    statements, diagnostics, errors = _parse("print 1")
    assert statements == [None]
    assert "[line 1] Error at end: Expect ';' after value." in errors


def test_unclosed_block():
    statements, diagnostics, errors = _parse("{ var a = 1;")
    assert statements == [None]
    assert "Error at end: Expect '}' after block." in errors


def test_deeply_nested_expression_is_reported():
    source = "(" * 400 + "1" + ")" * 400 + "; print 2;"
    statements, diagnostics, errors = _parse(source)
    assert diagnostics.had_error
    assert "Expression nesting too deep." in errors
    assert AstPrinter().print_program(statements) == "<error>\n(print 2)"


def test_unsupported_keyword_is_an_error():
    statements, diagnostics, errors = _parse("if (true) print 1;")
    assert diagnostics.had_error
    assert "Error at 'if': Expect expression." in errors


def test_literal_nodes():
    for source, value in [("12.5;", 12.5), ('"s";', "s"), ("true;", True), ("false;", False), ("nil;", None)]:
        statements, diagnostics, _ = _parse(source)
        assert not diagnostics.had_error
        assert statements == [ast.Expression(ast.Literal(value))]


def test_parses_hand_built_tokens():
    plus = Token(TokenType.PLUS, '+', None, 1)
    tokens = [
        Token(TokenType.NUMBER, '1', 1.0, 1),
        plus,
        Token(TokenType.NUMBER, '5', 5.0, 1),
        Token(TokenType.SEMICOLON, ';', None, 1),
        Token(TokenType.EOF, '', None, 1)
    ]
    statements = Parser(tokens).parse()
    assert statements == [ast.Expression(ast.Binary(ast.Literal(1.0), plus, ast.Literal(5.0)))]


TESTS = [
    test_variable_declaration_and_precedence,
    test_equality_chain,
    test_declaration_without_initializer,
    test_left_associative_terms,
    test_comparison_binds_tighter_than_equality,
    test_nested_unary,
    test_assignment_is_right_associative,
    test_block_statement,
    test_invalid_assignment_target_keeps_parsing,
    test_recovers_after_malformed_statement,
    test_synchronizes_on_statement_keyword,
    test_missing_semicolon_at_end,
    test_unclosed_block,
    test_deeply_nested_expression_is_reported,
    test_unsupported_keyword_is_an_error,
    test_literal_nodes,
    test_parses_hand_built_tokens,
]


def main():
    tests_passed = 0
    for test in TESTS:
        try:
            test()
            tests_passed += 1
        except AssertionError:
            print(f"FAIL: {test.__name__}")

    print(f"\n--- Parser Test Summary ---")
    print(f"{tests_passed} / {len(TESTS)} tests passed.")

    if tests_passed != len(TESTS):
        sys.exit(1) # Exit with error code if any test fails

if __name__ == "__main__":
    main()
