import math
from decimal import Decimal
from typing import List, Any, Optional

from . import ast_nodes as ast
from .tokens import Token, TokenType
from .errors import LoxRuntimeError, TypeMismatch
from .environment import Environment
from .diagnostics import Diagnostics


def stringify(value: Any) -> str:
    """Converts a runtime value to the text a print statement shows."""
    if value is None: return "nil"
    if isinstance(value, bool): return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value): return "NaN"
        if math.isinf(value): return "Infinity" if value > 0 else "-Infinity"
        # Positional form: the scanner has no exponent syntax.
        text = format(Decimal(repr(value)), "f")
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return str(value)


class Interpreter:
    """
    The Interpreter walks the AST and executes the code.
    """
    def __init__(self, diagnostics: Optional[Diagnostics] = None):
        self.diagnostics: Diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.globals = Environment()
        self.environment = self.globals

    def interpret(self, statements: List[Optional[ast.Stmt]]) -> List[Any]:
        """
        The main entry point for the interpreter.

        Returns one result per statement executed. A runtime error is
        reported and stops the remaining statements of this call, but the
        global environment survives for the next call.
        """
        results: List[Any] = []
        try:
            for statement in statements:
                results.append(self._execute(statement))
        except LoxRuntimeError as error:
            self.diagnostics.runtime_error(error)

        return results

    def _execute(self, stmt: Optional[ast.Stmt]) -> Any:
        """Helper to execute a single statement."""
        if stmt is None:
            # Slot of a statement the parser recovered from.
            return None
        if isinstance(stmt, ast.Expression): return self.visit_expression_stmt(stmt)
        if isinstance(stmt, ast.Print): return self.visit_print_stmt(stmt)
        if isinstance(stmt, ast.Var): return self.visit_var_stmt(stmt)
        if isinstance(stmt, ast.Block): return self.visit_block_stmt(stmt)
        raise TypeError(f"Unknown statement node: {type(stmt).__name__}")

    def _evaluate(self, expr: ast.Expr) -> Any:
        """Helper to evaluate a single expression."""
        if isinstance(expr, ast.Literal): return self.visit_literal_expr(expr)
        if isinstance(expr, ast.Grouping): return self.visit_grouping_expr(expr)
        if isinstance(expr, ast.Unary): return self.visit_unary_expr(expr)
        if isinstance(expr, ast.Binary): return self.visit_binary_expr(expr)
        if isinstance(expr, ast.Variable): return self.visit_variable_expr(expr)
        if isinstance(expr, ast.Assign): return self.visit_assign_expr(expr)
        raise TypeError(f"Unknown expression node: {type(expr).__name__}")

    # --- STATEMENT VISITOR METHODS ---

    def visit_expression_stmt(self, stmt: ast.Expression):
        return self._evaluate(stmt.expression)

    def visit_print_stmt(self, stmt: ast.Print):
        value = self._evaluate(stmt.expression)
        print(stringify(value))
        return value

    def visit_var_stmt(self, stmt: ast.Var):
        value = None
        if stmt.initializer is not None:
            value = self._evaluate(stmt.initializer)

        self.environment.define(stmt.name.lexeme, value)
        return None

    def visit_block_stmt(self, stmt: ast.Block):
        self._execute_block(stmt.statements, Environment(self.environment))
        return None

    def _execute_block(self, statements: List[Optional[ast.Stmt]], environment: Environment):
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                self._execute(statement)
        finally:
            self.environment = previous

    # --- HELPER METHODS FOR RUNTIME CHECKS ---

    def _is_truthy(self, obj: Any) -> bool:
        """Defines what is 'true' in Lox. False and nil are falsey."""
        if obj is None: return False
        if isinstance(obj, bool): return obj
        return True

    def _is_equal(self, a: Any, b: Any) -> bool:
        """Defines equality in Lox. Values of different types are never equal."""
        if a is None and b is None: return True
        if a is None or b is None: return False
        if self._is_number(a) and self._is_number(b): return a == b
        if type(a) is not type(b): return False
        return a == b

    def _is_number(self, obj: Any) -> bool:
        # bool is a subclass of int, so it has to be ruled out explicitly.
        return isinstance(obj, (int, float)) and not isinstance(obj, bool)

    def _check_number_operand(self, operator: Token, operand: Any):
        if self._is_number(operand): return
        raise TypeMismatch(operator, "Operand must be a number.")

    def _check_number_operands(self, operator: Token, left: Any, right: Any):
        if self._is_number(left) and self._is_number(right): return
        raise TypeMismatch(operator, "Operands must be numbers.")

    def _divide(self, left: float, right: float) -> float:
        if right == 0.0:
            # IEEE-754 division: Python raises where Lox yields inf or NaN.
            if left == 0.0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)
        return left / right

    # --- EXPRESSION VISITOR METHODS ---

    def visit_binary_expr(self, expr: ast.Binary):
        left = self._evaluate(expr.left)
        right = self._evaluate(expr.right)
        op_type = expr.operator.token_type

        if op_type == TokenType.MINUS:
            self._check_number_operands(expr.operator, left, right)
            return left - right
        if op_type == TokenType.SLASH:
            self._check_number_operands(expr.operator, left, right)
            return self._divide(left, right)
        if op_type == TokenType.STAR:
            self._check_number_operands(expr.operator, left, right)
            return left * right
        if op_type == TokenType.PLUS:
            if self._is_number(left) and self._is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise TypeMismatch(expr.operator, "Operands must be two numbers or two strings.")

        if op_type == TokenType.GREATER:
            self._check_number_operands(expr.operator, left, right)
            return left > right
        if op_type == TokenType.GREATER_EQUAL:
            self._check_number_operands(expr.operator, left, right)
            return left >= right
        if op_type == TokenType.LESS:
            self._check_number_operands(expr.operator, left, right)
            return left < right
        if op_type == TokenType.LESS_EQUAL:
            self._check_number_operands(expr.operator, left, right)
            return left <= right

        if op_type == TokenType.BANG_EQUAL:
            return not self._is_equal(left, right)
        if op_type == TokenType.EQUAL_EQUAL:
            return self._is_equal(left, right)

        # Should be unreachable.
        return None

    def visit_grouping_expr(self, expr: ast.Grouping):
        return self._evaluate(expr.expression)

    def visit_literal_expr(self, expr: ast.Literal):
        return expr.value

    def visit_unary_expr(self, expr: ast.Unary):
        right = self._evaluate(expr.right)
        if expr.operator.token_type == TokenType.MINUS:
            self._check_number_operand(expr.operator, right)
            return -right
        if expr.operator.token_type == TokenType.BANG:
            return not self._is_truthy(right)

        # Should be unreachable.
        return None

    def visit_variable_expr(self, expr: ast.Variable):
        return self.environment.get(expr.name)

    def visit_assign_expr(self, expr: ast.Assign):
        value = self._evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value
