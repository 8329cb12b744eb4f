from typing import List, Optional

from . import ast_nodes as ast
from .interpreter import stringify

class AstPrinter:
    """
    A utility class to print the AST in a readable Lisp-like format.
    This is extremely useful for debugging the parser.
    """
    def print(self, expr: ast.Expr) -> str:
        if isinstance(expr, ast.Binary): return self.visit_binary_expr(expr)
        if isinstance(expr, ast.Grouping): return self.visit_grouping_expr(expr)
        if isinstance(expr, ast.Literal): return self.visit_literal_expr(expr)
        if isinstance(expr, ast.Unary): return self.visit_unary_expr(expr)
        if isinstance(expr, ast.Variable): return self.visit_variable_expr(expr)
        if isinstance(expr, ast.Assign): return self.visit_assign_expr(expr)
        raise TypeError(f"Unknown expression node: {type(expr).__name__}")

    def print_stmt(self, stmt: Optional[ast.Stmt]) -> str:
        if stmt is None: return "<error>"
        if isinstance(stmt, ast.Expression): return self.visit_expression_stmt(stmt)
        if isinstance(stmt, ast.Print): return self.visit_print_stmt(stmt)
        if isinstance(stmt, ast.Var): return self.visit_var_stmt(stmt)
        if isinstance(stmt, ast.Block): return self.visit_block_stmt(stmt)
        raise TypeError(f"Unknown statement node: {type(stmt).__name__}")

    def print_program(self, statements: List[Optional[ast.Stmt]]) -> str:
        return "\n".join(self.print_stmt(stmt) for stmt in statements)

    # --- Statement Visitor Methods ---

    def visit_expression_stmt(self, stmt: ast.Expression) -> str:
        return self._parenthesize("expr_stmt", stmt.expression)

    def visit_print_stmt(self, stmt: ast.Print) -> str:
        return self._parenthesize("print", stmt.expression)

    def visit_var_stmt(self, stmt: ast.Var) -> str:
        if stmt.initializer is not None:
            return self._parenthesize(f"var {stmt.name.lexeme}", stmt.initializer)
        return f"(var {stmt.name.lexeme})"

    def visit_block_stmt(self, stmt: ast.Block) -> str:
        parts = ["(block"]
        for statement in stmt.statements:
            parts.append(f" {self.print_stmt(statement)}")
        parts.append(")")
        return "".join(parts)

    # --- Expression Visitor Methods ---

    def visit_binary_expr(self, expr: ast.Binary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_grouping_expr(self, expr: ast.Grouping) -> str:
        return self._parenthesize("group", expr.expression)

    def visit_literal_expr(self, expr: ast.Literal) -> str:
        if isinstance(expr.value, str): return f'"{expr.value}"'
        return stringify(expr.value)

    def visit_unary_expr(self, expr: ast.Unary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.right)

    def visit_variable_expr(self, expr: ast.Variable) -> str:
        return expr.name.lexeme

    def visit_assign_expr(self, expr: ast.Assign) -> str:
        return self._parenthesize(f"assign {expr.name.lexeme}", expr.value)

    # --- Helper Method ---

    def _parenthesize(self, name: str, *exprs: ast.Expr) -> str:
        """Helper to format a node and its children."""
        result = [f"({name}"]
        for expr in exprs:
            result.append(f" {self.print(expr)}")
        result.append(")")
        return "".join(result)
