import sys

from .tokens import Token, TokenType
from .errors import LoxRuntimeError


class Diagnostics:
    """
    Collects error reports from every stage of the pipeline.

    The scanner and parser report syntax errors through `error` and
    `error_at`; the interpreter reports runtime failures through
    `runtime_error`. The host inspects the two flags to decide what to do
    next (skip interpretation, pick an exit code).
    """
    def __init__(self):
        self.had_error = False
        self.had_runtime_error = False

    def error(self, line: int, message: str):
        """Reports an error that only knows its source line."""
        self._report(line, "", message)

    def error_at(self, token: Token, message: str):
        """Reports an error positioned at a token."""
        if token.token_type == TokenType.EOF:
            self._report(token.line, " at end", message)
        else:
            self._report(token.line, f" at '{token.lexeme}'", message)

    def runtime_error(self, error: LoxRuntimeError):
        print(f"[line {error.token.line}] Error: {error.message}", file=sys.stderr)
        self.had_runtime_error = True

    def reset(self):
        self.had_error = False
        self.had_runtime_error = False

    def _report(self, line: int, where: str, message: str):
        print(f"[line {line}] Error{where}: {message}", file=sys.stderr)
        self.had_error = True
