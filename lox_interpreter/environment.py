from typing import Dict, Any, Optional

from .tokens import Token
from .errors import UndefinedVariable

class Environment:
    """
    One lexical scope: the names bound by `var` inside it, plus a link to the
    scope it is nested in. The global scope has no enclosing link.
    """
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.values: Dict[str, Any] = {}
        self.enclosing: Optional['Environment'] = enclosing

    def define(self, name: str, value: Any):
        """Binds `name` in this scope only, replacing any earlier binding here."""
        self.values[name] = value

    def get(self, name: Token) -> Any:
        """
        Returns the value bound to `name` in the innermost scope that has it.
        Raises UndefinedVariable, carrying the token for its line, when no
        scope in the chain binds the name.
        """
        if name.lexeme in self.values:
            return self.values[name.lexeme]

        if self.enclosing is not None:
            return self.enclosing.get(name)

        raise UndefinedVariable(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: Token, value: Any):
        """
        Rebinds `name` in the innermost scope that already has it.
        Unlike `define`, a missing name is an UndefinedVariable error.
        """
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return

        if self.enclosing is not None:
            self.enclosing.assign(name, value)
            return

        raise UndefinedVariable(name, f"Undefined variable '{name.lexeme}'.")
