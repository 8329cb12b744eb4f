from .tokens import Token


class LoxRuntimeError(RuntimeError):
    """Custom exception for reporting runtime errors."""
    def __init__(self, token: Token, message: str):
        self.token = token
        self.message = message
        super().__init__(self.message)


class TypeMismatch(LoxRuntimeError):
    """An operator was applied to operands of the wrong type."""
    pass


class UndefinedVariable(LoxRuntimeError):
    """A variable was read or assigned before being declared."""
    pass
