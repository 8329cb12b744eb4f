from .diagnostics import Diagnostics
from .lexer import Lexer, scan
from .parser import Parser, ParseError, parse
from .interpreter import Interpreter, stringify
from .lox import Lox
