from dataclasses import dataclass
from typing import List, Any, Optional, Union

from .tokens import Token


# Nodes are plain records. Consumers (the interpreter, the AST printer)
# dispatch on the node class themselves, so the node families below are
# closed: every consumer must handle each member of `Expr` and `Stmt`.


# --- Concrete Expression Nodes ---

@dataclass
class Assign:
    name: Token
    value: 'Expr'


@dataclass
class Binary:
    left: 'Expr'
    operator: Token
    right: 'Expr'


@dataclass
class Grouping:
    expression: 'Expr'


@dataclass
class Literal:
    value: Any


@dataclass
class Unary:
    operator: Token
    right: 'Expr'


@dataclass
class Variable:
    name: Token


Expr = Union[Assign, Binary, Grouping, Literal, Unary, Variable]


# --- Concrete Statement Nodes ---

@dataclass
class Block:
    statements: List[Optional['Stmt']]


@dataclass
class Expression:
    expression: Expr


@dataclass
class Print:
    expression: Expr


@dataclass
class Var:
    name: Token
    initializer: Optional[Expr]


Stmt = Union[Block, Expression, Print, Var]
