"""
Bytecalc Expression Tree

Immutable nodes built by the parser. Operator nodes keep the operator token so the evaluator can
point diagnostics at it; str() renders a node as a Lisp-style tree, e.g. (+ 1 (group (* 2KiB 3))).
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass

# Local ----------------------------------------------------------------------------------------------------------------
from .tokens import BinaryOperator, Token, TokenKind, UnaryOperator
from .units import FullUnit


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Literal:
    """An integer literal with an optional unit suffix token."""
    integer: Token
    unit: Token | None = None

    def __post_init__(self):
        if self.integer.kind is not TokenKind.INTEGER:
            raise ValueError(f"Literal requires an INTEGER token, got {self.integer.kind.name}")
        if self.unit is not None and self.unit.kind is not TokenKind.UNIT:
            raise ValueError(f"Literal unit requires a UNIT token, got {self.unit.kind.name}")

    def __str__(self):
        return f"{self.integer}{self.unit or ''}"

    @property
    def value(self) -> int:
        return self.integer.payload

    @property
    def full_unit(self) -> FullUnit | None:
        return self.unit.payload if self.unit is not None else None


@dataclass(frozen=True)
class Grouping:
    expression: "Expr"

    def __str__(self):
        return f"(group {self.expression})"


@dataclass(frozen=True)
class Binary:
    """Arithmetic operation; operator is derived from the token, which stays available for its span."""
    left: "Expr"
    token: Token
    right: "Expr"

    def __post_init__(self):
        BinaryOperator.from_token(self.token)

    def __str__(self):
        spine = self.left_spine()
        text = str(spine[0].left)
        for node in spine:
            text = f"({node.operator} {text} {node.right})"
        return text

    @property
    def operator(self) -> BinaryOperator:
        return BinaryOperator.from_token(self.token)

    def left_spine(self) -> list["Binary"]:
        """
        Binary nodes from the deepest left operand up to self.

        The parser builds operator chains left-deep, so walking them needs no recursion.
        """
        spine = []
        node = self
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left
        spine.reverse()
        return spine


@dataclass(frozen=True)
class TypeCast:
    left: "Expr"
    unit: Token

    def __post_init__(self):
        if self.unit.kind is not TokenKind.UNIT:
            raise ValueError(f"TypeCast requires a UNIT token, got {self.unit.kind.name}")

    def __str__(self):
        return f"(as {self.left} {self.unit})"

    @property
    def full_unit(self) -> FullUnit:
        return self.unit.payload


@dataclass(frozen=True)
class Unary:
    token: Token
    right: "Expr"

    def __post_init__(self):
        UnaryOperator.from_token(self.token)

    def __str__(self):
        return f"({self.operator} {self.right})"

    @property
    def operator(self) -> UnaryOperator:
        return UnaryOperator.from_token(self.token)


Expr = Literal | Grouping | Binary | TypeCast | Unary
