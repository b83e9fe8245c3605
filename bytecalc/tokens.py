"""
Bytecalc Tokens

Located tokens produced by the lexer and the restricted operator types the parser builds from them.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from enum import Enum, StrEnum, unique
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .units import FullUnit


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Span:
    """
    Half-open byte-offset range [start, end) into the source text.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span: [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self):
        return f"{self.start}..{self.end}"


# @formatter:off
@unique
class TokenKind(Enum):
    # Single character tokens
    MINUS = "-"
    PLUS = "+"
    STAR = "*"
    SLASH = "/"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"

    # Literals
    INTEGER = "INTEGER"
    UNIT = "UNIT"

    # Keywords
    AS = "as"

    # End of input
    EOF = "<EOF>"
# @formatter:on


@dataclass(frozen=True)
class Token:
    """
    A token and the exact source span it consumed.

    The payload is an int for INTEGER tokens, a FullUnit for UNIT tokens and None otherwise.
    """
    kind: TokenKind
    span: Span
    payload: int | FullUnit | None = None

    def __post_init__(self):
        if self.kind is TokenKind.INTEGER:
            if not isinstance(self.payload, int) or not 0 <= self.payload < 2**64:
                raise ValueError(f"INTEGER token requires an unsigned 64-bit payload, got {self.payload!r}")
        elif self.kind is TokenKind.UNIT:
            if not isinstance(self.payload, FullUnit):
                raise ValueError(f"UNIT token requires a FullUnit payload, got {self.payload!r}")
        elif self.payload is not None:
            raise ValueError(f"{self.kind.name} token takes no payload, got {self.payload!r}")

    def __str__(self):
        """Token as rendered in diagnostics: symbols, unit letters, decimal digits or the end marker."""
        if self.kind in (TokenKind.INTEGER, TokenKind.UNIT):
            return str(self.payload)
        return self.kind.value


@unique
class BinaryOperator(StrEnum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @classmethod
    def from_token(cls, token: Token) -> Self:
        if token.kind not in _binary_kinds:
            raise ValueError(f"Not a binary operator token: {token}")
        return cls(_binary_kinds[token.kind])


@unique
class UnaryOperator(StrEnum):
    NEG = "-"

    @classmethod
    def from_token(cls, token: Token) -> Self:
        if token.kind is not TokenKind.MINUS:
            raise ValueError(f"Not a unary operator token: {token}")
        return cls.NEG


# Module Constants -----------------------------------------------------------------------------------------------------

_binary_kinds = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.STAR: "*",
    TokenKind.SLASH: "/",
}
