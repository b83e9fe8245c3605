"""
Bytecalc Diagnostics

Lexical, syntactic and value-level failures. Each stage raises its own exception, all of them
expose a discriminated kind and a source span through the Located protocol, and Diagnostic
turns any of them into one reportable, caret-rendered record.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Protocol, Self, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .tokens import Span, Token


# Error Kinds ----------------------------------------------------------------------------------------------------------

# @formatter:off
@unique
class DigitErrorKind(StrEnum):
    EMPTY = "empty"
    INVALID_DIGIT = "invalid_digit"
    OVERFLOW = "overflow"


@unique
class LexErrorKind(StrEnum):
    UNEXPECTED_CHARACTER = "unexpected_character"
    INVALID_DIGIT = "invalid_digit"


@unique
class ParseErrorKind(StrEnum):
    UNEXPECTED_TOKEN = "unexpected_token"
    EXPECTED_EXPRESSION = "expected_expression"
    EXPECTED_EOF = "expected_eof"
    EXPECTED_UNIT = "expected_unit"
    NESTING_TOO_DEEP = "nesting_too_deep"


@unique
class ValueErrorKind(StrEnum):
    DIVISION_BY_UNIT = "division_by_unit"
    MULTIPLICATION_BY_UNIT = "multiplication_by_unit"
# @formatter:on


# Protocols ------------------------------------------------------------------------------------------------------------

@runtime_checkable
class Located(Protocol):
    """Protocol for errors that point at a span of the source text."""

    kind: StrEnum

    def locate(self) -> Span: ...


# Exceptions -----------------------------------------------------------------------------------------------------------

class DigitError(Exception):
    """
    Failure of a digit run conversion, not yet located in the source.

    The index is set for INVALID_DIGIT only and counts from the first digit of the run.
    """

    def __init__(self, kind: DigitErrorKind, index: int | None = None):
        self.kind = kind
        self.index = index
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.kind is DigitErrorKind.EMPTY:
            return "no digits found"
        if self.kind is DigitErrorKind.INVALID_DIGIT:
            return f"invalid digit at index {self.index}"
        return "number too large to fit in 64 bits"


class LexError(Exception):
    """Lexical failure at a single source byte."""

    def __init__(self, kind: LexErrorKind, span: Span, digit_error: DigitError | None = None):
        self.kind = kind
        self.span = span
        self.digit_error = digit_error
        super().__init__(self.message)

    def __eq__(self, other):
        if not isinstance(other, LexError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def _key(self) -> tuple:
        return self.kind, self.span, self.digit_kind

    @property
    def digit_kind(self) -> DigitErrorKind | None:
        return self.digit_error.kind if self.digit_error is not None else None

    @property
    def message(self) -> str:
        if self.digit_error is not None:
            return f"invalid number: {self.digit_error.message}"
        return "unexpected character"

    def locate(self) -> Span:
        return self.span


class ParseError(Exception):
    """Syntactic failure at the offending token."""

    def __init__(self, kind: ParseErrorKind, token: Token, expected: str | None = None):
        self.kind = kind
        self.token = token
        self.expected = expected
        super().__init__(self.message)

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def _key(self) -> tuple:
        return self.kind, self.token, self.expected

    @property
    def message(self) -> str:
        if self.kind is ParseErrorKind.UNEXPECTED_TOKEN:
            return f"expected '{self.expected}', found '{self.token}'"
        if self.kind is ParseErrorKind.EXPECTED_EXPRESSION:
            return f"expected expression, found '{self.token}'"
        if self.kind is ParseErrorKind.EXPECTED_EOF:
            return f"expected end of expression, found '{self.token}'"
        if self.kind is ParseErrorKind.EXPECTED_UNIT:
            return f"expected unit, found '{self.token}'"
        return "expression nested too deeply"

    def locate(self) -> Span:
        return self.token.span


class UnitError(Exception):
    """Value-level failure of the unit algebra, located by the evaluator."""

    def __init__(self, kind: ValueErrorKind):
        self.kind = kind
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.kind is ValueErrorKind.DIVISION_BY_UNIT:
            return "cannot divide by a value with a unit"
        return "cannot multiply two values with units"


class EvalError(Exception):
    """Value-level failure located at the operator token that triggered it."""

    def __init__(self, kind: ValueErrorKind, token: Token):
        self.kind = kind
        self.token = token
        super().__init__(self.message)

    def __eq__(self, other):
        if not isinstance(other, EvalError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def _key(self) -> tuple:
        return self.kind, self.token

    @property
    def message(self) -> str:
        return UnitError(self.kind).message

    def locate(self) -> Span:
        return self.token.span


LocatedError = LexError | ParseError | EvalError

LOCATED_ERRORS = (LexError, ParseError, EvalError)


# Diagnostics ----------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Diagnostic:
    """
    One reportable error of any stage: its stage name, kind, span and message.

    Examples:
        >>> from bytecalc.interpreter import interpret
        >>> try:
        ...     interpret("42 + 42x")
        ... except LOCATED_ERRORS as err:
        ...     print(Diagnostic.from_error(err).render("42 + 42x"))
        error: unexpected character
          42 + 42x
                 ^
    """

    stage: str
    kind: StrEnum
    span: Span
    message: str

    @classmethod
    def from_error(cls, err: LocatedError) -> Self:
        if not isinstance(err, LOCATED_ERRORS):
            raise TypeError(f"Located error required, got {type(err).__name__}")
        return cls(stage=_stages[type(err)], kind=err.kind, span=err.locate(), message=err.message)

    def __str__(self):
        return f"{self.stage} error at {self.span}: {self.message}"

    def render(self, source: str, indent: int = 2) -> str:
        """
        Render the message, the source line containing the span and a caret marker under the span.

        Byte offsets are translated to character columns, so non-ASCII input lines up.
        """
        data = source.encode("utf-8")
        before = data[:self.span.start].decode("utf-8", errors="ignore")
        marked = data[self.span.start:self.span.end].decode("utf-8", errors="ignore")

        line_start = before.rfind("\n") + 1
        line_end = source.find("\n", len(before))
        line = source[line_start:line_end if line_end >= 0 else len(source)]
        column = len(before) - line_start

        spaces = " " * indent
        # A span cutting a multi-byte character decodes to nothing, fall back to its byte width
        caret = "^" * max(1, len(marked) or len(self.span))
        return f"error: {self.message}\n{spaces}{line}\n{spaces}{' ' * column}{caret}"


# Module Constants -----------------------------------------------------------------------------------------------------

_stages = {
    LexError: "lexical",
    ParseError: "syntax",
    EvalError: "value",
}
