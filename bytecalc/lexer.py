"""
Bytecalc Lexer

Turns source text into a lazy stream of located tokens: operators, parentheses, the 'as' keyword,
integer literals in binary, octal, decimal or hex notation and unit suffixes such as b, B, kB or KiB.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Callable, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import DigitError, DigitErrorKind, LexError, LexErrorKind
from .tokens import Span, Token, TokenKind
from .units import FullUnit, Unit, UnitPrefix

# @formatter:off

U64_MAX = 2**64 - 1

WHITESPACE = frozenset(b" \t\n\r\x0c")

PUNCTUATION = {
    ord("-"): TokenKind.MINUS,
    ord("+"): TokenKind.PLUS,
    ord("*"): TokenKind.STAR,
    ord("/"): TokenKind.SLASH,
    ord("("): TokenKind.LEFT_PAREN,
    ord(")"): TokenKind.RIGHT_PAREN,
}

UNIT_LETTERS = {ord("b"): Unit.BIT, ord("B"): Unit.BYTE}

PREFIX_LETTERS = frozenset(b"kmgtpeKMGTPE")

# Radix prefix letter -> (radix, digit predicate)
RADIXES: dict[int, tuple[int, Callable[[int], bool]]] = {
    ord("b"): (2, lambda c: c in b"01"),
    ord("o"): (8, lambda c: ord("0") <= c <= ord("7")),
    ord("x"): (16, lambda c: c in b"0123456789abcdefABCDEF"),
}

# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def is_dec_digit(c: int) -> bool:
    return ord("0") <= c <= ord("9")


def can_not_overflow(radix: int, digits: bytes) -> bool:
    """True if a run of this many digits in this radix always fits into 64 bits."""
    return radix <= 16 and len(digits) <= 16


def parse_int(digits: bytes, radix: int, is_digit: Callable[[int], bool]) -> int:
    """
    Convert a run of ASCII digits to an unsigned 64-bit integer.

    Raises:
        DigitError: EMPTY for no digits, INVALID_DIGIT(index) for a byte rejected by is_digit,
                    OVERFLOW if the value does not fit into 64 bits.

    Examples:
        >>> parse_int(b"2a", 16, lambda c: c in b"0123456789abcdef")
        42
    """
    if not 2 <= radix <= 36:
        raise ValueError(f"radix must be in range [2, 36], got {radix}")
    if not digits:
        raise DigitError(DigitErrorKind.EMPTY)

    checked = not can_not_overflow(radix, digits)
    value = 0
    for index, c in enumerate(digits):
        if not is_digit(c):
            raise DigitError(DigitErrorKind.INVALID_DIGIT, index)
        value = value * radix + int(chr(c), radix)
        if checked and value > U64_MAX:
            raise DigitError(DigitErrorKind.OVERFLOW)
    return value


def scan_digits(data: bytes, start: int, is_digit: Callable[[int], bool]) -> int:
    """Return the end offset of the maximal run of valid digits beginning at start."""
    end = start
    while end < len(data) and is_digit(data[end]):
        end += 1
    return end


# Classes --------------------------------------------------------------------------------------------------------------

class Lexer(Iterator[Token]):
    """
    Lazy, non-restartable token stream over the UTF-8 bytes of the source.

    The last token yielded is always EOF with a zero-width span at the end of input; the stream is
    exhausted after it. A LexError ends the stream as well.

    Examples:
        >>> [str(t) for t in Lexer("1 + 2KiB")]
        ['1', '+', '2', 'KiB', '<EOF>']
    """

    def __init__(self, source: str):
        if not isinstance(source, str):
            raise TypeError(f"source must be a str, got {type(source).__name__}")
        self.source = source
        self._data = source.encode("utf-8")
        self._pos = 0
        self._done = False

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        if self._done:
            raise StopIteration
        try:
            token = self._scan()
        except LexError:
            self._done = True
            raise
        if token.kind is TokenKind.EOF:
            self._done = True
        self._pos = token.span.end
        return token

    def _scan(self) -> Token:
        data = self._data
        pos = self._skip_whitespace(self._pos)
        self._pos = pos

        if pos >= len(data):
            return Token(TokenKind.EOF, Span(pos, pos))

        c = data[pos]

        if c in PUNCTUATION:
            return Token(PUNCTUATION[c], Span(pos, pos + 1))

        if c in UNIT_LETTERS:
            return Token(TokenKind.UNIT, Span(pos, pos + 1), FullUnit(UnitPrefix.NONE, UNIT_LETTERS[c]))

        if data.startswith(b"as", pos):
            return Token(TokenKind.AS, Span(pos, pos + 2))

        if is_dec_digit(c):
            return self._integer(pos)

        if c in PREFIX_LETTERS:
            return self._unit(pos)

        raise LexError(LexErrorKind.UNEXPECTED_CHARACTER, self._byte_span(pos))

    def _skip_whitespace(self, pos: int) -> int:
        while pos < len(self._data) and self._data[pos] in WHITESPACE:
            pos += 1
        return pos

    def _byte_span(self, pos: int) -> Span:
        return Span(pos, min(pos + 1, len(self._data)))

    def _integer(self, start: int) -> Token:
        data = self._data
        radix_letter = data[start + 1] if data[start] == ord("0") and start + 1 < len(data) else None

        if radix_letter in RADIXES:
            radix, is_digit = RADIXES[radix_letter]
            digits_start = start + 2
            end = scan_digits(data, digits_start, is_digit)
            if end < len(data) and is_dec_digit(data[end]):
                # A decimal digit right after the run, e.g. 0b102 or 0o78, is a bad digit of this literal
                index = end - digits_start
                raise LexError(LexErrorKind.INVALID_DIGIT, self._byte_span(end),
                               DigitError(DigitErrorKind.INVALID_DIGIT, index))
        else:
            radix, is_digit = 10, is_dec_digit
            digits_start = start
            end = scan_digits(data, digits_start, is_digit)

        try:
            value = parse_int(data[digits_start:end], radix, is_digit)
        except DigitError as err:
            raise LexError(LexErrorKind.INVALID_DIGIT, self._byte_span(digits_start), err) from err

        return Token(TokenKind.INTEGER, Span(start, end), value)

    def _unit(self, start: int) -> Token:
        data = self._data
        pos = start + 1
        letters = data[start:pos]
        if pos < len(data) and data[pos] in b"iI":
            pos += 1
            letters = data[start:pos]

        if pos >= len(data) or data[pos] not in UNIT_LETTERS:
            raise LexError(LexErrorKind.UNEXPECTED_CHARACTER, self._byte_span(start))

        prefix = UnitPrefix.from_letters(letters.decode("ascii"))
        return Token(TokenKind.UNIT, Span(start, pos + 1), FullUnit(prefix, UNIT_LETTERS[data[pos]]))


def tokenize(source: str) -> list[Token]:
    """Lex the whole source into a list of tokens ending with EOF."""
    return list(Lexer(source))
