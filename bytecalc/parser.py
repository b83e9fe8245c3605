"""
Bytecalc Parser

Recursive descent with one token of lookahead over the lexer. Grammar, lowest precedence first:

    expression -> term EOF
    term       -> factor ( ('+' | '-') factor )*
    factor     -> typecast ( ('*' | '/') typecast )*
    typecast   -> unary ( 'as' UNIT )?
    unary      -> '-' unary | primary
    primary    -> INTEGER ( UNIT )? | '(' term ')'

The first lexical or syntax error ends parsing; there is no recovery.
"""

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import ParseError, ParseErrorKind
from .expr import Binary, Expr, Grouping, Literal, TypeCast, Unary
from .lexer import Lexer
from .tokens import Token, TokenKind

DEFAULT_MAX_NESTING = 100

TERM_KINDS = (TokenKind.PLUS, TokenKind.MINUS)
FACTOR_KINDS = (TokenKind.STAR, TokenKind.SLASH)


# Classes --------------------------------------------------------------------------------------------------------------

class Parser:
    """
    Builds one expression tree from a single source text.

    Nesting of parenthesized groups and chained unary minus is limited by max_nesting to keep
    the recursion within the interpreter stack.

    Examples:
        >>> str(Parser("1 + 2 * -3").parse())
        '(+ 1 (* 2 (- 3)))'
    """

    def __init__(self, source: str | Lexer, max_nesting: int = DEFAULT_MAX_NESTING):
        if not isinstance(max_nesting, int) or max_nesting < 1:
            raise ValueError(f"max_nesting must be a positive integer, got {max_nesting!r}")
        self._lexer = source if isinstance(source, Lexer) else Lexer(source)
        self._peeked: Token | None = None
        self._nesting = 0
        self.max_nesting = max_nesting

    def parse(self) -> Expr:
        """
        Parse the whole input as one expression.

        Raises:
            LexError: On the first lexical error met while reading ahead.
            ParseError: If the input is not a single well-formed expression.
        """
        expr = self._term()
        token = self._peek()
        if token.kind is not TokenKind.EOF:
            raise ParseError(ParseErrorKind.EXPECTED_EOF, token)
        return expr

    # Grammar rules ----------------------------------------------------------------------------------------------------

    def _term(self) -> Expr:
        expr = self._factor()
        while self._peek().kind in TERM_KINDS:
            operator = self._advance()
            expr = Binary(expr, operator, self._factor())
        return expr

    def _factor(self) -> Expr:
        expr = self._typecast()
        while self._peek().kind in FACTOR_KINDS:
            operator = self._advance()
            expr = Binary(expr, operator, self._typecast())
        return expr

    def _typecast(self) -> Expr:
        expr = self._unary()
        if self._peek().kind is TokenKind.AS:
            self._advance()
            token = self._peek()
            if token.kind is not TokenKind.UNIT:
                raise ParseError(ParseErrorKind.EXPECTED_UNIT, token)
            expr = TypeCast(expr, self._advance())
        return expr

    def _unary(self) -> Expr:
        if self._peek().kind is TokenKind.MINUS:
            operator = self._advance()
            self._enter(operator)
            right = self._unary()
            self._nesting -= 1
            return Unary(operator, right)
        return self._primary()

    def _primary(self) -> Expr:
        token = self._peek()

        if token.kind is TokenKind.INTEGER:
            self._advance()
            unit = self._advance() if self._peek().kind is TokenKind.UNIT else None
            return Literal(token, unit)

        if token.kind is TokenKind.LEFT_PAREN:
            self._advance()
            self._enter(token)
            expr = self._term()
            self._nesting -= 1
            closing = self._peek()
            if closing.kind is not TokenKind.RIGHT_PAREN:
                raise ParseError(ParseErrorKind.UNEXPECTED_TOKEN, closing, expected=")")
            self._advance()
            return Grouping(expr)

        raise ParseError(ParseErrorKind.EXPECTED_EXPRESSION, token)

    # Token helpers ----------------------------------------------------------------------------------------------------

    def _peek(self) -> Token:
        if self._peeked is None:
            self._peeked = next(self._lexer)
        return self._peeked

    def _advance(self) -> Token:
        token = self._peek()
        self._peeked = None
        return token

    def _enter(self, token: Token):
        self._nesting += 1
        if self._nesting > self.max_nesting:
            raise ParseError(ParseErrorKind.NESTING_TOO_DEEP, token)


# Methods --------------------------------------------------------------------------------------------------------------

def parse(source: str, max_nesting: int = DEFAULT_MAX_NESTING) -> Expr:
    """Parse source text into an expression tree."""
    return Parser(source, max_nesting=max_nesting).parse()
