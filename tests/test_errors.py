#
# Bytecalc - Diagnostics Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from bytecalc.errors import (
    LOCATED_ERRORS,
    Diagnostic,
    DigitError,
    DigitErrorKind,
    EvalError,
    LexError,
    LexErrorKind,
    Located,
    ParseError,
    ParseErrorKind,
    UnitError,
    ValueErrorKind,
)
from bytecalc.interpreter import interpret
from bytecalc.tokens import Span, Token, TokenKind


# Local Classes & Methods ----------------------------------------------------------------------------------------------

def diagnose(text: str) -> Diagnostic:
    with pytest.raises(LOCATED_ERRORS) as excinfo:
        interpret(text)
    return Diagnostic.from_error(excinfo.value)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestMessages:
    @pytest.mark.parametrize(
        "err, expected",
        [
            pytest.param(DigitError(DigitErrorKind.EMPTY), "no digits found", id="empty"),
            pytest.param(DigitError(DigitErrorKind.INVALID_DIGIT, 3), "invalid digit at index 3", id="invalid"),
            pytest.param(DigitError(DigitErrorKind.OVERFLOW), "number too large to fit in 64 bits", id="overflow"),
        ],
    )
    def test_digit_error(self, err, expected):
        assert str(err) == expected

    def test_lex_error_wraps_digit_error(self):
        err = LexError(LexErrorKind.INVALID_DIGIT, Span(2, 2), DigitError(DigitErrorKind.EMPTY))
        assert str(err) == "invalid number: no digits found"
        assert err.digit_kind is DigitErrorKind.EMPTY

    def test_lex_error_unexpected_character(self):
        err = LexError(LexErrorKind.UNEXPECTED_CHARACTER, Span(7, 8))
        assert str(err) == "unexpected character"
        assert err.digit_kind is None

    @pytest.mark.parametrize(
        "kind, expected",
        [
            pytest.param(ParseErrorKind.EXPECTED_EXPRESSION, "expected expression, found 'as'", id="expression"),
            pytest.param(ParseErrorKind.EXPECTED_EOF, "expected end of expression, found 'as'", id="eof"),
            pytest.param(ParseErrorKind.EXPECTED_UNIT, "expected unit, found 'as'", id="unit"),
            pytest.param(ParseErrorKind.NESTING_TOO_DEEP, "expression nested too deeply", id="nesting"),
        ],
    )
    def test_parse_error(self, kind, expected):
        assert str(ParseError(kind, Token(TokenKind.AS, Span(2, 4)))) == expected

    def test_eval_error_shares_unit_error_message(self):
        token = Token(TokenKind.SLASH, Span(2, 3))
        err = EvalError(ValueErrorKind.DIVISION_BY_UNIT, token)
        assert str(err) == str(UnitError(ValueErrorKind.DIVISION_BY_UNIT))
        assert err.locate() == Span(2, 3)


class TestEquality:
    @pytest.mark.parametrize(
        "make",
        [
            pytest.param(lambda: LexError(LexErrorKind.UNEXPECTED_CHARACTER, Span(7, 8)), id="lex"),
            pytest.param(
                lambda: ParseError(ParseErrorKind.UNEXPECTED_TOKEN, Token(TokenKind.EOF, Span(6, 6)), expected=")"),
                id="parse",
            ),
            pytest.param(
                lambda: EvalError(ValueErrorKind.MULTIPLICATION_BY_UNIT, Token(TokenKind.STAR, Span(6, 7))), id="eval"
            ),
        ],
    )
    def test_equal_by_value(self, make):
        assert make() == make()
        assert hash(make()) == hash(make())
        assert len({make(), make()}) == 1

    def test_raised_errors_compare_equal(self):
        with pytest.raises(ParseError) as first:
            interpret("1 as 2")
        with pytest.raises(ParseError) as second:
            interpret("1 as 2")
        assert first.value == second.value

        with pytest.raises(EvalError) as excinfo:
            interpret("1 KiB * 2 KiB")
        assert excinfo.value == EvalError(ValueErrorKind.MULTIPLICATION_BY_UNIT, Token(TokenKind.STAR, Span(6, 7)))

    @pytest.mark.parametrize(
        "left, right",
        [
            pytest.param(
                ParseError(ParseErrorKind.EXPECTED_EOF, Token(TokenKind.AS, Span(2, 4))),
                ParseError(ParseErrorKind.EXPECTED_EOF, Token(TokenKind.AS, Span(5, 7))),
                id="parse-span",
            ),
            pytest.param(
                EvalError(ValueErrorKind.DIVISION_BY_UNIT, Token(TokenKind.SLASH, Span(2, 3))),
                EvalError(ValueErrorKind.MULTIPLICATION_BY_UNIT, Token(TokenKind.SLASH, Span(2, 3))),
                id="eval-kind",
            ),
            pytest.param(
                LexError(LexErrorKind.UNEXPECTED_CHARACTER, Span(0, 1)),
                ParseError(ParseErrorKind.EXPECTED_EXPRESSION, Token(TokenKind.PLUS, Span(0, 1))),
                id="across-stages",
            ),
        ],
    )
    def test_not_equal(self, left, right):
        assert left != right


class TestLocated:
    @pytest.mark.parametrize("text", ["42 + 42x", "1 as 2", "1 KiB * 2 KiB"])
    def test_stage_errors_are_located(self, text):
        with pytest.raises(LOCATED_ERRORS) as excinfo:
            interpret(text)
        assert isinstance(excinfo.value, Located)

    def test_unlocated_errors(self):
        assert not isinstance(UnitError(ValueErrorKind.DIVISION_BY_UNIT), Located)
        assert not isinstance(DigitError(DigitErrorKind.EMPTY), Located)


class TestDiagnostic:
    @pytest.mark.parametrize(
        "text, stage, kind, span",
        [
            pytest.param("42 + 42x", "lexical", LexErrorKind.UNEXPECTED_CHARACTER, Span(7, 8), id="lexical"),
            pytest.param("0x", "lexical", LexErrorKind.INVALID_DIGIT, Span(2, 2), id="lexical-digit"),
            pytest.param("1 as KiB as MiB", "syntax", ParseErrorKind.EXPECTED_EOF, Span(9, 11), id="syntax"),
            pytest.param("1 KiB * 2 KiB", "value", ValueErrorKind.MULTIPLICATION_BY_UNIT, Span(6, 7), id="value"),
        ],
    )
    def test_from_error(self, text, stage, kind, span):
        diagnostic = diagnose(text)
        assert diagnostic.stage == stage
        assert diagnostic.kind is kind
        assert diagnostic.span == span

    @pytest.mark.parametrize(
        "text, expected",
        [
            pytest.param("42 + 42x", "lexical error at 7..8: unexpected character", id="lexical"),
            pytest.param("0x", "lexical error at 2..2: invalid number: no digits found", id="lexical-digit"),
            pytest.param(
                "1 as KiB as MiB", "syntax error at 9..11: expected end of expression, found 'as'", id="syntax"
            ),
            pytest.param(
                "1 KiB * 2 KiB", "value error at 6..7: cannot multiply two values with units", id="value"
            ),
        ],
    )
    def test_str(self, text, expected):
        assert str(diagnose(text)) == expected

    def test_from_error_rejects_unlocated(self):
        with pytest.raises(TypeError, match="Located error required"):
            Diagnostic.from_error(UnitError(ValueErrorKind.DIVISION_BY_UNIT))


class TestRender:
    @pytest.mark.parametrize(
        "text, expected",
        [
            pytest.param(
                "42 + 42x",
                "error: unexpected character\n"
                "  42 + 42x\n"
                "         ^",
                id="single-byte",
            ),
            pytest.param(
                "0x",
                "error: invalid number: no digits found\n"
                "  0x\n"
                "    ^",
                id="zero-width-at-end",
            ),
            pytest.param(
                "1 as KiB as MiB",
                "error: expected end of expression, found 'as'\n"
                "  1 as KiB as MiB\n"
                "           ^^",
                id="multi-byte-token",
            ),
            pytest.param(
                "1 +\n2 x",
                "error: unexpected character\n"
                "  2 x\n"
                "    ^",
                id="second-line",
            ),
            pytest.param(
                "1 + é",
                "error: unexpected character\n"
                "  1 + é\n"
                "      ^",
                id="non-ascii",
            ),
        ],
    )
    def test_render(self, text, expected):
        assert diagnose(text).render(text) == expected

    def test_render_span_inside_multibyte_characters(self):
        diagnostic = Diagnostic("lexical", LexErrorKind.UNEXPECTED_CHARACTER, Span(1, 3), "unexpected character")
        assert diagnostic.render("éé") == "error: unexpected character\n  éé\n  ^^"

    def test_render_indent(self):
        text = "1 KiB * 2 KiB"
        assert diagnose(text).render(text, indent=0) == (
            "error: cannot multiply two values with units\n"
            "1 KiB * 2 KiB\n"
            "      ^"
        )
