#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from bytecalc.lexer import Lexer
from bytecalc.tokens import TokenKind
from bytecalc.units import FullUnit


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def full_unit():
    """Fixture to build a FullUnit from its written form, e.g. 'KiB', 'kb' or 'B'."""

    def _full_unit(text: str) -> FullUnit:
        token = next(Lexer(text))
        assert token.kind is TokenKind.UNIT, f"not a unit: {text!r}"
        return token.payload

    return _full_unit
