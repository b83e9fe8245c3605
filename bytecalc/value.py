#
# Bytecalc Values - Magnitude and Unit Algebra
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import dataclass
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import UnitError, ValueErrorKind
from .units import FullUnit


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Value:
    """
    A float magnitude with an optional unit; a None unit means a dimensionless scalar.

    Rules:
        - add/sub with the same unit (or both dimensionless) combine magnitudes directly.
        - add/sub with exactly one dimensionless operand combine magnitudes directly and keep
          the unit of the other operand, no conversion happens: 1 + 2 KiB == 3 KiB.
        - add/sub with two different units convert both to the smaller (more precise) unit.
        - try_mul fails if both operands carry a unit; try_div fails if the divisor carries one.
        - convert_to attaches the unit to a dimensionless value without rescaling.

    Examples:
        >>> from bytecalc.units import Unit, UnitPrefix
        >>> KiB = FullUnit(UnitPrefix.KIBI, Unit.BYTE)
        >>> str(Value(1.0) + Value(2.0, KiB))
        '3KiB'
    """

    magnitude: float
    unit: FullUnit | None = None

    def __post_init__(self):
        if isinstance(self.magnitude, bool):
            raise TypeError(f"magnitude must be a float, got {type(self.magnitude).__name__}")
        if isinstance(self.magnitude, int):
            object.__setattr__(self, "magnitude", float(self.magnitude))
        elif not isinstance(self.magnitude, float):
            raise TypeError(f"magnitude must be a float, got {type(self.magnitude).__name__}")

    def __str__(self):
        return f"{_magnitude_str(self.magnitude)}{self.unit or ''}"

    def __add__(self, other: Self) -> Self:
        return self.add(other)

    def __sub__(self, other: Self) -> Self:
        return self.sub(other)

    def __neg__(self) -> Self:
        return self.negate()

    @property
    def is_dimensionless(self) -> bool:
        return self.unit is None

    def add(self, other: Self) -> Self:
        left, right, unit = self._common_unit(other)
        return Value(left + right, unit)

    def sub(self, other: Self) -> Self:
        left, right, unit = self._common_unit(other)
        return Value(left - right, unit)

    def negate(self) -> Self:
        return Value(-self.magnitude, self.unit)

    def convert_to(self, unit: FullUnit) -> Self:
        """
        Express the value in the given unit.

        A dimensionless value is taken as already expressed in that unit and keeps its magnitude,
        otherwise the magnitude is rescaled by source multiplier / target multiplier.
        """
        if self.unit == unit:
            return self
        if self.is_dimensionless:
            return Value(self.magnitude, unit)
        return Value(self.magnitude * (self.unit.multiplier / unit.multiplier), unit)

    def try_mul(self, other: Self) -> Self:
        """
        Multiply, unless both operands carry a unit.

        Raises:
            UnitError: MULTIPLICATION_BY_UNIT if both operands carry a unit.
        """
        if not self.is_dimensionless and not other.is_dimensionless:
            raise UnitError(ValueErrorKind.MULTIPLICATION_BY_UNIT)
        unit = other.unit if self.is_dimensionless else self.unit
        return Value(self.magnitude * other.magnitude, unit)

    def try_div(self, other: Self) -> Self:
        """
        Divide, unless the divisor carries a unit. Division by zero follows IEEE 754: ±inf or nan.

        Raises:
            UnitError: DIVISION_BY_UNIT if the divisor carries a unit.
        """
        if not other.is_dimensionless:
            raise UnitError(ValueErrorKind.DIVISION_BY_UNIT)
        return Value(_ieee_div(self.magnitude, other.magnitude), self.unit)

    def _common_unit(self, other: Self) -> tuple[float, float, FullUnit | None]:
        """Magnitudes of both operands in the unit their sum or difference is expressed in."""
        if self.unit == other.unit:
            return self.magnitude, other.magnitude, self.unit
        if self.is_dimensionless or other.is_dimensionless:
            unit = other.unit if self.is_dimensionless else self.unit
            return self.magnitude, other.magnitude, unit

        precise = min(self.unit, other.unit)
        return self.convert_to(precise).magnitude, other.convert_to(precise).magnitude, precise


# Methods --------------------------------------------------------------------------------------------------------------

def _ieee_div(dividend: float, divisor: float) -> float:
    if divisor != 0:
        return dividend / divisor
    if dividend == 0 or math.isnan(dividend):
        return math.nan
    return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)


def _magnitude_str(magnitude: float) -> str:
    """Whole magnitudes display as integers, others as the shortest round-tripping float."""
    if magnitude.is_integer():
        return str(int(magnitude))
    return repr(magnitude)
