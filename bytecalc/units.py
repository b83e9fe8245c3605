#
# Bytecalc Units of Digital Storage
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from enum import StrEnum, unique
from functools import total_ordering
from typing import Self

# @formatter:off

KILO, MEGA, GIGA, TERA, PETA, EXA = (1000**exp for exp in range(1, 7))
KIBI, MEBI, GIBI, TEBI, PEBI, EXBI = (1024**exp for exp in range(1, 7))

# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Unit(StrEnum):
    """
    Base units of digital storage, rendered by their unit letter.

    Attributes:
        BIT (str)  : b - size 1
        BYTE (str) : B - size 8
    """
    BIT = "b"
    BYTE = "B"

    @property
    def size(self) -> int:
        """Size of the unit in bits."""
        return 1 if self is Unit.BIT else 8

    # Ordered by size rather than by the unit letter
    def __lt__(self, other):
        if not isinstance(other, Unit):
            return NotImplemented
        return self.size < other.size

    def __le__(self, other):
        if not isinstance(other, Unit):
            return NotImplemented
        return self.size <= other.size

    def __gt__(self, other):
        if not isinstance(other, Unit):
            return NotImplemented
        return self.size > other.size

    def __ge__(self, other):
        if not isinstance(other, Unit):
            return NotImplemented
        return self.size >= other.size


# @formatter:off
@unique
class UnitPrefix(StrEnum):
    """
    Decimal (1000ⁱ) and binary (1024ⁱ) scaling prefixes, rendered by their symbol.

    NONE renders as an empty string and has the multiplier 1.
    """
    NONE = ""
    KILO = "k"
    MEGA = "M"
    GIGA = "G"
    TERA = "T"
    PETA = "P"
    EXA = "E"
    KIBI = "Ki"
    MEBI = "Mi"
    GIBI = "Gi"
    TEBI = "Ti"
    PEBI = "Pi"
    EXBI = "Ei"
# @formatter:on

    @property
    def multiplier(self) -> int:
        return prefix_multipliers[self]

    @property
    def is_binary(self) -> bool:
        return self.value.endswith("i")

    @classmethod
    def from_letters(cls, letters: str) -> Self:
        """
        Lookup a prefix by its letters, case-insensitive.

        Examples:
            >>> UnitPrefix.from_letters("k")
            <UnitPrefix.KILO: 'k'>
            >>> UnitPrefix.from_letters("MI")
            <UnitPrefix.MEBI: 'Mi'>
        """
        prefix = _prefix_letters.get(letters.lower())
        if prefix is None:
            raise ValueError(f"Invalid unit prefix: {letters!r}")
        return prefix

    @classmethod
    def decimal_for(cls, num: int) -> Self:
        """The largest decimal prefix whose multiplier does not exceed num, NONE below 1000."""
        return _largest_prefix(num, decimal_prefixes)

    @classmethod
    def binary_for(cls, num: int) -> Self:
        """The largest binary prefix whose multiplier does not exceed num, NONE below 1024."""
        return _largest_prefix(num, binary_prefixes)


@total_ordering
@dataclass(frozen=True)
class FullUnit:
    """
    A concrete unit of digital storage: a prefix paired with a bit or byte.

    Equality compares prefix and unit. Ordering compares the total multipliers in bits,
    so min() of two units selects the more precise one.

    Examples:
        >>> str(FullUnit(UnitPrefix.KIBI, Unit.BYTE))
        'KiB'
        >>> FullUnit(UnitPrefix.KILO, Unit.BIT).multiplier
        1000
        >>> FullUnit(UnitPrefix.NONE, Unit.BYTE) < FullUnit(UnitPrefix.KILO, Unit.BIT)
        True
    """

    prefix: UnitPrefix
    unit: Unit

    def __str__(self):
        return f"{self.prefix}{self.unit}"

    def __lt__(self, other):
        if not isinstance(other, FullUnit):
            return NotImplemented
        return self.multiplier < other.multiplier

    @property
    def multiplier(self) -> int:
        """Total multiplier in bits: prefix multiplier × unit size."""
        return self.prefix.multiplier * self.unit.size


# Methods --------------------------------------------------------------------------------------------------------------

def _largest_prefix(num: int, prefixes: tuple[UnitPrefix, ...]) -> UnitPrefix:
    found = UnitPrefix.NONE
    for prefix in prefixes:
        if num >= prefix.multiplier:
            found = prefix
    return found


# @formatter:off

prefix_multipliers = {
    UnitPrefix.NONE: 1,
    UnitPrefix.KILO: KILO, UnitPrefix.MEGA: MEGA, UnitPrefix.GIGA: GIGA,
    UnitPrefix.TERA: TERA, UnitPrefix.PETA: PETA, UnitPrefix.EXA: EXA,
    UnitPrefix.KIBI: KIBI, UnitPrefix.MEBI: MEBI, UnitPrefix.GIBI: GIBI,
    UnitPrefix.TEBI: TEBI, UnitPrefix.PEBI: PEBI, UnitPrefix.EXBI: EXBI,
}

decimal_prefixes = tuple(p for p in UnitPrefix if p is not UnitPrefix.NONE and not p.is_binary)

binary_prefixes = tuple(p for p in UnitPrefix if p.is_binary)

_prefix_letters = {prefix.value.lower(): prefix for prefix in UnitPrefix}

# @formatter:on


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Every multiplier, including the largest total one, must fit into 64 bits.
if FullUnit(UnitPrefix.EXBI, Unit.BYTE).multiplier >= 2**64:
    raise AssertionError("Configuration Error: unit multipliers must fit into 64 bits.")

if set(prefix_multipliers) != set(UnitPrefix):
    raise AssertionError("Configuration Error: every UnitPrefix must have a multiplier.")
