"""
Human-readable renderings of unsigned 64-bit magnitudes: grouped binary digits and
decimal or binary scaled sizes.
"""

# Local ----------------------------------------------------------------------------------------------------------------
from .units import Unit, UnitPrefix


# Methods --------------------------------------------------------------------------------------------------------------

def as_bin(num: int) -> str:
    """
    Binary digits in groups of 8, zero-padded to whole groups.

    Examples:
        >>> as_bin(5)
        '00000101'
        >>> as_bin(1025)
        '00000100 00000001'
    """
    _validate_u64(num)
    digits = format(num, "b")
    digits = digits.zfill(-(-len(digits) // 8) * 8)
    return " ".join(digits[i:i + 8] for i in range(0, len(digits), 8))


def as_dec_size(num: int) -> str:
    """
    Size in bytes scaled by the largest decimal prefix not exceeding num.

    One decimal digit is shown unless num is a multiple of 1000.

    Examples:
        >>> as_dec_size(1500)
        '1.5 kB'
        >>> as_dec_size(3_000_000)
        '3 MB'
    """
    _validate_u64(num)
    return _scaled_size(num, UnitPrefix.decimal_for(num), 1000)


def as_bin_size(num: int) -> str:
    """
    Size in bytes scaled by the largest binary prefix not exceeding num.

    One decimal digit is shown unless num is a multiple of 1024.

    Examples:
        >>> as_bin_size(1536)
        '1.5 KiB'
        >>> as_bin_size(2048)
        '2 KiB'
    """
    _validate_u64(num)
    return _scaled_size(num, UnitPrefix.binary_for(num), 1024)


def _scaled_size(num: int, prefix: UnitPrefix, base: int) -> str:
    digits = 1 if num % base != 0 else 0
    return f"{num / prefix.multiplier:.{digits}f} {prefix}{Unit.BYTE}"


def _validate_u64(num: int):
    if isinstance(num, bool) or not isinstance(num, int):
        raise TypeError(f"num must be an int, got {type(num).__name__}")
    if not 0 <= num < 2**64:
        raise ValueError(f"num must be an unsigned 64-bit integer, got {num}")
