"""Immediate operands encoded as eight hexadecimal digit markers.

Every operand a program needs is carried by the chain itself as an ``Int``
made of eight ``HexDigit`` markers, most significant nibble first, so the
code generator can read it as a literal instead of loading it at run time.
"""

from functools import lru_cache
from typing import Tuple

INT_BITS = 32
INT_DIGITS = INT_BITS // 4
INT_MASK = (1 << INT_BITS) - 1
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1


class HexDigit:
    __slots__ = ("value", "name")

    def __init__(self, value: int):
        v = int(value)
        if v < 0 or v > 15:
            raise ValueError("Hex digit must be in range 0..15")
        self.value = v
        self.name = f"Hex{v:X}"

    def __repr__(self) -> str:
        return self.name

    def __eq__(self, other):
        return isinstance(other, HexDigit) and self.value == other.value

    def __hash__(self):
        return hash(("HexDigit", self.value))


HEX_DIGITS: Tuple[HexDigit, ...] = tuple(HexDigit(v) for v in range(16))


def hex_digit(value: int) -> HexDigit:
    if not 0 <= value <= 15:
        raise ValueError(f"Hex digit out of range: {value}")
    return HEX_DIGITS[value]


class Int:
    """A signed 32-bit operand spelled out as eight digit markers."""

    __slots__ = ("digits", "value")
    name = "Int"

    def __init__(self, *digits: HexDigit):
        if len(digits) != INT_DIGITS:
            raise ValueError(f"Int takes {INT_DIGITS} digits, got {len(digits)}")
        for d in digits:
            if not isinstance(d, HexDigit):
                raise TypeError(f"Int digit must be a HexDigit, got {d!r}")
        self.digits = tuple(digits)
        raw = 0
        for d in self.digits:
            raw = (raw << 4) | d.value
        # Two's complement: the top nibble carries the sign bit.
        self.value = raw - (1 << INT_BITS) if raw > INT_MAX else raw

    def __repr__(self) -> str:
        return f"Int({self.value})"

    def __eq__(self, other):
        return isinstance(other, Int) and self.digits == other.digits

    def __hash__(self):
        return hash(("Int", self.digits))


@lru_cache(maxsize=1024)
def encode_int(value: int) -> Int:
    raw = int(value) & INT_MASK
    return Int(
        *(HEX_DIGITS[(raw >> (4 * (INT_DIGITS - 1 - i))) & 0xF] for i in range(INT_DIGITS))
    )
