"""An unsigned 128-bit integer with checked and wrapping arithmetic."""

from __future__ import annotations

import functools
import operator
import re

_BITS = 128
_MASK = (1 << _BITS) - 1
_MASK64 = (1 << 64) - 1
_OCTAL_LEGACY = re.compile(r"[+-]?0[0-7_]+")


def _checked(value: int) -> int:
    if value < 0:
        raise ValueError("value cannot be negative")
    if value > _MASK:
        raise ValueError("value overflows Uint128")
    return value


@functools.total_ordering
class Uint128:
    """An immutable unsigned 128-bit number.

    Plain arithmetic operators raise ``OverflowError`` when the result does
    not fit; the ``*_wrap`` methods wrap around modulo 2**128. Operands may be
    other ``Uint128`` values or non-negative ints.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int = 0) -> None:
        self._value = _checked(operator.index(value))

    @classmethod
    def from_parts(cls, lo: int, hi: int) -> Uint128:
        """Build a value from its low and high 64-bit halves."""
        for part in (lo, hi):
            if not 0 <= part <= _MASK64:
                raise ValueError("part must fit in 64 bits")
        return cls((hi << 64) | lo)

    @classmethod
    def from_bytes(cls, data: bytes) -> Uint128:
        """Read the first 16 bytes of ``data`` in little-endian order."""
        if len(data) < 16:
            raise ValueError("need at least 16 bytes")
        return cls(int.from_bytes(data[:16], "little"))

    @classmethod
    def from_bytes_be(cls, data: bytes) -> Uint128:
        """Read the first 16 bytes of ``data`` in big-endian order."""
        if len(data) < 16:
            raise ValueError("need at least 16 bytes")
        return cls(int.from_bytes(data[:16], "big"))

    @classmethod
    def parse(cls, text: str) -> Uint128:
        """Parse an integer literal, as decimal or with a base prefix."""
        stripped = text.strip()
        try:
            value = int(stripped, 0)
        except ValueError:
            if not _OCTAL_LEGACY.fullmatch(stripped):
                raise ValueError(f"invalid Uint128 literal {text!r}") from None
            value = int(stripped, 8)
        return cls(value)

    @property
    def lo(self) -> int:
        return self._value & _MASK64

    @property
    def hi(self) -> int:
        return self._value >> 64

    def is_zero(self) -> bool:
        return self._value == 0

    def cmp(self, other: Uint128 | int) -> int:
        """Return -1, 0 or 1 as self is less than, equal to or greater than other."""
        b = _operand(other)
        return (self._value > b) - (self._value < b)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Uint128({self._value})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Uint128):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Uint128):
            return self._value < other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return self._value != 0

    def __add__(self, other: Uint128 | int) -> Uint128:
        result = self._value + _operand(other)
        if result > _MASK:
            raise OverflowError("overflow")
        return Uint128(result)

    def __sub__(self, other: Uint128 | int) -> Uint128:
        result = self._value - _operand(other)
        if result < 0:
            raise OverflowError("underflow")
        return Uint128(result)

    def __mul__(self, other: Uint128 | int) -> Uint128:
        result = self._value * _operand(other)
        if result > _MASK:
            raise OverflowError("overflow")
        return Uint128(result)

    def __floordiv__(self, other: Uint128 | int) -> Uint128:
        return Uint128(self._value // _operand(other))

    def __mod__(self, other: Uint128 | int) -> Uint128:
        return Uint128(self._value % _operand(other))

    def __divmod__(self, other: Uint128 | int) -> tuple[Uint128, Uint128]:
        q, r = divmod(self._value, _operand(other))
        return Uint128(q), Uint128(r)

    def __and__(self, other: Uint128 | int) -> Uint128:
        return Uint128(self._value & _operand(other))

    def __or__(self, other: Uint128 | int) -> Uint128:
        return Uint128(self._value | _operand(other))

    def __xor__(self, other: Uint128 | int) -> Uint128:
        return Uint128(self._value ^ _operand(other))

    def __lshift__(self, n: int) -> Uint128:
        return Uint128((self._value << _shift(n)) & _MASK)

    def __rshift__(self, n: int) -> Uint128:
        return Uint128(self._value >> _shift(n))

    def add_wrap(self, other: Uint128 | int) -> Uint128:
        return Uint128((self._value + _operand(other)) & _MASK)

    def sub_wrap(self, other: Uint128 | int) -> Uint128:
        return Uint128((self._value - _operand(other)) & _MASK)

    def mul_wrap(self, other: Uint128 | int) -> Uint128:
        return Uint128((self._value * _operand(other)) & _MASK)

    def leading_zeros(self) -> int:
        return _BITS - self._value.bit_length()

    def trailing_zeros(self) -> int:
        if self._value == 0:
            return _BITS
        return (self._value & -self._value).bit_length() - 1

    def ones_count(self) -> int:
        return bin(self._value).count("1")

    def rotate_left(self, k: int) -> Uint128:
        """Rotate left by ``k`` mod 128 bits; negative ``k`` rotates right."""
        s = k % _BITS
        return Uint128(((self._value << s) | (self._value >> (_BITS - s))) & _MASK)

    def rotate_right(self, k: int) -> Uint128:
        return self.rotate_left(-k)

    def reverse(self) -> Uint128:
        """Return the value with its 128 bits in reversed order."""
        return Uint128(int(format(self._value, "0128b")[::-1], 2))

    def reverse_bytes(self) -> Uint128:
        """Return the value with its 16 bytes in reversed order."""
        return Uint128(int.from_bytes(self._value.to_bytes(16, "big"), "little"))

    def bit_length(self) -> int:
        return self._value.bit_length()

    def to_bytes(self) -> bytes:
        """Return the 16-byte little-endian encoding."""
        return self._value.to_bytes(16, "little")

    def to_bytes_be(self) -> bytes:
        """Return the 16-byte big-endian encoding."""
        return self._value.to_bytes(16, "big")


def _operand(other: Uint128 | int) -> int:
    if isinstance(other, Uint128):
        return other._value
    if isinstance(other, bool) or not isinstance(other, int):
        raise TypeError(f"unsupported operand type {type(other).__name__}")
    return _checked(other)


def _shift(n: int) -> int:
    n = operator.index(n)
    if n < 0:
        raise ValueError("negative shift count")
    return n