import ipaddress
import json
import random

import pytest

from nymkit.uint128 import Uint128

MAX = (1 << 128) - 1
MOD = 1 << 128


def _random_values(seed, count=1000):
    rng = random.Random(seed)
    values = []
    for _ in range(count):
        flags = rng.getrandbits(2)
        lo = rng.getrandbits(64) if flags & 1 else 0
        hi = rng.getrandbits(64) if flags & 2 else 0
        values.append(Uint128.from_parts(lo, hi))
    return values


def test_non_arithmetic_round_trips():
    rng = random.Random(1)
    for i in range(1000):
        x = Uint128.from_bytes(rng.randbytes(16))
        y = Uint128.from_bytes(rng.randbytes(16))
        if i % 3 == 0:
            x = x >> 64
        elif i % 7 == 0:
            x = x << 64

        assert Uint128(int(x)) == x
        assert Uint128.from_bytes(x.to_bytes()) == x
        assert x == x
        assert Uint128(x.lo) == x.lo
        expected_cmp = (int(x) > int(y)) - (int(x) < int(y))
        assert x.cmp(y) == expected_cmp
        assert x.cmp(x) == 0
        assert x.cmp(y.lo) == (int(x) > y.lo) - (int(x) < y.lo)
        assert Uint128(x.lo).cmp(x.lo) == 0


def test_from_int_rejects_negative():
    with pytest.raises(ValueError, match="value cannot be negative"):
        Uint128(-1)


def test_from_int_rejects_overflow():
    with pytest.raises(ValueError, match="value overflows Uint128"):
        Uint128(1 << 129)


def _check_checked(x, y, op, expected):
    if 0 <= expected <= MAX:
        assert int(op(x, y)) == expected
    else:
        with pytest.raises(OverflowError):
            op(x, y)


def test_arithmetic_against_python_int():
    xs = _random_values(2)
    ys = _random_values(3)
    shifts = [int(v.lo) & 0xFF for v in _random_values(4)]
    for x, y, z in zip(xs, ys, shifts):
        a, b = int(x), int(y)
        _check_checked(x, y, lambda p, q: p + q, a + b)
        _check_checked(x, y, lambda p, q: p - q, a - b)
        _check_checked(x, y, lambda p, q: p * q, a * b)
        assert int(x.add_wrap(y)) == (a + b) % MOD
        assert int(x.sub_wrap(y)) == (a - b) % MOD
        assert int(x.mul_wrap(y)) == (a * b) % MOD
        if b:
            assert int(x // y) == a // b
            assert int(x % y) == a % b
            q, r = divmod(x, y)
            assert (int(q), int(r)) == divmod(a, b)
        assert int(x & y) == a & b
        assert int(x | y) == a | b
        assert int(x ^ y) == a ^ b
        assert int(x << z) == (a << z) % MOD
        assert int(x >> z) == a >> z

        y64 = y.lo
        _check_checked(x, y64, lambda p, q: p + q, a + y64)
        _check_checked(x, y64, lambda p, q: p - q, a - y64)
        _check_checked(x, y64, lambda p, q: p * q, a * y64)
        assert int(x.add_wrap(y64)) == (a + y64) % MOD
        assert int(x.sub_wrap(y64)) == (a - y64) % MOD
        assert int(x.mul_wrap(y64)) == (a * y64) % MOD
        if y64:
            assert int(x // y64) == a // y64
            assert int(x % y64) == a % y64
        assert int(x & y64) == a & y64
        assert int(x | y64) == a | y64
        assert int(x ^ y64) == a ^ y64


def test_overflow_and_underflow():
    x = Uint128(MAX)
    y = Uint128.from_parts(10, 10)
    z = Uint128(10)
    max_int64 = (1 << 63) - 1
    with pytest.raises(OverflowError, match="^overflow$"):
        x + y
    with pytest.raises(OverflowError, match="^overflow$"):
        x + 10
    with pytest.raises(OverflowError, match="^underflow$"):
        y - x
    with pytest.raises(OverflowError, match="^underflow$"):
        z - max_int64
    with pytest.raises(OverflowError, match="^overflow$"):
        x * y
    with pytest.raises(OverflowError, match="^overflow$"):
        Uint128.from_parts(0, 10) * Uint128.from_parts(0, 10)
    with pytest.raises(OverflowError, match="^overflow$"):
        Uint128.from_parts(0, 1) * Uint128.from_parts(0, 1)
    with pytest.raises(OverflowError, match="^overflow$"):
        x * max_int64


def test_wrap_examples():
    assert Uint128(MAX).add_wrap(1) == 0
    assert Uint128(0).sub_wrap(1) == MAX
    assert Uint128(MAX).mul_wrap(Uint128(MAX)) == 1
    assert Uint128(MAX).mul_wrap(2) == MAX - 1


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        Uint128(5) // 0


@pytest.mark.parametrize(
    ("l", "r", "zeros"),
    [
        ((0x00, 0xF000000000000000), (0x00, 0x8000000000000000), 1),
        ((0x00, 0xF000000000000000), (0x00, 0xC000000000000000), 2),
        ((0x00, 0xF000000000000000), (0x00, 0xE000000000000000), 3),
        ((0x00, 0xFFFF000000000000), (0x00, 0xFF00000000000000), 8),
        ((0x00, 0x000000000000FFFF), (0x00, 0x000000000000FF00), 56),
        ((0xF000000000000000, 0x01), (0x4000000000000000, 0x00), 63),
        ((0xF000000000000000, 0x00), (0x4000000000000000, 0x00), 64),
        ((0xF000000000000000, 0x00), (0x8000000000000000, 0x00), 65),
        ((0x00, 0x00), (0x00, 0x00), 128),
        ((0x01, 0x00), (0x00, 0x00), 127),
    ],
)
def test_leading_zeros(l, r, zeros):
    assert (Uint128.from_parts(*l) ^ Uint128.from_parts(*r)).leading_zeros() == zeros


def test_string_round_trip():
    rng = random.Random(5)
    for _ in range(1000):
        x = Uint128.from_bytes(rng.randbytes(16))
        assert str(x) == str(int(x))
        assert Uint128.parse(str(x)) == x


def test_string_pinned():
    assert str(Uint128(0)) == "0"
    assert str(Uint128(MAX)) == "340282366920938463463374607431768211455"


@pytest.mark.parametrize(
    "text", ["-1", "340282366920938463463374607431768211456", "", "abc"]
)
def test_parse_invalid(text):
    with pytest.raises(ValueError):
        Uint128.parse(text)


def test_parse_prefixed():
    assert Uint128.parse("0x10") == 16
    assert Uint128.parse("  42 ") == 42
    assert Uint128.parse("010") == 8


def test_to_bytes_be_ipv6():
    u = Uint128.parse("42540766411282592856903984951653826561")
    assert str(ipaddress.IPv6Address(u.to_bytes_be())) == "2001:db8::1"


def test_from_bytes_be_ipv6():
    packed = ipaddress.IPv6Address("2001:db8::2").packed
    assert Uint128.from_bytes_be(packed) == Uint128.parse("42540766411282592856903984951653826562")


def test_append_bytes():
    rng = random.Random(6)
    u = Uint128.from_bytes(rng.randbytes(16))
    v = Uint128.from_bytes(rng.randbytes(16))
    b = u.to_bytes() + v.to_bytes()
    assert len(b) == 32
    assert Uint128.from_bytes(b) == u
    assert Uint128.from_bytes(b[16:]) == v


def test_append_bytes_be():
    rng = random.Random(7)
    u = Uint128.from_bytes(rng.randbytes(16))
    v = Uint128.from_bytes(rng.randbytes(16))
    b = u.to_bytes_be() + v.to_bytes_be()
    assert len(b) == 32
    assert Uint128.from_bytes_be(b) == u
    assert Uint128.from_bytes_be(b[16:]) == v


def test_from_bytes_too_short():
    with pytest.raises(ValueError):
        Uint128.from_bytes(b"\x00" * 15)


def test_text_round_trip_through_json():
    foo = Uint128((1 << 64) - 1)
    bar = Uint128(MAX)
    encoded = json.dumps({"Foo": str(foo), "Bar": str(bar)})
    assert encoded == '{"Foo": "18446744073709551615", "Bar": "340282366920938463463374607431768211455"}'
    decoded = json.loads(encoded)
    assert Uint128.parse(decoded["Foo"]) == foo
    assert Uint128.parse(decoded["Bar"]) == bar


def test_parts():
    u = Uint128.from_parts(3, 5)
    assert (u.lo, u.hi) == (3, 5)
    assert int(u) == (5 << 64) | 3
    with pytest.raises(ValueError):
        Uint128.from_parts(1 << 64, 0)


def test_bit_utilities():
    one = Uint128(1)
    assert one.rotate_left(1) == 2
    assert one.rotate_left(-1) == 1 << 127
    assert one.rotate_right(1) == 1 << 127
    assert one.rotate_left(128) == 1
    assert one.reverse() == 1 << 127
    assert one.reverse_bytes() == 1 << 120
    assert Uint128(0).trailing_zeros() == 128
    assert Uint128.from_parts(0, 1).trailing_zeros() == 64
    assert Uint128(MAX).ones_count() == 128
    assert Uint128(0).bit_length() == 0
    assert Uint128(MAX).bit_length() == 128
    assert Uint128(0).is_zero()
    assert not one.is_zero()


def test_ordering_and_hash():
    assert Uint128(3) < Uint128(4)
    assert Uint128(5) >= 5
    assert hash(Uint128(7)) == hash(7)
    assert len({Uint128(7), Uint128(7), Uint128(8)}) == 2