"""Fast parsing and compact formatting of integers, floats and prices."""

from __future__ import annotations

import struct

_UINT64_MAX = (1 << 64) - 1
_INT64_MAX = (1 << 63) - 1
_INT64_MIN = -(1 << 63)
_CUTOFF = _UINT64_MAX // 10

_PLUS = ord("+")
_MINUS = ord("-")
_DOT = ord(".")
_ZERO = ord("0")
_NINE = ord("9")

_FLOAT_POW10 = [10.0**k for k in range(23)]
_POW10_TAB = [float(f"1e{k}") for k in range(32)]
_POW10_POS32 = [float(f"1e{32 * k}") for k in range(10)]
_POW10_NEG32 = [float(f"1e-{32 * k}") for k in range(11)]

_LOG2 = 0.3010299956639812


def _pow10(n: int) -> float:
    if 0 <= n <= 308:
        return _POW10_POS32[n // 32] * _POW10_TAB[n % 32]
    if -323 <= n <= 0:
        return _POW10_NEG32[-n // 32] / _POW10_TAB[-n % 32]
    return float("inf") if n > 0 else 0.0


def _is_digit(c: int) -> bool:
    return _ZERO <= c <= _NINE


def parse_int(b: bytes) -> tuple[int, int]:
    """Parse a signed 64-bit integer prefix; return ``(value, length)``, or ``(0, 0)``."""
    i = 0
    neg = False
    if b and b[0] in (_PLUS, _MINUS):
        neg = b[0] == _MINUS
        i = 1
    start = i
    n = 0
    while i < len(b):
        c = b[i]
        if n > _CUTOFF:
            return 0, 0
        if not _is_digit(c):
            break
        n = (n * 10 + c - _ZERO) & _UINT64_MAX
        i += 1
    if i == start:
        return 0, 0
    if (not neg and n > _INT64_MAX) or n > _INT64_MAX + 1:
        return 0, 0
    return (-n if neg else n), i


def parse_uint(b: bytes) -> tuple[int, int]:
    """Parse an unsigned 64-bit integer prefix; return ``(value, length)``."""
    i = 0
    n = 0
    while i < len(b):
        c = b[i]
        if n > _CUTOFF:
            return 0, 0
        if not _is_digit(c):
            break
        n = (n * 10 + c - _ZERO) & _UINT64_MAX
        i += 1
    return n, i


def len_int(i: int) -> int:
    """Return the number of decimal digits needed to write ``i`` (sign excluded)."""
    return len(str(abs(i)))


def _scan_mantissa(b: bytes, i: int) -> tuple[int, int, int, int]:
    """Scan digits with at most one dot; return (end, dot, trunk, mantissa)."""
    dot = -1
    trunk = -1
    n = 0
    while i < len(b):
        c = b[i]
        if _is_digit(c):
            if trunk == -1:
                if n > _CUTOFF:
                    trunk = i
                else:
                    n = (n * 10 + c - _ZERO) & _UINT64_MAX
        elif dot == -1 and c == _DOT:
            dot = i
        else:
            break
        i += 1
    return i, dot, trunk, n


def _mantissa_exponent(i: int, dot: int, trunk: int) -> int:
    if dot != -1:
        if trunk == -1:
            trunk = i
        return trunk - dot - 1
    if trunk != -1:
        return trunk - i
    return 0


def _scale(f: float, exp: int) -> float | None:
    """Apply the exact fast paths for ``f * 10**exp``; None when none applies."""
    if exp == 0:
        return f
    if 0 < exp <= 15 + 22:
        if exp > 22:
            f *= _FLOAT_POW10[exp - 22]
            exp = 22
        if -1e15 <= f <= 1e15:
            return f * _FLOAT_POW10[exp]
        return None
    if -22 <= exp < 0:
        return f / _FLOAT_POW10[-exp]
    return None


def parse_float(b: bytes) -> tuple[float, int]:
    """Parse a float prefix with optional sign and exponent; return ``(value, length)``."""
    i = 0
    neg = False
    if b and b[0] in (_PLUS, _MINUS):
        neg = b[0] == _MINUS
        i = 1
    start = i
    i, dot, trunk, n = _scan_mantissa(b, i)
    if i == start or (i == start + 1 and dot == start):
        return 0.0, 0

    f = float(n)
    if neg:
        f = -f
    mant_exp = _mantissa_exponent(i, dot, trunk)

    exp_exp = 0
    if i < len(b) and b[i] in b"eE":
        e, exp_len = parse_int(b[i + 1 :])
        if exp_len > 0:
            exp_exp = e
            i += 1 + exp_len

    scaled = _scale(f, exp_exp - mant_exp)
    if scaled is not None:
        return scaled, i
    f *= _pow10(-mant_exp)
    return f * _pow10(exp_exp), i


def parse_decimal(b: bytes) -> tuple[float, int]:
    """Parse an unsigned decimal without exponent; return ``(value, length)``."""
    i, dot, trunk, n = _scan_mantissa(b, 0)
    if i == 0 or (i == 1 and dot == 0):
        return 0.0, 0

    f = float(n)
    mant_exp = _mantissa_exponent(i, dot, trunk)
    scaled = _scale(f, -mant_exp)
    if scaled is not None:
        return scaled, i
    return f * _pow10(-mant_exp), i


def _float_exp10(f: float) -> int:
    exp2 = 0
    if f != 0.0:
        bits = struct.unpack("<Q", struct.pack("<d", f))[0]
        exp2 = ((bits >> 52) & 0x7FF) - 1023 + 1
    exp10 = exp2 * _LOG2
    if exp10 < 0:
        exp10 -= 1.0
    return int(exp10)


def format_float(f: float, prec: int) -> bytes:
    """Format ``f`` in its shortest form with ``prec`` decimals of precision.

    ``prec + 1`` is the number of significant digits; a negative value or one
    above 17 means 17. Raises ValueError for NaN and infinities.
    """
    if f != f or f in (float("inf"), float("-inf")):
        raise ValueError(f"cannot format non-finite float {f!r}")

    neg = f < 0.0
    if neg:
        f = -f
    if prec < 0 or prec > 17:
        prec = 17
    prec -= _float_exp10(f)
    f *= _pow10(prec)

    mant = int(f)
    mant_len = len_int(mant)
    mant_exp = mant_len - prec - 1
    if mant == 0:
        return b"0"

    exp = 0
    exp_len = 0
    if mant_exp > 0:
        # positive exponents are found in the digit loop, unless precision was cut
        if prec < 0:
            exp = mant_exp
        exp_len = 1 + len_int(exp)
    elif mant_exp < -3:
        exp = mant_exp
        exp_len = 2 + len_int(exp)
    elif mant_exp < -1:
        mant_len += -mant_exp - 1

    buf = bytearray(1 + mant_len + exp_len + (1 if neg else 0))
    i = 0
    if neg:
        buf[0] = _MINUS
        i = 1

    # write digits from the end; trailing zeros are trimmed afterwards
    zero = True
    last = i + mant_len
    dot = last - prec - exp
    j = last
    while mant > 0:
        if j == dot:
            buf[j] = _DOT
            j -= 1
        mant, digit = divmod(mant, 10)
        if zero and digit > 0:
            if dot < j:
                i = j + 1
                if exp < 0:
                    new_exp = exp - (j - dot)
                    # dropping the dot must not lengthen the exponent
                    if len_int(new_exp) == len_int(exp):
                        exp = new_exp
                        dot = j
                        j -= 1
                        i -= 1
            else:
                i = dot
            last = j
            zero = False
        buf[j] = _ZERO + digit
        j -= 1

    if dot < j:
        while dot < j:
            buf[j] = _ZERO
            j -= 1
        buf[j] = _DOT
    elif last + 3 < dot:
        # three or more zeros before the dot become a positive exponent
        i = last + 1
        exp = dot - last - 1
    elif j == dot:
        buf[j] = _DOT

    head = bytes(buf[:i])
    if exp == 0:
        return head
    if exp == 1:
        return head + b"0"
    if exp == 2:
        return head + b"00"
    return head + b"e" + str(exp).encode()


def _separator(sep: str | bytes) -> bytes:
    return sep.encode() if isinstance(sep, str) else bytes(sep)


def format_price(
    price: int, dec: bool, mil_separator: str | bytes, dec_separator: str | bytes
) -> bytes:
    """Format a price given in cents, grouping thousands; the sign is not shown.

    Without ``dec`` the cents are rounded away.
    """
    mil = _separator(mil_separator)
    decimal = _separator(dec_separator)
    show_cents = dec or price == _INT64_MIN
    price = abs(price)

    if not show_cents and (price // 10) % 10 >= 5:
        price += 100
    whole, cents = divmod(price, 100)
    grouped = f"{whole:,}".encode().replace(b",", mil)
    if show_cents:
        return grouped + decimal + b"%02d" % cents
    return grouped