"""
Signed Qm.n fixed-point encoding as binary digit strings.

Format:
- m integer bits including the sign bit, n fractional bits, width = m + n
- MSB weight is -2^(m-1), the remaining integer bits 2^(m-2) .. 2^0,
  fractional bit j (1-based) weighs 2^-j
- Range: [-2^(m-1), 2^(m-1) - 2^-n] at a resolution of 2^-n

Quantization picks the representable value nearest to x out of every bit
pattern of the format.  Ties keep the pattern that comes first in ascending
unsigned order.  Inputs outside the range saturate at the extremes.
"""

import functools
import math
from dataclasses import dataclass
from fractions import Fraction

import numpy as np

from wfmlut_gen.errors import InvalidFormat

# Widths up to this are searched literally over every pattern; wider formats
# only look at the patterns bracketing x, which selects the same pattern.
EXHAUSTIVE_MAX_BITS = 20

# Range extremes and resolution must stay finite, nonzero doubles.
MAX_INTEGER_BITS = 1024
MAX_FRACTIONAL_BITS = 1074


@dataclass(frozen=True)
class FixedPointFormat:
    """Qm.n descriptor; m includes the sign bit."""

    integer_bits: int
    fractional_bits: int

    @property
    def width(self) -> int:
        return self.integer_bits + self.fractional_bits

    @property
    def scale(self) -> int:
        return 1 << self.fractional_bits

    @property
    def resolution(self) -> float:
        return math.ldexp(1.0, -self.fractional_bits)

    @property
    def min_value(self) -> float:
        return -math.ldexp(1.0, self.integer_bits - 1)

    @property
    def max_value(self) -> float:
        return math.ldexp(1.0, self.integer_bits - 1) - self.resolution

    def validate(self) -> None:
        if self.integer_bits < 1:
            raise InvalidFormat(
                f"{self}: need at least one integer bit to hold the sign"
            )
        if self.fractional_bits < 0:
            raise InvalidFormat(f"{self}: fractional bits cannot be negative")
        if self.integer_bits > MAX_INTEGER_BITS:
            raise InvalidFormat(
                f"{self}: at most {MAX_INTEGER_BITS} integer bits are supported"
            )
        if self.fractional_bits > MAX_FRACTIONAL_BITS:
            raise InvalidFormat(
                f"{self}: at most {MAX_FRACTIONAL_BITS} fractional bits are supported"
            )

    def __str__(self) -> str:
        return f"Q{self.integer_bits}.{self.fractional_bits}"


@functools.lru_cache(maxsize=8)
def _pattern_values(integer_bits: int, fractional_bits: int) -> np.ndarray:
    """Real value of every bit pattern, indexed by the pattern as unsigned int."""
    width = integer_bits + fractional_bits
    patterns = np.arange(1 << width, dtype=np.int64)
    signed = np.where(patterns >> (width - 1), patterns - (1 << width), patterns)
    values = signed / float(1 << fractional_bits)
    values.setflags(write=False)
    return values


def _nearest_exhaustive(x: float, fmt: FixedPointFormat) -> int:
    values = _pattern_values(fmt.integer_bits, fmt.fractional_bits)
    # argmin reports the first minimum, i.e. the lowest unsigned pattern
    return int(np.argmin(np.abs(values - x)))


def _nearest_bracketed(x: float, fmt: FixedPointFormat) -> int:
    width = fmt.width
    modulus = 1 << width
    lo = -(1 << (width - 1))
    hi = (1 << (width - 1)) - 1
    # x in units of one LSB, exact for any width
    target = Fraction(x) * fmt.scale

    k = math.floor(target)
    candidates = sorted(s % modulus for s in range(k - 1, k + 3) if lo <= s <= hi)

    best, best_dist = None, None
    for pattern in candidates:
        signed = pattern - modulus if pattern >> (width - 1) else pattern
        dist = abs(signed - target)
        if best is None or dist < best_dist:
            best, best_dist = pattern, dist
    return best


def quantize(x: float, fmt: FixedPointFormat) -> str:
    """
    Quantize x to the nearest value representable in fmt.

    Returns the bit pattern as a string of exactly fmt.width '0'/'1' digits,
    sign bit first.  Raises InvalidFormat for a format without a sign bit.
    """
    fmt.validate()
    x = float(x)
    if math.isnan(x):
        raise ValueError("cannot quantize NaN")
    x = min(max(x, fmt.min_value), fmt.max_value)

    if fmt.width <= EXHAUSTIVE_MAX_BITS:
        pattern = _nearest_exhaustive(x, fmt)
    else:
        pattern = _nearest_bracketed(x, fmt)
    return format(pattern, f"0{fmt.width}b")


def decode(bits: str, fmt: FixedPointFormat) -> float:
    """Real value of a digit string produced by quantize()."""
    fmt.validate()
    if len(bits) != fmt.width or set(bits) - {"0", "1"}:
        raise ValueError(f"{bits!r} is not a {fmt.width}-digit binary string")
    raw = int(bits, 2)
    if bits[0] == "1":
        raw -= 1 << fmt.width
    return raw / fmt.scale


def encode_address(i: int, width: int) -> str:
    """Plain unsigned binary of i, zero-padded to width digits."""
    if width < 0 or not 0 <= i < (1 << width):
        raise ValueError(f"address {i} does not fit in {width} bits")
    if width == 0:
        return ""
    return format(i, f"0{width}b")
