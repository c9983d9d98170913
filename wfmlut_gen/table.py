"""
Sine/cosine lookup table over one period.

Address i in [0, depth) maps to the phase 2*pi*i/depth; every row holds the
address in plain binary and sin/cos of the phase quantized to the configured
fixed-point format.
"""

import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple

from wfmlut_gen.errors import InvalidDepth
from wfmlut_gen.fixed_point import FixedPointFormat, decode, encode_address, quantize


@dataclass(frozen=True)
class TableConfig:
    depth: int
    format: FixedPointFormat

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        self.format.validate()
        if self.depth <= 0 or self.depth & (self.depth - 1):
            raise InvalidDepth(f"depth must be a positive power of two, got {self.depth}")

    @property
    def address_bits(self) -> int:
        return self.depth.bit_length() - 1


class TableRow(NamedTuple):
    address: str
    sin_value: str
    cos_value: str


class LutTable:
    """Rows of a TableConfig, computed afresh on every iteration."""

    def __init__(self, config: TableConfig):
        self.config = config

    def __len__(self) -> int:
        return self.config.depth

    def __iter__(self) -> Iterator[TableRow]:
        depth = self.config.depth
        fmt = self.config.format
        address_bits = self.config.address_bits
        for addr in range(depth):
            phi = 2.0 * math.pi * addr / depth
            yield TableRow(
                address=encode_address(addr, address_bits),
                sin_value=quantize(math.sin(phi), fmt),
                cos_value=quantize(math.cos(phi), fmt),
            )


def build(config: TableConfig) -> LutTable:
    """
    Return the LUT rows for config in ascending address order.

    The format and depth are checked here, so a bad configuration fails
    before the first row is computed.
    """
    config.validate()
    return LutTable(config)


def max_error(table: LutTable) -> float:
    """Worst absolute difference between the decoded rows and the ideal sin/cos."""
    depth = table.config.depth
    fmt = table.config.format
    worst = 0.0
    for addr, row in enumerate(table):
        phi = 2.0 * math.pi * addr / depth
        worst = max(
            worst,
            abs(decode(row.sin_value, fmt) - math.sin(phi)),
            abs(decode(row.cos_value, fmt) - math.cos(phi)),
        )
    return worst
