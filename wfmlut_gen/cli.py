#!/usr/bin/env python3
"""
Generate a combinational VHDL sine/cosine LUT module: wfmlut.vhd

Layout:
- Input addr is log2(depth) bits, representing phase in units of 1/depth turn:
    phase_radians = 2*pi * addr / depth
- Outputs sin and cos are signed Qm.n fixed point, m = --ibits (sign included),
  n = --fbits, each value the nearest representable one
- Range: [-2^(m-1), 2^(m-1) - 2^-n]; out-of-range values saturate
  Note: with Q1.n, +1.0 saturates to 0111..1 and -1.0 is 1000..0

Usage:
  wfmlut-gen
  wfmlut-gen -i 1 -f 15 -d 256 -o wfmlut.vhd
"""

import argparse
import math
import sys
from pathlib import Path

from wfmlut_gen import __version__
from wfmlut_gen.errors import WfmLutError
from wfmlut_gen.fixed_point import FixedPointFormat, decode
from wfmlut_gen.table import LutTable, TableConfig, build, max_error
from wfmlut_gen.vhdl import assemble, write_document

DEFAULT_IBITS = 1
DEFAULT_FBITS = 15
DEFAULT_DEPTH = 256
DEFAULT_OUTPUT_FILE = "wfmlut.vhd"


def make_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="wfmlut-gen",
        description="This program creates a VHDL module of a sine and cosine LUT.",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Print debug messages")
    ap.add_argument("-i", "--ibits", type=int, default=DEFAULT_IBITS, metavar="NUM",
                    help=f"Number of integer bits in the LUT values. Default={DEFAULT_IBITS}")
    ap.add_argument("-f", "--fbits", type=int, default=DEFAULT_FBITS, metavar="NUM",
                    help=f"Number of fractional bits in the LUT values. Default={DEFAULT_FBITS}")
    ap.add_argument("-d", "--depth", type=int, default=DEFAULT_DEPTH, metavar="NUM",
                    help=f"The depth of the LUT. Default={DEFAULT_DEPTH}")
    ap.add_argument("-o", "--output", default=DEFAULT_OUTPUT_FILE, metavar="FILE",
                    help="The VHDL output file. If it already exists it will be overwritten. "
                         f"Default={DEFAULT_OUTPUT_FILE}")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def print_config(config: TableConfig, out_path: Path) -> None:
    fmt = config.format
    print(f"Integer bits    : {fmt.integer_bits}")
    print(f"Fractional bits : {fmt.fractional_bits}")
    print(f"Width           : {fmt.width} ({fmt})")
    print(f"Depth           : {config.depth}")
    print(f"Address bits    : {config.address_bits}")
    print(f"Output          : {out_path}")


def print_sanity(table: LutTable) -> None:
    depth = table.config.depth
    fmt = table.config.format
    rows = list(table)
    # Quarter-period points: sin/cos should sit at 0 and +-1 (saturated)
    for addr in sorted({0, depth // 4, depth // 2, 3 * depth // 4, depth - 1}):
        row = rows[addr]
        print(
            f"addr={addr:<6d} turns={addr / depth:.6f} rad={2 * math.pi * addr / depth:.6f} "
            f"sin={row.sin_value} ({decode(row.sin_value, fmt):+.6f}) "
            f"cos={row.cos_value} ({decode(row.cos_value, fmt):+.6f})"
        )
    print(f"max |error| = {max_error(table):.3e} (resolution {fmt.resolution:.3e})")


def main(argv=None) -> int:
    args = make_parser().parse_args(argv)
    out_path = Path(args.output)

    try:
        config = TableConfig(depth=args.depth, format=FixedPointFormat(args.ibits, args.fbits))
        if args.verbose:
            print_config(config, out_path)

        table = build(config)
        document = assemble(table, config.format, config.address_bits)
        write_document(document, out_path)
    except (WfmLutError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {out_path} with {config.depth} entries ({document.size} bytes).")
    if args.verbose:
        print_sanity(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
