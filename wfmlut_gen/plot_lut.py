#!/usr/bin/env python3
import argparse
import math
import sys

import matplotlib.pyplot as plt

from wfmlut_gen.cli import DEFAULT_DEPTH, DEFAULT_FBITS, DEFAULT_IBITS
from wfmlut_gen.errors import WfmLutError
from wfmlut_gen.fixed_point import FixedPointFormat, decode
from wfmlut_gen.table import LutTable, TableConfig, build, max_error


def plot_table(table: LutTable, out_path="wfmlut.png"):
    depth = table.config.depth
    fmt = table.config.format
    rows = list(table)

    n = list(range(depth))
    phases = [2.0 * math.pi * i / depth for i in n]

    lut_sin = [decode(r.sin_value, fmt) for r in rows]
    ideal_sin = [math.sin(p) for p in phases]

    lut_cos = [decode(r.cos_value, fmt) for r in rows]
    ideal_cos = [math.cos(p) for p in phases]

    fig = plt.figure(figsize=(10, 6))

    ax1 = fig.add_subplot(2, 1, 1)
    ax1.step(n, lut_sin, where="post", label="LUT sin")
    ax1.plot(n, ideal_sin, label="Ideal sin", linestyle="--")
    ax1.set_title(f"wfmlut  (depth={depth} {fmt} max|err|={max_error(table):.3e})")
    ax1.set_ylabel(f"sin ({fmt})")
    ax1.grid(True)
    ax1.legend()

    ax2 = fig.add_subplot(2, 1, 2)
    ax2.step(n, lut_cos, where="post", label="LUT cos")
    ax2.plot(n, ideal_cos, label="Ideal cos", linestyle="--")
    ax2.set_xlabel("Address")
    ax2.set_ylabel(f"cos ({fmt})")
    ax2.grid(True)
    ax2.legend()

    fig.tight_layout()

    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    print(f"Wrote {out_path}")
    return out_path


def main(argv=None):
    ap = argparse.ArgumentParser(description="Plot the quantized sine/cosine LUT against the ideal waves.")
    ap.add_argument("-i", "--ibits", type=int, default=DEFAULT_IBITS, metavar="NUM")
    ap.add_argument("-f", "--fbits", type=int, default=DEFAULT_FBITS, metavar="NUM")
    ap.add_argument("-d", "--depth", type=int, default=DEFAULT_DEPTH, metavar="NUM")
    ap.add_argument("--out", default="wfmlut.png", help="Output .png filename")
    args = ap.parse_args(argv)

    try:
        config = TableConfig(depth=args.depth, format=FixedPointFormat(args.ibits, args.fbits))
        plot_table(build(config), args.out)
    except (WfmLutError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
