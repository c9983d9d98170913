"""
VHDL rendering of a sin/cos LUT.

The module is a single combinational process:

    entity wfmlut is
        port (
            addr : in std_logic_vector (A-1 downto 0);
            sin  : out std_logic_vector (W-1 downto 0);
            cos  : out std_logic_vector (W-1 downto 0)
        );
    end entity;

with one `when "<addr>" => sin <= "..."; cos <= "...";` arm per address and
an all-zero `when others` arm.  Every literal is fixed width, so the size of
the document is known before any row is rendered; assemble() allocates the
buffer once and checks that the rendered text fills it exactly.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from wfmlut_gen.errors import ShortWrite, SizeComputationMismatch
from wfmlut_gen.fixed_point import FixedPointFormat
from wfmlut_gen.table import TableConfig, TableRow, build

ENCODING = "utf-8"


@dataclass(frozen=True)
class VhdlTemplate:
    libs: str = (
        "library ieee;\n"
        "use ieee.std_logic_1164.all;\n"
        "use ieee.numeric_std.all;\n"
    )
    entity: str = (
        "entity wfmlut is\n"
        "\tport (\n"
        "\t\taddr : in std_logic_vector ({addr_msb} downto 0);\n"
        "\t\tsin  : out std_logic_vector ({value_msb} downto 0);\n"
        "\t\tcos  : out std_logic_vector ({value_msb} downto 0)\n"
        "\t);\n"
        "end entity;\n"
    )
    arch_head: str = (
        "architecture arch of wfmlut is\n"
        "begin\n"
    )
    proc_head: str = (
        "\tprocess (addr)\n"
        "\tbegin\n"
        "\t\tcase addr is\n"
    )
    row: str = '\t\t\twhen "{address}" => sin <= "{sin}"; cos <= "{cos}";\n'
    default_row: str = '\t\t\twhen others => sin <= "{zeros}"; cos <= "{zeros}";\n'
    proc_foot: str = (
        "\t\tend case;\n"
        "\tend process;\n"
    )
    arch_foot: str = "end architecture;\n"

    def header(self, addr_msb: str, value_msb: str) -> str:
        entity = self.entity.format(addr_msb=addr_msb, value_msb=value_msb)
        return self.libs + "\n" + entity + "\n" + self.arch_head + self.proc_head

    def footer(self, zeros: str) -> str:
        return self.default_row.format(zeros=zeros) + self.proc_foot + self.arch_foot

    def render_row(self, row: TableRow) -> str:
        return self.row.format(address=row.address, sin=row.sin_value, cos=row.cos_value)


VHDL_TEMPLATE = VhdlTemplate()


@dataclass(frozen=True)
class Document:
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def text(self) -> str:
        return self.data.decode(ENCODING)


def _fragments(
    fmt: FixedPointFormat, address_bits: int, template: VhdlTemplate
) -> Tuple[bytes, bytes, int]:
    """Encoded header and footer plus the byte length of one case arm."""
    header = template.header(addr_msb=str(address_bits - 1), value_msb=str(fmt.width - 1))
    footer = template.footer(zeros="0" * fmt.width)
    prototype = TableRow("0" * address_bits, "0" * fmt.width, "0" * fmt.width)
    row_size = len(template.render_row(prototype).encode(ENCODING))
    return header.encode(ENCODING), footer.encode(ENCODING), row_size


def document_size(
    fmt: FixedPointFormat,
    address_bits: int,
    depth: int,
    template: VhdlTemplate = VHDL_TEMPLATE,
) -> int:
    """Exact byte length of the document for a table of the given shape."""
    header, footer, row_size = _fragments(fmt, address_bits, template)
    return len(header) + depth * row_size + len(footer)


def _put(buf: bytearray, offset: int, chunk: bytes) -> int:
    end = offset + len(chunk)
    if end > len(buf):
        raise SizeComputationMismatch(
            f"writing {len(chunk)} bytes at offset {offset} overruns the {len(buf)}-byte buffer"
        )
    buf[offset:end] = chunk
    return end


def assemble(
    rows: Iterable[TableRow],
    fmt: FixedPointFormat,
    address_bits: Optional[int] = None,
    template: VhdlTemplate = VHDL_TEMPLATE,
) -> Document:
    """
    Render rows into a complete VHDL document.

    address_bits defaults to the width of the first row's address.  Raises
    SizeComputationMismatch if the rendered text does not fill the planned
    buffer exactly.
    """
    fmt.validate()
    rows = list(rows)
    if address_bits is None:
        address_bits = len(rows[0].address) if rows else 0

    header, footer, row_size = _fragments(fmt, address_bits, template)
    size = len(header) + len(rows) * row_size + len(footer)
    buf = bytearray(size)

    offset = _put(buf, 0, header)
    for row in rows:
        chunk = template.render_row(row).encode(ENCODING)
        if len(chunk) != row_size:
            raise SizeComputationMismatch(
                f"case arm for address {row.address!r} is {len(chunk)} bytes, planned {row_size}"
            )
        offset = _put(buf, offset, chunk)
    offset = _put(buf, offset, footer)

    if offset != size:
        raise SizeComputationMismatch(f"document filled {offset} of {size} planned bytes")
    return Document(bytes(buf))


def render(config: TableConfig, template: VhdlTemplate = VHDL_TEMPLATE) -> Document:
    """Build the table for config and assemble it into a document."""
    table = build(config)
    return assemble(table, config.format, config.address_bits, template)


def write_document(document: Document, path) -> Path:
    """Write document to path, replacing any existing file."""
    out_path = Path(path)
    # unbuffered: write() reports what the single OS-level write accepted
    with open(out_path, "wb", buffering=0) as f:
        written = f.write(document.data)
    if written != document.size:
        raise ShortWrite(f"wrote {written} of {document.size} bytes to {out_path}")
    return out_path
