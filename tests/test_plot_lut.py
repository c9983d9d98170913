from pytest import mark

from wfmlut_gen.fixed_point import FixedPointFormat
from wfmlut_gen.plot_lut import main, plot_table
from wfmlut_gen.table import TableConfig, build


def test_plot_table(tmp_path, capsys):
    out = tmp_path / "lut.png"
    table = build(TableConfig(32, FixedPointFormat(1, 5)))
    assert plot_table(table, out) == out
    assert out.stat().st_size > 0
    assert f"Wrote {out}" in capsys.readouterr().out


def test_main(tmp_path):
    out = tmp_path / "lut.png"
    assert main(["-d", "16", "-f", "4", "--out", str(out)]) == 0
    assert out.read_bytes().startswith(b"\x89PNG")


@mark.parametrize(
    "argv, message",
    [
        (["-d", "100"], "power of two"),
        (["-i", "0"], "integer bit"),
        (["-f", "1100"], "fractional bits"),
    ],
)
def test_main_bad_config(tmp_path, capsys, argv, message):
    out = tmp_path / "lut.png"
    assert main(argv + ["--out", str(out)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error:")
    assert message in err
    assert not out.exists()
