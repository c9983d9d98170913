import pytest
from pytest import mark

from wfmlut_gen import __version__
from wfmlut_gen.cli import DEFAULT_OUTPUT_FILE, main, make_parser


class TestArguments:
    def test_defaults(self):
        args = make_parser().parse_args([])
        assert (args.verbose, args.ibits, args.fbits, args.depth, args.output) == (
            False, 1, 15, 256, DEFAULT_OUTPUT_FILE,
        )
        assert DEFAULT_OUTPUT_FILE == "wfmlut.vhd"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestMain:
    def test_writes_lut(self, tmp_path, capsys):
        out = tmp_path / "lut.vhd"
        assert main(["-i", "1", "-f", "3", "-d", "4", "-o", str(out)]) == 0
        text = out.read_text(encoding="utf-8")
        assert '\t\t\twhen "00" => sin <= "0000"; cos <= "0111";\n' in text
        assert text.count("\t\t\twhen \"") == 4
        assert f"Wrote {out} with 4 entries" in capsys.readouterr().out

    def test_default_format(self, tmp_path):
        out = tmp_path / "lut.vhd"
        assert main(["-d", "16", "-o", str(out)]) == 0
        text = out.read_text(encoding="utf-8")
        assert "addr : in std_logic_vector (3 downto 0);" in text
        assert "sin  : out std_logic_vector (15 downto 0);" in text
        assert '\t\t\twhen "0000" => sin <= "0000000000000000"; cos <= "0111111111111111";\n' in text

    def test_verbose(self, tmp_path, capsys):
        out = tmp_path / "lut.vhd"
        assert main(["-v", "-f", "7", "-d", "8", "-o", str(out)]) == 0
        printed = capsys.readouterr().out
        assert "Depth           : 8" in printed
        assert "Address bits    : 3" in printed
        assert "Width           : 8 (Q1.7)" in printed
        assert "addr=0 " in printed
        assert "max |error|" in printed

    @mark.parametrize(
        "argv, message",
        [
            (["-i", "0"], "integer bit"),
            (["-d", "100"], "power of two"),
            (["-d", "0"], "power of two"),
            (["-f", "-2"], "fractional bits"),
            (["-f", "1100"], "at most 1074 fractional bits"),
            (["-i", "2000"], "at most 1024 integer bits"),
        ],
    )
    def test_bad_config(self, tmp_path, capsys, argv, message):
        out = tmp_path / "lut.vhd"
        assert main(argv + ["-o", str(out)]) == 1
        assert message in capsys.readouterr().err
        assert not out.exists()

    def test_unwritable_output(self, tmp_path, capsys):
        out = tmp_path / "missing" / "lut.vhd"
        assert main(["-d", "4", "-f", "3", "-o", str(out)]) == 1
        assert capsys.readouterr().err.startswith("Error:")
