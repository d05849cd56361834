"""Command line behaviour."""

import pytest

from jpngsvg.cli import build_parser, format_bytes, main, options_from_args
from jpngsvg.config import ConvertOptions


class TestArgs:
    def test_defaults(self):
        opts = options_from_args(build_parser().parse_args(["*.png"]))
        assert opts == ConvertOptions()

    def test_short_flags(self, tmp_path):
        args = build_parser().parse_args(
            ["x.png", "-o", str(tmp_path), "-b", "1024", "-p", "-q", "90", "-i", "-Q"]
        )
        opts = options_from_args(args)
        assert opts.output == tmp_path
        assert (opts.bufsize, opts.progressive, opts.quality) == (1024, True, 90)
        assert opts.inline and opts.quiet
        assert opts.jpeg.quality == 90

    def test_help_exits_cleanly(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--help"])
        assert exc.value.code == 0
        assert "--inline" in capsys.readouterr().out


class TestMain:
    def test_no_pattern(self, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "No glob pattern provided" in out
        assert "usage:" in out

    def test_no_files(self, tmp_path, capsys):
        out_dir = tmp_path / "dist"
        assert main([str(tmp_path / "*.png"), "-o", str(out_dir)]) == 0
        assert "No files found" in capsys.readouterr().out
        assert not out_dir.exists()

    def test_converts_and_reports(self, scenario_png, out_dir, capsys):
        assert main([str(scenario_png.parent / "*.png"), "-o", str(out_dir)]) == 0
        out = capsys.readouterr().out
        assert "Found 1 image(s):" in out
        assert "->" in out
        assert sorted(p.name for p in out_dir.iterdir()) == ["name-alpha.png", "name.jpg", "name.svg"]

    def test_quiet_inline(self, scenario_png, out_dir, capsys):
        assert main([str(scenario_png), "-o", str(out_dir), "-i", "-Q"]) == 0
        assert capsys.readouterr().out == ""
        assert [p.name for p in out_dir.iterdir()] == ["name.svg"]

    def test_failures_keep_exit_code(self, corrupt_png, scenario_png, out_dir, capsys):
        assert main([str(corrupt_png.parent / "*.png"), "-o", str(out_dir), "-Q"]) == 0
        err = capsys.readouterr().err
        assert "Failed:" in err
        assert "broken.png" in err
        assert (out_dir / "name.svg").is_file()
        assert (out_dir / "noisy.svg").is_file()


class TestFormatBytes:
    @pytest.mark.parametrize(
        "n, text",
        [
            (0, "0 B"),
            (999, "999 B"),
            (1000, "1 kB"),
            (1500, "1.5 kB"),
            (12345678, "12.3 MB"),
            (999_950, "1 MB"),
            (999_499, "999 kB"),
            (-1500, "-1.5 kB"),
        ],
    )
    def test_sizes(self, n, text):
        assert format_bytes(n) == text

    def test_signed(self):
        assert format_bytes(2000, signed=True) == "+2 kB"
        assert format_bytes(-2000, signed=True) == "-2 kB"
        assert format_bytes(0, signed=True) == "0 B"
