"""Tests for the command-line interface and the run pipeline."""

from pathlib import Path

import pytest

from displacedpoints.__main__ import main
from displacedpoints.main import run, summary_line


class TestMain:

    def test_success_with_originals(self, points_file, tmp_path: Path, capsys):
        out = tmp_path / "out.csv"
        assert main([str(points_file), str(out)]) == 0

        lines = out.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 3 + 3 * 7
        assert lines[0] == "A1,100.000,200.000,3.000"
        assert capsys.readouterr().out == f"Wrote {out} with 3 original points and 21 displaced points.\n"

    def test_no_original(self, points_file, tmp_path: Path, capsys):
        out = tmp_path / "out.csv"
        assert main([str(points_file), str(out), "--no-original"]) == 0

        lines = out.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 21
        assert lines[0].startswith("A1_1,")
        assert capsys.readouterr().out == f"Wrote {out} with 21 displaced points.\n"

    def test_wrong_argument_count(self, points_file, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(points_file)])
        assert exc.value.code == 1
        assert "usage" in capsys.readouterr().err

    def test_unknown_option(self, points_file, tmp_path: Path):
        with pytest.raises(SystemExit) as exc:
            main([str(points_file), str(tmp_path / "out.csv"), "--bogus"])
        assert exc.value.code == 1

    def test_extra_positional(self, points_file, tmp_path: Path):
        with pytest.raises(SystemExit) as exc:
            main([str(points_file), str(tmp_path / "out.csv"), "extra"])
        assert exc.value.code == 1

    def test_unopenable_output(self, points_file, tmp_path: Path, capsys):
        assert main([str(points_file), str(tmp_path / "no_dir" / "out.csv")]) == 1
        assert "Error" in capsys.readouterr().err

    def test_missing_input(self, tmp_path: Path):
        assert main([str(tmp_path / "missing.csv"), str(tmp_path / "out.csv")]) == 1

    def test_empty_input_succeeds(self, tmp_path: Path, capsys):
        src = tmp_path / "empty.csv"
        src.write_text("", encoding="utf-8")
        out = tmp_path / "out.csv"
        assert main([str(src), str(out)]) == 0
        assert out.read_text(encoding="utf-8") == ""
        captured = capsys.readouterr()
        assert captured.out == f"Wrote {out} with 0 original points and 0 displaced points.\n"
        assert "No points read" in captured.err

    def test_warnings_go_to_stderr(self, tmp_path: Path, capsys):
        src = tmp_path / "header.csv"
        src.write_text("label,x,y,z\nA1,1,2,3\n", encoding="utf-8")
        out = tmp_path / "out.csv"
        assert main([str(src), str(out), "-vv"]) == 0
        captured = capsys.readouterr()
        assert captured.out == f"Wrote {out} with 1 original points and 7 displaced points.\n"
        assert "skipping record" in captured.err

    def test_latin1_input(self, tmp_path: Path, capsys):
        src = tmp_path / "latin1.csv"
        src.write_bytes(b"Pt\xb01,1,2,3\n")
        out = tmp_path / "out.csv"
        assert main([str(src), str(out)]) == 0

        lines = out.read_bytes().splitlines()
        assert lines[0] == b"Pt\xb01,1.000,2.000,3.000"
        assert lines[1].startswith(b"Pt\xb01_1,")
        assert capsys.readouterr().out == f"Wrote {out} with 1 original points and 7 displaced points.\n"


class TestRun:

    def test_plot_shows_originals_even_without_them_in_file(self, points_file, tmp_path: Path):
        out = tmp_path / "out.csv"
        prefix = tmp_path / "plot"
        summary = run(str(points_file), str(out), keep_original=False, plot_prefix=str(prefix))

        assert summary.n_original == 0
        assert summary.n_derived == 21
        assert (tmp_path / "plot.png").exists()
        assert (tmp_path / "plot.vtp").exists()

        import pyvista as pv
        scene = pv.read(str(tmp_path / "plot.vtp"))
        assert scene.n_points == 24
        assert int((scene.point_data["role"] == 0).sum()) == 3

    def test_summary_line(self):
        from displacedpoints.model.engine import ExpansionSummary
        summary = ExpansionSummary(n_original=2, n_derived=14)
        assert summary_line("o.csv", summary, True) == "Wrote o.csv with 2 original points and 14 displaced points."
        assert summary_line("o.csv", summary, False) == "Wrote o.csv with 14 displaced points."
