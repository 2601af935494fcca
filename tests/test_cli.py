"""Tests for the conceptmapper command line."""

import json
import locale
import os
from textwrap import dedent

import pytest

from conceptmapper.cli import create_parser, main
from conceptmapper.export.log import append_row, read_log
from tests.log_test_helpers import make_row

MAP_TOML = dedent(
    """\
    root = "R"
    edges = [["R", "M1"], ["M1", "D1"], ["R", "M2"]]
    crosslinks = [["D1", "M2"]]
    """
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every CLI test from an empty directory with no env overrides."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("CONCEPTMAPPER_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr(locale, "setlocale", lambda category, value=None: "C")


class TestParser:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "conceptmapper" in capsys.readouterr().out

    def test_log_option_on_subcommands(self, tmp_path):
        args = create_parser().parse_args(["summary", "--log", str(tmp_path / "x.csv")])
        assert args.log == tmp_path / "x.csv"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "conceptmapper" in capsys.readouterr().out


class TestNextCommand:
    def test_prints_next_image(self, image_folder, log_path, capsys):
        append_row(log_path, make_row("a.png"))
        assert main(["next", str(image_folder), "--log", str(log_path)]) == 0
        assert capsys.readouterr().out.strip() == str(image_folder / "b.png")

    def test_all_logged(self, tmp_path, log_path, capsys):
        folder = tmp_path / "done"
        folder.mkdir()
        (folder / "a.png").write_bytes(b"")
        append_row(log_path, make_row("a.png"))
        assert main(["next", str(folder), "--log", str(log_path)]) == 1
        assert "All images" in capsys.readouterr().out

    def test_not_a_directory(self, tmp_path, capsys):
        assert main(["next", str(tmp_path / "nope")]) == 1
        assert "Not a directory" in capsys.readouterr().err

    def test_adopts_user_collation(self, image_folder, log_path, monkeypatch, capsys):
        calls = []
        monkeypatch.setattr(
            locale, "setlocale", lambda category, value=None: calls.append((category, value))
        )
        (image_folder / "Z.png").write_bytes(b"")

        assert main(["next", str(image_folder), "--log", str(log_path)]) == 0

        assert calls == [(locale.LC_COLLATE, "")]
        assert capsys.readouterr().out.strip() == str(image_folder / "a.png")

    def test_unknown_locale_still_runs(self, image_folder, log_path, monkeypatch, capsys):
        def refuse(category, value=None):
            raise locale.Error("unsupported locale setting")

        monkeypatch.setattr(locale, "setlocale", refuse)
        assert main(["next", str(image_folder), "--log", str(log_path)]) == 0
        assert capsys.readouterr().out.strip().endswith("a.png")

    def test_default_log_from_config(self, tmp_path, image_folder, capsys):
        (tmp_path / ".conceptmapper.toml").write_text(
            '[export]\nlog = "mine.csv"\n', encoding="utf-8"
        )
        append_row(tmp_path / "mine.csv", make_row("a.png"))
        assert main(["next", str(image_folder)]) == 0
        assert capsys.readouterr().out.strip().endswith("b.png")


class TestCheckCommand:
    def test_not_logged(self, log_path, capsys):
        assert main(["check", "images/a.png", "--log", str(log_path)]) == 0
        assert "not logged" in capsys.readouterr().out

    def test_logged(self, log_path, capsys):
        append_row(log_path, make_row("a.png"))
        assert main(["check", "elsewhere/a.png", "--log", str(log_path)]) == 1
        assert "already logged" in capsys.readouterr().out


class TestSummaryCommand:
    def test_table(self, log_path, capsys):
        append_row(log_path, make_row("a.png", hss=3))
        append_row(log_path, make_row("b,c.png", hss=5))
        assert main(["summary", "--log", str(log_path)]) == 0
        out = capsys.readouterr().out
        assert "b,c.png" in out
        assert "2 image(s), mean HSS 4.00" in out

    def test_json(self, log_path, capsys):
        append_row(log_path, make_row("a.png", questions=4))
        assert main(["summary", "--log", str(log_path), "-j"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data[0]["Image"] == "a.png"
        assert data[0]["Questions"] == 4
        assert data[0]["PriorKnowledge"] is None

    def test_missing_log(self, log_path, capsys):
        assert main(["summary", "--log", str(log_path)]) == 1
        assert "not found" in capsys.readouterr().err


class TestRecordCommand:
    def test_records_map(self, tmp_path, log_path, capsys):
        map_file = tmp_path / "map.toml"
        map_file.write_text(MAP_TOML, encoding="utf-8")

        result = main(
            ["record", str(map_file), "img/a.png", "--log", str(log_path), "--questions", "2"]
        )

        assert result == 0
        rows = read_log(log_path)
        assert len(rows) == 1
        assert (rows[0].image, rows[0].hss, rows[0].max_crosslink_dist) == ("a.png", 4, 3)
        assert rows[0].questions == 2
        assert "HSS=4" in capsys.readouterr().out

    def test_refuses_duplicate(self, tmp_path, log_path, capsys):
        map_file = tmp_path / "map.toml"
        map_file.write_text(MAP_TOML, encoding="utf-8")
        append_row(log_path, make_row("a.png"))

        assert main(["record", str(map_file), "a.png", "--log", str(log_path)]) == 1
        assert "--force" in capsys.readouterr().err
        assert main(["record", str(map_file), "a.png", "--log", str(log_path), "--force"]) == 0
        assert len(read_log(log_path)) == 2

    def test_bad_map_reports_error(self, tmp_path, log_path, capsys):
        map_file = tmp_path / "map.toml"
        map_file.write_text('root = "R"\nedges = [["X", "Y"]]\n', encoding="utf-8")
        assert main(["record", str(map_file), "a.png", "--log", str(log_path)]) == 1
        assert capsys.readouterr().err.startswith("Error:")
        assert not log_path.exists()

    def test_verbose_reraises(self, tmp_path, log_path):
        from conceptmapper.errors import InvalidStateError

        map_file = tmp_path / "map.toml"
        map_file.write_text('root = "R"\nedges = [["X", "Y"]]\n', encoding="utf-8")
        with pytest.raises(InvalidStateError):
            main(["-v", "record", str(map_file), "a.png", "--log", str(log_path)])
