"""Tests for the CSV metrics log."""

from pathlib import Path

import pytest

from conceptmapper.errors import NotReadyError
from conceptmapper.export.log import (
    HEADER,
    append_row,
    export,
    first_column,
    format_row,
    image_already_logged,
    read_log,
    read_logged_images,
)
from conceptmapper.graph import GraphModel, Point
from tests.log_test_helpers import HEADER_LINE, make_row


class TestExport:
    def test_writes_header_then_row(self, completable, log_path):
        model, _ = completable
        model.set_annotations(prior_knowledge=3, questions=0)

        row = export(model)

        lines = log_path.read_text(encoding="utf-8").splitlines()
        assert lines == [HEADER_LINE, "a.png,4,3,2,2,4,2,1,1,3,3,0"]
        assert row.image == "a.png"
        assert row.hss == 4

    def test_header_matches_constant(self):
        assert ",".join(HEADER) == HEADER_LINE

    def test_header_written_once(self, completable, log_path):
        model, _ = completable
        export(model)
        export(model)
        lines = log_path.read_text(encoding="utf-8").splitlines()
        assert lines.count(HEADER_LINE) == 1
        assert len(lines) == 3

    def test_blank_annotations(self, completable, log_path):
        model, _ = completable
        export(model)
        last = log_path.read_text(encoding="utf-8").splitlines()[-1]
        assert last.endswith(",3,,")

    def test_not_completable_raises(self, log_path):
        model = GraphModel(output_path=log_path)
        model.add_node_at(Point(0, 0))
        with pytest.raises(NotReadyError):
            export(model)
        assert not log_path.exists()

    def test_empty_graph_not_completable(self, tmp_path, log_path):
        model = GraphModel(image_path=tmp_path / "a.png", output_path=log_path)
        with pytest.raises(NotReadyError):
            export(model)

    def test_comma_in_name_is_quoted(self, completable, tmp_path, log_path):
        model, _ = completable
        model.image_path = tmp_path / "b,c.png"
        export(model)
        last = log_path.read_text(encoding="utf-8").splitlines()[-1]
        assert last.startswith('"b,c.png",4,')

    def test_repairs_missing_trailing_newline(self, completable, log_path):
        log_path.write_text(HEADER_LINE + "\nold.png,1,0,1,0,1,0,0,0,0,,", encoding="utf-8")
        model, _ = completable
        export(model)
        lines = log_path.read_text(encoding="utf-8").splitlines()
        assert lines[1] == "old.png,1,0,1,0,1,0,0,0,0,,"
        assert lines[2].startswith("a.png,")
        assert len(lines) == 3

    def test_existing_file_with_newline_not_padded(self, completable, log_path):
        log_path.write_text(HEADER_LINE + "\n", encoding="utf-8")
        model, _ = completable
        export(model)
        lines = log_path.read_text(encoding="utf-8").splitlines()
        assert lines == [HEADER_LINE, "a.png,4,3,2,2,4,2,1,1,3,,"]

    def test_empty_existing_file_gets_header(self, completable, log_path):
        log_path.touch()
        model, _ = completable
        export(model)
        assert log_path.read_text(encoding="utf-8").splitlines()[0] == HEADER_LINE

    def test_missing_folder_propagates_os_error(self, scenario, tmp_path):
        model, _ = scenario
        model.image_path = tmp_path / "a.png"
        model.output_path = tmp_path / "missing" / "log.csv"
        with pytest.raises(OSError):
            export(model)

    def test_snapshot_written(self, completable):
        from PIL import Image

        model, _ = completable
        export(model, Image.new("RGB", (8, 8), "white"))

        expected = Path(model.image_path).parent / "ConceptMapperScreenshots" / "a_nodes.png"
        assert expected.exists()
        with Image.open(expected) as img:
            assert img.format == "PNG"
            assert img.size == (8, 8)


class TestRoundTrip:
    def test_comma_name_survives(self, log_path):
        append_row(log_path, make_row("a.png"))
        append_row(log_path, make_row("b,c.png", num_nodes=7, questions=2))

        rows = read_log(log_path)

        assert [r.image for r in rows] == ["a.png", "b,c.png"]
        assert rows[1].num_nodes == 7
        assert rows[1].questions == 2
        assert rows[0].prior_knowledge is None
        assert read_logged_images(log_path) == {"a.png", "b,c.png"}


class TestImageQuoting:
    def test_quote_without_comma_written_bare(self, log_path):
        append_row(log_path, make_row('a"b.png'))
        last = log_path.read_text(encoding="utf-8").splitlines()[-1]
        assert last == 'a"b.png,1,0,1,0,1,0,0,0,0,,'
        assert image_already_logged(log_path, 'a"b.png')

    def test_comma_and_quote_doubled_inside_quotes(self, log_path):
        append_row(log_path, make_row('b,"c".png'))
        last = log_path.read_text(encoding="utf-8").splitlines()[-1]
        assert last.startswith('"b,""c"".png",1,')
        assert [r.image for r in read_log(log_path)] == ['b,"c".png']

    def test_leading_quote_is_quoted(self, log_path):
        append_row(log_path, make_row('"x.png'))
        assert image_already_logged(log_path, '"x.png')
        assert read_logged_images(log_path) == {'"x.png'}

    def test_format_row_blanks_unset_annotations(self):
        assert format_row(make_row("a.png", questions=2)) == "a.png,1,0,1,0,1,0,0,0,0,,2"


class TestFirstColumn:
    @pytest.mark.parametrize(
        "line,expected",
        [
            ("a.png,1,2", "a.png"),
            ('"b,c.png",1,2', "b,c.png"),
            ("solo", "solo"),
            (",1,2", ""),
        ],
    )
    def test_quote_aware(self, line, expected):
        assert first_column(line) == expected


class TestImageAlreadyLogged:
    def test_missing_log(self, log_path):
        assert not image_already_logged(log_path, "a.png")

    def test_unset_log(self):
        assert not image_already_logged(None, "a.png")

    def test_found_and_not_found(self, log_path):
        append_row(log_path, make_row("a.png"))
        append_row(log_path, make_row("b,c.png"))
        assert image_already_logged(log_path, "a.png")
        assert image_already_logged(log_path, "b,c.png")
        assert not image_already_logged(log_path, "b")
        assert not image_already_logged(log_path, "c.png")

    def test_skips_blank_lines(self, log_path):
        log_path.write_text(HEADER_LINE + "\n\n\nx.png,1,0,1,0,1,0,0,0,0,,\n", encoding="utf-8")
        assert image_already_logged(log_path, "x.png")


class TestReadLoggedImages:
    def test_header_skipped(self, log_path):
        append_row(log_path, make_row("a.png"))
        assert read_logged_images(log_path) == {"a.png"}

    def test_header_only(self, log_path):
        log_path.write_text(HEADER_LINE + "\n", encoding="utf-8")
        assert read_logged_images(log_path) == set()
