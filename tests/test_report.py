import io

import pytest
import yaml

from typestats.aggregate import aggregate
from typestats.descriptors import StaticType
from typestats.errors import SinkWriteError
from typestats.report import (
    REPORT_LABELS,
    build_report_document,
    build_report_lines,
    dump_yaml,
    print_lines,
    write_lines,
    write_yaml,
)


@pytest.fixture
def stats():
    base = StaticType("Base", fields={"x"})
    child = StaticType("Child", methods={"go"}, superclass=base)
    return aggregate([base, child])


class TestReportLines:
    def test_six_labelled_lines(self, stats):
        lines = build_report_lines(stats, 5)

        assert [line.split(":", 1)[0] for line in lines] == list(REPORT_LABELS)
        assert lines == [
            "1a: Base (1 occurrences), Child (0 occurrences)",
            "1b: Base (1 occurrences), Child (1 occurrences)",
            "2a: Child (1 occurrences), Base (0 occurrences)",
            "2b: Child (1 occurrences), Base (0 occurrences)",
            "3: Base (1 occurrences)",
            "4: Child (1 occurrences), Base (0 occurrences)",
        ]

    def test_zero_limit_gives_bare_labels(self, stats):
        assert build_report_lines(stats, 0) == ["1a: ", "1b: ", "2a: ", "2b: ", "3: ", "4: "]

    def test_same_input_same_lines(self, stats):
        assert build_report_lines(stats, 3) == build_report_lines(stats, 3)


class TestReportDocument:
    def test_structure(self, stats):
        doc = build_report_document(stats, 1, source="name_list", input_path="in.txt")

        assert doc["meta"]["limit"] == 1
        assert doc["meta"]["types_analyzed"] == 2
        assert doc["meta"]["source"] == "name_list"
        assert doc["meta"]["generated_at"].endswith("Z")
        assert [m["label"] for m in doc["metrics"]] == list(REPORT_LABELS)
        assert doc["metrics"][4]["entries"] == [{"name": "Base", "count": 1}]


class TestSinks:
    def test_write_lines_creates_parent_dirs(self, tmp_path, stats):
        out = tmp_path / "resources" / "output.txt"
        written = write_lines(build_report_lines(stats, 2), out)

        assert written == out.resolve()
        content = out.read_text(encoding="utf-8").splitlines()
        assert len(content) == 6
        assert content[4] == "3: Base (1 occurrences)"

    def test_write_lines_failure(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(SinkWriteError):
            write_lines(["1a: "], blocker / "nested" / "out.txt")

    def test_write_yaml_round_trips(self, tmp_path, stats):
        doc = build_report_document(stats, 2, source="runtime")
        out = tmp_path / "report.yaml"
        write_yaml(doc, out)

        loaded = yaml.safe_load(out.read_text(encoding="utf-8"))
        assert loaded["meta"]["source"] == "runtime"
        assert loaded["metrics"][0]["title"] == "Declared fields"

    def test_stream_sinks(self, stats):
        buf = io.StringIO()
        print_lines(["1a: a", "1b: b"], buf)
        assert buf.getvalue() == "1a: a\n1b: b\n"

        buf = io.StringIO()
        dump_yaml(build_report_document(stats, 1, source="runtime"), buf)
        assert "metrics:" in buf.getvalue()
