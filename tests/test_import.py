"""
StudentDir Batch Import Tests
=============================
Per-row outcomes, skip reasons, tags column, header handling and the
file entry point.
"""

import logging
import os
import shutil
import tempfile

import pytest

from directory import StudentDirectory
from ingest import RowStatus, import_file, import_rows


@pytest.fixture
def tmpdir():
    d = tempfile.mkdtemp(prefix="studentdir_import_")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def d():
    return StudentDirectory()


class TestImportRows:

    def test_valid_rows(self, d):
        report = import_rows(d, ["1001,Alice,3.75", "1002,Bob,3.50"])
        assert report.imported == 2
        assert report.skipped == 0
        assert d.count() == 2
        assert d.find_by_id("1002").ipk == 3.5

    def test_skip_reasons(self, d):
        lines = [
            "1001,Alice,3.75",
            "1002,Bob",              # too few fields
            "1003,Charlie,abc",      # bad IPK
            "1001,Again,3.00",       # duplicate
            ",NoNim,3.0",            # empty nim
            "1004,Dina,nan",         # NaN is not an IPK
            "1005,Eko,3.20",
        ]
        report = import_rows(d, lines)
        assert report.imported == 2
        assert [o.line_no for o in report.skipped_by(RowStatus.MALFORMED_LINE)] == [2, 5]
        assert [o.line_no for o in report.skipped_by(RowStatus.MALFORMED_RANKING)] == [3, 6]
        [dup] = report.skipped_by(RowStatus.DUPLICATE_ID)
        assert dup.nim == "1001" and dup.line_no == 4
        assert d.find_by_id("1001").name == "Alice"
        assert d.count() == 2

    def test_blank_and_comment_lines_ignored(self, d):
        report = import_rows(d, ["# nim,name,ipk", "", "   ", "1001,Alice,3.75"])
        assert len(report.outcomes) == 1
        assert report.outcomes[0].line_no == 4

    def test_header_skipped(self, d):
        report = import_rows(d, ["nim,name,ipk", "1001,Alice,3.75"], has_header=True)
        assert report.imported == 1
        assert report.skipped == 0

    def test_quoted_name_and_tags(self, d):
        report = import_rows(d, ['1001,"Putri, Ayu",3.8,chess; robotics;chess'])
        assert report.imported == 1
        student = d.find_by_id("1001")
        assert student.name == "Putri, Ayu"
        assert student.tags == ["chess", "robotics"]

    def test_custom_delimiter(self, d):
        report = import_rows(d, ["1001;Alice;3.75"], delimiter=";")
        assert report.imported == 1

    def test_summary(self, d):
        report = import_rows(d, ["1001,A,3.0", "1001,B,3.0", "x"], source="batch.csv")
        assert report.summary() == (
            "Imported 1 student(s) from batch.csv, "
            "skipped 2 (1 malformed_line, 1 duplicate_id)."
        )

    def test_skips_are_logged(self, d, caplog):
        with caplog.at_level(logging.WARNING, logger="ingest.csv_import"):
            import_rows(d, ["1001,Alice,oops"])
        assert "malformed_ranking" in caplog.text


class TestImportFile:

    def test_import_file(self, d, tmpdir):
        path = os.path.join(tmpdir, "students.csv")
        with open(path, "w", encoding="utf-8") as f:
            f.write("nim,name,ipk\n1001,Alice,3.75\n1002,Bob,3.50\n1003,Charlie,3.75\n")

        report = import_file(d, path, has_header=True)
        assert report.imported == 3
        assert report.source == path
        assert [s.name for s in d.find_by_ranking(3.75)] == ["Alice", "Charlie"]

    def test_missing_file(self, d, tmpdir):
        with pytest.raises(FileNotFoundError):
            import_file(d, os.path.join(tmpdir, "missing.csv"))
