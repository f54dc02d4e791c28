"""Tests for line diff reporting (debug aid)."""

import logging

import pytest

from langreload.diagnostics.reporting import (
    ChangeReport,
    DiffLine,
    DiffLineKind,
    LineDiffReporter,
    diff_lines,
)


class TestDiffLines:
    """Test numbered line diffs."""

    def test_replaced_line(self) -> None:
        lines = diff_lines("a\nb\n", "a\nc\n")
        assert [str(line) for line in lines] == ["- line 2: b", "+ line 2: c"]

    def test_inserted_line_numbered_in_new_text(self) -> None:
        assert diff_lines("a\nb", "a\nx\nb") == (DiffLine(DiffLineKind.ADDED, 2, "x"),)

    def test_deleted_line_numbered_in_old_text(self) -> None:
        assert diff_lines("a\nx\nb", "a\nb") == (DiffLine(DiffLineKind.REMOVED, 2, "x"),)

    def test_identical_text(self) -> None:
        assert diff_lines("a\nb\n", "a\nb\n") == ()

    def test_trailing_newline_only_is_not_a_line_change(self) -> None:
        assert diff_lines("a", "a\n") == ()


class TestChangeReport:
    """Test the report container."""

    def test_added_and_removed(self) -> None:
        report = ChangeReport("en_UK", diff_lines("a\nb\n", "a\nc\nd\n"))

        assert [line.text for line in report.added] == ["c", "d"]
        assert [line.text for line in report.removed] == ["b"]
        assert not report.is_empty

    def test_empty(self) -> None:
        assert ChangeReport("en_UK", ()).is_empty


class TestLineDiffReporter:
    """Test logging of change reports."""

    def test_logs_additions_at_info_and_removals_at_error(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        reporter = LineDiffReporter()

        with caplog.at_level(logging.INFO, logger="langreload.diagnostics.reporting"):
            reporter.report("en_UK", "greeting: Hi\n", "greeting: Hello\n")

        messages = [(record.levelno, record.getMessage()) for record in caplog.records]
        assert (logging.INFO, 'Changes detected in "en_UK":') in messages
        assert (logging.ERROR, "- line 1: greeting: Hi") in messages
        assert (logging.INFO, "+ line 1: greeting: Hello") in messages

    def test_line_limit(self, caplog: pytest.LogCaptureFixture) -> None:
        reporter = LineDiffReporter(line_limit=1)

        with caplog.at_level(logging.INFO, logger="langreload.diagnostics.reporting"):
            reporter.report("en_UK", "a\nb\n", "c\nd\n")

        messages = [record.getMessage() for record in caplog.records]
        assert "- line 1: a" in messages
        assert "- line 2: b" not in messages
        assert "... 3 more changed line(s) not shown" in messages

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        custom = logging.getLogger("host.i18n")
        reporter = LineDiffReporter(log=custom)

        with caplog.at_level(logging.INFO, logger="host.i18n"):
            reporter.report("en_UK", "", "new\n")

        assert any(record.name == "host.i18n" for record in caplog.records)

    def test_build_does_not_log(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG):
            report = LineDiffReporter().build("en_UK", "a\n", "b\n")

        assert len(report.lines) == 2
        assert caplog.records == []
