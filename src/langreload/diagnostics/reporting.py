"""Line diff reporting for changed language files.

Debug aid only: when a loader runs with ``debug=True`` the reporter logs which
lines of a language file were added or removed by an edit. Nothing in the
reload pipeline depends on the report.

Python 3.13+.
"""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from langreload.localization.types import LocaleCode

__all__ = [
    "ChangeReport",
    "ChangeReporter",
    "DiffLine",
    "DiffLineKind",
    "LineDiffReporter",
    "diff_lines",
]

logger = logging.getLogger(__name__)


class DiffLineKind(StrEnum):
    """Whether a diff line was added or removed."""

    ADDED = "+"
    REMOVED = "-"


@dataclass(frozen=True, slots=True)
class DiffLine:
    """One added or removed line.

    Attributes:
        kind: ADDED or REMOVED
        line_number: 1-indexed line number in the new text (added) or the
            old text (removed)
        text: Line content without trailing newline
    """

    kind: DiffLineKind
    line_number: int
    text: str

    def __str__(self) -> str:
        return f"{self.kind} line {self.line_number}: {self.text}"


@dataclass(frozen=True, slots=True)
class ChangeReport:
    """Additions and removals between two versions of a language file."""

    code: LocaleCode
    lines: tuple[DiffLine, ...]

    @property
    def added(self) -> tuple[DiffLine, ...]:
        """Added lines only."""
        return tuple(line for line in self.lines if line.kind is DiffLineKind.ADDED)

    @property
    def removed(self) -> tuple[DiffLine, ...]:
        """Removed lines only."""
        return tuple(line for line in self.lines if line.kind is DiffLineKind.REMOVED)

    @property
    def is_empty(self) -> bool:
        """True if the texts differ only outside line content (or not at all)."""
        return not self.lines


def diff_lines(old_text: str, new_text: str) -> tuple[DiffLine, ...]:
    """Compute added/removed lines with their line numbers.

    Removed lines are numbered by their position in ``old_text``, added
    lines by their position in ``new_text``; unchanged lines advance both
    counters.

    Example:
        >>> [str(line) for line in diff_lines("a\\nb\\n", "a\\nc\\n")]
        ['- line 2: b', '+ line 2: c']
    """
    old_lines = old_text.splitlines()
    new_lines = new_text.splitlines()
    matcher = difflib.SequenceMatcher(a=old_lines, b=new_lines, autojunk=False)

    result: list[DiffLine] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        match tag:
            case "equal":
                continue
            case "delete" | "replace" | "insert":
                result.extend(
                    DiffLine(DiffLineKind.REMOVED, i + 1, old_lines[i]) for i in range(i1, i2)
                )
                result.extend(
                    DiffLine(DiffLineKind.ADDED, j + 1, new_lines[j]) for j in range(j1, j2)
                )
    return tuple(result)


class ChangeReporter(Protocol):
    """Protocol for objects notified about changed language file content.

    Injected into LanguageLoader; called after a changed file was parsed
    successfully, before the store entry is replaced.
    """

    def report(self, code: LocaleCode, old_text: str, new_text: str) -> None:
        """Report the change of ``code`` from ``old_text`` to ``new_text``."""


@dataclass(frozen=True, slots=True)
class LineDiffReporter:
    """ChangeReporter that logs a numbered line diff.

    Added lines are logged at INFO, removed lines at ERROR, matching the
    colour convention of terminal diff output.

    Attributes:
        line_limit: Maximum number of diff lines logged per change
            (None logs everything)
        log: Logger receiving the report
    """

    line_limit: int | None = None
    log: logging.Logger = logger

    def build(self, code: LocaleCode, old_text: str, new_text: str) -> ChangeReport:
        """Build the report without logging it."""
        return ChangeReport(code=code, lines=diff_lines(old_text, new_text))

    def report(self, code: LocaleCode, old_text: str, new_text: str) -> None:
        report = self.build(code, old_text, new_text)
        self.log.info('Changes detected in "%s":', code)
        shown = report.lines if self.line_limit is None else report.lines[: self.line_limit]
        for line in shown:
            if line.kind is DiffLineKind.ADDED:
                self.log.info("%s", line)
            else:
                self.log.error("%s", line)
        hidden = len(report.lines) - len(shown)
        if hidden > 0:
            self.log.info("... %d more changed line(s) not shown", hidden)
