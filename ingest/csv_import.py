"""
StudentDir Batch Import
=======================
Loads students from delimited text into a StudentDirectory, one
insert_record call per valid row.

Row format:
    nim,name,ipk[,tag1;tag2;...]

  - blank lines and lines starting with '#' are ignored
  - optional header row (has_header=True) is skipped
  - every other row gets a RowOutcome: imported, malformed_line,
    malformed_ranking or duplicate_id

The directory itself reports only True/False; the reasons are tracked
here and logged as warnings.
"""

import csv
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from config import COMMENT_PREFIX, DEFAULT_DELIMITER, TAG_SEPARATOR
from directory.student_directory import StudentDirectory

logger = logging.getLogger(__name__)


class RowStatus(Enum):
    IMPORTED = "imported"
    MALFORMED_LINE = "malformed_line"
    MALFORMED_RANKING = "malformed_ranking"
    DUPLICATE_ID = "duplicate_id"


@dataclass
class RowOutcome:
    """Result of importing one source line."""
    line_no: int
    nim: Optional[str]
    status: RowStatus
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is RowStatus.IMPORTED


@dataclass
class ImportReport:
    """Per-row outcomes for one import run."""
    source: str = "<rows>"
    outcomes: List[RowOutcome] = field(default_factory=list)

    @property
    def imported(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    def skipped_by(self, status: RowStatus) -> List[RowOutcome]:
        return [o for o in self.outcomes if o.status is status]

    def summary(self) -> str:
        parts = [f"Imported {self.imported} student(s) from {self.source}"]
        if self.skipped:
            reasons = []
            for status in RowStatus:
                if status is RowStatus.IMPORTED:
                    continue
                n = len(self.skipped_by(status))
                if n:
                    reasons.append(f"{n} {status.value}")
            parts.append(f"skipped {self.skipped} ({', '.join(reasons)})")
        return ", ".join(parts) + "."


def _parse_ipk(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value):
        return None
    return value


def import_rows(directory: StudentDirectory, lines: Iterable[str], *,
                delimiter: str = DEFAULT_DELIMITER, has_header: bool = False,
                source: str = "<rows>") -> ImportReport:
    """Import already-read text lines. Line numbers start at 1."""
    report = ImportReport(source=source)
    header_pending = has_header

    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        if header_pending:
            header_pending = False
            continue

        fields = [f.strip() for f in next(csv.reader([stripped], delimiter=delimiter))]
        outcome = _import_fields(directory, line_no, fields)
        if not outcome.ok:
            logger.warning("%s line %d skipped (%s): %s",
                           source, line_no, outcome.status.value, outcome.detail)
        report.outcomes.append(outcome)

    logger.info(report.summary())
    return report


def _import_fields(directory: StudentDirectory, line_no: int,
                   fields: List[str]) -> RowOutcome:
    if len(fields) < 3 or not fields[0] or not fields[1]:
        return RowOutcome(line_no, fields[0] if fields else None,
                          RowStatus.MALFORMED_LINE,
                          f"expected nim, name, ipk; got {len(fields)} field(s)")

    nim, name, raw_ipk = fields[0], fields[1], fields[2]
    ipk = _parse_ipk(raw_ipk)
    if ipk is None:
        return RowOutcome(line_no, nim, RowStatus.MALFORMED_RANKING,
                          f"invalid IPK {raw_ipk!r}")

    tags: List[str] = []
    if len(fields) > 3 and fields[3]:
        tags = [t.strip() for t in fields[3].split(TAG_SEPARATOR) if t.strip()]

    if not directory.insert_record(nim, name, ipk, tags):
        return RowOutcome(line_no, nim, RowStatus.DUPLICATE_ID,
                          f"NIM {nim} already exists")
    return RowOutcome(line_no, nim, RowStatus.IMPORTED)


def import_file(directory: StudentDirectory, path: str, *,
                delimiter: str = DEFAULT_DELIMITER,
                has_header: bool = False) -> ImportReport:
    """Import a delimited text file. Raises FileNotFoundError if missing."""
    logger.info("Importing students from %s", path)
    with open(path, "r", encoding="utf-8", newline="") as f:
        return import_rows(directory, f, delimiter=delimiter,
                           has_header=has_header, source=path)
