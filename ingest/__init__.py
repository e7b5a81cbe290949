"""
StudentDir Ingest Package
=========================
Batch import of delimited student rows.

Usage:
    from ingest import import_file, import_rows, ImportReport, RowStatus
"""

from ingest.csv_import import (
    ImportReport, RowOutcome, RowStatus, import_file, import_rows,
)

__all__ = ["ImportReport", "RowOutcome", "RowStatus", "import_file", "import_rows"]
