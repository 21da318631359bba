"""Spreadsheet export of the records a run reported."""

from __future__ import annotations

import logging
from pathlib import Path

from openpyxl import Workbook

from .models import RunSummary

logger = logging.getLogger(__name__)

HEADERS = ["change", "case_number", "address", "details", "url", "checksum"]


def export_diff_to_xlsx(summary: RunSummary, path: Path) -> Path:
    """Write added and changed records of ``summary`` to an xlsx workbook."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "changes"
    worksheet.append(HEADERS)

    for change, records in (("added", summary.diff.added),
                            ("changed", summary.diff.changed)):
        for record in records:
            details = getattr(record, "details", ())
            worksheet.append([
                change,
                record.identity,
                getattr(record, "address", ""),
                " | ".join(value for value in details if value),
                getattr(record, "url", ""),
                # Excel cannot hold 64-bit integers exactly.
                str(record.checksum),
            ])

    workbook.save(path)
    logger.info("Exported %d changed records to %s",
                summary.added_count + summary.changed_count, path)
    return path


def export_filename(summary: RunSummary) -> str:
    timestamp = (summary.executed_at.split("+")[0].replace(":", "-").replace(
        ".", "-").replace("T", "_"))
    return f"changes_{timestamp}.xlsx"
