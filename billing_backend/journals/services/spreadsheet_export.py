# journals/services/spreadsheet_export.py

"""
======================================================
PATH: journals/services/spreadsheet_export.py
======================================================
JOURNAL SPREADSHEET EXPORT

Renders journal rows to an .xlsx workbook (openpyxl) and attaches it to
the journal through Django's file storage.

Expected, recoverable outcomes return False instead of raising:
- journal has no rows
- source file missing at attach time
"""

from __future__ import annotations

import io
import logging
import os
import tempfile

from django.core.files import File
from django.utils import timezone
from openpyxl import Workbook
from openpyxl.styles import Font

from journals.models import Journal
from journals.services.exceptions import ExportUnavailableError

logger = logging.getLogger(__name__)

COLUMNS = [
    ("Account", 20),
    ("Amount", 14),
    ("Description", 80),
    ("Order Detail", 16),
]


def render_journal_rows(rows) -> bytes:
    rows = list(rows)
    if not rows:
        raise ExportUnavailableError("Journal has no rows to export")

    wb = Workbook()
    ws = wb.active
    ws.title = "Journal"

    ws.append([header for header, _ in COLUMNS])
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for idx, (_, width) in enumerate(COLUMNS, start=1):
        ws.column_dimensions[ws.cell(row=1, column=idx).column_letter].width = width

    for row in rows:
        ws.append(
            [
                row.account,
                row.amount,
                row.description,
                str(row.order_detail) if row.order_detail_id else "",
            ]
        )
        ws.cell(row=ws.max_row, column=2).number_format = "#,##0.00"

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def add_spreadsheet(journal: Journal, file_path: str, *, name: str | None = None) -> bool:
    if not os.path.exists(file_path):
        logger.warning(
            "Journal spreadsheet source file missing",
            extra={"journal_id": journal.pk, "file_path": file_path},
        )
        return False

    with open(file_path, "rb") as fh:
        journal.file.save(name or os.path.basename(file_path), File(fh), save=True)

    logger.info(
        "Journal spreadsheet attached",
        extra={"journal_id": journal.pk, "file": journal.file.name},
    )
    return True


def create_spreadsheet(journal: Journal) -> bool:
    rows = journal.journal_rows.select_related("order_detail").order_by("id")

    try:
        content = render_journal_rows(rows)
    except ExportUnavailableError as exc:
        logger.warning(
            "Journal spreadsheet not created",
            extra={"journal_id": journal.pk, "reason": str(exc)},
        )
        return False

    stamp = timezone.now().strftime("%Y%m%dT%H%M%S")
    fd, temp_path = tempfile.mkstemp(prefix="journal.spreadsheet.", suffix=".xlsx")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
        return add_spreadsheet(
            journal,
            temp_path,
            name=f"journal.spreadsheet.{journal.pk}.{stamp}.xlsx",
        )
    finally:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
