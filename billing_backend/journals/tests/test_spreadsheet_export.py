# journals/tests/test_spreadsheet_export.py

import os
import shutil
import tempfile

from django.test import TestCase, override_settings
from openpyxl import load_workbook

from journals.models import Journal
from journals.services.exceptions import ExportUnavailableError
from journals.services.journal_service import create_journal
from journals.services.spreadsheet_export import (
    add_spreadsheet,
    create_spreadsheet,
    render_journal_rows,
)
from journals.tests.utils import (
    make_facility,
    make_funding_account,
    make_order_detail,
    make_product,
    make_user,
)


def _partition(pk: int) -> str:
    padded = f"{pk:09d}"
    return f"{padded[0:3]}/{padded[3:6]}/{padded[6:9]}"


class SpreadsheetExportTests(TestCase):
    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)
        media = override_settings(MEDIA_ROOT=self.media_root)
        media.enable()
        self.addCleanup(media.disable)

        self.user = make_user()
        self.facility = make_facility()
        self.product = make_product(self.facility)
        self.account = make_funding_account()

    def _journal(self, facility="scoped"):
        details = [
            make_order_detail(self.product, self.account, user=self.user, total="40.00"),
            make_order_detail(self.product, self.account, user=self.user, total="60.00"),
        ]
        return create_journal(
            order_details=details,
            facility=self.facility if facility == "scoped" else None,
            created_by=self.user,
        )

    def test_journal_without_rows_is_not_exported(self):
        journal = Journal.objects.create(facility=self.facility, created_by=self.user)

        self.assertFalse(create_spreadsheet(journal))
        journal.refresh_from_db()
        self.assertFalse(journal.file)

    def test_render_requires_rows(self):
        with self.assertRaises(ExportUnavailableError):
            render_journal_rows([])

    def test_spreadsheet_is_attached(self):
        journal = self._journal()

        self.assertTrue(create_spreadsheet(journal))

        journal.refresh_from_db()
        prefix = f"journals/facility-{self.facility.pk}/{_partition(journal.pk)}/original/"
        self.assertTrue(journal.file.name.startswith(prefix))
        self.assertTrue(journal.file.name.endswith(".xlsx"))
        self.assertIn(f"journal.spreadsheet.{journal.pk}.", journal.file.name)

        wb = load_workbook(journal.file.path)
        ws = wb.active
        values = list(ws.iter_rows(values_only=True))
        self.assertEqual(values[0], ("Account", "Amount", "Description", "Order Detail"))
        self.assertEqual(len(values), 1 + journal.journal_rows.count())
        self.assertEqual([row[0] for row in values[1:]], ["FA-1000", "FA-1000", "REV-100"])

    def test_multi_facility_journal_path(self):
        journal = self._journal(facility=None)

        self.assertTrue(create_spreadsheet(journal))

        journal.refresh_from_db()
        self.assertTrue(
            journal.file.name.startswith(f"journals/multi/{_partition(journal.pk)}/original/")
        )

    def test_missing_source_file(self):
        journal = self._journal()
        missing = os.path.join(self.media_root, "does-not-exist.xlsx")

        self.assertFalse(add_spreadsheet(journal, missing))
        journal.refresh_from_db()
        self.assertFalse(journal.file)

    def test_existing_file_is_attached_under_its_name(self):
        journal = self._journal()
        source = os.path.join(self.media_root, "upload.xlsx")
        with open(source, "wb") as fh:
            fh.write(render_journal_rows(journal.journal_rows.all()))

        self.assertTrue(add_spreadsheet(journal, source))

        journal.refresh_from_db()
        self.assertTrue(journal.file.name.endswith("/original/upload.xlsx"))
