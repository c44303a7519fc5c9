# journals/tests/test_fiscal_year.py

from datetime import date
from types import SimpleNamespace

from django.test import SimpleTestCase, override_settings

from journals.services.exceptions import EmptySelectionError, UnfulfilledRecordError
from journals.services.fiscal_year import fiscal_year_window, spans_fiscal_years
from journals.tests.utils import aware


def _detail(fulfilled_at):
    return SimpleNamespace(pk=1, fulfilled_at=fulfilled_at)


class FiscalYearWindowTests(SimpleTestCase):
    def test_window_after_boundary(self):
        self.assertEqual(
            fiscal_year_window(date(2023, 10, 15)),
            (date(2023, 9, 1), date(2024, 9, 1)),
        )

    def test_window_before_boundary(self):
        self.assertEqual(
            fiscal_year_window(date(2023, 8, 15)),
            (date(2022, 9, 1), date(2023, 9, 1)),
        )

    def test_boundary_day_starts_the_new_year(self):
        start, end = fiscal_year_window(aware(2023, 9, 1, 0))
        self.assertEqual(start, date(2023, 9, 1))
        self.assertEqual(end, date(2024, 9, 1))

    @override_settings(FISCAL_YEAR_START_MONTH=7)
    def test_boundary_month_is_configurable(self):
        self.assertEqual(
            fiscal_year_window(date(2023, 6, 30)),
            (date(2022, 7, 1), date(2023, 7, 1)),
        )


class SpansFiscalYearsTests(SimpleTestCase):
    def test_same_fiscal_year(self):
        details = [_detail(aware(2023, 10, 15)), _detail(aware(2023, 12, 1))]
        self.assertFalse(spans_fiscal_years(details))

    def test_crossing_the_boundary(self):
        details = [_detail(aware(2023, 8, 15)), _detail(aware(2023, 10, 1))]
        self.assertTrue(spans_fiscal_years(details))

    def test_earlier_detail_after_the_first_one(self):
        details = [_detail(aware(2023, 10, 1)), _detail(aware(2023, 8, 31))]
        self.assertTrue(spans_fiscal_years(details))

    def test_single_detail(self):
        self.assertFalse(spans_fiscal_years([_detail(aware(2024, 2, 29))]))

    def test_empty_selection(self):
        with self.assertRaises(EmptySelectionError):
            spans_fiscal_years([])

    def test_unfulfilled_detail(self):
        details = [_detail(aware(2023, 10, 15)), _detail(None)]
        with self.assertRaises(UnfulfilledRecordError):
            spans_fiscal_years(details)
