"""
Tests for calendar-month arithmetic.
"""

from datetime import date

from bloom.engines.dates import add_months, age_in_months, months_between, trailing_window_start


class TestAddMonths:

    def test_simple(self):
        assert add_months(date(2024, 1, 15), 1) == date(2024, 2, 15)

    def test_clamps_to_month_end(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_crosses_year(self):
        assert add_months(date(2024, 11, 30), 3) == date(2025, 2, 28)

    def test_negative(self):
        assert add_months(date(2024, 3, 1), -3) == date(2023, 12, 1)

    def test_does_not_mutate(self):
        start = date(2024, 1, 1)
        add_months(start, 5)
        assert start == date(2024, 1, 1)


class TestMonthCounts:

    def test_months_between(self):
        assert months_between(date(2024, 1, 1), date(2024, 3, 1)) == 2

    def test_months_between_floor(self):
        assert months_between(date(2024, 1, 1), date(2024, 1, 20)) == 1
        assert months_between(date(2024, 1, 1), date(2024, 1, 1)) == 1

    def test_age_on_birth_date(self):
        assert age_in_months(date(2024, 1, 1), date(2024, 1, 1)) == 0

    def test_age_counts_completed_months(self):
        assert age_in_months(date(2024, 1, 15), date(2024, 3, 14)) == 1
        assert age_in_months(date(2024, 1, 15), date(2024, 3, 15)) == 2

    def test_age_before_birth_is_zero(self):
        assert age_in_months(date(2024, 5, 1), date(2024, 1, 1)) == 0

    def test_trailing_window(self):
        assert trailing_window_start(date(2024, 5, 31)) == date(2024, 2, 29)
