"""
Tests for date parsing and birth-date range checks.
"""

from datetime import date

import pytest

from patient_intake.utils.date_utils import is_valid_birth_date, parse_date, subtract_years


TODAY = date(2025, 6, 15)


class TestParseDate:

    def test_valid_date(self):
        assert parse_date("04/12/1985") == date(1985, 4, 12)

    def test_leap_day(self):
        assert parse_date("02/29/2024") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", [
        "02/30/2024",
        "02/29/2023",
        "04/31/2024",
    ])
    def test_impossible_calendar_days(self, value):
        assert parse_date(value) is None

    @pytest.mark.parametrize("value", [
        "2/3/2024",
        "13/01/2024",
        "00/10/2024",
        "01/32/2024",
        "2024-01-01",
        "01/01/24",
        " 01/01/2024",
    ])
    def test_wrong_format(self, value):
        assert parse_date(value) is None

    def test_empty(self):
        assert parse_date("") is None
        assert parse_date(None) is None


class TestSubtractYears:

    def test_plain_date(self):
        assert subtract_years(TODAY, 120) == date(1905, 6, 15)

    def test_leap_day_anchor_maps_to_feb_28(self):
        assert subtract_years(date(2024, 2, 29), 1) == date(2023, 2, 28)

    def test_leap_day_anchor_to_leap_year(self):
        assert subtract_years(date(2024, 2, 29), 4) == date(2020, 2, 29)


class TestBirthDateRange:

    def test_today_is_valid(self):
        assert is_valid_birth_date("06/15/2025", today=TODAY)

    def test_tomorrow_is_invalid(self):
        assert not is_valid_birth_date("06/16/2025", today=TODAY)

    def test_exactly_max_age_is_valid(self):
        assert is_valid_birth_date("06/15/1905", today=TODAY)

    def test_one_day_past_max_age_is_invalid(self):
        assert not is_valid_birth_date("06/14/1905", today=TODAY)

    def test_accepts_date_objects(self):
        assert is_valid_birth_date(date(1985, 4, 12), today=TODAY)

    def test_unparseable_is_invalid(self):
        assert not is_valid_birth_date("02/30/2024", today=TODAY)

    def test_custom_max_age(self):
        assert not is_valid_birth_date("06/14/2005", today=TODAY, max_age_years=20)
        assert is_valid_birth_date("06/15/2005", today=TODAY, max_age_years=20)
