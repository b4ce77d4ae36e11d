"""Test billing-period date scanning and parsing."""
import pytest
from datetime import date
from bill_split.international.date_parsing import (
    find_period_dates, month_title, parse_period_date, validate_billing_period,
)


class TestFindPeriodDates:
    def test_numeric_separators(self):
        text = "01/06/2025 1-7-2025 01.08.2025"
        assert find_period_dates(text) == ["01/06/2025", "1-7-2025", "01.08.2025"]

    def test_month_names(self):
        assert find_period_dates("από 1 Ιουνίου 2025 έως 30 Ιουνίου 2025") == [
            "1 Ιουνίου 2025", "30 Ιουνίου 2025",
        ]

    def test_accented_genitive_suffix(self):
        # Stem plus any Greek letters, accented ones included
        assert find_period_dates("1 Ιουνίου 2025") == ["1 Ιουνίου 2025"]
        assert find_period_dates("1 Ιουνιου 2025") == ["1 Ιουνιου 2025"]
        assert find_period_dates("15 Φεβρουαρίου 2025") == ["15 Φεβρουαρίου 2025"]

    def test_non_greek_suffix_not_matched(self):
        assert find_period_dates("1 Ιουνxyz 2025") == []

    def test_uppercase_month(self):
        assert find_period_dates("3 ΙΟΥΛΙΟΥ 2025") == ["3 ΙΟΥΛΙΟΥ 2025"]

    def test_numeric_before_month_names(self):
        assert find_period_dates("Από 1 Ιουνίου 2025 έως 30/06/2025") == ["30/06/2025", "1 Ιουνίου 2025"]

    def test_two_digit_year_ignored(self):
        assert find_period_dates("01/06/25") == []

    def test_none(self):
        assert find_period_dates("no dates here") == []


class TestParsePeriodDate:
    @pytest.mark.parametrize("raw, expected", [
        ("01/06/2025", date(2025, 6, 1)),
        ("1-6-2025", date(2025, 6, 1)),
        ("30.06.2025", date(2025, 6, 30)),
        ("12/01/2025", date(2025, 1, 12)),
        ("1 Ιουνίου 2025", date(2025, 6, 1)),
        ("15 Μαΐου 2025", date(2025, 5, 15)),
        ("3 ΙΟΥΛΙΟΥ 2025", date(2025, 7, 3)),
        ("28 Φεβρουαρίου 2024", date(2024, 2, 28)),
        ("  01/06/2025  ", date(2025, 6, 1)),
    ])
    def test_parses(self, raw, expected):
        assert parse_period_date(raw) == expected

    @pytest.mark.parametrize("raw", ["31/02/2025", "June 2025", "1 Ιουνκάτι", "", "5 Foo 2025"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_period_date(raw)


class TestMonthTitle:
    def test_june(self):
        assert month_title(date(2025, 6, 15)) == "Ιούν 2025"

    def test_january(self):
        assert month_title(date(2024, 1, 1)) == "Ιαν 2024"


class TestValidateBillingPeriod:
    def test_normal(self):
        valid, msg = validate_billing_period(date(2025, 6, 1), date(2025, 6, 30))
        assert valid is True
        assert msg is None

    def test_negative(self):
        valid, msg = validate_billing_period(date(2025, 6, 30), date(2025, 6, 1))
        assert valid is False
        assert "negative" in msg

    def test_too_long(self):
        valid, msg = validate_billing_period(date(2024, 1, 1), date(2025, 2, 10))
        assert valid is False

    def test_short_warning(self):
        valid, msg = validate_billing_period(date(2025, 6, 1), date(2025, 6, 11))
        assert valid is True
        assert msg == "Unusually short billing period: 10 days"

    def test_long_warning(self):
        valid, msg = validate_billing_period(date(2025, 1, 1), date(2025, 5, 1))
        assert valid is True
        assert "long" in msg
