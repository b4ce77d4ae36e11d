"""Test European number parsing of bill amounts."""
import pytest
from bill_split.international.number_parsing import (
    EU_FORMAT, US_FORMAT, find_amounts, parse_amount, parse_european_number,
)


class TestParseAmount:
    def test_eu_format(self):
        assert parse_amount("1.234,56", EU_FORMAT) == 1234.56

    def test_us_format(self):
        assert parse_amount("1,234.56", US_FORMAT) == 1234.56

    def test_default_is_eu(self):
        assert parse_amount("8,50") == 8.50

    def test_negative_parens(self):
        assert parse_amount("(7,88)") == -7.88

    def test_negative_trailing(self):
        assert parse_amount("7,88-") == -7.88

    def test_negative_leading(self):
        assert parse_amount("-7,88") == -7.88

    def test_currency_symbol(self):
        assert parse_amount("8,50 €") == 8.50
        assert parse_amount("€ 8,50") == 8.50

    def test_currency_code(self):
        assert parse_amount("EUR 12,00") == 12.00

    def test_space_thousands(self):
        assert parse_amount("1 234,56") == 1234.56

    @pytest.mark.parametrize("raw", ["", "   ", "€"])
    def test_empty_raises(self, raw):
        with pytest.raises(ValueError):
            parse_amount(raw)

    def test_not_a_number_raises(self):
        with pytest.raises(ValueError):
            parse_amount("abc")


class TestParseEuropeanNumber:
    @pytest.mark.parametrize("token, expected", [
        ("45,20", 45.20),
        ("1.234,56", 1234.56),
        ("1.234", 1234),
        ("1.234.567", 1234567),
        ("45.20", 45.20),
        ("12.5", 12.5),
        ("250", 250),
        ("420,5", 420.5),
    ])
    def test_tokens(self, token, expected):
        assert parse_european_number(token) == pytest.approx(expected)

    @pytest.mark.parametrize("token", ["", "  ", "abc", ",,"])
    def test_not_a_number(self, token):
        assert parse_european_number(token) is None


class TestFindAmounts:
    def test_left_to_right(self):
        assert find_amounts("250 kWh x 0,18 = 45,20 €") == ["0,18", "45,20"]

    def test_thousands(self):
        assert find_amounts("Σύνολο 1.234,56 €") == ["1.234,56"]

    def test_needs_two_decimals(self):
        assert find_amounts("Κατανάλωση 250 kWh, 12,5") == []

    def test_dot_decimals(self):
        assert find_amounts("Total 45.20") == ["45.20"]
