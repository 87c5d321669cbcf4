"""Tests for display formatting."""

from decimal import Decimal

import pytest

from finance_tracker.formatting import format_amount, format_currency, group_indian


class TestGroupIndian:
    """Tests for Indian digit grouping."""

    @pytest.mark.parametrize("digits, expected", [
        ("0", "0"),
        ("999", "999"),
        ("1000", "1,000"),
        ("100000", "1,00,000"),
        ("1234567", "12,34,567"),
        ("10000000", "1,00,00,000"),
    ])
    def test_grouping(self, digits, expected):
        assert group_indian(digits) == expected


class TestFormatCurrency:
    """Tests for currency rendering."""

    def test_lakh(self):
        assert format_currency(100000) == "₹1,00,000.00"

    def test_decimal_input(self):
        assert format_currency(Decimal("2027.6385")) == "₹2,027.64"

    def test_small_amount(self):
        assert format_currency(0.5) == "₹0.50"
        assert format_currency(0) == "₹0.00"

    def test_negative(self):
        assert format_currency(-2500.5) == "-₹2,500.50"

    def test_rounds_half_up(self):
        assert format_amount(Decimal("1.005")) == "1.01"

    def test_custom_symbol(self):
        assert format_currency(1500, symbol="$") == "$1,500.00"
