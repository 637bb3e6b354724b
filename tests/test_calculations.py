#!/usr/bin/env python3
"""Tests for money, duration and id helper functions."""
from datetime import date
from decimal import Decimal

import pytest

from models import (
    calc_rental_cost,
    format_money,
    next_rental_id,
    parse_id_number,
    rental_days,
    to_money,
)


class TestToMoney:
    """Tests for to_money helper function."""

    def test_rounds_to_cents(self):
        assert to_money("10") == Decimal("10.00")
        assert to_money("10.005") == Decimal("10.01")
        assert to_money(Decimal("10.004")) == Decimal("10.00")

    def test_float_uses_decimal_text(self):
        """0.1 + 0.2 style float noise doesn't leak into the amount."""
        assert to_money(0.1 + 0.2) == Decimal("0.30")
        assert to_money(49.99) == Decimal("49.99")

    @pytest.mark.parametrize("bad", ["abc", "", "NaN", "Infinity", None, True])
    def test_rejects_non_numbers(self, bad):
        with pytest.raises(ValueError):
            to_money(bad)

    def test_format_money(self):
        assert format_money(Decimal("150")) == "150.00"
        assert format_money(Decimal("0.5")) == "0.50"


class TestRentalDays:
    """Tests for rental_days helper function."""

    def test_days_between(self):
        assert rental_days(date(2024, 1, 10), date(2024, 1, 13)) == 3

    def test_same_day_bills_one(self):
        assert rental_days(date(2024, 1, 10), date(2024, 1, 10)) == 1

    def test_across_month_end(self):
        assert rental_days(date(2024, 1, 30), date(2024, 2, 2)) == 3


class TestCalcRentalCost:
    """Tests for calc_rental_cost helper function."""

    def test_rate_times_days(self):
        assert calc_rental_cost(Decimal("50.00"), date(2024, 1, 10), date(2024, 1, 13)) == Decimal("150.00")

    def test_minimum_one_day(self):
        assert calc_rental_cost(Decimal("45.50"), date(2024, 1, 10), date(2024, 1, 10)) == Decimal("45.50")

    def test_no_float_drift(self):
        """Many days at a fractional rate stays exact."""
        cost = calc_rental_cost(Decimal("19.99"), date(2024, 1, 1), date(2024, 12, 31))
        assert cost == Decimal("19.99") * 365


class TestRentalIds:
    """Tests for parse_id_number and next_rental_id."""

    def test_parse_id_number(self):
        assert parse_id_number("R042") == 42
        assert parse_id_number("R1000") == 1000

    def test_parse_unparseable_is_zero(self):
        assert parse_id_number("Rabc") == 0
        assert parse_id_number("R") == 0
        assert parse_id_number("") == 0
        assert parse_id_number("R-5") == 0

    def test_next_after_gap(self):
        """Uses the highest id, not the count."""
        assert next_rental_id(["R001", "R002", "R004"]) == "R005"

    def test_first_id(self):
        assert next_rental_id([]) == "R001"

    def test_ignores_unparseable(self):
        assert next_rental_id(["R003", "legacy"]) == "R004"

    def test_grows_past_padding(self):
        assert next_rental_id(["R999"]) == "R1000"

    def test_custom_prefix_and_width(self):
        assert next_rental_id(["B07"], prefix="B", width=5) == "B00008"
