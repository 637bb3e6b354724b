#!/usr/bin/env python3
"""Tests for Asset and MotorcycleSpec classes."""

from decimal import Decimal

import pytest

from models import Asset, MotorcycleSpec


class TestAsset:
    """Tests for Asset class."""

    def test_attributes(self):
        """All attributes are stored correctly."""
        asset = Asset("V001", "Toyota", "Camry", "50")
        assert asset.id == "V001"
        assert asset.make == "Toyota"
        assert asset.model == "Camry"
        assert asset.daily_rate == Decimal("50.00")
        assert asset.available is True
        assert asset.motorcycle is None
        assert asset.is_motorcycle is False

    def test_rate_rounded_to_cents(self):
        """Float rates are stored as exact cents."""
        asset = Asset("V001", "Toyota", "Camry", 49.999)
        assert asset.daily_rate == Decimal("50.00")
        assert Asset("V002", "Honda", "Civic", 45.1).daily_rate == Decimal("45.10")

    def test_zero_rate_allowed_on_model(self):
        """The model only forbids negative rates."""
        assert Asset("V001", "Toyota", "Camry", 0).daily_rate == Decimal("0.00")

    def test_negative_rate_rejected(self):
        with pytest.raises(ValueError):
            Asset("V001", "Toyota", "Camry", -1)
        asset = Asset("V001", "Toyota", "Camry", 10)
        with pytest.raises(ValueError):
            asset.daily_rate = Decimal("-0.01")
        assert asset.daily_rate == Decimal("10.00")

    def test_non_numeric_rate_rejected(self):
        with pytest.raises(ValueError):
            Asset("V001", "Toyota", "Camry", "cheap")

    def test_id_is_read_only(self):
        asset = Asset("V001", "Toyota", "Camry", 50)
        with pytest.raises(AttributeError):
            asset.id = "V002"

    def test_equality_by_id(self):
        """Two assets with the same id are equal regardless of other fields."""
        a = Asset("V001", "Toyota", "Camry", 50)
        b = Asset("V001", "Honda", "Civic", 45, available=False)
        c = Asset("V002", "Toyota", "Camry", 50)
        assert a == b
        assert a != c
        assert hash(a) == hash(b)
        assert len({a, b, c}) == 2

    def test_display_name(self):
        assert Asset("V001", "Toyota", "Camry", 50).display_name == "Toyota Camry"

    def test_display_name_motorcycle(self):
        bike = Asset("M001", "Yamaha", "MT-07", 55, motorcycle=MotorcycleSpec(689, "Sport"))
        assert bike.is_motorcycle is True
        assert bike.display_name == "Yamaha MT-07 (689cc)"


class TestMotorcycleSpec:
    """Tests for MotorcycleSpec class."""

    def test_defaults(self):
        spec = MotorcycleSpec(650, "Cruiser")
        assert spec.engine_displacement == 650
        assert spec.category == "Cruiser"
        assert spec.has_luggage is False
        assert spec.passenger_capacity == 2
        assert spec.has_sidecar is False

    def test_engine_must_be_positive(self):
        with pytest.raises(ValueError):
            MotorcycleSpec(0, "Sport")
        spec = MotorcycleSpec(600, "Sport")
        with pytest.raises(ValueError):
            spec.engine_displacement = -100

    @pytest.mark.parametrize("capacity", [0, 4])
    def test_capacity_out_of_range(self, capacity):
        with pytest.raises(ValueError):
            MotorcycleSpec(600, "Sport", passenger_capacity=capacity)

    def test_sidecar_raises_capacity(self):
        """Adding a sidecar bumps a 1-seat bike to 3 seats."""
        spec = MotorcycleSpec(750, "Touring", passenger_capacity=1)
        spec.has_sidecar = True
        assert spec.passenger_capacity == 3

    def test_removing_sidecar_keeps_capacity(self):
        """Removing the sidecar does not lower capacity back down."""
        spec = MotorcycleSpec(750, "Touring", passenger_capacity=1)
        spec.has_sidecar = True
        spec.has_sidecar = False
        assert spec.has_sidecar is False
        assert spec.passenger_capacity == 3

    def test_sidecar_in_constructor(self):
        spec = MotorcycleSpec(750, "Touring", passenger_capacity=1, has_sidecar=True)
        assert spec.passenger_capacity == 3

    @pytest.mark.parametrize(
        "cc, category, expected",
        [
            (125, "Standard", "10.00"),
            (301, "Standard", "15.00"),
            (601, "Standard", "20.00"),
            (1000, "Standard", "25.00"),
            (600, "Sport", "35.00"),
            (1200, "sport", "45.00"),
            (650, "Cruiser", "25.00"),
            (1746, "Touring", "25.00"),
        ],
    )
    def test_insurance_rate(self, cc, category, expected):
        assert MotorcycleSpec(cc, category).insurance_rate == Decimal(expected)

    def test_touring_by_category(self):
        assert MotorcycleSpec(250, "touring").is_suitable_for_touring is True

    def test_touring_by_size_and_luggage(self):
        assert MotorcycleSpec(600, "Sport", has_luggage=True).is_suitable_for_touring is True
        assert MotorcycleSpec(600, "Sport").is_suitable_for_touring is False
        assert MotorcycleSpec(599, "Sport", has_luggage=True).is_suitable_for_touring is False

    @pytest.mark.parametrize(
        "cc, expected", [(50, "A1"), (125, "A1"), (126, "A2"), (400, "A2"), (401, "A")]
    )
    def test_license_requirement(self, cc, expected):
        assert MotorcycleSpec(cc, "Standard").license_requirement == expected
