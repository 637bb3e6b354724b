#!/usr/bin/env python3
"""Tests for InventoryService."""

from decimal import Decimal

import pytest

from models import Asset, AssetCodec, FlatFileStore, MotorcycleSpec


class TestQueries:
    """Tests for inventory lookups and filters."""

    def test_list_all_and_available(self, inventory, asset_store):
        assert [a.id for a in inventory.list_all()] == ["A1", "A2", "M1"]
        asset_store.update(Asset("A2", "Honda", "Civic", 45, available=False))
        assert [a.id for a in inventory.list_available()] == ["A1", "M1"]

    def test_find_by_id_blank(self, inventory):
        assert inventory.find_by_id(None) is None
        assert inventory.find_by_id("") is None
        assert inventory.find_by_id("   ") is None

    def test_find_by_id(self, inventory):
        assert inventory.find_by_id("A1").make == "Toyota"
        assert inventory.find_by_id("A9") is None

    def test_is_available(self, inventory):
        assert inventory.is_available("A1") is True
        assert inventory.is_available("A9") is False

    def test_motorcycles(self, inventory):
        assert [a.id for a in inventory.motorcycles()] == ["M1"]

    def test_by_make_case_insensitive(self, inventory):
        assert [a.id for a in inventory.by_make("  toyota ")] == ["A1"]
        assert inventory.by_make("") == []
        assert inventory.by_make(None) == []

    def test_by_price_range_inclusive(self, inventory):
        assert [a.id for a in inventory.by_price_range(45, 50)] == ["A1", "A2"]
        assert [a.id for a in inventory.by_price_range("50.00", "55.00")] == ["A1", "M1"]

    @pytest.mark.parametrize("low, high", [(-1, 50), (60, 50)])
    def test_by_price_range_invalid_is_empty(self, inventory, low, high):
        assert inventory.by_price_range(low, high) == []

    def test_counts(self, inventory, asset_store):
        asset_store.update(Asset("A2", "Honda", "Civic", 45, available=False))
        assert inventory.total_count() == 3
        assert inventory.available_count() == 2
        assert inventory.rented_count() == 1


class TestAvailability:
    """Tests for mark_rented / mark_returned."""

    def test_mark_rented(self, inventory, assets_path):
        assert inventory.mark_rented("A1") is True
        assert inventory.is_available("A1") is False
        # Persisted
        reloaded = FlatFileStore(assets_path, AssetCodec())
        assert reloaded.find_by_id("A1").available is False

    def test_mark_rented_twice_fails(self, inventory):
        assert inventory.mark_rented("A1") is True
        assert inventory.mark_rented("A1") is False

    def test_mark_rented_unknown(self, inventory):
        assert inventory.mark_rented("A9") is False
        assert inventory.mark_rented(None) is False

    def test_mark_returned_idempotent(self, inventory):
        """Returning twice leaves the asset available without error."""
        inventory.mark_rented("A1")
        assert inventory.mark_returned("A1") is True
        assert inventory.is_available("A1") is True
        assert inventory.mark_returned("A1") is True
        assert inventory.is_available("A1") is True

    def test_mark_returned_unknown(self, inventory):
        assert inventory.mark_returned("A9") is False

    def test_mark_rented_reports_write_failure(self, inventory, monkeypatch):
        monkeypatch.setattr(FlatFileStore, "update", lambda self, record: False)
        assert inventory.mark_rented("A1") is False


class TestFleetMaintenance:
    """Tests for add / update / remove."""

    def test_add(self, inventory):
        assert inventory.add(Asset("A3", "Ford", "Focus", 40)) is True
        assert inventory.find_by_id("A3").daily_rate == Decimal("40.00")

    def test_add_motorcycle(self, inventory):
        bike = Asset("M2", "Ducati", "Monster", 80, motorcycle=MotorcycleSpec(937, "Sport"))
        assert inventory.add(bike) is True
        assert inventory.find_by_id("M2").motorcycle.engine_displacement == 937

    def test_add_always_available(self, inventory):
        assert inventory.add(Asset("A3", "Ford", "Focus", 40, available=False)) is True
        assert inventory.is_available("A3") is True

    @pytest.mark.parametrize(
        "asset",
        [
            None,
            Asset("", "Ford", "Focus", 40),
            Asset("A3", " ", "Focus", 40),
            Asset("A3", "Ford", None, 40),
            Asset("A3", "Ford", "Focus", 0),
        ],
    )
    def test_add_invalid(self, inventory, asset):
        assert inventory.add(asset) is False
        assert inventory.total_count() == 3

    @pytest.mark.parametrize(
        "asset",
        [
            Asset("A9", "Ford, Inc", "F150", 60),
            Asset("A9", "Ford", "F150\nXL", 60),
            Asset("A9,B", "Ford", "F150", 60),
            Asset("M9", "Ducati", "Monster", 80, motorcycle=MotorcycleSpec(937, "Sport, Naked")),
        ],
    )
    def test_add_unstorable_text_rejected(self, inventory, assets_path, asset):
        """Text that would break the file layout is refused and nothing is lost on reload."""
        assert inventory.add(asset) is False
        reloaded = FlatFileStore(assets_path, AssetCodec())
        assert reloaded.count() == 3
        assert reloaded.load_errors == []

    def test_update_unstorable_text_rejected(self, inventory):
        assert inventory.update(Asset("A1", "Toyota, Inc", "Camry", 50)) is False
        assert inventory.find_by_id("A1").make == "Toyota"

    def test_add_duplicate(self, inventory):
        assert inventory.add(Asset("A1", "Ford", "Focus", 40)) is False
        assert inventory.find_by_id("A1").make == "Toyota"

    def test_update(self, inventory):
        assert inventory.update(Asset("A1", "Toyota", "Corolla", 55)) is True
        asset = inventory.find_by_id("A1")
        assert asset.model == "Corolla"
        assert asset.daily_rate == Decimal("55.00")

    def test_update_keeps_availability(self, inventory):
        """Callers can't flip availability through update."""
        inventory.mark_rented("A1")
        assert inventory.update(Asset("A1", "Toyota", "Camry", 60, available=True)) is True
        assert inventory.is_available("A1") is False

        inventory.mark_returned("A1")
        assert inventory.update(Asset("A1", "Toyota", "Camry", 60, available=False)) is True
        assert inventory.is_available("A1") is True

    def test_update_invalid_or_missing(self, inventory):
        assert inventory.update(Asset("A1", "Toyota", "Camry", 0)) is False
        assert inventory.update(Asset("A9", "Ford", "Focus", 40)) is False

    def test_remove(self, inventory):
        assert inventory.remove("A2") is True
        assert inventory.find_by_id("A2") is None

    def test_remove_rented_rejected(self, inventory):
        """A committed asset can't be deleted."""
        inventory.mark_rented("A1")
        assert inventory.remove("A1") is False
        assert inventory.find_by_id("A1") is not None

    def test_remove_unknown(self, inventory):
        assert inventory.remove("A9") is False
        assert inventory.remove("") is False
