"""Shared fixtures: file-backed stores and services in a temp directory."""

from datetime import date

import pytest

from models import AssetCodec, FlatFileStore, RentalCodec
from services import InventoryService, RentalService

TODAY = date(2024, 1, 5)

ASSETS_CSV = """\
ID,Make,Model,DailyRate,IsAvailable,Type,EngineCC,Category,HasLuggage,PassengerCapacity,HasSidecar
A1,Toyota,Camry,50.00,true
A2,Honda,Civic,45.00,true
M1,Yamaha,MT-07,55.00,true,motorcycle,689,Sport,false,2,false
"""

RENTALS_CSV = "ID,VehicleID,CustomerName,CustomerPhone,StartDate,EndDate,TotalCost,IsActive\n"


@pytest.fixture
def assets_path(tmp_path):
    path = tmp_path / "vehicles.csv"
    path.write_text(ASSETS_CSV)
    return path


@pytest.fixture
def rentals_path(tmp_path):
    path = tmp_path / "rentals.csv"
    path.write_text(RENTALS_CSV)
    return path


@pytest.fixture
def asset_store(assets_path):
    return FlatFileStore(assets_path, AssetCodec())


@pytest.fixture
def rental_store(rentals_path):
    return FlatFileStore(rentals_path, RentalCodec(today=lambda: TODAY))


@pytest.fixture
def inventory(asset_store):
    return InventoryService(asset_store)


@pytest.fixture
def rentals(rental_store, inventory):
    return RentalService(rental_store, inventory, today=lambda: TODAY)
