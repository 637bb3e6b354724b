"""
Fleet rental models.

This package provides data models and persistence for the rental tracker:
- Asset: A rentable vehicle, optionally carrying a MotorcycleSpec
- Rental: A rental transaction with its RentalStatus
- FlatFileStore: Comma-separated file mirror of a record collection
- Config: Settings loaded from a validated YAML file
"""

from .status import RentalStatus
from .errors import RentalError, RentalStateError, ConfigError
from .motorcycle import MotorcycleSpec
from .asset import Asset
from .rental import Rental
from .calculations import (
    to_money,
    format_money,
    rental_days,
    calc_rental_cost,
    parse_id_number,
    next_rental_id,
)
from .codecs import RecordCodec, AssetCodec, RentalCodec, is_blank, is_storable_text
from .store import FlatFileStore
from .config import Config, load_config, load_schema, validate_config_file

__all__ = [
    "RentalStatus",
    "RentalError",
    "RentalStateError",
    "ConfigError",
    "MotorcycleSpec",
    "Asset",
    "Rental",
    "to_money",
    "format_money",
    "rental_days",
    "calc_rental_cost",
    "parse_id_number",
    "next_rental_id",
    "RecordCodec",
    "AssetCodec",
    "RentalCodec",
    "is_blank",
    "is_storable_text",
    "FlatFileStore",
    "Config",
    "load_config",
    "load_schema",
    "validate_config_file",
]
