"""
Rental tracker services.

- InventoryService: asset availability, fleet maintenance and queries
- RentalService: rental creation/completion, cost quotes and reports
"""

import logging
from typing import Tuple

from models import AssetCodec, Config, FlatFileStore, RentalCodec

from .inventory import InventoryService
from .rental import RentalService

logger = logging.getLogger(__name__)


def open_services(config: Config) -> Tuple[InventoryService, RentalService]:
    """Load both data files and wire up the services for a config."""
    asset_store = FlatFileStore(config.assets_file, AssetCodec())
    rental_store = FlatFileStore(config.rentals_file, RentalCodec(today=config.today))
    inventory = InventoryService(asset_store)
    rentals = RentalService(
        rental_store,
        inventory,
        today=config.today,
        id_prefix=config.id_prefix,
        id_width=config.id_width,
    )
    mismatched = rentals.find_inconsistencies()
    if mismatched:
        logger.warning(
            "Availability disagrees with active rentals for %s; run 'check --fix' to repair",
            ", ".join(mismatched),
        )
    return inventory, rentals


__all__ = ["InventoryService", "RentalService", "open_services"]
