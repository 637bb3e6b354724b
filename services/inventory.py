"""InventoryService - asset availability and fleet queries."""

import copy
import logging
from decimal import Decimal
from typing import List, Optional, Union

from models import Asset, FlatFileStore, is_blank, is_storable_text, to_money

logger = logging.getLogger(__name__)


class InventoryService:
    """
    Owns every change to the asset collection.

    Availability flips (`mark_rented` / `mark_returned`) are meant to be
    called by RentalService only; `update` never changes availability.
    """

    def __init__(self, store: FlatFileStore[Asset]):
        self._store = store

    @property
    def lock(self):
        """The asset store's lock, for callers grouping several operations."""
        return self._store.lock

    # =========================================================================
    # Queries
    # =========================================================================

    def list_all(self) -> List[Asset]:
        return self._store.find_all()

    def list_available(self) -> List[Asset]:
        return self._store.find_where(lambda a: a.available)

    def motorcycles(self) -> List[Asset]:
        return self._store.find_where(lambda a: a.is_motorcycle)

    def find_by_id(self, asset_id: Optional[str]) -> Optional[Asset]:
        if is_blank(asset_id):
            return None
        return self._store.find_by_id(asset_id)

    def is_available(self, asset_id: Optional[str]) -> bool:
        asset = self.find_by_id(asset_id)
        return asset is not None and asset.available

    def by_make(self, make: Optional[str]) -> List[Asset]:
        """Assets whose make matches, ignoring case and surrounding spaces."""
        if is_blank(make):
            return []
        wanted = make.strip().lower()
        return [a for a in self.list_all() if a.make.lower() == wanted]

    def by_price_range(
        self,
        min_rate: Union[Decimal, float, int, str],
        max_rate: Union[Decimal, float, int, str],
    ) -> List[Asset]:
        """Assets with min_rate <= daily_rate <= max_rate. Invalid range gives []."""
        try:
            low = to_money(min_rate)
            high = to_money(max_rate)
        except ValueError:
            return []
        if low < 0 or high < low:
            return []
        return [a for a in self.list_all() if low <= a.daily_rate <= high]

    def total_count(self) -> int:
        return self._store.count()

    def available_count(self) -> int:
        return len(self.list_available())

    def rented_count(self) -> int:
        return self.total_count() - self.available_count()

    # =========================================================================
    # Availability
    # =========================================================================

    def mark_rented(self, asset_id: Optional[str]) -> bool:
        """Flip an available asset to committed. False if missing or already rented."""
        with self._store.lock:
            asset = self.find_by_id(asset_id)
            if asset is None or not asset.available:
                logger.debug("Cannot mark %r rented: missing or unavailable", asset_id)
                return False
            asset.available = False
            return self._store.update(asset)

    def mark_returned(self, asset_id: Optional[str]) -> bool:
        """Make an asset available again. Returning an available asset is allowed."""
        with self._store.lock:
            asset = self.find_by_id(asset_id)
            if asset is None:
                logger.debug("Cannot mark %r returned: not found", asset_id)
                return False
            asset.available = True
            return self._store.update(asset)

    # =========================================================================
    # Fleet maintenance
    # =========================================================================

    @staticmethod
    def _valid(asset: Optional[Asset]) -> bool:
        if asset is None:
            return False
        text = [asset.id, asset.make, asset.model]
        if any(is_blank(value) for value in text):
            return False
        if asset.motorcycle is not None:
            text.append(asset.motorcycle.category)
        if not all(is_storable_text(value) for value in text):
            return False
        return asset.daily_rate > 0

    def add(self, asset: Optional[Asset]) -> bool:
        """Add a new asset. New assets always start out available."""
        if not self._valid(asset):
            logger.info("Rejected invalid asset %r", asset)
            return False
        new_asset = copy.deepcopy(asset)
        new_asset.available = True
        added = self._store.save(new_asset)
        if added:
            logger.info("Added asset %s (%s)", new_asset.id, new_asset.display_name)
        return added

    def update(self, asset: Optional[Asset]) -> bool:
        """Replace an asset's details, keeping its current availability."""
        if not self._valid(asset):
            logger.info("Rejected invalid asset update %r", asset)
            return False
        with self._store.lock:
            existing = self._store.find_by_id(asset.id)
            if existing is None:
                return False
            changed = copy.deepcopy(asset)
            changed.available = existing.available
            return self._store.update(changed)

    def remove(self, asset_id: Optional[str]) -> bool:
        """Delete an asset. Assets committed to a rental can't be removed."""
        with self._store.lock:
            asset = self.find_by_id(asset_id)
            if asset is None or not asset.available:
                logger.info("Cannot remove %r: missing or currently rented", asset_id)
                return False
            removed = self._store.delete_by_id(asset_id)
            if removed:
                logger.info("Removed asset %s", asset_id)
            return removed
