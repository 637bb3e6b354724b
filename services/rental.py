"""RentalService - the rental state machine and its coupling to inventory."""

import copy
import logging
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional

from models import (
    FlatFileStore,
    Rental,
    calc_rental_cost,
    is_blank,
    is_storable_text,
    next_rental_id,
)
from models.calculations import ZERO

from .inventory import InventoryService

logger = logging.getLogger(__name__)


class RentalService:
    """
    Creates and completes rentals while keeping asset availability in step.

    For every asset, `available` is False exactly when one active rental
    references it. Operations that touch both collections hold the rental
    store lock and then the asset store lock, always in that order.
    """

    def __init__(
        self,
        store: FlatFileStore[Rental],
        inventory: InventoryService,
        today: Callable[[], date] = date.today,
        id_prefix: str = "R",
        id_width: int = 3,
    ):
        self._store = store
        self._inventory = inventory
        self._today = today
        self.id_prefix = id_prefix
        self.id_width = id_width

    @contextmanager
    def _locked(self):
        with self._store.lock, self._inventory.lock:
            yield

    # =========================================================================
    # State machine
    # =========================================================================

    def create_rental(
        self,
        asset_id: Optional[str],
        customer_name: Optional[str],
        customer_phone: Optional[str],
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Optional[Rental]:
        """
        Book an available asset.

        Returns the new ACTIVE rental, or None if the request is invalid, the
        asset is missing or already committed, or a write fails. Nothing is
        left half-done: if the asset can't be flipped after the rental was
        saved, the rental is deleted again.
        """
        if (
            is_blank(asset_id)
            or is_blank(customer_name)
            or is_blank(customer_phone)
            or start_date is None
            or end_date is None
        ):
            logger.info("Rejected rental: missing fields")
            return None
        if not all(is_storable_text(v) for v in (asset_id, customer_name, customer_phone)):
            logger.info("Rejected rental of %s: delimiter or line break in a field", asset_id)
            return None
        if start_date < self._today() or end_date < start_date:
            logger.info("Rejected rental of %s: bad dates %s to %s", asset_id, start_date, end_date)
            return None

        with self._locked():
            asset = self._inventory.find_by_id(asset_id)
            if asset is None or not asset.available:
                logger.info("Rejected rental of %s: not available", asset_id)
                return None
            if self.active_rental_for(asset_id) is not None:
                logger.warning(
                    "Asset %s is marked available but has an active rental", asset_id
                )
                return None

            total_cost = calc_rental_cost(asset.daily_rate, start_date, end_date)
            if total_cost <= 0:
                logger.info("Rejected rental of %s: cost %s", asset_id, total_cost)
                return None

            rental = Rental(
                self.generate_next_id(),
                asset_id,
                customer_name.strip(),
                customer_phone.strip(),
                start_date,
                end_date,
                total_cost=total_cost,
            )
            if not self._store.save(rental):
                return None
            if not self._inventory.mark_rented(asset_id):
                if not self._store.delete_by_id(rental.id):
                    logger.error(
                        "Could not roll back rental %s after failing to commit %s",
                        rental.id,
                        asset_id,
                    )
                return None

            logger.info(
                "Created rental %s: %s for %s, %s to %s, %s",
                rental.id,
                asset_id,
                rental.customer_name,
                start_date,
                end_date,
                total_cost,
            )
            return rental

    def complete_rental(self, rental_id: Optional[str]) -> bool:
        """
        Close an active rental and make its asset available again.

        False if the rental is unknown or already completed, or if either
        write fails (the rental is then left ACTIVE).
        """
        if is_blank(rental_id):
            return False

        with self._locked():
            original = self._store.find_by_id(rental_id)
            if original is None or not original.active:
                logger.info("Cannot complete %r: missing or already completed", rental_id)
                return False

            rental = copy.deepcopy(original)
            rental.complete()
            if not self._store.update(rental):
                return False
            if not self._inventory.mark_returned(rental.asset_id):
                if not self._store.update(original):
                    logger.error("Could not reopen rental %s after failed return", rental_id)
                return False

            logger.info("Completed rental %s, %s returned", rental_id, rental.asset_id)
            return True

    def calculate_rental_cost(
        self,
        asset_id: Optional[str],
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Decimal:
        """Quote a rental. Returns 0.00 for any invalid input instead of failing."""
        if asset_id is None or start_date is None or end_date is None:
            return ZERO
        if end_date < start_date:
            return ZERO
        asset = self._inventory.find_by_id(asset_id)
        if asset is None:
            return ZERO
        return calc_rental_cost(asset.daily_rate, start_date, end_date)

    def generate_next_id(self) -> str:
        with self._store.lock:
            ids = [r.id for r in self._store.find_all()]
        return next_rental_id(ids, self.id_prefix, self.id_width)

    # =========================================================================
    # Queries
    # =========================================================================

    def list_all(self) -> List[Rental]:
        return self._store.find_all()

    def find_by_id(self, rental_id: Optional[str]) -> Optional[Rental]:
        if is_blank(rental_id):
            return None
        return self._store.find_by_id(rental_id)

    def active_rentals(self) -> List[Rental]:
        return self._store.find_where(lambda r: r.active)

    def by_asset(self, asset_id: Optional[str]) -> List[Rental]:
        if is_blank(asset_id):
            return []
        return self._store.find_where(lambda r: r.asset_id == asset_id)

    def active_rental_for(self, asset_id: Optional[str]) -> Optional[Rental]:
        if is_blank(asset_id):
            return None
        matches = self._store.find_where(lambda r: r.active and r.asset_id == asset_id)
        return matches[0] if matches else None

    def is_asset_rented(self, asset_id: Optional[str]) -> bool:
        return self.active_rental_for(asset_id) is not None

    def by_customer(self, customer_name: Optional[str]) -> List[Rental]:
        if is_blank(customer_name):
            return []
        wanted = customer_name.strip().lower()
        return [r for r in self.list_all() if r.customer_name.lower() == wanted]

    def in_date_range(
        self, start_date: Optional[date], end_date: Optional[date]
    ) -> List[Rental]:
        """Rentals overlapping [start_date, end_date], inclusive."""
        if start_date is None or end_date is None or end_date < start_date:
            return []
        return [
            r
            for r in self.list_all()
            if r.start_date <= end_date and r.end_date >= start_date
        ]

    def overdue(self) -> List[Rental]:
        """Active rentals whose end date has passed."""
        today = self._today()
        return [r for r in self.active_rentals() if r.end_date < today]

    def total_revenue(self) -> Decimal:
        """Sum of completed rentals."""
        return sum((r.total_cost for r in self.list_all() if not r.active), ZERO)

    def potential_revenue(self) -> Decimal:
        """Sum of active rentals."""
        return sum((r.total_cost for r in self.active_rentals()), ZERO)

    def total_count(self) -> int:
        return self._store.count()

    def active_count(self) -> int:
        return len(self.active_rentals())

    # =========================================================================
    # Consistency
    # =========================================================================

    def find_inconsistencies(self) -> List[str]:
        """Ids of assets whose availability disagrees with the active rentals."""
        with self._locked():
            rented = {r.asset_id for r in self.active_rentals()}
            return [
                a.id
                for a in self._inventory.list_all()
                if a.available == (a.id in rented)
            ]

    def reconcile(self) -> List[str]:
        """
        Make asset availability match the active rentals.

        Rentals are the source of truth: an asset with an active rental is
        marked rented, any other asset is marked available. Returns the ids
        that were corrected.
        """
        fixed = []
        with self._locked():
            rented = {r.asset_id for r in self.active_rentals()}
            for asset_id in self.find_inconsistencies():
                if asset_id in rented:
                    ok = self._inventory.mark_rented(asset_id)
                else:
                    ok = self._inventory.mark_returned(asset_id)
                if ok:
                    logger.warning("Corrected availability of asset %s", asset_id)
                    fixed.append(asset_id)
                else:
                    logger.error("Could not correct availability of asset %s", asset_id)
            orphans = rented - {a.id for a in self._inventory.list_all()}
            for asset_id in sorted(orphans):
                logger.warning("Active rental references unknown asset %s", asset_id)
        return fixed

