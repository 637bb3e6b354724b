"""Rental class for rental transactions."""

from datetime import date
from decimal import Decimal
from typing import Union

from .calculations import ZERO, rental_days, to_money
from .errors import RentalStateError
from .status import RentalStatus


class Rental:
    """A rental of one asset by one customer over a date range."""

    def __init__(
            self,
            rental_id: str,
            asset_id: str,
            customer_name: str,
            customer_phone: str,
            start_date: date,
            end_date: date,
            total_cost: Union[Decimal, float, int, str] = ZERO,
            active: bool = True,
    ):
        if end_date < start_date:
            raise ValueError("End date cannot be before start date")
        self._id = rental_id
        self.asset_id = asset_id
        self.customer_name = customer_name
        self.customer_phone = customer_phone
        self._start_date = start_date
        self._end_date = end_date
        self.total_cost = total_cost
        self._active = bool(active)

    @property
    def id(self) -> str:
        return self._id

    @property
    def start_date(self) -> date:
        return self._start_date

    @start_date.setter
    def start_date(self, value: date) -> None:
        if self._end_date < value:
            raise ValueError("End date cannot be before start date")
        self._start_date = value

    @property
    def end_date(self) -> date:
        return self._end_date

    @end_date.setter
    def end_date(self, value: date) -> None:
        if value < self._start_date:
            raise ValueError("End date cannot be before start date")
        self._end_date = value

    @property
    def total_cost(self) -> Decimal:
        return self._total_cost

    @total_cost.setter
    def total_cost(self, value: Union[Decimal, float, int, str]) -> None:
        cost = to_money(value)
        if cost < 0:
            raise ValueError("Total cost cannot be negative")
        self._total_cost = cost

    @property
    def active(self) -> bool:
        return self._active

    @property
    def status(self) -> RentalStatus:
        return RentalStatus.ACTIVE if self._active else RentalStatus.COMPLETED

    @property
    def duration_days(self) -> int:
        """Billable days, minimum 1."""
        return rental_days(self._start_date, self._end_date)

    def complete(self) -> None:
        """Move the rental to COMPLETED. A completed rental can't be reopened."""
        if not self._active:
            raise RentalStateError(f"Rental {self._id} is already completed")
        self._active = False

    def __eq__(self, other) -> bool:
        if not isinstance(other, Rental):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Rental(id={self._id!r}, asset_id={self.asset_id!r}, "
            f"customer={self.customer_name!r}, {self._start_date} to {self._end_date}, "
            f"cost={self.total_cost}, status={self.status.name})"
        )
