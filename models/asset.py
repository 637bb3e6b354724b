"""Asset class for rentable vehicles."""

from decimal import Decimal
from typing import Optional, Union

from .calculations import to_money
from .motorcycle import MotorcycleSpec


class Asset:
    """
    A rentable vehicle.

    Motorcycles are ordinary assets carrying a MotorcycleSpec payload, so
    storage and services handle every asset the same way and check
    `is_motorcycle` when they need the extra fields.
    """

    def __init__(
        self,
        asset_id: str,
        make: str,
        model: str,
        daily_rate: Union[Decimal, float, int, str],
        available: bool = True,
        motorcycle: Optional[MotorcycleSpec] = None,
    ):
        self._id = asset_id
        self.make = make
        self.model = model
        self.daily_rate = daily_rate
        self.available = available
        self.motorcycle = motorcycle

    @property
    def id(self) -> str:
        return self._id

    @property
    def daily_rate(self) -> Decimal:
        return self._daily_rate

    @daily_rate.setter
    def daily_rate(self, value: Union[Decimal, float, int, str]) -> None:
        rate = to_money(value)
        if rate < 0:
            raise ValueError("Daily rate cannot be negative")
        self._daily_rate = rate

    @property
    def is_motorcycle(self) -> bool:
        return self.motorcycle is not None

    @property
    def display_name(self) -> str:
        """Human-readable name, with engine size for motorcycles."""
        base = f"{self.make} {self.model}"
        if self.motorcycle is not None:
            return f"{base} ({self.motorcycle.engine_displacement}cc)"
        return base

    def __eq__(self, other) -> bool:
        if not isinstance(other, Asset):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        kind = "motorcycle" if self.is_motorcycle else "vehicle"
        return (
            f"Asset(id={self._id!r}, {kind}, make={self.make!r}, model={self.model!r}, "
            f"daily_rate={self.daily_rate}, available={self.available})"
        )
