"""MotorcycleSpec class - the motorcycle specialization of an asset."""

from decimal import Decimal

BASE_INSURANCE = Decimal("10.00")
MIN_PASSENGERS = 1
MAX_PASSENGERS = 3
SIDECAR_PASSENGERS = 3


class MotorcycleSpec:
    """Motorcycle-specific attributes attached to an Asset."""

    def __init__(
            self,
            engine_displacement: int,
            category: str,
            has_luggage: bool = False,
            passenger_capacity: int = 2,
            has_sidecar: bool = False,
    ):
        self.engine_displacement = engine_displacement
        self.category = category
        self.has_luggage = has_luggage
        self.passenger_capacity = passenger_capacity
        self._has_sidecar = False
        self.has_sidecar = has_sidecar

    @property
    def engine_displacement(self) -> int:
        """Engine size in cc."""
        return self._engine_displacement

    @engine_displacement.setter
    def engine_displacement(self, value: int) -> None:
        if value <= 0:
            raise ValueError("Engine displacement must be positive")
        self._engine_displacement = int(value)

    @property
    def passenger_capacity(self) -> int:
        return self._passenger_capacity

    @passenger_capacity.setter
    def passenger_capacity(self, value: int) -> None:
        if not MIN_PASSENGERS <= value <= MAX_PASSENGERS:
            raise ValueError(
                f"Passenger capacity must be between {MIN_PASSENGERS} and {MAX_PASSENGERS}"
            )
        self._passenger_capacity = int(value)

    @property
    def has_sidecar(self) -> bool:
        return self._has_sidecar

    @has_sidecar.setter
    def has_sidecar(self, value: bool) -> None:
        # Adding a sidecar raises capacity; removing one leaves it alone.
        self._has_sidecar = bool(value)
        if self._has_sidecar and self._passenger_capacity < SIDECAR_PASSENGERS:
            self._passenger_capacity = SIDECAR_PASSENGERS

    @property
    def insurance_rate(self) -> Decimal:
        """
        Daily insurance rate.

        Starts at 10.00 and adds an engine size surcharge
        (>=1000cc +15, >600cc +10, >300cc +5) and a category surcharge
        (Sport +20, Cruiser +5).
        """
        rate = BASE_INSURANCE
        if self.engine_displacement >= 1000:
            rate += Decimal("15.00")
        elif self.engine_displacement > 600:
            rate += Decimal("10.00")
        elif self.engine_displacement > 300:
            rate += Decimal("5.00")

        category = (self.category or "").lower()
        if category == "sport":
            rate += Decimal("20.00")
        elif category == "cruiser":
            rate += Decimal("5.00")
        return rate

    @property
    def is_suitable_for_touring(self) -> bool:
        """Touring bikes, or any 600cc+ bike with luggage."""
        if (self.category or "").lower() == "touring":
            return True
        return self.engine_displacement >= 600 and self.has_luggage

    @property
    def license_requirement(self) -> str:
        """License class needed to ride: A1 up to 125cc, A2 up to 400cc, else A."""
        if self.engine_displacement <= 125:
            return "A1"
        if self.engine_displacement <= 400:
            return "A2"
        return "A"
