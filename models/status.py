"""RentalStatus enum for rental lifecycle states."""

from enum import Enum


class RentalStatus(Enum):
    """Rental lifecycle states. ACTIVE is initial, COMPLETED is terminal."""

    ACTIVE = 1
    COMPLETED = 2
