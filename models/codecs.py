"""Column mappings between records and comma-separated lines."""

from datetime import date
from typing import Callable, Generic, List, Optional, TypeVar

from .asset import Asset
from .calculations import format_money
from .motorcycle import MotorcycleSpec
from .rental import Rental

T = TypeVar("T")

DELIMITER = ","
MOTORCYCLE_TYPE = "motorcycle"

# The file format has no quoting, so these can never appear inside a field.
_UNSTORABLE = (DELIMITER, "\r", "\n")


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only text."""
    return value is None or not str(value).strip()


def is_storable_text(value: Optional[str]) -> bool:
    """True if value can be written as one field without breaking the line."""
    return value is not None and not any(c in str(value) for c in _UNSTORABLE)


def parse_bool(text: str) -> bool:
    """'true' in any case is True, anything else is False."""
    return text.strip().lower() == "true"


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def _require_columns(fields: List[str], minimum: int) -> None:
    if len(fields) < minimum:
        raise ValueError(f"expected at least {minimum} columns, got {len(fields)}")


class RecordCodec(Generic[T]):
    """
    Maps one record type to a list of column values and back.

    `parse` raises ValueError when a line can't be turned into a record.
    """

    header: List[str] = []

    def key(self, record: T) -> str:
        return record.id

    def parse(self, fields: List[str]) -> T:
        raise NotImplementedError

    def format(self, record: T) -> List[str]:
        raise NotImplementedError


class AssetCodec(RecordCodec[Asset]):
    """Asset columns. The six motorcycle columns are only written for motorcycles."""

    header = [
        "ID",
        "Make",
        "Model",
        "DailyRate",
        "IsAvailable",
        "Type",
        "EngineCC",
        "Category",
        "HasLuggage",
        "PassengerCapacity",
        "HasSidecar",
    ]

    def parse(self, fields: List[str]) -> Asset:
        _require_columns(fields, 5)
        motorcycle = None
        if len(fields) > 5 and fields[5].lower() == MOTORCYCLE_TYPE:
            _require_columns(fields, 11)
            motorcycle = MotorcycleSpec(
                engine_displacement=int(fields[6]),
                category=fields[7],
                has_luggage=parse_bool(fields[8]),
                passenger_capacity=int(fields[9]),
                has_sidecar=parse_bool(fields[10]),
            )
        return Asset(
            fields[0],
            fields[1],
            fields[2],
            fields[3],
            available=parse_bool(fields[4]),
            motorcycle=motorcycle,
        )

    def format(self, record: Asset) -> List[str]:
        row = [
            record.id,
            record.make,
            record.model,
            format_money(record.daily_rate),
            format_bool(record.available),
        ]
        spec = record.motorcycle
        if spec is not None:
            row += [
                MOTORCYCLE_TYPE,
                str(spec.engine_displacement),
                spec.category,
                format_bool(spec.has_luggage),
                str(spec.passenger_capacity),
                format_bool(spec.has_sidecar),
            ]
        return row


class RentalCodec(RecordCodec[Rental]):
    """
    Rental columns.

    Older files have no IsActive column; those rentals count as active
    until their end date has passed.
    """

    header = [
        "ID",
        "VehicleID",
        "CustomerName",
        "CustomerPhone",
        "StartDate",
        "EndDate",
        "TotalCost",
        "IsActive",
    ]

    def __init__(self, today: Callable[[], date] = date.today):
        self.today = today

    def parse(self, fields: List[str]) -> Rental:
        _require_columns(fields, 7)
        start_date = date.fromisoformat(fields[4])
        end_date = date.fromisoformat(fields[5])
        if len(fields) > 7:
            active = parse_bool(fields[7])
        else:
            active = end_date >= self.today()
        return Rental(
            fields[0],
            fields[1],
            fields[2],
            fields[3],
            start_date,
            end_date,
            total_cost=fields[6],
            active=active,
        )

    def format(self, record: Rental) -> List[str]:
        return [
            record.id,
            record.asset_id,
            record.customer_name,
            record.customer_phone,
            record.start_date.isoformat(),
            record.end_date.isoformat(),
            format_money(record.total_cost),
            format_bool(record.active),
        ]
