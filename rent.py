#!/usr/bin/env python3
"""
Unified CLI for the fleet rental tracker.

Commands:
  fleet           - List vehicles, optionally filtered
  add-vehicle     - Add a vehicle or motorcycle to the fleet
  remove-vehicle  - Remove a vehicle that isn't rented
  rentals         - List rentals, optionally filtered
  quote           - Show what a rental would cost
  rent            - Create a rental
  return          - Complete a rental and return its vehicle
  revenue         - Show rental counts and revenue
  check           - Check (and fix) vehicle availability against rentals
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from dateutil.parser import isoparse
from tabulate import tabulate

from models import (
    Asset,
    Config,
    ConfigError,
    MotorcycleSpec,
    Rental,
    load_config,
    to_money,
)
from models.config import DEFAULT_CONFIG_FILE
from services import open_services

LICENSE_DESCRIPTIONS = {
    "A1": "A1 License (Light Motorcycle)",
    "A2": "A2 License (Medium Motorcycle)",
    "A": "A License (Full Motorcycle)",
}

# =============================================================================
# Formatting helpers
# =============================================================================


def format_money(amount: Optional[Decimal]) -> str:
    """Format a currency amount for display."""
    return f"${amount:,.2f}" if amount is not None else "-"


def yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def truncate(text: Optional[str], max_len: int = 24) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def parse_date(text: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return isoparse(text).date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {text!r} (use YYYY-MM-DD)")


def parse_rate(text: str) -> Decimal:
    """argparse type for currency amounts."""
    try:
        return to_money(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid amount: {text!r}")


def make_asset_table(assets: List[Asset]) -> List[List[str]]:
    """Convert assets to table rows."""
    rows = []
    for asset in assets:
        spec = asset.motorcycle
        rows.append(
            [
                asset.id,
                truncate(asset.display_name),
                "Motorcycle" if spec else "Vehicle",
                format_money(asset.daily_rate),
                "Available" if asset.available else "Rented",
                format_money(spec.insurance_rate) if spec else "-",
                spec.license_requirement if spec else "-",
            ]
        )
    return rows


def make_rental_table(rentals: List[Rental]) -> List[List[str]]:
    """Convert rentals to table rows."""
    rows = []
    for rental in rentals:
        rows.append(
            [
                rental.id,
                rental.asset_id,
                truncate(rental.customer_name),
                rental.customer_phone,
                f"{rental.start_date} to {rental.end_date}",
                str(rental.duration_days),
                format_money(rental.total_cost),
                "Active" if rental.active else "Completed",
            ]
        )
    return rows


ASSET_HEADERS = ["ID", "Vehicle", "Type", "Daily Rate", "Status", "Insurance", "License"]
RENTAL_HEADERS = ["ID", "Vehicle", "Customer", "Phone", "Period", "Days", "Cost", "Status"]

# =============================================================================
# Fleet commands
# =============================================================================


def cmd_fleet(args, inventory, rentals):
    """List vehicles."""
    if (args.min_rate is None) != (args.max_rate is None):
        print("Error: --min-rate and --max-rate must be used together")
        return 1

    assets = inventory.list_all()
    if args.make:
        wanted = {a.id for a in inventory.by_make(args.make)}
        assets = [a for a in assets if a.id in wanted]
    if args.min_rate is not None:
        wanted = {a.id for a in inventory.by_price_range(args.min_rate, args.max_rate)}
        assets = [a for a in assets if a.id in wanted]
    if args.available:
        assets = [a for a in assets if a.available]

    print(
        f"Fleet: {inventory.total_count()} vehicles "
        f"({inventory.available_count()} available, {inventory.rented_count()} rented)"
    )
    print()
    if not assets:
        print("No vehicles found.")
        return 0
    print(tabulate(make_asset_table(assets), headers=ASSET_HEADERS, tablefmt="simple"))
    return 0


def cmd_add_vehicle(args, inventory, rentals):
    """Add a vehicle or motorcycle."""
    motorcycle = None
    try:
        if args.engine_cc is not None:
            motorcycle = MotorcycleSpec(
                engine_displacement=args.engine_cc,
                category=args.category or "",
                has_luggage=args.luggage,
                passenger_capacity=args.passengers,
                has_sidecar=args.sidecar,
            )
        asset = Asset(args.id, args.make, args.model, args.rate, motorcycle=motorcycle)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if not inventory.add(asset):
        print(f"Error: could not add {args.id} (invalid details or duplicate ID)")
        return 1
    print(f"Added {asset.id}: {asset.display_name} at {format_money(asset.daily_rate)}/day")
    if motorcycle is not None:
        print(f"  Insurance: {format_money(motorcycle.insurance_rate)}/day")
        print(f"  License:   {LICENSE_DESCRIPTIONS[motorcycle.license_requirement]}")
        print(f"  Touring:   {yes_no(motorcycle.is_suitable_for_touring)}")
    return 0


def cmd_remove_vehicle(args, inventory, rentals):
    """Remove a vehicle."""
    if not inventory.remove(args.id):
        print(f"Error: could not remove {args.id} (not found or currently rented)")
        return 1
    print(f"Removed {args.id}.")
    return 0


# =============================================================================
# Rental commands
# =============================================================================


def cmd_rentals(args, inventory, rentals):
    """List rentals."""
    if args.overdue:
        entries = rentals.overdue()
    elif args.active:
        entries = rentals.active_rentals()
    else:
        entries = rentals.list_all()

    if args.customer:
        wanted = {r.id for r in rentals.by_customer(args.customer)}
        entries = [r for r in entries if r.id in wanted]
    if args.vehicle:
        wanted = {r.id for r in rentals.by_asset(args.vehicle)}
        entries = [r for r in entries if r.id in wanted]

    print(f"Rentals: {rentals.total_count()} ({rentals.active_count()} active)")
    print()
    if not entries:
        print("No rentals found.")
        return 0
    print(tabulate(make_rental_table(entries), headers=RENTAL_HEADERS, tablefmt="simple"))
    return 0


def cmd_quote(args, inventory, rentals):
    """Show the cost of a prospective rental."""
    cost = rentals.calculate_rental_cost(args.asset_id, args.start, args.end)
    if cost <= 0:
        print("Error: cannot quote (unknown vehicle or invalid dates)")
        return 1
    print(f"Quote for {args.asset_id}, {args.start} to {args.end}: {format_money(cost)}")
    return 0


def cmd_rent(args, inventory, rentals):
    """Create a rental."""
    asset = inventory.find_by_id(args.asset_id)
    if asset is None:
        print(f"Error: unknown vehicle {args.asset_id}")
        return 1

    cost = rentals.calculate_rental_cost(args.asset_id, args.start, args.end)
    print(f"Renting {asset.id} ({asset.display_name}):")
    print(f"  Customer: {args.name} ({args.phone})")
    print(f"  Period:   {args.start} to {args.end}")
    print(f"  Cost:     {format_money(cost)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    rental = rentals.create_rental(args.asset_id, args.name, args.phone, args.start, args.end)
    if rental is None:
        print("Error: rental rejected (vehicle unavailable, missing details or invalid dates)")
        return 1
    print(f"Rental {rental.id} created.")
    return 0


def cmd_return(args, inventory, rentals):
    """Complete a rental."""
    if not rentals.complete_rental(args.rental_id):
        print(f"Error: could not complete {args.rental_id} (not found or already completed)")
        return 1
    print(f"Rental {args.rental_id} completed.")
    return 0


def cmd_revenue(args, inventory, rentals):
    """Show rental statistics."""
    rows = [
        ["Total rentals", str(rentals.total_count())],
        ["Active rentals", str(rentals.active_count())],
        ["Overdue rentals", str(len(rentals.overdue()))],
        ["Revenue (completed)", format_money(rentals.total_revenue())],
        ["Potential (active)", format_money(rentals.potential_revenue())],
    ]
    print(tabulate(rows, tablefmt="simple"))
    return 0


def cmd_check(args, inventory, rentals):
    """Check vehicle availability against active rentals."""
    problems = rentals.find_inconsistencies()
    if not problems:
        print("OK: vehicle availability matches active rentals.")
        return 0

    print(f"{len(problems)} vehicle(s) out of step with rentals:")
    for asset_id in problems:
        print(f"  {asset_id}")
    if not args.fix:
        return 1

    fixed = rentals.reconcile()
    print(f"Fixed {len(fixed)} vehicle(s).")
    return 0 if len(fixed) == len(problems) else 1


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet rental tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fleet --available
  %(prog)s add-vehicle V010 Toyota Corolla 45.00
  %(prog)s add-vehicle M003 Ducati Monster 80 --engine-cc 937 --category Sport
  %(prog)s quote V001 2025-03-01 2025-03-04
  %(prog)s rent V001 2025-03-01 2025-03-04 --name "Jane Doe" --phone 555-0101
  %(prog)s return R007
  %(prog)s rentals --overdue
  %(prog)s check --fix
""",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=f"Path to config YAML file (default: {DEFAULT_CONFIG_FILE} if present)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Fleet subcommand
    fleet_parser = subparsers.add_parser("fleet", help="List vehicles")
    fleet_parser.add_argument(
        "--available", action="store_true", help="Only show available vehicles"
    )
    fleet_parser.add_argument("--make", type=str, help="Filter by make (case-insensitive)")
    fleet_parser.add_argument("--min-rate", type=parse_rate, help="Minimum daily rate")
    fleet_parser.add_argument("--max-rate", type=parse_rate, help="Maximum daily rate")

    # Add vehicle subcommand
    add_parser = subparsers.add_parser("add-vehicle", help="Add a vehicle to the fleet")
    add_parser.add_argument("id", type=str, help="Vehicle ID (e.g., V010)")
    add_parser.add_argument("make", type=str)
    add_parser.add_argument("model", type=str)
    add_parser.add_argument("rate", type=parse_rate, help="Daily rate")
    add_parser.add_argument(
        "--engine-cc", type=int, help="Engine size in cc (makes this a motorcycle)"
    )
    add_parser.add_argument(
        "--category", type=str, help="Motorcycle category (e.g., Sport, Cruiser, Touring)"
    )
    add_parser.add_argument("--luggage", action="store_true", help="Has luggage capacity")
    add_parser.add_argument(
        "--passengers", type=int, default=2, help="Passenger capacity, 1-3 (default: 2)"
    )
    add_parser.add_argument("--sidecar", action="store_true", help="Has a sidecar")

    # Remove vehicle subcommand
    remove_parser = subparsers.add_parser("remove-vehicle", help="Remove a vehicle")
    remove_parser.add_argument("id", type=str)

    # Rentals subcommand
    rentals_parser = subparsers.add_parser("rentals", help="List rentals")
    rentals_parser.add_argument("--active", action="store_true", help="Only active rentals")
    rentals_parser.add_argument(
        "--overdue", action="store_true", help="Only active rentals past their end date"
    )
    rentals_parser.add_argument("--customer", type=str, help="Filter by customer name")
    rentals_parser.add_argument("--vehicle", type=str, help="Filter by vehicle ID")

    # Quote subcommand
    quote_parser = subparsers.add_parser("quote", help="Show what a rental would cost")
    quote_parser.add_argument("asset_id", type=str)
    quote_parser.add_argument("start", type=parse_date, help="Start date (YYYY-MM-DD)")
    quote_parser.add_argument("end", type=parse_date, help="End date (YYYY-MM-DD)")

    # Rent subcommand
    rent_parser = subparsers.add_parser("rent", help="Create a rental")
    rent_parser.add_argument("asset_id", type=str)
    rent_parser.add_argument("start", type=parse_date, help="Start date (YYYY-MM-DD)")
    rent_parser.add_argument("end", type=parse_date, help="End date (YYYY-MM-DD)")
    rent_parser.add_argument("--name", type=str, required=True, help="Customer name")
    rent_parser.add_argument("--phone", type=str, required=True, help="Customer phone")
    rent_parser.add_argument(
        "--dry-run", action="store_true", help="Show the rental without saving"
    )

    # Return subcommand
    return_parser = subparsers.add_parser("return", help="Complete a rental")
    return_parser.add_argument("rental_id", type=str)

    # Revenue subcommand
    subparsers.add_parser("revenue", help="Show rental counts and revenue")

    # Check subcommand
    check_parser = subparsers.add_parser(
        "check", help="Check vehicle availability against active rentals"
    )
    check_parser.add_argument(
        "--fix", action="store_true", help="Correct availability from the rentals"
    )

    return parser


COMMANDS = {
    "fleet": cmd_fleet,
    "add-vehicle": cmd_add_vehicle,
    "remove-vehicle": cmd_remove_vehicle,
    "rentals": cmd_rentals,
    "quote": cmd_quote,
    "rent": cmd_rent,
    "return": cmd_return,
    "revenue": cmd_revenue,
    "check": cmd_check,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config_file = args.config
    if config_file is None and Path(DEFAULT_CONFIG_FILE).exists():
        config_file = Path(DEFAULT_CONFIG_FILE)

    if config_file is not None:
        if not config_file.exists():
            print(f"Error: File not found: {config_file}")
            return 1
        try:
            config = load_config(config_file)
        except ConfigError as e:
            print(f"Error: {e}")
            return 1
    else:
        config = Config()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    inventory, rentals = open_services(config)
    return COMMANDS[args.command](args, inventory, rentals)


if __name__ == "__main__":
    sys.exit(main() or 0)
